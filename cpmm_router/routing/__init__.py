"""Quote routing logic.

Module structure:
- router.py: Router facade (single-route and split quotes)
- types.py: Query, Hop, Route and result dataclasses
- pathfinding.py: TokenGraph and RouteSearch for best-output route discovery
"""

from cpmm_router.routing.pathfinding import RouteSearch, SearchBudget, TokenGraph
from cpmm_router.routing.router import Router
from cpmm_router.routing.types import (
    Hop,
    Query,
    QuoteResult,
    QuoteStatus,
    Route,
    SplitQuoteResult,
)

__all__ = [
    "Hop",
    "Query",
    "QuoteResult",
    "QuoteStatus",
    "Route",
    "RouteSearch",
    "Router",
    "SearchBudget",
    "SplitQuoteResult",
    "TokenGraph",
]
