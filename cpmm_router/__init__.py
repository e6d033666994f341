"""Best-output quoting through constant-product liquidity pools.

Package layout:
- amm/: constant product pool snapshots and exact integer swap math
- models/: pydantic records for already-materialized pool input
- pools/: PoolRegistry ingestion and lookup
- routing/: token graph, route search and the Router facade
"""

from cpmm_router.amm import SwapResult, UniswapV2, UniswapV2Pool, quote, uniswap_v2
from cpmm_router.config import DEFAULT_ROUTER_CONFIG, RouterConfig
from cpmm_router.errors import (
    EmptyReserves,
    InvalidPool,
    InvalidQuery,
    InvalidToken,
    PoolInvariantError,
    RouterError,
)
from cpmm_router.pools import PoolRegistry
from cpmm_router.routing import (
    Hop,
    Query,
    QuoteResult,
    QuoteStatus,
    Route,
    Router,
    SplitQuoteResult,
)

__all__ = [
    "DEFAULT_ROUTER_CONFIG",
    "EmptyReserves",
    "Hop",
    "InvalidPool",
    "InvalidQuery",
    "InvalidToken",
    "PoolInvariantError",
    "PoolRegistry",
    "Query",
    "QuoteResult",
    "QuoteStatus",
    "Route",
    "Router",
    "RouterConfig",
    "RouterError",
    "SplitQuoteResult",
    "SwapResult",
    "UniswapV2",
    "UniswapV2Pool",
    "quote",
    "uniswap_v2",
]
