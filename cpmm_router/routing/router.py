"""Quote routing through constant product pools.

Supports:
- Direct and multi-hop routes over any pool graph (cyclic, parallel pools)
- Exact integer output amounts, never floating point
- Search budgets and hop bounds that return the best route so far, flagged
  as truncated
- Split routing: the input divided into chunks routed one after another
  against the hypothetical pool states left by earlier chunks

Each quote is a pure function of the registry snapshot: the Router keeps no
state between calls and never mutates pools, so independent quotes may run
concurrently against the same registry.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

import structlog

from cpmm_router.amm.uniswap_v2 import UniswapV2, UniswapV2Pool, uniswap_v2
from cpmm_router.config import DEFAULT_ROUTER_CONFIG, RouterConfig
from cpmm_router.models.pool import PoolRecord
from cpmm_router.pools import PoolRegistry
from cpmm_router.routing.pathfinding import RouteSearch, SearchBudget
from cpmm_router.routing.types import (
    Query,
    QuoteResult,
    QuoteStatus,
    Route,
    SplitQuoteResult,
)

logger = structlog.get_logger()


class Router:
    """Finds the route that maximizes output for a query.

    Args:
        registry: Validated pool snapshot to route through
        config: Search settings. Defaults to the registry's config.
        amm: Swap math. Defaults to the UniswapV2 singleton.
    """

    def __init__(
        self,
        registry: PoolRegistry,
        config: RouterConfig | None = None,
        amm: UniswapV2 | None = None,
    ) -> None:
        self.registry = registry
        self.config = config if config is not None else registry.config
        self.amm = amm if amm is not None else uniswap_v2

    @classmethod
    def from_records(
        cls,
        records: Iterable[PoolRecord | Mapping[str, Any]],
        config: RouterConfig | None = None,
    ) -> Router:
        """Ingest pool records and build a router over them.

        Raises:
            InvalidPool: If any record is rejected
        """
        registry = PoolRegistry.from_records(records, config=config or DEFAULT_ROUTER_CONFIG)
        return cls(registry)

    def _search(self, pool_states: Mapping[str, UniswapV2Pool]) -> RouteSearch:
        return RouteSearch(
            self.registry.graph,
            pool_states,
            amm=self.amm,
            max_hops=self.config.max_hops,
        )

    def quote(self, query: Query) -> QuoteResult:
        """Quote the best single route for a query.

        Args:
            query: Input token, input amount and output token

        Returns:
            QuoteResult with status FOUND and the best route, or UNREACHABLE
            when no route connects the tokens

        Raises:
            InvalidQuery: If the query is malformed
        """
        query.validate()

        budget = SearchBudget.from_config(self.config)
        outcome = self._search(self.registry.pools).find_best(
            query.token_in, query.amount_in, query.token_out, budget
        )

        if outcome.truncated:
            logger.warning(
                "search_truncated",
                token_in=query.token_in,
                token_out=query.token_out,
                expansions=outcome.expansions,
                paths_evaluated=outcome.paths_evaluated,
                hop_limited=outcome.hop_limited,
                have_route=outcome.best is not None,
            )

        if outcome.best is None:
            logger.info(
                "route_unreachable",
                token_in=query.token_in,
                token_out=query.token_out,
                max_hops=self.config.max_hops,
            )
            return QuoteResult(
                query=query,
                status=QuoteStatus.UNREACHABLE,
                truncated=outcome.truncated,
                paths_evaluated=outcome.paths_evaluated,
                expansions=outcome.expansions,
            )

        logger.info(
            "route_found",
            path=outcome.best.path,
            hops=outcome.best.hop_count,
            amount_in=query.amount_in,
            amount_out=outcome.best.amount_out,
            paths_evaluated=outcome.paths_evaluated,
        )
        return QuoteResult(
            query=query,
            status=QuoteStatus.FOUND,
            route=outcome.best,
            truncated=outcome.truncated,
            paths_evaluated=outcome.paths_evaluated,
            expansions=outcome.expansions,
        )

    def quote_tokens(self, token_in: str, amount_in: int, token_out: str) -> QuoteResult:
        """Shortcut for quote(Query(token_in, amount_in, token_out))."""
        return self.quote(Query(token_in=token_in, amount_in=amount_in, token_out=token_out))

    def quote_split(self, query: Query, parts: int | None = None) -> SplitQuoteResult:
        """Quote the input divided into chunks, each on its own best route.

        Chunks are routed greedily in order. Each chunk sees the reserves left
        by the chunks before it, carried in a private copy of the pool states.
        The split is only returned when it strictly beats the best single
        route; otherwise the result has that route as its only leg.

        Args:
            query: Input token, input amount and output token
            parts: Number of chunks (default: config.split_parts). The last
                chunk absorbs the remainder of the division.

        Raises:
            InvalidQuery: If the query is malformed
            ValueError: If parts is below 1
        """
        parts = parts if parts is not None else self.config.split_parts
        if parts < 1:
            raise ValueError(f"parts must be at least 1, got {parts}")

        single = self.quote(query)
        if single.route is None:
            return SplitQuoteResult(
                query=query, status=QuoteStatus.UNREACHABLE, truncated=single.truncated
            )
        single_result = SplitQuoteResult(
            query=query,
            status=QuoteStatus.FOUND,
            legs=(single.route,),
            truncated=single.truncated,
        )
        if parts == 1 or query.amount_in < parts:
            return single_result

        chunk = query.amount_in // parts
        chunks = [chunk] * (parts - 1) + [query.amount_in - chunk * (parts - 1)]

        pool_states = dict(self.registry.pools)
        search = self._search(pool_states)
        legs: list[Route] = []
        truncated = single.truncated

        for amount in chunks:
            outcome = search.find_best(
                query.token_in,
                amount,
                query.token_out,
                SearchBudget.from_config(self.config),
            )
            truncated = truncated or outcome.truncated
            if outcome.best is None:
                logger.warning("split_leg_unrouted", chunk=amount, legs_routed=len(legs))
                return single_result
            legs.append(outcome.best)
            for hop in outcome.best.hops:
                pool_states[hop.pool_address] = hop.pool_after

        split_out = sum(leg.amount_out for leg in legs)
        if split_out <= single.route.amount_out:
            logger.debug(
                "split_not_better",
                split_amount_out=split_out,
                single_amount_out=single.route.amount_out,
            )
            return single_result

        logger.info(
            "split_route_found",
            parts=parts,
            distinct_routes=len({leg.pool_addresses for leg in legs}),
            amount_out=split_out,
            single_amount_out=single.route.amount_out,
        )
        return SplitQuoteResult(
            query=query,
            status=QuoteStatus.FOUND,
            legs=tuple(legs),
            truncated=truncated,
        )
