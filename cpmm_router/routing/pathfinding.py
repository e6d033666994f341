"""Token graph and route search for multi-hop routing.

The output of a hop depends on how much arrives at it, which depends on every
hop before it, so edges have no fixed weight and classical shortest-path
algorithms do not apply. RouteSearch instead enumerates simple paths (no token
visited twice) and simulates each one with the real propagated amount,
keeping the best complete route.

The graph holds topology only (pool addresses and token pairs). Pool state is
looked up in a separate mapping so callers can search against hypothetical
post-swap snapshots without touching the shared pools.
"""

from __future__ import annotations

import time
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import NamedTuple

import structlog

from cpmm_router.amm.uniswap_v2 import UniswapV2, UniswapV2Pool, uniswap_v2
from cpmm_router.config import RouterConfig
from cpmm_router.errors import EmptyReserves
from cpmm_router.routing.types import Hop, Route

logger = structlog.get_logger()


class Edge(NamedTuple):
    """Directed edge: trade through pool_address to receive token_out."""

    pool_address: str
    token_out: str


class TokenGraph:
    """Graph of tokens connected by liquidity pools.

    Adjacency list where every pool contributes one edge in each direction.
    Parallel pools stay separate edges. Edges are ordered by pool address so
    traversal order is reproducible.
    """

    def __init__(self) -> None:
        """Initialize an empty token graph."""
        self._adjacency: dict[str, list[Edge]] = {}

    @classmethod
    def from_pools(cls, pools: Iterable[UniswapV2Pool]) -> TokenGraph:
        graph = cls()
        for pool in pools:
            graph._add_edge(pool.token0, pool.token1, pool.address)
        for edges in graph._adjacency.values():
            edges.sort()
        return graph

    def _add_edge(self, token_a: str, token_b: str, pool_address: str) -> None:
        """Add a bidirectional edge between two tokens."""
        self._adjacency.setdefault(token_a, []).append(Edge(pool_address, token_b))
        self._adjacency.setdefault(token_b, []).append(Edge(pool_address, token_a))

    def get_edges(self, token: str) -> tuple[Edge, ...]:
        """Outgoing edges of token, ordered by pool address."""
        return tuple(self._adjacency.get(token, ()))

    def get_neighbors(self, token: str) -> set[str]:
        """Tokens directly tradeable with token."""
        return {edge.token_out for edge in self._adjacency.get(token, ())}

    def has_token(self, token: str) -> bool:
        return token in self._adjacency

    @property
    def token_count(self) -> int:
        """Number of unique tokens in the graph."""
        return len(self._adjacency)

    @property
    def edge_count(self) -> int:
        """Number of directed edges (two per pool)."""
        return sum(len(edges) for edges in self._adjacency.values())


@dataclass
class SearchBudget:
    """Node-expansion and wall-clock limits for one search.

    The deadline is a time.monotonic() timestamp.
    """

    max_expansions: int | None = None
    deadline: float | None = None
    expansions: int = field(default=0, init=False)

    @classmethod
    def from_config(cls, config: RouterConfig) -> SearchBudget:
        deadline = None
        if config.timeout_seconds is not None:
            deadline = time.monotonic() + config.timeout_seconds
        return cls(max_expansions=config.max_expansions, deadline=deadline)

    def spend(self) -> bool:
        """Account for one expansion. Returns False once the budget is exhausted."""
        if self.max_expansions is not None and self.expansions >= self.max_expansions:
            return False
        if self.deadline is not None and time.monotonic() >= self.deadline:
            return False
        self.expansions += 1
        return True


@dataclass(frozen=True)
class SearchOutcome:
    """Best route of a search plus bookkeeping."""

    best: Route | None
    paths_evaluated: int
    expansions: int
    truncated: bool
    hop_limited: bool = False


# (current token, amount held, hops so far, tokens visited)
_Frame = tuple[str, int, tuple[Hop, ...], frozenset[str]]


class RouteSearch:
    """Exhaustive best-output search over simple paths.

    Usage:
        search = RouteSearch(registry.graph, registry.pools, max_hops=3)
        outcome = search.find_best(token_in, amount_in, token_out, SearchBudget())
    """

    def __init__(
        self,
        graph: TokenGraph,
        pool_states: Mapping[str, UniswapV2Pool],
        amm: UniswapV2 = uniswap_v2,
        max_hops: int | None = None,
    ) -> None:
        """Initialize a search.

        Args:
            graph: Token graph to traverse
            pool_states: Current snapshot for every pool address in the graph
            amm: Swap math used for every hop
            max_hops: Maximum hops per route, None for no bound beyond the
                simple-path constraint
        """
        self.graph = graph
        self.pool_states = pool_states
        self.amm = amm
        self.max_hops = max_hops

    def find_best(
        self,
        token_in: str,
        amount_in: int,
        token_out: str,
        budget: SearchBudget,
    ) -> SearchOutcome:
        """Find the route giving the most token_out for amount_in of token_in.

        Depth-first over simple paths. Every hop is simulated with the amount
        actually arriving there. Pools with an empty reserve are pruned.

        A path cut off by max_hops while it could still continue marks the
        outcome hop_limited, and therefore truncated: a longer route might
        have reached token_out or beaten the best one found.

        Returns:
            SearchOutcome with best=None if no route was found
        """
        if not self.graph.has_token(token_in) or not self.graph.has_token(token_out):
            return SearchOutcome(best=None, paths_evaluated=0, expansions=0, truncated=False)

        best: Route | None = None
        paths_evaluated = 0
        truncated = False
        hop_limited = False
        stack: list[_Frame] = [(token_in, amount_in, (), frozenset([token_in]))]

        while stack:
            if not budget.spend():
                truncated = True
                break

            token, amount, hops, visited = stack.pop()
            children: list[_Frame] = []

            for edge in self.graph.get_edges(token):
                if edge.token_out in visited:
                    continue

                pool = self.pool_states[edge.pool_address]
                try:
                    swap = self.amm.simulate_swap(pool, token, amount)
                except EmptyReserves:
                    logger.debug("empty_pool_skipped", pool=edge.pool_address, token_in=token)
                    continue

                hop = Hop(
                    pool=pool,
                    token_in=token,
                    token_out=edge.token_out,
                    amount_in=amount,
                    amount_out=swap.amount_out,
                    pool_after=swap.pool_after,
                )
                new_hops = hops + (hop,)

                if edge.token_out == token_out:
                    route = Route(new_hops)
                    paths_evaluated += 1
                    if best is None or route.sort_key < best.sort_key:
                        best = route
                    continue

                new_visited = visited | {edge.token_out}
                if self.max_hops is None or len(new_hops) < self.max_hops:
                    children.append((edge.token_out, swap.amount_out, new_hops, new_visited))
                elif self._can_extend(edge.token_out, new_visited):
                    hop_limited = True

            # Reversed so the first edge in address order is explored first
            stack.extend(reversed(children))

        return SearchOutcome(
            best=best,
            paths_evaluated=paths_evaluated,
            expansions=budget.expansions,
            truncated=truncated or hop_limited,
            hop_limited=hop_limited,
        )

    def _can_extend(self, token: str, visited: frozenset[str]) -> bool:
        """True if a simple path could continue from token."""
        return any(edge.token_out not in visited for edge in self.graph.get_edges(token))


__all__ = ["Edge", "RouteSearch", "SearchBudget", "SearchOutcome", "TokenGraph"]
