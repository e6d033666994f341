"""Pool registry for managing constant product liquidity.

PoolRegistry is the ingestion point for the router: every pool is validated
once here, so malformed pools are rejected before any search begins.

Graph operations are delegated to TokenGraph (cpmm_router.routing.pathfinding).
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import TYPE_CHECKING, Any

import structlog

from cpmm_router.amm.uniswap_v2 import UniswapV2Pool, parse_pool_record
from cpmm_router.config import DEFAULT_ROUTER_CONFIG, RouterConfig
from cpmm_router.constants import ANONYMOUS_POOL_PREFIX
from cpmm_router.errors import InvalidPool
from cpmm_router.models.pool import PoolRecord

logger = structlog.get_logger()

if TYPE_CHECKING:
    from cpmm_router.routing.pathfinding import TokenGraph


class PoolRegistry:
    """Registry of constant product pools for routing.

    Parallel pools between the same token pair are all kept; they are
    distinct edges for the router and are never merged.
    """

    def __init__(
        self,
        pools: Iterable[UniswapV2Pool] | None = None,
        config: RouterConfig = DEFAULT_ROUTER_CONFIG,
    ) -> None:
        """Initialize the registry with optional pools.

        Args:
            pools: Initial pool snapshots
            config: Controls whether empty pools are accepted

        Raises:
            InvalidPool: If any pool is rejected
        """
        self.config = config
        self._pools: dict[str, UniswapV2Pool] = {}
        self._by_pair: dict[frozenset[str], list[UniswapV2Pool]] = {}
        # Lazy-initialized TokenGraph, dropped when pools are added
        self._graph: TokenGraph | None = None

        if pools:
            for pool in pools:
                self.add_pool(pool)

    @classmethod
    def from_records(
        cls,
        records: Iterable[PoolRecord | Mapping[str, Any]],
        config: RouterConfig = DEFAULT_ROUTER_CONFIG,
    ) -> PoolRegistry:
        """Build a registry from pool records.

        Records without an address are named pool-<index> after their
        position in the input so results stay reproducible.

        Raises:
            InvalidPool: On the first record that fails validation
        """
        registry = cls(config=config)
        for index, record in enumerate(records):
            pool = parse_pool_record(
                record,
                default_address=f"{ANONYMOUS_POOL_PREFIX}{index}",
                default_fee_bps=config.default_fee_bps,
            )
            registry.add_pool(pool)
        return registry

    def add_pool(self, pool: UniswapV2Pool) -> None:
        """Add a pool snapshot to the registry.

        Raises:
            InvalidPool: If the address is already registered, or the pool has
                a zero reserve and the config does not allow empty pools
        """
        if pool.address in self._pools:
            logger.warning("pool_rejected", address=pool.address, reason="duplicate_address")
            raise InvalidPool(f"Duplicate pool address: {pool.address}")
        if pool.is_empty and not self.config.allow_empty_pools:
            logger.warning("pool_rejected", address=pool.address, reason="empty_reserves")
            raise InvalidPool(
                f"Pool {pool.address} has non-positive reserves "
                f"({pool.reserve0}, {pool.reserve1})"
            )

        self._pools[pool.address] = pool
        pair = frozenset((pool.token0, pool.token1))
        bucket = self._by_pair.setdefault(pair, [])
        bucket.append(pool)
        bucket.sort(key=lambda p: p.address)
        self._graph = None

    def get_pool(self, address: str) -> UniswapV2Pool | None:
        return self._pools.get(address)

    def get_pools_for_pair(self, token_a: str, token_b: str) -> list[UniswapV2Pool]:
        """All pools trading token_a against token_b, ordered by address."""
        return list(self._by_pair.get(frozenset((token_a, token_b)), []))

    @property
    def pools(self) -> Mapping[str, UniswapV2Pool]:
        """Read-only view of pools by address."""
        return dict(self._pools)

    @property
    def pool_count(self) -> int:
        return len(self._pools)

    @property
    def tokens(self) -> set[str]:
        """All tokens traded by at least one pool."""
        return {token for pair in self._by_pair for token in pair}

    @property
    def graph(self) -> TokenGraph:
        """Get or build the token graph (lazy initialization)."""
        if self._graph is None:
            from cpmm_router.routing.pathfinding import TokenGraph

            self._graph = TokenGraph.from_pools(self._pools.values())
        return self._graph
