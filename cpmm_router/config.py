"""Router configuration."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass

from cpmm_router.constants import (
    BPS_DENOMINATOR,
    DEFAULT_FEE_BPS,
    DEFAULT_MAX_HOPS,
    DEFAULT_SPLIT_PARTS,
)

_TRUE_VALUES = ("true", "1", "yes")


@dataclass(frozen=True)
class RouterConfig:
    """Centralized configuration for pool ingestion and route search.

    Attributes:
        max_hops: Maximum swaps per route. None bounds routes only by the
            number of distinct tokens. A search that cuts off a path at this
            bound is flagged as truncated.
        max_expansions: Node-expansion budget for one search. None is unbounded.
        timeout_seconds: Wall-clock budget for one search. None is unbounded.
            Exhausting either budget yields the best route so far flagged as
            truncated.
        default_fee_bps: Fee applied to pool records that do not carry one.
        allow_empty_pools: If True, pools with a zero reserve are ingested and
            pruned during search. If False, they are rejected as InvalidPool.
        split_parts: Number of chunks used by Router.quote_split().
    """

    max_hops: int | None = DEFAULT_MAX_HOPS
    max_expansions: int | None = None
    timeout_seconds: float | None = None
    default_fee_bps: int = DEFAULT_FEE_BPS
    allow_empty_pools: bool = False
    split_parts: int = DEFAULT_SPLIT_PARTS

    def __post_init__(self) -> None:
        if self.max_hops is not None and self.max_hops < 1:
            raise ValueError(f"max_hops must be at least 1, got {self.max_hops}")
        if self.max_expansions is not None and self.max_expansions < 1:
            raise ValueError(f"max_expansions must be at least 1, got {self.max_expansions}")
        if self.timeout_seconds is not None and self.timeout_seconds <= 0:
            raise ValueError(f"timeout_seconds must be positive, got {self.timeout_seconds}")
        if not 0 <= self.default_fee_bps < BPS_DENOMINATOR:
            raise ValueError(f"default_fee_bps out of range: {self.default_fee_bps}")
        if self.split_parts < 1:
            raise ValueError(f"split_parts must be at least 1, got {self.split_parts}")

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> RouterConfig:
        """Build a config from ROUTER_* environment variables.

        - ROUTER_MAX_HOPS: hop bound, "none" for unbounded (default: unbounded)
        - ROUTER_MAX_EXPANSIONS: expansion budget (default: unbounded)
        - ROUTER_TIMEOUT_SECONDS: wall-clock budget (default: unbounded)
        - ROUTER_FEE_BPS: default pool fee (default: 0)
        - ROUTER_ALLOW_EMPTY_POOLS: accept zero-reserve pools (default: false)
        - ROUTER_SPLIT_PARTS: split routing chunks (default: 4)
        """
        env = os.environ if environ is None else environ

        def optional_int(name: str, default: int | None) -> int | None:
            raw = env.get(name)
            if raw is None:
                return default
            if raw.strip().lower() in ("", "none"):
                return None
            return int(raw)

        timeout = env.get("ROUTER_TIMEOUT_SECONDS")
        return cls(
            max_hops=optional_int("ROUTER_MAX_HOPS", DEFAULT_MAX_HOPS),
            max_expansions=optional_int("ROUTER_MAX_EXPANSIONS", None),
            timeout_seconds=float(timeout) if timeout else None,
            default_fee_bps=int(env.get("ROUTER_FEE_BPS", str(DEFAULT_FEE_BPS))),
            allow_empty_pools=env.get("ROUTER_ALLOW_EMPTY_POOLS", "false").lower()
            in _TRUE_VALUES,
            split_parts=int(env.get("ROUTER_SPLIT_PARTS", str(DEFAULT_SPLIT_PARTS))),
        )


# Default configuration instance
DEFAULT_ROUTER_CONFIG = RouterConfig()
