"""Type definitions for routing module."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum

from cpmm_router.amm.uniswap_v2 import UniswapV2Pool, uniswap_v2
from cpmm_router.errors import InvalidQuery


@dataclass(frozen=True)
class Query:
    """Swap amount_in of token_in, receive as much token_out as possible."""

    token_in: str
    amount_in: int
    token_out: str

    def validate(self) -> None:
        """Reject malformed queries before any search.

        A zero amount is valid and quotes zero output.

        Raises:
            InvalidQuery: If the tokens are equal or the amount is not a
                non-negative integer
        """
        if self.token_in == self.token_out:
            raise InvalidQuery(f"Input and output token are the same: {self.token_in}")
        if isinstance(self.amount_in, bool) or not isinstance(self.amount_in, int):
            raise InvalidQuery(
                f"Input amount must be an integer, got {type(self.amount_in).__name__}"
            )
        if self.amount_in < 0:
            raise InvalidQuery(f"Input amount cannot be negative: {self.amount_in}")


@dataclass(frozen=True)
class Hop:
    """One swap through one pool along a route."""

    pool: UniswapV2Pool  # snapshot the hop was quoted against
    token_in: str
    token_out: str
    amount_in: int
    amount_out: int
    pool_after: UniswapV2Pool  # hypothetical snapshot after this hop

    @property
    def pool_address(self) -> str:
        return self.pool.address


@dataclass(frozen=True)
class Route:
    """Ordered hops from the query's input token to its output token."""

    hops: tuple[Hop, ...]

    def __post_init__(self) -> None:
        if not self.hops:
            raise ValueError("Route needs at least one hop")
        for prev, nxt in zip(self.hops, self.hops[1:]):
            if prev.token_out != nxt.token_in or prev.amount_out != nxt.amount_in:
                raise ValueError(
                    f"Hop {prev.pool_address} -> {nxt.pool_address} does not chain"
                )

    @property
    def token_in(self) -> str:
        return self.hops[0].token_in

    @property
    def token_out(self) -> str:
        return self.hops[-1].token_out

    @property
    def amount_in(self) -> int:
        return self.hops[0].amount_in

    @property
    def amount_out(self) -> int:
        return self.hops[-1].amount_out

    @property
    def hop_count(self) -> int:
        return len(self.hops)

    @property
    def is_multihop(self) -> bool:
        return len(self.hops) > 1

    @property
    def path(self) -> list[str]:
        """Tokens visited, input first."""
        return [self.hops[0].token_in] + [hop.token_out for hop in self.hops]

    @property
    def pool_addresses(self) -> tuple[str, ...]:
        return tuple(hop.pool_address for hop in self.hops)

    @property
    def sort_key(self) -> tuple[int, int, tuple[str, ...]]:
        """Ordering where the smallest key is the preferred route.

        Larger output first, then fewer hops, then pool addresses
        lexicographically so ties resolve the same way on every run.
        """
        return (-self.amount_out, self.hop_count, self.pool_addresses)

    @property
    def spot_price(self) -> Decimal:
        """Marginal output per unit of input before the trade (fee excluded)."""
        price = Decimal(1)
        for hop in self.hops:
            price *= uniswap_v2.spot_price(hop.pool, hop.token_in)
        return price

    @property
    def effective_price(self) -> Decimal | None:
        """Realized output per unit of input; None for a zero-amount quote."""
        if self.amount_in == 0:
            return None
        return Decimal(self.amount_out) / Decimal(self.amount_in)

    @property
    def price_impact(self) -> Decimal | None:
        """Relative shortfall of the realized price against the spot price."""
        effective = self.effective_price
        if effective is None:
            return None
        return Decimal(1) - effective / self.spot_price


class QuoteStatus(str, Enum):
    """Outcome of a quote."""

    FOUND = "found"
    UNREACHABLE = "unreachable"


@dataclass(frozen=True)
class QuoteResult:
    """Result of quoting a query.

    An UNREACHABLE status is a valid answer, not an error. When truncated is
    set, a search budget ran out or the hop bound cut off a path: the route is
    the best one found so far and UNREACHABLE only means no route was found
    within those limits.
    """

    query: Query
    status: QuoteStatus
    route: Route | None = None
    truncated: bool = False
    paths_evaluated: int = 0
    expansions: int = 0

    @property
    def is_reachable(self) -> bool:
        return self.status is QuoteStatus.FOUND

    @property
    def amount_out(self) -> int | None:
        """Final output amount, None when unreachable."""
        return self.route.amount_out if self.route is not None else None


@dataclass(frozen=True)
class SplitQuoteResult:
    """Result of routing an input split into chunks over several routes.

    Each leg was quoted against the pool states left by the legs before it.
    A single leg means splitting did not beat the best single route.
    """

    query: Query
    status: QuoteStatus
    legs: tuple[Route, ...] = ()
    truncated: bool = False

    @property
    def is_reachable(self) -> bool:
        return self.status is QuoteStatus.FOUND

    @property
    def is_split(self) -> bool:
        return len(self.legs) > 1

    @property
    def amount_out(self) -> int | None:
        if not self.legs:
            return None
        return sum(leg.amount_out for leg in self.legs)


__all__ = ["Hop", "Query", "QuoteResult", "QuoteStatus", "Route", "SplitQuoteResult"]
