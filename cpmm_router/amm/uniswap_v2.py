"""UniswapV2 AMM implementation.

UniswapV2 uses the constant product formula: x * y = k
An optional fee in basis points is taken from the input before the formula.

All amounts are integers and the formula is applied with a single floor
division, so the pool never pays out more than the curve allows and k never
decreases across a quoted swap.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, replace
from decimal import Decimal
from typing import Any

import structlog
from pydantic import ValidationError

from cpmm_router.amm.base import AMM, SwapResult
from cpmm_router.constants import BPS_DENOMINATOR, DEFAULT_FEE_BPS
from cpmm_router.errors import EmptyReserves, InvalidPool, InvalidToken, PoolInvariantError
from cpmm_router.models.pool import PoolRecord
from cpmm_router.safe_int import S

logger = structlog.get_logger()


@dataclass(frozen=True)
class UniswapV2Pool:
    """Immutable snapshot of a constant product pool.

    A pool is identified by its address; the token order only fixes which
    reserve belongs to which token. Routing never mutates a snapshot, it
    derives new ones with with_swap().
    """

    address: str
    token0: str
    token1: str
    reserve0: int
    reserve1: int
    # Fee in basis points (30 = 0.3%), taken from the input amount
    fee_bps: int = DEFAULT_FEE_BPS

    def __post_init__(self) -> None:
        if self.token0 == self.token1:
            raise InvalidPool(f"Pool {self.address} pairs token {self.token0} with itself")
        if self.reserve0 < 0 or self.reserve1 < 0:
            raise InvalidPool(
                f"Pool {self.address} has negative reserves ({self.reserve0}, {self.reserve1})"
            )
        if not 0 <= self.fee_bps < BPS_DENOMINATOR:
            raise InvalidPool(f"Pool {self.address} fee {self.fee_bps} bps out of range")

    @property
    def fee_multiplier(self) -> int:
        """Share of the input that reaches the curve, in basis points.

        For 30 bps (0.3%), this returns 9970.
        """
        return BPS_DENOMINATOR - self.fee_bps

    @property
    def k(self) -> int:
        """The constant product invariant reserve0 * reserve1."""
        return self.reserve0 * self.reserve1

    @property
    def is_empty(self) -> bool:
        """True when either reserve is zero (pool is impassable)."""
        return self.reserve0 == 0 or self.reserve1 == 0

    def has_token(self, token: str) -> bool:
        return token == self.token0 or token == self.token1

    def get_reserves(self, token_in: str) -> tuple[int, int]:
        """Get reserves ordered as (reserve_in, reserve_out)."""
        if token_in == self.token0:
            return self.reserve0, self.reserve1
        elif token_in == self.token1:
            return self.reserve1, self.reserve0
        else:
            raise InvalidToken(f"Token {token_in} not in pool {self.address}")

    def get_token_out(self, token_in: str) -> str:
        """Get the output token for a given input token."""
        if token_in == self.token0:
            return self.token1
        elif token_in == self.token1:
            return self.token0
        else:
            raise InvalidToken(f"Token {token_in} not in pool {self.address}")

    def with_swap(self, token_in: str, amount_in: int, amount_out: int) -> UniswapV2Pool:
        """Return the snapshot left behind by a swap, leaving self untouched.

        The full input (fee included) stays in the pool.
        """
        reserve_in, reserve_out = self.get_reserves(token_in)
        new_in = (S(reserve_in) + S(amount_in)).value
        new_out = (S(reserve_out) - S(amount_out)).value
        if token_in == self.token0:
            return replace(self, reserve0=new_in, reserve1=new_out)
        return replace(self, reserve0=new_out, reserve1=new_in)


class UniswapV2(AMM):
    """UniswapV2 AMM math.

    Formula:
        amount_in_with_fee = amount_in * (10000 - fee_bps) // 10000
        amount_out = reserve_out * amount_in_with_fee // (reserve_in + amount_in_with_fee)

    Solving (reserve_in + x) * (reserve_out - y) = reserve_in * reserve_out for y
    and rounding y down keeps the post-swap product at or above k.
    """

    def get_amount_out(
        self,
        amount_in: int,
        reserve_in: int,
        reserve_out: int,
        fee_bps: int = DEFAULT_FEE_BPS,
    ) -> int:
        """Calculate output amount using constant product formula.

        Args:
            amount_in: Input token amount
            reserve_in: Reserve of input token in pool
            reserve_out: Reserve of output token in pool
            fee_bps: Input fee in basis points (default DEFAULT_FEE_BPS)

        Returns:
            Output token amount, always strictly below reserve_out

        Raises:
            ValueError: If amount_in is negative
            EmptyReserves: If either reserve is zero
            PoolInvariantError: If the result would drain the pool
        """
        if amount_in < 0:
            raise ValueError(f"Input amount cannot be negative: {amount_in}")
        if reserve_in <= 0 or reserve_out <= 0:
            raise EmptyReserves(f"Cannot swap against reserves ({reserve_in}, {reserve_out})")
        if amount_in == 0:
            return 0

        amount_in_with_fee = S(amount_in) * S(BPS_DENOMINATOR - fee_bps) // S(BPS_DENOMINATOR)
        numerator = S(reserve_out) * amount_in_with_fee
        denominator = S(reserve_in) + amount_in_with_fee
        amount_out = (numerator // denominator).value

        if amount_out >= reserve_out:
            raise PoolInvariantError(
                f"Swap of {amount_in} would drain reserve {reserve_out} (out={amount_out})"
            )
        return amount_out

    def quote(self, pool: UniswapV2Pool, input_token: str, input_amount: int) -> int:
        """Output amount of the other token for input_amount of input_token.

        Raises:
            InvalidToken: If input_token is not traded by the pool
            EmptyReserves: If either pool reserve is zero
        """
        reserve_in, reserve_out = pool.get_reserves(input_token)
        return self.get_amount_out(input_amount, reserve_in, reserve_out, pool.fee_bps)

    def simulate_swap(
        self,
        pool: UniswapV2Pool,
        token_in: str,
        amount_in: int,
    ) -> SwapResult:
        """Simulate a swap through a pool (exact input).

        Args:
            pool: The liquidity pool
            token_in: Input token
            amount_in: Amount to swap

        Returns:
            SwapResult with amounts and the post-swap pool snapshot
        """
        token_out = pool.get_token_out(token_in)
        amount_out = self.quote(pool, token_in, amount_in)

        return SwapResult(
            amount_in=amount_in,
            amount_out=amount_out,
            pool_address=pool.address,
            token_in=token_in,
            token_out=token_out,
            pool_after=pool.with_swap(token_in, amount_in, amount_out),
        )

    def spot_price(self, pool: UniswapV2Pool, token_in: str) -> Decimal:
        """Instantaneous output per unit of input, ignoring fee and size.

        Informational only (price impact reporting); never used to decide
        amounts.
        """
        reserve_in, reserve_out = pool.get_reserves(token_in)
        if reserve_in == 0 or reserve_out == 0:
            raise EmptyReserves(f"Pool {pool.address} has no spot price with empty reserves")
        return Decimal(reserve_out) / Decimal(reserve_in)


# Singleton instance
uniswap_v2 = UniswapV2()


def quote(pool: UniswapV2Pool, input_token: str, input_amount: int) -> int:
    """Module-level shortcut for uniswap_v2.quote()."""
    return uniswap_v2.quote(pool, input_token, input_amount)


def parse_pool_record(
    record: PoolRecord | Mapping[str, Any],
    default_address: str,
    default_fee_bps: int = DEFAULT_FEE_BPS,
) -> UniswapV2Pool:
    """Convert a pool record into a UniswapV2Pool.

    Args:
        record: PoolRecord or a mapping with the same fields
        default_address: Identifier used when the record carries no address
        default_fee_bps: Fee used when the record carries no fee

    Returns:
        UniswapV2Pool snapshot

    Raises:
        InvalidPool: If the record fails validation
    """
    if not isinstance(record, PoolRecord):
        try:
            record = PoolRecord.model_validate(record)
        except ValidationError as err:
            logger.warning(
                "pool_record_invalid",
                address=default_address,
                errors=err.error_count(),
            )
            raise InvalidPool(f"Invalid pool record {default_address}: {err}") from err

    return UniswapV2Pool(
        address=record.address if record.address is not None else default_address,
        token0=record.token0,
        token1=record.token1,
        reserve0=record.reserve0,
        reserve1=record.reserve1,
        fee_bps=record.fee_bps if record.fee_bps is not None else default_fee_bps,
    )


__all__ = [
    "UniswapV2Pool",
    "UniswapV2",
    "uniswap_v2",
    "quote",
    "parse_pool_record",
]
