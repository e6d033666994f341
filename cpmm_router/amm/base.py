"""Base classes for AMM implementations."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from cpmm_router.amm.uniswap_v2 import UniswapV2Pool


@dataclass(frozen=True)
class SwapResult:
    """Result of simulating a swap through an AMM."""

    amount_in: int
    amount_out: int
    pool_address: str
    token_in: str
    token_out: str
    # Hypothetical pool snapshot after the swap; the quoted pool is untouched
    pool_after: UniswapV2Pool


class AMM(ABC):
    """Abstract base class for AMM implementations."""

    @abstractmethod
    def get_amount_out(
        self,
        amount_in: int,
        reserve_in: int,
        reserve_out: int,
    ) -> int:
        """Calculate output amount for a given input.

        Args:
            amount_in: Input token amount
            reserve_in: Reserve of input token in pool
            reserve_out: Reserve of output token in pool

        Returns:
            Output token amount
        """
        ...

    @abstractmethod
    def simulate_swap(
        self,
        pool: UniswapV2Pool,
        token_in: str,
        amount_in: int,
    ) -> SwapResult:
        """Simulate an exact input swap without mutating the pool."""
        ...
