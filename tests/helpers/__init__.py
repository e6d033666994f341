"""Test helpers module for shared test utilities.

- constants: Token identifiers
- factories: Pool and router factory functions
"""

from tests.helpers.constants import (
    DAI,
    TOKEN_A,
    TOKEN_B,
    TOKEN_C,
    TOKEN_D,
    TOKEN_E,
    TOKEN_F,
    USDC,
    USDT,
    WETH,
)
from tests.helpers.factories import make_pool, make_router

__all__ = [
    # Constants
    "TOKEN_A",
    "TOKEN_B",
    "TOKEN_C",
    "TOKEN_D",
    "TOKEN_E",
    "TOKEN_F",
    "WETH",
    "USDC",
    "DAI",
    "USDT",
    # Factories
    "make_pool",
    "make_router",
]
