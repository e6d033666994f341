"""AMM math for constant product pools."""

from cpmm_router.amm.base import AMM, SwapResult
from cpmm_router.amm.uniswap_v2 import (
    UniswapV2,
    UniswapV2Pool,
    parse_pool_record,
    quote,
    uniswap_v2,
)

__all__ = [
    "AMM",
    "SwapResult",
    "UniswapV2",
    "UniswapV2Pool",
    "parse_pool_record",
    "quote",
    "uniswap_v2",
]
