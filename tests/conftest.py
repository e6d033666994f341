"""Pytest configuration and fixtures."""

import pytest

from cpmm_router.amm.uniswap_v2 import UniswapV2Pool
from cpmm_router.pools import PoolRegistry
from tests.helpers import DAI, USDC, USDT, WETH, make_pool


@pytest.fixture
def basic_pool() -> UniswapV2Pool:
    """Balanced A/B pool with 1000 of each token."""
    return make_pool("A", "B", 1000, 1000, address="p1")


@pytest.fixture
def mainnet_like_pools() -> list[UniswapV2Pool]:
    """Dense multi-pool network with parallel pools and cycles.

    Reserves follow the ETH/stablecoin example network, scaled to integers.
    """
    return [
        make_pool(WETH, USDC, 2_000 * 10**18, 2_000_000 * 10**6, address="weth-usdc-1"),
        make_pool(WETH, USDC, 1_000 * 10**18, 1_000_000 * 10**6, address="weth-usdc-2"),
        make_pool(WETH, DAI, 1_000 * 10**18, 900_000 * 10**18, address="weth-dai-1"),
        make_pool(WETH, DAI, 3_000 * 10**18, 2_800_000 * 10**18, address="weth-dai-2"),
        make_pool(WETH, DAI, 3_000 * 10**18, 3_100_000 * 10**18, address="weth-dai-3"),
        make_pool(DAI, USDC, 1_000_000 * 10**18, 1_000_000 * 10**6, address="dai-usdc-1"),
        make_pool(DAI, USDC, 2_000_000 * 10**18, 2_000_000 * 10**6, address="dai-usdc-2"),
        make_pool(DAI, USDT, 1_000_000 * 10**18, 900_000 * 10**6, address="dai-usdt-1"),
        make_pool(DAI, USDT, 900_000 * 10**18, 1_000_000 * 10**6, address="dai-usdt-2"),
        make_pool(WETH, USDT, 2_000 * 10**18, 2_000_000 * 10**6, address="weth-usdt-1"),
        make_pool(WETH, USDT, 10_000 * 10**18, 10_000_000 * 10**6, address="weth-usdt-2"),
    ]


@pytest.fixture
def mainnet_like_registry(mainnet_like_pools: list[UniswapV2Pool]) -> PoolRegistry:
    return PoolRegistry(mainnet_like_pools)
