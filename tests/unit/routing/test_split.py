"""Tests for split routing across parallel liquidity."""

import pytest

from cpmm_router.config import RouterConfig
from cpmm_router.routing import Query, QuoteStatus, Router
from tests.helpers import TOKEN_A, TOKEN_B, TOKEN_C, TOKEN_D, USDC, WETH, make_pool, make_router


class TestQuoteSplit:
    def test_split_across_parallel_pools(self):
        """Two 50 chunks over twin pools beat 100 through one pool.

        Chunk 1: both pools give 1000 * 50 // 1050 = 47, tie -> p1.
        Chunk 2: p1 now (1050, 953) gives 43, p2 still gives 47.
        """
        router = make_router(
            make_pool(TOKEN_A, TOKEN_B, address="p1"),
            make_pool(TOKEN_A, TOKEN_B, address="p2"),
        )
        result = router.quote_split(Query(TOKEN_A, 100, TOKEN_B), parts=2)

        assert result.status is QuoteStatus.FOUND
        assert result.is_split
        assert [leg.pool_addresses for leg in result.legs] == [("p1",), ("p2",)]
        assert [leg.amount_out for leg in result.legs] == [47, 47]
        assert result.amount_out == 94
        assert result.amount_out > router.quote(Query(TOKEN_A, 100, TOKEN_B)).amount_out

    def test_later_chunks_see_earlier_swaps(self):
        router = make_router(
            make_pool(TOKEN_A, TOKEN_B, address="p1"),
            make_pool(TOKEN_A, TOKEN_B, address="p2"),
        )
        result = router.quote_split(Query(TOKEN_A, 100, TOKEN_B), parts=4)

        assert result.is_split
        # Each leg trades against the state left by earlier legs on that pool
        seen: dict[str, tuple[int, int]] = {}
        for leg in result.legs:
            hop = leg.hops[0]
            if hop.pool_address in seen:
                assert (hop.pool.reserve0, hop.pool.reserve1) == seen[hop.pool_address]
            seen[hop.pool_address] = (hop.pool_after.reserve0, hop.pool_after.reserve1)
        assert sum(leg.amount_in for leg in result.legs) == 100

    def test_single_pool_falls_back_to_single_route(self):
        """Chunking one pool only loses to rounding, so no split is returned."""
        router = make_router(make_pool(TOKEN_A, TOKEN_B, address="p1"))
        result = router.quote_split(Query(TOKEN_A, 100, TOKEN_B), parts=4)

        assert not result.is_split
        assert result.amount_out == 90
        assert result.legs[0].pool_addresses == ("p1",)

    def test_remainder_goes_to_last_chunk(self):
        router = make_router(
            make_pool(TOKEN_A, TOKEN_B, 10**6, 10**6, address="p1"),
            make_pool(TOKEN_A, TOKEN_B, 10**6, 10**6, address="p2"),
            make_pool(TOKEN_A, TOKEN_B, 10**6, 10**6, address="p3"),
        )
        result = router.quote_split(Query(TOKEN_A, 100_001, TOKEN_B), parts=3)

        assert result.is_split
        assert [leg.amount_in for leg in result.legs] == [33_333, 33_333, 33_335]
        assert {leg.pool_addresses for leg in result.legs} == {("p1",), ("p2",), ("p3",)}

    def test_split_over_disjoint_multihop_routes(self):
        router = make_router(
            make_pool(TOKEN_A, TOKEN_B, address="ab"),
            make_pool(TOKEN_B, TOKEN_D, address="bd"),
            make_pool(TOKEN_A, TOKEN_C, address="ac"),
            make_pool(TOKEN_C, TOKEN_D, address="cd"),
        )
        single = router.quote(Query(TOKEN_A, 200, TOKEN_D))
        result = router.quote_split(Query(TOKEN_A, 200, TOKEN_D), parts=2)

        assert result.is_split
        assert {leg.pool_addresses for leg in result.legs} == {("ab", "bd"), ("ac", "cd")}
        assert result.amount_out > single.amount_out

    def test_unreachable(self):
        router = make_router(make_pool(TOKEN_A, TOKEN_B), make_pool(TOKEN_C, TOKEN_D))
        result = router.quote_split(Query(TOKEN_A, 100, TOKEN_D))

        assert result.status is QuoteStatus.UNREACHABLE
        assert not result.is_reachable
        assert result.legs == ()
        assert result.amount_out is None

    def test_amount_smaller_than_parts(self):
        router = make_router(
            make_pool(TOKEN_A, TOKEN_B, address="p1"),
            make_pool(TOKEN_A, TOKEN_B, address="p2"),
        )
        result = router.quote_split(Query(TOKEN_A, 3, TOKEN_B), parts=4)
        assert not result.is_split

    def test_parts_from_config(self):
        router = make_router(
            make_pool(TOKEN_A, TOKEN_B, address="p1"),
            make_pool(TOKEN_A, TOKEN_B, address="p2"),
            config=RouterConfig(split_parts=2),
        )
        result = router.quote_split(Query(TOKEN_A, 100, TOKEN_B))
        assert len(result.legs) == 2

    def test_invalid_parts(self):
        router = make_router(make_pool(TOKEN_A, TOKEN_B))
        with pytest.raises(ValueError, match="parts"):
            router.quote_split(Query(TOKEN_A, 100, TOKEN_B), parts=0)

    def test_registry_untouched(self, mainnet_like_registry):
        before = dict(mainnet_like_registry.pools)
        result = Router(mainnet_like_registry).quote_split(
            Query(WETH, 5_000 * 10**18, USDC), parts=4
        )

        assert result.is_reachable
        assert mainnet_like_registry.pools == before
        assert result.amount_out >= Router(mainnet_like_registry).quote(
            Query(WETH, 5_000 * 10**18, USDC)
        ).amount_out
