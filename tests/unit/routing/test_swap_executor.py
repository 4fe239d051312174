"""Tests for hop-by-hop swap execution against simulated pools."""

import pytest

from amm_router.amm.constant_product import get_amount_out
from amm_router.errors import InvariantViolation
from tests.helpers import BOB, FOT, FOT_FEE_BPS, TOKEN_A, TOKEN_B, TOKEN_C, Revert


def swap_calls(chain):
    return [call for call in chain.calls if call[0] == "swap"]


@pytest.fixture
def two_hops(chain):
    """A-B and B-C pools at (1000, 1000)."""
    return (
        chain.seed_pool(TOKEN_A, TOKEN_B, 1000, 1000),
        chain.seed_pool(TOKEN_B, TOKEN_C, 1000, 1000),
    )


class TestExecute:
    def test_forward_path(self, chain, two_hops):
        pool_ab, pool_bc = two_hops
        chain.fund(TOKEN_A, pool_ab.address, 100)

        chain.router.executor.execute([100, 90, 82], [TOKEN_A, TOKEN_B, TOKEN_C], BOB)

        # token1 is the output of both hops; the first hop pays the next pool
        assert swap_calls(chain) == [
            ("swap", pool_ab.address, 0, 90, pool_bc.address),
            ("swap", pool_bc.address, 0, 82, BOB),
        ]
        assert chain.ledger.balance_of(TOKEN_C, BOB) == 82
        assert chain.ledger.balance_of(TOKEN_B, chain.router.address) == 0

    def test_reverse_path_uses_token0_slot(self, chain, two_hops):
        pool_ab, pool_bc = two_hops
        chain.fund(TOKEN_C, pool_bc.address, 100)

        chain.router.executor.execute([100, 90, 82], [TOKEN_C, TOKEN_B, TOKEN_A], BOB)

        assert swap_calls(chain) == [
            ("swap", pool_bc.address, 90, 0, pool_ab.address),
            ("swap", pool_ab.address, 82, 0, BOB),
        ]
        assert chain.ledger.balance_of(TOKEN_A, BOB) == 82

    def test_one_nonzero_slot_per_hop(self, chain, two_hops):
        pool_ab, _ = two_hops
        chain.fund(TOKEN_A, pool_ab.address, 100)
        chain.router.executor.execute([100, 90, 82], [TOKEN_A, TOKEN_B, TOKEN_C], BOB)

        for _, _, amount0_out, amount1_out, _ in swap_calls(chain):
            assert (amount0_out == 0) != (amount1_out == 0)

    @pytest.mark.parametrize("amounts", [[100, 90], [100, 90, 82, 75]])
    def test_amounts_must_match_path(self, chain, two_hops, amounts):
        pool_ab, _ = two_hops
        chain.fund(TOKEN_A, pool_ab.address, 100)

        with pytest.raises(InvariantViolation):
            chain.router.executor.execute(amounts, [TOKEN_A, TOKEN_B, TOKEN_C], BOB)
        assert swap_calls(chain) == []

    def test_unfunded_first_pool_is_rejected(self, chain, two_hops):
        with pytest.raises(Revert):
            chain.router.executor.execute([100, 90, 82], [TOKEN_A, TOKEN_B, TOKEN_C], BOB)


class TestExecuteSupportingFeeOnTransfer:
    def test_prices_from_received_balance(self, chain, two_hops):
        pool_ab, _ = two_hops
        # More than any quote would have said: execution follows the balance
        chain.fund(TOKEN_A, pool_ab.address, 150)

        chain.router.executor.execute_supporting_fee_on_transfer([TOKEN_A, TOKEN_B], BOB)

        assert chain.ledger.balance_of(TOKEN_B, BOB) == get_amount_out(150, 1000, 1000)

    def test_fee_taken_between_hops(self, chain):
        pool_a_fot = chain.seed_pool(TOKEN_A, FOT, 10_000, 10_000)
        chain.seed_pool(FOT, TOKEN_B, 10_000, 10_000)
        chain.fund(TOKEN_A, pool_a_fot.address, 1000)

        chain.router.executor.execute_supporting_fee_on_transfer([TOKEN_A, FOT, TOKEN_B], BOB)

        hop0_out = get_amount_out(1000, 10_000, 10_000)
        arrived = hop0_out - hop0_out * FOT_FEE_BPS // 10_000
        assert chain.ledger.balance_of(TOKEN_B, BOB) == get_amount_out(arrived, 10_000, 10_000)

    def test_quoted_amounts_break_k_on_fee_token(self, chain):
        pool_a_fot = chain.seed_pool(TOKEN_A, FOT, 10_000, 10_000)
        chain.seed_pool(FOT, TOKEN_B, 10_000, 10_000)
        chain.fund(TOKEN_A, pool_a_fot.address, 1000)
        hop0_out = get_amount_out(1000, 10_000, 10_000)
        amounts = [1000, hop0_out, get_amount_out(hop0_out, 10_000, 10_000)]

        with pytest.raises(Revert, match="K"):
            chain.router.executor.execute(amounts, [TOKEN_A, FOT, TOKEN_B], BOB)
