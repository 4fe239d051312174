"""Router operations for tokens that take a fee on every transfer."""

import pytest

from amm_router.amm.constant_product import get_amount_out
from amm_router.errors import InsufficientOutputAmount, InvalidPath
from tests.helpers import ALICE, BOB, FOT, FOT_FEE_BPS, ROUTER, TOKEN_A, WETH, Revert, sign_permit


def after_fee(amount):
    return amount - amount * FOT_FEE_BPS // 10_000


@pytest.fixture
def alice_fot(chain, funded_alice):
    chain.fund(FOT, ALICE, 100_000)
    chain.approve(FOT, ALICE)
    return ALICE


class TestSwapExactTokensForTokens:
    def test_fee_on_input(self, chain, router, alice_fot, deadline):
        chain.seed_pool(FOT, TOKEN_A, 1000, 1000)

        received = router.swap_exact_tokens_for_tokens_supporting_fee_on_transfer(
            100, 89, [FOT, TOKEN_A], BOB, deadline, sender=ALICE
        )

        assert received == 89
        assert chain.ledger.balance_of(TOKEN_A, BOB) == 89

    def test_standard_swap_breaks_on_fee_token(self, chain, router, alice_fot, deadline):
        chain.seed_pool(FOT, TOKEN_A, 1000, 1000)
        with pytest.raises(Revert, match="K"):
            router.swap_exact_tokens_for_tokens(
                100, 0, [FOT, TOKEN_A], BOB, deadline, sender=ALICE
            )

    def test_minimum_checked_against_received(self, chain, router, alice_fot, deadline):
        chain.seed_pool(TOKEN_A, FOT, 100_000, 100_000)
        quoted = get_amount_out(10_000, 100_000, 100_000)

        with pytest.raises(InsufficientOutputAmount):
            with chain.atomic():
                router.swap_exact_tokens_for_tokens_supporting_fee_on_transfer(
                    10_000, quoted, [TOKEN_A, FOT], BOB, deadline, sender=ALICE
                )
        assert chain.ledger.balance_of(FOT, BOB) == 0

        received = router.swap_exact_tokens_for_tokens_supporting_fee_on_transfer(
            10_000, after_fee(quoted), [TOKEN_A, FOT], BOB, deadline, sender=ALICE
        )
        assert received == after_fee(quoted)

    def test_recipient_existing_balance_not_counted(self, chain, router, alice_fot, deadline):
        chain.seed_pool(FOT, TOKEN_A, 1000, 1000)
        chain.fund(TOKEN_A, BOB, 5000)

        received = router.swap_exact_tokens_for_tokens_supporting_fee_on_transfer(
            100, 0, [FOT, TOKEN_A], BOB, deadline, sender=ALICE
        )

        assert received == 89
        assert chain.ledger.balance_of(TOKEN_A, BOB) == 5089


class TestNativeSwaps:
    def test_native_in(self, chain, router, alice_fot, deadline):
        chain.seed_pool(WETH, FOT, 20_000, 10_000)
        chain.attach_value(ALICE, 1000)

        received = router.swap_exact_native_for_tokens_supporting_fee_on_transfer(
            0, [WETH, FOT], BOB, deadline, value=1000
        )

        assert received == after_fee(get_amount_out(1000, 20_000, 10_000))
        assert chain.ledger.balance_of(FOT, BOB) == received

    def test_native_in_checks_path(self, router, alice_fot, deadline):
        with pytest.raises(InvalidPath):
            router.swap_exact_native_for_tokens_supporting_fee_on_transfer(
                0, [FOT, WETH], BOB, deadline, value=1000
            )

    def test_native_out(self, chain, router, alice_fot, deadline):
        chain.seed_pool(FOT, WETH, 10_000, 20_000)

        amount_out = router.swap_exact_tokens_for_native_supporting_fee_on_transfer(
            100, 0, [FOT, WETH], BOB, deadline, sender=ALICE
        )

        assert amount_out == get_amount_out(after_fee(100), 10_000, 20_000)
        assert chain.native_balance(BOB) == amount_out
        assert chain.ledger.balance_of(WETH, ROUTER) == 0

    def test_native_out_minimum(self, chain, router, alice_fot, deadline):
        chain.seed_pool(FOT, WETH, 10_000, 20_000)
        with pytest.raises(InsufficientOutputAmount):
            router.swap_exact_tokens_for_native_supporting_fee_on_transfer(
                100, get_amount_out(100, 10_000, 20_000), [FOT, WETH], BOB, deadline, sender=ALICE
            )


class TestRemoveLiquidityNative:
    @pytest.fixture
    def fot_pool(self, chain, funded_alice):
        """FOT-WETH pool; WETH is token0, so the burn pays WETH first."""
        return chain.seed_pool(FOT, WETH, 10_000, 20_000, shares_to=ALICE)

    def test_forwards_what_arrived(self, chain, router, fot_pool, deadline):
        chain.approve(fot_pool.address, ALICE)

        amount_native = router.remove_liquidity_native_supporting_fee_on_transfer(
            FOT, 13_142, 0, 0, ALICE, deadline, sender=ALICE
        )

        assert amount_native == 18_585
        # 9292 burned out, 9200 reached the router, 9108 reached ALICE
        assert chain.ledger.balance_of(FOT, ALICE) == after_fee(after_fee(9292)) == 9108
        assert chain.ledger.balance_of(FOT, ROUTER) == 0
        assert chain.native_balance(ALICE) == 1_000_000 + 18_585

    def test_standard_remove_cannot_forward_burned_amount(self, chain, router, fot_pool, deadline):
        chain.approve(fot_pool.address, ALICE)
        with pytest.raises(Revert, match="insufficient balance"):
            router.remove_liquidity_native(FOT, 13_142, 0, 0, ALICE, deadline, sender=ALICE)

    def test_with_permit(self, chain, router, fot_pool, deadline):
        signature = sign_permit(ALICE, ROUTER, 13_142, deadline)

        amount_native = router.remove_liquidity_native_with_permit_supporting_fee_on_transfer(
            FOT,
            13_142,
            0,
            0,
            BOB,
            deadline,
            sender=ALICE,
            approve_max=False,
            signature=signature,
        )

        assert amount_native == 18_585
        assert chain.native_balance(BOB) == 18_585
        assert chain.ledger.balance_of(FOT, BOB) == 9108


class TestRemoveLiquidityNativeWithPermit:
    def test_plain_token(self, chain, router, funded_alice, deadline):
        pool = chain.seed_pool(TOKEN_A, WETH, 10_000, 20_000, shares_to=ALICE)
        signature = sign_permit(ALICE, ROUTER, 13_142, deadline)

        result = router.remove_liquidity_native_with_permit(
            TOKEN_A,
            13_142,
            0,
            0,
            BOB,
            deadline,
            sender=ALICE,
            approve_max=False,
            signature=signature,
        )

        assert result == (9292, 18_585)
        assert chain.ledger.balance_of(pool.address, ALICE) == 0
