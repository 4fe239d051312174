"""Deposit amounts for adding liquidity at the pool's current price."""

from __future__ import annotations

from dataclasses import dataclass

from amm_router.amm.constant_product import constant_product
from amm_router.errors import InvariantViolation, SlippageExceeded


@dataclass(frozen=True)
class LiquidityQuote:
    """Amounts to deposit, in the caller's (token_a, token_b) order."""

    amount_a: int
    amount_b: int


def choose_liquidity_amounts(
    amount_a_desired: int,
    amount_b_desired: int,
    amount_a_min: int,
    amount_b_min: int,
    reserve_a: int,
    reserve_b: int,
) -> LiquidityQuote:
    """Pick the largest deposit on the current ratio within the caller's bounds.

    An empty pool takes the desired amounts as-is; the first depositor sets
    the price. Otherwise one side is kept at its desired amount and the
    other is scaled to the pool ratio, never above its own desired amount.

    Args:
        amount_a_desired: Most of token A the caller will deposit
        amount_b_desired: Most of token B the caller will deposit
        amount_a_min: Least of token A the caller accepts depositing
        amount_b_min: Least of token B the caller accepts depositing
        reserve_a: Pool reserve of token A
        reserve_b: Pool reserve of token B

    Returns:
        LiquidityQuote within [min, desired] on each side

    Raises:
        SlippageExceeded: If the ratio-matched side falls below its minimum
    """
    if reserve_a == 0 and reserve_b == 0:
        return LiquidityQuote(amount_a_desired, amount_b_desired)

    amount_b_optimal = constant_product.quote(amount_a_desired, reserve_a, reserve_b)
    if amount_b_optimal <= amount_b_desired:
        if amount_b_optimal < amount_b_min:
            raise SlippageExceeded("B", amount_b_optimal, amount_b_min)
        return LiquidityQuote(amount_a_desired, amount_b_optimal)

    amount_a_optimal = constant_product.quote(amount_b_desired, reserve_b, reserve_a)
    if amount_a_optimal > amount_a_desired:
        raise InvariantViolation(
            f"Optimal A {amount_a_optimal} above desired {amount_a_desired}"
        )
    if amount_a_optimal < amount_a_min:
        raise SlippageExceeded("A", amount_a_optimal, amount_a_min)
    return LiquidityQuote(amount_a_optimal, amount_b_desired)


__all__ = ["LiquidityQuote", "choose_liquidity_amounts"]
