"""Constant-product pricing.

Pools hold reserves x and y and keep x * y = k across a trade, net of a
0.3% fee taken from the input. All math is checked uint256 via SafeInt.
"""

from __future__ import annotations

from dataclasses import dataclass

from amm_router.constants import FEE_DENOMINATOR, FEE_NUMERATOR
from amm_router.errors import (
    InsufficientAmount,
    InsufficientInputAmount,
    InsufficientLiquidity,
    InsufficientOutputAmount,
)
from amm_router.models.types import PoolKey, normalize_address
from amm_router.safe_int import S


@dataclass
class PoolState:
    """Reserves of one pool at one observation instant."""

    address: str
    token0: str
    token1: str
    reserve0: int
    reserve1: int

    @property
    def key(self) -> PoolKey:
        return PoolKey.of(self.token0, self.token1)

    def get_reserves(self, token_in: str) -> tuple[int, int]:
        """Get reserves ordered as (reserve_in, reserve_out)."""
        token_in_norm = normalize_address(token_in)
        if token_in_norm == normalize_address(self.token0):
            return self.reserve0, self.reserve1
        elif token_in_norm == normalize_address(self.token1):
            return self.reserve1, self.reserve0
        else:
            raise ValueError(f"Token {token_in} not in pool")


class ConstantProduct:
    """Single-pool constant-product math.

    Formula: amount_out = (amount_in * 997 * reserve_out) / (reserve_in * 1000 + amount_in * 997)
    """

    def quote(self, amount_a: int, reserve_a: int, reserve_b: int) -> int:
        """Equivalent amount of token B at the current pool price, no fee.

        Args:
            amount_a: Amount of token A
            reserve_a: Pool reserve of token A
            reserve_b: Pool reserve of token B

        Returns:
            amount_a * reserve_b // reserve_a

        Raises:
            InsufficientAmount: If amount_a is zero
            InsufficientLiquidity: If either reserve is zero
        """
        if amount_a <= 0:
            raise InsufficientAmount("Quote amount must be positive")
        if reserve_a <= 0 or reserve_b <= 0:
            raise InsufficientLiquidity("Pool has no reserves")
        return (S(amount_a) * S(reserve_b) // S(reserve_a)).value

    def get_amount_out(self, amount_in: int, reserve_in: int, reserve_out: int) -> int:
        """Calculate output amount for an exact input, after the fee.

        Args:
            amount_in: Input token amount
            reserve_in: Reserve of input token in pool
            reserve_out: Reserve of output token in pool

        Returns:
            Output token amount, rounded down

        Raises:
            InsufficientInputAmount: If amount_in is zero
            InsufficientLiquidity: If either reserve is zero
        """
        if amount_in <= 0:
            raise InsufficientInputAmount("Swap input must be positive")
        if reserve_in <= 0 or reserve_out <= 0:
            raise InsufficientLiquidity("Pool has no reserves")

        amount_in_with_fee = S(amount_in) * S(FEE_NUMERATOR)
        numerator = amount_in_with_fee * S(reserve_out)
        denominator = S(reserve_in) * S(FEE_DENOMINATOR) + amount_in_with_fee

        return (numerator // denominator).value

    def get_amount_in(self, amount_out: int, reserve_in: int, reserve_out: int) -> int:
        """Calculate the input required for an exact output.

        Rounds up, so the pool never loses value to rounding: feeding the
        result back through get_amount_out yields at least amount_out.

        Formula: amount_in = (res_in * out * 1000) / ((res_out - out) * 997) + 1

        Raises:
            InsufficientOutputAmount: If amount_out is zero
            InsufficientLiquidity: If either reserve is zero, or amount_out
                would drain the output reserve
        """
        if amount_out <= 0:
            raise InsufficientOutputAmount("Swap output must be positive")
        if reserve_in <= 0 or reserve_out <= 0:
            raise InsufficientLiquidity("Pool has no reserves")
        if amount_out >= reserve_out:
            raise InsufficientLiquidity(
                f"Requested output {amount_out} exceeds reserve {reserve_out}"
            )

        numerator = S(reserve_in) * S(amount_out) * S(FEE_DENOMINATOR)
        denominator = (S(reserve_out) - S(amount_out)) * S(FEE_NUMERATOR)

        return ((numerator // denominator) + S(1)).value


# Singleton instance
constant_product = ConstantProduct()

quote = constant_product.quote
get_amount_out = constant_product.get_amount_out
get_amount_in = constant_product.get_amount_in


__all__ = [
    "PoolState",
    "ConstantProduct",
    "constant_product",
    "quote",
    "get_amount_out",
    "get_amount_in",
]
