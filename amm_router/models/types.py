"""Shared type definitions for tokens, pairs and amounts.

These types are used across the router core and the HTTP models.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Annotated, Any

from pydantic import BeforeValidator, Field

from amm_router.constants import ZERO_ADDRESS
from amm_router.errors import IdenticalAddresses, ZeroAddress
from amm_router.safe_int import UINT256_MAX


def validate_uint256(value: Any) -> str:
    """Validate that a value is a valid uint256 decimal string.

    Args:
        value: Value to validate (string or int)

    Returns:
        Valid uint256 as decimal string

    Raises:
        ValueError: If value is not a valid non-negative integer within uint256 range
    """
    if isinstance(value, int) and not isinstance(value, bool):
        if value < 0:
            raise ValueError(f"Uint256 cannot be negative: {value}")
        if value > UINT256_MAX:
            raise ValueError(f"Uint256 overflow: {value} > 2^256-1")
        return str(value)

    if not isinstance(value, str):
        raise ValueError(f"Uint256 must be string or int, got {type(value).__name__}")

    try:
        int_value = int(value)
    except ValueError as err:
        raise ValueError(f"Uint256 must be a decimal integer string: '{value}'") from err

    if int_value < 0:
        raise ValueError(f"Uint256 cannot be negative: {value}")
    if int_value > UINT256_MAX:
        raise ValueError(f"Uint256 overflow: {value} > 2^256-1")

    return str(int_value)


# Token / pool identifier (40 hex chars after 0x prefix)
Address = Annotated[str, Field(pattern=r"^0x[a-fA-F0-9]{40}$")]

# 256-bit unsigned integer as decimal string (validated)
Uint256 = Annotated[
    str,
    BeforeValidator(validate_uint256),
    Field(description="256-bit unsigned integer as decimal string"),
]


def normalize_address(address: str) -> str:
    """Normalize an identifier to lowercase with a 0x prefix."""
    addr = address.lower()
    if not addr.startswith("0x"):
        addr = "0x" + addr
    return addr


def sort_tokens(token_a: str, token_b: str) -> tuple[str, str]:
    """Return the pair in canonical (token0, token1) order.

    Identifiers are compared in normalized (lowercase) form, which for
    fixed-width hex is the same as comparing their numeric value.

    Raises:
        IdenticalAddresses: If both identifiers name the same token
        ZeroAddress: If the lower identifier is the zero address
    """
    a = normalize_address(token_a)
    b = normalize_address(token_b)
    if a == b:
        raise IdenticalAddresses(f"Identical tokens: {token_a}")
    token0, token1 = (a, b) if a < b else (b, a)
    if token0 == ZERO_ADDRESS:
        raise ZeroAddress("Zero address cannot be part of a pair")
    return token0, token1


@dataclass(frozen=True)
class PoolKey:
    """Unordered token pair, stored canonically."""

    token0: str
    token1: str

    @classmethod
    def of(cls, token_a: str, token_b: str) -> PoolKey:
        token0, token1 = sort_tokens(token_a, token_b)
        return cls(token0, token1)

    def output_amounts(self, token_out: str, amount_out: int) -> tuple[int, int]:
        """Map an output to the pool's (amount0_out, amount1_out) slots.

        Exactly one slot carries the amount; the other is zero.
        """
        if normalize_address(token_out) == self.token0:
            return amount_out, 0
        return 0, amount_out

    def order(self, token_a: str, amount0: int, amount1: int) -> tuple[int, int]:
        """Reorder a (token0, token1) pair of values to (token_a, other) order."""
        if normalize_address(token_a) == self.token0:
            return amount0, amount1
        return amount1, amount0
