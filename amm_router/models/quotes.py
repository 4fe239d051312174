"""Pydantic models for the quoting service."""

from __future__ import annotations

from pydantic import BaseModel, Field

from amm_router.amm.constant_product import PoolState
from amm_router.models.types import Address, Uint256, normalize_address


class PoolSnapshot(BaseModel):
    """Reserves of one pool as supplied by the caller."""

    address: Address
    token0: Address
    token1: Address
    reserve0: Uint256
    reserve1: Uint256

    def to_pool_state(self) -> PoolState:
        return PoolState(
            address=normalize_address(self.address),
            token0=normalize_address(self.token0),
            token1=normalize_address(self.token1),
            reserve0=int(self.reserve0),
            reserve1=int(self.reserve1),
        )


class QuoteRequest(BaseModel):
    """Equivalent amount at the current price (no fee)."""

    amount_a: Uint256 = Field(alias="amountA")
    reserve_a: Uint256 = Field(alias="reserveA")
    reserve_b: Uint256 = Field(alias="reserveB")


class AmountOutRequest(BaseModel):
    amount_in: Uint256 = Field(alias="amountIn")
    reserve_in: Uint256 = Field(alias="reserveIn")
    reserve_out: Uint256 = Field(alias="reserveOut")


class AmountInRequest(BaseModel):
    amount_out: Uint256 = Field(alias="amountOut")
    reserve_in: Uint256 = Field(alias="reserveIn")
    reserve_out: Uint256 = Field(alias="reserveOut")


class PathQuoteRequest(BaseModel):
    """Multi-hop quote over a caller-supplied pool snapshot.

    ``amount`` is the exact input for /amounts-out and the exact output for
    /amounts-in.
    """

    amount: Uint256
    path: list[Address] = Field(min_length=2)
    pools: list[PoolSnapshot] = Field(min_length=1)


class AmountResponse(BaseModel):
    amount: Uint256


class AmountsResponse(BaseModel):
    amounts: list[Uint256]


class ErrorResponse(BaseModel):
    error: str
    detail: str


__all__ = [
    "PoolSnapshot",
    "QuoteRequest",
    "AmountOutRequest",
    "AmountInRequest",
    "PathQuoteRequest",
    "AmountResponse",
    "AmountsResponse",
    "ErrorResponse",
]
