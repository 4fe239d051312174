"""Shared types and HTTP models."""

from amm_router.models.types import (
    Address,
    PoolKey,
    Uint256,
    normalize_address,
    sort_tokens,
)

__all__ = [
    "Address",
    "PoolKey",
    "Uint256",
    "normalize_address",
    "sort_tokens",
]
