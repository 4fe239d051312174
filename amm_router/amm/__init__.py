"""Constant-product AMM math."""

from amm_router.amm.constant_product import (
    ConstantProduct,
    PoolState,
    constant_product,
    get_amount_in,
    get_amount_out,
    quote,
)

__all__ = [
    "ConstantProduct",
    "PoolState",
    "constant_product",
    "quote",
    "get_amount_out",
    "get_amount_in",
]
