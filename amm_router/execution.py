"""Executes swaps hop by hop across a path of pools."""

from __future__ import annotations

import structlog

from amm_router.amm.constant_product import constant_product
from amm_router.constants import EMPTY_SWAP_DATA
from amm_router.errors import InvariantViolation
from amm_router.interfaces import AssetLedger
from amm_router.models.types import PoolKey
from amm_router.routing.amounts import validate_path
from amm_router.routing.reserves import RegistryReserves
from amm_router.safe_int import S

logger = structlog.get_logger()


class SwapExecutor:
    """Issues one pool swap per hop, in path order.

    The first pool must already hold the input for hop 0 before either
    execute method runs. Each hop's output is sent straight to the next
    pool, so the router never holds intermediate tokens; the last hop pays
    ``to``.
    """

    def __init__(self, pools: RegistryReserves, ledger: AssetLedger) -> None:
        self.pools = pools
        self.ledger = ledger

    def _recipient(self, path: list[str], i: int, to: str) -> str:
        if i < len(path) - 2:
            return self.pools.pool_for(path[i + 1], path[i + 2]).address
        return to

    def execute(self, amounts: list[int], path: list[str], to: str) -> None:
        """Swap along ``path`` using a precomputed amount vector.

        Args:
            amounts: Amount vector from get_amounts_out / get_amounts_in,
                already checked against the caller's bounds
            path: Token path, same length as amounts
            to: Recipient of the final output
        """
        validate_path(path)
        if len(amounts) != len(path):
            raise InvariantViolation(
                f"Amount vector has {len(amounts)} entries for a {len(path)}-token path"
            )
        for i in range(len(path) - 1):
            token_in, token_out = path[i], path[i + 1]
            key = PoolKey.of(token_in, token_out)
            amount0_out, amount1_out = key.output_amounts(token_out, amounts[i + 1])
            pool = self.pools.pool_for(token_in, token_out)
            recipient = self._recipient(path, i, to)

            logger.debug(
                "swap_hop",
                hop=i,
                pool=pool.address[-8:],
                amount0_out=amount0_out,
                amount1_out=amount1_out,
                recipient=recipient[-8:],
            )
            pool.swap(amount0_out, amount1_out, recipient, EMPTY_SWAP_DATA)

    def execute_supporting_fee_on_transfer(self, path: list[str], to: str) -> None:
        """Swap along ``path``, pricing each hop from what the pool actually received.

        The input a pool received is its token balance minus its recorded
        reserve, which already excludes any fee a token took in transit.
        Each hop's output is priced from that amount, so no forward quote is
        trusted past the first transfer.
        """
        validate_path(path)
        for i in range(len(path) - 1):
            token_in, token_out = path[i], path[i + 1]
            key = PoolKey.of(token_in, token_out)
            pool = self.pools.pool_for(token_in, token_out)

            reserve0, reserve1, _ = pool.get_reserves()
            reserve_in, reserve_out = key.order(token_in, reserve0, reserve1)
            amount_in = (S(self.ledger.balance_of(token_in, pool.address)) - S(reserve_in)).value
            amount_out = constant_product.get_amount_out(amount_in, reserve_in, reserve_out)

            amount0_out, amount1_out = key.output_amounts(token_out, amount_out)
            recipient = self._recipient(path, i, to)

            logger.debug(
                "swap_hop_measured",
                hop=i,
                pool=pool.address[-8:],
                amount_in=amount_in,
                amount_out=amount_out,
                recipient=recipient[-8:],
            )
            pool.swap(amount0_out, amount1_out, recipient, EMPTY_SWAP_DATA)


__all__ = ["SwapExecutor"]
