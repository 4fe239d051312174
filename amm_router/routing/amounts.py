"""Multi-hop amount calculation along a token path."""

from __future__ import annotations

import structlog

from amm_router.amm.constant_product import ConstantProduct, constant_product
from amm_router.errors import InvalidPath
from amm_router.routing.reserves import ReserveSource

logger = structlog.get_logger()


def validate_path(path: list[str]) -> None:
    """Raise InvalidPath unless the path names at least one hop."""
    if len(path) < 2:
        raise InvalidPath(f"Path needs at least 2 tokens, got {len(path)}")


class PathQuoter:
    """Composes single-pool pricing over a path of pools.

    amounts[i] is the quantity of path[i] present at hop i: amounts[0] is
    what goes in, amounts[-1] is what comes out.
    """

    def __init__(self, reserves: ReserveSource, amm: ConstantProduct = constant_product) -> None:
        self.reserves = reserves
        self.amm = amm

    def get_amounts_out(self, amount_in: int, path: list[str]) -> list[int]:
        """Forward quote: what each hop yields for an exact input.

        Raises:
            InvalidPath: If the path is too short or a hop has no pool
        """
        validate_path(path)
        amounts = [0] * len(path)
        amounts[0] = amount_in
        for i in range(len(path) - 1):
            reserve_in, reserve_out = self.reserves.get_reserves(path[i], path[i + 1])
            amounts[i + 1] = self.amm.get_amount_out(amounts[i], reserve_in, reserve_out)

        logger.debug("amounts_out", hops=len(path) - 1, amount_in=amount_in, amount_out=amounts[-1])
        return amounts

    def get_amounts_in(self, amount_out: int, path: list[str]) -> list[int]:
        """Backward quote: what each hop needs so the last yields ``amount_out``.

        Walks from the last hop to the first, since each hop's required input
        is the next hop's required input, not the first hop's.

        Raises:
            InvalidPath: If the path is too short or a hop has no pool
        """
        validate_path(path)
        amounts = [0] * len(path)
        amounts[-1] = amount_out
        for i in range(len(path) - 1, 0, -1):
            reserve_in, reserve_out = self.reserves.get_reserves(path[i - 1], path[i])
            amounts[i - 1] = self.amm.get_amount_in(amounts[i], reserve_in, reserve_out)

        logger.debug("amounts_in", hops=len(path) - 1, amount_out=amount_out, amount_in=amounts[0])
        return amounts


__all__ = ["PathQuoter", "validate_path"]
