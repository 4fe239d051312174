"""In-memory reserve snapshot for quoting without live pools.

A ReserveBook holds PoolState snapshots keyed by their canonical pair and
answers get_reserves the same way live pools do. The HTTP service builds
one per request from the pools the caller sends.
"""

from __future__ import annotations

from collections.abc import Iterable

import structlog

from amm_router.amm.constant_product import PoolState
from amm_router.errors import PoolNotFound
from amm_router.models.types import PoolKey

logger = structlog.get_logger()


class ReserveBook:
    """Reserve snapshots, one pool per token pair."""

    def __init__(self, pools: Iterable[PoolState] | None = None) -> None:
        self._pools: dict[PoolKey, PoolState] = {}
        if pools:
            for pool in pools:
                self.add_pool(pool)

    def add_pool(self, pool: PoolState) -> None:
        """Add a snapshot. A later pool for the same pair replaces the earlier one."""
        key = pool.key
        if key in self._pools:
            logger.debug(
                "pool_replaced",
                pool=pool.address[-8:],
                token0=key.token0[-8:],
                token1=key.token1[-8:],
            )
        self._pools[key] = pool

    def get_pool(self, token_a: str, token_b: str) -> PoolState | None:
        """Get the pool for a token pair (order independent)."""
        return self._pools.get(PoolKey.of(token_a, token_b))

    def get_reserves(self, token_a: str, token_b: str) -> tuple[int, int]:
        pool = self.get_pool(token_a, token_b)
        if pool is None:
            raise PoolNotFound(f"No pool for {token_a} / {token_b}")
        return pool.get_reserves(token_a)

    def __len__(self) -> int:
        return len(self._pools)


__all__ = ["ReserveBook"]
