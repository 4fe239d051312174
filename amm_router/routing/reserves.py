"""Where the path quoter gets its reserves from."""

from __future__ import annotations

from typing import Protocol

import structlog

from amm_router.errors import PoolNotFound
from amm_router.interfaces import Pool, PoolRegistry
from amm_router.models.types import PoolKey

logger = structlog.get_logger()


class ReserveSource(Protocol):
    """Anything that can report a pool's reserves for a token pair."""

    def get_reserves(self, token_a: str, token_b: str) -> tuple[int, int]:
        """Return (reserve_a, reserve_b) for the pool of this pair.

        Raises:
            PoolNotFound: If no pool exists for the pair
        """
        ...


class RegistryReserves:
    """Live reserves, read from the pool on every call.

    Nothing is cached: within one operation an earlier hop may already have
    moved a later pool's reserves.
    """

    def __init__(self, registry: PoolRegistry) -> None:
        self.registry = registry

    def pool_for(self, token_a: str, token_b: str) -> Pool:
        """Look up the pool of a pair.

        Raises:
            PoolNotFound: If the registry has no pool for the pair
        """
        pool = self.registry.get_pool(token_a, token_b)
        if pool is None:
            raise PoolNotFound(f"No pool for {token_a} / {token_b}")
        return pool

    def get_reserves(self, token_a: str, token_b: str) -> tuple[int, int]:
        key = PoolKey.of(token_a, token_b)
        pool = self.pool_for(token_a, token_b)
        reserve0, reserve1, _ = pool.get_reserves()
        return key.order(token_a, reserve0, reserve1)


__all__ = ["ReserveSource", "RegistryReserves"]
