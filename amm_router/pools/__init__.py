"""Reserve snapshots."""

from amm_router.pools.book import ReserveBook

__all__ = ["ReserveBook"]
