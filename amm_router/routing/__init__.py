"""Path quoting."""

from amm_router.routing.amounts import PathQuoter, validate_path
from amm_router.routing.reserves import RegistryReserves, ReserveSource

__all__ = ["PathQuoter", "validate_path", "RegistryReserves", "ReserveSource"]
