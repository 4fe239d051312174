"""Constant-product AMM router - quoting and orchestration engine."""

from amm_router.config import RouterConfig
from amm_router.router import Router

__version__ = "0.1.0"
__all__ = ["Router", "RouterConfig", "__version__"]
