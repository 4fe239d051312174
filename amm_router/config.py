"""Router and HTTP service configuration."""

from __future__ import annotations

import os
import time
from collections.abc import Callable
from dataclasses import dataclass, field


def _wall_clock() -> int:
    return int(time.time())


@dataclass(frozen=True)
class RouterConfig:
    """Values fixed when the router is deployed.

    Attributes:
        address: The router's own account. Intermediate and native-unwrap
            outputs are sent here, and it is the spender of allowances.
        wrapped_native: Token identifier of the wrapped native asset.
        clock: Returns "now" in the same units as operation deadlines
            (unix seconds by default).
    """

    address: str
    wrapped_native: str
    clock: Callable[[], int] = field(default=_wall_clock, compare=False)


def _env_bool(name: str, default: str) -> bool:
    return os.environ.get(name, default).lower() in ("true", "1", "yes")


@dataclass(frozen=True)
class ApiSettings:
    """Quoting service settings, read from ROUTER_* environment variables.

    Attributes:
        host: Interface to bind (ROUTER_HOST, default 0.0.0.0)
        port: Port to bind (ROUTER_PORT, default 8000)
        debug: Enable reload mode (ROUTER_DEBUG, default false)
        max_hops: Longest path accepted by the path endpoints (ROUTER_MAX_HOPS, default 4)
    """

    host: str = "0.0.0.0"
    port: int = 8000
    debug: bool = False
    max_hops: int = 4

    @classmethod
    def from_env(cls) -> ApiSettings:
        return cls(
            host=os.environ.get("ROUTER_HOST", "0.0.0.0"),
            port=int(os.environ.get("ROUTER_PORT", "8000")),
            debug=_env_bool("ROUTER_DEBUG", "false"),
            max_hops=int(os.environ.get("ROUTER_MAX_HOPS", "4")),
        )
