"""Test helpers module for shared test utilities.

- constants: Token and account identifiers
- chain: In-memory ledger, pools, registry and wrapped native for router tests
- factories: Reserve snapshot builders
"""

from tests.helpers.chain import Chain, Revert, SimLedger, SimPool, SimRegistry, sign_permit
from tests.helpers.constants import (
    ALICE,
    BOB,
    FOT,
    FOT_FEE_BPS,
    NOW,
    ROUTER,
    TOKEN_A,
    TOKEN_B,
    TOKEN_C,
    TOKEN_D,
    TOKEN_E,
    TOKEN_F,
    WETH,
)

__all__ = [
    # Constants
    "TOKEN_A",
    "TOKEN_B",
    "TOKEN_C",
    "TOKEN_D",
    "TOKEN_E",
    "TOKEN_F",
    "WETH",
    "FOT",
    "FOT_FEE_BPS",
    "ROUTER",
    "ALICE",
    "BOB",
    "NOW",
    # Simulation
    "Chain",
    "Revert",
    "SimLedger",
    "SimPool",
    "SimRegistry",
    "sign_permit",
]
