"""Pytest configuration and fixtures."""

import pytest

from amm_router import Router
from amm_router.pools.book import ReserveBook
from tests.helpers import ALICE, NOW, TOKEN_A, TOKEN_B, TOKEN_C, TOKEN_D, Chain
from tests.helpers.factories import make_pool_state


@pytest.fixture
def chain() -> Chain:
    """A fresh simulated chain with a router deployed on it."""
    return Chain(now=NOW)


@pytest.fixture
def router(chain: Chain) -> Router:
    return chain.router


@pytest.fixture
def deadline() -> int:
    """A deadline comfortably in the future of the simulated clock."""
    return NOW + 600


@pytest.fixture
def funded_alice(chain: Chain) -> str:
    """ALICE with 1M of every test token approved for the router, and native value."""
    for token in (TOKEN_A, TOKEN_B, TOKEN_C, TOKEN_D):
        chain.fund(token, ALICE, 1_000_000)
        chain.approve(token, ALICE)
    chain.fund_native(ALICE, 1_000_000)
    return ALICE


@pytest.fixture
def chain_book() -> ReserveBook:
    """A-B-C-D chain of pools, each with reserves (1000, 1000)."""
    return ReserveBook(
        [
            make_pool_state(1, TOKEN_A, TOKEN_B, 1000, 1000),
            make_pool_state(2, TOKEN_B, TOKEN_C, 1000, 1000),
            make_pool_state(3, TOKEN_C, TOKEN_D, 1000, 1000),
        ]
    )
