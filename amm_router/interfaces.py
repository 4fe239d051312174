"""Capabilities the router consumes but does not implement.

The router only calls these. Reserve bookkeeping, share minting, pool
creation and token movement all live behind them, and every method must
raise on failure rather than silently doing nothing.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class Pool(Protocol):
    """A constant-product pool; also the ledger asset of its own LP shares."""

    address: str
    token0: str
    token1: str

    def get_reserves(self) -> tuple[int, int, int]:
        """Return (reserve0, reserve1, last_update_timestamp)."""
        ...

    def swap(self, amount0_out: int, amount1_out: int, to: str, data: bytes) -> None:
        """Send the requested outputs to ``to``.

        The input must already sit in the pool's balance. The pool itself
        enforces its invariant and rejects the call if it would decrease k.
        """
        ...

    def mint(self, to: str) -> int:
        """Mint LP shares for the tokens transferred in since the last sync."""
        ...

    def burn(self, to: str) -> tuple[int, int]:
        """Burn the LP shares held by the pool, returning (amount0, amount1)."""
        ...

    def permit(
        self,
        owner: str,
        spender: str,
        value: int,
        deadline: int,
        signature: bytes,
    ) -> None:
        """Turn a signed authorization into a standing LP-share allowance."""
        ...


@runtime_checkable
class PoolRegistry(Protocol):
    """Lookup and creation of pools by token pair (order independent)."""

    def get_pool(self, token_a: str, token_b: str) -> Pool | None:
        ...

    def create_pool(self, token_a: str, token_b: str) -> Pool:
        ...


@runtime_checkable
class AssetLedger(Protocol):
    """Fungible token balances and movements.

    Transfers are issued by the router's own account. ``transfer_from``
    spends an allowance the owner granted to that account.
    """

    def transfer(self, token: str, to: str, amount: int) -> None:
        ...

    def transfer_from(self, token: str, owner: str, to: str, amount: int) -> None:
        ...

    def balance_of(self, token: str, account: str) -> int:
        ...


@runtime_checkable
class NativeAdapter(Protocol):
    """Wraps and unwraps the chain's native asset for the router's account."""

    token: str

    def wrap(self, amount: int) -> None:
        """Convert native value held by the router into wrapped tokens."""
        ...

    def unwrap(self, amount: int) -> None:
        """Convert wrapped tokens held by the router back into native value."""
        ...

    def send_native(self, to: str, amount: int) -> None:
        """Send raw native value from the router to ``to``."""
        ...


__all__ = ["Pool", "PoolRegistry", "AssetLedger", "NativeAdapter"]
