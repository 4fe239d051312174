"""Public router: liquidity and swap operations across constant-product pools.

Every state-changing operation checks its deadline first, computes amounts,
validates them against the caller's bounds, and only then issues calls to
the pools, the asset ledger and the native adapter, strictly in path order.
The router keeps no state between calls and never compensates for a
failure part-way: the hosting environment discards the whole operation.

Native value attached to a call (``value``) is assumed to have been
credited to the router's account by the host before the call runs.
"""

from __future__ import annotations

import structlog

from amm_router.amm.constant_product import constant_product
from amm_router.config import RouterConfig
from amm_router.constants import MAX_UINT256
from amm_router.deadline import ensure_not_expired
from amm_router.errors import (
    ExcessiveInputAmount,
    InsufficientOutputAmount,
    InvalidPath,
    SlippageExceeded,
)
from amm_router.execution import SwapExecutor
from amm_router.interfaces import AssetLedger, NativeAdapter, PoolRegistry
from amm_router.liquidity import LiquidityQuote, choose_liquidity_amounts
from amm_router.models.types import PoolKey, normalize_address
from amm_router.routing.amounts import PathQuoter, validate_path
from amm_router.routing.reserves import RegistryReserves
from amm_router.safe_int import S

logger = structlog.get_logger()


class Router:
    """Stateless router over a pool registry, an asset ledger and a native adapter."""

    def __init__(
        self,
        config: RouterConfig,
        registry: PoolRegistry,
        ledger: AssetLedger,
        native: NativeAdapter,
    ) -> None:
        self.config = config
        self.registry = registry
        self.ledger = ledger
        self.native = native
        self.pools = RegistryReserves(registry)
        self.quoter = PathQuoter(self.pools)
        self.executor = SwapExecutor(self.pools, ledger)

    @property
    def address(self) -> str:
        return self.config.address

    @property
    def wrapped_native(self) -> str:
        return self.config.wrapped_native

    def _ensure(self, deadline: int) -> None:
        ensure_not_expired(deadline, self.config.clock)

    def _require_native_start(self, path: list[str]) -> None:
        validate_path(path)
        if normalize_address(path[0]) != normalize_address(self.wrapped_native):
            raise InvalidPath(f"Path must start with wrapped native, got {path[0]}")

    def _require_native_end(self, path: list[str]) -> None:
        validate_path(path)
        if normalize_address(path[-1]) != normalize_address(self.wrapped_native):
            raise InvalidPath(f"Path must end with wrapped native, got {path[-1]}")

    def _first_pool(self, path: list[str]) -> str:
        return self.pools.pool_for(path[0], path[1]).address

    # --- Add liquidity ---

    def _add_liquidity(
        self,
        token_a: str,
        token_b: str,
        amount_a_desired: int,
        amount_b_desired: int,
        amount_a_min: int,
        amount_b_min: int,
    ) -> LiquidityQuote:
        if self.registry.get_pool(token_a, token_b) is None:
            pool = self.registry.create_pool(token_a, token_b)
            logger.info(
                "pool_created",
                pool=pool.address[-8:],
                token_a=token_a[-8:],
                token_b=token_b[-8:],
            )
        reserve_a, reserve_b = self.pools.get_reserves(token_a, token_b)
        return choose_liquidity_amounts(
            amount_a_desired,
            amount_b_desired,
            amount_a_min,
            amount_b_min,
            reserve_a,
            reserve_b,
        )

    def add_liquidity(
        self,
        token_a: str,
        token_b: str,
        amount_a_desired: int,
        amount_b_desired: int,
        amount_a_min: int,
        amount_b_min: int,
        to: str,
        deadline: int,
        *,
        sender: str,
    ) -> tuple[int, int, int]:
        """Deposit both tokens at the pool ratio, creating the pool if needed.

        Returns:
            (amount_a, amount_b, liquidity) actually deposited and minted to ``to``
        """
        self._ensure(deadline)
        deposit = self._add_liquidity(
            token_a, token_b, amount_a_desired, amount_b_desired, amount_a_min, amount_b_min
        )
        pool = self.pools.pool_for(token_a, token_b)
        self.ledger.transfer_from(token_a, sender, pool.address, deposit.amount_a)
        self.ledger.transfer_from(token_b, sender, pool.address, deposit.amount_b)
        liquidity = pool.mint(to)

        logger.info(
            "liquidity_added",
            pool=pool.address[-8:],
            amount_a=deposit.amount_a,
            amount_b=deposit.amount_b,
            liquidity=liquidity,
        )
        return deposit.amount_a, deposit.amount_b, liquidity

    def add_liquidity_native(
        self,
        token: str,
        amount_token_desired: int,
        amount_token_min: int,
        amount_native_min: int,
        to: str,
        deadline: int,
        *,
        sender: str,
        value: int,
    ) -> tuple[int, int, int]:
        """Deposit a token against attached native value; unused native is refunded.

        Returns:
            (amount_token, amount_native, liquidity)
        """
        self._ensure(deadline)
        deposit = self._add_liquidity(
            token,
            self.wrapped_native,
            amount_token_desired,
            value,
            amount_token_min,
            amount_native_min,
        )
        amount_token, amount_native = deposit.amount_a, deposit.amount_b
        pool = self.pools.pool_for(token, self.wrapped_native)
        self.ledger.transfer_from(token, sender, pool.address, amount_token)
        self.native.wrap(amount_native)
        self.ledger.transfer(self.wrapped_native, pool.address, amount_native)
        liquidity = pool.mint(to)

        refund = (S(value) - S(amount_native)).value
        if refund > 0:
            self.native.send_native(sender, refund)

        logger.info(
            "liquidity_added",
            pool=pool.address[-8:],
            amount_a=amount_token,
            amount_b=amount_native,
            liquidity=liquidity,
            native_refund=refund,
        )
        return amount_token, amount_native, liquidity

    # --- Remove liquidity ---

    def _remove_liquidity(
        self,
        token_a: str,
        token_b: str,
        liquidity: int,
        amount_a_min: int,
        amount_b_min: int,
        to: str,
        sender: str,
    ) -> tuple[int, int]:
        pool = self.pools.pool_for(token_a, token_b)
        self.ledger.transfer_from(pool.address, sender, pool.address, liquidity)
        amount0, amount1 = pool.burn(to)
        amount_a, amount_b = PoolKey.of(token_a, token_b).order(token_a, amount0, amount1)
        if amount_a < amount_a_min:
            raise SlippageExceeded("A", amount_a, amount_a_min)
        if amount_b < amount_b_min:
            raise SlippageExceeded("B", amount_b, amount_b_min)

        logger.info(
            "liquidity_removed",
            pool=pool.address[-8:],
            liquidity=liquidity,
            amount_a=amount_a,
            amount_b=amount_b,
        )
        return amount_a, amount_b

    def _remove_liquidity_native(
        self,
        token: str,
        liquidity: int,
        amount_token_min: int,
        amount_native_min: int,
        to: str,
        sender: str,
    ) -> tuple[int, int]:
        amount_token, amount_native = self._remove_liquidity(
            token,
            self.wrapped_native,
            liquidity,
            amount_token_min,
            amount_native_min,
            self.address,
            sender,
        )
        self.ledger.transfer(token, to, amount_token)
        self.native.unwrap(amount_native)
        self.native.send_native(to, amount_native)
        return amount_token, amount_native

    def _remove_liquidity_native_fee_on_transfer(
        self,
        token: str,
        liquidity: int,
        amount_token_min: int,
        amount_native_min: int,
        to: str,
        sender: str,
    ) -> int:
        _, amount_native = self._remove_liquidity(
            token,
            self.wrapped_native,
            liquidity,
            amount_token_min,
            amount_native_min,
            self.address,
            sender,
        )
        # The burn's reported token amount is before the token's own transfer fee
        amount_token = self.ledger.balance_of(token, self.address)
        self.ledger.transfer(token, to, amount_token)
        self.native.unwrap(amount_native)
        self.native.send_native(to, amount_native)
        return amount_native

    def _permit(
        self,
        token_a: str,
        token_b: str,
        liquidity: int,
        deadline: int,
        sender: str,
        approve_max: bool,
        signature: bytes,
    ) -> None:
        pool = self.pools.pool_for(token_a, token_b)
        value = MAX_UINT256 if approve_max else liquidity
        pool.permit(sender, self.address, value, deadline, signature)

    def remove_liquidity(
        self,
        token_a: str,
        token_b: str,
        liquidity: int,
        amount_a_min: int,
        amount_b_min: int,
        to: str,
        deadline: int,
        *,
        sender: str,
    ) -> tuple[int, int]:
        """Burn LP shares and send both tokens to ``to``.

        Returns:
            (amount_a, amount_b) in the caller's token order
        """
        self._ensure(deadline)
        return self._remove_liquidity(
            token_a, token_b, liquidity, amount_a_min, amount_b_min, to, sender
        )

    def remove_liquidity_native(
        self,
        token: str,
        liquidity: int,
        amount_token_min: int,
        amount_native_min: int,
        to: str,
        deadline: int,
        *,
        sender: str,
    ) -> tuple[int, int]:
        """Burn LP shares of a token/wrapped-native pool, paying the native side unwrapped."""
        self._ensure(deadline)
        return self._remove_liquidity_native(
            token, liquidity, amount_token_min, amount_native_min, to, sender
        )

    def remove_liquidity_with_permit(
        self,
        token_a: str,
        token_b: str,
        liquidity: int,
        amount_a_min: int,
        amount_b_min: int,
        to: str,
        deadline: int,
        *,
        sender: str,
        approve_max: bool,
        signature: bytes,
    ) -> tuple[int, int]:
        """remove_liquidity, authorized by a signed permit instead of a prior approval."""
        self._ensure(deadline)
        self._permit(token_a, token_b, liquidity, deadline, sender, approve_max, signature)
        return self._remove_liquidity(
            token_a, token_b, liquidity, amount_a_min, amount_b_min, to, sender
        )

    def remove_liquidity_native_with_permit(
        self,
        token: str,
        liquidity: int,
        amount_token_min: int,
        amount_native_min: int,
        to: str,
        deadline: int,
        *,
        sender: str,
        approve_max: bool,
        signature: bytes,
    ) -> tuple[int, int]:
        self._ensure(deadline)
        self._permit(
            token, self.wrapped_native, liquidity, deadline, sender, approve_max, signature
        )
        return self._remove_liquidity_native(
            token, liquidity, amount_token_min, amount_native_min, to, sender
        )

    def remove_liquidity_native_supporting_fee_on_transfer(
        self,
        token: str,
        liquidity: int,
        amount_token_min: int,
        amount_native_min: int,
        to: str,
        deadline: int,
        *,
        sender: str,
    ) -> int:
        """remove_liquidity_native for tokens that take a fee on transfer.

        Forwards whatever token balance the router actually received.

        Returns:
            Native amount sent to ``to``
        """
        self._ensure(deadline)
        return self._remove_liquidity_native_fee_on_transfer(
            token, liquidity, amount_token_min, amount_native_min, to, sender
        )

    def remove_liquidity_native_with_permit_supporting_fee_on_transfer(
        self,
        token: str,
        liquidity: int,
        amount_token_min: int,
        amount_native_min: int,
        to: str,
        deadline: int,
        *,
        sender: str,
        approve_max: bool,
        signature: bytes,
    ) -> int:
        self._ensure(deadline)
        self._permit(
            token, self.wrapped_native, liquidity, deadline, sender, approve_max, signature
        )
        return self._remove_liquidity_native_fee_on_transfer(
            token, liquidity, amount_token_min, amount_native_min, to, sender
        )

    # --- Swaps ---

    def _log_swap(
        self, kind: str, path: list[str], amount_in: int, amount_out: int, to: str
    ) -> None:
        logger.info(
            "swap_executed",
            kind=kind,
            hops=len(path) - 1,
            amount_in=amount_in,
            amount_out=amount_out,
            to=to[-8:],
        )

    def swap_exact_tokens_for_tokens(
        self,
        amount_in: int,
        amount_out_min: int,
        path: list[str],
        to: str,
        deadline: int,
        *,
        sender: str,
    ) -> list[int]:
        """Sell exactly ``amount_in`` of path[0] for at least ``amount_out_min`` of path[-1].

        Returns:
            The amount vector along the path
        """
        self._ensure(deadline)
        amounts = self.quoter.get_amounts_out(amount_in, path)
        if amounts[-1] < amount_out_min:
            raise InsufficientOutputAmount(f"Output {amounts[-1]} below minimum {amount_out_min}")
        self.ledger.transfer_from(path[0], sender, self._first_pool(path), amounts[0])
        self.executor.execute(amounts, path, to)
        self._log_swap("exact_in", path, amounts[0], amounts[-1], to)
        return amounts

    def swap_tokens_for_exact_tokens(
        self,
        amount_out: int,
        amount_in_max: int,
        path: list[str],
        to: str,
        deadline: int,
        *,
        sender: str,
    ) -> list[int]:
        """Buy exactly ``amount_out`` of path[-1] for at most ``amount_in_max`` of path[0]."""
        self._ensure(deadline)
        amounts = self.quoter.get_amounts_in(amount_out, path)
        if amounts[0] > amount_in_max:
            raise ExcessiveInputAmount(f"Input {amounts[0]} above maximum {amount_in_max}")
        self.ledger.transfer_from(path[0], sender, self._first_pool(path), amounts[0])
        self.executor.execute(amounts, path, to)
        self._log_swap("exact_out", path, amounts[0], amounts[-1], to)
        return amounts

    def swap_exact_native_for_tokens(
        self,
        amount_out_min: int,
        path: list[str],
        to: str,
        deadline: int,
        *,
        value: int,
    ) -> list[int]:
        """Sell all attached native value; path must start with the wrapped native token."""
        self._ensure(deadline)
        self._require_native_start(path)
        amounts = self.quoter.get_amounts_out(value, path)
        if amounts[-1] < amount_out_min:
            raise InsufficientOutputAmount(f"Output {amounts[-1]} below minimum {amount_out_min}")
        self.native.wrap(amounts[0])
        self.ledger.transfer(self.wrapped_native, self._first_pool(path), amounts[0])
        self.executor.execute(amounts, path, to)
        self._log_swap("exact_native_in", path, amounts[0], amounts[-1], to)
        return amounts

    def swap_tokens_for_exact_native(
        self,
        amount_out: int,
        amount_in_max: int,
        path: list[str],
        to: str,
        deadline: int,
        *,
        sender: str,
    ) -> list[int]:
        """Buy exactly ``amount_out`` native; path must end with the wrapped native token."""
        self._ensure(deadline)
        self._require_native_end(path)
        amounts = self.quoter.get_amounts_in(amount_out, path)
        if amounts[0] > amount_in_max:
            raise ExcessiveInputAmount(f"Input {amounts[0]} above maximum {amount_in_max}")
        self.ledger.transfer_from(path[0], sender, self._first_pool(path), amounts[0])
        self.executor.execute(amounts, path, self.address)
        self.native.unwrap(amounts[-1])
        self.native.send_native(to, amounts[-1])
        self._log_swap("exact_native_out", path, amounts[0], amounts[-1], to)
        return amounts

    def swap_exact_tokens_for_native(
        self,
        amount_in: int,
        amount_out_min: int,
        path: list[str],
        to: str,
        deadline: int,
        *,
        sender: str,
    ) -> list[int]:
        """Sell exactly ``amount_in`` of path[0] for native value."""
        self._ensure(deadline)
        self._require_native_end(path)
        amounts = self.quoter.get_amounts_out(amount_in, path)
        if amounts[-1] < amount_out_min:
            raise InsufficientOutputAmount(f"Output {amounts[-1]} below minimum {amount_out_min}")
        self.ledger.transfer_from(path[0], sender, self._first_pool(path), amounts[0])
        self.executor.execute(amounts, path, self.address)
        self.native.unwrap(amounts[-1])
        self.native.send_native(to, amounts[-1])
        self._log_swap("exact_in_native_out", path, amounts[0], amounts[-1], to)
        return amounts

    def swap_native_for_exact_tokens(
        self,
        amount_out: int,
        path: list[str],
        to: str,
        deadline: int,
        *,
        sender: str,
        value: int,
    ) -> list[int]:
        """Buy exactly ``amount_out`` of path[-1] with attached native; the rest is refunded."""
        self._ensure(deadline)
        self._require_native_start(path)
        amounts = self.quoter.get_amounts_in(amount_out, path)
        if amounts[0] > value:
            raise ExcessiveInputAmount(f"Input {amounts[0]} above attached value {value}")
        self.native.wrap(amounts[0])
        self.ledger.transfer(self.wrapped_native, self._first_pool(path), amounts[0])
        self.executor.execute(amounts, path, to)

        refund = (S(value) - S(amounts[0])).value
        if refund > 0:
            self.native.send_native(sender, refund)
        self._log_swap("native_in_exact_out", path, amounts[0], amounts[-1], to)
        return amounts

    # --- Fee-on-transfer swaps ---

    def _received_since(self, token: str, to: str, balance_before: int, amount_out_min: int) -> int:
        received = (S(self.ledger.balance_of(token, to)) - S(balance_before)).value
        if received < amount_out_min:
            raise InsufficientOutputAmount(f"Received {received} below minimum {amount_out_min}")
        return received

    def swap_exact_tokens_for_tokens_supporting_fee_on_transfer(
        self,
        amount_in: int,
        amount_out_min: int,
        path: list[str],
        to: str,
        deadline: int,
        *,
        sender: str,
    ) -> int:
        """Exact-input swap tolerant of tokens that take a fee on transfer.

        The minimum is checked against what ``to`` actually received.

        Returns:
            Amount of path[-1] received by ``to``
        """
        self._ensure(deadline)
        validate_path(path)
        self.ledger.transfer_from(path[0], sender, self._first_pool(path), amount_in)
        balance_before = self.ledger.balance_of(path[-1], to)
        self.executor.execute_supporting_fee_on_transfer(path, to)
        received = self._received_since(path[-1], to, balance_before, amount_out_min)
        self._log_swap("exact_in_fee_on_transfer", path, amount_in, received, to)
        return received

    def swap_exact_native_for_tokens_supporting_fee_on_transfer(
        self,
        amount_out_min: int,
        path: list[str],
        to: str,
        deadline: int,
        *,
        value: int,
    ) -> int:
        self._ensure(deadline)
        self._require_native_start(path)
        self.native.wrap(value)
        self.ledger.transfer(self.wrapped_native, self._first_pool(path), value)
        balance_before = self.ledger.balance_of(path[-1], to)
        self.executor.execute_supporting_fee_on_transfer(path, to)
        received = self._received_since(path[-1], to, balance_before, amount_out_min)
        self._log_swap("exact_native_in_fee_on_transfer", path, value, received, to)
        return received

    def swap_exact_tokens_for_native_supporting_fee_on_transfer(
        self,
        amount_in: int,
        amount_out_min: int,
        path: list[str],
        to: str,
        deadline: int,
        *,
        sender: str,
    ) -> int:
        self._ensure(deadline)
        self._require_native_end(path)
        self.ledger.transfer_from(path[0], sender, self._first_pool(path), amount_in)
        self.executor.execute_supporting_fee_on_transfer(path, self.address)
        amount_out = self.ledger.balance_of(self.wrapped_native, self.address)
        if amount_out < amount_out_min:
            raise InsufficientOutputAmount(f"Output {amount_out} below minimum {amount_out_min}")
        self.native.unwrap(amount_out)
        self.native.send_native(to, amount_out)
        self._log_swap("exact_in_native_out_fee_on_transfer", path, amount_in, amount_out, to)
        return amount_out

    # --- Read-only helpers ---

    def quote(self, amount_a: int, reserve_a: int, reserve_b: int) -> int:
        return constant_product.quote(amount_a, reserve_a, reserve_b)

    def get_amount_out(self, amount_in: int, reserve_in: int, reserve_out: int) -> int:
        return constant_product.get_amount_out(amount_in, reserve_in, reserve_out)

    def get_amount_in(self, amount_out: int, reserve_in: int, reserve_out: int) -> int:
        return constant_product.get_amount_in(amount_out, reserve_in, reserve_out)

    def get_amounts_out(self, amount_in: int, path: list[str]) -> list[int]:
        return self.quoter.get_amounts_out(amount_in, path)

    def get_amounts_in(self, amount_out: int, path: list[str]) -> list[int]:
        return self.quoter.get_amounts_in(amount_out, path)


__all__ = ["Router"]
