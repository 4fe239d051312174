"""Router error classes.

Two families:

- RouterError: the caller's request cannot be honoured (expired, bad path,
  slippage bound violated, empty pool). Each carries a stable ``code`` so
  callers and the HTTP layer can react to it.
- InvariantViolation: something that should be impossible happened
  (arithmetic overflow, a ratio that breaks monotonicity). Never handled
  inside the router; the whole operation is abandoned.
"""


class RouterError(Exception):
    """Base error for rejected router operations."""

    code = "ROUTER_ERROR"


class Expired(RouterError):
    """The caller-supplied deadline has passed."""

    code = "EXPIRED"


class InvalidPath(RouterError):
    """Path too short, or its endpoints do not match the operation."""

    code = "INVALID_PATH"


class PoolNotFound(InvalidPath):
    """Two adjacent path tokens have no pool."""

    code = "POOL_NOT_FOUND"


class IdenticalAddresses(RouterError):
    """A pair was requested for a token with itself."""

    code = "IDENTICAL_ADDRESSES"


class ZeroAddress(RouterError):
    """The zero address cannot be part of a pair."""

    code = "ZERO_ADDRESS"


class InsufficientAmount(RouterError):
    """A quote was requested for a zero amount."""

    code = "INSUFFICIENT_AMOUNT"


class InsufficientInputAmount(RouterError):
    """A swap was priced with a zero input."""

    code = "INSUFFICIENT_INPUT_AMOUNT"


class InsufficientOutputAmount(RouterError):
    """The swap would return less than the caller's minimum."""

    code = "INSUFFICIENT_OUTPUT_AMOUNT"


class ExcessiveInputAmount(RouterError):
    """The swap would cost more than the caller's maximum."""

    code = "EXCESSIVE_INPUT_AMOUNT"


class InsufficientLiquidity(RouterError):
    """A pool reserve is empty, or too small for the requested output."""

    code = "INSUFFICIENT_LIQUIDITY"


class SlippageExceeded(RouterError):
    """A liquidity amount fell below the caller's minimum for one side."""

    code = "SLIPPAGE_EXCEEDED"

    def __init__(self, side: str, amount: int, minimum: int) -> None:
        self.side = side
        self.amount = amount
        self.minimum = minimum
        super().__init__(f"Insufficient {side} amount: {amount} < {minimum}")


class InvariantViolation(Exception):
    """An internal invariant was broken. Not recoverable."""

    pass


__all__ = [
    "RouterError",
    "Expired",
    "InvalidPath",
    "PoolNotFound",
    "IdenticalAddresses",
    "ZeroAddress",
    "InsufficientAmount",
    "InsufficientInputAmount",
    "InsufficientOutputAmount",
    "ExcessiveInputAmount",
    "InsufficientLiquidity",
    "SlippageExceeded",
    "InvariantViolation",
]
