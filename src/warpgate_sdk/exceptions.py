"""Exception hierarchy for the Warpgate SDK."""

from __future__ import annotations

AUTH_REQUIRED_MESSAGE = "Authentication required. Please login first."


class WarpgateError(Exception):
    """Base class for every error raised by the SDK."""


class ValidationError(WarpgateError, ValueError):
    """Raised when an identifier or argument is malformed."""


class AuthRequiredError(WarpgateError):
    """Raised when an operation needs an auth token and none is set."""

    def __init__(self, message: str = AUTH_REQUIRED_MESSAGE):
        super().__init__(message)


class AuthenticationError(WarpgateError):
    """Raised when the wallet login flow fails.

    ``status_code`` is carried over from the failing backend call, if any.
    """

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class PoolStateError(WarpgateError):
    """Raised when the pool resource cannot be read from chain."""


class PricingError(WarpgateError, ArithmeticError):
    """Raised when curve math degenerates (empty pool, non-finite output)."""


class ApiError(WarpgateError):
    """Raised when the backend API call fails.

    ``status_code`` is ``None`` when no response was received.
    """

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code

    @property
    def is_unauthorized(self) -> bool:
        return self.status_code == 401


class ChainClientError(WarpgateError):
    """Raised when a fullnode request fails."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class TransactionTimeoutError(WarpgateError, TimeoutError):
    """Raised when a transaction is not confirmed within the polling budget."""

    def __init__(self, tx_hash: str, timeout_ms: int):
        super().__init__(
            f"Transaction {tx_hash} was not confirmed within {timeout_ms}ms timeout"
        )
        self.tx_hash = tx_hash
        self.timeout_ms = timeout_ms


class TradeExecutionError(WarpgateError):
    """Raised when a trade cannot be submitted to chain."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code
