"""Error types for the Coinbase Advanced Trade REST client."""

from dataclasses import dataclass
from typing import Optional


class CoinbaseTradeError(Exception):
    """Base exception for every error raised by this package."""

    pass


class ConfigurationError(CoinbaseTradeError):
    """The client or a paginated list was set up inconsistently."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(f"Configuration error: {message}")


class EncodingError(CoinbaseTradeError):
    """Query parameters could not be encoded."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(f"Encoding error: {message}")


class InvalidParameterError(CoinbaseTradeError):
    """Invalid parameter provided."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(f"Invalid parameter: {message}")


class TransportError(CoinbaseTradeError):
    """The HTTP exchange could not be completed (DNS, connect, timeout, read)."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(f"HTTP error: {message}")


class DecodeError(CoinbaseTradeError):
    """A successful response could not be decoded."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(f"Decode error: {message}")


class ApiError(CoinbaseTradeError):
    """The server answered with an error.

    ``message`` holds the server-supplied text unchanged, ``details`` the
    optional longer explanation some endpoints add.
    """

    prefix = "API error"

    def __init__(self, status: int, message: str, details: Optional[str] = None):
        self.status = status
        self.message = message
        self.details = details
        super().__init__(f"{self.prefix}: {message}")


class BadRequestError(ApiError):
    """Invalid request parameters (400)."""

    prefix = "Bad request"


class UnauthorizedError(ApiError):
    """Missing or invalid credentials (401)."""

    prefix = "Unauthorized"


class ForbiddenError(ApiError):
    """Permission denied (403)."""

    prefix = "Permission denied"


class NotFoundError(ApiError):
    """Resource not found (404)."""

    prefix = "Not found"


class RateLimitedError(ApiError):
    """Too many requests (429)."""

    prefix = "Rate limited"


class ServerError(ApiError):
    """Server-side error (5xx)."""

    prefix = "Server error"


class UnexpectedStatusError(ApiError):
    """Unexpected HTTP status code."""

    def __init__(self, status: int, message: str, details: Optional[str] = None):
        self.prefix = f"Unexpected status {status}"
        super().__init__(status, message, details)


class OrderRejectedError(ApiError):
    """Order placement was refused by the exchange.

    ``reason`` is a :class:`~coinbase_trade.api.types.order.CreateOrderFailureReason`.
    """

    prefix = "Order rejected"

    def __init__(self, reason, details: Optional[str] = None):
        self.reason = reason
        super().__init__(200, details or str(reason.value), details)


class CancelOrdersError(ApiError):
    """One or more orders in a batch cancel were not cancelled.

    ``failures`` maps each failed order id to its
    :class:`~coinbase_trade.api.types.order.CancelOrderFailureReason`.
    """

    prefix = "Cancel failed"

    def __init__(self, failures: dict, cancelled: Optional[list] = None):
        self.failures = failures
        self.cancelled = cancelled or []
        super().__init__(
            200,
            "one or more orders were not cancelled successfully",
            ", ".join(f"{k}: {v.value}" for k, v in failures.items()),
        )


def error_for_status(status: int, message: str, details: Optional[str] = None) -> ApiError:
    """Map an HTTP status code to the matching ApiError subclass."""
    if status == 400:
        return BadRequestError(status, message, details)
    elif status == 401:
        return UnauthorizedError(status, message, details)
    elif status == 403:
        return ForbiddenError(status, message, details)
    elif status == 404:
        return NotFoundError(status, message, details)
    elif status == 429:
        return RateLimitedError(status, message, details)
    elif status >= 500:
        return ServerError(status, message, details)
    else:
        return UnexpectedStatusError(status, message, details)


@dataclass
class ErrorResponse:
    """Error envelope returned by the API.

    Most endpoints answer ``{"message": ...}``; order endpoints use
    ``{"error": ..., "error_details": ...}``.
    """

    message: Optional[str] = None
    error: Optional[str] = None
    details: Optional[str] = None

    def get_message(self) -> Optional[str]:
        """Get the error message, preferring message over details."""
        return self.message or self.details or self.error

    @classmethod
    def from_dict(cls, data: dict) -> "ErrorResponse":
        """Create from dictionary."""
        if not isinstance(data, dict):
            raise ValueError("error envelope is not an object")
        message = data.get("message")
        if message is not None and not isinstance(message, str):
            raise ValueError("message is not a string")
        return cls(
            message=message,
            error=data.get("error"),
            details=data.get("error_details") or data.get("details"),
        )
