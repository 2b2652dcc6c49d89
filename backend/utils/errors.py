"""
Error Types and Formatting Utilities

Service-layer exceptions and consistent error formatting for API responses
and logs. Every error subclasses ValueError, so callers that only need to
separate bad input from infrastructure failures can catch ValueError.
"""

from typing import Any


class BettingError(ValueError):
    """Base class for expected, non-retryable betting failures."""

    status_code = 400


class InvalidRequestError(BettingError):
    """Input is missing or malformed."""


class NotFoundError(BettingError):
    """A referenced user, hackathon or bet does not exist."""

    status_code = 404


class InsufficientBalanceError(BettingError):
    """The wallet cannot cover the requested stake."""

    def __init__(self, balance: int, requested: int):
        self.balance = balance
        self.requested = requested
        super().__init__(
            f"Insufficient balance: {balance} HC < {requested} HC"
        )


def format_api_error(exc: Exception) -> dict[str, Any]:
    """Convert an exception to an API error body."""
    body: dict[str, Any] = {"error": str(exc)}
    if isinstance(exc, InsufficientBalanceError):
        body["current_balance"] = exc.balance
    return body


def format_log_error(exc: Exception, **context: Any) -> dict[str, Any]:
    """Convert an exception to a structured log entry."""
    return {
        "error_type": type(exc).__name__,
        "error": str(exc),
        **context,
    }
