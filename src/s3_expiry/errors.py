"""Exception hierarchy for timestamp and expiration resolution."""
from __future__ import annotations

from typing import Any, Optional


class TimeInputError(ValueError):
    """Base exception for time inputs that cannot be classified.

    Carries the rejected value and, for string inputs, the parser error that
    caused the rejection.
    """

    def __init__(
        self,
        user_message: str,
        value: Any = None,
        wrapped: Optional[Exception] = None,
    ) -> None:
        super().__init__(user_message)
        self.user_message = user_message
        self.value = value
        self.wrapped = wrapped


class InvalidTimestamp(TimeInputError):
    """Raised when a number cannot be mapped to an absolute instant."""

    def __init__(self, value: Any = None, wrapped: Optional[Exception] = None) -> None:
        super().__init__("Invalid timestamp", value=value, wrapped=wrapped)


class InvalidExpiration(TimeInputError):
    """Raised when an expiration cannot be resolved to seconds from now."""

    def __init__(self, value: Any = None, wrapped: Optional[Exception] = None) -> None:
        super().__init__("Invalid expiration", value=value, wrapped=wrapped)


__all__ = ["TimeInputError", "InvalidTimestamp", "InvalidExpiration"]
