"""Pagination exceptions.

All errors raised by the paginator derive from :class:`PaginationError` so
callers can map them to a single "bad request" response. Errors coming from
the storage collaborator (connection failures, SQL errors) are never wrapped
and reach the caller unchanged.
"""

from __future__ import annotations

from typing import Any


class PaginationError(Exception):
    """Base exception for pagination failures.

    Attributes:
        message: Human-readable error description.
        details: Additional context about the error.
    """

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """Initialize pagination error.

        Args:
            message: Error description
            details: Additional context about the error
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        """Format error message with details."""
        if self.details:
            details_str = ", ".join(f"{k}={v!r}" for k, v in self.details.items())
            return f"{self.message} ({details_str})"
        return self.message

    def to_dict(self) -> dict[str, Any]:
        """Serialize to a plain dict (safe for logging and API error bodies)."""
        return {
            "type": self.type,
            "message": self.message,
            "details": self.details,
        }

    @property
    def type(self) -> str:
        return "pagination-error"


class InvalidArgumentError(PaginationError):
    """A pagination argument is out of range or inconsistent.

    Raised synchronously, before any query is issued, for example when
    ``first`` or ``last`` is negative.

    Attributes:
        argument: Name of the offending argument.
        value: The rejected value.
    """

    def __init__(self, argument: str, value: Any, reason: str) -> None:
        self.argument = argument
        self.value = value
        super().__init__(
            f"Invalid `{argument}` argument: {reason}",
            details={"argument": argument, "value": value},
        )

    @property
    def type(self) -> str:
        return "invalid-argument"

    def __repr__(self) -> str:
        return f"InvalidArgumentError(argument={self.argument!r}, value={self.value!r})"


class MalformedCursorError(PaginationError):
    """A ``before``/``after`` cursor could not be decoded.

    An unreadable cursor is an error, never equivalent to "no cursor".

    Attributes:
        cursor: The raw cursor string received from the client.
    """

    def __init__(self, cursor: str, reason: str) -> None:
        self.cursor = cursor
        super().__init__(f"Invalid cursor: {reason}", details={"cursor": cursor})

    @property
    def type(self) -> str:
        return "malformed-cursor"

    def __repr__(self) -> str:
        return f"MalformedCursorError(cursor={self.cursor!r})"


__all__ = [
    "InvalidArgumentError",
    "MalformedCursorError",
    "PaginationError",
]
