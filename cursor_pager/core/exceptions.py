"""Pagination exceptions.

Errors raised by the pagination core before any query executes. Failures
coming from the data source (unknown columns, connectivity problems, driver
errors) are not wrapped and propagate to the caller unchanged.

The errors below describe request-level problems, so an HTTP layer should
map them to a 4xx response:

    try:
        page = await paginate(source, first=first, after=after)
    except ParameterError as exc:
        raise HTTPException(status_code=exc.status_code, detail=str(exc))
"""

from __future__ import annotations

from typing import Any


class PaginationError(Exception):
    """Base exception for the pagination core.

    Attributes:
        message: Human-readable error description
        details: Additional context (offending parameters, raw cursor, ...)
    """

    status_code: int = 400

    def __init__(self, message: str, details: dict[str, Any] | None = None):
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


class ParameterError(PaginationError):
    """Invalid or contradictory pagination parameters.

    The ``details`` mapping always holds the offending parameter name(s)
    together with the value(s) received.

    Example:
        raise ParameterError(
            "`first` cannot be negative, but was `-7`",
            details={"first": -7},
        )
    """

    @property
    def parameters(self) -> tuple[str, ...]:
        """Names of the parameters that caused the error."""
        return tuple(self.details)


class InvalidCursorError(ParameterError):
    """Cursor token that cannot be decoded for the requested ordering.

    Attributes:
        cursor: The raw token exactly as received
    """

    def __init__(self, message: str, cursor: str):
        """Initialize invalid cursor error.

        Args:
            message: Error description
            cursor: The token that failed to decode
        """
        self.cursor = cursor
        super().__init__(message, details={"cursor": cursor})

    def __repr__(self) -> str:
        """Repr for debugging."""
        return f"InvalidCursorError(cursor={self.cursor!r})"


InvalidCursor = InvalidCursorError

__all__ = [
    "InvalidCursor",
    "InvalidCursorError",
    "PaginationError",
    "ParameterError",
]
