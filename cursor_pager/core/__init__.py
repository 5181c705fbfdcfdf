"""Core building blocks: exceptions and settings."""

from cursor_pager.core.exceptions import (
    InvalidCursor,
    InvalidCursorError,
    PaginationError,
    ParameterError,
)

__all__ = [
    "InvalidCursor",
    "InvalidCursorError",
    "PaginationError",
    "ParameterError",
]
