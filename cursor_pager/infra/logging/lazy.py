"""Lazily evaluated log messages.

Pagination debug lines summarise decoded cursors, row counts and flags.
Building those strings on every request is wasted work when DEBUG is off,
so messages and format arguments may be passed as zero-argument callables
that only run when the record is actually emitted.
"""

from __future__ import annotations

import logging
from typing import Any


class LazyLoggerAdapter(logging.LoggerAdapter):
    """Logger adapter that evaluates callable messages on demand.

    Example:
        ```python
        logger = get_lazy_logger("cursor_pager.paginator")
        logger.debug(lambda: f"decoded cursor {cursor!r}")
        logger.debug("rows=%s", lambda: len(rows))
        ```
    """

    def log(
        self,
        level: int,
        msg: Any,
        *args: Any,
        **kwargs: Any,
    ) -> None:
        """Log ``msg`` at ``level``, resolving callables first.

        Args:
            level: Numeric log level (e.g., logging.DEBUG).
            msg: Log message or callable returning it.
            *args: Format arguments, each possibly a callable.
            **kwargs: Additional kwargs for logging.
        """
        if not self.isEnabledFor(level):
            return

        if callable(msg):
            msg = msg()
        if args:
            args = tuple(arg() if callable(arg) else arg for arg in args)

        super().log(level, msg, *args, **kwargs)

    def debug(self, msg: Any, *args: Any, **kwargs: Any) -> None:
        self.log(logging.DEBUG, msg, *args, **kwargs)

    def info(self, msg: Any, *args: Any, **kwargs: Any) -> None:
        self.log(logging.INFO, msg, *args, **kwargs)

    def warning(self, msg: Any, *args: Any, **kwargs: Any) -> None:
        self.log(logging.WARNING, msg, *args, **kwargs)


def get_lazy_logger(name: str, **context: Any) -> LazyLoggerAdapter:
    """Get a logger that accepts callables as messages.

    Args:
        name: Logger name (usually __name__).
        **context: Extra values bound to every record.

    Returns:
        Logger adapter with lazy evaluation support.
    """
    return LazyLoggerAdapter(logging.getLogger(name), context or {})


__all__ = ["LazyLoggerAdapter", "get_lazy_logger"]
