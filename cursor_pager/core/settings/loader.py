"""Process-wide settings access.

Settings are built from the environment on first use and cached. Callers
that need different values either pass a ``PaginationSettings`` instance
to the paginator directly or replace the shared instance with
``configure_pagination``.
"""

from __future__ import annotations

import logging
import threading
from functools import lru_cache
from typing import Any

from .pagination import PaginationSettings

logger = logging.getLogger(__name__)

_lock = threading.Lock()
_override: PaginationSettings | None = None


@lru_cache(maxsize=1)
def _load_pagination_settings() -> PaginationSettings:
    return PaginationSettings()


def get_pagination_settings() -> PaginationSettings:
    """Get the process-wide pagination settings.

    Returns:
        Validated and frozen PaginationSettings instance.
    """
    with _lock:
        if _override is not None:
            return _override
    return _load_pagination_settings()


def configure_pagination(**overrides: Any) -> PaginationSettings:
    """Replace the process-wide settings with a copy carrying ``overrides``.

    Args:
        **overrides: Field values, e.g. ``default_page_size=25``.

    Returns:
        The new settings instance.

    Raises:
        pydantic.ValidationError: If an override is invalid.

    Example:
        configure_pagination(max_page_size=100)
    """
    global _override

    current = get_pagination_settings()
    settings = PaginationSettings(**{**current.model_dump(), **overrides})
    with _lock:
        _override = settings
    logger.debug("Pagination settings configured: %s", settings.model_dump())
    return settings


def reset_pagination_settings() -> None:
    """Restore the defaults, dropping overrides and the cached environment read."""
    global _override

    with _lock:
        _override = None
    _load_pagination_settings.cache_clear()


__all__ = [
    "configure_pagination",
    "get_pagination_settings",
    "reset_pagination_settings",
]
