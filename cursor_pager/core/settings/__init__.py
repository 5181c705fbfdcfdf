"""Pydantic Settings v2 configuration.

Import settings via the loaders:
    from cursor_pager.core.settings import get_pagination_settings

Configuration precedence (highest to lowest):
    1. configure_pagination() overrides / init kwargs
    2. Environment variables (CURSOR_PAGINATION_*)
    3. .env file
"""

from __future__ import annotations

from .loader import (
    configure_pagination,
    get_pagination_settings,
    reset_pagination_settings,
)
from .pagination import PaginationSettings

__all__ = [
    "PaginationSettings",
    "configure_pagination",
    "get_pagination_settings",
    "reset_pagination_settings",
]
