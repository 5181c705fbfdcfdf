"""Pagination settings.

Controls the page size used when a request does not ask for one and the
optional hard cap applied to every request.

Environment variables use the CURSOR_PAGINATION_ prefix.
Example: CURSOR_PAGINATION_DEFAULT_PAGE_SIZE=25, CURSOR_PAGINATION_MAX_PAGE_SIZE=100
"""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class PaginationSettings(BaseSettings):
    """Cursor pagination configuration settings.

    Attributes:
        default_page_size: Page size when none of first/last/limit is given.
        max_page_size: Hard cap for any page size. Larger requests are
            silently reduced to this value. ``None`` disables the cap.

    Example:
        settings = PaginationSettings(default_page_size=25, max_page_size=100)
        paginator = Paginator(settings=settings)
    """

    default_page_size: int = Field(
        default=10,
        ge=0,
        description="Page size used when the request does not specify one",
    )
    max_page_size: int | None = Field(
        default=None,
        ge=1,
        description="Maximum allowed page size (None for no limit)",
    )

    model_config = SettingsConfigDict(
        env_prefix="CURSOR_PAGINATION_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        frozen=True,
        extra="ignore",
    )

    def clamp(self, page_size: int) -> int:
        """Reduce ``page_size`` to ``max_page_size`` when a cap is set."""
        if self.max_page_size is not None and page_size > self.max_page_size:
            return self.max_page_size
        return page_size
