"""Cursor-based pagination for SQLAlchemy select statements.

Example:
    from sqlalchemy import select

    from cursor_pager import SelectSource, paginate

    page = await paginate(SelectSource(session, select(Post)), first=2)
    page.page_info.has_next_page
"""

from cursor_pager.core.exceptions import (
    InvalidCursor,
    InvalidCursorError,
    PaginationError,
    ParameterError,
)
from cursor_pager.core.settings import (
    PaginationSettings,
    configure_pagination,
    get_pagination_settings,
    reset_pagination_settings,
)
from cursor_pager.pagination import (
    CompoundCursor,
    Cursor,
    CursorCodec,
    Edge,
    Page,
    PageInfo,
    PageRequest,
    Paginator,
    SimpleCursor,
    SortDirection,
    TimestampCursorCodec,
    paginate,
)
from cursor_pager.database import DataSource, SeekCondition, SelectSource

__version__ = "0.1.0"

__all__ = [
    "CompoundCursor",
    "Cursor",
    "CursorCodec",
    "DataSource",
    "Edge",
    "InvalidCursor",
    "InvalidCursorError",
    "Page",
    "PageInfo",
    "PageRequest",
    "PaginationError",
    "PaginationSettings",
    "Paginator",
    "ParameterError",
    "SeekCondition",
    "SelectSource",
    "SimpleCursor",
    "SortDirection",
    "TimestampCursorCodec",
    "configure_pagination",
    "get_pagination_settings",
    "paginate",
    "reset_pagination_settings",
]
