"""Cursor-based pagination.

Cursor (keyset) pagination is:
- Stable: inserting or deleting records on visited pages doesn't shift results
- Performant: seeks on (order_field, primary_key) instead of OFFSET scans
- Bidirectional: first/after walks forward, last/before walks backward

Usage:
    from cursor_pager.pagination import paginate

    page = await paginate(source, first=20, order_by="author")
    for edge in page.page:
        print(edge.cursor, edge.data)

    if page.page_info.has_next_page:
        next_page = await paginate(
            source, first=20, order_by="author", after=page.page_info.end_cursor
        )

Cursors are opaque base64 strings that clients pass back unchanged. A cursor
is only valid for the `order_by` field it was issued for.
"""

from cursor_pager.pagination.params import PageRequest, SortDirection, validate_page_request
from cursor_pager.pagination.cursor import (
    CompoundCursor,
    Cursor,
    CursorCodec,
    SimpleCursor,
    TimestampCursorCodec,
)
from cursor_pager.pagination.direction import Comparison, ScanPlan, resolve_direction
from cursor_pager.pagination.schemas import Edge, Page, PageInfo
from cursor_pager.pagination.paginator import Paginator, paginate

__all__ = [
    "Comparison",
    "CompoundCursor",
    "Cursor",
    "CursorCodec",
    "Edge",
    "Page",
    "PageInfo",
    "PageRequest",
    "Paginator",
    "ScanPlan",
    "SimpleCursor",
    "SortDirection",
    "TimestampCursorCodec",
    "paginate",
    "resolve_direction",
    "validate_page_request",
]
