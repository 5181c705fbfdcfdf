"""Cursor pagination engine.

Runs one pagination request against a ``DataSource``:

1. Validate the request and resolve the page size (default, then the cap).
2. Decode the incoming cursor, if any, for the requested order field.
3. Order by ``(order_field, primary_key)`` in the physical scan direction
   and seek past the cursor.
4. Fetch ``page_size + 1`` rows. The extra row only tells whether more
   records lie further in the scan direction; it is never returned.
5. Restore the requested order for backward pages and attach cursors.

Records on the other side of the cursor exist when the seek dropped
anything, i.e. when the filtered count is below the unfiltered one. That
unfiltered count doubles as ``total`` so it is queried at most once.

Example:
    paginator = Paginator()
    page = await paginator.fetch(PageRequest(first=2, order_by="author"), source)
    page.page_info.end_cursor   # "WyJKYW5lIiw0XQ==" -> ["Jane", 4]
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from cursor_pager.core.settings import PaginationSettings, get_pagination_settings
from cursor_pager.database.source import SeekCondition
from cursor_pager.infra.logging import get_lazy_logger
from cursor_pager.pagination.cursor import CursorCodec
from cursor_pager.pagination.direction import resolve_direction
from cursor_pager.pagination.params import PageRequest, SortDirection, validate_page_request
from cursor_pager.pagination.schemas import Page, PageInfo

if TYPE_CHECKING:
    from cursor_pager.database.source import DataSource
    from cursor_pager.pagination.cursor import Cursor

_lazy = get_lazy_logger(__name__)


class Paginator:
    """Execute cursor-paginated requests.

    A paginator holds no per-request state and can be shared between
    concurrent requests.

    Attributes:
        settings: Fixed settings, or ``None`` to read the process-wide
            settings at the start of every fetch
        codec: Cursor codec (``TimestampCursorCodec`` for datetime ordering)
    """

    __slots__ = ("codec", "settings")

    def __init__(
        self,
        *,
        settings: PaginationSettings | None = None,
        codec: CursorCodec | None = None,
    ) -> None:
        self.settings = settings
        self.codec = codec or CursorCodec()

    def resolve_page_size(self, request: PageRequest, settings: PaginationSettings) -> int:
        """Requested size (or the default), reduced to the configured maximum."""
        size = request.requested_size
        if size is None:
            size = settings.default_page_size
        return settings.clamp(size)

    async def fetch(
        self,
        request: PageRequest,
        source: DataSource,
        *,
        with_total: bool = False,
    ) -> Page[Any]:
        """Fetch one page.

        Args:
            request: Pagination parameters
            source: Collection to paginate, already filtered by the caller
            with_total: Also count all records of ``source``

        Returns:
            Page with edges, page info and optionally the total

        Raises:
            ParameterError: If the request parameters are invalid
            InvalidCursorError: If the cursor can't be decoded for ``order_by``
        """
        validate_page_request(request)
        settings = self.settings if self.settings is not None else get_pagination_settings()
        page_size = self.resolve_page_size(request, settings)

        primary_key = source.primary_key
        order_field = request.order_by or primary_key
        order = request.sort_direction
        is_forward = request.is_forward

        cursor: Cursor | None = None
        if request.cursor_token is not None:
            cursor = self.codec.decode(
                request.cursor_token,
                order_field=order_field,
                primary_key=primary_key,
            )

        plan = resolve_direction(is_forward=is_forward, order=order)
        base = source.ensure_fields(primary_key, order_field)
        query = base.order_by(order_field, plan.sort_direction)
        if cursor is not None:
            query = query.seek(
                SeekCondition(order_field=order_field, comparison=plan.comparison, cursor=cursor)
            )

        rows = list(await query.fetch(page_size + 1))
        has_more = len(rows) > page_size
        rows = rows[:page_size]
        if not is_forward:
            rows.reverse()

        total: int | None = None

        async def count_all() -> int:
            nonlocal total
            if total is None:
                total = await base.count()
            return total

        has_beyond_cursor = False
        if cursor is not None:
            has_beyond_cursor = await query.count() < await count_all()

        if with_total:
            await count_all()

        edges = [
            {"cursor": self._cursor_for(row, source, order_field, primary_key), "data": row}
            for row in rows
        ]
        page_info = PageInfo(
            has_previous_page=has_beyond_cursor if is_forward else has_more,
            has_next_page=has_more if is_forward else has_beyond_cursor,
            start_cursor=edges[0]["cursor"] if edges else None,
            end_cursor=edges[-1]["cursor"] if edges else None,
        )

        _lazy.debug(
            lambda: (
                f"paginate: {'forward' if is_forward else 'backward'} "
                f"order_by={order_field} {order} size={page_size} "
                f"-> {len(edges)} items, has_next={page_info.has_next_page}, "
                f"has_previous={page_info.has_previous_page}"
            )
        )

        return Page(
            page=edges,
            page_info=page_info,
            total=total if with_total else None,
        )

    def _cursor_for(
        self,
        row: Any,
        source: DataSource,
        order_field: str,
        primary_key: str,
    ) -> str:
        cursor = self.codec.from_record(
            row,
            order_field=order_field,
            primary_key=primary_key,
            getter=source.value_of,
        )
        return self.codec.encode(cursor)


async def paginate(
    source: DataSource,
    *,
    first: int | None = None,
    after: str | None = None,
    last: int | None = None,
    before: str | None = None,
    limit: int | None = None,
    order_by: str | None = None,
    order: SortDirection | str | None = None,
    with_total: bool = False,
    settings: PaginationSettings | None = None,
    codec: CursorCodec | None = None,
) -> Page[Any]:
    """Paginate ``source`` in one call.

    Example:
        page = await paginate(SelectSource(session, select(Post)), first=2)
        next_page = await paginate(
            SelectSource(session, select(Post)),
            first=2,
            after=page.page_info.end_cursor,
        )
    """
    request = PageRequest(
        first=first,
        after=after,
        last=last,
        before=before,
        limit=limit,
        order_by=order_by,
        order=order,
    )
    paginator = Paginator(settings=settings, codec=codec)
    return await paginator.fetch(request, source, with_total=with_total)


__all__ = ["Paginator", "paginate"]
