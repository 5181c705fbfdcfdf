"""Pagination request parameters and their validation.

A ``PageRequest`` is a plain value object. Building one never fails;
``validate_page_request`` checks the parameter combination and raises
``ParameterError`` for the first violation it finds.

Accepted combinations:

    PageRequest()                              # first page, default size
    PageRequest(first=20)                      # first 20 records
    PageRequest(first=20, after="Mg==")        # 20 records after a cursor
    PageRequest(last=20, before="Mw==")        # 20 records before a cursor
    PageRequest(limit=20, before="Mw==")       # same, with a generic count
    PageRequest(order_by="author", order="desc", first=5)
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Any

from cursor_pager.core.exceptions import ParameterError


class SortDirection(StrEnum):
    """Requested sort direction."""

    ASC = "asc"
    DESC = "desc"

    @property
    def inverse(self) -> SortDirection:
        """Opposite direction."""
        return SortDirection.DESC if self is SortDirection.ASC else SortDirection.ASC


@dataclass(frozen=True, slots=True)
class PageRequest:
    """Parameters for one pagination call.

    Attributes:
        first: Number of records after ``after`` (forward pagination)
        after: Cursor to paginate forward from
        last: Number of records before ``before`` (backward pagination)
        before: Cursor to paginate backward from
        limit: Page size for either direction
        order_by: Field to order by (``None`` orders by primary key)
        order: "asc" or "desc" (``None`` means ascending)
    """

    first: int | None = None
    after: str | None = None
    last: int | None = None
    before: str | None = None
    limit: int | None = None
    order_by: str | None = None
    order: SortDirection | str | None = None

    @property
    def is_forward(self) -> bool:
        """Forward unless a ``before`` cursor was supplied."""
        return self.before is None

    @property
    def cursor_token(self) -> str | None:
        """The incoming cursor, whichever side it was given on."""
        return self.after if self.is_forward else self.before

    @property
    def sort_direction(self) -> SortDirection:
        """Requested order as an enum. Only valid after validation."""
        return SortDirection(self.order or SortDirection.ASC)

    @property
    def requested_size(self) -> int | None:
        """Explicit page size from first/last/limit, if any."""
        for value in (self.first, self.last, self.limit):
            if value is not None:
                return value
        return None


def _use_only_one(names: tuple[str, str], values: tuple[Any, Any]) -> None:
    if values[0] is not None and values[1] is not None:
        raise ParameterError(
            f"`{names[0]}` cannot be combined with `{names[1]}`",
            details=dict(zip(names, values, strict=True)),
        )


def _non_negative_or_none(name: str, value: Any) -> None:
    if value is None:
        return
    if isinstance(value, bool) or not isinstance(value, int):
        raise ParameterError(
            f"`{name}` must be an integer, but was the "
            f"{type(value).__name__} `{value!r}`",
            details={name: value},
        )
    if value < 0:
        raise ParameterError(
            f"`{name}` cannot be negative, but was `{value}`",
            details={name: value},
        )


def validate_page_request(request: PageRequest) -> None:
    """Check the parameter combination of ``request``.

    Args:
        request: Parameters to check

    Raises:
        ParameterError: On the first invalid or contradictory parameter
    """
    if request.order is not None and request.order not in tuple(SortDirection):
        raise ParameterError(
            f"`order` must be either 'asc' or 'desc', but was `{request.order}`",
            details={"order": request.order},
        )

    _use_only_one(("first", "last"), (request.first, request.last))
    _use_only_one(("first", "limit"), (request.first, request.limit))
    _use_only_one(("last", "limit"), (request.last, request.limit))
    _use_only_one(("before", "after"), (request.before, request.after))

    if request.last is not None and request.before is None:
        raise ParameterError(
            "`last` must be combined with `before`",
            details={"last": request.last, "before": request.before},
        )

    for name in ("first", "last", "limit"):
        _non_negative_or_none(name, getattr(request, name))

    if request.order_by is not None and not isinstance(request.order_by, str):
        raise ParameterError(
            f"`order_by` must be a field name, but was `{request.order_by!r}`",
            details={"order_by": request.order_by},
        )


__all__ = ["PageRequest", "SortDirection", "validate_page_request"]
