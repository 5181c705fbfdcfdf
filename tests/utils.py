"""Test utilities.

``ListSource`` is an in-memory ``DataSource`` over a list of dicts. It
implements the seek predicate with tuple comparison, which is equivalent
to the two-branch SQL predicate, and records every query it runs so tests
can assert how many round trips a fetch needed.

Usage:
    from tests.utils import ListSource

    source = ListSource([{"id": 1, "author": "Jane"}, {"id": 2, "author": "John"}])
    page = await paginate(source, first=1)
    assert source.calls == ["fetch"]
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import Any, Self

from cursor_pager.database.source import DataSource, SeekCondition
from cursor_pager.pagination.params import SortDirection


class ListSource(DataSource):
    """In-memory data source for unit tests."""

    def __init__(
        self,
        records: Sequence[dict[str, Any]],
        *,
        primary_key: str = "id",
        calls: list[str] | None = None,
        _sort: tuple[str, SortDirection] | None = None,
        _predicates: tuple[Callable[[dict[str, Any]], bool], ...] = (),
    ) -> None:
        self.records = list(records)
        self._primary_key = primary_key
        self.calls = calls if calls is not None else []
        self._sort = _sort
        self._predicates = _predicates

    def _replace(self, **changes: Any) -> Self:
        params: dict[str, Any] = {
            "primary_key": self._primary_key,
            "calls": self.calls,
            "_sort": self._sort,
            "_predicates": self._predicates,
        }
        params.update(changes)
        return type(self)(self.records, **params)

    @property
    def primary_key(self) -> str:
        return self._primary_key

    def ensure_fields(self, *fields: str) -> Self:
        for field in fields:
            if any(field not in record for record in self.records):
                raise KeyError(field)
        return self

    def order_by(self, field: str, direction: SortDirection) -> Self:
        return self._replace(_sort=(field, SortDirection(direction)))

    def seek(self, condition: SeekCondition) -> Self:
        compare = condition.comparison.func
        cursor = condition.cursor
        pk = self._primary_key

        if condition.is_compound:
            field = condition.order_field
            target = (cursor.order_field_value, cursor.primary_key_value)

            def predicate(record: dict[str, Any]) -> bool:
                return compare((record[field], record[pk]), target)
        else:

            def predicate(record: dict[str, Any]) -> bool:
                return compare(record[pk], cursor.primary_key_value)

        return self._replace(_predicates=(*self._predicates, predicate))

    def _matching(self) -> list[dict[str, Any]]:
        return [r for r in self.records if all(p(r) for p in self._predicates)]

    async def fetch(self, limit: int) -> list[dict[str, Any]]:
        self.calls.append("fetch")
        rows = self._matching()
        if self._sort is not None:
            field, direction = self._sort
            pk = self._primary_key
            rows.sort(
                key=lambda r: (r[field], r[pk]),
                reverse=direction is SortDirection.DESC,
            )
        return rows[:limit]

    async def count(self) -> int:
        self.calls.append("count")
        return len(self._matching())


def make_records(authors: Sequence[str]) -> list[dict[str, Any]]:
    """Records with ids 1..n and the given authors."""
    return [{"id": i, "author": a} for i, a in enumerate(authors, start=1)]


def ids(page: Any) -> list[Any]:
    """Primary keys of the records of a page (dicts, rows or model instances)."""
    result = []
    for record in page.records:
        result.append(record["id"] if isinstance(record, dict) else record.id)
    return result
