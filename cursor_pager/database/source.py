"""Data source contract consumed by the paginator.

The paginator never talks to a database directly. It refines a
``DataSource`` (projection, ordering, seek predicate) and asks it for rows
or a count. Sources are immutable: every refinement returns a new source
and leaves the receiver untouched, so one base source can be reused for
the page query, the count queries and later requests.

Implementations: ``cursor_pager.database.select_source.SelectSource``.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Self

if TYPE_CHECKING:
    from cursor_pager.pagination.cursor import Cursor
    from cursor_pager.pagination.direction import Comparison
    from cursor_pager.pagination.params import SortDirection


@dataclass(frozen=True, slots=True)
class SeekCondition:
    """Range predicate that keeps the records beyond a cursor.

    With a custom order field this stands for:
        order_field <op> v OR (order_field = v AND primary_key <op> k)
    With the primary key as order field:
        primary_key <op> k

    Attributes:
        order_field: Field the collection is ordered by
        comparison: ``>`` or ``<``
        cursor: Decoded cursor providing ``v`` and ``k``
    """

    order_field: str
    comparison: Comparison
    cursor: Cursor

    @property
    def is_compound(self) -> bool:
        return self.cursor.order_field_value is not None


class DataSource(ABC):
    """An ordered, filterable collection of records."""

    @property
    @abstractmethod
    def primary_key(self) -> str:
        """Name of the field uniquely identifying a record."""

    @abstractmethod
    def ensure_fields(self, *fields: str) -> Self:
        """Return a source whose records include ``fields``.

        Fields already part of the projection are left alone.
        """

    @abstractmethod
    def order_by(self, field: str, direction: SortDirection) -> Self:
        """Return a source sorted by ``(field, primary_key)`` in ``direction``."""

    @abstractmethod
    def seek(self, condition: SeekCondition) -> Self:
        """Return a source restricted to the records matching ``condition``."""

    @abstractmethod
    async def fetch(self, limit: int) -> Sequence[Any]:
        """Fetch at most ``limit`` records in the current order."""

    @abstractmethod
    async def count(self) -> int:
        """Count the records of this source. Ordering does not apply."""

    def value_of(self, record: Any, field: str) -> Any:
        """Read ``field`` from a record returned by ``fetch``."""
        if isinstance(record, Mapping):
            return record[field]
        return getattr(record, field)


__all__ = ["DataSource", "SeekCondition"]
