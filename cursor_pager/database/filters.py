"""Keyset filters for SQLAlchemy statements.

These filters work directly on ``Select`` statements. They are helpers for
``SelectSource`` but can be applied to any statement by hand:

    stmt = select(Post)
    stmt = OrderBy([Post.author, Post.id], "asc").apply(stmt)
    stmt = CursorFilter(Post.author, Post.id, condition).apply(stmt)

How the seek works:
    For ORDER BY author ASC, id ASC with cursor at ("Jane", 4):
    WHERE (author > 'Jane') OR (author = 'Jane' AND id > 4)

The compound WHERE clause lets an index on (author, id) seek directly to
the cursor position instead of scanning past an OFFSET.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import date, datetime
from decimal import Decimal
from typing import TYPE_CHECKING, Any
from uuid import UUID

from sqlalchemy import and_, or_

from cursor_pager.pagination.params import SortDirection

if TYPE_CHECKING:
    from collections.abc import Sequence

    from sqlalchemy import ColumnElement, Select

    from cursor_pager.database.source import SeekCondition


class StatementFilter(ABC):
    """Base class for statement filters.

    All filters implement `apply()` which modifies a SQLAlchemy statement.
    """

    @abstractmethod
    def apply(self, statement: Select[Any]) -> Select[Any]:
        """Apply filter to statement.

        Args:
            statement: SQLAlchemy select statement

        Returns:
            Modified select statement
        """
        ...


class OrderBy(StatementFilter):
    """Ordering on one or more columns, all in the same direction.

    Example:
        # ORDER BY created_at DESC, id DESC
        stmt = OrderBy([Post.created_at, Post.id], "desc").apply(stmt)
    """

    def __init__(
        self,
        columns: Sequence[ColumnElement[Any]],
        direction: SortDirection | str = SortDirection.ASC,
    ):
        """Initialize ordering filter.

        Args:
            columns: Order column(s), primary key last
            direction: 'asc' or 'desc', applied to every column
        """
        self.columns = list(columns)
        self.direction = SortDirection(direction)

    def apply(self, statement: Select[Any]) -> Select[Any]:
        """Replace any existing ordering with the keyset ordering."""
        statement = statement.order_by(None)
        for column in self.columns:
            if self.direction is SortDirection.DESC:
                statement = statement.order_by(column.desc())
            else:
                statement = statement.order_by(column.asc())
        return statement


class CursorFilter(StatementFilter):
    """Keep only the rows lying beyond a cursor.

    Attributes:
        column: Order column
        key_column: Primary key column
        condition: Comparison and decoded cursor
    """

    def __init__(
        self,
        column: ColumnElement[Any],
        key_column: ColumnElement[Any],
        condition: SeekCondition,
    ) -> None:
        self.column = column
        self.key_column = key_column
        self.condition = condition

    def apply(self, statement: Select[Any]) -> Select[Any]:
        """Add the seek predicate.

        (col op v) OR (col = v AND key op k) for a custom order column,
        key op k when ordering by the primary key.
        """
        return statement.where(self.predicate())

    def predicate(self) -> ColumnElement[bool]:
        compare = self.condition.comparison.func
        cursor = self.condition.cursor
        key_value = self._convert_cursor_value(self.key_column, cursor.primary_key_value)

        if not self.condition.is_compound:
            return compare(self.key_column, key_value)

        value = self._convert_cursor_value(self.column, cursor.order_field_value)
        return or_(
            compare(self.column, value),
            and_(self.column == value, compare(self.key_column, key_value)),
        )

    @staticmethod
    def _convert_cursor_value(column: ColumnElement[Any], value: Any) -> Any:
        """Convert a JSON-decoded cursor value to the column's Python type.

        Handles datetime strings, UUIDs, decimals etc. that were turned into
        strings when the cursor was encoded.
        """
        if not isinstance(value, str):
            return value

        column_type = getattr(column.type, "impl", column.type)
        type_name = type(column_type).__name__

        if type_name in ("DateTime", "TIMESTAMP", "DATETIME"):
            return datetime.fromisoformat(value)
        if type_name in ("Date", "DATE"):
            return date.fromisoformat(value)
        if type_name in ("Uuid", "UUID"):
            return UUID(value)
        if type_name in ("Numeric", "NUMERIC", "DECIMAL"):
            return Decimal(value)
        return value


__all__ = ["CursorFilter", "OrderBy", "StatementFilter"]
