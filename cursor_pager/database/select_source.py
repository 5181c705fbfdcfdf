"""SQLAlchemy data source.

Wraps an ``AsyncSession`` and a ``Select`` statement carrying the caller's
own filters (tenancy, visibility, search...). The paginator then layers
ordering, the seek predicate and the limit on top.

Example:
    from sqlalchemy import select

    stmt = select(Post).where(Post.published.is_(True))
    source = SelectSource(session, stmt)
    page = await paginate(source, first=20, order_by="created_at", order="desc")

Column selects work too. The primary key and the order column are added to
the projection when missing, so cursors can always be built:

    source = SelectSource(session, select(Post.content), model=Post)
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Self

from sqlalchemy import func, select
from sqlalchemy import inspect as sa_inspect

from cursor_pager.database.filters import CursorFilter, OrderBy
from cursor_pager.database.source import DataSource, SeekCondition
from cursor_pager.infra.logging import get_lazy_logger

if TYPE_CHECKING:
    from collections.abc import Sequence

    from sqlalchemy import Select
    from sqlalchemy.ext.asyncio import AsyncSession
    from sqlalchemy.orm import InstrumentedAttribute

    from cursor_pager.pagination.params import SortDirection


def _model_of(statement: Select[Any]) -> type[Any]:
    """Mapped class of the statement's first column description."""
    descriptions = statement.column_descriptions
    entity = descriptions[0].get("entity") if descriptions else None
    if entity is None:
        msg = "Cannot infer the mapped model from the statement, pass `model=` explicitly"
        raise ValueError(msg)
    return entity


def _primary_key_of(model: type[Any]) -> str:
    """Attribute name of the model's first primary key column.

    Falls back to 'id' for classes SQLAlchemy can't inspect.
    """
    mapper = sa_inspect(model, raiseerr=False)
    if mapper is None or not mapper.primary_key:
        return "id"
    return mapper.get_property_by_column(mapper.primary_key[0]).key


class SelectSource(DataSource):
    """Data source backed by a SQLAlchemy select statement.

    Attributes:
        session: Async session executing the queries
        statement: Select statement with the caller's filters
        model: Mapped class that field names are resolved against
    """

    __slots__ = ("_lazy", "_primary_key", "model", "session", "statement")

    def __init__(
        self,
        session: AsyncSession,
        statement: Select[Any],
        *,
        model: type[Any] | None = None,
        primary_key: str | None = None,
    ) -> None:
        """Initialize select source.

        Args:
            session: Database session
            statement: SQLAlchemy select statement (without pagination)
            model: Mapped class (inferred from ``statement`` when omitted)
            primary_key: Primary key attribute name (inspected when omitted)
        """
        self.session = session
        self.statement = statement
        self.model = model if model is not None else _model_of(statement)
        self._primary_key = primary_key or _primary_key_of(self.model)
        self._lazy = get_lazy_logger(f"cursor_pager.source.{self.model.__name__}")

    def _replace(self, statement: Select[Any]) -> Self:
        return type(self)(
            self.session,
            statement,
            model=self.model,
            primary_key=self._primary_key,
        )

    @property
    def primary_key(self) -> str:
        return self._primary_key

    @property
    def returns_entities(self) -> bool:
        """True when the statement selects whole ORM instances."""
        descriptions = self.statement.column_descriptions
        return (
            len(descriptions) == 1
            and descriptions[0].get("entity") is not None
            and descriptions[0]["expr"] is descriptions[0]["entity"]
        )

    def column(self, field: str) -> InstrumentedAttribute[Any]:
        """Model attribute for ``field``.

        Raises:
            AttributeError: If the model has no such attribute
        """
        return getattr(self.model, field)

    def ensure_fields(self, *fields: str) -> Self:
        if self.returns_entities:
            return self

        present = set(self.statement.selected_columns.keys())
        missing = [field for field in dict.fromkeys(fields) if field not in present]
        if not missing:
            return self

        self._lazy.debug(lambda: f"db.ensure_fields: adding {missing} to projection")
        return self._replace(
            self.statement.add_columns(*(self.column(field) for field in missing))
        )

    def order_by(self, field: str, direction: SortDirection) -> Self:
        columns = [self.column(field)]
        if field != self.primary_key:
            columns.append(self.column(self.primary_key))
        return self._replace(OrderBy(columns, direction).apply(self.statement))

    def seek(self, condition: SeekCondition) -> Self:
        cursor_filter = CursorFilter(
            self.column(condition.order_field),
            self.column(self.primary_key),
            condition,
        )
        return self._replace(cursor_filter.apply(self.statement))

    async def fetch(self, limit: int) -> Sequence[Any]:
        result = await self.session.execute(self.statement.limit(limit))
        rows = list(result.scalars().all()) if self.returns_entities else list(result.all())

        self._lazy.debug(
            lambda: f"db.fetch: {self.model.__name__}(limit={limit}) -> {len(rows)} rows"
        )
        return rows

    async def count(self) -> int:
        count_stmt = select(func.count()).select_from(
            self.statement.order_by(None).subquery()
        )
        total = (await self.session.execute(count_stmt)).scalar_one()

        self._lazy.debug(lambda: f"db.count: {self.model.__name__} -> {total}")
        return total


__all__ = ["SelectSource"]
