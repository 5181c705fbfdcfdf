"""Pagination result schemas.

A fetch returns a ``Page``: the records of the page, each wrapped in an
``Edge`` together with its cursor, plus ``PageInfo`` navigation metadata.
The layout follows the GraphQL Relay connection pattern:

    page = await paginate(source, first=2)
    page.as_dict()
    # {
    #     "page": [{"cursor": "MQ==", "data": <Post 1>}, {"cursor": "Mg==", "data": <Post 2>}],
    #     "page_info": {
    #         "has_previous_page": False,
    #         "has_next_page": True,
    #         "start_cursor": "MQ==",
    #         "end_cursor": "Mg==",
    #     },
    # }

Client navigation:
    # Next page (using end_cursor)
    paginate(source, first=2, after=page.page_info.end_cursor)

    # Previous page (using start_cursor)
    paginate(source, last=2, before=page.page_info.start_cursor)
"""

from __future__ import annotations

from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field

T = TypeVar("T")


class PageInfo(BaseModel):
    """Navigation metadata for one page.

    Attributes:
        has_previous_page: Whether records exist before this page
        has_next_page: Whether records exist after this page
        start_cursor: Cursor of the first record in this page
        end_cursor: Cursor of the last record in this page
    """

    has_previous_page: bool = Field(
        description="Whether previous items exist"
    )
    has_next_page: bool = Field(
        description="Whether more items exist"
    )
    start_cursor: str | None = Field(
        default=None,
        description="Cursor of the first item",
    )
    end_cursor: str | None = Field(
        default=None,
        description="Cursor of the last item",
    )

    model_config = ConfigDict(frozen=True)


class Edge(BaseModel, Generic[T]):
    """A record of the page together with its cursor.

    Attributes:
        cursor: Cursor pointing at this record
        data: The record itself
    """

    cursor: str = Field(description="Cursor for this item")
    data: T = Field(description="The data item")

    model_config = ConfigDict(frozen=True)


class Page(BaseModel, Generic[T]):
    """One page of records in the order the caller asked for.

    Attributes:
        page: Edges of this page
        page_info: Navigation metadata
        total: Count of all records ignoring pagination, when requested
    """

    page: list[Edge[T]] = Field(
        default_factory=list,
        description="List of edges (items with cursors)",
    )
    page_info: PageInfo = Field(
        description="Pagination metadata",
    )
    total: int | None = Field(
        default=None,
        description="Total count (only when requested)",
    )

    model_config = ConfigDict(frozen=True)

    @property
    def records(self) -> list[T]:
        """The records without edge wrappers."""
        return [edge.data for edge in self.page]

    @property
    def cursors(self) -> list[str]:
        return [edge.cursor for edge in self.page]

    def as_dict(self) -> dict[str, Any]:
        """Plain dict form; ``total`` is only present when it was requested.

        Records are passed through as-is rather than serialized.
        """
        result: dict[str, Any] = {
            "page": [{"cursor": edge.cursor, "data": edge.data} for edge in self.page],
            "page_info": self.page_info.model_dump(),
        }
        if self.total is not None:
            result["total"] = self.total
        return result


__all__ = ["Edge", "Page", "PageInfo"]
