"""Translate the requested pagination into a physical scan.

Backward pagination ("last N before X") cannot be answered with a LIMIT on
the requested order, because LIMIT keeps the rows nearest the start of the
scan. The query therefore scans in the inverse order, starting at the
cursor and moving away from it, and the page is reversed afterwards.

    forward  + asc  -> ORDER BY ... ASC,  WHERE key > cursor
    forward  + desc -> ORDER BY ... DESC, WHERE key < cursor
    backward + asc  -> ORDER BY ... DESC, WHERE key < cursor
    backward + desc -> ORDER BY ... ASC,  WHERE key > cursor
"""

from __future__ import annotations

import operator
from collections.abc import Callable
from dataclasses import dataclass
from enum import StrEnum
from typing import Any

from cursor_pager.pagination.params import SortDirection


class Comparison(StrEnum):
    """Operator used to seek past the cursor."""

    GT = ">"
    LT = "<"

    @property
    def func(self) -> Callable[[Any, Any], Any]:
        """Binary function implementing the comparison (works on SQL columns too)."""
        return operator.gt if self is Comparison.GT else operator.lt


@dataclass(frozen=True, slots=True)
class ScanPlan:
    """Physical sort direction and seek operator for one query."""

    sort_direction: SortDirection
    comparison: Comparison


def resolve_direction(*, is_forward: bool, order: SortDirection) -> ScanPlan:
    """Resolve the scan for a pagination direction and requested order.

    Args:
        is_forward: True for first/after, False for last/before
        order: Order the caller wants the page in

    Returns:
        ScanPlan with the query sort direction and the filter operator
    """
    order = SortDirection(order)
    sort_direction = order if is_forward else order.inverse
    descending = order is SortDirection.DESC
    comparison = Comparison.LT if (not is_forward) ^ descending else Comparison.GT
    return ScanPlan(sort_direction=sort_direction, comparison=comparison)


__all__ = ["Comparison", "ScanPlan", "resolve_direction"]
