"""Data sources the paginator can run against."""

from cursor_pager.database.source import DataSource, SeekCondition
from cursor_pager.database.select_source import SelectSource

__all__ = ["DataSource", "SeekCondition", "SelectSource"]
