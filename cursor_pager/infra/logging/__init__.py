"""Logging helpers.

Modules log through the standard library:

    import logging

    logger = logging.getLogger(__name__)

Debug lines that are expensive to build use the lazy adapter:

    from cursor_pager.infra.logging import get_lazy_logger

    lazy_logger = get_lazy_logger(__name__)
    lazy_logger.debug(lambda: f"page: {summarise(rows)}")
"""

from cursor_pager.infra.logging.lazy import LazyLoggerAdapter, get_lazy_logger

__all__ = ["LazyLoggerAdapter", "get_lazy_logger"]
