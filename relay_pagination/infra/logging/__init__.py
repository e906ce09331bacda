"""Logging infrastructure.

Basic usage:
    import logging

    logger = logging.getLogger(__name__)

    # Lazy evaluation for debug traces
    from relay_pagination.infra.logging import get_lazy_logger

    lazy_logger = get_lazy_logger(__name__)
    lazy_logger.debug(lambda: f"Page: {describe(window)}")  # Only runs if DEBUG enabled
"""

from relay_pagination.infra.logging.config import configure_logging, setup_logging
from relay_pagination.infra.logging.formatters import JSONFormatter
from relay_pagination.infra.logging.lazy import LazyLoggerAdapter, get_lazy_logger

__all__ = [
    "JSONFormatter",
    "LazyLoggerAdapter",
    "configure_logging",
    "get_lazy_logger",
    "setup_logging",
]
