"""Settings package.

Usage:
    from relay_pagination.core.settings import get_pagination_settings

    settings = get_pagination_settings()
"""

from .loader import clear_all_caches, get_logging_settings, get_pagination_settings
from .logs import LoggingSettings
from .pagination import PaginationSettings

__all__ = [
    "LoggingSettings",
    "PaginationSettings",
    "clear_all_caches",
    "get_logging_settings",
    "get_pagination_settings",
]
