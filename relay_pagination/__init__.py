"""Relay cursor pagination over ordered, filterable collections."""

from relay_pagination.core.exceptions import (
    InvalidArgumentError,
    MalformedCursorError,
    PaginationError,
)
from relay_pagination.core.pagination import (
    Connection,
    ConnectionArgs,
    CursorCodec,
    Edge,
    PageInfo,
    PaginationOptions,
    paginate,
)

__version__ = "0.1.0"

__all__ = [
    "Connection",
    "ConnectionArgs",
    "CursorCodec",
    "Edge",
    "InvalidArgumentError",
    "MalformedCursorError",
    "PageInfo",
    "PaginationError",
    "PaginationOptions",
    "__version__",
    "paginate",
]
