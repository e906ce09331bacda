"""Cursor-based pagination following the Relay Connection specification.

The paginator works on any storage collaborator implementing
:class:`Collection` and supports:
- Several sort columns, each ascending or descending
- Tiebreaker column(s) appended to make the ordering total
- ``first``/``after`` forward and ``last``/``before`` backward paging
- NULL values, sorted as the smallest value of a column
- Aggregate sort columns (the cursor filter moves to HAVING)

Usage:
    from relay_pagination import paginate
    from relay_pagination.core.database import SelectCollection

    connection = await paginate(
        SelectCollection(session, select(Item)),
        {"first": 20, "after": after, "orderBy": "score", "orderDirection": "desc"},
        {"idColumn": "id"},
    )

The cursor encodes the combined column values of a row. Cursors are opaque
base64 strings that clients pass back unchanged.
"""

from relay_pagination.core.pagination.collection import Collection
from relay_pagination.core.pagination.columns import (
    CaseConverter,
    ColumnOrder,
    ColumnSet,
    SortDirection,
    normalize_columns,
)
from relay_pagination.core.pagination.connection import paginate, resolve_columns
from relay_pagination.core.pagination.cursor import CursorCodec
from relay_pagination.core.pagination.filters import RangeFilterBuilder, get_comparator
from relay_pagination.core.pagination.predicates import (
    And,
    Comparison,
    IsNotNull,
    IsNull,
    Or,
    Predicate,
    RangeFilter,
)
from relay_pagination.core.pagination.schemas import (
    ColumnFormatOptions,
    Connection,
    ConnectionArgs,
    Edge,
    PageInfo,
    PaginationOptions,
)
from relay_pagination.core.pagination.slicer import PageSlicer, PageWindow, validate_window_args

__all__ = [
    "And",
    "CaseConverter",
    "Collection",
    "ColumnFormatOptions",
    "ColumnOrder",
    "ColumnSet",
    "Comparison",
    "Connection",
    "ConnectionArgs",
    "CursorCodec",
    "Edge",
    "IsNotNull",
    "IsNull",
    "Or",
    "PageInfo",
    "PageSlicer",
    "PageWindow",
    "PaginationOptions",
    "Predicate",
    "RangeFilter",
    "RangeFilterBuilder",
    "SortDirection",
    "get_comparator",
    "normalize_columns",
    "paginate",
    "resolve_columns",
    "validate_window_args",
]
