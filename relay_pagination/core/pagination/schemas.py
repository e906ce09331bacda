"""Pagination request and response schemas.

Response models follow the Relay Connection specification:

    {
        "pageInfo": {"hasPreviousPage", "hasNextPage", "startCursor", "endCursor"},
        "totalCount": 42,
        "edges": [{"cursor": "...", "node": {...}}]
    }

Fields use snake_case in Python and serialize with their camelCase alias
(``model_dump(by_alias=True)``). Request models accept either spelling, so
GraphQL resolver arguments can be passed through unchanged.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, Generic, Literal, TypeVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from relay_pagination.core.pagination.columns import CaseConverter, ColumnFormatter

T = TypeVar("T")

_RELAY_CONFIG = ConfigDict(
    alias_generator=to_camel,
    populate_by_name=True,
    arbitrary_types_allowed=True,
)


class PageInfo(BaseModel):
    """Pagination metadata following GraphQL Relay specification.

    Attributes:
        has_previous_page: Whether there are items before the current page
        has_next_page: Whether there are items after the current page
        start_cursor: Cursor of the first item in this page
        end_cursor: Cursor of the last item in this page
    """

    model_config = _RELAY_CONFIG

    has_previous_page: bool = Field(description="Whether previous items exist")
    has_next_page: bool = Field(description="Whether more items exist")
    start_cursor: str | None = Field(default=None, description="Cursor of the first item")
    end_cursor: str | None = Field(default=None, description="Cursor of the last item")


class Edge(BaseModel, Generic[T]):
    """Edge wrapper pairing a node with its cursor."""

    model_config = _RELAY_CONFIG

    cursor: str = Field(description="Cursor for this item")
    node: T = Field(description="The data item")


class Connection(BaseModel, Generic[T]):
    """Relay Connection returned by :func:`paginate`.

    Attributes:
        page_info: Navigation metadata
        total_count: Rows in the cursor-narrowed window, ``None`` when
            counting was skipped
        edges: Edges containing nodes and cursors, in display order
    """

    model_config = _RELAY_CONFIG

    page_info: PageInfo = Field(description="Pagination metadata")
    total_count: int | None = Field(default=None, description="Total count (optional)")
    edges: list[Edge[T]] = Field(
        default_factory=list,
        description="List of edges (items with cursors)",
    )

    @property
    def nodes(self) -> list[T]:
        """Get just the nodes without edge wrappers."""
        return [edge.node for edge in self.edges]


class ConnectionArgs(BaseModel):
    """Relay pagination arguments of one request.

    ``first``/``last`` are range-checked by the paginator, not here, so that
    a negative value surfaces as :class:`InvalidArgumentError`.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        extra="forbid",
    )

    before: str | None = None
    after: str | None = None
    first: int | None = None
    last: int | None = None
    order_by: str | list[str] | None = None
    order_direction: str | list[str] | None = None


class ColumnFormatOptions(BaseModel):
    """Declarative column rendering.

    Attributes:
        case: Convert logical names to this case
        overrides: Fixed storage identifiers or SQL fragments for given
            logical columns (e.g. ``{"metric": "sum(metric)"}``)
    """

    model_config = ConfigDict(frozen=True)

    case: Literal["snake", "camel"] | None = None
    overrides: dict[str, str] = Field(default_factory=dict)

    def build_formatter(self) -> ColumnFormatter:
        """Build a formatter owning its own case conversion cache."""
        convert = CaseConverter(self.case) if self.case else None
        overrides = dict(self.overrides)

        def format_column(column: str) -> str:
            if column in overrides:
                return overrides[column]
            return convert(column) if convert else column

        return format_column


class PaginationOptions(BaseModel):
    """Per-call paginator configuration.

    Attributes:
        id_column: Tiebreaker column(s), unique per row
        order_column: Deprecated spelling of ``orderBy``
        asc_or_desc: Deprecated spelling of ``orderDirection``
        is_aggregate_fn: Tells whether a logical column is an aggregate
        format_column_fn: Renders logical column names for the storage
        format_column_options: Declarative alternative to ``format_column_fn``
        skip_total_count: Skip the count query
        get_total: Master switch for counting
        modify_node_fn: Transform applied to every fetched node
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        extra="forbid",
        arbitrary_types_allowed=True,
    )

    id_column: str | list[str]
    order_column: str | list[str] | None = None
    asc_or_desc: str | list[str] | None = None
    is_aggregate_fn: Callable[[str], bool] | None = None
    format_column_fn: Callable[[str], str] | None = None
    format_column_options: ColumnFormatOptions | None = None
    skip_total_count: bool = False
    get_total: bool = True
    modify_node_fn: Callable[[Any], Any] | None = None

    @property
    def counts_total(self) -> bool:
        return self.get_total and not self.skip_total_count

    def column_formatter(self) -> ColumnFormatter | None:
        if self.format_column_fn is not None:
            return self.format_column_fn
        if self.format_column_options is not None:
            return self.format_column_options.build_formatter()
        return None


__all__ = [
    "ColumnFormatOptions",
    "Connection",
    "ConnectionArgs",
    "Edge",
    "PageInfo",
    "PaginationOptions",
]
