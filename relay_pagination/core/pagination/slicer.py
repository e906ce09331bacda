"""Page window slicing.

Turns the Relay ``before``/``after``/``first``/``last`` arguments into
collection operations:

1. Sort by the combined ordering
2. ``after``: keep rows strictly following the cursor
3. ``before``: keep rows strictly preceding the cursor
4. ``first``: fetch ``first + 1`` rows from the head; the extra row proves
   a next page exists
5. ``last``: flip the ordering, fetch ``last + 1`` rows from the new head
   and flip them back; the extra row proves a previous page exists

``hasNextPage`` starts true when ``before`` is given and ``hasPreviousPage``
starts true when ``after`` is given.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from relay_pagination.core.exceptions import InvalidArgumentError
from relay_pagination.core.pagination.collection import Collection
from relay_pagination.core.pagination.columns import ColumnFormatter, ColumnSet
from relay_pagination.core.pagination.cursor import CursorCodec
from relay_pagination.core.pagination.filters import RangeFilterBuilder
from relay_pagination.infra.logging import get_lazy_logger

_lazy = get_lazy_logger(__name__)


def validate_window_args(
    first: int | None,
    last: int | None,
    *,
    max_page_size: int | None = None,
) -> None:
    """Reject invalid ``first``/``last`` combinations before any query runs.

    Raises:
        InvalidArgumentError: If a limit is negative, above ``max_page_size``,
            or both limits are given
    """
    for name, value in (("first", first), ("last", last)):
        if value is None:
            continue
        if value < 0:
            raise InvalidArgumentError(name, value, "must not be less than 0")
        if max_page_size is not None and value > max_page_size:
            raise InvalidArgumentError(name, value, f"must not exceed {max_page_size}")
    if first is not None and last is not None:
        raise InvalidArgumentError(
            "last", last, "cannot be combined with `first` in the same request"
        )


@dataclass(slots=True)
class PageWindow:
    """Nodes of one page plus the page existence flags."""

    nodes: list[Any] = field(default_factory=list)
    has_previous_page: bool = False
    has_next_page: bool = False


class PageSlicer:
    """Apply ordering, cursor narrowing and limits to a collection.

    Example:
        slicer = PageSlicer(normalize_columns("created_at", "desc", "id"))
        window = await slicer.slice(collection, after=cursor, first=20)
        window.nodes, window.has_next_page

    Attributes:
        columns: Normalized combined ordering
        format_column: Maps logical names to storage identifiers
    """

    def __init__(
        self,
        columns: ColumnSet,
        *,
        format_column: ColumnFormatter | None = None,
        is_aggregate: Callable[[str], bool] | None = None,
    ) -> None:
        self.columns = columns
        self.format_column = format_column
        self._filters = RangeFilterBuilder(
            columns, format_column=format_column, is_aggregate=is_aggregate
        )

    def narrow(
        self,
        collection: Collection,
        *,
        before: str | None = None,
        after: str | None = None,
    ) -> Collection:
        """Order the collection and drop the rows outside the cursors.

        Raises:
            MalformedCursorError: If a cursor cannot be decoded into one
                value per combined column
        """
        narrowed = collection.order_by(self.columns.orders(self.format_column))
        if after is not None:
            values = CursorCodec.decode(after, expected_fields=len(self.columns))
            narrowed = narrowed.filter(self._filters.build("after", values, cursor=after))
        if before is not None:
            values = CursorCodec.decode(before, expected_fields=len(self.columns))
            narrowed = narrowed.filter(self._filters.build("before", values, cursor=before))
        return narrowed

    async def take(
        self,
        narrowed: Collection,
        *,
        first: int | None = None,
        last: int | None = None,
        has_previous_page: bool = False,
        has_next_page: bool = False,
    ) -> PageWindow:
        """Fetch the page from a narrowed collection."""
        window = PageWindow(
            has_previous_page=has_previous_page,
            has_next_page=has_next_page,
        )

        if first is not None:
            nodes = await narrowed.limit(first + 1).fetch()
            if len(nodes) > first:
                window.has_next_page = True
                nodes = nodes[:first]
        elif last is not None:
            tail = narrowed.order_by(self.columns.orders(self.format_column, reverse=True))
            nodes = list(reversed(await tail.limit(last + 1).fetch()))
            if len(nodes) > last:
                window.has_previous_page = True
                nodes = nodes[1:]
        else:
            nodes = await narrowed.fetch()

        window.nodes = nodes
        _lazy.debug(
            lambda: f"pagination.take(first={first}, last={last}) -> {len(nodes)} nodes, "
            f"has_previous={window.has_previous_page}, has_next={window.has_next_page}"
        )
        return window

    async def slice(
        self,
        collection: Collection,
        *,
        before: str | None = None,
        after: str | None = None,
        first: int | None = None,
        last: int | None = None,
    ) -> PageWindow:
        """Narrow and fetch in one call."""
        validate_window_args(first, last)
        narrowed = self.narrow(collection, before=before, after=after)
        return await self.take(
            narrowed,
            first=first,
            last=last,
            has_previous_page=after is not None,
            has_next_page=before is not None,
        )


__all__ = ["PageSlicer", "PageWindow", "validate_window_args"]
