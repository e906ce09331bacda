"""In-memory storage collaborator.

Paginates rows that are already loaded: API responses, fixtures, cached
result sets. Rows are mappings or objects exposing columns as attributes.
Filtering follows SQL semantics (a comparison against NULL is false) and
sorting places NULL before every other value.

Usage:
    rows = [{"id": 1, "v": 10}, {"id": 2, "v": 20}]
    connection = await paginate(MemoryCollection(rows), {"first": 1}, {"idColumn": "id"})
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from datetime import date, datetime
from decimal import Decimal
from typing import Any
from uuid import UUID

from relay_pagination.core.exceptions import MalformedCursorError
from relay_pagination.core.pagination.columns import ColumnOrder, SortDirection
from relay_pagination.core.pagination.cursor import CursorCodec
from relay_pagination.core.pagination.predicates import (
    And,
    Comparison,
    IsNotNull,
    IsNull,
    Or,
    Predicate,
    RangeFilter,
)


class MemoryCollection:
    """Collection over a list of rows.

    The ``having`` flag of a range filter is ignored: in-memory rows are
    already the aggregated result.
    """

    __slots__ = ("_filters", "_limit", "_orders", "_rows")

    def __init__(
        self,
        rows: Iterable[Any],
        *,
        orders: Sequence[ColumnOrder] = (),
        filters: Sequence[RangeFilter] = (),
        limit: int | None = None,
    ) -> None:
        self._rows = list(rows)
        self._orders = tuple(orders)
        self._filters = tuple(filters)
        self._limit = limit

    def _replace(self, **changes: Any) -> MemoryCollection:
        state = {
            "orders": self._orders,
            "filters": self._filters,
            "limit": self._limit,
            **changes,
        }
        return type(self)(self._rows, **state)

    def order_by(self, orders: Sequence[ColumnOrder]) -> MemoryCollection:
        return self._replace(orders=tuple(orders))

    def filter(self, range_filter: RangeFilter) -> MemoryCollection:
        return self._replace(filters=(*self._filters, range_filter))

    def limit(self, count: int) -> MemoryCollection:
        if self._limit is not None:
            count = min(count, self._limit)
        return self._replace(limit=count)

    def _matching(self) -> list[Any]:
        rows = self._rows
        for range_filter in self._filters:
            try:
                rows = [row for row in rows if evaluate(range_filter.predicate, row)]
            except (TypeError, ValueError, ArithmeticError) as e:
                raise MalformedCursorError(
                    range_filter.cursor or "",
                    f"value does not match the column type ({e})",
                ) from e
        return list(rows)

    async def fetch(self) -> list[Any]:
        rows = self._matching()
        # Stable sorts applied from the least significant column up.
        for order in reversed(self._orders):
            rows.sort(
                key=lambda row, column=order.column: _null_first_key(
                    CursorCodec.read_value(row, column)
                ),
                reverse=order.direction is SortDirection.DESC,
            )
        if self._limit is not None:
            rows = rows[: self._limit]
        return rows

    async def count(self) -> int:
        return len(self._matching())


def _null_first_key(value: Any) -> tuple[bool, Any]:
    return (value is not None, value if value is not None else 0)


def _coerce(row_value: Any, value: Any) -> Any:
    """Bring a JSON cursor value back to the type of the row value."""
    if not isinstance(value, (str, int, float)) or isinstance(value, bool):
        return value
    if isinstance(value, str):
        if isinstance(row_value, datetime):
            return datetime.fromisoformat(value)
        if isinstance(row_value, date):
            return date.fromisoformat(value)
        if isinstance(row_value, UUID):
            return UUID(value)
    if isinstance(row_value, Decimal):
        return Decimal(str(value))
    return value


def evaluate(predicate: Predicate, row: Any) -> bool:
    """Evaluate a predicate against one row."""
    match predicate:
        case Comparison(column=column, operator=operator, value=value):
            row_value = CursorCodec.read_value(row, column)
            if row_value is None:
                return False
            value = _coerce(row_value, value)
            if operator == "gt":
                return row_value > value
            if operator == "lt":
                return row_value < value
            return row_value == value
        case IsNull(column=column):
            return CursorCodec.read_value(row, column) is None
        case IsNotNull(column=column):
            return CursorCodec.read_value(row, column) is not None
        case And(terms=terms):
            return all(evaluate(term, row) for term in terms)
        case Or(terms=terms):
            return any(evaluate(term, row) for term in terms)
    raise TypeError(f"Unsupported predicate: {predicate!r}")


__all__ = ["MemoryCollection", "evaluate"]
