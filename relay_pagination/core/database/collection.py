"""SQLAlchemy storage collaborator.

Wraps an async session and a ``Select`` statement. The statement may be an
ORM entity select (nodes are model instances), a Core select (nodes are
dicts) or a grouped select with aggregate columns.

Usage:
    from sqlalchemy import select

    stmt = select(User).where(User.is_active.is_(True))
    collection = SelectCollection(session, stmt)
    connection = await paginate(collection, {"first": 50}, {"idColumn": "id"})

Rendered column names are resolved, in order, against:
1. the explicit ``columns`` mapping, ``Table`` or ORM class
2. attributes of the selected ORM entity
3. the statement's selected columns (labels included)
4. ``literal_column`` (raw SQL fragments such as ``sum(metric)``)
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from datetime import date, datetime
from decimal import Decimal
from typing import TYPE_CHECKING, Any
from uuid import UUID

from sqlalchemy import Select, and_, false, func, literal_column, or_, select

from relay_pagination.core.exceptions import MalformedCursorError
from relay_pagination.core.pagination.columns import ColumnOrder, SortDirection
from relay_pagination.core.pagination.predicates import (
    And,
    Comparison,
    IsNotNull,
    IsNull,
    Or,
    Predicate,
    RangeFilter,
)
from relay_pagination.infra.logging import get_lazy_logger

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession
    from sqlalchemy.sql.elements import ColumnElement

_lazy = get_lazy_logger(__name__)


class SelectCollection:
    """Collection backed by a SQLAlchemy ``Select`` executed on an ``AsyncSession``.

    Ascending order puts NULL first and descending order puts NULL last,
    matching the cursor filter, which treats NULL as the smallest value.

    Attributes:
        session: Async session used to execute the statements
        statement: Current statement; never mutated in place
        columns: Optional explicit column source
    """

    __slots__ = ("columns", "session", "statement")

    def __init__(
        self,
        session: AsyncSession,
        statement: Select[Any],
        *,
        columns: Mapping[str, ColumnElement[Any]] | Any | None = None,
    ) -> None:
        self.session = session
        self.statement = statement
        self.columns = columns

    def _replace(self, statement: Select[Any]) -> SelectCollection:
        return type(self)(self.session, statement, columns=self.columns)

    def resolve(self, name: str) -> ColumnElement[Any]:
        """Resolve a rendered column name to a SQL expression."""
        source = self.columns
        if isinstance(source, Mapping):
            if name in source:
                return source[name]
        elif source is not None:
            table_columns = getattr(source, "c", None)
            if table_columns is not None and name in table_columns:
                return table_columns[name]
            if hasattr(source, name):
                return getattr(source, name)

        entity = self._entity()
        if entity is not None and hasattr(entity, name):
            return getattr(entity, name)

        selected = self.statement.selected_columns
        if name in selected:
            return selected[name]

        return literal_column(name)

    def _entity(self) -> Any:
        descriptions = self.statement.column_descriptions
        if len(descriptions) != 1:
            return None
        entity = descriptions[0].get("entity")
        if entity is None or descriptions[0].get("expr") is not entity:
            return None
        return entity

    def order_by(self, orders: Sequence[ColumnOrder]) -> SelectCollection:
        clauses = []
        for order in orders:
            column = self.resolve(order.column)
            if order.direction is SortDirection.DESC:
                clauses.append(column.desc().nulls_last())
            else:
                clauses.append(column.asc().nulls_first())
        return self._replace(self.statement.order_by(None).order_by(*clauses))

    def filter(self, range_filter: RangeFilter) -> SelectCollection:
        try:
            condition = self._compile(range_filter.predicate)
        except (ValueError, ArithmeticError) as e:
            raise MalformedCursorError(
                range_filter.cursor or "",
                f"value does not match the column type ({e})",
            ) from e
        if range_filter.having:
            return self._replace(self.statement.having(condition))
        return self._replace(self.statement.where(condition))

    def limit(self, count: int) -> SelectCollection:
        return self._replace(self.statement.limit(count))

    async def fetch(self) -> list[Any]:
        result = await self.session.execute(self.statement)
        if self._entity() is not None:
            rows: list[Any] = list(result.scalars().all())
        else:
            rows = [dict(row) for row in result.mappings().all()]
        _lazy.debug(lambda: f"db.fetch: {self.statement} -> {len(rows)} rows")
        return rows

    async def count(self) -> int:
        """Count result rows; a grouped statement counts its groups."""
        subquery = self.statement.order_by(None).limit(None).subquery()
        count_stmt = select(func.count()).select_from(subquery)
        return (await self.session.execute(count_stmt)).scalar_one()

    def _compile(self, predicate: Predicate) -> ColumnElement[bool]:
        match predicate:
            case Comparison(column=name, operator=operator, value=value):
                column = self.resolve(name)
                value = _convert_cursor_value(column, value)
                if operator == "gt":
                    return column > value
                if operator == "lt":
                    return column < value
                return column == value
            case IsNull(column=name):
                return self.resolve(name).is_(None)
            case IsNotNull(column=name):
                return self.resolve(name).is_not(None)
            case And(terms=terms):
                return and_(*(self._compile(term) for term in terms))
            case Or(terms=terms):
                if not terms:
                    return false()
                return or_(*(self._compile(term) for term in terms))
        raise TypeError(f"Unsupported predicate: {predicate!r}")


def _convert_cursor_value(column: ColumnElement[Any], value: Any) -> Any:
    """Convert a JSON cursor value back to the column's Python type.

    Handles datetime strings, UUIDs, etc. that were serialized
    when creating the cursor.
    """
    if not isinstance(value, (str, int, float)):
        return value

    column_type = getattr(column, "type", None)
    column_type = getattr(column_type, "impl", column_type)
    type_name = type(column_type).__name__

    if isinstance(value, str):
        if type_name in ("DateTime", "TIMESTAMP"):
            return datetime.fromisoformat(value)
        if type_name in ("Date", "DATE"):
            return date.fromisoformat(value)
        if type_name in ("Uuid", "UUID"):
            return UUID(value)
    if type_name in ("Numeric", "NUMERIC", "DECIMAL") and getattr(column_type, "asdecimal", False):
        return Decimal(str(value))
    return value


__all__ = ["SelectCollection"]
