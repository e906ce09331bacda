"""Cursor range filter construction.

The filter implements the seek/keyset method: instead of OFFSET, a compound
condition selects the rows lying strictly past the cursor in the combined
ordering. For columns (a, b, c) with cursor values (v1, v2, v3):

    (a op v1) OR
    (a = v1 AND b op v2) OR
    (a = v1 AND b = v2 AND c op v3)

where ``op`` is ``>`` or ``<`` depending on the column direction and on
whether we seek after or before the cursor.

NULL sorts as the smallest value of a column:
    - "less than NULL" is impossible, so that term is dropped
    - "greater than NULL" becomes ``IS NOT NULL``
    - "less than v" also matches NULL
    - equality against NULL uses ``IS NULL``
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import Any, Literal

from relay_pagination.core.pagination.columns import ColumnFormatter, ColumnSet, SortDirection
from relay_pagination.core.pagination.predicates import (
    And,
    Comparison,
    ComparisonOperator,
    IsNotNull,
    IsNull,
    Or,
    Predicate,
    RangeFilter,
)

Traversal = Literal["after", "before"]


def get_comparator(traversal: Traversal, direction: SortDirection) -> ComparisonOperator:
    """Pick the operator selecting values past the cursor.

    ``before`` always inverts the ``after`` comparator.
    """
    after_op: ComparisonOperator = "gt" if direction is SortDirection.ASC else "lt"
    if traversal == "after":
        return after_op
    return "lt" if after_op == "gt" else "gt"


class RangeFilterBuilder:
    """Build the range predicate for a cursor.

    Example:
        builder = RangeFilterBuilder(
            normalize_columns("score", "desc", "id"),
            format_column=CaseConverter("snake"),
        )
        range_filter = builder.build("after", [20, 7])
        # score < 20 OR (score = 20 AND id < 7)

    Attributes:
        columns: Normalized combined ordering
        format_column: Maps logical names to storage identifiers
        is_aggregate: Tells whether a logical column is an aggregate
            expression; one aggregate column moves the whole filter to HAVING
    """

    def __init__(
        self,
        columns: ColumnSet,
        *,
        format_column: ColumnFormatter | None = None,
        is_aggregate: Callable[[str], bool] | None = None,
    ) -> None:
        self.columns = columns
        self.format_column = format_column or (lambda column: column)
        self.is_aggregate = is_aggregate

    @property
    def uses_having(self) -> bool:
        if self.is_aggregate is None:
            return False
        return any(self.is_aggregate(column) for column in self.columns.columns)

    def build(
        self,
        traversal: Traversal,
        values: Sequence[Any],
        *,
        cursor: str | None = None,
    ) -> RangeFilter:
        """Build the filter for rows strictly ``traversal`` the cursor.

        Args:
            traversal: "after" keeps rows following the cursor, "before"
                keeps rows preceding it
            values: Decoded cursor values, one per combined column
            cursor: Raw cursor the values came from

        Returns:
            Range filter ready for a storage collaborator
        """
        rendered = [self.format_column(column) for column in self.columns.columns]
        terms: list[Predicate] = []

        for index, (column, direction) in enumerate(
            zip(rendered, self.columns.directions, strict=True)
        ):
            compare = self._compare(column, get_comparator(traversal, direction), values[index])
            if compare is None:
                continue

            equalities = [
                self._equals(rendered[j], values[j]) for j in range(index)
            ]
            terms.append(And((*equalities, compare)) if equalities else compare)

        return RangeFilter(
            predicate=Or(tuple(terms)), having=self.uses_having, cursor=cursor
        )

    @staticmethod
    def _equals(column: str, value: Any) -> Predicate:
        if value is None:
            return IsNull(column)
        return Comparison(column, "eq", value)

    @staticmethod
    def _compare(column: str, operator: ComparisonOperator, value: Any) -> Predicate | None:
        if value is None:
            if operator == "lt":
                return None
            return IsNotNull(column)
        if operator == "lt":
            return Or((Comparison(column, "lt", value), IsNull(column)))
        return Comparison(column, operator, value)


__all__ = ["RangeFilterBuilder", "Traversal", "get_comparator"]
