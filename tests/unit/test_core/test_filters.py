"""Unit tests for the cursor range filter builder."""
from __future__ import annotations

import pytest

from relay_pagination.core.pagination.columns import CaseConverter, SortDirection, normalize_columns
from relay_pagination.core.pagination.filters import RangeFilterBuilder, get_comparator
from relay_pagination.core.pagination.predicates import (
    And,
    Comparison,
    IsNotNull,
    IsNull,
    Or,
)


def _lt(column, value):
    return Or((Comparison(column, "lt", value), IsNull(column)))


class TestGetComparator:
    @pytest.mark.parametrize(
        ("traversal", "direction", "expected"),
        [
            ("after", SortDirection.ASC, "gt"),
            ("after", SortDirection.DESC, "lt"),
            ("before", SortDirection.ASC, "lt"),
            ("before", SortDirection.DESC, "gt"),
        ],
    )
    def test_comparator_table(self, traversal, direction, expected):
        assert get_comparator(traversal, direction) == expected


class TestRangeFilterBuilder:
    def test_single_column_after_asc(self):
        builder = RangeFilterBuilder(normalize_columns("id", "asc", "id"))

        range_filter = builder.build("after", [2])

        assert range_filter.predicate == Or((Comparison("id", "gt", 2),))
        assert range_filter.having is False

    def test_two_columns_after_asc(self):
        """(v > 20) OR (v = 20 AND id > 2)"""
        builder = RangeFilterBuilder(normalize_columns("v", "asc", "id"))

        predicate = builder.build("after", [20, 2]).predicate

        assert predicate == Or(
            (
                Comparison("v", "gt", 20),
                And((Comparison("v", "eq", 20), Comparison("id", "gt", 2))),
            )
        )

    def test_every_term_keeps_all_preceding_equalities(self):
        """The third term pins both earlier columns, not only the previous one.

        The tiebreaker inherits ``asc`` from ``secondId``, the column before it.
        """
        columns = normalize_columns(["firstId", "secondId"], ["desc", "asc"], "backupId")
        builder = RangeFilterBuilder(columns, format_column=CaseConverter("snake"))

        predicate = builder.build("after", [2, 3, "1"]).predicate

        assert predicate == Or(
            (
                _lt("first_id", 2),
                And((Comparison("first_id", "eq", 2), Comparison("second_id", "gt", 3))),
                And(
                    (
                        Comparison("first_id", "eq", 2),
                        Comparison("second_id", "eq", 3),
                        Comparison("backup_id", "gt", "1"),
                    )
                ),
            )
        )

    def test_before_inverts_comparators(self):
        builder = RangeFilterBuilder(normalize_columns("v", "asc", "id"))

        predicate = builder.build("before", [20, 2]).predicate

        assert predicate == Or(
            (
                _lt("v", 20),
                And((Comparison("v", "eq", 20), _lt("id", 2))),
            )
        )

    def test_null_cursor_value_with_greater_than(self):
        """Anything non-null is greater than NULL; equality uses IS NULL."""
        builder = RangeFilterBuilder(normalize_columns("v", "asc", "id"))

        predicate = builder.build("after", [None, 2]).predicate

        assert predicate == Or(
            (
                IsNotNull("v"),
                And((IsNull("v"), Comparison("id", "gt", 2))),
            )
        )

    def test_null_cursor_value_with_less_than_drops_term(self):
        """Nothing sorts below NULL, so that disjunct disappears."""
        builder = RangeFilterBuilder(normalize_columns("v", "desc", "id"))

        predicate = builder.build("after", [None, 2]).predicate

        assert predicate == Or((And((IsNull("v"), _lt("id", 2))),))

    def test_all_terms_impossible_gives_empty_disjunction(self):
        builder = RangeFilterBuilder(normalize_columns("v", "asc", "v"))

        assert builder.build("before", [None]).predicate == Or(())

    def test_aggregate_column_switches_to_having(self):
        columns = normalize_columns("metric", "desc", "id")
        builder = RangeFilterBuilder(
            columns,
            format_column=lambda c: "sum(metric)" if c == "metric" else c,
            is_aggregate=lambda c: c == "metric",
        )

        range_filter = builder.build("after", [100, 5])

        assert range_filter.having is True
        assert range_filter.predicate.terms[0] == _lt("sum(metric)", 100)

    def test_no_aggregate_columns_uses_where(self):
        builder = RangeFilterBuilder(
            normalize_columns("v", "asc", "id"),
            is_aggregate=lambda c: False,
        )

        assert builder.uses_having is False
