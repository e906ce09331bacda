"""Combined column ordering.

The paginator always sorts by the caller's sort columns followed by the
tiebreaker column(s), which must be unique per row. Because every row has a
distinct tiebreaker value the combined ordering is total, and a cursor built
from the combined values identifies exactly one position.

Scalar-or-sequence arguments are normalized here, at the boundary; the rest
of the package only ever sees :class:`ColumnSet`.

Example:
    columns = normalize_columns(["score", "name"], ["desc", "asc"], "id")
    columns.columns     # ("score", "name", "id")
    columns.directions  # (SortDirection.DESC, SortDirection.ASC, SortDirection.ASC)
"""

from __future__ import annotations

import re
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from enum import StrEnum
from typing import Literal, TypeVar

from relay_pagination.core.exceptions import InvalidArgumentError

ColumnFormatter = Callable[[str], str]


class SortDirection(StrEnum):
    """Sort direction of one column in the combined ordering."""

    ASC = "asc"
    DESC = "desc"

    @classmethod
    def parse(cls, value: str | SortDirection) -> SortDirection:
        """Parse a direction, case-insensitively."""
        if isinstance(value, SortDirection):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise InvalidArgumentError(
                "orderDirection", value, "must be 'asc' or 'desc'"
            ) from None

    @property
    def reversed(self) -> SortDirection:
        return SortDirection.DESC if self is SortDirection.ASC else SortDirection.ASC


@dataclass(frozen=True, slots=True)
class ColumnOrder:
    """A rendered column paired with its sort direction.

    Attributes:
        column: Storage identifier, already passed through the formatter
        direction: Sort direction
    """

    column: str
    direction: SortDirection


@dataclass(frozen=True, slots=True)
class ColumnSet:
    """Parallel column and direction sequences of the combined ordering.

    Attributes:
        columns: Logical column names, sort columns first then tiebreakers
        directions: One direction per column
    """

    columns: tuple[str, ...]
    directions: tuple[SortDirection, ...]

    def __post_init__(self) -> None:
        if len(self.columns) != len(self.directions):
            raise InvalidArgumentError(
                "orderDirection",
                [str(d) for d in self.directions],
                f"expected {len(self.columns)} directions, got {len(self.directions)}",
            )

    def __len__(self) -> int:
        return len(self.columns)

    def orders(
        self,
        format_column: ColumnFormatter | None = None,
        *,
        reverse: bool = False,
    ) -> list[ColumnOrder]:
        """Render the ordering for a storage collaborator.

        Args:
            format_column: Maps logical names to storage identifiers
            reverse: Flip every direction (used to read a window from its tail)
        """
        render = format_column or (lambda column: column)
        return [
            ColumnOrder(
                column=render(column),
                direction=direction.reversed if reverse else direction,
            )
            for column, direction in zip(self.columns, self.directions, strict=True)
        ]


T = TypeVar("T")


def _as_sequence(value: T | Sequence[T] | None) -> list[T]:
    if value is None:
        return []
    if isinstance(value, (str, SortDirection)) or not isinstance(value, Sequence):
        return [value]  # type: ignore[list-item]
    return list(value)


def normalize_columns(
    order_column: str | Sequence[str],
    asc_or_desc: str | Sequence[str],
    id_column: str | Sequence[str],
) -> ColumnSet:
    """Merge sort columns with tiebreaker columns.

    Sort columns keep their given order. Each tiebreaker column that is not
    already a sort column is appended with the direction of the column
    preceding it. A single direction is broadcast to every sort column.

    Args:
        order_column: Sort column or sequence of sort columns
        asc_or_desc: Direction or sequence of directions
        id_column: Tiebreaker column or sequence of tiebreaker columns

    Returns:
        Normalized column set without duplicates

    Raises:
        InvalidArgumentError: If no tiebreaker is given, a direction is
            unknown, or the direction count matches neither one nor the
            number of sort columns
    """
    columns = _as_sequence(order_column)
    directions = [SortDirection.parse(d) for d in _as_sequence(asc_or_desc)]
    tiebreakers = _as_sequence(id_column)

    if not tiebreakers:
        raise InvalidArgumentError("idColumn", id_column, "a tiebreaker column is required")
    if not directions:
        directions = [SortDirection.ASC]
    if len(directions) == 1 and len(columns) > 1:
        directions = directions * len(columns)
    if columns and len(directions) != len(columns):
        raise InvalidArgumentError(
            "orderDirection",
            [str(d) for d in directions],
            f"expected 1 or {len(columns)} directions, got {len(directions)}",
        )

    combined: list[str] = []
    combined_directions: list[SortDirection] = []
    for column, direction in zip(columns, directions[: len(columns)], strict=True):
        if column in combined:
            continue
        combined.append(column)
        combined_directions.append(direction)

    for column in tiebreakers:
        if column in combined:
            continue
        combined_directions.append(combined_directions[-1] if combined_directions else directions[-1])
        combined.append(column)

    return ColumnSet(columns=tuple(combined), directions=tuple(combined_directions))


class CaseConverter:
    """Column formatter converting logical names to another case.

    Each instance owns its memo of converted names, so two converters never
    share state.

    Example:
        to_snake = CaseConverter("snake")
        to_snake("firstId")  # "first_id"
    """

    _CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])|(?<=[A-Z])(?=[A-Z][a-z])")

    def __init__(self, case: Literal["snake", "camel"] = "snake") -> None:
        self.case = case
        self._cache: dict[str, str] = {}

    def __call__(self, column: str) -> str:
        converted = self._cache.get(column)
        if converted is None:
            converted = self._convert(column)
            self._cache[column] = converted
        return converted

    def _convert(self, column: str) -> str:
        if self.case == "snake":
            return self._CAMEL_BOUNDARY.sub("_", column).lower()
        head, *rest = column.split("_")
        return head + "".join(part[:1].upper() + part[1:] for part in rest)

    def cache_clear(self) -> None:
        self._cache.clear()


__all__ = [
    "CaseConverter",
    "ColumnFormatter",
    "ColumnOrder",
    "ColumnSet",
    "SortDirection",
    "normalize_columns",
]
