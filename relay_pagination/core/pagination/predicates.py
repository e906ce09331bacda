"""Storage-neutral predicate tree.

The range filter builder describes "strictly past this cursor" as a small
boolean expression tree. Storage collaborators compile it into their own
query language (SQLAlchemy clauses, Python callables, ...).

    Or((
        Comparison("score", "lt", 20),
        And((Comparison("score", "eq", 20), Comparison("id", "gt", 7))),
    ))
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Literal

ComparisonOperator = Literal["gt", "lt", "eq"]


@dataclass(frozen=True, slots=True)
class Comparison:
    """``column <operator> value`` with a non-NULL value."""

    column: str
    operator: ComparisonOperator
    value: Any


@dataclass(frozen=True, slots=True)
class IsNull:
    column: str


@dataclass(frozen=True, slots=True)
class IsNotNull:
    column: str


@dataclass(frozen=True, slots=True)
class And:
    terms: tuple[Predicate, ...]


@dataclass(frozen=True, slots=True)
class Or:
    """Disjunction. An empty disjunction is false."""

    terms: tuple[Predicate, ...]


Predicate = Comparison | IsNull | IsNotNull | And | Or


@dataclass(frozen=True, slots=True)
class RangeFilter:
    """A cursor range predicate and where it must be applied.

    Attributes:
        predicate: Condition selecting the rows strictly past the cursor
        having: Apply after aggregation (HAVING) instead of per row (WHERE)
        cursor: Raw cursor the predicate was decoded from, for error reports
    """

    predicate: Predicate
    having: bool = False
    cursor: str | None = None


__all__ = [
    "And",
    "Comparison",
    "ComparisonOperator",
    "IsNotNull",
    "IsNull",
    "Or",
    "Predicate",
    "RangeFilter",
]
