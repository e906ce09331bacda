"""Output formatting utilities for CLI commands."""

from __future__ import annotations

import json

import click

from relay_pagination.core.pagination.predicates import (
    And,
    Comparison,
    IsNotNull,
    IsNull,
    Or,
    Predicate,
)

_OPERATORS = {"gt": ">", "lt": "<", "eq": "="}


def success(message: str) -> None:
    """Print a success message in green."""
    click.secho(f"✓ {message}", fg="green")


def error(message: str) -> None:
    """Print an error message in red."""
    click.secho(f"✗ {message}", fg="red", err=True)


def describe_predicate(predicate: Predicate) -> str:
    """Render a predicate as a SQL-like condition."""
    match predicate:
        case Comparison(column=column, operator=operator, value=value):
            return f"{column} {_OPERATORS[operator]} {json.dumps(value)}"
        case IsNull(column=column):
            return f"{column} IS NULL"
        case IsNotNull(column=column):
            return f"{column} IS NOT NULL"
        case And(terms=terms):
            return " AND ".join(_grouped(term, Or) for term in terms)
        case Or(terms=terms):
            if not terms:
                return "FALSE"
            return " OR ".join(_grouped(term, (And, Or)) for term in terms)
    raise TypeError(f"Unsupported predicate: {predicate!r}")


def _grouped(predicate: Predicate, compound: type | tuple[type, ...]) -> str:
    text = describe_predicate(predicate)
    if isinstance(predicate, compound) and len(predicate.terms) > 1:
        return f"({text})"
    return text
