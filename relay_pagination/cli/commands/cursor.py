"""Cursor inspection commands."""

from __future__ import annotations

import json
from typing import Any

import click

from relay_pagination.cli.utils.formatters import describe_predicate, error, success
from relay_pagination.core.exceptions import PaginationError
from relay_pagination.core.pagination import (
    CursorCodec,
    RangeFilterBuilder,
    normalize_columns,
)


def _parse_value(raw: str) -> Any:
    try:
        return json.loads(raw)
    except json.JSONDecodeError:
        return raw


@click.group(name="cursor")
def cursor() -> None:
    """Encode, decode and explain pagination cursors."""


@cursor.command(name="encode")
@click.argument("values", nargs=-1, required=True)
def encode_cursor(values: tuple[str, ...]) -> None:
    """Encode VALUES (JSON, or plain strings) into a cursor.

    \b
    Example:
      relay-pagination cursor encode 20 2
    """
    click.echo(CursorCodec.encode([_parse_value(value) for value in values]))


@cursor.command(name="decode")
@click.argument("token")
@click.option("--fields", type=int, default=None, help="Expected number of fields")
def decode_cursor(token: str, fields: int | None) -> None:
    """Decode TOKEN and print its values as a JSON array."""
    try:
        values = CursorCodec.decode(token, expected_fields=fields)
    except PaginationError as e:
        error(str(e))
        raise SystemExit(1) from e
    click.echo(json.dumps(values))


@cursor.command(name="explain")
@click.argument("token")
@click.option("--order-by", "order_by", multiple=True, default=("id",), show_default=True)
@click.option("--direction", "directions", multiple=True, default=("asc",), show_default=True)
@click.option("--id-column", "id_columns", multiple=True, default=("id",), show_default=True)
@click.option(
    "--traversal",
    type=click.Choice(["after", "before"]),
    default="after",
    show_default=True,
)
def explain_cursor(
    token: str,
    order_by: tuple[str, ...],
    directions: tuple[str, ...],
    id_columns: tuple[str, ...],
    traversal: str,
) -> None:
    """Print the range condition TOKEN produces for an ordering."""
    try:
        columns = normalize_columns(list(order_by), list(directions), list(id_columns))
        values = CursorCodec.decode(token, expected_fields=len(columns))
    except PaginationError as e:
        error(str(e))
        raise SystemExit(1) from e

    ordering = ", ".join(
        f"{column} {direction}"
        for column, direction in zip(columns.columns, columns.directions, strict=True)
    )
    range_filter = RangeFilterBuilder(columns).build(traversal, values)  # type: ignore[arg-type]
    success(f"ORDER BY {ordering}")
    click.echo(describe_predicate(range_filter.predicate))
