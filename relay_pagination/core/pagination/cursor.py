"""Cursor encoding and decoding for pagination.

Cursors are opaque strings that encode the position of one row in the
combined ordering (sort columns followed by tiebreaker columns). They carry
the row's value for every combined column, so the next query can seek
directly past that row without any server-side state.

The cursor format is:
1. Each value is JSON encoded, then percent-encoded on its own
2. The fields are joined with ``/`` (always escaped by percent-encoding)
3. The joined string is URL-safe base64 encoded

Example for the values ``[20, 2]``:
    fields:  ``20`` and ``2``
    joined:  ``20/2``
    encoded: ``MjAvMg==``
"""

from __future__ import annotations

import base64
import binascii
import json
from collections.abc import Mapping, Sequence
from datetime import date, datetime, time
from decimal import Decimal
from typing import TYPE_CHECKING, Any
from urllib.parse import quote, unquote
from uuid import UUID

from relay_pagination.core.exceptions import MalformedCursorError, PaginationError

if TYPE_CHECKING:
    from relay_pagination.core.pagination.columns import ColumnFormatter

SEPARATION_TOKEN = "/"

# Characters left unescaped by JavaScript's encodeURIComponent. None of them
# is the separation token.
_SAFE_CHARS = "!~*'()"

_MISSING = object()


class CursorCodec:
    """Encode and decode pagination cursors.

    Usage:
        # Encoding
        cursor = CursorCodec.encode([datetime.now(), 42])

        # Decoding (expected_fields guards against foreign cursors)
        values = CursorCodec.decode(cursor, expected_fields=2)
        print(values)  # ["2025-01-15T10:30:00", 42]
    """

    @staticmethod
    def encode(values: Sequence[Any]) -> str:
        """Encode an ordered sequence of column values to an opaque string.

        Args:
            values: Column values in combined-ordering order

        Returns:
            URL-safe base64 encoded string
        """
        fields = [
            quote(
                json.dumps(CursorCodec._serialize_value(value), separators=(",", ":")),
                safe=_SAFE_CHARS,
            )
            for value in values
        ]
        joined = SEPARATION_TOKEN.join(fields)
        return base64.urlsafe_b64encode(joined.encode()).decode()

    @staticmethod
    def decode(cursor: str, expected_fields: int | None = None) -> list[Any]:
        """Decode a cursor string to its ordered column values.

        Both the URL-safe and the standard base64 alphabets are accepted.

        Args:
            cursor: Encoded cursor string
            expected_fields: Number of combined columns the cursor must carry

        Returns:
            Column values, in the order they were encoded

        Raises:
            MalformedCursorError: If the cursor is corrupted or carries the
                wrong number of fields
        """
        try:
            normalized = cursor.strip().replace("+", "-").replace("/", "_")
            normalized += "=" * (-len(normalized) % 4)
            joined = base64.b64decode(
                normalized.encode(), altchars=b"-_", validate=True
            ).decode()
        except (binascii.Error, UnicodeError, ValueError) as e:
            raise MalformedCursorError(cursor, f"not valid base64 ({e})") from e

        if not joined:
            raise MalformedCursorError(cursor, "cursor is empty")

        values: list[Any] = []
        for index, field in enumerate(joined.split(SEPARATION_TOKEN)):
            try:
                values.append(json.loads(unquote(field, errors="strict")))
            except (json.JSONDecodeError, UnicodeError) as e:
                raise MalformedCursorError(
                    cursor, f"field {index} is not valid JSON ({e})"
                ) from e

        if expected_fields is not None and len(values) != expected_fields:
            raise MalformedCursorError(
                cursor,
                f"expected {expected_fields} fields, got {len(values)}",
            )
        return values

    @staticmethod
    def _serialize_value(value: Any) -> Any:
        """Serialize a value to a JSON-compatible form.

        Handles special types like datetime and UUID.
        """
        if isinstance(value, (datetime, date, time)):
            return value.isoformat()
        if isinstance(value, UUID):
            return str(value)
        if isinstance(value, Decimal):
            return str(value)
        return value

    @staticmethod
    def read_value(node: Any, column: str, default: Any = None) -> Any:
        """Read a column value off a node.

        Nodes may be mappings (rows, dicts) or objects exposing the column
        as an attribute (ORM instances). Missing columns read as ``default``.
        """
        if isinstance(node, Mapping):
            return node.get(column, default)
        return getattr(node, column, default)

    @staticmethod
    def create_cursor(
        node: Any,
        columns: Sequence[str],
        format_column: ColumnFormatter | None = None,
    ) -> str:
        """Create a cursor from a node.

        Each column is read under its logical name first, then under its
        rendered storage name, so nodes keyed ``created_at`` serve an
        ordering on ``createdAt``.

        Args:
            node: Row mapping or model instance
            columns: Logical combined column names to include in the cursor
            format_column: Maps logical names to storage identifiers

        Returns:
            Encoded cursor string

        Raises:
            PaginationError: If the node carries a column under neither name

        Example:
            cursor = CursorCodec.create_cursor(
                user,
                columns=["createdAt", "id"],
                format_column=CaseConverter("snake"),
            )
        """
        values = []
        for column in columns:
            value = CursorCodec.read_value(node, column, _MISSING)
            if value is _MISSING and format_column is not None:
                value = CursorCodec.read_value(node, format_column(column), _MISSING)
            if value is _MISSING:
                raise PaginationError(
                    f"Node has no value for cursor column `{column}`",
                    details={"column": column},
                )
            values.append(value)
        return CursorCodec.encode(values)


__all__ = ["SEPARATION_TOKEN", "CursorCodec"]
