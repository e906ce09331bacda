"""Storage collaborator contract.

The paginator never builds queries itself. It drives a :class:`Collection`
handle through ordering, range filtering and limiting, then materializes
rows and counts. Every method returns a new handle and leaves the receiver
untouched, so one base handle can serve both the slice and the count.

Implementations:
    - :class:`relay_pagination.core.database.collection.SelectCollection`
      (SQLAlchemy 2 async ``Select``)
    - :class:`relay_pagination.core.database.memory.MemoryCollection`
      (rows already loaded in memory)
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any, Protocol, Self, runtime_checkable

from relay_pagination.core.pagination.columns import ColumnOrder
from relay_pagination.core.pagination.predicates import RangeFilter


@runtime_checkable
class Collection(Protocol):
    """Ordered, filterable, sliceable, countable collection of nodes."""

    def order_by(self, orders: Sequence[ColumnOrder]) -> Self:
        """Return a handle sorted by ``orders``, replacing any previous paginator ordering."""
        ...

    def filter(self, range_filter: RangeFilter) -> Self:
        """Return a handle narrowed by ``range_filter``."""
        ...

    def limit(self, count: int) -> Self:
        """Return a handle yielding at most ``count`` nodes from its head."""
        ...

    async def fetch(self) -> list[Any]:
        """Materialize the nodes, in order."""
        ...

    async def count(self) -> int:
        """Count matching nodes, ignoring ordering and limit."""
        ...


__all__ = ["Collection"]
