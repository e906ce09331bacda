"""Storage collaborators for the paginator."""

from relay_pagination.core.database.collection import SelectCollection
from relay_pagination.core.database.memory import MemoryCollection

__all__ = ["MemoryCollection", "SelectCollection"]
