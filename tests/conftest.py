"""Pytest configuration and shared fixtures.

Organization:
    - Data Fixtures: plain rows used by the in-memory collaborator
    - Settings Fixtures: isolated pagination settings
"""

from __future__ import annotations

import pytest

from relay_pagination.core.database.memory import MemoryCollection
from relay_pagination.core.settings import PaginationSettings, clear_all_caches


# ============================================================================
# Data Fixtures
# ============================================================================


@pytest.fixture
def table_rows() -> list[dict[str, int]]:
    """Four rows ordered the same way by ``id`` and ``v``."""
    return [
        {"id": 1, "v": 10},
        {"id": 2, "v": 20},
        {"id": 3, "v": 30},
        {"id": 4, "v": 40},
    ]


@pytest.fixture
def table(table_rows) -> MemoryCollection:
    """In-memory collection over ``table_rows``."""
    return MemoryCollection(table_rows)


@pytest.fixture
def scored_rows() -> list[dict[str, object]]:
    """Rows with duplicated and NULL scores, in insertion order."""
    return [
        {"id": 1, "score": 5, "name": "a"},
        {"id": 2, "score": None, "name": "b"},
        {"id": 3, "score": 5, "name": "c"},
        {"id": 4, "score": 1, "name": "d"},
        {"id": 5, "score": None, "name": "e"},
        {"id": 6, "score": 9, "name": "f"},
        {"id": 7, "score": 5, "name": "g"},
    ]


# ============================================================================
# Settings Fixtures
# ============================================================================


@pytest.fixture
def settings() -> PaginationSettings:
    """Default settings, independent of the environment."""
    return PaginationSettings(_env_file=None)


@pytest.fixture(autouse=True)
def _clear_settings_cache():
    """Make cached settings reflect each test's environment."""
    clear_all_caches()
    yield
    clear_all_caches()
