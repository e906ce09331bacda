"""Unit tests for page window slicing."""
from __future__ import annotations

import pytest

from relay_pagination.core.database.memory import MemoryCollection
from relay_pagination.core.exceptions import InvalidArgumentError, MalformedCursorError
from relay_pagination.core.pagination.columns import normalize_columns
from relay_pagination.core.pagination.cursor import CursorCodec
from relay_pagination.core.pagination.slicer import PageSlicer, validate_window_args


def _ids(window):
    return [node["id"] for node in window.nodes]


@pytest.fixture
def slicer() -> PageSlicer:
    return PageSlicer(normalize_columns("v", "asc", "id"))


class TestValidateWindowArgs:
    def test_negative_first(self):
        with pytest.raises(InvalidArgumentError) as exc_info:
            validate_window_args(-1, None)

        assert exc_info.value.argument == "first"

    def test_negative_last(self):
        with pytest.raises(InvalidArgumentError):
            validate_window_args(None, -1)

    def test_max_page_size(self):
        with pytest.raises(InvalidArgumentError):
            validate_window_args(101, None, max_page_size=100)

    def test_first_and_last_together(self):
        with pytest.raises(InvalidArgumentError):
            validate_window_args(2, 2)

    def test_valid(self):
        validate_window_args(0, None, max_page_size=0)
        validate_window_args(None, None)


class TestPageSlicer:
    async def test_first(self, slicer, table):
        window = await slicer.slice(table, first=2)

        assert _ids(window) == [1, 2]
        assert window.has_next_page is True
        assert window.has_previous_page is False

    async def test_first_covering_everything(self, slicer, table):
        window = await slicer.slice(table, first=10)

        assert _ids(window) == [1, 2, 3, 4]
        assert window.has_next_page is False

    async def test_first_zero(self, slicer, table):
        window = await slicer.slice(table, first=0)

        assert window.nodes == []
        assert window.has_next_page is True

    async def test_last_returns_display_order(self, slicer, table):
        window = await slicer.slice(table, last=2)

        assert _ids(window) == [3, 4]
        assert window.has_previous_page is True
        assert window.has_next_page is False

    async def test_after_seeds_has_previous_page(self, slicer, table):
        cursor = CursorCodec.encode([20, 2])

        window = await slicer.slice(table, after=cursor, first=2)

        assert _ids(window) == [3, 4]
        assert window.has_previous_page is True
        assert window.has_next_page is False

    async def test_before_seeds_has_next_page(self, slicer, table):
        cursor = CursorCodec.encode([30, 3])

        window = await slicer.slice(table, before=cursor, last=5)

        assert _ids(window) == [1, 2]
        assert window.has_next_page is True
        assert window.has_previous_page is False

    async def test_before_and_after(self, slicer, table):
        window = await slicer.slice(
            table,
            after=CursorCodec.encode([10, 1]),
            before=CursorCodec.encode([40, 4]),
        )

        assert _ids(window) == [2, 3]
        assert window.has_next_page is True
        assert window.has_previous_page is True

    async def test_no_limit_returns_whole_window(self, slicer, table):
        window = await slicer.slice(table, after=CursorCodec.encode([20, 2]))

        assert _ids(window) == [3, 4]

    async def test_malformed_cursor_is_an_error(self, slicer, table):
        with pytest.raises(MalformedCursorError):
            await slicer.slice(table, after=CursorCodec.encode([20]), first=2)

    async def test_narrow_leaves_collection_untouched(self, slicer, table):
        slicer.narrow(table, after=CursorCodec.encode([20, 2]))

        assert [row["id"] for row in await table.fetch()] == [1, 2, 3, 4]

    async def test_descending_order(self, table):
        slicer = PageSlicer(normalize_columns("v", "desc", "id"))

        window = await slicer.slice(table, first=3)

        assert _ids(window) == [4, 3, 2]
        assert window.has_next_page is True
