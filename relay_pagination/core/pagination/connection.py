"""Relay Connection assembly.

:func:`paginate` is the public entry point. It resolves the combined
ordering, narrows and slices the collection, optionally counts the narrowed
window, and converts the nodes into edges:

    connection = await paginate(
        SelectCollection(session, select(User)),
        {"first": 20, "after": cursor, "orderBy": "createdAt", "orderDirection": "desc"},
        {"idColumn": "id", "formatColumnOptions": {"case": "snake"}},
    )
    connection.page_info.has_next_page
    connection.model_dump(by_alias=True)  # Relay shape
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Mapping
from typing import Any

from relay_pagination.core.pagination.collection import Collection
from relay_pagination.core.pagination.columns import ColumnSet, normalize_columns
from relay_pagination.core.pagination.cursor import CursorCodec
from relay_pagination.core.pagination.schemas import (
    Connection,
    ConnectionArgs,
    Edge,
    PageInfo,
    PaginationOptions,
)
from relay_pagination.core.pagination.slicer import PageSlicer, validate_window_args
from relay_pagination.core.settings import PaginationSettings, get_pagination_settings
from relay_pagination.infra.logging import get_lazy_logger

logger = logging.getLogger(__name__)
_lazy = get_lazy_logger(__name__)


def resolve_columns(
    args: ConnectionArgs,
    options: PaginationOptions,
    settings: PaginationSettings,
) -> ColumnSet:
    """Resolve the combined ordering of a request.

    The deprecated ``orderColumn``/``ascOrDesc`` options win over the
    ``orderBy``/``orderDirection`` arguments and log a warning.
    """
    if options.order_column is not None:
        if args.order_by is not None or args.order_direction is not None:
            logger.warning(
                '"orderColumn" and "ascOrDesc" override the supplied "orderBy" and '
                '"orderDirection"; the former are deprecated'
            )
        else:
            logger.warning(
                '"orderColumn" and "ascOrDesc" are being deprecated in favor of '
                '"orderBy" and "orderDirection" respectively'
            )
        order_column = options.order_column
        direction = options.asc_or_desc or settings.default_order_direction
    else:
        order_column = args.order_by or settings.default_order_by
        direction = args.order_direction or settings.default_order_direction

    return normalize_columns(order_column, direction, options.id_column)


def _coerce_args(args: ConnectionArgs | Mapping[str, Any] | None) -> ConnectionArgs:
    if isinstance(args, ConnectionArgs):
        return args
    return ConnectionArgs.model_validate(dict(args or {}))


def _coerce_options(options: PaginationOptions | Mapping[str, Any]) -> PaginationOptions:
    if isinstance(options, PaginationOptions):
        return options
    return PaginationOptions.model_validate(dict(options))


async def paginate(
    collection: Collection,
    args: ConnectionArgs | Mapping[str, Any] | None,
    options: PaginationOptions | Mapping[str, Any],
    *,
    settings: PaginationSettings | None = None,
) -> Connection[Any]:
    """Build one Relay Connection page.

    Args:
        collection: Storage collaborator handle holding the caller's base
            query; it is never mutated
        args: ``before``, ``after``, ``first``, ``last``, ``orderBy``,
            ``orderDirection`` (snake_case spellings accepted)
        options: Paginator configuration, see :class:`PaginationOptions`
        settings: Overrides the cached :class:`PaginationSettings`

    Returns:
        Connection with page info, total count and edges

    Raises:
        InvalidArgumentError: Bad ``first``/``last`` or ordering arguments
        MalformedCursorError: ``before``/``after`` cannot be decoded, or
            carries values the column types reject
        PaginationError: A node lacks a combined column under both its
            logical and its rendered name

    Storage errors propagate unchanged.
    """
    args = _coerce_args(args)
    options = _coerce_options(options)
    settings = settings or get_pagination_settings()

    first, last = args.first, args.last
    if first is None and last is None and settings.default_page_size is not None:
        first = settings.default_page_size
    validate_window_args(first, last, max_page_size=settings.max_page_size)

    columns = resolve_columns(args, options, settings)
    slicer = PageSlicer(
        columns,
        format_column=options.column_formatter(),
        is_aggregate=options.is_aggregate_fn,
    )
    narrowed = slicer.narrow(collection, before=args.before, after=args.after)

    take = slicer.take(
        narrowed,
        first=first,
        last=last,
        has_previous_page=args.after is not None,
        has_next_page=args.before is not None,
    )
    total_count: int | None = None
    if not options.counts_total:
        window = await take
    elif settings.count_concurrently:
        window, total_count = await asyncio.gather(take, narrowed.count())
    else:
        window = await take
        total_count = await narrowed.count()

    nodes = window.nodes
    if options.modify_node_fn is not None:
        nodes = [options.modify_node_fn(node) for node in nodes]

    edges: list[Edge[Any]] = [
        Edge(
            cursor=CursorCodec.create_cursor(node, columns.columns, slicer.format_column),
            node=node,
        )
        for node in nodes
    ]

    connection: Connection[Any] = Connection(
        page_info=PageInfo(
            has_previous_page=window.has_previous_page,
            has_next_page=window.has_next_page,
            start_cursor=edges[0].cursor if edges else None,
            end_cursor=edges[-1].cursor if edges else None,
        ),
        total_count=total_count,
        edges=edges,
    )

    _lazy.debug(
        lambda: f"pagination.paginate: columns={list(columns.columns)} -> {len(edges)} edges, "
        f"total_count={total_count}"
    )
    return connection


__all__ = ["paginate", "resolve_columns"]
