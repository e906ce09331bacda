"""Pagination settings.

Defaults applied by the paginator when a request leaves them open.

Environment variables use PAGINATION_ prefix.
Example: PAGINATION_MAX_PAGE_SIZE=100, PAGINATION_DEFAULT_ORDER_DIRECTION=desc
"""

from __future__ import annotations

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class PaginationSettings(BaseSettings):
    """Pagination configuration settings.

    Attributes:
        default_order_by: Sort column used when the request names none.
        default_order_direction: Sort direction used when the request names none.
        default_page_size: ``first`` applied when neither ``first`` nor ``last``
            is given. ``None`` returns the whole window.
        max_page_size: Largest accepted ``first``/``last``. ``None`` disables the cap.
        count_concurrently: Run the total count query alongside the page query.
            Requires a collaborator that tolerates concurrent statements; a
            single SQLAlchemy ``AsyncSession`` does not.

    Example:
        settings = PaginationSettings(max_page_size=100)
        connection = await paginate(collection, args, options, settings=settings)
    """

    default_order_by: str = Field(
        default="id",
        min_length=1,
        description="Sort column when orderBy is not supplied",
    )
    default_order_direction: Literal["asc", "desc"] = Field(
        default="asc",
        description="Sort direction when orderDirection is not supplied",
    )
    default_page_size: int | None = Field(
        default=None,
        ge=0,
        description="Page size when neither first nor last is supplied",
    )
    max_page_size: int | None = Field(
        default=None,
        ge=0,
        description="Maximum accepted first/last (hard limit)",
    )
    count_concurrently: bool = Field(
        default=False,
        description="Run count and page queries concurrently",
    )

    model_config = SettingsConfigDict(
        env_prefix="PAGINATION_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        frozen=True,
        extra="ignore",
    )
