"""Database fixtures for integration tests.

Uses an in-memory SQLite database through aiosqlite, so no external
infrastructure is needed.
"""

from __future__ import annotations

from collections.abc import AsyncGenerator
from datetime import datetime, timedelta
from typing import TYPE_CHECKING

import pytest
from sqlalchemy import String
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, sessionmaker

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncEngine


class Base(DeclarativeBase):
    pass


class Item(Base):
    __tablename__ = "items"

    id: Mapped[int] = mapped_column(primary_key=True)
    v: Mapped[int | None] = mapped_column(nullable=True)
    category: Mapped[str] = mapped_column(String(20))
    created_at: Mapped[datetime]


BASE_TIME = datetime(2025, 1, 1, 12, 0, 0)

ITEMS = [
    # id, v, category, minutes after BASE_TIME
    (1, 10, "books", 0),
    (2, 20, "books", 5),
    (3, None, "games", 5),
    (4, 40, "games", 10),
    (5, 20, "music", 15),
    (6, None, "music", 20),
    (7, 70, "tools", 20),
]


@pytest.fixture
async def db_engine() -> AsyncGenerator[AsyncEngine]:
    """Create async SQLAlchemy engine with in-memory SQLite."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        echo=False,
    )

    try:
        yield engine
    finally:
        await engine.dispose()


@pytest.fixture
async def db_session(db_engine: AsyncEngine) -> AsyncGenerator[AsyncSession]:
    """Create an async session over a freshly seeded ``items`` table."""
    async with db_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async_session_maker = sessionmaker(
        db_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    async with async_session_maker() as session:
        session.add_all(
            Item(
                id=item_id,
                v=v,
                category=category,
                created_at=BASE_TIME + timedelta(minutes=minutes),
            )
            for item_id, v, category, minutes in ITEMS
        )
        await session.commit()
        try:
            yield session
        finally:
            await session.rollback()

    async with db_engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
