"""Async database engine and session configuration."""

from __future__ import annotations

import os
from typing import TYPE_CHECKING

from sqlalchemy.ext.asyncio import (
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

DATABASE_URL = os.getenv(
    "DATABASE_URL",
    "postgresql+asyncpg://localhost:5432/sky_atlas",
)

engine = create_async_engine(
    DATABASE_URL,
    echo=False,
    pool_size=20,
    max_overflow=10,
)

async_session_factory = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


async def get_db() -> AsyncGenerator[AsyncSession]:
    """FastAPI dependency that yields a read-only async database session."""
    async with async_session_factory() as session:
        try:
            yield session
        finally:
            await session.rollback()


def get_session_factory() -> async_sessionmaker[AsyncSession]:
    """FastAPI dependency returning the factory used for fan-out sub-queries."""
    return async_session_factory
