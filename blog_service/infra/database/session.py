"""Database session management with the SQLAlchemy async engine."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from functools import lru_cache
from typing import TYPE_CHECKING

from sqlalchemy import text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from blog_service.core.database import Base
from blog_service.core.settings import get_app_settings, get_db_settings

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

logger = logging.getLogger(__name__)


@lru_cache(maxsize=1)
def get_engine() -> AsyncEngine:
    """Create the process-wide async engine from DB_* settings."""
    db_settings = get_db_settings()
    app_settings = get_app_settings()
    return create_async_engine(
        db_settings.database_url,
        echo=db_settings.echo or app_settings.debug,
    )


@lru_cache(maxsize=1)
def get_session_factory() -> async_sessionmaker[AsyncSession]:
    """Session factory bound to :func:`get_engine`."""
    return async_sessionmaker(
        get_engine(),
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


@asynccontextmanager
async def get_async_session() -> AsyncGenerator[AsyncSession]:
    """Get async database session.

    Yields:
        Database session that is automatically closed.

    Example:
        async with get_async_session() as session:
            result = await session.execute(select(Post))
            posts = result.scalars().all()
    """
    async with get_session_factory()() as session:
        try:
            yield session
        finally:
            await session.close()


async def init_database() -> None:
    """Check connectivity and create missing tables when DB_CREATE_TABLES is set."""
    db_settings = get_db_settings()
    engine = get_engine()
    logger.info(
        "Initializing database connection",
        extra={"sqlite": db_settings.is_sqlite, "create_tables": db_settings.create_tables},
    )

    try:
        async with engine.begin() as conn:
            await conn.execute(text("SELECT 1"))
            if db_settings.create_tables:
                await conn.run_sync(Base.metadata.create_all)
    except Exception as e:
        logger.error("Failed to connect to database", extra={"error": str(e)})
        raise

    logger.info("Database connection established successfully")


async def close_database() -> None:
    """Dispose of the engine's connection pool.

    This should be called during application shutdown.
    """
    logger.info("Closing database connection")
    await get_engine().dispose()
    get_session_factory.cache_clear()
    get_engine.cache_clear()
    logger.info("Database connection closed successfully")


__all__ = [
    "close_database",
    "get_async_session",
    "get_engine",
    "get_session_factory",
    "init_database",
]
