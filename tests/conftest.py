"""Pytest configuration and shared fixtures.

Organization:
    - Settings Fixtures: cache reset between tests
    - Database Fixtures: SQLAlchemy engine and session on in-memory SQLite
    - Application Fixtures: FastAPI app and HTTP client bound to the test database
    - Data Fixtures: post factories
"""

from __future__ import annotations

import os
from collections.abc import AsyncGenerator, Awaitable, Callable
from datetime import UTC, datetime, timedelta
from typing import TYPE_CHECKING

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

if TYPE_CHECKING:
    from fastapi import FastAPI
    from sqlalchemy.ext.asyncio import AsyncEngine

    from blog_service.features.posts.models import Post

# Ensure tests run without touching a local database file
os.environ.setdefault("APP_ENVIRONMENT", "test")
os.environ.setdefault("APP_PUBLIC_PROTOCOL", "http")
os.environ.setdefault("APP_PUBLIC_HOST", "localhost:8000")
os.environ.setdefault("DB_DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("DB_CREATE_TABLES", "false")
os.environ.setdefault("LOG_JSON_LOGS", "false")

BASE_TIME = datetime(2025, 1, 1, tzinfo=UTC)


# ============================================================================
# Settings Fixtures
# ============================================================================


@pytest.fixture(autouse=True)
def _reset_settings_caches():
    """Drop cached settings so env changes made by a test stay local to it."""
    from blog_service.core.settings import clear_all_settings_caches

    clear_all_settings_caches()
    yield
    clear_all_settings_caches()


# ============================================================================
# Database Fixtures
# ============================================================================


@pytest.fixture
async def db_engine() -> AsyncGenerator[AsyncEngine]:
    """Create async SQLAlchemy engine with in-memory SQLite.

    StaticPool keeps a single connection so every session sees the same database.
    """
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        echo=False,
        poolclass=StaticPool,
    )

    try:
        yield engine
    finally:
        await engine.dispose()


@pytest.fixture
def session_factory(db_engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Session factory bound to the test engine."""
    return async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def db_session(
    db_engine: AsyncEngine,
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[AsyncSession]:
    """Create async database session with automatic table creation and cleanup."""
    from blog_service.core.database import Base
    from blog_service.features.posts.models import Post  # noqa: F401  registers the table

    async with db_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with session_factory() as session:
        try:
            yield session
        finally:
            await session.rollback()

    async with db_engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


# ============================================================================
# Application Fixtures
# ============================================================================


@pytest.fixture
def app(
    db_session: AsyncSession,
    session_factory: async_sessionmaker[AsyncSession],
) -> FastAPI:
    """FastAPI application whose session dependency uses the test database."""
    from blog_service.app.main import create_app
    from blog_service.core.dependencies.database import get_db_session

    application = create_app()

    async def _test_session() -> AsyncGenerator[AsyncSession]:
        async with session_factory() as session:
            yield session

    application.dependency_overrides[get_db_session] = _test_session
    return application


@pytest.fixture
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient]:
    """Async HTTP client for the test application.

    Example:
        async def test_list_posts(client):
            response = await client.get("/api/v1/posts")
            assert response.status_code == 200
    """
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac


# ============================================================================
# Data Fixtures
# ============================================================================


@pytest.fixture
def make_posts(db_session: AsyncSession) -> Callable[..., Awaitable[list[Post]]]:
    """Factory inserting posts with one-minute spaced creation times.

    Example:
        posts = await make_posts(3)                       # ids 1..3, oldest first
        posts = await make_posts(2, like_counts=[5, 10])  # custom like counts
    """
    from blog_service.features.posts.models import Post

    async def _make(count: int, *, like_counts: list[int] | None = None) -> list[Post]:
        posts = [
            Post(
                title=f"Post {i}",
                content=f"Content {i}",
                like_count=like_counts[i - 1] if like_counts else i,
                comment_count=0,
                created_at=BASE_TIME + timedelta(minutes=i),
                updated_at=BASE_TIME + timedelta(minutes=i),
            )
            for i in range(1, count + 1)
        ]
        db_session.add_all(posts)
        await db_session.commit()
        return posts

    return _make
