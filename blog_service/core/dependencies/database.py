"""Database dependencies for FastAPI route handlers.

Two session getters exist:

1. `get_db_session()` (this module) - FastAPI dependency, one session per request.
2. `get_async_session()` (infra.database) - context manager for scripts and tasks.

Both use the same session factory.

Usage:
    @router.get("/posts")
    async def list_posts(session: SessionDep):
        result = await session.execute(select(Post))
        return result.scalars().all()
"""

from collections.abc import AsyncGenerator
from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from blog_service.infra.database import get_async_session


async def get_db_session() -> AsyncGenerator[AsyncSession]:
    """FastAPI dependency for database session.

    Yields:
        Database session that is automatically closed after request.
    """
    async with get_async_session() as session:
        yield session


SessionDep = Annotated[AsyncSession, Depends(get_db_session)]
