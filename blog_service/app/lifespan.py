"""Application lifespan management.

Startup Order:
1. Core (logging)
2. Database (engine check, optional table creation)

Shutdown Order: Reverse of startup (what starts first, shuts down last)
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from blog_service.core.settings import get_app_settings, get_logging_settings
from blog_service.infra.database import close_database, init_database
from blog_service.infra.logging.config import setup_logging

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

    from fastapi import FastAPI

logger = logging.getLogger(__name__)


async def _startup_core() -> None:
    """Initialize core services: logging."""
    app = get_app_settings()
    setup_logging(log_settings=get_logging_settings(), force=True)
    logger.info(
        "Application starting",
        extra={"service": app.service_name, "environment": app.environment},
    )


async def _startup_database() -> None:
    """Initialize database connection."""
    await init_database()
    logger.info("Database connection initialized")


async def _shutdown_database() -> None:
    await close_database()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Run startup steps in order, then shutdown steps in reverse."""
    _ = app
    await _startup_core()
    await _startup_database()
    try:
        yield
    finally:
        await _shutdown_database()
        logger.info("Application stopped")
