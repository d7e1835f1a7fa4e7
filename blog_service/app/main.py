"""FastAPI application factory."""

from __future__ import annotations

from fastapi import FastAPI

from blog_service.app.exception_handlers import configure_exception_handlers
from blog_service.app.lifespan import lifespan
from blog_service.app.router import setup_routers
from blog_service.core.settings import get_app_settings


def create_app() -> FastAPI:
    """Create and configure FastAPI application.

    Settings are loaded once and cached via LRU cache.

    Returns:
        Configured FastAPI application instance.
    """
    app_settings = get_app_settings()

    app = FastAPI(
        title=app_settings.title,
        description=app_settings.description,
        version=app_settings.version,
        docs_url=app_settings.docs_url,
        openapi_url=app_settings.openapi_url,
        debug=app_settings.debug,
        lifespan=lifespan,
    )

    # Configure exception handlers
    configure_exception_handlers(app)

    setup_routers(app, app_settings)

    return app


# Application instance for uvicorn
app = create_app()


def run() -> None:
    """Serve the application with uvicorn using APP_HOST/APP_PORT."""
    import uvicorn

    settings = get_app_settings()
    uvicorn.run(
        "blog_service.app.main:app",
        host=settings.host,
        port=settings.port,
        log_config=None,
    )
