"""Modular Pydantic Settings v2 configuration.

One frozen settings model per domain (app/db/logging/pagination), each
read from environment variables with its own prefix and cached by an
``lru_cache`` loader:

    from blog_service.core.settings import get_app_settings

    settings = get_app_settings()
    print(settings.public_base_url)

Configuration precedence (highest to lowest):
    1. init kwargs (testing/overrides)
    2. Environment variables
    3. .env file (development only)
"""

from __future__ import annotations

from .app import AppSettings
from .database import DatabaseSettings
from .loader import (
    clear_all_settings_caches,
    get_app_settings,
    get_db_settings,
    get_logging_settings,
    get_pagination_settings,
)
from .logs import LoggingSettings
from .pagination import PaginationSettings

__all__ = [
    "AppSettings",
    "DatabaseSettings",
    "LoggingSettings",
    "PaginationSettings",
    "clear_all_settings_caches",
    "get_app_settings",
    "get_db_settings",
    "get_logging_settings",
    "get_pagination_settings",
]
