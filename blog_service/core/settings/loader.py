"""LRU-cached settings loaders.

Settings are loaded and validated once, then cached for the lifetime of
the process.

Usage:
    from blog_service.core.settings.loader import get_app_settings

    settings = get_app_settings()  # First call: loads and validates
    settings = get_app_settings()  # Subsequent calls: returns cached instance

Testing:
    In tests, clear the cache to force reload:
    get_app_settings.cache_clear()
"""

from __future__ import annotations

from functools import lru_cache

from .app import AppSettings
from .database import DatabaseSettings
from .logs import LoggingSettings
from .pagination import PaginationSettings


@lru_cache(maxsize=1)
def get_app_settings() -> AppSettings:
    """Get cached application settings.

    Returns:
        Validated and frozen AppSettings instance.
    """
    return AppSettings()


@lru_cache(maxsize=1)
def get_db_settings() -> DatabaseSettings:
    """Get cached database settings.

    Returns:
        Validated and frozen DatabaseSettings instance.
    """
    return DatabaseSettings()


@lru_cache(maxsize=1)
def get_logging_settings() -> LoggingSettings:
    """Get cached logging settings.

    Returns:
        Validated and frozen LoggingSettings instance.
    """
    return LoggingSettings()


@lru_cache(maxsize=1)
def get_pagination_settings() -> PaginationSettings:
    """Get cached pagination settings.

    Returns:
        Validated and frozen PaginationSettings instance.
    """
    return PaginationSettings()


def clear_all_settings_caches() -> None:
    """Drop every cached settings instance (tests, config reloads)."""
    get_app_settings.cache_clear()
    get_db_settings.cache_clear()
    get_logging_settings.cache_clear()
    get_pagination_settings.cache_clear()
