"""Logging configuration setup.

Uses ``logging.config.dictConfig`` with a single console handler on the
root logger; application loggers propagate up. JSON Lines output is the
default so records can be shipped to a log aggregator unchanged.
"""

from __future__ import annotations

import logging
import logging.config
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from blog_service.core.settings.logs import LoggingSettings

logger = logging.getLogger(__name__)
_LOGGING_INITIALIZED = False


def setup_logging(
    log_settings: LoggingSettings | None = None,
    *,
    force: bool = False,
) -> None:
    """Ensure logging is configured once across entrypoints.

    Args:
        log_settings: Optional logging settings instance. If omitted, settings
            are loaded via get_logging_settings().
        force: Reconfigure logging even if it was already initialized.
    """
    global _LOGGING_INITIALIZED

    if _LOGGING_INITIALIZED and not force:
        return

    settings_obj = log_settings
    if settings_obj is None:
        from blog_service.core.settings import get_logging_settings

        settings_obj = get_logging_settings()

    configure_logging(
        log_level=settings_obj.level,
        json_logs=settings_obj.json_logs,
        service_name=settings_obj.service_name,
        include_uvicorn=settings_obj.include_uvicorn,
    )
    _LOGGING_INITIALIZED = True


def configure_logging(
    log_level: str = "INFO",
    json_logs: bool = True,
    service_name: str = "blog-service",
    include_uvicorn: bool = True,
) -> None:
    """Configure the root logger with dictConfig.

    Args:
        log_level: Root logger level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        json_logs: Enable JSONL structured logging instead of plain text.
        service_name: Static ``service`` field added to JSON records.
        include_uvicorn: Route uvicorn loggers through the root handler.
    """
    formatter_name = "json" if json_logs else "text"

    config: dict[str, Any] = {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": _build_formatters_config(json_logs, service_name),
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "level": log_level,
                "formatter": formatter_name,
                "stream": "ext://sys.stderr",
            },
        },
        "root": {"level": log_level, "handlers": ["console"]},
        "loggers": {},
    }

    if include_uvicorn:
        for name in ("uvicorn", "uvicorn.error", "uvicorn.access"):
            config["loggers"][name] = {"handlers": [], "propagate": True}

    logging.config.dictConfig(config)
    logging.captureWarnings(True)
    logger.debug("Logging configured", extra={"level": log_level, "json": json_logs})


def _build_formatters_config(json_logs: bool, service_name: str) -> dict[str, Any]:
    """Build formatters configuration for dictConfig."""
    if json_logs:
        return {
            "json": {
                "()": "blog_service.infra.logging.formatters.JSONFormatter",
                "fmt_keys": {
                    "level": "levelname",
                    "logger": "name",
                    "message": "message",
                },
                "static": {"service": service_name},
            }
        }

    return {
        "text": {
            "format": "%(asctime)s - %(levelname)s - %(name)s - %(message)s",
            "datefmt": "%Y-%m-%d %H:%M:%S",
        }
    }


__all__ = ["configure_logging", "setup_logging"]
