"""Logging infrastructure.

Basic usage:
    import logging

    from blog_service.infra.logging import get_lazy_logger

    logger = logging.getLogger(__name__)
    lazy_logger = get_lazy_logger(__name__)

    logger.info("Processing request", extra={"path": "/posts"})
    lazy_logger.debug(lambda: f"Expensive: {compute_heavy_data()}")  # Only runs if DEBUG enabled

Configure once at startup:
    from blog_service.infra.logging import setup_logging

    setup_logging()
"""

from blog_service.infra.logging.config import configure_logging, setup_logging
from blog_service.infra.logging.formatters import JSONFormatter
from blog_service.infra.logging.lazy import LazyLoggerAdapter, get_lazy_logger

__all__ = [
    "JSONFormatter",
    "LazyLoggerAdapter",
    "configure_logging",
    "get_lazy_logger",
    "setup_logging",
]
