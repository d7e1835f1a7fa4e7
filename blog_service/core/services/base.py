"""Base service class for business logic."""

from __future__ import annotations

import logging

from blog_service.infra.logging import get_lazy_logger


class BaseService:
    """Base class for all service classes.

    Loggers:
        - self.logger: Standard logger for INFO/WARNING/ERROR (always evaluated)
        - self._lazy: Lazy logger for DEBUG (zero overhead when DEBUG disabled)

    Example:
        class PostService(BaseService):
            def __init__(self, session: AsyncSession):
                super().__init__()
                self.session = session

            async def get_post(self, post_id: int) -> Post:
                self.logger.info("Fetching post", extra={"post_id": post_id})
                ...
    """

    def __init__(self) -> None:
        """Initialize base service with loggers."""
        class_name = self.__class__.__name__
        # Standard logger for INFO/WARNING/ERROR
        self.logger = logging.getLogger(class_name)
        # Lazy logger for DEBUG (zero overhead when DEBUG disabled)
        self._lazy = get_lazy_logger(class_name)
