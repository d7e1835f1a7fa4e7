"""Core services module.

    from blog_service.core.services import BaseService
"""

from blog_service.core.services.base import BaseService

__all__ = ["BaseService"]
