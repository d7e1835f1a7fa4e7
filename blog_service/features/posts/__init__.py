"""Posts feature package."""

from .repository import PostRepository, get_post_repository
from .router import router

__all__ = [
    "router",
    "PostRepository",
    "get_post_repository",
]
