"""Service layer for post-specific business logic."""
from __future__ import annotations

from datetime import UTC, datetime, timedelta
from typing import TYPE_CHECKING, Any

from blog_service.core.exceptions import NotFoundException
from blog_service.core.services.base import BaseService
from blog_service.features.posts.models import Post
from blog_service.features.posts.repository import PostRepository, get_post_repository

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence

    from sqlalchemy.ext.asyncio import AsyncSession

    from blog_service.core.pagination import (
        PaginationRequest,
        PaginationResult,
        PaginationService,
    )
    from blog_service.features.posts.schemas import PostCreate

SAMPLE_POST_COUNT = 100


class PostService(BaseService):
    """Orchestrates post operations using the repository."""

    def __init__(
        self,
        session: AsyncSession,
        repository: PostRepository | None = None,
    ) -> None:
        super().__init__()
        self._session = session
        self._repository = repository or get_post_repository()

    async def paginate_posts(
        self,
        request: PaginationRequest,
        pagination: PaginationService,
        *,
        path: str = "posts",
        overrides: Mapping[str, Any] | None = None,
    ) -> PaginationResult:
        """List posts with the client's filters, in offset or cursor mode."""
        result = await pagination.paginate(
            request,
            self._repository,
            self._session,
            overrides,
            path,
        )

        self._lazy.debug(
            lambda: f"service.paginate_posts(offset_mode={request.is_offset_mode}) -> {len(result.data)} items"
        )
        return result

    async def get_post(self, post_id: int) -> Post:
        """Fetch a post by id.

        Raises:
            NotFoundException: If no post has that id
        """
        post = await self._repository.get(self._session, post_id)
        if post is None:
            raise NotFoundException(
                detail=f"Post with ID {post_id} not found",
                type="post-not-found",
                extra={"post_id": post_id},
            )
        return post

    async def create_post(self, payload: PostCreate) -> Post:
        """Create and persist a new post from user input."""
        post = Post(**payload.model_dump(), like_count=0, comment_count=0)
        created = await self._repository.create(self._session, post)
        await self._session.commit()

        # INFO level - business event (audit trail)
        self.logger.info(
            "Post created",
            extra={
                "post_id": created.id,
                "title": payload.title[:50],
                "operation": "service.create_post",
            },
        )
        return created

    async def generate_posts(self, count: int = SAMPLE_POST_COUNT) -> Sequence[Post]:
        """Create ``count`` numbered sample posts.

        Creation times are one second apart, oldest first, so ordering by
        ``created_at`` matches ordering by id.
        """
        start = datetime.now(UTC) - timedelta(seconds=count)
        posts = [
            Post(
                title=f"Sample post {i}",
                content=f"Sample content for post {i}",
                like_count=0,
                comment_count=0,
                created_at=start + timedelta(seconds=i),
                updated_at=start + timedelta(seconds=i),
            )
            for i in range(1, count + 1)
        ]
        created = await self._repository.create_many(self._session, posts)
        await self._session.commit()

        self.logger.info(
            "Sample posts generated",
            extra={"count": len(created), "operation": "service.generate_posts"},
        )
        return created
