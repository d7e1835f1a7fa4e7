"""Repository for the posts feature."""

from __future__ import annotations

from blog_service.core.database import BaseRepository
from blog_service.features.posts.models import Post


class PostRepository(BaseRepository[Post]):
    """Repository for Post model.

    Inherits from BaseRepository:
        - get(session, id) -> Post | None
        - get_or_raise(session, id) -> Post
        - create(session, instance) -> Post
        - create_many(session, instances) -> Sequence[Post]
        - find(session, query) -> Sequence[Post]
        - find_and_count(session, query) -> tuple[Sequence[Post], int]
    """

    def __init__(self) -> None:
        """Initialize with Post model."""
        super().__init__(Post)


_post_repository: PostRepository | None = None


def get_post_repository() -> PostRepository:
    """Get the shared PostRepository instance.

    Usage in FastAPI routes:
        @router.get("/{post_id}")
        async def get_post(
            post_id: int,
            session: SessionDep,
            repo: Annotated[PostRepository, Depends(get_post_repository)],
        ):
            return await repo.get_or_raise(session, post_id)
    """
    global _post_repository
    if _post_repository is None:
        _post_repository = PostRepository()
    return _post_repository
