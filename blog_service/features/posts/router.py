"""API router for the posts feature."""
from __future__ import annotations

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Request, status

from blog_service.core.dependencies import (
    PaginationRequestDep,
    PaginationServiceDep,
    SessionDep,
)
from blog_service.core.pagination import build_page_response
from blog_service.features.posts.repository import PostRepository, get_post_repository
from blog_service.features.posts.schemas import (
    GeneratedPostsResponse,
    PostCreate,
    PostCursorPage,
    PostOffsetPage,
    PostResponse,
)
from blog_service.features.posts.service import PostService
from blog_service.infra.logging import get_lazy_logger

router = APIRouter(prefix="/posts", tags=["posts"])

# Standard logger for INFO/WARNING/ERROR
logger = logging.getLogger(__name__)
# Lazy logger for DEBUG (zero overhead when DEBUG disabled)
lazy_logger = get_lazy_logger(__name__)


def get_post_service(
    session: SessionDep,
    repo: Annotated[PostRepository, Depends(get_post_repository)],
) -> PostService:
    """Request-scoped PostService."""
    return PostService(session, repo)


PostServiceDep = Annotated[PostService, Depends(get_post_service)]


@router.get(
    "",
    response_model=PostOffsetPage | PostCursorPage,
    summary="List posts",
    description="""
List posts filtered and sorted through query-string keys.

**Filters:**
- `where__<field>=<value>` exact match
- `where__<field>__<op>=<value>` with `op` one of `equal`, `not`, `more_than`,
  `more_than_or_equal`, `less_than`, `less_than_or_equal`, `like`, `i_like`,
  `between` (`lo,hi`), `in` (`a,b,c`), `is_null` (`true`/`false`)
- `order__<field>=ASC|DESC` (defaults to `order__created_at=ASC`)

**Modes:**
1. Offset: `GET /posts?page=2&take=10` returns `{data, total}`
2. Cursor: `GET /posts?take=10` returns `{data, cursor, count, next}`; follow
   `next` until it is `null`
""",
    responses={400: {"description": "Malformed filter or sort key"}},
)
async def list_posts(
    http_request: Request,
    pagination_request: PaginationRequestDep,
    pagination: PaginationServiceDep,
    service: PostServiceDep,
) -> PostOffsetPage | PostCursorPage:
    """List posts in offset or cursor mode."""
    result = await service.paginate_posts(
        pagination_request,
        pagination,
        path=http_request.url.path,
    )
    lazy_logger.debug(lambda: f"GET {http_request.url.path} -> {len(result.data)} posts")
    return build_page_response(result, PostResponse)


@router.get(
    "/{post_id}",
    response_model=PostResponse,
    summary="Get a post",
    responses={404: {"description": "Post not found"}},
)
async def get_post(post_id: int, service: PostServiceDep) -> PostResponse:
    """Get a single post by id."""
    post = await service.get_post(post_id)
    return PostResponse.model_validate(post)


@router.post(
    "",
    response_model=PostResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a post",
)
async def create_post(payload: PostCreate, service: PostServiceDep) -> PostResponse:
    """Create a new post."""
    post = await service.create_post(payload)
    return PostResponse.model_validate(post)


@router.post(
    "/generate",
    response_model=GeneratedPostsResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Generate sample posts",
    description="Create 100 numbered sample posts, useful for trying out pagination.",
)
async def generate_posts(service: PostServiceDep) -> GeneratedPostsResponse:
    """Seed sample posts."""
    posts = await service.generate_posts()
    logger.info("Generated sample posts", extra={"count": len(posts)})
    return GeneratedPostsResponse(created=len(posts))
