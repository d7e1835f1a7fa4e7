"""Pagination dependencies for FastAPI routes.

Usage:
    from blog_service.core.dependencies.pagination import (
        PaginationRequestDep,
        PaginationServiceDep,
    )

    @router.get("/posts")
    async def list_posts(
        request: PaginationRequestDep,
        pagination: PaginationServiceDep,
        session: SessionDep,
    ):
        return await pagination.paginate(request, repo, session, path="api/v1/posts")
"""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, Query, Request

from blog_service.core.pagination import DEFAULT_CURSOR, PaginationRequest, PaginationService
from blog_service.core.settings import get_pagination_settings


def get_pagination_request(
    request: Request,
    page: Annotated[
        int | None,
        Query(ge=1, description="Page number; selects offset pagination"),
    ] = None,
    take: Annotated[
        int | None,
        Query(ge=1, description="Page size (capped by PAGINATION_MAX_TAKE)"),
    ] = None,
) -> PaginationRequest:
    """Parse page, take and every where__/order__ key of the query string.

    ``page``/``take`` are declared so FastAPI validates and documents them;
    the filter keys are free-form and read from the raw query parameters.
    Requests without an ``order__created_at`` key get ``ASC``.

    Returns:
        PaginationRequest with take clamped to the configured maximum.
    """
    settings = get_pagination_settings()
    return PaginationRequest.from_query(
        request.query_params.multi_items(),
        default_take=settings.default_take,
        max_take=settings.max_take,
        default_order={DEFAULT_CURSOR.sort_field: "ASC"},
    )


def get_pagination_service() -> PaginationService:
    """Pagination service configured from settings."""
    return PaginationService.from_settings()


# Type aliases for cleaner route signatures
PaginationRequestDep = Annotated[PaginationRequest, Depends(get_pagination_request)]
PaginationServiceDep = Annotated[PaginationService, Depends(get_pagination_service)]
