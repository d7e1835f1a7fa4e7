"""Query-string driven filtering with offset and cursor pagination.

Clients describe a listing with flat query keys:

    ?take=10&order__created_at=DESC&where__title__i_like=python&where__like_count__between=5,50

The request flows through four steps:

    PaginationRequest  -> parsed page/take + where__/order__ keys
    QueryComposer      -> QueryDescriptor (predicates, order, take, skip)
    BaseRepository     -> rows (and a total in offset mode)
    PaginationService  -> {data, total} or {data, cursor, count, next}

Route usage:
    @router.get("/posts")
    async def list_posts(
        request: PaginationRequestDep,
        pagination: PaginationServiceDep,
        session: SessionDep,
    ):
        result = await pagination.paginate(request, PostRepository(), session, path="api/v1/posts")
        return build_page_response(result, PostResponse)
"""

from blog_service.core.pagination.composer import QueryComposer, QueryDescriptor, compose_query
from blog_service.core.pagination.exceptions import (
    ConflictingPaginationMode,
    InvalidFilterValue,
    InvalidOperatorArity,
    InvalidSortDirection,
    MalformedFilterKey,
    PaginationError,
    UnknownFilterField,
    UnknownOperator,
)
from blog_service.core.pagination.keys import split_key
from blog_service.core.pagination.operators import (
    DEFAULT_OPERATORS,
    Arity,
    OperatorRegistry,
    OperatorSpec,
    default_registry,
)
from blog_service.core.pagination.schemas import (
    DEFAULT_CURSOR,
    CursorInfo,
    CursorPageResponse,
    CursorPaginationResult,
    CursorSpec,
    OffsetPageResponse,
    OffsetPaginationResult,
    PaginationRequest,
    PaginationResult,
    build_page_response,
)
from blog_service.core.pagination.service import PaginationService
from blog_service.core.pagination.urls import CursorUrlBuilder, build_next_url

__all__ = [
    "DEFAULT_CURSOR",
    "DEFAULT_OPERATORS",
    "Arity",
    "ConflictingPaginationMode",
    "CursorInfo",
    "CursorPageResponse",
    "CursorPaginationResult",
    "CursorSpec",
    "CursorUrlBuilder",
    "InvalidFilterValue",
    "InvalidOperatorArity",
    "InvalidSortDirection",
    "MalformedFilterKey",
    "OffsetPageResponse",
    "OffsetPaginationResult",
    "OperatorRegistry",
    "OperatorSpec",
    "PaginationError",
    "PaginationRequest",
    "PaginationResult",
    "PaginationService",
    "QueryComposer",
    "QueryDescriptor",
    "UnknownFilterField",
    "UnknownOperator",
    "build_next_url",
    "build_page_response",
    "compose_query",
    "default_registry",
    "split_key",
]
