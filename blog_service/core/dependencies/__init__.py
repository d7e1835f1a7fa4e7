"""FastAPI dependencies for route handlers.

Features import dependencies from here rather than from infra directly:

    from blog_service.core.dependencies import (
        PaginationRequestDep,
        PaginationServiceDep,
        SessionDep,
    )
"""

from blog_service.core.dependencies.database import SessionDep, get_db_session
from blog_service.core.dependencies.pagination import (
    PaginationRequestDep,
    PaginationServiceDep,
    get_pagination_request,
    get_pagination_service,
)

__all__ = [
    "PaginationRequestDep",
    "PaginationServiceDep",
    "SessionDep",
    "get_db_session",
    "get_pagination_request",
    "get_pagination_service",
]
