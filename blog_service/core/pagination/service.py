"""Offset and cursor pagination over a repository.

``page`` in the request selects offset mode and returns ``{data, total}``;
otherwise cursor mode returns ``{data, cursor, count, next}`` where ``next``
is the URL of the following page, or None once a page comes back short.
"""

from __future__ import annotations

from dataclasses import replace
from typing import TYPE_CHECKING, Any

from blog_service.core.pagination.composer import QueryComposer, QueryDescriptor
from blog_service.core.pagination.exceptions import ConflictingPaginationMode
from blog_service.core.pagination.schemas import (
    DEFAULT_CURSOR,
    CursorInfo,
    CursorPaginationResult,
    CursorSpec,
    OffsetPaginationResult,
    PaginationRequest,
    PaginationResult,
)
from blog_service.core.pagination.urls import CursorUrlBuilder, item_identifier
from blog_service.core.services.base import BaseService
from blog_service.core.settings import get_app_settings, get_pagination_settings

if TYPE_CHECKING:
    from collections.abc import Mapping

    from sqlalchemy.ext.asyncio import AsyncSession

    from blog_service.core.database.repository import BaseRepository


class PaginationService(BaseService):
    """Runs a pagination request against a repository.

    Example:
        service = PaginationService.from_settings()
        result = await service.paginate(request, PostRepository(), session, path="api/v1/posts")
    """

    def __init__(
        self,
        base_url: str,
        composer: QueryComposer | None = None,
        *,
        reject_mixed_modes: bool = False,
    ) -> None:
        super().__init__()
        self.composer = composer or QueryComposer()
        self.urls = CursorUrlBuilder(base_url)
        self.reject_mixed_modes = reject_mixed_modes

    @classmethod
    def from_settings(cls, composer: QueryComposer | None = None) -> PaginationService:
        """Build from APP_PUBLIC_* and PAGINATION_* settings."""
        return cls(
            get_app_settings().public_base_url,
            composer,
            reject_mixed_modes=get_pagination_settings().reject_mixed_modes,
        )

    async def paginate(
        self,
        request: PaginationRequest,
        repository: BaseRepository[Any],
        session: AsyncSession,
        overrides: Mapping[str, Any] | None = None,
        path: str = "",
        *,
        cursor: CursorSpec = DEFAULT_CURSOR,
    ) -> PaginationResult:
        """Fetch one page.

        Args:
            request: Parsed pagination request
            repository: Repository of the resource being listed
            session: Database session
            overrides: Query parts forced by the caller (where/order/take/skip/options),
                each replacing the composed value
            path: Resource path used in the next-page URL
            cursor: Sort/id pair for cursor mode

        Returns:
            OffsetPaginationResult when ``request.page`` is set, else CursorPaginationResult

        Raises:
            PaginationError: If the request cannot be composed into a query
        """
        self._check_mode(request, cursor)
        query = self.composer.compose(request, repository.filterable_fields())
        query = self._with_tiebreaker(query.merge(overrides), cursor)

        if request.is_offset_mode:
            return await self._page_paginate(query, repository, session)
        return await self._cursor_paginate(request, query, repository, session, path, cursor)

    async def _page_paginate(
        self,
        query: QueryDescriptor,
        repository: BaseRepository[Any],
        session: AsyncSession,
    ) -> OffsetPaginationResult[Any]:
        rows, total = await repository.find_and_count(session, query)
        self._lazy.debug(
            lambda: f"Offset page: skip={query.skip} take={query.take} -> {len(rows)}/{total}"
        )
        return OffsetPaginationResult(data=list(rows), total=total)

    async def _cursor_paginate(
        self,
        request: PaginationRequest,
        query: QueryDescriptor,
        repository: BaseRepository[Any],
        session: AsyncSession,
        path: str,
        cursor: CursorSpec,
    ) -> CursorPaginationResult[Any]:
        rows = list(await repository.find(session, query))

        # A full page means there may be more rows after it
        last_item = rows[-1] if rows and len(rows) == query.take else None
        # Boundary follows the order the rows were fetched in, overrides included
        next_url = (
            self.urls.build(
                path,
                request,
                last_item,
                cursor,
                direction=query.order.get(cursor.sort_field),
            )
            if last_item is not None
            else None
        )
        after = item_identifier(last_item, cursor.id_field) if last_item is not None else None

        self._lazy.debug(lambda: f"Cursor page: take={query.take} -> {len(rows)}, next={next_url}")
        return CursorPaginationResult(
            data=rows,
            cursor=CursorInfo(after=after),
            count=len(rows),
            next=next_url,
        )

    def _check_mode(self, request: PaginationRequest, cursor: CursorSpec) -> None:
        if not request.is_offset_mode:
            return
        boundaries = [key for key in cursor.boundary_keys if key in request.params]
        if not boundaries:
            return
        if self.reject_mixed_modes:
            self.logger.warning(
                "Rejected pagination request mixing page and cursor boundaries",
                extra={"page": request.page, "cursor_keys": boundaries},
            )
            raise ConflictingPaginationMode(boundaries)
        self._lazy.debug(lambda: f"page={request.page} wins over cursor keys {boundaries}")

    @staticmethod
    def _with_tiebreaker(query: QueryDescriptor, cursor: CursorSpec) -> QueryDescriptor:
        """Order by the id field after the sort field so rows with equal sort values stay stable."""
        direction = query.order.get(cursor.sort_field)
        if direction is None or cursor.id_field in query.order:
            return query
        return replace(query, order={**query.order, cursor.id_field: direction})


__all__ = ["PaginationService"]
