"""Next-page URLs for cursor pagination."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any
from urllib.parse import urlencode

from blog_service.core.pagination.schemas import DEFAULT_CURSOR, CursorSpec, PaginationRequest


def item_identifier(item: Any, id_field: str) -> Any:
    """Read ``id_field`` from an ORM row, model or mapping."""
    if isinstance(item, Mapping):
        return item.get(id_field)
    return getattr(item, id_field, None)


class CursorUrlBuilder:
    """Builds the absolute URL of the page after ``last_item``.

    The URL repeats every non-empty field of the request (take, page, then
    the filter keys in arrival order) except the boundary keys, then adds
    one boundary for the last item:

        ASC  -> where__id__more_than=<last id>
        DESC -> where__id__less_than=<last id>

    Example:
        builder = CursorUrlBuilder("http://localhost:8000")
        builder.build("api/v1/posts", request, last_item=post)
        # http://localhost:8000/api/v1/posts?take=2&order__created_at=ASC&where__id__more_than=2
    """

    __slots__ = ("base_url",)

    def __init__(self, base_url: str) -> None:
        self.base_url = base_url.rstrip("/")

    def build(
        self,
        path: str,
        request: PaginationRequest,
        last_item: Any,
        cursor: CursorSpec = DEFAULT_CURSOR,
        *,
        direction: str | None = None,
    ) -> str:
        """Build the next-page URL.

        Args:
            path: Resource path, with or without a leading slash
            request: Request that produced the current page
            last_item: Last row of the current (full) page
            cursor: Sort/id pair that defines the boundary
            direction: Sort direction the page was fetched with; defaults to
                the request's own ``order__<sort_field>``

        Returns:
            Absolute URL
        """
        reserved = cursor.boundary_keys
        pairs: list[tuple[str, Any]] = [
            (key, value)
            for key, value in request.query_items()
            if value and key not in reserved
        ]
        if direction is None:
            direction = request.sort_direction(cursor.sort_field)
        boundary = cursor.boundary_key(direction)
        pairs.append((boundary, item_identifier(last_item, cursor.id_field)))
        return f"{self.base_url}/{path.lstrip('/')}?{urlencode(pairs)}"


def build_next_url(
    base_url: str,
    path: str,
    request: PaginationRequest,
    last_item: Any,
    cursor: CursorSpec = DEFAULT_CURSOR,
    *,
    direction: str | None = None,
) -> str:
    """Functional form of :meth:`CursorUrlBuilder.build`."""
    return CursorUrlBuilder(base_url).build(path, request, last_item, cursor, direction=direction)


__all__ = ["CursorUrlBuilder", "build_next_url", "item_identifier"]
