"""Pagination request and result types.

Request:
    PaginationRequest holds ``page``, ``take`` and every ``where__``/``order__``
    key of the query string, in arrival order.

Results:
    Offset mode  -> OffsetPaginationResult   {data, total}
    Cursor mode  -> CursorPaginationResult   {data, cursor: {after}, count, next}

Responses:
    OffsetPageResponse[T] / CursorPageResponse[T] are the pydantic envelopes
    returned by routes; they serialize to the same JSON shapes.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping, Sequence
from dataclasses import dataclass
from typing import Any, Generic, Literal, TypeVar

from pydantic import BaseModel, ConfigDict, Field, field_validator

from blog_service.core.pagination.keys import is_filter_key, order_key, where_key

T = TypeVar("T")

SortDirection = Literal["ASC", "DESC"]
SORT_DIRECTIONS: tuple[str, ...] = ("ASC", "DESC")


@dataclass(frozen=True, slots=True)
class CursorSpec:
    """Which sort field pairs with which identifier for cursor pagination.

    Ascending order on ``sort_field`` walks forward through increasing
    ``id_field`` values, descending order through decreasing ones; the
    boundary operator follows the direction.

    Attributes:
        sort_field: Field whose ``order__`` direction drives the cursor
        id_field: Row identifier carried forward as the boundary
    """

    sort_field: str = "created_at"
    id_field: str = "id"

    @property
    def after_key(self) -> str:
        """Boundary key for ascending traversal."""
        return where_key(self.id_field, "more_than")

    @property
    def before_key(self) -> str:
        """Boundary key for descending traversal."""
        return where_key(self.id_field, "less_than")

    @property
    def boundary_keys(self) -> tuple[str, str]:
        return (self.after_key, self.before_key)

    @property
    def order_key(self) -> str:
        return order_key(self.sort_field)

    def boundary_key(self, direction: str | None) -> str:
        """Boundary key for a sort direction; anything but ``ASC`` walks backwards."""
        return self.after_key if direction == "ASC" else self.before_key


DEFAULT_CURSOR = CursorSpec()


class PaginationRequest(BaseModel):
    """Parsed, untrusted pagination query.

    Attributes:
        page: Page number; its presence selects offset mode
        take: Page size / row limit
        params: ``where__``/``order__`` keys with raw string values, in
            arrival order (last write wins for repeated keys)

    Example:
        request = PaginationRequest.from_query(
            {"take": "10", "where__title__i_like": "python"},
            default_order={"created_at": "ASC"},
        )
    """

    page: int | None = Field(default=None, ge=1, description="Page number (offset mode)")
    take: int = Field(default=20, ge=1, description="Page size")
    params: dict[str, str] = Field(
        default_factory=dict,
        description="where__/order__ filter keys and their raw values",
    )

    model_config = ConfigDict(frozen=True)

    @field_validator("params")
    @classmethod
    def _only_filter_keys(cls, value: dict[str, str]) -> dict[str, str]:
        stray = [key for key in value if not is_filter_key(key)]
        if stray:
            raise ValueError(f"Not a where__/order__ key: {', '.join(stray)}")
        return value

    @classmethod
    def from_query(
        cls,
        query: Mapping[str, Any] | Iterable[tuple[str, Any]],
        *,
        default_take: int = 20,
        max_take: int | None = None,
        default_order: Mapping[str, str] | None = None,
    ) -> PaginationRequest:
        """Build a request from query-string pairs.

        Keys other than ``page``, ``take``, ``where__*`` and ``order__*`` are
        dropped, as are empty values. ``take`` is capped at ``max_take``.

        Args:
            query: Mapping or (key, value) pairs, e.g. ``request.query_params.multi_items()``
            default_take: Page size when ``take`` is absent
            max_take: Upper bound for ``take``
            default_order: Sort directions applied when the client sent none
                for that field, e.g. ``{"created_at": "ASC"}``

        Raises:
            pydantic.ValidationError: If ``page``/``take`` are not positive integers
        """
        pairs = query.items() if isinstance(query, Mapping) else query

        page: Any = None
        take: Any = None
        params: dict[str, str] = {}
        for key, value in pairs:
            if value is None or value == "":
                continue
            if key == "page":
                page = value
            elif key == "take":
                take = value
            elif is_filter_key(key):
                # Repeated keys: the last value wins, position of the first is kept
                params[key] = str(value)

        request = cls(
            page=page,
            take=take if take is not None else default_take,
            params=params,
        )
        if max_take is not None and request.take > max_take:
            request = request.model_copy(update={"take": max_take})
        if default_order:
            request = request.with_default_order(default_order)
        return request

    def with_default_order(self, defaults: Mapping[str, str]) -> PaginationRequest:
        """Copy with ``order__<field>`` set for every field the client left unsorted.

        Defaults go after the client's keys, so client sorts take priority.
        """
        missing = {
            order_key(field): direction
            for field, direction in defaults.items()
            if order_key(field) not in self.params
        }
        if not missing:
            return self
        return self.model_copy(update={"params": {**self.params, **missing}})

    @property
    def is_offset_mode(self) -> bool:
        return bool(self.page)

    def sort_direction(self, field: str) -> str | None:
        """Raw ``order__<field>`` value, if any."""
        return self.params.get(order_key(field))

    def query_items(self) -> Iterator[tuple[str, Any]]:
        """Every field of the request as query-string pairs, in emission order."""
        yield "take", self.take
        if self.page:
            yield "page", self.page
        yield from self.params.items()


@dataclass(frozen=True, slots=True)
class OffsetPaginationResult(Generic[T]):
    """Page-number pagination result.

    Attributes:
        data: Rows of the requested page
        total: Number of rows matching the filters, ignoring take/skip
    """

    data: Sequence[T]
    total: int


@dataclass(frozen=True, slots=True)
class CursorInfo:
    """Boundary of a cursor page: id of its last row, or None for a short page."""

    after: Any | None = None


@dataclass(frozen=True, slots=True)
class CursorPaginationResult(Generic[T]):
    """Cursor pagination result.

    Attributes:
        data: Rows of this page
        cursor: Id of the last row when the page was full
        count: ``len(data)``
        next: Absolute URL of the next page, None when this page was short
    """

    data: Sequence[T]
    cursor: CursorInfo
    count: int
    next: str | None

    @property
    def has_more(self) -> bool:
        return self.next is not None


PaginationResult = OffsetPaginationResult[Any] | CursorPaginationResult[Any]


class CursorInfoResponse(BaseModel):
    """Cursor block of a cursor page response."""

    after: int | str | None = Field(default=None, description="Id of the last item of a full page")


class OffsetPageResponse(BaseModel, Generic[T]):
    """Offset pagination response envelope.

    Usage:
        GET /posts?page=2&take=10
        {"data": [...], "total": 57}
    """

    data: list[T] = Field(default_factory=list, description="Items of the requested page")
    total: int = Field(ge=0, description="Total matching items")


class CursorPageResponse(BaseModel, Generic[T]):
    """Cursor pagination response envelope.

    Usage:
        GET /posts?take=10&order__created_at=DESC
        {"data": [...], "cursor": {"after": 91}, "count": 10,
         "next": "http://host/api/v1/posts?take=10&order__created_at=DESC&where__id__less_than=91"}
    """

    data: list[T] = Field(default_factory=list, description="Items of this page")
    cursor: CursorInfoResponse = Field(description="Boundary of this page")
    count: int = Field(ge=0, description="Number of items in this page")
    next: str | None = Field(default=None, description="URL of the next page")


def build_page_response(
    result: PaginationResult,
    item_model: type[BaseModel],
) -> OffsetPageResponse[Any] | CursorPageResponse[Any]:
    """Convert an engine result into its response envelope.

    Args:
        result: Result of ``PaginationService.paginate``
        item_model: Pydantic model validating each row (``from_attributes``)
    """
    items = [item_model.model_validate(row) for row in result.data]
    if isinstance(result, OffsetPaginationResult):
        return OffsetPageResponse[item_model](data=items, total=result.total)  # type: ignore[valid-type]
    return CursorPageResponse[item_model](  # type: ignore[valid-type]
        data=items,
        cursor=CursorInfoResponse(after=result.cursor.after),
        count=result.count,
        next=result.next,
    )


__all__ = [
    "DEFAULT_CURSOR",
    "SORT_DIRECTIONS",
    "CursorInfo",
    "CursorInfoResponse",
    "CursorPageResponse",
    "CursorPaginationResult",
    "CursorSpec",
    "OffsetPageResponse",
    "OffsetPaginationResult",
    "PaginationRequest",
    "PaginationResult",
    "SortDirection",
    "build_page_response",
]
