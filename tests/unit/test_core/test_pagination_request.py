"""Unit tests for pagination request parsing and result envelopes."""
from __future__ import annotations

import pytest
from pydantic import BaseModel, ConfigDict, ValidationError

from blog_service.core.pagination.schemas import (
    CursorInfo,
    CursorPageResponse,
    CursorPaginationResult,
    CursorSpec,
    OffsetPageResponse,
    OffsetPaginationResult,
    PaginationRequest,
    build_page_response,
)


class Item(BaseModel):
    id: int

    model_config = ConfigDict(from_attributes=True)


@pytest.mark.unit
class TestFromQuery:
    """Tests for PaginationRequest.from_query."""

    def test_defaults(self):
        request = PaginationRequest.from_query({})

        assert request.page is None
        assert request.take == 20
        assert request.params == {}
        assert not request.is_offset_mode

    def test_parses_page_take_and_filters(self):
        request = PaginationRequest.from_query(
            [("page", "2"), ("take", "5"), ("where__title", "x"), ("order__id", "DESC")]
        )

        assert request.page == 2
        assert request.take == 5
        assert request.params == {"where__title": "x", "order__id": "DESC"}
        assert request.is_offset_mode

    def test_unrelated_keys_dropped(self):
        request = PaginationRequest.from_query({"q": "search", "where__title": "x"})

        assert request.params == {"where__title": "x"}

    def test_empty_values_dropped(self):
        request = PaginationRequest.from_query({"page": "", "where__title": ""})

        assert request.page is None
        assert request.params == {}

    def test_repeated_key_last_value_wins(self):
        request = PaginationRequest.from_query(
            [("where__id", "1"), ("order__id", "ASC"), ("where__id", "2")]
        )

        assert list(request.params.items()) == [("where__id", "2"), ("order__id", "ASC")]

    def test_take_capped(self):
        request = PaginationRequest.from_query({"take": "500"}, max_take=100)

        assert request.take == 100

    def test_default_take(self):
        assert PaginationRequest.from_query({}, default_take=7).take == 7

    @pytest.mark.parametrize("query", [{"page": "0"}, {"take": "0"}, {"take": "abc"}])
    def test_invalid_page_or_take_raises(self, query):
        with pytest.raises(ValidationError):
            PaginationRequest.from_query(query)

    def test_default_order_added_after_client_keys(self):
        request = PaginationRequest.from_query(
            {"where__title": "x"},
            default_order={"created_at": "ASC"},
        )

        assert list(request.params.items()) == [
            ("where__title", "x"),
            ("order__created_at", "ASC"),
        ]

    def test_default_order_does_not_replace_client_order(self):
        request = PaginationRequest.from_query(
            {"order__created_at": "DESC"},
            default_order={"created_at": "ASC"},
        )

        assert request.params == {"order__created_at": "DESC"}


@pytest.mark.unit
class TestPaginationRequest:
    """Tests for PaginationRequest model behavior."""

    def test_rejects_non_filter_params(self):
        with pytest.raises(ValidationError):
            PaginationRequest(params={"take": "5"})

    def test_frozen(self):
        request = PaginationRequest()

        with pytest.raises(ValidationError):
            request.take = 5

    def test_query_items_order(self):
        request = PaginationRequest(page=2, take=5, params={"order__id": "ASC"})

        assert list(request.query_items()) == [("take", 5), ("page", 2), ("order__id", "ASC")]

    def test_query_items_without_page(self):
        request = PaginationRequest(take=5)

        assert list(request.query_items()) == [("take", 5)]

    def test_sort_direction(self):
        request = PaginationRequest(params={"order__created_at": "DESC"})

        assert request.sort_direction("created_at") == "DESC"
        assert request.sort_direction("id") is None


@pytest.mark.unit
class TestCursorSpec:
    """Tests for CursorSpec."""

    def test_default_keys(self):
        cursor = CursorSpec()

        assert cursor.boundary_keys == ("where__id__more_than", "where__id__less_than")
        assert cursor.order_key == "order__created_at"

    def test_direction_selects_boundary(self):
        cursor = CursorSpec()

        assert cursor.boundary_key("ASC") == "where__id__more_than"
        assert cursor.boundary_key("DESC") == "where__id__less_than"
        assert cursor.boundary_key(None) == "where__id__less_than"

    def test_custom_fields(self):
        cursor = CursorSpec(sort_field="published_at", id_field="uid")

        assert cursor.after_key == "where__uid__more_than"
        assert cursor.order_key == "order__published_at"


@pytest.mark.unit
class TestBuildPageResponse:
    """Tests for converting engine results to response envelopes."""

    def test_offset_envelope(self):
        result = OffsetPaginationResult(data=[{"id": 1}, {"id": 2}], total=10)

        response = build_page_response(result, Item)

        assert isinstance(response, OffsetPageResponse)
        assert response.model_dump() == {"data": [{"id": 1}, {"id": 2}], "total": 10}

    def test_cursor_envelope(self):
        result = CursorPaginationResult(
            data=[{"id": 1}],
            cursor=CursorInfo(after=1),
            count=1,
            next="http://localhost:8000/posts?take=1&where__id__more_than=1",
        )

        response = build_page_response(result, Item)

        assert isinstance(response, CursorPageResponse)
        assert response.model_dump() == {
            "data": [{"id": 1}],
            "cursor": {"after": 1},
            "count": 1,
            "next": "http://localhost:8000/posts?take=1&where__id__more_than=1",
        }

    def test_cursor_result_has_more(self):
        short = CursorPaginationResult(data=[], cursor=CursorInfo(), count=0, next=None)

        assert short.has_more is False
