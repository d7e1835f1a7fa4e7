"""Unit tests for PaginationService mode selection and ordering rules."""
from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

import pytest

from blog_service.core.pagination import (
    ConflictingPaginationMode,
    CursorSpec,
    PaginationRequest,
    PaginationService,
    QueryDescriptor,
)


def fake_repository(rows=None, total=0) -> MagicMock:
    repo = MagicMock()
    repo.filterable_fields.return_value = {"id": int, "created_at": None, "title": str}
    repo.find = AsyncMock(return_value=rows or [])
    repo.find_and_count = AsyncMock(return_value=(rows or [], total))
    return repo


@pytest.mark.unit
class TestModeSelection:
    """page selects offset mode, its absence cursor mode."""

    async def test_cursor_mode_skips_count(self):
        repo = fake_repository(rows=[{"id": 1}])
        service = PaginationService("http://localhost:8000")

        await service.paginate(PaginationRequest(take=5), repo, session=MagicMock())

        repo.find.assert_awaited_once()
        repo.find_and_count.assert_not_called()

    async def test_offset_mode_counts(self):
        repo = fake_repository(rows=[{"id": 1}], total=1)
        service = PaginationService("http://localhost:8000")

        result = await service.paginate(PaginationRequest(page=1, take=5), repo, session=MagicMock())

        repo.find_and_count.assert_awaited_once()
        assert result.total == 1

    async def test_conflict_raised_before_repository_call(self):
        repo = fake_repository()
        service = PaginationService("http://localhost:8000", reject_mixed_modes=True)
        request = PaginationRequest(page=1, params={"where__id__less_than": "5"})

        with pytest.raises(ConflictingPaginationMode):
            await service.paginate(request, repo, session=MagicMock())

        repo.find_and_count.assert_not_called()

    async def test_next_url_uses_mapping_rows(self):
        repo = fake_repository(rows=[{"id": 1}, {"id": 2}])
        service = PaginationService("http://localhost:8000")
        request = PaginationRequest(take=2, params={"order__created_at": "ASC"})

        result = await service.paginate(request, repo, MagicMock(), path="api/v1/posts")

        assert result.next == (
            "http://localhost:8000/api/v1/posts?take=2&order__created_at=ASC&where__id__more_than=2"
        )


@pytest.mark.unit
class TestTiebreaker:
    """id follows the sort field in the same direction."""

    def test_added_after_sort_field(self):
        query = QueryDescriptor(order={"created_at": "DESC"})

        ordered = PaginationService._with_tiebreaker(query, CursorSpec())

        assert list(ordered.order.items()) == [("created_at", "DESC"), ("id", "DESC")]

    def test_existing_id_order_kept(self):
        query = QueryDescriptor(order={"created_at": "DESC", "id": "ASC"})

        assert PaginationService._with_tiebreaker(query, CursorSpec()) is query

    def test_not_added_without_sort_field(self):
        query = QueryDescriptor(order={"title": "ASC"})

        assert PaginationService._with_tiebreaker(query, CursorSpec()) is query
