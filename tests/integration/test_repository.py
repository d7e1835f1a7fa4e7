"""Integration tests for BaseRepository query methods."""
from __future__ import annotations

import pytest

from blog_service.core.database import Between, Equals, ILike, In, InvalidFilterError, IsNull, MoreThan, NotFoundError
from blog_service.core.pagination.composer import QueryDescriptor
from blog_service.features.posts.models import Post
from blog_service.features.posts.repository import PostRepository


@pytest.fixture
def repo() -> PostRepository:
    return PostRepository()


@pytest.mark.integration
class TestFind:
    """Tests for find / find_and_count."""

    async def test_find_with_predicates_and_order(self, db_session, make_posts, repo):
        await make_posts(5)

        rows = await repo.find(
            db_session,
            QueryDescriptor(where={"like_count": Between(2, 4)}, order={"id": "DESC"}, take=10),
        )

        assert [p.id for p in rows] == [4, 3, 2]

    async def test_find_take_and_skip(self, db_session, make_posts, repo):
        await make_posts(5)

        rows = await repo.find(db_session, QueryDescriptor(order={"id": "ASC"}, take=2, skip=2))

        assert [p.id for p in rows] == [3, 4]

    async def test_find_in_and_ilike(self, db_session, make_posts, repo):
        await make_posts(5)

        rows = await repo.find(
            db_session,
            QueryDescriptor(where={"id": In((1, 3, 5)), "title": ILike("%post 3%")}),
        )

        assert [p.id for p in rows] == [3]

    async def test_is_null(self, db_session, make_posts, repo):
        await make_posts(2)

        assert await repo.find(db_session, QueryDescriptor(where={"title": IsNull(True)})) == []
        assert len(await repo.find(db_session, QueryDescriptor(where={"title": IsNull(False)}))) == 2

    async def test_find_and_count_total_ignores_bounds(self, db_session, make_posts, repo):
        await make_posts(7)

        rows, total = await repo.find_and_count(
            db_session,
            QueryDescriptor(where={"id": MoreThan(2)}, order={"id": "ASC"}, take=2, skip=2),
        )

        assert [p.id for p in rows] == [5, 6]
        assert total == 5

    async def test_unknown_column_raises(self, db_session, repo):
        with pytest.raises(InvalidFilterError):
            await repo.find(db_session, QueryDescriptor(where={"author": Equals(1)}))


@pytest.mark.integration
class TestCrud:
    """Tests for basic CRUD."""

    async def test_create_and_get(self, db_session, repo):
        post = await repo.create(db_session, Post(title="Hello", content="World"))

        assert post.id is not None
        assert post.like_count == 0
        assert (await repo.get(db_session, post.id)).title == "Hello"

    async def test_get_or_raise_missing(self, db_session, repo):
        with pytest.raises(NotFoundError) as exc_info:
            await repo.get_or_raise(db_session, 999)

        assert exc_info.value.identifier == {"id": 999}

    async def test_create_many(self, db_session, repo):
        created = await repo.create_many(
            db_session,
            [Post(title=f"t{i}", content="c") for i in range(3)],
        )

        assert [p.id for p in created] == [1, 2, 3]


@pytest.mark.unit
def test_filterable_fields():
    """Every mapped column is filterable, typed by its Python type."""
    fields = PostRepository().filterable_fields()

    assert fields["id"] is int
    assert fields["title"] is str
    assert fields["like_count"] is int
    assert set(fields) == {
        "id",
        "created_at",
        "updated_at",
        "title",
        "content",
        "like_count",
        "comment_count",
    }
