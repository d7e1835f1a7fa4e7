"""Minimal generic repository for SQLAlchemy models.

Provides basic CRUD operations with explicit session passing, plus the
two query entry points used by the pagination engine:

    find()            rows only          (cursor mode)
    find_and_count()  rows + total count (offset mode)

Both take a QueryDescriptor whose predicates are applied to the model's
columns. For complex queries, use the session directly - this is a
convenience, not a cage.

Example:
    from blog_service.core.database import BaseRepository
    from blog_service.features.posts.models import Post

    class PostRepository(BaseRepository[Post]):
        '''Post-specific queries beyond basic CRUD.'''

    repo = PostRepository(Post)
    post = await repo.get(session, 1)
    rows, total = await repo.find_and_count(session, query)
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Generic, TypeVar, cast

from sqlalchemy import Select, func, select
from sqlalchemy import inspect as sa_inspect

from blog_service.core.database.exceptions import InvalidFilterError, NotFoundError
from blog_service.infra.logging import get_lazy_logger

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from sqlalchemy.ext.asyncio import AsyncSession
    from sqlalchemy.orm import InstrumentedAttribute

    from blog_service.core.pagination.composer import QueryDescriptor

T = TypeVar("T")


class BaseRepository(Generic[T]):
    """Generic repository providing CRUD and descriptor-driven queries.

    Subclass for model-specific queries:

        class PostRepository(BaseRepository[Post]):
            async def find_popular(self, session: AsyncSession) -> Sequence[Post]:
                stmt = select(Post).where(Post.like_count > 100)
                result = await session.execute(stmt)
                return result.scalars().all()
    """

    __slots__ = ("model", "_logger", "_lazy")

    def __init__(self, model: type[T]) -> None:
        """Initialize repository with model class.

        Args:
            model: SQLAlchemy model class (e.g., Post)
        """
        self.model = model
        # Standard logger for INFO/WARNING/ERROR
        self._logger = logging.getLogger(f"repository.{model.__name__}")
        # Lazy logger for DEBUG (zero overhead when DEBUG disabled)
        self._lazy = get_lazy_logger(f"repository.{model.__name__}")

    async def get(
        self,
        session: AsyncSession,
        id: Any,  # noqa: A002
        *,
        options: Iterable[Any] | None = None,
    ) -> T | None:
        """Get entity by primary key.

        Args:
            session: Database session
            id: Primary key value
            options: SQLAlchemy loader options (e.g., selectinload)

        Returns:
            Entity if found, None otherwise
        """
        if options:
            stmt = select(self.model).where(self._pk_attr() == id).options(*options)
            result = await session.execute(stmt)
            instance = result.scalar_one_or_none()
        else:
            instance = await session.get(self.model, id)

        self._lazy.debug(
            lambda: f"db.get: {self.model.__name__}({id}) -> {'found' if instance else 'not found'}"
        )
        return instance

    async def get_or_raise(
        self,
        session: AsyncSession,
        id: Any,  # noqa: A002
        *,
        options: Iterable[Any] | None = None,
    ) -> T:
        """Get entity by primary key or raise NotFoundError.

        Raises:
            NotFoundError: If entity doesn't exist
        """
        instance = await self.get(session, id, options=options)
        if instance is None:
            self._logger.info(
                "Entity not found",
                extra={
                    "entity": self.model.__name__,
                    "id": str(id),
                    "operation": "db.get_or_raise",
                },
            )
            raise NotFoundError(self.model.__name__, {"id": id})
        return instance

    async def create(self, session: AsyncSession, instance: T) -> T:
        """Persist a new entity.

        Adds to session, flushes to get generated values (like id),
        and refreshes to ensure instance is up-to-date.
        """
        session.add(instance)
        await session.flush()
        await session.refresh(instance)

        entity_id = getattr(instance, "id", None)
        self._lazy.debug(lambda: f"db.create: {self.model.__name__}(id={entity_id})")
        return instance

    async def create_many(self, session: AsyncSession, instances: Iterable[T]) -> Sequence[T]:
        """Persist multiple entities in one flush.

        Returns:
            Persisted entities with generated fields populated
        """
        instances_list = list(instances)
        session.add_all(instances_list)
        await session.flush()
        for instance in instances_list:
            await session.refresh(instance)

        self._lazy.debug(
            lambda: f"db.create_many: {self.model.__name__}({len(instances_list)} items)"
        )
        return instances_list

    async def find(self, session: AsyncSession, query: QueryDescriptor) -> Sequence[T]:
        """Fetch rows matching a query descriptor.

        Args:
            session: Database session
            query: Predicates, ordering and bounds

        Returns:
            Matching rows, in the descriptor's order

        Raises:
            InvalidFilterError: If the descriptor names a field that is not a column
        """
        stmt = self.build_statement(query)
        result = await session.execute(stmt)
        items = result.scalars().all()

        self._lazy.debug(
            lambda: f"db.find: {self.model.__name__}(take={query.take}, skip={query.skip}) -> {len(items)} items"
        )
        return items

    async def find_and_count(
        self,
        session: AsyncSession,
        query: QueryDescriptor,
    ) -> tuple[Sequence[T], int]:
        """Fetch one page of rows plus the total number of matching rows.

        The count ignores ordering and take/skip.

        Returns:
            Tuple of (rows, total)
        """
        filtered = self.build_statement(query, paginate=False, ordered=False)
        count_stmt = select(func.count()).select_from(filtered.subquery())
        total = (await session.execute(count_stmt)).scalar_one()

        result = await session.execute(self.build_statement(query))
        items = result.scalars().all()

        self._lazy.debug(
            lambda: f"db.find_and_count: {self.model.__name__}(take={query.take}, skip={query.skip}) -> {len(items)}/{total} items"
        )
        return items, total

    def build_statement(
        self,
        query: QueryDescriptor,
        *,
        paginate: bool = True,
        ordered: bool = True,
    ) -> Select[tuple[T]]:
        """Translate a query descriptor into a SELECT statement.

        Args:
            query: Predicates, ordering and bounds
            paginate: Apply take/skip and loader options
            ordered: Apply ORDER BY

        Returns:
            SQLAlchemy select statement
        """
        stmt = select(self.model)
        for name, predicate in query.where.items():
            stmt = stmt.where(predicate.to_clause(self._column(name)))
        if ordered:
            for name, direction in query.order.items():
                column = self._column(name)
                stmt = stmt.order_by(column.desc() if direction == "DESC" else column.asc())
        if paginate:
            if query.take is not None:
                stmt = stmt.limit(query.take)
            if query.skip:
                stmt = stmt.offset(query.skip)
            if query.options:
                stmt = stmt.options(*query.options)
        return stmt

    def filterable_fields(self) -> dict[str, type | None]:
        """Mapped column names and their Python types.

        Columns whose SQL type has no Python equivalent map to None, which
        leaves their filter values unconverted.
        """
        fields: dict[str, type | None] = {}
        for attr in sa_inspect(self.model).column_attrs:
            column = attr.columns[0]
            try:
                fields[attr.key] = column.type.python_type
            except NotImplementedError:
                fields[attr.key] = None
        return fields

    def _column(self, name: str) -> InstrumentedAttribute[Any]:
        """Model attribute for a column name.

        Raises:
            InvalidFilterError: If ``name`` is not a mapped column
        """
        if name not in sa_inspect(self.model).column_attrs:
            raise InvalidFilterError(
                f"{self.model.__name__} has no column '{name}'",
                filter_name=name,
            )
        return cast("InstrumentedAttribute[Any]", getattr(self.model, name))

    def _pk_attr(self) -> InstrumentedAttribute[Any]:
        """Get primary key attribute.

        Inspects the model to find the primary key column, falling back to 'id'.
        """
        mapper = sa_inspect(self.model)
        pk_cols = mapper.primary_key
        if pk_cols:
            return cast("InstrumentedAttribute[Any]", getattr(self.model, pk_cols[0].name))
        return cast("InstrumentedAttribute[Any]", self.model.id)  # type: ignore[attr-defined]


__all__ = ["BaseRepository"]
