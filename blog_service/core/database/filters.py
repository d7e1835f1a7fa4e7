"""Column predicates for SQLAlchemy queries.

Predicates are small value objects describing one comparison against one
column. They are produced by the pagination operator registry and only
turned into SQL by the repository, which owns the model and its columns.

Usage:
    from sqlalchemy import select
    from blog_service.core.database.filters import Between, ILike

    stmt = select(Post)
    stmt = stmt.where(Between(5, 10).to_clause(Post.like_count))
    stmt = stmt.where(ILike("%python%").to_clause(Post.title))
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from sqlalchemy import ColumnElement
    from sqlalchemy.orm import InstrumentedAttribute


class Predicate(ABC):
    """Base class for column predicates.

    All predicates implement `to_clause()` which builds a boolean
    SQLAlchemy expression for the given column.
    """

    @abstractmethod
    def to_clause(self, column: InstrumentedAttribute[Any]) -> ColumnElement[bool]:
        """Build the WHERE clause for this predicate.

        Args:
            column: Model attribute the predicate applies to

        Returns:
            Boolean SQL expression
        """
        ...


@dataclass(frozen=True, slots=True)
class Equals(Predicate):
    """Exact match: ``column = value``."""

    value: Any

    def to_clause(self, column: InstrumentedAttribute[Any]) -> ColumnElement[bool]:
        return column == self.value


@dataclass(frozen=True, slots=True)
class Not(Predicate):
    """Negated match: ``column != value``."""

    value: Any

    def to_clause(self, column: InstrumentedAttribute[Any]) -> ColumnElement[bool]:
        return column != self.value


@dataclass(frozen=True, slots=True)
class MoreThan(Predicate):
    """Strict lower bound: ``column > value``."""

    value: Any

    def to_clause(self, column: InstrumentedAttribute[Any]) -> ColumnElement[bool]:
        return column > self.value


@dataclass(frozen=True, slots=True)
class MoreThanOrEqual(Predicate):
    """Inclusive lower bound: ``column >= value``."""

    value: Any

    def to_clause(self, column: InstrumentedAttribute[Any]) -> ColumnElement[bool]:
        return column >= self.value


@dataclass(frozen=True, slots=True)
class LessThan(Predicate):
    """Strict upper bound: ``column < value``."""

    value: Any

    def to_clause(self, column: InstrumentedAttribute[Any]) -> ColumnElement[bool]:
        return column < self.value


@dataclass(frozen=True, slots=True)
class LessThanOrEqual(Predicate):
    """Inclusive upper bound: ``column <= value``."""

    value: Any

    def to_clause(self, column: InstrumentedAttribute[Any]) -> ColumnElement[bool]:
        return column <= self.value


@dataclass(frozen=True, slots=True)
class Between(Predicate):
    """Inclusive range: ``column BETWEEN low AND high``."""

    low: Any
    high: Any

    def to_clause(self, column: InstrumentedAttribute[Any]) -> ColumnElement[bool]:
        return column.between(self.low, self.high)


@dataclass(frozen=True, slots=True)
class Like(Predicate):
    """Case-sensitive pattern match. The pattern is used as given."""

    pattern: str

    def to_clause(self, column: InstrumentedAttribute[Any]) -> ColumnElement[bool]:
        return column.like(self.pattern)


@dataclass(frozen=True, slots=True)
class ILike(Predicate):
    """Case-insensitive pattern match.

    SQLAlchemy renders ILIKE natively on PostgreSQL and as
    ``lower(x) LIKE lower(y)`` elsewhere.
    """

    pattern: str

    def to_clause(self, column: InstrumentedAttribute[Any]) -> ColumnElement[bool]:
        return column.ilike(self.pattern)


@dataclass(frozen=True, slots=True)
class In(Predicate):
    """Membership: ``column IN (values...)``."""

    values: tuple[Any, ...]

    def to_clause(self, column: InstrumentedAttribute[Any]) -> ColumnElement[bool]:
        return column.in_(self.values)


@dataclass(frozen=True, slots=True)
class IsNull(Predicate):
    """``column IS NULL`` when the flag is set, ``IS NOT NULL`` otherwise."""

    flag: bool = True

    def to_clause(self, column: InstrumentedAttribute[Any]) -> ColumnElement[bool]:
        return column.is_(None) if self.flag else column.is_not(None)


__all__ = [
    "Between",
    "Equals",
    "ILike",
    "In",
    "IsNull",
    "LessThan",
    "LessThanOrEqual",
    "Like",
    "MoreThan",
    "MoreThanOrEqual",
    "Not",
    "Predicate",
]
