"""Core database package: declarative base, column predicates and repository.

Base Classes and Mixins:
    - Base: Declarative base with auto table naming and naming convention
    - IntegerPKMixin: Auto-incrementing integer primary key
    - TimestampMixin: created_at, updated_at tracking
    - TimestampedBase: Integer PK + timestamps

Repository:
    - BaseRepository[T]: Generic CRUD plus find/find_and_count over a QueryDescriptor

Predicates:
    - Equals, Not, MoreThan, MoreThanOrEqual, LessThan, LessThanOrEqual
    - Between, Like, ILike, In, IsNull

Exceptions:
    - RepositoryError, NotFoundError, InvalidFilterError
"""

from __future__ import annotations

from .base import NAMING_CONVENTION, Base, IntegerPKMixin, TimestampedBase, TimestampMixin
from .exceptions import InvalidFilterError, NotFoundError, RepositoryError
from .filters import (
    Between,
    Equals,
    ILike,
    In,
    IsNull,
    LessThan,
    LessThanOrEqual,
    Like,
    MoreThan,
    MoreThanOrEqual,
    Not,
    Predicate,
)
from .repository import BaseRepository

__all__ = [
    "NAMING_CONVENTION",
    "Base",
    "BaseRepository",
    "Between",
    "Equals",
    "ILike",
    "In",
    "IntegerPKMixin",
    "InvalidFilterError",
    "IsNull",
    "LessThan",
    "LessThanOrEqual",
    "Like",
    "MoreThan",
    "MoreThanOrEqual",
    "Not",
    "NotFoundError",
    "Predicate",
    "RepositoryError",
    "TimestampMixin",
    "TimestampedBase",
]
