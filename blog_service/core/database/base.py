"""Base database model classes with composable mixins.

This module provides the foundation for SQLAlchemy models with:
- Integer auto-increment primary keys
- Timestamp tracking (created_at, updated_at)
- Automatic table name generation

Examples:
    Simple model with integer PK and timestamps:
    class Post(Base, IntegerPKMixin, TimestampMixin):
        __tablename__ = "posts"
        title: Mapped[str] = mapped_column(String(255))

    Or the convenience base:
    class Post(TimestampedBase):
        __tablename__ = "posts"
"""

from __future__ import annotations

from datetime import UTC, datetime

from sqlalchemy import DateTime, MetaData
from sqlalchemy.orm import DeclarativeBase, Mapped, declared_attr, mapped_column
from sqlalchemy.sql import func

# Consistent naming convention for database constraints
NAMING_CONVENTION = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}


class Base(DeclarativeBase):
    """Declarative base with automatic table naming.

    Provides:
    - Consistent constraint naming via NAMING_CONVENTION
    - Automatic table name generation from class name (lowercase)

    The automatic table naming can be overridden by setting __tablename__
    explicitly on the model class.
    """

    metadata = MetaData(naming_convention=NAMING_CONVENTION)

    @declared_attr.directive
    def __tablename__(cls) -> str:
        """Auto-derive table name from class name (lowercase)."""
        return cls.__name__.lower()


class IntegerPKMixin:
    """Integer auto-increment primary key.

    Sequential ids double as the cursor boundary for cursor pagination,
    so newer rows always carry larger ids.

    Provides:
        id: Auto-incrementing integer primary key
    """

    __allow_unmapped__ = True

    id: Mapped[int] = mapped_column(
        primary_key=True,
        autoincrement=True,
        comment="Auto-incrementing integer primary key",
    )


class TimestampMixin:
    """Timestamp tracking for create and update operations.

    Uses both Python-side defaults (for test environments) and database
    server defaults (for direct SQL inserts).

    Provides:
        created_at: Timestamp of record creation (immutable)
        updated_at: Timestamp of last modification (auto-updates)
    """

    __allow_unmapped__ = True

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(UTC),
        server_default=func.now(),
        nullable=False,
        comment="Timestamp of record creation",
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(UTC),
        server_default=func.now(),
        onupdate=lambda: datetime.now(UTC),
        nullable=False,
        comment="Timestamp of last update",
    )


class TimestampedBase(Base, IntegerPKMixin, TimestampMixin):
    """Integer PK + timestamps. Default base for feature models."""

    __abstract__ = True


__all__ = [
    "NAMING_CONVENTION",
    "Base",
    "IntegerPKMixin",
    "TimestampMixin",
    "TimestampedBase",
]
