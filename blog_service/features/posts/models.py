"""SQLAlchemy models for the posts feature."""
from __future__ import annotations

from sqlalchemy import Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from blog_service.core.database import TimestampedBase


class Post(TimestampedBase):
    """Blog post persisted in the database.

    Every mapped column is filterable and sortable through ``where__``/``order__``
    query keys, e.g. ``where__like_count__more_than=10``.
    """

    __tablename__ = "posts"

    title: Mapped[str] = mapped_column(String(200), nullable=False)
    content: Mapped[str] = mapped_column(Text(), nullable=False)
    like_count: Mapped[int] = mapped_column(Integer(), default=0, nullable=False)
    comment_count: Mapped[int] = mapped_column(Integer(), default=0, nullable=False)
