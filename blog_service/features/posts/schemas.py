"""Pydantic schemas for the posts feature."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from blog_service.core.pagination import CursorPageResponse, OffsetPageResponse


class PostBase(BaseModel):
    """Shared attributes for post payloads."""

    title: str = Field(..., min_length=1, max_length=200)
    content: str = Field(..., min_length=1)


class PostCreate(PostBase):
    """Payload used when creating a post."""

    model_config = ConfigDict(str_strip_whitespace=True)


class PostResponse(PostBase):
    """Post returned by the API."""

    id: int
    like_count: int
    comment_count: int
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class GeneratedPostsResponse(BaseModel):
    """Result of seeding sample posts."""

    created: int = Field(ge=0, description="Number of posts created")


PostOffsetPage = OffsetPageResponse[PostResponse]
PostCursorPage = CursorPageResponse[PostResponse]
