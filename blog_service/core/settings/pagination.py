"""Pagination settings for list endpoints.

Environment variables use PAGINATION_ prefix.
Example: PAGINATION_DEFAULT_TAKE=20, PAGINATION_MAX_TAKE=100
"""

from __future__ import annotations

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class PaginationSettings(BaseSettings):
    """Pagination configuration settings.

    Attributes:
        default_take: Page size when the request has no ``take``.
        max_take: Largest ``take`` a client may ask for.
        reject_mixed_modes: Reject requests that send ``page`` together with
            a cursor boundary key instead of silently using offset mode.
    """

    default_take: int = Field(
        default=20,
        ge=1,
        le=1000,
        description="Default page size when take is not specified",
    )
    max_take: int = Field(
        default=100,
        ge=1,
        le=10000,
        description="Maximum allowed page size (hard limit)",
    )
    reject_mixed_modes: bool = Field(
        default=False,
        description="Reject page + cursor boundary in the same request",
    )

    model_config = SettingsConfigDict(
        env_prefix="PAGINATION_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        frozen=True,
        extra="ignore",
    )

    @model_validator(mode="after")
    def _validate_limits(self) -> PaginationSettings:
        if self.default_take > self.max_take:
            raise ValueError("default_take cannot exceed max_take")
        return self
