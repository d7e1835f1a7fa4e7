"""Application settings for FastAPI configuration."""

from __future__ import annotations

from typing import Literal

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

Environment = Literal["development", "staging", "production", "test"]


class AppSettings(BaseSettings):
    """FastAPI application settings.

    Environment variables use APP_ prefix.
    Example: APP_DEBUG=true, APP_PUBLIC_HOST=api.example.com
    """

    # Service identity
    service_name: str = Field(
        default="blog-service",
        min_length=1,
        max_length=100,
        pattern=r"^[a-z0-9]+(-[a-z0-9]+)*$",
        description="Service name for logging (lowercase, hyphens allowed)",
    )
    title: str = Field(
        default="Blog Service API",
        min_length=1,
        max_length=200,
        description="API title displayed in documentation",
    )
    description: str = Field(
        default="Blog posts with query-string filtering and offset/cursor pagination",
        description="API description (supports Markdown)",
    )
    version: str = Field(
        default="1.0.0",
        min_length=1,
        max_length=50,
        pattern=r"^\d+\.\d+\.\d+(-[a-zA-Z0-9]+)?$",
        description="API version (semver format)",
    )
    environment: Environment = Field(
        default="development", description="Environment: development|staging|production|test",
    )
    api_prefix: str = Field(
        default="/api/v1",
        min_length=1,
        max_length=255,
        pattern=r"^/.*$",
        description="Base URL prefix for API routes (e.g., /api/v1)",
    )

    # FastAPI toggles
    debug: bool = Field(default=False, description="Enable debug mode")
    docs_url: str | None = Field(default="/docs", description="Swagger UI path")
    openapi_url: str | None = Field(default="/openapi.json", description="OpenAPI schema path")

    # Server configuration
    host: str = Field(
        default="0.0.0.0", min_length=1, max_length=255, description="Server bind host",
    )
    port: int = Field(default=8000, ge=1, le=65535, description="Server port")

    # Externally visible address, used to build absolute pagination links
    public_protocol: Literal["http", "https"] = Field(
        default="http",
        description="Scheme clients use to reach the service",
    )
    public_host: str = Field(
        default="localhost:8000",
        min_length=1,
        max_length=255,
        description="Host (and optional port) clients use to reach the service",
    )

    model_config = SettingsConfigDict(
        env_prefix="APP_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        frozen=True,
        extra="ignore",
        env_ignore_empty=True,
    )

    @model_validator(mode="after")
    def _validate_public_host(self) -> AppSettings:
        if "://" in self.public_host or self.public_host.endswith("/"):
            raise ValueError(
                "public_host must be a bare host[:port] without scheme or trailing slash"
            )
        return self

    @property
    def public_base_url(self) -> str:
        """Absolute base URL, e.g. ``https://api.example.com``."""
        return f"{self.public_protocol}://{self.public_host}"
