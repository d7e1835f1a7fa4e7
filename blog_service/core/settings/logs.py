"""Logging configuration settings."""

from __future__ import annotations

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class LoggingSettings(BaseSettings):
    """Structured logging configuration.

    Environment variables use LOG_ prefix.
    Example: LOG_LEVEL=DEBUG, LOG_JSON_LOGS=false
    """

    service_name: str = Field(
        default="blog-service",
        description="Service name to include in log records (static field in JSON)",
    )
    level: LogLevel = Field(
        default="INFO",
        description="Root logger level (DEBUG|INFO|WARNING|ERROR|CRITICAL)",
    )
    json_logs: bool = Field(
        default=True,
        description="Enable JSON Lines (JSONL) formatted structured logs",
    )
    include_uvicorn: bool = Field(
        default=True,
        description="Route uvicorn loggers through the root handler",
    )

    model_config = SettingsConfigDict(
        env_prefix="LOG_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        frozen=True,
        extra="ignore",
    )
