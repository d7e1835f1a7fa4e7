"""RFC 7807 Problem Details schemas for error responses."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ProblemDetails(BaseModel):
    """RFC 7807 Problem Details for HTTP APIs.

    Provides a standardized way to carry machine-readable details
    of errors in HTTP responses.

    See: https://datatracker.ietf.org/doc/html/rfc7807

    Example:
        return JSONResponse(
            status_code=400,
            content=ProblemDetails(
                type="invalid-pagination-query",
                title="Bad Request",
                status=400,
                detail="Unknown filter operator 'near'",
                instance="/api/v1/posts",
            ).model_dump(exclude_none=True),
        )
    """

    type: str = Field(
        default="about:blank",
        min_length=1,
        max_length=200,
        description="URI reference identifying the problem type",
    )
    title: str = Field(
        min_length=1, max_length=200, description="Short, human-readable summary of the problem"
    )
    status: int = Field(ge=100, le=599, description="HTTP status code")
    detail: str | None = Field(
        default=None,
        max_length=2000,
        description="Human-readable explanation specific to this occurrence",
    )
    instance: str | None = Field(
        default=None,
        max_length=500,
        description="URI reference identifying the specific occurrence",
    )

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "type": "invalid-pagination-query",
                "title": "Bad Request",
                "status": 400,
                "detail": "Sort direction must be 'ASC' or 'DESC'",
                "instance": "http://localhost:8000/api/v1/posts?order__created_at=UP",
            }
        },
        str_strip_whitespace=True,
    )


class FieldError(BaseModel):
    """One failed field of a validation error."""

    field: str = Field(description="Dotted location of the field, e.g. query.take")
    message: str = Field(description="Validation message")
    type: str = Field(description="Pydantic error type")
    value: Any | None = Field(default=None, description="Rejected input")


class ValidationProblemDetails(ProblemDetails):
    """Problem details with per-field validation errors."""

    errors: list[FieldError] = Field(default_factory=list, description="Field-level errors")


__all__ = ["FieldError", "ProblemDetails", "ValidationProblemDetails"]
