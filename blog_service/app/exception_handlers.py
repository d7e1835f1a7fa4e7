"""Global exception handlers for FastAPI application."""

from __future__ import annotations

import logging
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import ValidationError as PydanticValidationError

from blog_service.core.database.exceptions import (
    InvalidFilterError,
    NotFoundError,
    RepositoryError,
)
from blog_service.core.exceptions import AppException
from blog_service.core.schemas.problem_details import (
    FieldError,
    ProblemDetails,
    ValidationProblemDetails,
)

logger = logging.getLogger(__name__)

_TITLES = {
    400: "Bad Request",
    404: "Not Found",
    409: "Conflict",
    422: "Unprocessable Entity",
    500: "Internal Server Error",
    503: "Service Unavailable",
}


def _create_problem_detail(
    status_code: int,
    detail: str,
    type_: str = "about:blank",
    title: str | None = None,
    instance: str | None = None,
    extra: dict[str, Any] | None = None,
) -> dict[str, Any]:
    """Create RFC 7807 Problem Details response.

    Args:
        status_code: HTTP status code.
        detail: Human-readable error description.
        type_: Error type identifier.
        title: Short human-readable summary.
        instance: URI identifying this occurrence.
        extra: Additional context information.

    Returns:
        Dictionary representing the problem detail.
    """
    problem = ProblemDetails(
        type=type_,
        title=title or _TITLES.get(status_code, "Error"),
        status=status_code,
        detail=detail,
        instance=instance,
    )

    # Convert to dict and add extra fields
    response_data = problem.model_dump(exclude_none=True)
    if extra:
        response_data.update(extra)

    return response_data


def _field_errors(errors: list[Any]) -> list[FieldError]:
    return [
        FieldError(
            field=".".join(str(loc) for loc in error["loc"]),
            message=error["msg"],
            type=error["type"],
            value=error.get("input"),
        )
        for error in errors
    ]


async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
    """Handle custom application exceptions.

    Args:
        request: The FastAPI request object.
        exc: The application exception that was raised.

    Returns:
        JSONResponse with RFC 7807 Problem Details format.
    """
    logger.warning(
        "Application exception occurred",
        extra={
            "path": request.url.path,
            "method": request.method,
            "exception_type": exc.type,
            "status_code": exc.status_code,
            "detail": exc.detail,
        },
    )

    problem_data = _create_problem_detail(
        status_code=exc.status_code,
        detail=exc.detail,
        type_=exc.type,
        title=exc.title,
        instance=exc.instance or str(request.url),
        extra=exc.extra,
    )
    return JSONResponse(status_code=exc.status_code, content=problem_data)


async def repository_exception_handler(request: Request, exc: RepositoryError) -> JSONResponse:
    """Handle repository errors, including rejected filter and pagination queries.

    NotFoundError maps to 404, InvalidFilterError (and every PaginationError)
    to 400. Any other RepositoryError is a server fault.
    """
    if isinstance(exc, NotFoundError):
        status_code = status.HTTP_404_NOT_FOUND
        type_ = f"{exc.model_name.lower()}-not-found"
    elif isinstance(exc, InvalidFilterError):
        status_code = status.HTTP_400_BAD_REQUEST
        type_ = getattr(exc, "error_type", "invalid-filter")
    else:
        return await generic_exception_handler(request, exc)

    logger.warning(
        "Repository error occurred",
        extra={
            "path": request.url.path,
            "method": request.method,
            "exception_type": type(exc).__name__,
            "status_code": status_code,
            "detail": exc.message,
            "details": exc.details,
        },
    )

    problem_data = _create_problem_detail(
        status_code=status_code,
        detail=exc.message,
        type_=type_,
        instance=str(request.url),
        extra=exc.details,
    )
    return JSONResponse(status_code=status_code, content=problem_data)


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Handle FastAPI request validation errors with field-level details."""
    validation_errors = _field_errors(list(exc.errors()))

    logger.warning(
        "Request validation failed",
        extra={
            "path": request.url.path,
            "method": request.method,
            "error_count": len(validation_errors),
            "errors": [e.model_dump(mode="json") for e in validation_errors],
        },
    )

    problem = ValidationProblemDetails(
        type="validation-error",
        title="Validation Error",
        status=status.HTTP_422_UNPROCESSABLE_ENTITY,
        detail=f"Request validation failed for {len(validation_errors)} field(s)",
        instance=str(request.url),
        errors=validation_errors,
    )
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content=problem.model_dump(mode="json", exclude_none=True),
    )


async def pydantic_validation_exception_handler(
    request: Request, exc: PydanticValidationError
) -> JSONResponse:
    """Handle Pydantic validation errors outside of FastAPI request validation."""
    validation_errors = _field_errors(exc.errors())

    logger.warning(
        "Pydantic validation failed",
        extra={
            "path": request.url.path,
            "method": request.method,
            "error_count": len(validation_errors),
        },
    )

    problem = ValidationProblemDetails(
        type="validation-error",
        title="Validation Error",
        status=status.HTTP_422_UNPROCESSABLE_ENTITY,
        detail=f"Data validation failed for {len(validation_errors)} field(s)",
        instance=str(request.url),
        errors=validation_errors,
    )
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content=problem.model_dump(mode="json", exclude_none=True),
    )


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle unexpected exceptions.

    Logs the full traceback and returns a generic 500 error to the client.
    """
    logger.error(
        "Unexpected exception occurred",
        extra={
            "path": request.url.path,
            "method": request.method,
            "exception_type": type(exc).__name__,
            "exception_message": str(exc),
        },
        exc_info=exc,
    )

    # Don't expose internal details
    problem_data = _create_problem_detail(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail="An unexpected error occurred while processing your request",
        type_="internal-error",
        title="Internal Server Error",
        instance=str(request.url),
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=problem_data,
    )


def configure_exception_handlers(app: FastAPI) -> None:
    """Configure exception handlers for the FastAPI application.

    Args:
        app: The FastAPI application instance.
    """
    # Custom application exceptions
    app.add_exception_handler(AppException, app_exception_handler)

    # Repository, filter and pagination errors
    app.add_exception_handler(RepositoryError, repository_exception_handler)

    # FastAPI validation errors
    app.add_exception_handler(RequestValidationError, validation_exception_handler)

    # Pydantic validation errors
    app.add_exception_handler(PydanticValidationError, pydantic_validation_exception_handler)

    # Catch-all for unexpected exceptions
    app.add_exception_handler(Exception, generic_exception_handler)

    logger.info("Exception handlers configured")
