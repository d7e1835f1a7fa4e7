"""Errors raised while turning a pagination query string into a query.

All of them are client errors: they are raised during composition, before
any repository call, and the HTTP layer renders them as 400 responses.
"""

from __future__ import annotations

from typing import Any

from blog_service.core.database.exceptions import InvalidFilterError


class PaginationError(InvalidFilterError):
    """Base class for rejected pagination queries.

    Attributes:
        key: Query-string key that caused the error (if any)
        value: Offending raw value (if any)
    """

    error_type = "invalid-pagination-query"

    def __init__(
        self,
        message: str,
        key: str | None = None,
        value: Any | None = None,
        details: dict[str, Any] | None = None,
    ):
        merged = dict(details or {})
        if value is not None:
            merged["value"] = value
        super().__init__(message, filter_name=key, details=merged)
        self.key = key
        self.value = value


class MalformedFilterKey(PaginationError):
    """A ``where__``/``order__`` key does not split into 2 (or 3) segments."""

    def __init__(self, key: str, expected: str):
        prefix = key.split("__", 1)[0]
        super().__init__(
            f"'{prefix}' filter must split into {expected} segments on '__'",
            key=key,
            details={"expected_segments": expected},
        )
        self.expected = expected


class UnknownOperator(PaginationError):
    """The operator segment of a ``where__field__op`` key is not registered."""

    def __init__(self, operator: str, key: str | None = None):
        super().__init__(f"Unknown filter operator '{operator}'", key=key)
        self.operator = operator


class InvalidOperatorArity(PaginationError):
    """A multi-value operator did not get the number of values it needs."""

    def __init__(self, operator: str, expected: str, received: int, key: str | None = None):
        super().__init__(
            f"Operator '{operator}' expects {expected} comma-separated value(s), got {received}",
            key=key,
            details={"expected": expected, "received": received},
        )
        self.operator = operator
        self.expected = expected
        self.received = received


class InvalidSortDirection(PaginationError):
    """An ``order__`` value is neither ``ASC`` nor ``DESC``."""

    def __init__(self, key: str, value: Any):
        super().__init__(
            "Sort direction must be 'ASC' or 'DESC'",
            key=key,
            value=value,
        )


class UnknownFilterField(PaginationError):
    """The field named in a filter key is not filterable on this resource."""

    def __init__(self, field: str, key: str):
        super().__init__(f"Field '{field}' cannot be filtered or sorted", key=key)
        self.field = field


class InvalidFilterValue(PaginationError):
    """A filter value cannot be converted to the field's type."""

    def __init__(self, key: str, value: Any, expected_type: str):
        super().__init__(
            f"Value is not a valid {expected_type}",
            key=key,
            value=value,
            details={"expected_type": expected_type},
        )
        self.expected_type = expected_type


class ConflictingPaginationMode(PaginationError):
    """``page`` was sent together with a cursor boundary key."""

    def __init__(self, keys: list[str]):
        super().__init__(
            "Offset pagination ('page') cannot be combined with cursor boundaries",
            key=keys[0] if keys else None,
            details={"cursor_keys": keys},
        )
        self.keys = keys


__all__ = [
    "ConflictingPaginationMode",
    "InvalidFilterValue",
    "InvalidOperatorArity",
    "InvalidSortDirection",
    "MalformedFilterKey",
    "PaginationError",
    "UnknownFilterField",
    "UnknownOperator",
]
