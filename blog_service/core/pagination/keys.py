"""Filter key parsing.

Query-string filter keys are double-underscore encoded:

    where__title             -> ["where", "title"]              exact match
    where__id__more_than     -> ["where", "id", "more_than"]    operator filter
    order__created_at        -> ["order", "created_at"]         sort direction
"""

from __future__ import annotations

from blog_service.core.pagination.exceptions import MalformedFilterKey

FILTER_DELIMITER = "__"
WHERE = "where"
ORDER = "order"
WHERE_KEY_PREFIX = f"{WHERE}{FILTER_DELIMITER}"
ORDER_KEY_PREFIX = f"{ORDER}{FILTER_DELIMITER}"


def is_filter_key(key: str) -> bool:
    """Whether ``key`` is a ``where__``/``order__`` key."""
    return key.startswith((WHERE_KEY_PREFIX, ORDER_KEY_PREFIX))


def split_key(key: str) -> list[str]:
    """Split a filter key on the delimiter.

    Args:
        key: Filter key such as ``where__id__more_than``

    Returns:
        Two segments (prefix, field) or three (prefix, field, operator)

    Raises:
        MalformedFilterKey: If the key has any other number of segments
            or an empty segment
    """
    parts = key.split(FILTER_DELIMITER)
    if len(parts) not in (2, 3) or not all(parts):
        expected = "2 or 3" if parts[0] == WHERE else "2"
        raise MalformedFilterKey(key, expected)
    return parts


def where_key(field: str, operator: str | None = None) -> str:
    """Build a ``where__`` key, the inverse of :func:`split_key`."""
    if operator:
        return FILTER_DELIMITER.join((WHERE, field, operator))
    return FILTER_DELIMITER.join((WHERE, field))


def order_key(field: str) -> str:
    """Build an ``order__`` key."""
    return FILTER_DELIMITER.join((ORDER, field))


__all__ = [
    "FILTER_DELIMITER",
    "ORDER",
    "ORDER_KEY_PREFIX",
    "WHERE",
    "WHERE_KEY_PREFIX",
    "is_filter_key",
    "order_key",
    "split_key",
    "where_key",
]
