"""Turn a PaginationRequest into a repository-level query description."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from typing import Any

from blog_service.core.database.filters import Equals, Predicate
from blog_service.core.pagination.exceptions import (
    InvalidSortDirection,
    MalformedFilterKey,
    UnknownFilterField,
)
from blog_service.core.pagination.keys import WHERE, split_key
from blog_service.core.pagination.operators import (
    OperatorRegistry,
    coerce_value,
    default_registry,
)
from blog_service.core.pagination.schemas import SORT_DIRECTIONS, PaginationRequest
from blog_service.infra.logging import get_lazy_logger

_lazy = get_lazy_logger(__name__)

OVERRIDE_KEYS = frozenset({"where", "order", "take", "skip", "options"})


@dataclass(frozen=True, slots=True)
class QueryDescriptor:
    """What to fetch: predicates per field, sort per field, and bounds.

    Attributes:
        where: Field name to predicate, ANDed together
        order: Field name to ``"ASC"``/``"DESC"``, in priority order
        take: Row limit
        skip: Row offset (offset mode only)
        options: Extra loader options passed through to the statement
    """

    where: dict[str, Predicate] = field(default_factory=dict)
    order: dict[str, str] = field(default_factory=dict)
    take: int | None = None
    skip: int | None = None
    options: tuple[Any, ...] = ()

    def merge(self, overrides: Mapping[str, Any] | None) -> QueryDescriptor:
        """Shallow-merge caller overrides; each given key replaces ours wholesale.

        Plain values under ``where`` are treated as exact matches.

        Raises:
            ValueError: If ``overrides`` has a key other than where/order/take/skip/options
        """
        if not overrides:
            return self
        unknown = set(overrides) - OVERRIDE_KEYS
        if unknown:
            raise ValueError(f"Unsupported query override(s): {', '.join(sorted(unknown))}")

        changes = dict(overrides)
        if "where" in changes:
            changes["where"] = {
                name: value if isinstance(value, Predicate) else Equals(value)
                for name, value in changes["where"].items()
            }
        if "order" in changes:
            changes["order"] = dict(changes["order"])
        if "options" in changes:
            changes["options"] = tuple(changes["options"])
        return replace(self, **changes)


class QueryComposer:
    """Builds a :class:`QueryDescriptor` from a pagination request.

    Composition is pure: every error is raised here, before any database
    access.

    Example:
        composer = QueryComposer()
        query = composer.compose(request, fields={"id": int, "title": str})
    """

    __slots__ = ("registry",)

    def __init__(self, registry: OperatorRegistry | None = None) -> None:
        self.registry = registry or default_registry

    def compose(
        self,
        request: PaginationRequest,
        fields: Mapping[str, type | None] | None = None,
    ) -> QueryDescriptor:
        """Compose the query for ``request``.

        Args:
            request: Parsed pagination request
            fields: Filterable field names mapped to their Python type.
                When given, any other field is rejected.

        Returns:
            QueryDescriptor with where/order/take/skip filled in

        Raises:
            MalformedFilterKey: Key with the wrong number of segments
            UnknownOperator: ``where__f__op`` with an unregistered ``op``
            InvalidOperatorArity: Wrong number of comma-separated values
            InvalidSortDirection: ``order__f`` not ``ASC``/``DESC``
            UnknownFilterField: Field outside ``fields``
            InvalidFilterValue: Value not convertible to the field type
        """
        where: dict[str, Predicate] = {}
        order: dict[str, str] = {}

        for key, raw in request.params.items():
            parts = split_key(key)
            name = parts[1]
            if fields is not None and name not in fields:
                raise UnknownFilterField(name, key)
            field_type = fields.get(name) if fields is not None else None

            if parts[0] == WHERE:
                if len(parts) == 2:
                    where[name] = Equals(coerce_value(raw, field_type, key=key))
                else:
                    spec = self.registry.resolve(parts[2], key=key)
                    where[name] = spec.build(raw, field_type=field_type, key=key)
            else:
                if len(parts) != 2:
                    raise MalformedFilterKey(key, "2")
                if raw not in SORT_DIRECTIONS:
                    raise InvalidSortDirection(key, raw)
                order[name] = raw

        skip = (request.page - 1) * request.take if request.page else None
        query = QueryDescriptor(where=where, order=order, take=request.take, skip=skip)
        _lazy.debug(
            lambda: f"Composed query: where={query.where!r} order={query.order!r} "
            f"take={query.take} skip={query.skip}"
        )
        return query


def compose_query(
    request: PaginationRequest,
    fields: Mapping[str, type | None] | None = None,
    registry: OperatorRegistry | None = None,
) -> QueryDescriptor:
    """Shortcut for ``QueryComposer(registry).compose(request, fields)``."""
    return QueryComposer(registry).compose(request, fields)


__all__ = ["OVERRIDE_KEYS", "QueryComposer", "QueryDescriptor", "compose_query"]
