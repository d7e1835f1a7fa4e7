"""Operator registry for ``where__<field>__<operator>`` filters.

Each operator token maps to an :class:`OperatorSpec` that knows how many
values it takes and which predicate it builds:

    ================== ========= ==========================================
    token              values    predicate
    ================== ========= ==========================================
    equal              1         Equals
    not                1         Not
    more_than          1         MoreThan
    more_than_or_equal 1         MoreThanOrEqual
    less_than          1         LessThan
    less_than_or_equal 1         LessThanOrEqual
    like               1         Like (pattern used as given)
    i_like             1         ILike (wrapped as ``%value%``)
    between            2         Between (``lo,hi``)
    in                 1..n      In (``a,b,c``)
    is_null            flag      IsNull (``true``/``false``)
    ================== ========= ==========================================

Raw query-string values are converted to the field's Python type with a
pydantic ``TypeAdapter`` (lax mode), so ``"5"`` becomes ``5`` for an
integer column and an ISO string becomes a ``datetime``. Pattern operators
and string fields skip the conversion.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass
from enum import StrEnum
from functools import lru_cache
from typing import Any

from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from blog_service.core.database.filters import (
    Between,
    Equals,
    ILike,
    In,
    IsNull,
    LessThan,
    LessThanOrEqual,
    Like,
    MoreThan,
    MoreThanOrEqual,
    Not,
    Predicate,
)
from blog_service.core.pagination.exceptions import (
    InvalidFilterValue,
    InvalidOperatorArity,
    UnknownOperator,
)

VALUE_SEPARATOR = ","


class Arity(StrEnum):
    """How an operator reads its raw value."""

    UNARY = "unary"  # the whole raw value, commas included
    BINARY = "binary"  # exactly two comma-separated values
    VARIADIC = "variadic"  # one or more comma-separated values
    FLAG = "flag"  # a boolean


@lru_cache(maxsize=64)
def _adapter(python_type: type) -> TypeAdapter[Any]:
    return TypeAdapter(python_type)


def coerce_value(raw: Any, python_type: type | None, *, key: str | None = None) -> Any:
    """Convert a raw query-string value to ``python_type``.

    Args:
        raw: Value as received (usually a string)
        python_type: Target type, ``None`` or ``str`` to keep the raw value
        key: Filter key, for error reporting

    Returns:
        The converted value

    Raises:
        InvalidFilterValue: If the value cannot be converted
    """
    if python_type is None or python_type is str or isinstance(raw, python_type):
        return raw
    try:
        return _adapter(python_type).validate_python(raw)
    except PydanticValidationError as e:
        raise InvalidFilterValue(key or "", raw, python_type.__name__) from e


@dataclass(frozen=True, slots=True)
class OperatorSpec:
    """One registered filter operator.

    Attributes:
        name: Operator token as it appears in the key
        arity: How the raw value is split into arguments
        builder: Callable receiving the parsed arguments, returning a Predicate
        coerce: Convert arguments to the field type before building
        wrap_pattern: Wrap the single argument as ``%value%``
    """

    name: str
    arity: Arity
    builder: Callable[..., Predicate]
    coerce: bool = True
    wrap_pattern: bool = False

    def split_args(self, raw: Any, *, key: str | None = None) -> list[Any]:
        """Split a raw value into the arguments this operator expects."""
        if self.arity is Arity.UNARY:
            return [raw]
        if self.arity is Arity.FLAG:
            return [coerce_value(raw, bool, key=key)]

        parts = str(raw).split(VALUE_SEPARATOR)
        if self.arity is Arity.BINARY and len(parts) != 2:
            raise InvalidOperatorArity(self.name, "2", len(parts), key=key)
        if self.arity is Arity.VARIADIC and not all(parts):
            raise InvalidOperatorArity(self.name, "1 or more non-empty", len(parts), key=key)
        return parts

    def build(
        self,
        raw: Any,
        *,
        field_type: type | None = None,
        key: str | None = None,
    ) -> Predicate:
        """Build the predicate for ``raw``.

        Args:
            raw: Raw filter value from the query string
            field_type: Python type of the filtered column, if known
            key: Filter key, for error reporting

        Returns:
            Predicate for the repository to apply
        """
        args = self.split_args(raw, key=key)
        if self.wrap_pattern:
            args = [f"%{args[0]}%"]
        elif self.coerce:
            args = [coerce_value(arg, field_type, key=key) for arg in args]
        return self.builder(*args)


class OperatorRegistry:
    """Maps operator tokens to their :class:`OperatorSpec`.

    Example:
        registry = OperatorRegistry(DEFAULT_OPERATORS)
        spec = registry.resolve("between")
        predicate = spec.build("5,10", field_type=int)  # Between(5, 10)
    """

    def __init__(self, specs: Iterable[OperatorSpec] = ()) -> None:
        self._specs: dict[str, OperatorSpec] = {}
        for spec in specs:
            self.register(spec)

    def register(self, spec: OperatorSpec, *, replace: bool = False) -> None:
        """Register an operator.

        Raises:
            ValueError: If the token is taken and ``replace`` is False
        """
        if spec.name in self._specs and not replace:
            raise ValueError(f"Operator '{spec.name}' is already registered")
        self._specs[spec.name] = spec

    def resolve(self, operator: str, *, key: str | None = None) -> OperatorSpec:
        """Look up an operator by token.

        Raises:
            UnknownOperator: If the token is not registered
        """
        try:
            return self._specs[operator]
        except KeyError:
            raise UnknownOperator(operator, key=key) from None

    def names(self) -> list[str]:
        """Registered operator tokens, sorted."""
        return sorted(self._specs)

    def __contains__(self, operator: object) -> bool:
        return operator in self._specs

    def __len__(self) -> int:
        return len(self._specs)


DEFAULT_OPERATORS: tuple[OperatorSpec, ...] = (
    OperatorSpec("equal", Arity.UNARY, Equals),
    OperatorSpec("not", Arity.UNARY, Not),
    OperatorSpec("more_than", Arity.UNARY, MoreThan),
    OperatorSpec("more_than_or_equal", Arity.UNARY, MoreThanOrEqual),
    OperatorSpec("less_than", Arity.UNARY, LessThan),
    OperatorSpec("less_than_or_equal", Arity.UNARY, LessThanOrEqual),
    OperatorSpec("like", Arity.UNARY, Like, coerce=False),
    OperatorSpec("i_like", Arity.UNARY, ILike, coerce=False, wrap_pattern=True),
    OperatorSpec("between", Arity.BINARY, Between),
    OperatorSpec("in", Arity.VARIADIC, lambda *values: In(tuple(values))),
    OperatorSpec("is_null", Arity.FLAG, IsNull, coerce=False),
)

default_registry = OperatorRegistry(DEFAULT_OPERATORS)


__all__ = [
    "DEFAULT_OPERATORS",
    "VALUE_SEPARATOR",
    "Arity",
    "OperatorRegistry",
    "OperatorSpec",
    "coerce_value",
    "default_registry",
]
