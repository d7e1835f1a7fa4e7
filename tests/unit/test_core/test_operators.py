"""Unit tests for the filter operator registry."""
from __future__ import annotations

from datetime import datetime
from decimal import Decimal

import pytest

from blog_service.core.database.filters import (
    Between,
    Equals,
    ILike,
    In,
    IsNull,
    LessThan,
    Like,
    MoreThan,
    MoreThanOrEqual,
    Not,
)
from blog_service.core.pagination.exceptions import (
    InvalidFilterValue,
    InvalidOperatorArity,
    UnknownOperator,
)
from blog_service.core.pagination.operators import (
    DEFAULT_OPERATORS,
    Arity,
    OperatorRegistry,
    OperatorSpec,
    coerce_value,
    default_registry,
)


@pytest.mark.unit
class TestCoerceValue:
    """Tests for raw value conversion."""

    def test_int(self):
        assert coerce_value("5", int) == 5

    def test_decimal(self):
        assert coerce_value("1.50", Decimal) == Decimal("1.50")

    def test_bool(self):
        assert coerce_value("true", bool) is True
        assert coerce_value("false", bool) is False

    def test_datetime(self):
        assert coerce_value("2025-01-02T03:04:05", datetime) == datetime(2025, 1, 2, 3, 4, 5)

    def test_str_and_unknown_types_pass_through(self):
        """String and untyped fields keep the raw value."""
        assert coerce_value("5", str) == "5"
        assert coerce_value("5", None) == "5"

    def test_already_typed_value_is_kept(self):
        assert coerce_value(7, int) == 7

    def test_invalid_value_raises(self):
        """Unconvertible values raise InvalidFilterValue naming the type."""
        with pytest.raises(InvalidFilterValue) as exc_info:
            coerce_value("abc", int, key="where__id")

        assert exc_info.value.key == "where__id"
        assert exc_info.value.value == "abc"
        assert exc_info.value.expected_type == "int"


@pytest.mark.unit
class TestDefaultRegistry:
    """Tests for the built-in operators."""

    def test_registered_operators(self):
        assert default_registry.names() == sorted(
            [
                "equal",
                "not",
                "more_than",
                "more_than_or_equal",
                "less_than",
                "less_than_or_equal",
                "like",
                "i_like",
                "between",
                "in",
                "is_null",
            ]
        )
        assert len(default_registry) == len(DEFAULT_OPERATORS)

    def test_unknown_operator_raises(self):
        with pytest.raises(UnknownOperator) as exc_info:
            default_registry.resolve("near", key="where__title__near")

        assert exc_info.value.operator == "near"
        assert exc_info.value.key == "where__title__near"

    @pytest.mark.parametrize(
        ("operator", "raw", "expected"),
        [
            ("equal", "3", Equals(3)),
            ("not", "3", Not(3)),
            ("more_than", "3", MoreThan(3)),
            ("more_than_or_equal", "3", MoreThanOrEqual(3)),
            ("less_than", "3", LessThan(3)),
        ],
    )
    def test_unary_operators_coerce(self, operator, raw, expected):
        """Comparison operators convert the value to the field type."""
        predicate = default_registry.resolve(operator).build(raw, field_type=int)

        assert predicate == expected

    def test_unary_keeps_commas(self):
        """Single-value operators use the whole raw value, commas included."""
        predicate = default_registry.resolve("equal").build("a,b", field_type=str)

        assert predicate == Equals("a,b")

    def test_i_like_wraps_pattern(self):
        predicate = default_registry.resolve("i_like").build("python", field_type=str)

        assert predicate == ILike("%python%")

    def test_like_uses_pattern_as_given(self):
        predicate = default_registry.resolve("like").build("Py%", field_type=str)

        assert predicate == Like("Py%")

    def test_between_two_values(self):
        predicate = default_registry.resolve("between").build("5,10", field_type=int)

        assert predicate == Between(5, 10)

    @pytest.mark.parametrize("raw", ["5", "1,2,3"])
    def test_between_wrong_arity_raises(self, raw):
        """between needs exactly two comma-separated values."""
        with pytest.raises(InvalidOperatorArity) as exc_info:
            default_registry.resolve("between").build(raw, key="where__id__between")

        assert exc_info.value.expected == "2"
        assert exc_info.value.received == len(raw.split(","))

    def test_in_values(self):
        predicate = default_registry.resolve("in").build("1,2,3", field_type=int)

        assert predicate == In((1, 2, 3))

    def test_in_rejects_empty_values(self):
        with pytest.raises(InvalidOperatorArity):
            default_registry.resolve("in").build("1,,3", field_type=int)

    def test_is_null_flag(self):
        assert default_registry.resolve("is_null").build("true") == IsNull(True)
        assert default_registry.resolve("is_null").build("false") == IsNull(False)

    def test_is_null_rejects_non_boolean(self):
        with pytest.raises(InvalidFilterValue):
            default_registry.resolve("is_null").build("maybe", key="where__title__is_null")


@pytest.mark.unit
class TestOperatorRegistry:
    """Tests for registering custom operators."""

    def test_register_custom_operator(self):
        registry = OperatorRegistry(DEFAULT_OPERATORS)
        registry.register(OperatorSpec("starts_with", Arity.UNARY, lambda v: Like(f"{v}%"), coerce=False))

        assert "starts_with" in registry
        assert registry.resolve("starts_with").build("Py") == Like("Py%")

    def test_duplicate_registration_raises(self):
        registry = OperatorRegistry(DEFAULT_OPERATORS)

        with pytest.raises(ValueError, match="already registered"):
            registry.register(OperatorSpec("equal", Arity.UNARY, Equals))

    def test_replace_existing_operator(self):
        registry = OperatorRegistry(DEFAULT_OPERATORS)
        registry.register(OperatorSpec("equal", Arity.UNARY, Not), replace=True)

        assert registry.resolve("equal").build("1", field_type=int) == Not(1)

    def test_custom_registry_does_not_touch_default(self):
        registry = OperatorRegistry()
        registry.register(OperatorSpec("equal", Arity.UNARY, Equals))

        assert "near" not in default_registry
        assert len(registry) == 1
