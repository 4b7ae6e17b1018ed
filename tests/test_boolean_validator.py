"""Tests for BooleanValidator and its three modes."""

import math
from decimal import Decimal

import pytest

from dataknobs_schema import UNSET, Schema


class TestDefaultMode:
    """Test the default coercing mode."""

    def test_native_booleans(self):
        validator = Schema.boolean()
        assert validator.validate(True).data is True
        assert validator.validate(False).data is False

    @pytest.mark.parametrize(
        "value, expected",
        [("true", True), ("1", True), ("yes", True), ("on", True),
         ("false", False), ("0", False), ("no", False), ("off", False),
         ("TRUE", True), ("False", False), ("  Yes ", True), ("\tOFF\n", False)],
    )
    def test_string_representations(self, value, expected):
        result = Schema.boolean().validate(value)
        assert result.valid
        assert result.data is expected

    def test_numeric_representations(self):
        validator = Schema.boolean()
        assert validator.validate(1).data is True
        assert validator.validate(0).data is False

    def test_whole_float_counts_as_integer(self):
        """1.0 and 0.0 convert the same way as 1 and 0."""
        validator = Schema.boolean()
        assert validator.validate(1.0).data is True
        assert validator.validate(0.0).data is False
        assert validator.validate(Decimal("1")).data is True

    @pytest.mark.parametrize("value", ["maybe", "", "2", 2, -1, 0.5, math.nan, [], {}, None, UNSET])
    def test_rejects_unconvertible(self, value):
        result = Schema.boolean().validate(value)
        assert not result.valid
        assert len(result.errors) == 1
        assert "to boolean" in result.errors[0].message
        assert result.errors[0].message.startswith("Cannot convert")


class TestStrictMode:
    """Test strict mode."""

    def test_accepts_only_bool(self):
        validator = Schema.boolean().strict()
        assert validator.validate(True).valid
        assert validator.validate(False).valid

    @pytest.mark.parametrize("value", ["true", 1, 0, None])
    def test_rejects_everything_else(self, value):
        result = Schema.boolean().strict().validate(value)
        assert not result.valid
        assert result.errors[0].message.startswith("Expected boolean, received")


class TestTruthyMode:
    """Test truthy mode."""

    @pytest.mark.parametrize("value", ["", 0, 0.0, None, UNSET, math.nan, False])
    def test_falsy_values(self, value):
        result = Schema.boolean().truthy().validate(value)
        assert result.valid
        assert result.data is False

    @pytest.mark.parametrize("value", ["false", "0", 1, -3, [], {}, object(), True])
    def test_truthy_values(self, value):
        """Empty containers count as true."""
        result = Schema.boolean().truthy().validate(value)
        assert result.valid
        assert result.data is True

    def test_modes_are_exclusive(self):
        """The most recently configured mode wins."""
        assert not Schema.boolean().truthy().strict().validate("x").valid
        assert Schema.boolean().strict().truthy().validate("x").data is True

    @pytest.mark.parametrize("value", [Decimal("sNaN"), Decimal("NaN"), Decimal("0")])
    def test_decimal_special_values(self, value):
        """Signaling NaN is coerced without raising."""
        result = Schema.boolean().truthy().validate(value)
        assert result.valid
        assert result.data is False

    def test_optional_takes_precedence(self):
        """Optional absence short-circuits before truthiness."""
        result = Schema.boolean().truthy().optional().validate(None)
        assert result.valid
        assert result.data is UNSET
