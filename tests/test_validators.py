# tests/test_validators.py
"""
Validator Tests - Unit Tests for Input Parsing and Validation

Files that USE this module:
- pytest (test runner executes these tests)

Files that this module USES:
- truegold.shared.validators (parsing and validation helpers)
- truegold.domain.errors (InvalidInputError)
- pytest (testing framework)
"""
import math

import pytest  # Testing framework for writing and running tests

from truegold.domain.errors import InvalidInputError
from truegold.shared.validators import (
    is_positive_number,
    parse_decimal,
    parse_price,
    parse_weight,
    validate_currency_code,
    validate_purity_factor,
)


class TestParseWeight:
    def test_dot_decimal(self):
        assert parse_weight("12.5") == 12.5

    def test_comma_decimal(self):
        assert parse_weight("12,5") == 12.5

    def test_surrounding_whitespace(self):
        assert parse_weight("  3 ") == 3.0

    @pytest.mark.parametrize("text", ["", "   ", None, "abc", "0", "-3", "nan", "inf"])
    def test_rejects_invalid(self, text):
        with pytest.raises(InvalidInputError, match="Please enter a valid weight"):
            parse_weight(text)


class TestParsePrice:
    def test_valid_price(self):
        assert parse_price("1000,50") == 1000.5

    @pytest.mark.parametrize("text", ["", "x", "0", "-1"])
    def test_rejects_invalid(self, text):
        with pytest.raises(InvalidInputError, match="Please enter a valid price"):
            parse_price(text)


class TestParseDecimal:
    def test_returns_none_for_garbage(self):
        assert parse_decimal("1.2.3") is None

    def test_thousands_separator_with_dot(self):
        assert parse_decimal("1,234.56") == 1234.56
        assert parse_decimal("25,000.5") == 25000.5

    def test_allows_zero_and_negative(self):
        assert parse_decimal("0") == 0.0
        assert parse_decimal("-2,5") == -2.5


class TestIsPositiveNumber:
    def test_accepts_ints_and_floats(self):
        assert is_positive_number(1)
        assert is_positive_number(0.001)

    @pytest.mark.parametrize("value", [0, -1, True, False, math.nan, math.inf, "10", None])
    def test_rejects(self, value):
        assert not is_positive_number(value)


class TestValidatePurityFactor:
    def test_bounds(self):
        assert validate_purity_factor(1.0)
        assert validate_purity_factor(0.375)
        assert not validate_purity_factor(0)
        assert not validate_purity_factor(1.01)
        assert not validate_purity_factor(-0.5)


class TestValidateCurrencyCode:
    def test_codes(self):
        assert validate_currency_code("USD")
        assert validate_currency_code("thb")
        assert not validate_currency_code("US")
        assert not validate_currency_code("USDT")
        assert not validate_currency_code("")
        assert not validate_currency_code("U5D")
