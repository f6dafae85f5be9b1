# src/truegold/shared/validators.py
"""
Input Validation Utilities - User and Configuration Input

This module provides validation and parsing for the values that reach the
pricing core from outside: currency codes, typed weights and prices, and
purity factors. Parsing failures raise InvalidInputError, the only error
the pricing pipeline surfaces to the user.

Files that USE this module:
- truegold.config.settings (currency code validation in Settings)
- truegold.application.pricing (purity/weight/price validation)
- truegold.app (parses CLI weight and comparison price)

Files that this module USES:
- truegold.domain.errors (InvalidInputError)
"""
import math
import re
from numbers import Real
from typing import Any, Optional

from truegold.domain.errors import InvalidInputError

_CURRENCY_CODE = re.compile(r"^[A-Za-z]{3}$")


def validate_currency_code(code: str) -> bool:
    """
    Validate ISO-4217 style currency code format.

    Args:
        code: Currency code to validate (e.g. "USD")

    Returns:
        True if the code is exactly three letters, False otherwise
    """
    if not code:
        return False
    return bool(_CURRENCY_CODE.match(code))


def is_positive_number(value: Any) -> bool:
    """
    Check that a value is a finite, strictly positive real number.

    Booleans are rejected even though they are ints in Python.
    """
    if isinstance(value, bool) or not isinstance(value, Real):
        return False
    return math.isfinite(value) and value > 0


def parse_decimal(text: Optional[str]) -> Optional[float]:
    """
    Parse a user-typed decimal number.

    Accepts either a comma or a dot as the decimal separator so that
    "12,5" and "12.5" mean the same thing. When both appear, commas are
    thousands separators: "1,234.56" is 1234.56.

    Args:
        text: Raw user input

    Returns:
        Parsed float, or None if the text is empty or not a number
    """
    if text is None:
        return None
    cleaned = str(text).strip()
    if "." in cleaned:
        cleaned = cleaned.replace(",", "")
    else:
        cleaned = cleaned.replace(",", ".")
    if not cleaned:
        return None
    try:
        value = float(cleaned)
    except ValueError:
        return None
    if not math.isfinite(value):
        return None
    return value


def parse_weight(text: Optional[str]) -> float:
    """
    Parse a weight entered by the user.

    Raises:
        InvalidInputError: If the text is empty, non-numeric or not positive
    """
    value = parse_decimal(text)
    if value is None or value <= 0:
        raise InvalidInputError("Please enter a valid weight")
    return value


def parse_price(text: Optional[str]) -> float:
    """
    Parse a comparison price entered by the user.

    Raises:
        InvalidInputError: If the text is empty, non-numeric or not positive
    """
    value = parse_decimal(text)
    if value is None or value <= 0:
        raise InvalidInputError("Please enter a valid price")
    return value


def validate_purity_factor(factor: Any) -> bool:
    """Purity factors are fractional fineness in the half-open range (0, 1]."""
    return is_positive_number(factor) and factor <= 1.0
