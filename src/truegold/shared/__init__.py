# src/truegold/shared/__init__.py
"""
Shared Utilities - Cross-cutting Concerns

This package contains shared utilities used across all layers:
- Input validation and parsing
- Logging configuration
"""

from truegold.shared.logging_conf import setup_logging
from truegold.shared.validators import (
    is_positive_number,
    parse_decimal,
    parse_price,
    parse_weight,
    validate_currency_code,
    validate_purity_factor,
)

__all__ = [
    "setup_logging",
    "is_positive_number",
    "parse_decimal",
    "parse_price",
    "parse_weight",
    "validate_currency_code",
    "validate_purity_factor",
]
