# src/truegold/adapters/formatting/__init__.py
"""
Formatting Adapters - Output Formatting

This package contains plain-text formatting for command-line output.
"""

from truegold.adapters.formatting.formatter import (
    fmt_money,
    format_appraisal,
    format_comparison,
    market_lines,
    rate_source_note,
)

__all__ = [
    "fmt_money",
    "format_appraisal",
    "format_comparison",
    "market_lines",
    "rate_source_note",
]
