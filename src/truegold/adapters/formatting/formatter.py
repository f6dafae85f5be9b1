# src/truegold/adapters/formatting/formatter.py
"""
Text Formatter - Plain-Text Presentation

Formats the market board, appraisal results and price comparisons for the
command line. Amounts use the currency's symbol when it is known.

Files that USE this module:
- truegold.app (prints every command's output)
- tests.test_formatter (unit tests)

Files that this module USES:
- truegold.domain.models (MarketBoard, AppraisalResult, PriceComparison)
- truegold.domain.currency (currency symbols)
"""
from __future__ import annotations

from typing import Optional

from truegold.domain.currency import Currency
from truegold.domain.metals import PriceUnit
from truegold.domain.models import (
    AppraisalResult,
    MarketBoard,
    PriceComparison,
    QuoteSource,
    RateSource,
)

_UNIT_LABELS = {
    PriceUnit.GRAM: "g",
    PriceUnit.TROY_OUNCE: "ozt",
    PriceUnit.BAHT_WEIGHT: "baht wt",
}

_RATE_SOURCE_NOTES = {
    RateSource.STALE_CACHE: "Exchange rates: cached (expired)",
    RateSource.BUNDLED: "Exchange rates: bundled defaults",
    RateSource.HARDCODED: "Exchange rates: built-in estimates",
    RateSource.MOCK: "Exchange rates: mock data",
}


def fmt_money(value: float, currency: str) -> str:
    """
    Format an amount with its currency symbol.

    Returns:
        '$1,234.56' for known currencies, '1,234.56 XYZ' otherwise
    """
    known = Currency.from_code(currency)
    if known is None:
        return f"{value:,.2f} {currency}"
    return f"{known.symbol}{value:,.2f}"


def _fmt_pct(percent: float) -> str:
    """
    Format a signed percentage difference.

    Returns:
        String like '5.2% 📈', '3.1% 📉' or '0.0% ⏸'
    """
    arrow = "📈" if percent > 0 else ("📉" if percent < 0 else "⏸")
    return f"{abs(percent):.1f}% {arrow}"


def rate_source_note(source: Optional[RateSource]) -> Optional[str]:
    """Warning line for exchange rates that did not come from a live or fresh fetch."""
    if source is None:
        return None
    return _RATE_SOURCE_NOTES.get(source)


def market_lines(board: MarketBoard, rate_source: Optional[RateSource] = None) -> str:
    """
    Format the market board as one line per metal kind.

    Kinds that failed show 'N/A ⚠️'; prices from fallback constants are
    marked '(estimate)'.
    """
    unit = _UNIT_LABELS.get(board.unit, board.unit.value)
    lines = []
    if board.notice:
        lines.append(board.notice)

    by_kind = {row.kind: row for row in board.rows}
    for kind in list(by_kind) + list(board.errors):
        row = by_kind.get(kind)
        if row is None:
            lines.append(f"{kind.display_name}: N/A ⚠️")
            continue
        line = f"{row.title}: {fmt_money(row.value, row.currency)} / {unit}"
        if row.source is QuoteSource.FALLBACK_CONSTANT:
            line += " (estimate)"
        lines.append(line)

    note = rate_source_note(rate_source)
    if note:
        lines.append(note)
    if board.error_message:
        lines.append(board.error_message)
    return "\n".join(lines)


def format_appraisal(result: AppraisalResult) -> str:
    return (
        f"Per gram: {fmt_money(result.per_gram, result.currency)}\n"
        f"Total: {fmt_money(result.total, result.currency)}\n"
        f"{result.note}"
    )


def format_comparison(comparison: PriceComparison) -> str:
    """
    Format a shop price against the appraised value.

    Returns:
        Two lines: the quoted vs appraised amounts, then the markup or
        discount with its percentage
    """
    label = "Markup" if comparison.is_markup else "Below melt value"
    return (
        f"Quoted: {fmt_money(comparison.quoted, comparison.currency)} vs "
        f"appraised {fmt_money(comparison.appraised, comparison.currency)}\n"
        f"{label}: {fmt_money(abs(comparison.difference), comparison.currency)} "
        f"({_fmt_pct(comparison.percent)})"
    )
