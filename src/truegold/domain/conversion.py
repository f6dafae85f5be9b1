# src/truegold/domain/conversion.py
"""
Currency Conversion - Pure Rate-Table Arithmetic

Converts amounts between two currency codes using a rate table whose values
are "units of currency per 1 unit of the reference currency".

Missing rates yield 0.0 instead of an exception. Callers must treat a 0.0
result as "unavailable" rather than as a real price.

Files that USE this module:
- truegold.application.pricing (PricingEngine converts quotes)
- truegold.app (convert command)

Files that this module USES:
- None (pure function)
"""
from __future__ import annotations

import logging
from typing import Mapping

log = logging.getLogger(__name__)


def convert(amount: float, from_currency: str, to_currency: str, table: Mapping[str, float]) -> float:
    """
    Convert `amount` from one currency to another.

    Args:
        amount: Amount in `from_currency`
        from_currency: Source currency code
        to_currency: Target currency code
        table: Rate table (units per reference unit)

    Returns:
        Converted amount (unrounded), the amount itself when both codes are
        equal, or 0.0 when either code is missing from the table
    """
    if from_currency == to_currency:
        return amount

    base_rate = table.get(from_currency)
    target_rate = table.get(to_currency)
    if base_rate is None or target_rate is None or base_rate <= 0:
        log.warning(
            "Missing exchange rate for %s or %s (table has %d entries), returning 0.0",
            from_currency, to_currency, len(table),
        )
        return 0.0

    result = amount / base_rate * target_rate
    log.debug("Converted %s %s -> %s %s", amount, from_currency, result, to_currency)
    return result
