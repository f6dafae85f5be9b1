# src/truegold/application/pricing.py
"""
Pricing - Per-Gram Prices in Any Currency and Item Appraisal

PricingEngine combines a per-gram market quote with the resolved rate table.
AppraisalCalculator turns that into the melt value of an item of a given
weight and purity, and compares it against a shop's price.

Files that USE this module:
- truegold.application.market_service (load_market_board uses the engine)
- truegold.app (composition root, appraise command)
- tests.test_pricing (unit tests)

Files that this module USES:
- truegold.application.market_service (MarketQuoteSource)
- truegold.application.rates_service (ExchangeRateResolver)
- truegold.domain.conversion (convert)
- truegold.shared.validators (weight, purity and price checks)
"""
from __future__ import annotations  # Enable postponed evaluation of annotations

import asyncio
import logging
from typing import Any

from truegold.application.market_service import MarketQuoteSource
from truegold.application.rates_service import ExchangeRateResolver
from truegold.domain.conversion import convert
from truegold.domain.errors import InvalidInputError
from truegold.domain.metals import (
    SPOT_KIND_FOR_METAL,
    Metal,
    MetalKind,
    Purity,
    WeightUnit,
    allowed_purities,
    allowed_units,
)
from truegold.domain.models import AppraisalResult, MarketQuote, PriceComparison
from truegold.shared.validators import is_positive_number, validate_purity_factor

log = logging.getLogger(__name__)


class PricingEngine:
    def __init__(self, quotes: MarketQuoteSource, resolver: ExchangeRateResolver):
        self.quotes = quotes
        self.resolver = resolver

    def quote_in(self, kind: MetalKind, target_currency: str) -> MarketQuote:
        """
        Price one metal kind per gram in `target_currency`.

        The result keeps the quote's source. A price of 0.0 means the rate
        table has no entry for one of the currencies.
        """
        target = target_currency.upper()
        quote = self.quotes.quote(kind)
        table = self.resolver.resolve()
        value = convert(quote.price_per_gram, quote.currency, target, table)
        log.debug(
            "%s: %s %s/g -> %s %s/g (%s)",
            kind.value, quote.price_per_gram, quote.currency, value, target, quote.source.value,
        )
        return MarketQuote(kind=kind, price_per_gram=value, currency=target, source=quote.source)

    def price_per_gram(self, kind: MetalKind, target_currency: str) -> float:
        return self.quote_in(kind, target_currency).price_per_gram

    async def quote_in_async(self, kind: MetalKind, target_currency: str) -> MarketQuote:
        return await asyncio.to_thread(self.quote_in, kind, target_currency)

    async def price_per_gram_async(self, kind: MetalKind, target_currency: str) -> float:
        """Run the blocking lookup in a worker thread."""
        return await asyncio.to_thread(self.price_per_gram, kind, target_currency)


class AppraisalCalculator:
    """Melt value of an item from its weight and purity."""

    def __init__(self, engine: PricingEngine):
        self.engine = engine

    def appraise(self, kind: MetalKind, purity_factor: Any, grams: Any, target_currency: str) -> AppraisalResult:
        """
        Appraise `grams` of metal at `purity_factor` in `target_currency`.

        The Thai 96.5% price already reflects its fineness, so the purity
        factor is neither checked nor applied for that kind.

        Raises:
            InvalidInputError: If grams is not a positive finite number or,
                for spot kinds, purity_factor is outside (0, 1]
        """
        if not is_positive_number(grams):
            raise InvalidInputError("Please enter a valid weight")
        if not kind.is_regional and not validate_purity_factor(purity_factor):
            raise InvalidInputError("Purity must be greater than 0 and at most 1")

        target = target_currency.upper()
        per_gram = self.engine.price_per_gram(kind, target)

        if kind.is_regional:
            factor = 1.0
            note = f"Thai 96.5% price (per gram) in {target}"
        else:
            factor = float(purity_factor)
            note = f"Spot × purity ({round(factor * 100)}%) in {target}"

        adjusted = per_gram * factor
        total = adjusted * grams
        log.info("Appraised %s g %s at factor %s: %s %s", grams, kind.value, factor, total, target)
        return AppraisalResult(per_gram=adjusted, total=total, currency=target, note=note)

    def appraise_item(
        self,
        metal: Metal,
        purity: Purity,
        weight: Any,
        unit: WeightUnit,
        target_currency: str,
    ) -> AppraisalResult:
        """
        Appraise an item described the way a user enters it.

        Gold at Thai 96.5% is priced from the Thai market; every other grade
        uses the metal's spot price times the grade's factor.

        Raises:
            InvalidInputError: For a bad weight, or a unit or purity the metal does not offer
        """
        if unit not in allowed_units(metal):
            raise InvalidInputError(f"{unit.label} is not available for {metal.value}")
        if purity not in allowed_purities(metal):
            raise InvalidInputError(f"{purity.label} is not available for {metal.value}")
        if not is_positive_number(weight):
            raise InvalidInputError("Please enter a valid weight")

        grams = unit.to_grams(weight)
        if metal is Metal.GOLD and purity is Purity.THAI_965:
            return self.appraise(MetalKind.GOLD_THAI_965, 1.0, grams, target_currency)
        return self.appraise(SPOT_KIND_FOR_METAL[metal], purity.factor, grams, target_currency)

    @staticmethod
    def compare(result: AppraisalResult, quoted_price: Any) -> PriceComparison:
        """
        Compare a shop's price with the appraisal total.

        Raises:
            InvalidInputError: If the quoted price is not a positive number
        """
        if not is_positive_number(quoted_price):
            raise InvalidInputError("Please enter a valid price")
        difference = quoted_price - result.total
        percent = difference / max(result.total, 1e-6) * 100
        return PriceComparison(
            quoted=float(quoted_price),
            appraised=result.total,
            difference=difference,
            percent=percent,
            currency=result.currency,
        )
