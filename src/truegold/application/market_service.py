# src/truegold/application/market_service.py
"""
Market Service - Per-Gram Metal Quotes and the Market Board

MarketQuoteAggregator asks the right provider for each MetalKind and turns
the answer into a per-gram price. A failing provider never fails the call:
spot kinds fall back to configured per-ounce constants, the Thai kind falls
back to the gold constant scaled by its fineness.

load_market_board() prices every kind concurrently for display.

Files that USE this module:
- truegold.application.pricing (PricingEngine reads quotes)
- truegold.app (composition root, market command)
- tests.test_market_service (unit tests)

Files that this module USES:
- truegold.adapters.providers.base (SpotPriceProvider, RegionalGoldSource)
- truegold.adapters.network (ConnectivitySignal)
- truegold.domain.models (Quote, MarketQuote, MarketBoard)
- truegold.config (fallback constants, fineness, reference currency)
"""
from __future__ import annotations  # Enable postponed evaluation of annotations

import asyncio
import logging
from typing import TYPE_CHECKING, Dict, Mapping, Optional, Protocol

from truegold.adapters.network.connectivity import ConnectivitySignal
from truegold.adapters.providers.base import RegionalGoldSource, SpotPriceProvider
from truegold.config import settings
from truegold.domain.errors import InvalidRateError
from truegold.domain.metals import MetalKind, PriceUnit
from truegold.domain.models import MarketBoard, MarketQuote, MarketRow, Quote, QuoteSource

if TYPE_CHECKING:
    from truegold.application.pricing import PricingEngine

log = logging.getLogger(__name__)

OFFLINE_NOTICE = "Offline — showing cached FX if available; live spot may be unavailable."
NO_DATA_MESSAGE = "No network and no cached data."

MOCK_USD_PER_GRAM: Dict[MetalKind, float] = {
    MetalKind.GOLD_SPOT: 2000.0,
    MetalKind.GOLD_THAI_965: 2200.0,
    MetalKind.SILVER_SPOT: 25.0,
    MetalKind.PLATINUM_SPOT: 950.0,
    MetalKind.PALLADIUM_SPOT: 1000.0,
}


class MarketQuoteSource(Protocol):
    """Anything that can price a MetalKind per gram."""

    def quote(self, kind: MetalKind) -> MarketQuote:
        ...


class MockQuoteSource:
    """Fixed USD-per-gram prices for offline testing and demos."""

    def quote(self, kind: MetalKind) -> MarketQuote:
        price = MOCK_USD_PER_GRAM[kind]
        return MarketQuote.from_quote(kind, Quote(price, PriceUnit.GRAM, "USD", QuoteSource.MOCK))


class MarketQuoteAggregator:
    def __init__(
        self,
        spot_provider: SpotPriceProvider,
        regional_source: RegionalGoldSource,
        fallbacks: Optional[Mapping[str, float]] = None,
        fineness: Optional[float] = None,
        reference_currency: Optional[str] = None,
        connectivity: Optional[ConnectivitySignal] = None,
    ):
        """
        Initialize the aggregator.

        Args:
            spot_provider: Spot midpoint client (per troy ounce)
            regional_source: Thai 96.5% market client (per baht weight)
            fallbacks: USD-per-troy-ounce constants keyed by symbol (XAU, XAG, XPT, XPD)
            fineness: Fineness applied to the gold constant for the Thai fallback
            reference_currency: Currency spot prices are requested in
            connectivity: Optional signal; providers are skipped while offline
        """
        self.spot_provider = spot_provider
        self.regional_source = regional_source
        self.fallbacks = dict(fallbacks or settings.fallback_usd_per_ozt)
        self.fineness = fineness or settings.thai_gold_fineness
        self.reference_currency = (reference_currency or settings.reference_currency).upper()
        self.connectivity = connectivity

    def _fallback_spot(self, kind: MetalKind) -> MarketQuote:
        price = self.fallbacks[kind.symbol]
        log.warning("Using fallback constant for %s: %s USD/ozt", kind.value, price)
        return MarketQuote.from_quote(
            kind, Quote(price, PriceUnit.TROY_OUNCE, "USD", QuoteSource.FALLBACK_CONSTANT)
        )

    @property
    def _offline(self) -> bool:
        return self.connectivity is not None and not self.connectivity.is_online

    def _spot_quote(self, kind: MetalKind) -> MarketQuote:
        if self._offline:
            return self._fallback_spot(kind)
        try:
            mid = self.spot_provider.fetch_mid_price(kind.symbol, self.reference_currency)
        except Exception as e:
            log.warning("Spot provider raised for %s: %s", kind.value, e)
            mid = None

        if mid is not None:
            try:
                quote = Quote(mid, PriceUnit.TROY_OUNCE, self.reference_currency, QuoteSource.LIVE)
                return MarketQuote.from_quote(kind, quote)
            except InvalidRateError as e:
                log.warning("Rejected spot price for %s: %s", kind.value, e)
        return self._fallback_spot(kind)

    def _regional_quote(self, kind: MetalKind) -> MarketQuote:
        regional = None
        if not self._offline:
            try:
                regional = self.regional_source.fetch_quote()
            except Exception as e:
                log.warning("Regional provider raised for %s: %s", kind.value, e)

        if regional is not None:
            try:
                quote = Quote(regional.bar_sell, PriceUnit.BAHT_WEIGHT, regional.currency, QuoteSource.LIVE)
                return MarketQuote.from_quote(kind, quote)
            except InvalidRateError as e:
                log.warning("Rejected regional price for %s: %s", kind.value, e)

        price = self.fallbacks["XAU"] * self.fineness
        log.warning("Using gold fallback x %s for %s", self.fineness, kind.value)
        return MarketQuote.from_quote(
            kind, Quote(price, PriceUnit.TROY_OUNCE, "USD", QuoteSource.FALLBACK_CONSTANT)
        )

    def quote(self, kind: MetalKind) -> MarketQuote:
        """
        Price one metal kind per gram.

        Returns:
            MarketQuote in the provider's currency (THB for the live Thai
            quote, otherwise the reference currency or USD for fallbacks)
        """
        if kind.is_regional:
            return self._regional_quote(kind)
        return self._spot_quote(kind)


async def load_market_board(
    engine: "PricingEngine",
    currency: str = "USD",
    unit: PriceUnit = PriceUnit.GRAM,
    is_online: bool = True,
) -> MarketBoard:
    """
    Price every metal kind concurrently in the display currency and unit.

    A kind that fails (or converts to 0.0 for want of a rate) is recorded in
    `errors` and left off the board; the others still load.
    """
    currency = currency.upper()
    board = MarketBoard(currency=currency, unit=unit)
    if not is_online:
        board.notice = OFFLINE_NOTICE

    kinds = list(MetalKind)
    results = await asyncio.gather(
        *(engine.quote_in_async(kind, currency) for kind in kinds),
        return_exceptions=True,
    )

    factor = unit.grams
    for kind, result in zip(kinds, results):
        if isinstance(result, BaseException):
            log.error("Failed to price %s: %s", kind.value, result)
            board.errors[kind] = str(result) or type(result).__name__
            continue
        if result.price_per_gram <= 0:
            board.errors[kind] = f"No exchange rate for {currency}"
            continue
        board.rows.append(
            MarketRow(
                kind=kind,
                title=kind.display_name,
                currency=currency,
                value=result.price_per_gram * factor,
                source=result.source,
            )
        )

    if not is_online and not board.rows:
        board.error_message = NO_DATA_MESSAGE
    return board
