# src/truegold/adapters/providers/swissquote.py
"""
Swissquote Provider for Metal Spot Quotes

Fetches public bid/ask quotes for a metal symbol (XAU, XAG, XPT, XPD) in a
quote currency and returns the midpoint per troy ounce. No API key needed.

Each trading platform in the response lists prices per spread profile; the
tightest available profile wins according to a configurable preference
order (elite > prime > premium > standard by default).

Files that USE this module:
- truegold.application.market_service (MarketQuoteAggregator spot kinds)
- tests.test_providers (unit tests)

Files that this module USES:
- truegold.adapters.providers.base (SpotPriceProvider, get_json)
- truegold.config (settings for URL, timeout and tier preference)
"""
import logging
import math
from typing import Any, Dict, List, Optional, Sequence

from truegold.adapters.providers.base import NO_CACHE_HEADERS, SpotPriceProvider, get_json
from truegold.config import settings
from truegold.domain.errors import MalformedResponseError, ProviderUnavailableError

log = logging.getLogger(__name__)


def _platform_prices(platform: Dict[str, Any]) -> List[Any]:
    prices = platform.get("spreadProfilePrices")
    if prices is None:
        return []
    if not isinstance(prices, list):
        raise MalformedResponseError(f"spreadProfilePrices is not a list: {type(prices).__name__}")
    return prices


def _spread_prices(platforms: List[Any]) -> List[Dict[str, Any]]:
    prices: List[Dict[str, Any]] = []
    for platform in platforms:
        if not isinstance(platform, dict):
            continue
        for price in _platform_prices(platform):
            if isinstance(price, dict):
                prices.append(price)
    return prices


def pick_best_price(platforms: List[Any], preference: Sequence[str]) -> Optional[Dict[str, Any]]:
    """
    Pick the spread-profile price to use.

    Args:
        platforms: Decoded response (list of platform quotes)
        preference: Profile names, most preferred first (compared case-insensitively)

    Returns:
        First price matching the earliest preferred profile across all
        platforms, else the first price of the first platform, else None

    Raises:
        MalformedResponseError: If platforms or a platform's price list is not a list
    """
    if not isinstance(platforms, list):
        raise MalformedResponseError(f"platform quotes are not a list: {type(platforms).__name__}")
    prices = _spread_prices(platforms)
    for profile in preference:
        for price in prices:
            if str(price.get("spreadProfile", "")).lower() == profile.lower():
                return price

    first = platforms[0] if platforms and isinstance(platforms[0], dict) else None
    if first:
        first_prices = _platform_prices(first)
        if first_prices and isinstance(first_prices[0], dict):
            return first_prices[0]
    return None


class SwissquoteSpotProvider(SpotPriceProvider):
    name = "Swissquote"

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        tier_preference: Optional[Sequence[str]] = None,
    ):
        """
        Initialize Swissquote spot provider.

        Args:
            base_url: Optional instrument endpoint (defaults to settings.spot_quote_url)
            timeout: Optional HTTP timeout in seconds (defaults to settings.spot_timeout_seconds)
            tier_preference: Optional spread-profile order (defaults to settings.spot_tier_preference)
        """
        self.base_url = (base_url or settings.spot_quote_url).rstrip("/")
        self.timeout = timeout or settings.spot_timeout_seconds
        self.tier_preference = list(tier_preference or settings.spot_tier_preference)

    def quote_url(self, symbol: str, quote_currency: str) -> str:
        return f"{self.base_url}/{symbol.upper()}/{quote_currency.upper()}"

    def _mid_price(self, symbol: str, quote_currency: str) -> float:
        data = get_json(
            self.quote_url(symbol, quote_currency),
            self.timeout,
            self.name,
            headers=NO_CACHE_HEADERS,
        )
        if not isinstance(data, list) or not data:
            raise MalformedResponseError(f"{self.name} returned no platform quotes for {symbol}")

        best = pick_best_price(data, self.tier_preference)
        if best is None:
            raise MalformedResponseError(f"{self.name} returned no spread prices for {symbol}")

        try:
            bid = float(best["bid"])
            ask = float(best["ask"])
        except (KeyError, TypeError, ValueError) as e:
            raise MalformedResponseError(f"{self.name} price missing bid/ask: {e}") from e

        mid = (bid + ask) / 2.0
        if not math.isfinite(mid) or bid <= 0 or ask <= 0:
            raise MalformedResponseError(f"{self.name} returned non-positive bid/ask: {bid}/{ask}")

        log.info(
            "%s %s/%s profile=%s bid=%s ask=%s mid=%s",
            self.name, symbol, quote_currency, best.get("spreadProfile"), bid, ask, mid,
        )
        return mid

    def fetch_mid_price(self, symbol: str, quote_currency: str = "USD") -> Optional[float]:
        """
        Get the spot midpoint per troy ounce.

        Returns:
            Midpoint price, or None if the provider is unavailable or the
            payload is unusable
        """
        try:
            return self._mid_price(symbol, quote_currency)
        except (ProviderUnavailableError, MalformedResponseError) as e:
            log.warning("%s spot %s/%s unavailable: %s", self.name, symbol, quote_currency, e)
            return None
