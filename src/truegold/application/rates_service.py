# src/truegold/application/rates_service.py
"""
Rates Service - Tiered Exchange-Rate Resolution

Produces the rate table used for every currency conversion. Resolution walks
an ordered list of strategies and returns the first one that answers:

    online:  fresh cache -> live fetch -> stale cache -> bundled -> hardcoded
    offline: fresh cache -> stale cache -> bundled -> hardcoded
    mock:    hardcoded

Only a successful live fetch writes the cache. The resolver never raises and
never returns an empty table.

Files that USE this module:
- truegold.application.pricing (PricingEngine resolves the table per request)
- truegold.app (composition root, convert command)
- tests.test_rates_service (unit tests)

Files that this module USES:
- truegold.adapters.providers.base (ExchangeRateSource interface)
- truegold.adapters.persistence (RateCache, load_bundled_rates)
- truegold.adapters.network (ConnectivitySignal)
- truegold.domain.models (RateLookup, RateSource, CachedRateTable)
"""
from __future__ import annotations  # Enable postponed evaluation of annotations

import logging
import threading
from datetime import datetime, timedelta, timezone
from typing import Callable, List, Optional

from truegold.adapters.network.connectivity import ConnectivitySignal
from truegold.adapters.persistence.bundled import load_bundled_rates
from truegold.adapters.persistence.rate_cache import RateCache
from truegold.adapters.providers.base import ExchangeRateSource
from truegold.domain.errors import NoDataAvailableError
from truegold.domain.models import CachedRateTable, RateLookup, RateSource, RateTable

log = logging.getLogger(__name__)

# Last-resort table, units per 1 USD.
HARDCODED_RATES: RateTable = {
    "USD": 1.0,
    "THB": 35.0,
    "EUR": 0.91,
    "VND": 23000.0,
    "LAK": 21000.0,
    "KHR": 4100.0,
}

Strategy = Callable[[], Optional[RateLookup]]


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ExchangeRateResolver:
    """
    Resolve the full exchange-rate table through the fallback tiers.

    Tracks which tier answered last, so callers can tell the user when
    prices are based on offline data.
    """

    def __init__(
        self,
        source: ExchangeRateSource,
        cache: RateCache,
        connectivity: ConnectivitySignal,
        ttl: timedelta = timedelta(hours=12),
        bundled_loader: Callable[[], Optional[RateTable]] = load_bundled_rates,
        use_mock_data: bool = False,
        clock: Callable[[], datetime] = _utcnow,
    ):
        """
        Initialize the resolver.

        Args:
            source: Live rate client (raises on failure)
            cache: Snapshot cache of the last successful live fetch
            connectivity: Anything with a boolean `is_online`
            ttl: Cache lifetime; zero forces a live fetch every time
            bundled_loader: Returns the bundled table or None
            use_mock_data: Skip every tier and answer with the hardcoded table
            clock: Returns the current UTC time
        """
        self.source = source
        self.cache = cache
        self.connectivity = connectivity
        self.ttl = ttl
        self.bundled_loader = bundled_loader
        self.use_mock_data = use_mock_data
        self.clock = clock
        self.last_source: Optional[RateSource] = None
        self._lock = threading.Lock()

    # -------- strategies --------

    def _fresh_cache(self, snapshot: Optional[CachedRateTable], now: datetime) -> Optional[RateLookup]:
        if snapshot is None or snapshot.is_expired(self.ttl, now):
            return None
        log.debug("Using cached exchange rates (age=%s)", snapshot.age(now))
        return RateLookup(dict(snapshot.rates), RateSource.CACHE)

    def _any_cache(self, snapshot: Optional[CachedRateTable], now: datetime) -> Optional[RateLookup]:
        if snapshot is None:
            return None
        if snapshot.is_expired(self.ttl, now):
            log.warning("Using expired cached exchange rates (age=%s)", snapshot.age(now))
            return RateLookup(dict(snapshot.rates), RateSource.STALE_CACHE)
        return RateLookup(dict(snapshot.rates), RateSource.CACHE)

    def _live(self, now: datetime) -> Optional[RateLookup]:
        try:
            rates = self.source.fetch_rates()
        except Exception as e:
            log.warning("Live exchange-rate fetch failed, falling back: %s", e)
            return None
        if not rates:
            log.warning("Live exchange-rate fetch returned an empty table, falling back")
            return None

        try:
            self.cache.save(rates, now)
        except (OSError, RuntimeError) as e:
            log.error("Failed to save exchange rates to cache: %s", e)
        return RateLookup(dict(rates), RateSource.LIVE)

    def _bundled(self) -> Optional[RateLookup]:
        rates = self.bundled_loader()
        if not rates:
            return None
        log.warning("Using bundled default exchange rates")
        return RateLookup(dict(rates), RateSource.BUNDLED)

    def _load_snapshot(self) -> Optional[CachedRateTable]:
        try:
            return self.cache.load()
        except (OSError, RuntimeError, ValueError) as e:
            log.error("Failed to read exchange-rate cache: %s", e)
            return None

    def strategies(self) -> List[Strategy]:
        """
        Build the ordered fallback chain for the current connectivity.

        The cache is read once per resolution and shared by every tier.
        """
        now = self.clock()
        snapshot = self._load_snapshot()

        chain: List[Strategy] = [lambda: self._fresh_cache(snapshot, now)]
        if self.connectivity.is_online:
            chain.append(lambda: self._live(now))
        else:
            log.info("Offline, skipping live exchange-rate fetch")
        chain.append(lambda: self._any_cache(snapshot, now))
        chain.append(self._bundled)
        return chain

    @staticmethod
    def _first_available(chain: List[Strategy]) -> RateLookup:
        for strategy in chain:
            lookup = strategy()
            if lookup is not None and lookup.rates:
                return lookup
        raise NoDataAvailableError("No exchange-rate tier produced a table")

    # -------- public API --------

    def resolve_with_source(self) -> RateLookup:
        """
        Resolve the rate table and report which tier produced it.

        Returns:
            RateLookup with a non-empty table; never raises
        """
        with self._lock:
            if self.use_mock_data:
                lookup = RateLookup(dict(HARDCODED_RATES), RateSource.MOCK)
            else:
                try:
                    lookup = self._first_available(self.strategies())
                except NoDataAvailableError as e:
                    log.error("%s, using hardcoded rates", e)
                    lookup = RateLookup(dict(HARDCODED_RATES), RateSource.HARDCODED)
            self.last_source = lookup.source
            log.info("Exchange rates resolved from %s (%d currencies)", lookup.source.value, len(lookup.rates))
            return lookup

    def resolve(self) -> RateTable:
        """Resolve the rate table (units per 1 USD). Never raises."""
        return self.resolve_with_source().rates

    def get_last_source(self) -> Optional[RateSource]:
        """Tier that answered the most recent resolution, or None before the first call."""
        return self.last_source
