# src/truegold/domain/models.py
"""
Domain Models - Pure Business Objects

This module contains domain models representing core business concepts:
- Rate tables and their cached snapshots
- Metal quotes (per provider unit and normalized per gram)
- Regional (Thai) gold market quotes
- Appraisal results and price comparisons
- Market board rows

Files that USE this module:
- truegold.application.* (all services use domain models)
- truegold.adapters.* (adapters create and use domain models)
- tests.* (tests use domain models for test data)

Files that this module USES:
- truegold.domain.metals (units and metal kinds)
- truegold.domain.errors (InvalidRateError for quote invariants)
"""

from __future__ import annotations  # Enable postponed evaluation of annotations

import math  # Finite-number checks for quote invariants
from dataclasses import dataclass, field  # Decorators for creating data classes
from datetime import datetime, timedelta  # Date/time utilities for cache timestamps
from enum import Enum  # Enumerations for sources
from typing import Dict, List, Optional  # Type hints

from truegold.domain.errors import InvalidRateError
from truegold.domain.metals import MetalKind, PriceUnit

# Units of currency per 1 unit of the reference currency (USD).
RateTable = Dict[str, float]


class RateSource(str, Enum):
    """Tier of the exchange-rate fallback chain that produced a table."""

    MOCK = "mock"
    CACHE = "cache"
    LIVE = "live"
    STALE_CACHE = "stale_cache"
    BUNDLED = "bundled"
    HARDCODED = "hardcoded"


@dataclass(frozen=True)
class RateLookup:
    """Successful answer from one exchange-rate fallback strategy."""

    rates: RateTable
    source: RateSource


@dataclass(frozen=True)
class CachedRateTable:
    """
    Rate table together with the moment it was fetched.

    Attributes:
        rates: Currency code -> units per reference unit
        fetched_at: UTC timestamp of the successful live fetch (None if unknown)
    """

    rates: RateTable
    fetched_at: Optional[datetime]

    def age(self, now: datetime) -> Optional[timedelta]:
        if self.fetched_at is None:
            return None
        return now - self.fetched_at

    def is_expired(self, ttl: timedelta, now: datetime) -> bool:
        """
        Check whether the snapshot is past its TTL.

        A snapshot read at exactly `ttl` counts as expired, so a zero TTL
        disables the cache entirely. A snapshot without a timestamp, or
        with one in the future, is always expired.
        """
        age = self.age(now)
        if age is None or age < timedelta(0):
            return True
        return age >= ttl


class QuoteSource(str, Enum):
    LIVE = "live"
    FALLBACK_CONSTANT = "fallback_constant"
    MOCK = "mock"


@dataclass(frozen=True)
class Quote:
    """
    Metal price in the unit a provider quotes it in.

    Attributes:
        price_per_unit: Price for one `unit` of metal, always finite and > 0
        unit: Unit the price refers to
        currency: Currency code of the price
        source: Whether the price is live, a fallback constant or mock data
    """

    price_per_unit: float
    unit: PriceUnit
    currency: str
    source: QuoteSource

    def __post_init__(self) -> None:
        price = self.price_per_unit
        if isinstance(price, bool) or not isinstance(price, (int, float)):
            raise InvalidRateError(f"Quote price must be a number, got {price!r}")
        if not math.isfinite(price) or price <= 0:
            raise InvalidRateError(f"Quote price must be positive and finite, got {price!r}")

    @property
    def price_per_gram(self) -> float:
        return self.price_per_unit / self.unit.grams


@dataclass(frozen=True)
class MarketQuote:
    """Aggregated per-gram price of a metal kind in its base currency."""

    kind: MetalKind
    price_per_gram: float
    currency: str
    source: QuoteSource

    @classmethod
    def from_quote(cls, kind: MetalKind, quote: Quote) -> "MarketQuote":
        return cls(
            kind=kind,
            price_per_gram=quote.price_per_gram,
            currency=quote.currency,
            source=quote.source,
        )


@dataclass(frozen=True)
class RegionalGoldQuote:
    """
    Thai gold market quote for 96.5% gold, in THB per baht weight.

    Values are customer-facing: `bar_sell` is what a customer pays for a
    bar, `bar_buy` is what the shop pays when buying one back. The upstream
    feed labels these the other way round; providers swap them on ingestion.
    """

    bar_sell: float
    bar_buy: float
    jewelry_sell: float
    jewelry_buy: float
    fetched_at: datetime
    currency: str = "THB"

    @property
    def is_inverted(self) -> bool:
        """Shop buy-back above its own sell price means the feed looks wrong."""
        return self.bar_buy > self.bar_sell


@dataclass(frozen=True)
class AppraisalResult:
    per_gram: float
    total: float
    currency: str
    note: str


@dataclass(frozen=True)
class PriceComparison:
    """
    Quoted price compared against an appraisal total.

    Attributes:
        quoted: Price asked (or offered) by a shop
        appraised: Appraised melt value
        difference: quoted - appraised
        percent: difference as a percentage of the appraised value
        is_markup: True when the quoted price is at or above melt value
    """

    quoted: float
    appraised: float
    difference: float
    percent: float
    currency: str

    @property
    def is_markup(self) -> bool:
        return self.difference >= 0


@dataclass(frozen=True)
class MarketRow:
    kind: MetalKind
    title: str
    currency: str
    value: float
    source: Optional[QuoteSource] = None


@dataclass
class MarketBoard:
    """Market prices for every metal kind, with per-kind failures recorded."""

    currency: str
    unit: PriceUnit
    rows: List[MarketRow] = field(default_factory=list)
    errors: Dict[MetalKind, str] = field(default_factory=dict)
    notice: Optional[str] = None
    error_message: Optional[str] = None
