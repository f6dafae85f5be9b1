# src/truegold/domain/__init__.py
"""
Domain Layer - Pure Business Objects

This package contains domain models, reference data and business rules.
No dependencies on infrastructure or external systems.
"""

from truegold.domain.conversion import convert
from truegold.domain.currency import Currency, CurrencyInfo
from truegold.domain.errors import (
    DomainError,
    InvalidInputError,
    InvalidRateError,
    MalformedResponseError,
    NoDataAvailableError,
    ProviderUnavailableError,
)
from truegold.domain.metals import (
    GRAMS_PER_BAHT_WEIGHT,
    GRAMS_PER_TROY_OUNCE,
    Metal,
    MetalKind,
    PriceUnit,
    Purity,
    WeightUnit,
    allowed_purities,
    allowed_units,
)
from truegold.domain.models import (
    AppraisalResult,
    CachedRateTable,
    MarketBoard,
    MarketQuote,
    MarketRow,
    PriceComparison,
    Quote,
    QuoteSource,
    RateLookup,
    RateSource,
    RateTable,
    RegionalGoldQuote,
)

__all__ = [
    "convert",
    "Currency",
    "CurrencyInfo",
    "DomainError",
    "InvalidInputError",
    "InvalidRateError",
    "MalformedResponseError",
    "NoDataAvailableError",
    "ProviderUnavailableError",
    "GRAMS_PER_BAHT_WEIGHT",
    "GRAMS_PER_TROY_OUNCE",
    "Metal",
    "MetalKind",
    "PriceUnit",
    "Purity",
    "WeightUnit",
    "allowed_purities",
    "allowed_units",
    "AppraisalResult",
    "CachedRateTable",
    "MarketBoard",
    "MarketQuote",
    "MarketRow",
    "PriceComparison",
    "Quote",
    "QuoteSource",
    "RateLookup",
    "RateSource",
    "RateTable",
    "RegionalGoldQuote",
]
