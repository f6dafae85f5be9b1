# src/truegold/adapters/providers/__init__.py
"""
Provider Adapters - External API Clients

This package contains adapters for the external exchange-rate and metal
price APIs. All providers implement one of the interfaces in `base`.
"""

from truegold.adapters.providers.base import (
    ExchangeRateSource,
    RegionalGoldSource,
    SpotPriceProvider,
)
from truegold.adapters.providers.exchange_rates import OpenErApiProvider
from truegold.adapters.providers.swissquote import SwissquoteSpotProvider, pick_best_price
from truegold.adapters.providers.thai_gold import ThaiGoldProvider

__all__ = [
    "ExchangeRateSource",
    "RegionalGoldSource",
    "SpotPriceProvider",
    "OpenErApiProvider",
    "SwissquoteSpotProvider",
    "pick_best_price",
    "ThaiGoldProvider",
]
