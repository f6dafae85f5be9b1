# src/truegold/application/__init__.py
"""
Application Layer - Business Logic Services

This package contains the services that orchestrate domain objects and
adapters: exchange-rate resolution, market quotes and appraisal.
"""

from truegold.application.market_service import (
    MarketQuoteAggregator,
    MockQuoteSource,
    load_market_board,
)
from truegold.application.pricing import AppraisalCalculator, PricingEngine
from truegold.application.rates_service import HARDCODED_RATES, ExchangeRateResolver

__all__ = [
    "MarketQuoteAggregator",
    "MockQuoteSource",
    "load_market_board",
    "AppraisalCalculator",
    "PricingEngine",
    "HARDCODED_RATES",
    "ExchangeRateResolver",
]
