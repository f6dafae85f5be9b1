# tests/test_market_service.py
"""
Market Service Tests - Unit Tests for Quote Aggregation and the Market Board

Files that USE this module:
- pytest (test runner executes these tests)

Files that this module USES:
- truegold.application.market_service (MarketQuoteAggregator, MockQuoteSource, load_market_board)
- truegold.application.pricing (PricingEngine for the board)
- unittest.mock (Mock providers and resolver)
- pytest (testing framework)
"""
import asyncio
import math
from datetime import datetime, timezone

import pytest  # Testing framework for writing and running tests

from unittest.mock import Mock  # Mock objects for providers and resolver

from truegold.adapters.network.connectivity import StaticConnectivity
from truegold.application.market_service import (
    NO_DATA_MESSAGE,
    OFFLINE_NOTICE,
    MarketQuoteAggregator,
    MockQuoteSource,
    load_market_board,
)
from truegold.application.pricing import PricingEngine
from truegold.domain.metals import MetalKind, PriceUnit
from truegold.domain.models import QuoteSource, RegionalGoldQuote

OZT = 31.1034768
FALLBACKS = {"XAU": 2400.0, "XAG": 28.0, "XPT": 950.0, "XPD": 1000.0}
SPOT_KINDS = [MetalKind.GOLD_SPOT, MetalKind.SILVER_SPOT, MetalKind.PLATINUM_SPOT, MetalKind.PALLADIUM_SPOT]


def _regional_quote(bar_sell=20000.0):
    return RegionalGoldQuote(
        bar_sell=bar_sell,
        bar_buy=bar_sell - 100,
        jewelry_sell=bar_sell + 300,
        jewelry_buy=bar_sell - 700,
        fetched_at=datetime(2024, 6, 1, tzinfo=timezone.utc),
    )


def _aggregator(mid=None, regional=None, connectivity=None):
    spot = Mock()
    spot.fetch_mid_price.return_value = mid
    regional_source = Mock()
    regional_source.fetch_quote.return_value = regional
    aggregator = MarketQuoteAggregator(
        spot_provider=spot,
        regional_source=regional_source,
        fallbacks=FALLBACKS,
        fineness=0.965,
        reference_currency="USD",
        connectivity=connectivity,
    )
    return aggregator, spot, regional_source


class TestSpotKinds:
    def test_live_price(self):
        aggregator, spot, _ = _aggregator(mid=2400.0)

        quote = aggregator.quote(MetalKind.GOLD_SPOT)

        assert quote.price_per_gram == pytest.approx(2400.0 / OZT)
        assert quote.currency == "USD"
        assert quote.source is QuoteSource.LIVE
        spot.fetch_mid_price.assert_called_once_with("XAU", "USD")

    @pytest.mark.parametrize("kind", SPOT_KINDS)
    def test_fallback_when_unavailable(self, kind):
        aggregator, _, _ = _aggregator(mid=None)

        quote = aggregator.quote(kind)

        assert quote.price_per_gram == pytest.approx(FALLBACKS[kind.symbol] / OZT)
        assert quote.price_per_gram > 0
        assert quote.currency == "USD"
        assert quote.source is QuoteSource.FALLBACK_CONSTANT

    def test_gold_fallback_per_gram(self):
        aggregator, _, _ = _aggregator(mid=None)
        assert aggregator.quote(MetalKind.GOLD_SPOT).price_per_gram == pytest.approx(77.16, abs=0.01)

    def test_provider_exception_isolated(self):
        aggregator, spot, _ = _aggregator()
        spot.fetch_mid_price.side_effect = RuntimeError("socket closed")

        quote = aggregator.quote(MetalKind.SILVER_SPOT)

        assert quote.source is QuoteSource.FALLBACK_CONSTANT
        assert quote.price_per_gram == pytest.approx(28.0 / OZT)

    @pytest.mark.parametrize("mid", [0.0, -5.0, math.nan])
    def test_invalid_live_price_falls_back(self, mid):
        aggregator, _, _ = _aggregator(mid=mid)
        assert aggregator.quote(MetalKind.PLATINUM_SPOT).source is QuoteSource.FALLBACK_CONSTANT

    def test_defaults_from_settings(self):
        aggregator = MarketQuoteAggregator(spot_provider=Mock(), regional_source=Mock())
        assert set(aggregator.fallbacks) == {"XAU", "XAG", "XPT", "XPD"}
        assert 0 < aggregator.fineness <= 1


class TestRegionalKind:
    def test_live_uses_bar_sell(self):
        aggregator, _, _ = _aggregator(regional=_regional_quote(20000.0))

        quote = aggregator.quote(MetalKind.GOLD_THAI_965)

        assert quote.price_per_gram == pytest.approx(20000.0 / 15.244)
        assert quote.currency == "THB"
        assert quote.source is QuoteSource.LIVE

    def test_fallback_scales_gold_by_fineness(self):
        aggregator, _, _ = _aggregator(regional=None)

        quote = aggregator.quote(MetalKind.GOLD_THAI_965)

        assert quote.price_per_gram == pytest.approx(2400.0 / OZT * 0.965)
        assert quote.currency == "USD"
        assert quote.source is QuoteSource.FALLBACK_CONSTANT

    def test_provider_exception_isolated(self):
        aggregator, _, regional_source = _aggregator()
        regional_source.fetch_quote.side_effect = ValueError("bad payload")
        assert aggregator.quote(MetalKind.GOLD_THAI_965).source is QuoteSource.FALLBACK_CONSTANT

    def test_does_not_call_spot_provider(self):
        aggregator, spot, _ = _aggregator(regional=_regional_quote())
        aggregator.quote(MetalKind.GOLD_THAI_965)
        spot.fetch_mid_price.assert_not_called()


class TestOfflineAggregator:
    def test_skips_providers(self):
        aggregator, spot, regional_source = _aggregator(
            mid=2400.0, regional=_regional_quote(), connectivity=StaticConnectivity(False)
        )

        for kind in MetalKind:
            assert aggregator.quote(kind).source is QuoteSource.FALLBACK_CONSTANT
        spot.fetch_mid_price.assert_not_called()
        regional_source.fetch_quote.assert_not_called()


class TestMockQuoteSource:
    @pytest.mark.parametrize(
        "kind,price",
        [
            (MetalKind.GOLD_SPOT, 2000.0),
            (MetalKind.GOLD_THAI_965, 2200.0),
            (MetalKind.SILVER_SPOT, 25.0),
            (MetalKind.PLATINUM_SPOT, 950.0),
            (MetalKind.PALLADIUM_SPOT, 1000.0),
        ],
    )
    def test_fixed_prices(self, kind, price):
        quote = MockQuoteSource().quote(kind)
        assert quote.price_per_gram == price
        assert quote.currency == "USD"
        assert quote.source is QuoteSource.MOCK


def _engine(quotes=None, rates=None):
    resolver = Mock()
    resolver.resolve.return_value = rates or {"USD": 1.0, "THB": 35.0}
    return PricingEngine(quotes or MockQuoteSource(), resolver)


class TestLoadMarketBoard:
    def test_all_kinds_in_order(self):
        board = asyncio.run(load_market_board(_engine(), currency="thb"))

        assert board.currency == "THB"
        assert [row.kind for row in board.rows] == list(MetalKind)
        assert board.rows[0].title == "Gold Spot"
        assert board.rows[0].value == pytest.approx(2000.0 * 35.0)
        assert board.errors == {}
        assert board.notice is None
        assert board.error_message is None

    def test_troy_ounce_display(self):
        board = asyncio.run(load_market_board(_engine(), unit=PriceUnit.TROY_OUNCE))
        gold = board.rows[0]
        assert gold.value == pytest.approx(2000.0 * OZT)
        assert board.unit is PriceUnit.TROY_OUNCE

    def test_failed_kind_isolated(self):
        mock_source = MockQuoteSource()

        def quote(kind):
            if kind is MetalKind.SILVER_SPOT:
                raise RuntimeError("silver feed down")
            return mock_source.quote(kind)

        quotes = Mock()
        quotes.quote.side_effect = quote

        board = asyncio.run(load_market_board(_engine(quotes)))

        assert MetalKind.SILVER_SPOT in board.errors
        assert "silver feed down" in board.errors[MetalKind.SILVER_SPOT]
        assert len(board.rows) == 4
        assert MetalKind.SILVER_SPOT not in [row.kind for row in board.rows]

    def test_offline_notice(self):
        board = asyncio.run(load_market_board(_engine(), is_online=False))
        assert board.notice == OFFLINE_NOTICE
        assert board.rows
        assert board.error_message is None

    def test_offline_without_data(self):
        board = asyncio.run(load_market_board(_engine(rates={"USD": 1.0}), currency="XYZ", is_online=False))

        assert board.rows == []
        assert set(board.errors) == set(MetalKind)
        assert board.error_message == NO_DATA_MESSAGE

    def test_row_source(self):
        board = asyncio.run(load_market_board(_engine()))
        assert all(row.source is QuoteSource.MOCK for row in board.rows)
