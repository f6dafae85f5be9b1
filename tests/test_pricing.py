# tests/test_pricing.py
"""
Pricing Tests - Unit Tests for the Pricing Engine and Appraisal

Files that USE this module:
- pytest (test runner executes these tests)

Files that this module USES:
- truegold.application.pricing (PricingEngine, AppraisalCalculator)
- truegold.application.market_service (MarketQuoteAggregator with failing providers)
- unittest.mock (Mock quotes, resolver and engine)
- pytest (testing framework)
"""
import asyncio
import math

import pytest  # Testing framework for writing and running tests

from unittest.mock import Mock  # Mock objects for quotes, resolver and engine

from truegold.application.market_service import MarketQuoteAggregator
from truegold.application.pricing import AppraisalCalculator, PricingEngine
from truegold.domain.errors import InvalidInputError
from truegold.domain.metals import Metal, MetalKind, Purity, WeightUnit
from truegold.domain.models import AppraisalResult, MarketQuote, QuoteSource

OZT = 31.1034768
RATES = {"USD": 1.0, "THB": 35.0, "EUR": 0.91}


def _resolver(rates=None):
    resolver = Mock()
    resolver.resolve.return_value = dict(rates or RATES)
    return resolver


def _quotes(price_per_gram=100.0, currency="USD", source=QuoteSource.LIVE):
    quotes = Mock()
    quotes.quote.side_effect = lambda kind: MarketQuote(kind, price_per_gram, currency, source)
    return quotes


def _fallback_engine(rates=None):
    """Engine whose providers are all down, so fallback constants apply."""
    spot = Mock()
    spot.fetch_mid_price.return_value = None
    regional = Mock()
    regional.fetch_quote.return_value = None
    aggregator = MarketQuoteAggregator(
        spot_provider=spot,
        regional_source=regional,
        fallbacks={"XAU": 2400.0, "XAG": 28.0, "XPT": 950.0, "XPD": 1000.0},
        fineness=0.965,
        reference_currency="USD",
    )
    return PricingEngine(aggregator, _resolver(rates))


class TestPricingEngine:
    def test_converts_to_target(self):
        engine = PricingEngine(_quotes(100.0), _resolver())
        assert engine.price_per_gram(MetalKind.GOLD_SPOT, "THB") == pytest.approx(3500.0)

    def test_same_currency(self):
        engine = PricingEngine(_quotes(100.0), _resolver())
        assert engine.price_per_gram(MetalKind.GOLD_SPOT, "usd") == 100.0

    def test_thb_quote_to_usd(self):
        engine = PricingEngine(_quotes(3500.0, currency="THB"), _resolver())
        assert engine.price_per_gram(MetalKind.GOLD_THAI_965, "USD") == pytest.approx(100.0)

    def test_missing_rate_gives_zero(self):
        engine = PricingEngine(_quotes(100.0), _resolver())
        assert engine.price_per_gram(MetalKind.GOLD_SPOT, "GBP") == 0.0

    def test_quote_in_keeps_source(self):
        engine = PricingEngine(_quotes(100.0, source=QuoteSource.FALLBACK_CONSTANT), _resolver())
        quote = engine.quote_in(MetalKind.SILVER_SPOT, "EUR")
        assert quote.currency == "EUR"
        assert quote.source is QuoteSource.FALLBACK_CONSTANT
        assert quote.price_per_gram == pytest.approx(91.0)

    def test_async_wrapper(self):
        engine = PricingEngine(_quotes(100.0), _resolver())
        result = asyncio.run(engine.price_per_gram_async(MetalKind.GOLD_SPOT, "THB"))
        assert result == pytest.approx(3500.0)

    def test_fallback_gold_per_gram(self):
        engine = _fallback_engine()
        assert engine.price_per_gram(MetalKind.GOLD_SPOT, "USD") == pytest.approx(2400.0 / OZT)

    def test_every_kind_positive_when_providers_fail(self):
        engine = _fallback_engine()
        for kind in MetalKind:
            assert engine.price_per_gram(kind, "THB") > 0


class TestAppraise:
    def test_gold_spot_fallback_appraisal(self):
        calculator = AppraisalCalculator(_fallback_engine())

        result = calculator.appraise(MetalKind.GOLD_SPOT, 0.999, 10, "USD")

        assert result.total == pytest.approx(2400.0 / OZT * 0.999 * 10)
        assert result.total == pytest.approx(770.85, abs=0.01)
        assert result.per_gram == pytest.approx(2400.0 / OZT * 0.999)
        assert result.currency == "USD"
        assert result.note == "Spot × purity (100%) in USD"

    def test_purity_note_rounds(self):
        calculator = AppraisalCalculator(PricingEngine(_quotes(100.0), _resolver()))
        assert calculator.appraise(MetalKind.GOLD_SPOT, 0.75, 1, "EUR").note == "Spot × purity (75%) in EUR"

    def test_regional_ignores_purity(self):
        engine = PricingEngine(_quotes(1312.0, currency="THB"), _resolver())
        calculator = AppraisalCalculator(engine)

        half = calculator.appraise(MetalKind.GOLD_THAI_965, 0.5, 10, "THB")
        full = calculator.appraise(MetalKind.GOLD_THAI_965, 1.0, 10, "THB")

        assert half.per_gram == 1312.0
        assert half.total == full.total == pytest.approx(13120.0)
        assert half.note == "Thai 96.5% price (per gram) in THB"

    @pytest.mark.parametrize("purity", [1.5, 0, -1, math.nan])
    def test_regional_accepts_any_purity(self, purity):
        engine = PricingEngine(_quotes(1312.0, currency="THB"), _resolver())
        calculator = AppraisalCalculator(engine)

        result = calculator.appraise(MetalKind.GOLD_THAI_965, purity, 10, "THB")

        assert result.per_gram == 1312.0
        assert result.total == pytest.approx(13120.0)

    def test_regional_still_checks_grams(self):
        calculator = AppraisalCalculator(PricingEngine(_quotes(1312.0, currency="THB"), _resolver()))
        with pytest.raises(InvalidInputError, match="valid weight"):
            calculator.appraise(MetalKind.GOLD_THAI_965, 1.5, 0, "THB")

    @pytest.mark.parametrize("grams", [0, -1, math.nan, math.inf, True, "10", None])
    def test_invalid_grams(self, grams):
        quotes = _quotes()
        calculator = AppraisalCalculator(PricingEngine(quotes, _resolver()))
        with pytest.raises(InvalidInputError, match="valid weight"):
            calculator.appraise(MetalKind.GOLD_SPOT, 0.999, grams, "USD")
        quotes.quote.assert_not_called()

    @pytest.mark.parametrize("purity", [0, -0.1, 1.0001, math.nan, False])
    def test_invalid_purity(self, purity):
        quotes = _quotes()
        calculator = AppraisalCalculator(PricingEngine(quotes, _resolver()))
        with pytest.raises(InvalidInputError):
            calculator.appraise(MetalKind.GOLD_SPOT, purity, 10, "USD")
        quotes.quote.assert_not_called()

    def test_full_purity_accepted(self):
        calculator = AppraisalCalculator(PricingEngine(_quotes(100.0), _resolver()))
        assert calculator.appraise(MetalKind.SILVER_SPOT, 1.0, 2, "USD").total == pytest.approx(200.0)


class TestAppraiseItem:
    def _calculator(self, per_gram=100.0):
        engine = Mock()
        engine.price_per_gram.return_value = per_gram
        return AppraisalCalculator(engine), engine

    def test_thai_gold_uses_regional_kind(self):
        calculator, engine = self._calculator()

        result = calculator.appraise_item(Metal.GOLD, Purity.THAI_965, 1, WeightUnit.BAHT_WEIGHT, "thb")

        engine.price_per_gram.assert_called_once_with(MetalKind.GOLD_THAI_965, "THB")
        assert result.total == pytest.approx(100.0 * 15.244)
        assert result.note.startswith("Thai 96.5%")

    def test_gold_karat_uses_spot(self):
        calculator, engine = self._calculator()

        result = calculator.appraise_item(Metal.GOLD, Purity.K18, 10, WeightUnit.GRAM, "USD")

        engine.price_per_gram.assert_called_once_with(MetalKind.GOLD_SPOT, "USD")
        assert result.per_gram == pytest.approx(75.0)
        assert result.total == pytest.approx(750.0)

    def test_silver_in_troy_ounces(self):
        calculator, engine = self._calculator()

        result = calculator.appraise_item(Metal.SILVER, Purity.SILVER_925, 2, WeightUnit.TROY_OUNCE, "USD")

        engine.price_per_gram.assert_called_once_with(MetalKind.SILVER_SPOT, "USD")
        assert result.total == pytest.approx(100.0 * 0.925 * 2 * OZT)

    def test_unit_not_allowed_for_metal(self):
        calculator, engine = self._calculator()
        with pytest.raises(InvalidInputError):
            calculator.appraise_item(Metal.SILVER, Purity.SILVER_999, 1, WeightUnit.BAHT_WEIGHT, "USD")
        engine.price_per_gram.assert_not_called()

    def test_purity_from_other_metal(self):
        calculator, _ = self._calculator()
        with pytest.raises(InvalidInputError):
            calculator.appraise_item(Metal.PLATINUM, Purity.K24, 1, WeightUnit.GRAM, "USD")

    def test_invalid_weight(self):
        calculator, _ = self._calculator()
        with pytest.raises(InvalidInputError, match="Please enter a valid weight"):
            calculator.appraise_item(Metal.GOLD, Purity.K24, 0, WeightUnit.GRAM, "USD")


class TestCompare:
    RESULT = AppraisalResult(per_gram=100.0, total=1000.0, currency="THB", note="")

    def test_markup(self):
        comparison = AppraisalCalculator.compare(self.RESULT, 1100.0)
        assert comparison.difference == pytest.approx(100.0)
        assert comparison.percent == pytest.approx(10.0)
        assert comparison.is_markup
        assert comparison.currency == "THB"

    def test_below_melt(self):
        comparison = AppraisalCalculator.compare(self.RESULT, 900)
        assert comparison.difference == pytest.approx(-100.0)
        assert comparison.percent == pytest.approx(-10.0)
        assert not comparison.is_markup

    def test_zero_total_guard(self):
        result = AppraisalResult(per_gram=0.0, total=0.0, currency="USD", note="")
        comparison = AppraisalCalculator.compare(result, 1.0)
        assert comparison.percent == pytest.approx(1.0 / 1e-6 * 100)

    @pytest.mark.parametrize("quoted", [0, -5, "100", None, True])
    def test_invalid_quoted(self, quoted):
        with pytest.raises(InvalidInputError, match="Please enter a valid price"):
            AppraisalCalculator.compare(self.RESULT, quoted)
