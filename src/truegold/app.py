# src/truegold/app.py
"""
Application Entry Point - Service Wiring and Command Line

This module is the composition root: it builds every service once from the
settings and hands them to the command-line commands.

    truegold market   [--currency USD] [--unit gram|troy_ounce]
    truegold appraise --metal gold --purity k24 --weight 10 [--unit gram] [--currency USD] [--quoted 800]
    truegold convert  100 USD THB

Files that USE this module:
- pyproject.toml console script (truegold = truegold.app:main)
- tests.test_app (unit tests)

Files that this module USES:
- truegold.config (settings)
- truegold.shared.logging_conf (setup_logging)
- truegold.adapters.* (providers, persistence, connectivity, formatting)
- truegold.application.* (resolver, market service, pricing)
"""

from __future__ import annotations  # Enable postponed evaluation of annotations for forward references

import argparse
import asyncio
import logging
import sys
from dataclasses import dataclass
from functools import partial
from typing import List, Optional

from truegold.adapters.formatting.formatter import (
    fmt_money,
    format_appraisal,
    format_comparison,
    market_lines,
    rate_source_note,
)
from truegold.adapters.network.connectivity import ConnectivitySignal, StaticConnectivity
from truegold.adapters.persistence.bundled import load_bundled_rates
from truegold.adapters.persistence.rate_cache import InMemoryKeyValueStore, JsonFileKeyValueStore, RateCache
from truegold.adapters.providers.exchange_rates import OpenErApiProvider
from truegold.adapters.providers.swissquote import SwissquoteSpotProvider
from truegold.adapters.providers.thai_gold import ThaiGoldProvider
from truegold.application.market_service import (
    MarketQuoteAggregator,
    MarketQuoteSource,
    MockQuoteSource,
    load_market_board,
)
from truegold.application.pricing import AppraisalCalculator, PricingEngine
from truegold.application.rates_service import ExchangeRateResolver
from truegold.config import Settings, settings
from truegold.domain.conversion import convert
from truegold.domain.errors import InvalidInputError
from truegold.domain.metals import Metal, PriceUnit, Purity, WeightUnit
from truegold.shared.logging_conf import setup_logging
from truegold.shared.validators import parse_decimal, parse_price, parse_weight, validate_currency_code

log = logging.getLogger(__name__)


@dataclass
class Services:
    """Everything the commands need, built once per process."""

    connectivity: ConnectivitySignal
    cache: RateCache
    resolver: ExchangeRateResolver
    quotes: MarketQuoteSource
    engine: PricingEngine
    calculator: AppraisalCalculator


def build_services(config: Settings = settings, connectivity: Optional[ConnectivitySignal] = None) -> Services:
    """
    Wire providers, cache and services from settings.

    Args:
        config: Settings to build from (defaults to the global settings)
        connectivity: Optional connectivity signal (defaults to config.is_online)
    """
    if config.rate_cache_file:
        store = JsonFileKeyValueStore(config.rate_cache_file)
    else:
        store = InMemoryKeyValueStore()
    cache = RateCache(store, config.rate_cache_key)
    if config.clear_cache:
        cache.clear()

    if connectivity is None:
        connectivity = StaticConnectivity(config.is_online)

    resolver = ExchangeRateResolver(
        source=OpenErApiProvider(config.exchange_rate_url, config.rates_timeout_seconds),
        cache=cache,
        connectivity=connectivity,
        ttl=config.cache_ttl,
        bundled_loader=partial(load_bundled_rates, config.bundled_rates_file),
        use_mock_data=config.use_mock_data,
    )

    if config.use_mock_data:
        log.info("Mock data enabled, skipping metal providers")
        quotes: MarketQuoteSource = MockQuoteSource()
    else:
        quotes = MarketQuoteAggregator(
            spot_provider=SwissquoteSpotProvider(
                config.spot_quote_url,
                config.spot_timeout_seconds,
                config.spot_tier_preference,
            ),
            regional_source=ThaiGoldProvider(
                config.thai_gold_url,
                config.spot_timeout_seconds,
                config.thai_gold_user_agent,
            ),
            fallbacks=config.fallback_usd_per_ozt,
            fineness=config.thai_gold_fineness,
            reference_currency=config.reference_currency,
            connectivity=connectivity,
        )

    engine = PricingEngine(quotes, resolver)
    return Services(
        connectivity=connectivity,
        cache=cache,
        resolver=resolver,
        quotes=quotes,
        engine=engine,
        calculator=AppraisalCalculator(engine),
    )


def _currency(text: str) -> str:
    if not validate_currency_code(text):
        raise InvalidInputError(f"Unknown currency code: {text}")
    return text.upper()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="truegold", description="Precious-metal prices and appraisals")
    parser.add_argument("--offline", action="store_true", help="skip every network call")
    parser.add_argument("--mock", action="store_true", help="use fixed mock prices and rates")
    sub = parser.add_subparsers(dest="command", required=True)

    market = sub.add_parser("market", help="show current metal prices")
    market.add_argument("--currency", default="USD")
    market.add_argument(
        "--unit",
        choices=[PriceUnit.GRAM.value, PriceUnit.TROY_OUNCE.value],
        default=PriceUnit.GRAM.value,
    )

    appraise = sub.add_parser("appraise", help="appraise an item's melt value")
    appraise.add_argument("--metal", choices=[m.value for m in Metal], default=Metal.GOLD.value)
    appraise.add_argument("--purity", choices=[p.value for p in Purity], required=True)
    appraise.add_argument("--weight", required=True, help="item weight, comma or dot decimals")
    appraise.add_argument("--unit", choices=[u.value for u in WeightUnit], default=WeightUnit.GRAM.value)
    appraise.add_argument("--currency", default="USD")
    appraise.add_argument("--quoted", help="shop price to compare against")

    conv = sub.add_parser("convert", help="convert an amount between currencies")
    conv.add_argument("amount")
    conv.add_argument("from_currency")
    conv.add_argument("to_currency")
    return parser


def _run_market(services: Services, args: argparse.Namespace) -> str:
    board = asyncio.run(
        load_market_board(
            services.engine,
            currency=_currency(args.currency),
            unit=PriceUnit(args.unit),
            is_online=services.connectivity.is_online,
        )
    )
    return market_lines(board, services.resolver.last_source)


def _run_appraise(services: Services, args: argparse.Namespace) -> str:
    result = services.calculator.appraise_item(
        metal=Metal(args.metal),
        purity=Purity(args.purity),
        weight=parse_weight(args.weight),
        unit=WeightUnit(args.unit),
        target_currency=_currency(args.currency),
    )
    lines = [format_appraisal(result)]
    if args.quoted is not None:
        comparison = services.calculator.compare(result, parse_price(args.quoted))
        lines.append(format_comparison(comparison))
    note = rate_source_note(services.resolver.last_source)
    if note:
        lines.append(note)
    return "\n".join(lines)


def _run_convert(services: Services, args: argparse.Namespace) -> str:
    amount = parse_decimal(args.amount)
    if amount is None:
        raise InvalidInputError("Please enter a valid amount")
    source = _currency(args.from_currency)
    target = _currency(args.to_currency)
    lookup = services.resolver.resolve_with_source()
    value = convert(amount, source, target, lookup.rates)
    lines = [f"{fmt_money(amount, source)} = {fmt_money(value, target)}"]
    note = rate_source_note(lookup.source)
    if note:
        lines.append(note)
    return "\n".join(lines)


_COMMANDS = {
    "market": _run_market,
    "appraise": _run_appraise,
    "convert": _run_convert,
}


def main(argv: Optional[List[str]] = None) -> int:
    """
    Parse the command line, build services and run one command.

    Returns:
        Process exit code: 0 on success, 2 on invalid user input
    """
    args = build_parser().parse_args(argv)

    setup_logging(
        level=settings.log_level,
        log_file=settings.log_file,
        log_dir=settings.log_dir,
        max_bytes=settings.log_max_bytes,
        backup_count=settings.log_backup_count,
        log_stdout=settings.log_stdout,
    )

    overrides = {}
    if args.offline:
        overrides["is_online"] = False
    if args.mock:
        overrides["use_mock_data"] = True
    config = settings.model_copy(update=overrides) if overrides else settings

    services = build_services(config)
    try:
        output = _COMMANDS[args.command](services, args)
    except InvalidInputError as e:
        print(str(e), file=sys.stderr)
        return 2
    print(output)
    return 0


if __name__ == "__main__":
    sys.exit(main())
