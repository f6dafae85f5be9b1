# src/truegold/adapters/providers/base.py
"""
Base Provider Interfaces for Exchange-Rate and Metal Providers

This module defines the abstract base classes every provider implements and
the shared JSON GET helper they use. The helper raises
ProviderUnavailableError / MalformedResponseError; each provider decides at
its public boundary whether to propagate those or turn them into None.

Files that USE this module:
- truegold.adapters.providers.exchange_rates (OpenErApiProvider implements ExchangeRateSource)
- truegold.adapters.providers.swissquote (SwissquoteSpotProvider implements SpotPriceProvider)
- truegold.adapters.providers.thai_gold (ThaiGoldProvider implements RegionalGoldSource)
- truegold.application.* (depend on the interfaces, not the implementations)

Files that this module USES:
- truegold.domain.errors (provider failure exceptions)
"""
import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

import requests

from truegold.domain.errors import MalformedResponseError, ProviderUnavailableError
from truegold.domain.models import RateTable, RegionalGoldQuote

log = logging.getLogger(__name__)

NO_CACHE_HEADERS = {
    "Cache-Control": "no-cache",
    "Pragma": "no-cache",
}


def get_json(
    url: str,
    timeout: float,
    provider: str,
    headers: Optional[Dict[str, str]] = None,
) -> Any:
    """
    GET a URL and decode its JSON body.

    Args:
        url: Endpoint to fetch
        timeout: Request timeout in seconds
        provider: Provider name used in log and error messages
        headers: Optional extra request headers

    Returns:
        Decoded JSON payload

    Raises:
        ProviderUnavailableError: On timeout, connection failure or non-200 status
        MalformedResponseError: If the body is not valid JSON
    """
    try:
        resp = requests.get(url, timeout=timeout, headers=headers)
    except requests.exceptions.Timeout:
        log.warning("%s timeout after %s seconds", provider, timeout)
        raise ProviderUnavailableError(f"{provider} timeout after {timeout}s")
    except requests.exceptions.RequestException as e:
        log.warning("%s request failed (network/connection error): %s", provider, e)
        raise ProviderUnavailableError(f"{provider} request failed: {e}") from e

    log.debug("%s HTTP status code: %s", provider, resp.status_code)
    if resp.status_code != 200:
        log.warning("%s returned HTTP %s", provider, resp.status_code)
        raise ProviderUnavailableError(f"{provider} returned HTTP {resp.status_code}")

    try:
        return resp.json()
    except ValueError as e:
        log.error("%s returned invalid JSON: %s", provider, e)
        raise MalformedResponseError(f"{provider} returned invalid JSON: {e}") from e


class ExchangeRateSource(ABC):
    @abstractmethod
    def fetch_rates(self) -> RateTable:
        """
        Return the full live rate table (units per 1 reference unit).

        Raises:
            ProviderUnavailableError, MalformedResponseError
        """
        raise NotImplementedError


class SpotPriceProvider(ABC):
    @abstractmethod
    def fetch_mid_price(self, symbol: str, quote_currency: str) -> Optional[float]:
        """Return the bid/ask midpoint per troy ounce, or None if unavailable."""
        raise NotImplementedError


class RegionalGoldSource(ABC):
    @abstractmethod
    def fetch_quote(self) -> Optional[RegionalGoldQuote]:
        """Return the customer-facing regional quote, or None if unavailable."""
        raise NotImplementedError
