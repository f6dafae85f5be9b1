# src/truegold/adapters/providers/exchange_rates.py
"""
open.er-api.com Provider for the Full Exchange-Rate Table

Fetches every rate against USD in one request. Unlike the metal providers
this client raises on failure, so the resolver can log the cause before it
moves on to the next fallback tier.

Files that USE this module:
- truegold.application.rates_service (ExchangeRateResolver live tier)
- truegold.app (composition root)
- tests.test_providers (unit tests)

Files that this module USES:
- truegold.adapters.providers.base (ExchangeRateSource, get_json)
- truegold.adapters.persistence.rate_cache (clean_rate_table)
- truegold.config (settings for URL and timeout)
"""
import logging
from typing import Optional

from truegold.adapters.persistence.rate_cache import clean_rate_table
from truegold.adapters.providers.base import NO_CACHE_HEADERS, ExchangeRateSource, get_json
from truegold.config import settings
from truegold.domain.errors import MalformedResponseError
from truegold.domain.models import RateTable

log = logging.getLogger(__name__)


class OpenErApiProvider(ExchangeRateSource):
    """
    Client for the open.er-api.com `latest` endpoint.

    Expected payload:
        {"result": "success", "base_code": "USD", "rates": {"USD": 1, "THB": 36.1, ...}}
    """

    name = "open.er-api"

    def __init__(self, url: Optional[str] = None, timeout: Optional[float] = None):
        """
        Initialize exchange-rate provider.

        Args:
            url: Optional custom API URL (defaults to settings.exchange_rate_url)
            timeout: Optional HTTP timeout in seconds (defaults to settings.rates_timeout_seconds)
        """
        self.url = url or settings.exchange_rate_url
        self.timeout = timeout or settings.rates_timeout_seconds

    def fetch_rates(self) -> RateTable:
        """
        Fetch the live rate table.

        Returns:
            Non-empty rate table

        Raises:
            ProviderUnavailableError: Network failure, timeout or non-200 status
            MalformedResponseError: Invalid JSON, error result or empty rates
        """
        log.info("Fetching live exchange rates from %s", self.name)
        data = get_json(self.url, self.timeout, self.name, headers=NO_CACHE_HEADERS)

        if not isinstance(data, dict):
            log.error("%s unexpected response type: %r", self.name, type(data))
            raise MalformedResponseError(f"{self.name} returned non-dict JSON")

        result = data.get("result")
        if result is not None and result != "success":
            log.error("%s reported result=%r", self.name, result)
            raise MalformedResponseError(f"{self.name} reported result={result!r}")

        rates = clean_rate_table(data.get("rates"))
        if not rates:
            log.error("%s response has no usable rates", self.name)
            raise MalformedResponseError(f"{self.name} response missing 'rates'")

        log.info("%s returned %d rates (base=%s)", self.name, len(rates), data.get("base_code"))
        return rates
