# src/truegold/adapters/providers/thai_gold.py
"""
Thai Gold API Provider for the Regional 96.5% Gold Market

Fetches the Gold Traders Association buy/sell board for 96.5% bars and
jewelry in THB per baht weight (15.244 g).

The upstream feed names prices from the shop's side: its "buy" field is
what the customer pays and its "sell" field is the buy-back price. Both
pairs are swapped on ingestion so RegionalGoldQuote is customer-facing.

Files that USE this module:
- truegold.application.market_service (MarketQuoteAggregator regional kind)
- tests.test_providers (unit tests)

Files that this module USES:
- truegold.adapters.providers.base (RegionalGoldSource, get_json)
- truegold.config (settings for URL, timeout and User-Agent)
"""
import logging
import math
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from truegold.adapters.providers.base import RegionalGoldSource, get_json
from truegold.config import settings
from truegold.domain.errors import MalformedResponseError, ProviderUnavailableError
from truegold.domain.models import RegionalGoldQuote

log = logging.getLogger(__name__)


def _to_float(value: Any) -> float:
    """
    Convert a board price to float, handling thousands separators.

    Args:
        value: Price such as '41,250.00', '41250' or 41250

    Returns:
        Parsed price

    Raises:
        MalformedResponseError: If the value is not a positive finite number
    """
    if isinstance(value, bool) or value is None:
        raise MalformedResponseError(f"Invalid price value: {value!r}")
    try:
        number = float(str(value).replace(",", "").strip())
    except ValueError as e:
        raise MalformedResponseError(f"Invalid price value: {value!r}") from e
    if not math.isfinite(number) or number <= 0:
        raise MalformedResponseError(f"Non-positive price value: {value!r}")
    return number


def _price_pair(price: Dict[str, Any], key: str) -> Dict[str, Any]:
    node = price.get(key)
    if not isinstance(node, dict) or "buy" not in node or "sell" not in node:
        raise MalformedResponseError(f"Thai gold response missing 'response.price.{key}.buy/sell'")
    return node


class ThaiGoldProvider(RegionalGoldSource):
    name = "Thai Gold API"

    def __init__(
        self,
        url: Optional[str] = None,
        timeout: Optional[float] = None,
        user_agent: Optional[str] = None,
    ):
        """
        Initialize Thai gold market provider.

        Args:
            url: Optional custom API URL (defaults to settings.thai_gold_url)
            timeout: Optional HTTP timeout in seconds (defaults to settings.spot_timeout_seconds)
            user_agent: Optional User-Agent header (the API rejects default client agents)
        """
        self.url = url or settings.thai_gold_url
        self.timeout = timeout or settings.spot_timeout_seconds
        self.user_agent = user_agent or settings.thai_gold_user_agent

    def _parse(self, data: Any) -> RegionalGoldQuote:
        if not isinstance(data, dict):
            raise MalformedResponseError("Thai gold API returned non-dict JSON")
        response = data.get("response")
        price = response.get("price") if isinstance(response, dict) else None
        if not isinstance(price, dict):
            raise MalformedResponseError("Thai gold response missing 'response.price'")

        bar = _price_pair(price, "gold_bar")
        jewelry = _price_pair(price, "gold")

        raw_bar_buy = _to_float(bar["buy"])
        raw_bar_sell = _to_float(bar["sell"])
        raw_jewelry_buy = _to_float(jewelry["buy"])
        raw_jewelry_sell = _to_float(jewelry["sell"])

        # Upstream "buy" is what the customer pays, i.e. our sell price.
        quote = RegionalGoldQuote(
            bar_sell=raw_bar_buy,
            bar_buy=raw_bar_sell,
            jewelry_sell=raw_jewelry_buy,
            jewelry_buy=raw_jewelry_sell,
            fetched_at=datetime.now(timezone.utc),
        )
        log.info(
            "%s: bar sell=%s (raw buy), bar buy=%s (raw sell), jewelry sell=%s (raw buy)",
            self.name, quote.bar_sell, quote.bar_buy, quote.jewelry_sell,
        )
        if quote.is_inverted:
            log.warning(
                "%s suspicious quote: bar buy-back %s > bar sell %s",
                self.name, quote.bar_buy, quote.bar_sell,
            )
        return quote

    def fetch_quote(self) -> Optional[RegionalGoldQuote]:
        """
        Get the current customer-facing 96.5% gold quote.

        Returns:
            RegionalGoldQuote, or None if the API is unavailable or the payload
            cannot be parsed
        """
        try:
            data = get_json(
                self.url,
                self.timeout,
                self.name,
                headers={"User-Agent": self.user_agent},
            )
            return self._parse(data)
        except (ProviderUnavailableError, MalformedResponseError) as e:
            log.warning("%s unavailable: %s", self.name, e)
            return None
