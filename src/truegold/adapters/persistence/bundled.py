# src/truegold/adapters/persistence/bundled.py
"""
Bundled Default Rates - Static Offline Rate Table

Loads the currency -> rate mapping shipped with the package
(truegold/data/default_exchange_rates.json), or an override file. Only used
when neither a live fetch nor the cache can provide rates.
"""
from __future__ import annotations

import json
import logging
from importlib import resources
from pathlib import Path
from typing import Optional

from truegold.adapters.persistence.rate_cache import clean_rate_table
from truegold.domain.models import RateTable

log = logging.getLogger(__name__)

BUNDLED_RESOURCE = "default_exchange_rates.json"


def load_bundled_rates(path: Optional[Path] = None) -> Optional[RateTable]:
    """
    Load the bundled default rate table.

    Args:
        path: Optional override file; defaults to the packaged JSON

    Returns:
        Non-empty rate table, or None if the file is missing, unreadable or empty
    """
    try:
        if path is not None:
            raw_text = Path(path).read_text(encoding="utf-8")
        else:
            raw_text = (
                resources.files("truegold.data")
                .joinpath(BUNDLED_RESOURCE)
                .read_text(encoding="utf-8")
            )
        data = json.loads(raw_text)
    except (OSError, ValueError) as e:
        log.warning("Bundled exchange rates unavailable (%s): %s", path or BUNDLED_RESOURCE, e)
        return None

    rates = clean_rate_table(data)
    if not rates:
        log.warning("Bundled exchange rates are empty or malformed")
        return None
    return rates
