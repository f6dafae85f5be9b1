# src/truegold/adapters/persistence/__init__.py
"""
Persistence Adapters - Data Storage

This package contains adapters for persisting and loading data:
- Key-value stores (in-memory, JSON file)
- Exchange-rate snapshot cache
- Bundled default rates
"""

from truegold.adapters.persistence.bundled import load_bundled_rates
from truegold.adapters.persistence.rate_cache import (
    InMemoryKeyValueStore,
    JsonFileKeyValueStore,
    KeyValueStore,
    RateCache,
    clean_rate_table,
)

__all__ = [
    "load_bundled_rates",
    "InMemoryKeyValueStore",
    "JsonFileKeyValueStore",
    "KeyValueStore",
    "RateCache",
    "clean_rate_table",
]
