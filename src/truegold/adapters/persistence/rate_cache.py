# src/truegold/adapters/persistence/rate_cache.py
"""
Rate Cache - Latest Exchange-Rate Snapshot Persistence

Stores the most recent live rate table and its fetch timestamp as two
entries of a key-value store:

    <cache_key>_rates       currency code -> float mapping
    <cache_key>_timestamp   ISO-8601 UTC timestamp

Two stores are provided: an in-memory one (default, process lifetime) and a
JSON-file one that survives restarts. Writes are last-writer-wins.

Files that USE this module:
- truegold.application.rates_service (ExchangeRateResolver reads/writes the cache)
- truegold.app (builds the store from settings, clears it on request)
- tests.test_rate_cache (unit tests)

Files that this module USES:
- truegold.domain.models (CachedRateTable, RateTable)
"""
from __future__ import annotations

import json
import logging
import math
import os
import shutil
import tempfile
import threading
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

from truegold.domain.models import CachedRateTable, RateTable

log = logging.getLogger(__name__)


class KeyValueStore(ABC):
    """Minimal get/set/delete storage contract."""

    @abstractmethod
    def get(self, key: str) -> Any:
        """Return the stored value or None."""
        raise NotImplementedError

    @abstractmethod
    def set(self, key: str, value: Any) -> None:
        raise NotImplementedError

    @abstractmethod
    def delete(self, key: str) -> None:
        raise NotImplementedError

    def set_many(self, values: Mapping[str, Any]) -> None:
        for key, value in values.items():
            self.set(key, value)


class InMemoryKeyValueStore(KeyValueStore):
    """Thread-safe dict-backed store."""

    def __init__(self) -> None:
        self._data: Dict[str, Any] = {}
        self._lock = threading.Lock()

    def get(self, key: str) -> Any:
        with self._lock:
            return self._data.get(key)

    def set(self, key: str, value: Any) -> None:
        with self._lock:
            self._data[key] = value

    def set_many(self, values: Mapping[str, Any]) -> None:
        with self._lock:
            self._data.update(values)

    def delete(self, key: str) -> None:
        with self._lock:
            self._data.pop(key, None)


class JsonFileKeyValueStore(KeyValueStore):
    """
    Store all keys in a single JSON object on disk.

    Every write rewrites the file through a temp file + atomic rename, so a
    crash mid-write never leaves a truncated cache behind. A corrupt file is
    backed up next to the original and treated as empty.
    """

    def __init__(self, path: Path):
        self.path = Path(path)
        self._lock = threading.Lock()

    def _read_all(self) -> Dict[str, Any]:
        if not self.path.exists():
            return {}
        try:
            with self.path.open("r", encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            backup_path = self.path.with_suffix(".json.corrupt")
            try:
                shutil.copy2(self.path, backup_path)
                self.path.unlink()
                log.warning("Cache file corrupted, backed up to %s: %s", backup_path, e)
            except OSError as backup_error:
                log.error("Failed to back up corrupt cache file: %s", backup_error)
            return {}
        except OSError as e:
            log.error("Failed to read cache file %s: %s", self.path, e)
            return {}

        if not isinstance(data, dict):
            log.warning("Cache file %s does not hold a JSON object, ignoring it", self.path)
            return {}
        return data

    def _write_all(self, data: Dict[str, Any]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        temp_fd, temp_path = tempfile.mkstemp(
            suffix=".json.tmp",
            dir=str(self.path.parent),
            text=True,
        )
        try:
            with os.fdopen(temp_fd, "w", encoding="utf-8") as f:
                json.dump(data, f, ensure_ascii=False, indent=2)
                f.flush()
                os.fsync(f.fileno())
            os.replace(temp_path, str(self.path))
        except Exception as e:
            try:
                os.unlink(temp_path)
            except OSError:
                pass
            raise RuntimeError(f"Failed to save cache file: {e}") from e

    def get(self, key: str) -> Any:
        with self._lock:
            return self._read_all().get(key)

    def set(self, key: str, value: Any) -> None:
        self.set_many({key: value})

    def set_many(self, values: Mapping[str, Any]) -> None:
        with self._lock:
            data = self._read_all()
            data.update(values)
            self._write_all(data)

    def delete(self, key: str) -> None:
        with self._lock:
            data = self._read_all()
            if key in data:
                del data[key]
                self._write_all(data)


def clean_rate_table(raw: Any) -> RateTable:
    """
    Keep only well-formed entries of a raw rate mapping.

    Entries are kept when the code is a string and the rate a finite,
    strictly positive number.
    """
    if not isinstance(raw, Mapping):
        return {}
    table: RateTable = {}
    for code, value in raw.items():
        if not isinstance(code, str) or isinstance(value, bool):
            continue
        try:
            rate = float(value)
        except (TypeError, ValueError):
            continue
        if math.isfinite(rate) and rate > 0:
            table[code.upper()] = rate
    return table


class RateCache:
    """Latest-snapshot cache for the full exchange-rate table."""

    def __init__(self, store: KeyValueStore, cache_key: str = "ExchangeRateCache_ALL"):
        self.store = store
        self.cache_key = cache_key

    @property
    def rates_key(self) -> str:
        return f"{self.cache_key}_rates"

    @property
    def timestamp_key(self) -> str:
        return f"{self.cache_key}_timestamp"

    def load(self) -> Optional[CachedRateTable]:
        """
        Load the cached table.

        Returns:
            CachedRateTable, or None when nothing usable is cached. A missing or
            unreadable timestamp still returns the rates (they count as expired).
        """
        rates = clean_rate_table(self.store.get(self.rates_key))
        if not rates:
            return None

        fetched_at: Optional[datetime] = None
        ts_raw = self.store.get(self.timestamp_key)
        if isinstance(ts_raw, str):
            try:
                fetched_at = datetime.fromisoformat(ts_raw.replace("Z", "+00:00"))
                if fetched_at.tzinfo is None:
                    fetched_at = fetched_at.replace(tzinfo=timezone.utc)
                fetched_at = fetched_at.astimezone(timezone.utc)
            except ValueError:
                log.warning("Unreadable cache timestamp %r, treating cache as expired", ts_raw)
        return CachedRateTable(rates=rates, fetched_at=fetched_at)

    def save(self, rates: RateTable, fetched_at: datetime) -> None:
        """Overwrite the cached table and its timestamp together."""
        self.store.set_many({
            self.rates_key: dict(rates),
            self.timestamp_key: fetched_at.astimezone(timezone.utc).isoformat(),
        })
        log.debug("Cached %d exchange rates (fetched_at=%s)", len(rates), fetched_at)

    def clear(self) -> None:
        self.store.delete(self.rates_key)
        self.store.delete(self.timestamp_key)
        log.info("Exchange-rate cache cleared (%s)", self.cache_key)
