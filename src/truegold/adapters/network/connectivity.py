# src/truegold/adapters/network/connectivity.py
"""Connectivity signal consumed by the exchange-rate resolver and market board."""
from __future__ import annotations

import logging
from typing import Protocol

log = logging.getLogger(__name__)


class ConnectivitySignal(Protocol):
    """Anything exposing a boolean `is_online` attribute or property."""

    @property
    def is_online(self) -> bool:
        ...


class StaticConnectivity:
    """Connectivity flag set by the host (or by configuration)."""

    def __init__(self, is_online: bool = True):
        self._is_online = is_online

    @property
    def is_online(self) -> bool:
        return self._is_online

    def set_online(self, is_online: bool) -> None:
        if is_online != self._is_online:
            log.info("Connectivity changed: online=%s", is_online)
        self._is_online = is_online
