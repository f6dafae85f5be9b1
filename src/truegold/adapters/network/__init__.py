# src/truegold/adapters/network/__init__.py
"""
Network Adapters - Connectivity Signal

Reachability detection lives outside the pricing core; the core only reads
a boolean `is_online` from whatever observer the host application supplies.
"""

from truegold.adapters.network.connectivity import ConnectivitySignal, StaticConnectivity

__all__ = ["ConnectivitySignal", "StaticConnectivity"]
