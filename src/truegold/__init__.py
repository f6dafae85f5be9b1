# src/truegold/__init__.py
"""
TrueGold - Precious Metal Pricing and Appraisal Core

Combines a live currency exchange-rate feed with metal spot-price providers
(Swissquote spot quotes, Thai gold market) and produces per-gram prices and
appraisals in any supported currency, degrading to cached, bundled or
hardcoded data when the network is unavailable.
"""

__version__ = "1.0.0"
__author__ = "Tilo Delau"
