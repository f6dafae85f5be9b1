# src/truegold/adapters/__init__.py
"""
Adapters Layer - External Interfaces

This package contains all adapters for external systems:
- Providers (exchange-rate and metal price APIs)
- Persistence (rate cache, bundled rates)
- Network (connectivity signal)
- Formatting (plain-text output)
"""

__all__ = []
