# src/truegold/config/settings.py
"""
Settings - Pydantic-based Configuration Management

Provides centralized configuration management using Pydantic Settings.
Every value can be overridden with an environment variable (or a .env file).

Files that USE this module:
- truegold.app (builds services and logging from settings)
- truegold.adapters.providers.* (endpoint URLs and timeouts)
- truegold.application.* (cache TTL, fallback constants, mock/testing flags)

Files that this module USES:
- truegold.shared.validators (currency code validation)
"""

from __future__ import annotations  # Enable postponed evaluation of annotations

from datetime import timedelta  # Cache TTL representation
from pathlib import Path  # Object-oriented filesystem paths
from typing import List, Optional  # Type hints for lists and optional values

from pydantic import Field, field_validator  # Data validation and field configuration
from pydantic_settings import BaseSettings, SettingsConfigDict  # Settings management with Pydantic

from truegold.shared.validators import validate_currency_code


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    # --- Exchange rates ---
    exchange_rate_url: str = Field(
        default="https://open.er-api.com/v6/latest/USD", alias="EXCHANGE_RATE_URL"
    )
    reference_currency: str = Field(default="USD", alias="REFERENCE_CURRENCY")
    rates_timeout_seconds: float = Field(default=10.0, alias="RATES_TIMEOUT_SECONDS", gt=0, le=60)
    rates_cache_hours: float = Field(default=12.0, alias="RATES_CACHE_HOURS", ge=0, le=24 * 30)
    rate_cache_key: str = Field(default="ExchangeRateCache_ALL", alias="RATE_CACHE_KEY")
    rate_cache_file: Optional[Path] = Field(default=None, alias="RATE_CACHE_FILE")  # None = in-memory
    bundled_rates_file: Optional[Path] = Field(default=None, alias="BUNDLED_RATES_FILE")  # None = packaged JSON

    # --- Metal providers ---
    spot_quote_url: str = Field(
        default="https://forex-data-feed.swissquote.com/public-quotes/bboquotes/instrument",
        alias="SPOT_QUOTE_URL",
    )
    spot_timeout_seconds: float = Field(default=8.0, alias="SPOT_TIMEOUT_SECONDS", gt=0, le=60)
    spot_tier_preference: List[str] = Field(
        default_factory=lambda: ["elite", "prime", "premium", "standard"],
        alias="SPOT_TIER_PREFERENCE",
    )
    thai_gold_url: str = Field(
        default="https://api.chnwt.dev/thai-gold-api/latest", alias="THAI_GOLD_URL"
    )
    thai_gold_user_agent: str = Field(
        default=(
            "Mozilla/5.0 (iPhone; CPU iPhone OS 17_0 like Mac OS X) AppleWebKit/605.1.15 "
            "(KHTML, like Gecko) Version/17.0 Mobile/15E148 Safari/604.1"
        ),
        alias="THAI_GOLD_USER_AGENT",
    )

    # --- Fallback constants (USD per troy ounce) ---
    gold_fallback_usd_per_ozt: float = Field(default=2400.0, alias="GOLD_FALLBACK_USD_PER_OZT", gt=0)
    silver_fallback_usd_per_ozt: float = Field(default=28.0, alias="SILVER_FALLBACK_USD_PER_OZT", gt=0)
    platinum_fallback_usd_per_ozt: float = Field(default=950.0, alias="PLATINUM_FALLBACK_USD_PER_OZT", gt=0)
    palladium_fallback_usd_per_ozt: float = Field(default=1000.0, alias="PALLADIUM_FALLBACK_USD_PER_OZT", gt=0)
    thai_gold_fineness: float = Field(default=0.965, alias="THAI_GOLD_FINENESS", gt=0, le=1)

    # --- Testing phase flags ---
    use_mock_data: bool = Field(default=False, alias="USE_MOCK_DATA")
    force_live_exchange_rate: bool = Field(default=False, alias="FORCE_LIVE_EXCHANGE_RATE")  # True = no cache
    clear_cache: bool = Field(default=False, alias="CLEAR_CACHE")

    # --- Connectivity ---
    is_online: bool = Field(default=True, alias="TRUEGOLD_ONLINE")

    # --- Logging ---
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    log_file: Optional[str] = Field(default=None, alias="LOG_FILE")
    log_dir: Optional[str] = Field(default=None, alias="LOG_DIR")
    log_stdout: bool = Field(default=True, alias="TRUEGOLD_LOG_STDOUT")
    log_max_bytes: int = Field(default=10 * 1024 * 1024, alias="LOG_MAX_BYTES")  # 10MB
    log_backup_count: int = Field(default=5, alias="LOG_BACKUP_COUNT")

    @property
    def cache_ttl(self) -> timedelta:
        """
        Exchange-rate cache TTL.

        Forcing live exchange rates collapses the TTL to zero so every cached
        table counts as expired.
        """
        if self.force_live_exchange_rate:
            return timedelta(0)
        return timedelta(hours=self.rates_cache_hours)

    @property
    def fallback_usd_per_ozt(self) -> dict:
        """Per-metal fallback spot prices keyed by provider symbol."""
        return {
            "XAU": self.gold_fallback_usd_per_ozt,
            "XAG": self.silver_fallback_usd_per_ozt,
            "XPT": self.platinum_fallback_usd_per_ozt,
            "XPD": self.palladium_fallback_usd_per_ozt,
        }

    @field_validator("reference_currency")
    @classmethod
    def validate_reference_currency(cls, v: str) -> str:
        """Validate reference currency format."""
        if not validate_currency_code(v):
            raise ValueError("REFERENCE_CURRENCY must be a 3-letter currency code")
        return v.upper()

    @field_validator("spot_tier_preference")
    @classmethod
    def validate_tier_preference(cls, v: List[str]) -> List[str]:
        """Tier names are matched case-insensitively, so store them lowercased."""
        tiers = [t.strip().lower() for t in v if t and t.strip()]
        if not tiers:
            raise ValueError("SPOT_TIER_PREFERENCE must name at least one tier")
        return tiers

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level name."""
        level = v.upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError("LOG_LEVEL must be DEBUG, INFO, WARNING, ERROR or CRITICAL")
        return level


# Global settings instance
settings = Settings()
