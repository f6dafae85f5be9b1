# src/truegold/domain/metals.py
"""
Metals, Units and Purity - Static Reference Data

Fixed enumerations used throughout the pricing core:
- MetalKind: what the market aggregator can price (spot kinds + Thai 96.5%)
- Metal / Purity: what a user selects when appraising an item
- PriceUnit / WeightUnit: fixed grams-per-unit ratios

Files that USE this module:
- truegold.domain.models (Quote units)
- truegold.application.* (pricing and appraisal)
- truegold.adapters.formatting.formatter (display names and unit labels)

Files that this module USES:
- None (pure domain layer)
"""
from __future__ import annotations

from enum import Enum
from typing import Dict, List, Optional, Tuple

GRAMS_PER_TROY_OUNCE = 31.1034768
GRAMS_PER_BAHT_WEIGHT = 15.244


class PriceUnit(str, Enum):
    """Unit a provider quotes its price in."""

    TROY_OUNCE = "troy_ounce"
    GRAM = "gram"
    BAHT_WEIGHT = "baht_weight"

    @property
    def grams(self) -> float:
        return _PRICE_UNIT_GRAMS[self]


_PRICE_UNIT_GRAMS: Dict[PriceUnit, float] = {
    PriceUnit.TROY_OUNCE: GRAMS_PER_TROY_OUNCE,
    PriceUnit.GRAM: 1.0,
    PriceUnit.BAHT_WEIGHT: GRAMS_PER_BAHT_WEIGHT,
}


class Metal(str, Enum):
    """Metal a user can appraise."""

    GOLD = "gold"
    SILVER = "silver"
    PLATINUM = "platinum"
    PALLADIUM = "palladium"


class MetalKind(str, Enum):
    """
    Priced market instrument.

    Spot kinds are quoted by the spot provider under a metal symbol; the Thai
    96.5% kind has its own market feed and already embeds its fineness.
    """

    GOLD_SPOT = "gold_spot"
    SILVER_SPOT = "silver_spot"
    PLATINUM_SPOT = "platinum_spot"
    PALLADIUM_SPOT = "palladium_spot"
    GOLD_THAI_965 = "gold_thai_965"

    @property
    def symbol(self) -> Optional[str]:
        """Spot provider symbol, or None for the regional kind."""
        return _KIND_SYMBOLS.get(self)

    @property
    def is_regional(self) -> bool:
        return self is MetalKind.GOLD_THAI_965

    @property
    def display_name(self) -> str:
        return _KIND_NAMES[self]


_KIND_SYMBOLS: Dict[MetalKind, str] = {
    MetalKind.GOLD_SPOT: "XAU",
    MetalKind.SILVER_SPOT: "XAG",
    MetalKind.PLATINUM_SPOT: "XPT",
    MetalKind.PALLADIUM_SPOT: "XPD",
}

_KIND_NAMES: Dict[MetalKind, str] = {
    MetalKind.GOLD_SPOT: "Gold Spot",
    MetalKind.SILVER_SPOT: "Silver Spot",
    MetalKind.PLATINUM_SPOT: "Platinum Spot",
    MetalKind.PALLADIUM_SPOT: "Palladium Spot",
    MetalKind.GOLD_THAI_965: "Thai Gold 96.5%",
}

SPOT_KIND_FOR_METAL: Dict[Metal, MetalKind] = {
    Metal.GOLD: MetalKind.GOLD_SPOT,
    Metal.SILVER: MetalKind.SILVER_SPOT,
    Metal.PLATINUM: MetalKind.PLATINUM_SPOT,
    Metal.PALLADIUM: MetalKind.PALLADIUM_SPOT,
}


class WeightUnit(str, Enum):
    """Weight unit a user can enter an item's weight in."""

    GRAM = "gram"
    TROY_OUNCE = "troy_ounce"
    BAHT_WEIGHT = "baht_weight"
    LUONG_VN = "luong_vn"
    CHI_VN = "chi_vn"
    TAEL_HK = "tael_hk"
    MACE_HK = "mace_hk"
    TOLA = "tola"
    AANA = "aana"
    RATI = "rati"

    @property
    def grams_per_unit(self) -> float:
        return _WEIGHT_UNITS[self][0]

    @property
    def label(self) -> str:
        return _WEIGHT_UNITS[self][1]

    def to_grams(self, amount: float) -> float:
        return amount * self.grams_per_unit


_WEIGHT_UNITS: Dict[WeightUnit, Tuple[float, str]] = {
    WeightUnit.GRAM: (1.0, "g"),
    WeightUnit.TROY_OUNCE: (GRAMS_PER_TROY_OUNCE, "ozt (31.10g)"),
    WeightUnit.BAHT_WEIGHT: (GRAMS_PER_BAHT_WEIGHT, "baht wt (15.24g)"),
    WeightUnit.LUONG_VN: (37.49, "Lượng (VN) (37.49g)"),
    WeightUnit.CHI_VN: (3.749, "Chỉ (VN) (3.749g)"),  # 1/10 lượng
    WeightUnit.TAEL_HK: (37.799364167, "Tael (HK) (37.80g)"),
    WeightUnit.MACE_HK: (3.7799364167, "Mace (HK) (3.78g)"),  # 1/10 tael
    WeightUnit.TOLA: (11.6638038, "Tola (11.66g)"),
    WeightUnit.AANA: (0.97198365, "Aana (0.97g)"),
    WeightUnit.RATI: (0.24299591, "Rati (0.243g)"),
}


class Purity(str, Enum):
    """Named fineness grade, each belonging to exactly one metal."""

    K24 = "k24"
    THAI_965 = "thai_965"
    K22 = "k22"
    K21 = "k21"
    K20 = "k20"
    K18 = "k18"
    K14 = "k14"
    K10 = "k10"
    K9 = "k9"
    SILVER_999 = "fine_999"
    SILVER_925 = "sterling_925"
    PLATINUM_9995 = "platinum_9995"
    PLATINUM_950 = "platinum_950"
    PALLADIUM_9995 = "palladium_9995"
    PALLADIUM_950 = "palladium_950"

    @property
    def factor(self) -> float:
        return _PURITIES[self][1]

    @property
    def metal(self) -> Metal:
        return _PURITIES[self][0]

    @property
    def label(self) -> str:
        return _PURITIES[self][2]


_PURITIES: Dict[Purity, Tuple[Metal, float, str]] = {
    Purity.K24: (Metal.GOLD, 0.999, "24K (99.9%)"),
    Purity.THAI_965: (Metal.GOLD, 0.965, "23K Thai (96.5%)"),
    Purity.K22: (Metal.GOLD, 0.917, "22K (91.7%)"),
    Purity.K21: (Metal.GOLD, 0.875, "21K (87.5%)"),
    Purity.K20: (Metal.GOLD, 0.833, "20K (83.3%)"),
    Purity.K18: (Metal.GOLD, 0.750, "18K (75.0%)"),
    Purity.K14: (Metal.GOLD, 0.585, "14K (58.5%)"),
    Purity.K10: (Metal.GOLD, 0.417, "10K (41.7%)"),
    Purity.K9: (Metal.GOLD, 0.375, "9K (37.5%)"),
    Purity.SILVER_999: (Metal.SILVER, 0.999, "Fine .999 (99.9%)"),
    Purity.SILVER_925: (Metal.SILVER, 0.925, "Sterling .925 (92.5%)"),
    Purity.PLATINUM_9995: (Metal.PLATINUM, 0.9995, "Platinum 999.5 (99.95%)"),
    Purity.PLATINUM_950: (Metal.PLATINUM, 0.950, "Platinum 950 (95.0%)"),
    Purity.PALLADIUM_9995: (Metal.PALLADIUM, 0.9995, "Palladium 999.5 (99.95%)"),
    Purity.PALLADIUM_950: (Metal.PALLADIUM, 0.950, "Palladium 950 (95.0%)"),
}


def allowed_units(metal: Metal) -> List[WeightUnit]:
    """Weight units that make sense for a metal (regional units are gold-only)."""
    if metal is Metal.GOLD:
        return list(WeightUnit)
    return [WeightUnit.GRAM, WeightUnit.TROY_OUNCE]


def allowed_purities(metal: Metal) -> List[Purity]:
    """Purity grades offered for a metal."""
    return [p for p in Purity if p.metal is metal]
