# src/truegold/domain/currency.py
"""
Currency Catalogue - Supported Currencies

Display metadata (symbol, full name, flag) for every currency the app
offers. Conversion itself works on plain codes; this is display-only.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional


@dataclass(frozen=True)
class CurrencyInfo:
    code: str
    symbol: str
    full_name: str
    flag: str


class Currency(str, Enum):
    USD = "USD"
    EUR = "EUR"
    THB = "THB"
    GBP = "GBP"
    JPY = "JPY"
    CNY = "CNY"
    AUD = "AUD"
    CAD = "CAD"
    CHF = "CHF"
    SEK = "SEK"
    NOK = "NOK"
    DKK = "DKK"
    INR = "INR"
    KRW = "KRW"
    SGD = "SGD"
    HKD = "HKD"
    MYR = "MYR"
    PHP = "PHP"
    IDR = "IDR"
    ZAR = "ZAR"
    BRL = "BRL"
    MXN = "MXN"
    VND = "VND"
    LAK = "LAK"
    KHR = "KHR"

    @property
    def info(self) -> CurrencyInfo:
        return _INFO[self]

    @property
    def code(self) -> str:
        return self.value

    @property
    def symbol(self) -> str:
        return self.info.symbol

    @property
    def full_name(self) -> str:
        return self.info.full_name

    @property
    def flag(self) -> str:
        return self.info.flag

    @classmethod
    def from_code(cls, code: Optional[str]) -> Optional["Currency"]:
        """Look up a currency by code, case-insensitively."""
        if not code:
            return None
        try:
            return cls(code.strip().upper())
        except ValueError:
            return None


def _info(code: str, symbol: str, full_name: str, flag: str) -> CurrencyInfo:
    return CurrencyInfo(code=code, symbol=symbol, full_name=full_name, flag=flag)


_INFO: Dict[Currency, CurrencyInfo] = {
    Currency.USD: _info("USD", "$", "US Dollar", "🇺🇸"),
    Currency.EUR: _info("EUR", "€", "Euro", "🇪🇺"),
    Currency.THB: _info("THB", "฿", "Thai Baht", "🇹🇭"),
    Currency.GBP: _info("GBP", "£", "British Pound", "🇬🇧"),
    Currency.JPY: _info("JPY", "¥", "Japanese Yen", "🇯🇵"),
    Currency.CNY: _info("CNY", "¥", "Chinese Yuan", "🇨🇳"),
    Currency.AUD: _info("AUD", "$", "Australian Dollar", "🇦🇺"),
    Currency.CAD: _info("CAD", "$", "Canadian Dollar", "🇨🇦"),
    Currency.CHF: _info("CHF", "Fr", "Swiss Franc", "🇨🇭"),
    Currency.SEK: _info("SEK", "kr", "Swedish Krona", "🇸🇪"),
    Currency.NOK: _info("NOK", "kr", "Norwegian Krone", "🇳🇴"),
    Currency.DKK: _info("DKK", "kr", "Danish Krone", "🇩🇰"),
    Currency.INR: _info("INR", "₹", "Indian Rupee", "🇮🇳"),
    Currency.KRW: _info("KRW", "₩", "South Korean Won", "🇰🇷"),
    Currency.SGD: _info("SGD", "$", "Singapore Dollar", "🇸🇬"),
    Currency.HKD: _info("HKD", "$", "Hong Kong Dollar", "🇭🇰"),
    Currency.MYR: _info("MYR", "RM", "Malaysian Ringgit", "🇲🇾"),
    Currency.PHP: _info("PHP", "₱", "Philippine Peso", "🇵🇭"),
    Currency.IDR: _info("IDR", "Rp", "Indonesian Rupiah", "🇮🇩"),
    Currency.ZAR: _info("ZAR", "R", "South African Rand", "🇿🇦"),
    Currency.BRL: _info("BRL", "R$", "Brazilian Real", "🇧🇷"),
    Currency.MXN: _info("MXN", "$", "Mexican Peso", "🇲🇽"),
    Currency.VND: _info("VND", "₫", "Vietnamese Dong", "🇻🇳"),
    Currency.LAK: _info("LAK", "₭", "Lao Kip", "🇱🇦"),
    Currency.KHR: _info("KHR", "៛", "Cambodian Riel", "🇰🇭"),
}
