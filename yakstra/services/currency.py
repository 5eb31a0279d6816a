"""Currency catalog and display formatting.

The catalog is a closed set of 16 codes. Formatting accepts any code: known
codes render with their symbol (``$1,234.50``) or, for a few, with the code
itself (``KWD 1.500``); unknown codes fall back to ``XYZ 1,234.50``.
Minor-unit digits follow ISO 4217 for the codes that do not use two decimals;
ties round half away from zero.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Dict, List

from yakstra.services.money import round_places


@dataclass(frozen=True)
class CurrencyInfo:
    code: str
    symbol: str
    name: str

    @property
    def label(self) -> str:
        return f"{self.symbol} {self.code} - {self.name}"


CURRENCIES: Dict[str, CurrencyInfo] = {
    info.code: info
    for info in (
        CurrencyInfo("USD", "$", "US Dollar"),
        CurrencyInfo("CAD", "CA$", "Canadian Dollar"),
        CurrencyInfo("EUR", "€", "Euro"),
        CurrencyInfo("GBP", "£", "British Pound"),
        CurrencyInfo("INR", "₹", "Indian Rupee"),
        CurrencyInfo("JPY", "¥", "Japanese Yen"),
        CurrencyInfo("AUD", "A$", "Australian Dollar"),
        CurrencyInfo("CNY", "CN¥", "Chinese Yuan"),
        CurrencyInfo("KWD", "KD", "Kuwaiti Dinar"),
        CurrencyInfo("BHD", "BD", "Bahraini Dinar"),
        CurrencyInfo("AED", "AED", "UAE Dirham"),
        CurrencyInfo("SAR", "SAR", "Saudi Riyal"),
        CurrencyInfo("CHF", "CHF", "Swiss Franc"),
        CurrencyInfo("SGD", "S$", "Singapore Dollar"),
        CurrencyInfo("MXN", "MX$", "Mexican Peso"),
        CurrencyInfo("BRL", "R$", "Brazilian Real"),
    )
}

# Codes whose minor unit is not two digits.
MINOR_UNITS: Dict[str, int] = {"JPY": 0, "KWD": 3, "BHD": 3}

# Amounts in these codes print the code itself rather than the picker symbol.
CODE_AS_SYMBOL = frozenset({"KWD", "BHD", "SGD"})

# Symbols that read as words get a separating space.
_ALPHA_SYMBOL_GAP = " "


def list_currencies() -> List[CurrencyInfo]:
    return list(CURRENCIES.values())


def is_known_currency(code: str) -> bool:
    return code.upper() in CURRENCIES


def format_currency(amount: float, code: str) -> str:
    """Format ``amount`` for display in ``code``.

    >>> format_currency(-1234.5, "USD")
    '-$1,234.50'
    >>> format_currency(10, "XYZ")
    'XYZ 10.00'
    """
    code = code.upper()
    info = CURRENCIES.get(code)
    symbol = info.symbol if info and code not in CODE_AS_SYMBOL else code
    if symbol.isalpha():
        symbol = symbol + _ALPHA_SYMBOL_GAP
    if math.isnan(amount):
        return f"{symbol}NaN"
    sign = "-" if amount < 0 else ""
    if math.isinf(amount):
        return f"{sign}{symbol}∞"
    digits = MINOR_UNITS.get(code, 2)
    return f"{sign}{symbol}{round_places(abs(amount), digits):,.{digits}f}"
