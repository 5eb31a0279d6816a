"""Money / rounding helpers.

Centralized so aggregation, chart legends and the report use identical
rounding semantics.
"""

from __future__ import annotations
import math
from decimal import Decimal, ROUND_HALF_UP


def _quantize(value: float, exponent: str) -> float:
    if not math.isfinite(value):
        return value
    return float(Decimal(str(value)).quantize(Decimal(exponent), rounding=ROUND_HALF_UP))


def round1(value: float) -> float:
    return _quantize(value, "0.1")


def round2(value: float) -> float:
    return _quantize(value, "0.01")


def round_places(value: float, places: int) -> float:
    return _quantize(value, str(Decimal(10) ** -places))
