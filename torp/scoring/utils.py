"""
Decimal Utilities
torp/scoring/utils.py

Precision-safe decimal math for point arithmetic.
"""

from decimal import Decimal, ROUND_HALF_UP
from typing import List


def to_decimal(value: float, places: int = 4) -> Decimal:
    """Convert float to Decimal with explicit precision."""
    return Decimal(str(value)).quantize(
        Decimal(10) ** -places, rounding=ROUND_HALF_UP
    )


def clamp(
    value: Decimal,
    min_val: Decimal = Decimal("0"),
    max_val: Decimal = Decimal("1"),
) -> Decimal:
    """Clamp value to range [min_val, max_val]."""
    return max(min_val, min(max_val, value))


def mean(values: List[Decimal]) -> Decimal:
    """
    Arithmetic mean.

    Returns Decimal("0") for an empty list.
    """
    if not values:
        return Decimal("0")
    return (sum(values) / Decimal(len(values))).quantize(
        Decimal("0.0001"), rounding=ROUND_HALF_UP
    )


def mean_absolute_deviation(values: List[Decimal]) -> Decimal:
    """
    Mean absolute deviation around the arithmetic mean.

    Formula: Σ|value_i - mean| / n
    """
    if not values:
        return Decimal("0")
    centre = mean(values)
    total = sum(abs(v - centre) for v in values)
    return (total / Decimal(len(values))).quantize(
        Decimal("0.0001"), rounding=ROUND_HALF_UP
    )


def round_half_up(value: Decimal) -> int:
    """Round to the nearest integer, halves away from zero."""
    return int(value.quantize(Decimal("1"), rounding=ROUND_HALF_UP))
