"""
scoring/benchmark_comparator.py

Positions the quote total inside a regional price range.

Formula:
    percentile = clamp((value − min) / (max − min) × 100, 0, 100)
    value ≤ min → 0, value ≥ max → 100
    max ≤ min (zero-width or inverted range) → None ("no position")
"""

from decimal import Decimal
from typing import Optional

from torp.models.enrichment import RegionalBenchmarkData
from torp.models.result import BenchmarkComparison, RegionalBenchmark
from torp.scoring.utils import clamp, to_decimal


def percentile_position(value: float, price_min: float, price_max: float) -> Optional[float]:
    """
    Examples:
        >>> percentile_position(15000, 10000, 20000)
        50.0
        >>> percentile_position(5000, 10000, 20000)
        0.0
        >>> percentile_position(15000, 10000, 10000) is None
        True
    """
    if price_max <= price_min:
        return None
    if value <= price_min:
        return 0.0
    if value >= price_max:
        return 100.0
    low, high, v = to_decimal(price_min), to_decimal(price_max), to_decimal(value)
    position = (v - low) / (high - low) * Decimal("100")
    return float(clamp(position, Decimal("0"), Decimal("100")).quantize(Decimal("0.01")))


class BenchmarkComparator:
    def compare(
        self,
        quote_price: float,
        benchmark: RegionalBenchmarkData,
    ) -> RegionalBenchmark:
        return RegionalBenchmark(
            region=benchmark.region,
            average_price_sqm=benchmark.average_price_sqm,
            percentile=percentile_position(quote_price, benchmark.price_min, benchmark.price_max),
            comparison=BenchmarkComparison(
                quote_price=quote_price,
                average_price=benchmark.average_price,
                price_min=benchmark.price_min,
                price_max=benchmark.price_max,
            ),
        )
