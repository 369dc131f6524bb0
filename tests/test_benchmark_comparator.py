# tests/test_benchmark_comparator.py

import pytest

from torp.models.enrichment import RegionalBenchmarkData
from torp.scoring.benchmark_comparator import BenchmarkComparator, percentile_position


class TestPercentilePosition:

    def test_midpoint(self):
        assert percentile_position(15000, 10000, 20000) == 50.0

    def test_below_minimum(self):
        assert percentile_position(5000, 10000, 20000) == 0.0

    def test_at_minimum(self):
        assert percentile_position(10000, 10000, 20000) == 0.0

    def test_above_maximum(self):
        assert percentile_position(25000, 10000, 20000) == 100.0

    def test_at_maximum(self):
        assert percentile_position(20000, 10000, 20000) == 100.0

    @pytest.mark.parametrize("value", [5000, 10000, 15000])
    def test_degenerate_range(self, value):
        assert percentile_position(value, 10000, 10000) is None

    def test_inverted_range(self):
        assert percentile_position(15000, 20000, 10000) is None

    def test_rounded_to_two_places(self):
        assert percentile_position(1, 0, 3) == 33.33


class TestBenchmarkComparator:

    def test_compare(self, regional_benchmark):
        result = BenchmarkComparator().compare(15000, regional_benchmark)
        assert result.region == "Auvergne-Rhône-Alpes"
        assert result.percentile == 50.0
        assert result.average_price_sqm == 1500
        assert result.comparison.quote_price == 15000
        assert result.comparison.price_min == 10000
        assert result.comparison.price_max == 20000

    def test_compare_zero_width(self):
        data = RegionalBenchmarkData(region="X", average_price=100, price_min=100, price_max=100)
        assert BenchmarkComparator().compare(100, data).percentile is None
