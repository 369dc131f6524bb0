"""Batch benchmark: runner and metric aggregation."""

from torp.benchmark.metrics import compute_metrics, data_completeness, generate_recommendations
from torp.benchmark.runner import BenchmarkRunner

__all__ = [
    "BenchmarkRunner",
    "compute_metrics",
    "data_completeness",
    "generate_recommendations",
]
