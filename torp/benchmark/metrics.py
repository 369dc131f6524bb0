"""
Benchmark metrics
torp/benchmark/metrics.py

Aggregates scored test cases into the four metric groups. Only successful
cases are measured; failed and cancelled cases show up in the test case list
and in the run status.

Accuracy (labelled samples only):
    score accuracy = max(0, 100 − mean(|actual − expected|) / max_score × 100)
    grade accuracy = % of cases where actual grade == expected grade

Consistency:
    score stability = % of cases whose repeat runs produced the same score
    grade entropy   = H(grade distribution) / log2(#grades in rubric) × 100

Data quality:
    completeness        = mean % of essential quote fields filled
    enrichment success  = % of cases with at least one enrichment source
    source reliability  = min(100, mean sources per case × 15)

Algorithm performance:
    mean latency ms, criteria coverage (% of criteria evaluated on real data),
    alert false positive / negative rates against reviewer labels
"""

import math
from collections import Counter
from typing import List, Optional, Sequence

from torp.models.benchmark import (
    AccuracyMetrics,
    AlgorithmPerformanceMetrics,
    BenchmarkMetrics,
    BenchmarkTestCase,
    ConsistencyMetrics,
    DataQualityMetrics,
)
from torp.models.enumerations import SampleStatus
from torp.models.quote import ExtractedQuoteData

SOURCE_RELIABILITY_FACTOR = 15

# Recommendation thresholds
MIN_SCORE_ACCURACY = 80.0
MIN_DATA_COMPLETENESS = 70.0
MIN_ENRICHMENT_SUCCESS = 60.0
MIN_SOURCE_RELIABILITY = 60.0
MAX_MEAN_LATENCY_MS = 2000.0
MIN_SCORE_STABILITY = 80.0

SATISFACTORY = "Metrics are satisfactory. Continue monitoring."


def data_completeness(quote: ExtractedQuoteData) -> float:
    """
    Percentage of essential fields filled.

    Essential fields: amount, company name, company legal id, line items,
    project title; plus description, quantity, unit price and line total for
    every line item.
    """
    checks = [
        quote.total_amount > 0,
        bool(quote.company.name),
        quote.company.has_legal_id,
        bool(quote.items),
        bool(quote.project.title),
    ]
    for item in quote.items:
        checks.extend([
            bool(item.description),
            bool(item.quantity),
            bool(item.unit_price),
            bool(item.total_price),
        ])
    return round(sum(checks) / len(checks) * 100, 2)


def _successful(cases: Sequence[BenchmarkTestCase]) -> List[BenchmarkTestCase]:
    return [c for c in cases if c.status == SampleStatus.SUCCESS]


def _pct(part: float, whole: float) -> float:
    return round(part / whole * 100, 2) if whole else 0.0


def accuracy_metrics(cases: Sequence[BenchmarkTestCase], max_score: int) -> AccuracyMetrics:
    score_labelled = [c for c in cases if c.score_deviation is not None]
    grade_labelled = [c for c in cases if c.expected_grade is not None]

    score_accuracy: Optional[float] = None
    if score_labelled:
        mean_abs = sum(abs(c.score_deviation) for c in score_labelled) / len(score_labelled)
        score_accuracy = round(max(0.0, 100 - mean_abs / max_score * 100), 2)

    grade_accuracy: Optional[float] = None
    if grade_labelled:
        hits = sum(1 for c in grade_labelled if c.actual_grade == c.expected_grade)
        grade_accuracy = _pct(hits, len(grade_labelled))

    return AccuracyMetrics(
        score_prediction_accuracy=score_accuracy,
        grade_prediction_accuracy=grade_accuracy,
        labelled_samples=len({c.sample_id for c in score_labelled + grade_labelled}),
    )


def consistency_metrics(cases: Sequence[BenchmarkTestCase], grade_count: int) -> ConsistencyMetrics:
    if not cases:
        return ConsistencyMetrics()

    distribution = Counter(c.actual_grade.value for c in cases if c.actual_grade is not None)
    total = sum(distribution.values())
    entropy = -sum((n / total) * math.log2(n / total) for n in distribution.values() if n)
    max_entropy = math.log2(grade_count) if grade_count > 1 else 1.0

    return ConsistencyMetrics(
        score_stability=_pct(sum(1 for c in cases if c.is_stable), len(cases)),
        grade_entropy=round(entropy / max_entropy * 100, 2),
        grade_distribution=dict(distribution),
    )


def data_quality_metrics(cases: Sequence[BenchmarkTestCase]) -> DataQualityMetrics:
    if not cases:
        return DataQualityMetrics()

    n = len(cases)
    mean_sources = sum(len(c.sources_used) for c in cases) / n
    return DataQualityMetrics(
        data_completeness=round(sum(c.data_completeness for c in cases) / n, 2),
        enrichment_success_rate=_pct(sum(1 for c in cases if c.sources_used), n),
        source_reliability=round(min(100.0, mean_sources * SOURCE_RELIABILITY_FACTOR), 2),
    )


def algorithm_performance_metrics(cases: Sequence[BenchmarkTestCase]) -> AlgorithmPerformanceMetrics:
    if not cases:
        return AlgorithmPerformanceMetrics()

    labelled = [c for c in cases if c.expected_alert_types is not None]
    false_positive_rate: Optional[float] = None
    false_negative_rate: Optional[float] = None
    if labelled:
        predicted = expected = false_positives = false_negatives = 0
        for case in labelled:
            actual, wanted = set(case.alert_types), set(case.expected_alert_types)
            predicted += len(actual)
            expected += len(wanted)
            false_positives += len(actual - wanted)
            false_negatives += len(wanted - actual)
        false_positive_rate = _pct(false_positives, predicted)
        false_negative_rate = _pct(false_negatives, expected)

    return AlgorithmPerformanceMetrics(
        mean_latency_ms=round(sum(c.processing_time_ms for c in cases) / len(cases), 3),
        criteria_coverage=_pct(
            sum(c.criteria_with_data for c in cases),
            sum(c.criteria_total for c in cases),
        ),
        alert_false_positive_rate=false_positive_rate,
        alert_false_negative_rate=false_negative_rate,
    )


def compute_metrics(
    cases: Sequence[BenchmarkTestCase],
    max_score: int,
    grade_count: int,
) -> BenchmarkMetrics:
    """Compute every metric group over the successful cases."""
    measured = _successful(cases)
    return BenchmarkMetrics(
        accuracy=accuracy_metrics(measured, max_score),
        consistency=consistency_metrics(measured, grade_count),
        data_quality=data_quality_metrics(measured),
        algorithm_performance=algorithm_performance_metrics(measured),
    )


def generate_recommendations(metrics: BenchmarkMetrics) -> List[str]:
    recommendations: List[str] = []

    accuracy = metrics.accuracy.score_prediction_accuracy
    if accuracy is not None and accuracy < MIN_SCORE_ACCURACY:
        recommendations.append(
            f"Improve score prediction accuracy (currently {accuracy:.1f}%)"
        )

    quality = metrics.data_quality
    if quality.data_completeness < MIN_DATA_COMPLETENESS:
        recommendations.append(
            f"Improve completeness of extracted quote data (currently {quality.data_completeness:.1f}%)"
        )
    if quality.enrichment_success_rate < MIN_ENRICHMENT_SUCCESS:
        recommendations.append(
            f"Increase enrichment success rate (currently {quality.enrichment_success_rate:.1f}%)"
        )
    if quality.source_reliability < MIN_SOURCE_RELIABILITY:
        recommendations.append("Increase the number of data sources per quote")

    latency = metrics.algorithm_performance.mean_latency_ms
    if latency > MAX_MEAN_LATENCY_MS:
        recommendations.append(f"Optimise scoring latency (currently {latency:.0f} ms)")

    if metrics.consistency.score_stability < MIN_SCORE_STABILITY:
        recommendations.append("Improve score stability across repeated runs")

    return recommendations or [SATISFACTORY]
