# tests/test_benchmark_metrics.py

import pytest

from torp.benchmark.metrics import (
    SATISFACTORY,
    accuracy_metrics,
    algorithm_performance_metrics,
    compute_metrics,
    consistency_metrics,
    data_completeness,
    data_quality_metrics,
    generate_recommendations,
)
from torp.models.benchmark import (
    AccuracyMetrics,
    AlgorithmPerformanceMetrics,
    BenchmarkMetrics,
    BenchmarkTestCase,
    ConsistencyMetrics,
    DataQualityMetrics,
)
from torp.models.enumerations import Grade, SampleStatus
from torp.models.quote import ExtractedQuoteData, LineItem


def _case(sample_id="s1", **overrides):
    data = dict(
        sample_id=sample_id,
        quote_id=f"q-{sample_id}",
        actual_grade=Grade.B,
        actual_score=700,
        run_scores=[700, 700],
        data_completeness=80.0,
        sources_used=["company_registry", "price_references"],
        criteria_total=10,
        criteria_with_data=6,
        processing_time_ms=12.0,
    )
    data.update(overrides)
    return BenchmarkTestCase(**data)


def _healthy_metrics(**overrides):
    groups = dict(
        accuracy=AccuracyMetrics(score_prediction_accuracy=95.0),
        consistency=ConsistencyMetrics(score_stability=100.0),
        data_quality=DataQualityMetrics(
            data_completeness=90.0, enrichment_success_rate=100.0, source_reliability=75.0,
        ),
        algorithm_performance=AlgorithmPerformanceMetrics(mean_latency_ms=20.0),
    )
    groups.update(overrides)
    return BenchmarkMetrics(**groups)


class TestDataCompleteness:

    def test_complete_quote(self, complete_quote):
        assert data_completeness(complete_quote) == 100.0

    def test_empty_quote(self, sparse_quote):
        assert data_completeness(sparse_quote) == 0.0

    def test_partial_line_items(self):
        quote = ExtractedQuoteData(items=[LineItem(description="pose", total_price=100)])
        # amount, items, description, total price: 4 of 9
        assert data_completeness(quote) == pytest.approx(44.44)


class TestAccuracy:

    def test_unlabelled(self):
        metrics = accuracy_metrics([_case()], 1000)
        assert metrics.score_prediction_accuracy is None
        assert metrics.grade_prediction_accuracy is None
        assert metrics.labelled_samples == 0

    def test_score_accuracy(self):
        cases = [
            _case("s1", expected_score=650, score_deviation=50),
            _case("s2", expected_score=850, score_deviation=-150),
        ]
        # mean |deviation| 100 on a 1000 scale
        assert accuracy_metrics(cases, 1000).score_prediction_accuracy == 90.0

    def test_grade_accuracy(self):
        cases = [
            _case("s1", expected_grade=Grade.B),
            _case("s2", expected_grade=Grade.A),
        ]
        metrics = accuracy_metrics(cases, 1000)
        assert metrics.grade_prediction_accuracy == 50.0
        assert metrics.labelled_samples == 2


class TestConsistency:

    def test_single_grade_has_zero_entropy(self):
        metrics = consistency_metrics([_case("s1"), _case("s2")], 5)
        assert metrics.grade_entropy == 0.0
        assert metrics.grade_distribution == {"B": 2}

    def test_two_grades(self):
        cases = [_case("s1"), _case("s2", actual_grade=Grade.A)]
        # H = 1 bit, normalised by log2(5)
        assert consistency_metrics(cases, 5).grade_entropy == pytest.approx(43.07)

    def test_stability(self):
        cases = [_case("s1"), _case("s2", run_scores=[700, 701])]
        assert consistency_metrics(cases, 5).score_stability == 50.0


class TestDataQuality:

    def test_rates(self):
        cases = [_case("s1"), _case("s2", sources_used=[], data_completeness=40.0)]
        metrics = data_quality_metrics(cases)
        assert metrics.data_completeness == 60.0
        assert metrics.enrichment_success_rate == 50.0
        # one source per case on average × 15
        assert metrics.source_reliability == 15.0

    def test_reliability_capped(self):
        cases = [_case(sources_used=[f"src{i}" for i in range(10)])]
        assert data_quality_metrics(cases).source_reliability == 100.0


class TestAlgorithmPerformance:

    def test_coverage_and_latency(self):
        cases = [_case("s1"), _case("s2", criteria_with_data=10, processing_time_ms=20.0)]
        metrics = algorithm_performance_metrics(cases)
        assert metrics.criteria_coverage == 80.0
        assert metrics.mean_latency_ms == 16.0
        assert metrics.alert_false_positive_rate is None

    def test_alert_rates(self):
        case = _case(alert_types=["A", "B"], expected_alert_types=["B", "C"])
        metrics = algorithm_performance_metrics([case])
        assert metrics.alert_false_positive_rate == 50.0
        assert metrics.alert_false_negative_rate == 50.0


class TestComputeMetrics:

    def test_failed_cases_are_not_measured(self):
        cases = [
            _case("s1"),
            _case("s2", status=SampleStatus.FAILED, actual_grade=None, data_completeness=0.0,
                  sources_used=[], run_scores=[]),
        ]
        metrics = compute_metrics(cases, 1000, 5)
        assert metrics.data_quality.data_completeness == 80.0
        assert metrics.consistency.grade_distribution == {"B": 1}

    def test_no_successful_cases(self):
        metrics = compute_metrics([], 1000, 5)
        assert metrics.consistency.score_stability == 100.0
        assert metrics.data_quality.data_completeness == 0.0


class TestRecommendations:

    def test_satisfactory(self):
        assert generate_recommendations(_healthy_metrics()) == [SATISFACTORY]

    def test_low_completeness(self):
        metrics = _healthy_metrics(data_quality=DataQualityMetrics(
            data_completeness=50.0, enrichment_success_rate=100.0, source_reliability=75.0,
        ))
        recs = generate_recommendations(metrics)
        assert len(recs) == 1
        assert "completeness" in recs[0]

    def test_unlabelled_run_skips_accuracy(self):
        metrics = _healthy_metrics(accuracy=AccuracyMetrics())
        assert generate_recommendations(metrics) == [SATISFACTORY]

    def test_every_threshold(self):
        metrics = BenchmarkMetrics(
            accuracy=AccuracyMetrics(score_prediction_accuracy=50.0),
            consistency=ConsistencyMetrics(score_stability=50.0),
            data_quality=DataQualityMetrics(),
            algorithm_performance=AlgorithmPerformanceMetrics(mean_latency_ms=3000.0),
        )
        assert len(generate_recommendations(metrics)) == 6
