"""
Benchmark models - labelled samples in, aggregated metrics out.
"""

from datetime import datetime, timezone
from typing import Dict, List, Optional

from pydantic import BaseModel, Field

from torp.models.context import ScoringContext
from torp.models.enrichment import EnrichmentContext
from torp.models.enumerations import BenchmarkStatus, Grade, SampleStatus
from torp.models.quote import ExtractedQuoteData


class BenchmarkSample(BaseModel):
    """One quote of the benchmark set, optionally labelled by a reviewer."""

    sample_id: Optional[str] = None
    quote: ExtractedQuoteData
    enrichment: Optional[EnrichmentContext] = None
    context: Optional[ScoringContext] = None
    expected_grade: Optional[Grade] = None
    expected_score: Optional[int] = Field(default=None, ge=0)
    expected_alert_types: Optional[List[str]] = Field(
        default=None,
        description="Alert types a reviewer expects; None means unlabelled"
    )

    @property
    def key(self) -> str:
        return self.sample_id or self.quote.quote_id


class BenchmarkTestCase(BaseModel):
    """Outcome of scoring one sample (all repeat runs)."""

    sample_id: str
    quote_id: str
    status: SampleStatus = SampleStatus.SUCCESS
    actual_grade: Optional[Grade] = None
    actual_score: Optional[int] = None
    expected_grade: Optional[Grade] = None
    expected_score: Optional[int] = None
    score_deviation: Optional[int] = Field(
        default=None,
        description="actual_score - expected_score, when labelled"
    )
    run_scores: List[int] = Field(default_factory=list)
    adjusted_score: Optional[int] = Field(
        default=None,
        description="ML-blended score, when an adjuster is configured"
    )
    alert_types: List[str] = Field(default_factory=list)
    expected_alert_types: Optional[List[str]] = None
    data_completeness: float = Field(default=0.0, ge=0, le=100)
    sources_used: List[str] = Field(default_factory=list)
    criteria_total: int = 0
    criteria_with_data: int = 0
    processing_time_ms: float = 0.0
    error: Optional[str] = None

    @property
    def is_stable(self) -> bool:
        """All repeat runs produced the same score."""
        return len(set(self.run_scores)) <= 1


class AccuracyMetrics(BaseModel):
    score_prediction_accuracy: Optional[float] = None
    grade_prediction_accuracy: Optional[float] = None
    labelled_samples: int = 0


class ConsistencyMetrics(BaseModel):
    score_stability: float = 100.0
    grade_entropy: float = 0.0
    grade_distribution: Dict[str, int] = Field(default_factory=dict)


class DataQualityMetrics(BaseModel):
    data_completeness: float = 0.0
    enrichment_success_rate: float = 0.0
    source_reliability: float = 0.0


class AlgorithmPerformanceMetrics(BaseModel):
    mean_latency_ms: float = 0.0
    criteria_coverage: float = 0.0
    alert_false_positive_rate: Optional[float] = None
    alert_false_negative_rate: Optional[float] = None


class BenchmarkMetrics(BaseModel):
    accuracy: AccuracyMetrics
    consistency: ConsistencyMetrics
    data_quality: DataQualityMetrics
    algorithm_performance: AlgorithmPerformanceMetrics


class BenchmarkResult(BaseModel):
    """Aggregated outcome of a benchmark run."""

    version: str
    rubric_version: str
    status: BenchmarkStatus
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    sample_size: int = Field(..., ge=0)
    metrics: BenchmarkMetrics
    test_cases: List[BenchmarkTestCase] = Field(default_factory=list)
    recommendations: List[str] = Field(default_factory=list)
