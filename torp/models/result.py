"""
Scoring output models.

A ScoreResult is created fresh on every scoring call and never mutated.
A quote may accumulate several results over time (re-scoring after
re-enrichment); the latest by ``computed_at`` is authoritative for display.
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Optional
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field, model_validator

from torp.models.enumerations import AxisId, Grade, Priority, Severity

WEIGHT_EPSILON = 1e-6


@dataclass(frozen=True)
class CriterionResult:
    """Output of a single criterion evaluator."""
    criterion_id: str
    score: float              # normalized to [0, 1]
    justification: str = ""
    data_available: bool = True


class AxisScore(BaseModel):
    """Aggregated score of one rubric axis."""

    model_config = ConfigDict(frozen=True)

    axis: AxisId
    label: str
    score: float = Field(..., ge=0, description="Achieved points")
    max_points: float = Field(..., gt=0)
    percentage: float = Field(..., ge=0, le=100)
    weight: float = Field(..., ge=0, le=1)
    criteria: List[CriterionResult] = Field(default_factory=list)

    @model_validator(mode="after")
    def validate_score_within_budget(self):
        """Ensure 0 <= score <= max_points."""
        if self.score > self.max_points + WEIGHT_EPSILON:
            raise ValueError(
                f"{self.axis.value}: score {self.score} exceeds max_points {self.max_points}"
            )
        return self

    @property
    def ratio(self) -> float:
        """Score as a fraction of the axis budget."""
        return self.score / self.max_points


class Alert(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: str = Field(..., description="Machine-readable alert tag")
    severity: Severity
    message: str
    axis: Optional[AxisId] = None


class Recommendation(BaseModel):
    model_config = ConfigDict(frozen=True)

    category: str = Field(..., description="Axis id, or 'general'")
    priority: Priority
    suggestion: str
    impact: Optional[str] = Field(default=None, description="Estimated impact, free text")


class BenchmarkComparison(BaseModel):
    model_config = ConfigDict(frozen=True)

    quote_price: float
    average_price: float
    price_min: float
    price_max: float


class RegionalBenchmark(BaseModel):
    """Position of the quote total inside a regional price distribution."""

    model_config = ConfigDict(frozen=True)

    region: str
    average_price_sqm: Optional[float] = None
    percentile: Optional[float] = Field(
        default=None,
        ge=0,
        le=100,
        description="None when the range is degenerate"
    )
    comparison: BenchmarkComparison


class ScoreResult(BaseModel):
    """Graded, explainable result of one scoring call."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=lambda: str(uuid4()))
    quote_id: str
    score: int = Field(..., ge=0)
    max_score: int = Field(..., gt=0, description="Rubric point scale (1000 or 1200)")
    grade: Grade
    confidence: int = Field(..., ge=50, le=100)
    breakdown: List[AxisScore]
    alerts: List[Alert] = Field(default_factory=list)
    recommendations: List[Recommendation] = Field(default_factory=list)
    benchmark: Optional[RegionalBenchmark] = None
    rubric_version: str
    enriched_sources: List[str] = Field(default_factory=list)
    computed_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="Computation timestamp (UTC)"
    )

    @model_validator(mode="after")
    def validate_score_and_weights(self):
        """Ensure score fits the scale and breakdown weights cover 100%."""
        if self.score > self.max_score:
            raise ValueError(f"score {self.score} exceeds rubric scale {self.max_score}")
        total_weight = sum(a.weight for a in self.breakdown)
        if abs(total_weight - 1.0) > WEIGHT_EPSILON:
            raise ValueError(f"breakdown weights must sum to 1.0, got {total_weight}")
        return self

    def axis(self, axis_id: AxisId) -> Optional[AxisScore]:
        for axis_score in self.breakdown:
            if axis_score.axis == axis_id:
                return axis_score
        return None

    def has_alert(self, alert_type: str) -> bool:
        return any(a.type == alert_type for a in self.alerts)

    def to_record(self) -> Dict[str, Any]:
        """Serialize to the logical output record."""
        record: Dict[str, Any] = {
            "quoteId": self.quote_id,
            "score": self.score,
            "grade": self.grade.value,
            "confidence": self.confidence,
            "breakdown": [
                {
                    "axis": a.axis.value,
                    "label": a.label,
                    "score": round(a.score, 2),
                    "maxPoints": a.max_points,
                    "weight": a.weight,
                    "percentage": round(a.percentage, 1),
                }
                for a in self.breakdown
            ],
            "alerts": [
                {"type": a.type, "severity": a.severity.value, "message": a.message}
                for a in self.alerts
            ],
            "recommendations": [
                {
                    "category": r.category,
                    "priority": r.priority.value,
                    "suggestion": r.suggestion,
                    **({"impact": r.impact} if r.impact else {}),
                }
                for r in self.recommendations
            ],
            "rubricVersion": self.rubric_version,
            "computedAt": self.computed_at.isoformat(),
        }
        if self.benchmark is not None:
            record["benchmark"] = {
                "region": self.benchmark.region,
                "percentile": self.benchmark.percentile,
                "comparison": self.benchmark.comparison.model_dump(),
            }
        return record


def latest_result(results: Iterable[ScoreResult]) -> Optional[ScoreResult]:
    """Authoritative result of a quote's scoring history (latest computed_at)."""
    return max(results, key=lambda r: r.computed_at, default=None)
