"""
Score Engine
torp/scoring/engine.py

Orchestrates one scoring call:

    1. Evaluate every axis of the active rubric (mean of criteria × max_points)
    2. final = round(Σ (axis_score / axis_max) × weight × total_points)
    3. Grade, confidence, alerts, recommendations
    4. Regional benchmark position, when benchmark data is supplied

Stateless and thread-safe: the only inputs are the quote, the optional
enrichment and context, and the rubric. Missing or partial data never raises.
"""

from decimal import Decimal
from typing import Optional, Union

import structlog

from torp.config import get_settings
from torp.models.context import ScoringContext
from torp.models.enrichment import EnrichmentContext
from torp.models.enumerations import RubricVersion
from torp.models.quote import ExtractedQuoteData
from torp.models.result import ScoreResult
from torp.scoring.alert_generator import AlertGenerator
from torp.scoring.benchmark_comparator import BenchmarkComparator
from torp.scoring.confidence_calculator import ConfidenceCalculator
from torp.scoring.recommendation_generator import RecommendationGenerator
from torp.scoring.rubric import RubricDefinition, get_rubric
from torp.scoring.utils import clamp, round_half_up, to_decimal

logger = structlog.get_logger(__name__)

RubricSpec = Union[RubricDefinition, RubricVersion, str]


class ScoreEngine:
    """Deterministic quote scorer, parameterised by a rubric."""

    def __init__(self, rubric: Optional[RubricSpec] = None):
        """
        Args:
            rubric: A RubricDefinition, or a rubric version resolved per call
                    with the context's client profile. Defaults to
                    Settings.DEFAULT_RUBRIC_VERSION.

        Raises:
            UnknownRubricError: the version is not registered.
            RubricConfigurationError: the rubric table is invalid.
        """
        if rubric is None:
            rubric = get_settings().DEFAULT_RUBRIC_VERSION
        if not isinstance(rubric, RubricDefinition):
            # fail fast on an unknown version
            get_rubric(rubric)
        self.rubric = rubric
        self.confidence_calculator = ConfidenceCalculator()
        self.alert_generator = AlertGenerator()
        self.recommendation_generator = RecommendationGenerator()
        self.benchmark_comparator = BenchmarkComparator()

    def resolve_rubric(
        self,
        context: ScoringContext,
        rubric_version: Optional[Union[RubricVersion, str]] = None,
    ) -> RubricDefinition:
        if rubric_version is not None:
            return get_rubric(rubric_version, context.profile)
        if isinstance(self.rubric, RubricDefinition):
            return self.rubric
        return get_rubric(self.rubric, context.profile)

    def calculate_score(
        self,
        quote: ExtractedQuoteData,
        enrichment: Optional[EnrichmentContext] = None,
        context: Optional[ScoringContext] = None,
        rubric_version: Optional[Union[RubricVersion, str]] = None,
    ) -> ScoreResult:
        """
        Score a quote.

        Args:
            quote: Extracted quote data (any block may be partial).
            enrichment: Pre-fetched third-party data; every field optional.
            context: Client profile, project type, region.
            rubric_version: Per-call rubric override.

        Returns:
            A new immutable ScoreResult stamped with the rubric version.
        """
        enrichment = enrichment or EnrichmentContext()
        context = context or ScoringContext()
        rubric = self.resolve_rubric(context, rubric_version)

        breakdown = [
            axis.evaluate(quote, enrichment, context, rubric.weights[axis.axis])
            for axis in rubric.axes
        ]

        total = Decimal(rubric.total_points)
        weighted = sum(
            (to_decimal(a.score, 2) / Decimal(a.max_points)) * to_decimal(a.weight, 6) * total
            for a in breakdown
        )
        score = round_half_up(clamp(weighted, Decimal("0"), total))
        grade = rubric.grades.classify(score)

        confidence = self.confidence_calculator.calculate([a.percentage for a in breakdown])
        alerts = self.alert_generator.generate(quote, enrichment, breakdown)
        recommendations = self.recommendation_generator.generate(
            breakdown, score, rubric.total_points
        )

        benchmark = None
        if enrichment.regional_benchmark is not None:
            benchmark = self.benchmark_comparator.compare(
                quote.total_amount, enrichment.regional_benchmark
            )

        result = ScoreResult(
            quote_id=quote.quote_id,
            score=score,
            max_score=rubric.total_points,
            grade=grade,
            confidence=confidence.confidence,
            breakdown=breakdown,
            alerts=alerts,
            recommendations=recommendations,
            benchmark=benchmark,
            rubric_version=rubric.version,
            enriched_sources=enrichment.sources(),
        )

        logger.info(
            "score_calculated",
            quote_id=quote.quote_id,
            rubric_version=rubric.version,
            profile=rubric.profile.value,
            score=score,
            max_score=rubric.total_points,
            grade=grade.value,
            confidence=confidence.confidence,
            axis_percentages={a.axis.value: a.percentage for a in breakdown},
            alert_types=[a.type for a in alerts],
            benchmark_percentile=benchmark.percentile if benchmark else None,
        )

        return result
