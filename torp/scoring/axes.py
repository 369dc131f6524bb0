"""
Axis evaluation
torp/scoring/axes.py

An axis is a named, ordered tuple of criteria plus a point budget.

Formula:
    axis_score = mean(criterion scores) × max_points
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Tuple

from torp.models.context import ScoringContext
from torp.models.enrichment import EnrichmentContext
from torp.models.enumerations import AxisId
from torp.models.quote import ExtractedQuoteData
from torp.models.result import AxisScore
from torp.scoring.criteria.common import CriterionFn
from torp.scoring.utils import clamp, mean, to_decimal


@dataclass(frozen=True)
class AxisEvaluator:
    """One rubric axis: id, display label, point budget and criteria."""
    axis: AxisId
    label: str
    max_points: int
    criteria: Tuple[CriterionFn, ...]

    def evaluate(
        self,
        quote: ExtractedQuoteData,
        enrichment: EnrichmentContext,
        context: ScoringContext,
        weight: float,
    ) -> AxisScore:
        """Run every criterion and aggregate them into an AxisScore."""
        results = [criterion(quote, enrichment, context) for criterion in self.criteria]
        ratio = clamp(mean([to_decimal(r.score) for r in results]))
        points = (ratio * Decimal(self.max_points)).quantize(Decimal("0.01"))

        return AxisScore(
            axis=self.axis,
            label=self.label,
            score=float(points),
            max_points=self.max_points,
            percentage=float((ratio * 100).quantize(Decimal("0.01"))),
            weight=weight,
            criteria=results,
        )
