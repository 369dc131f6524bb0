"""
scoring/recommendation_generator.py

Turns weak axes into actionable suggestions. Thresholds are looser than the
alert thresholds so that a quote can receive advice without being flagged.

Per-axis rules:
    price        < 60 %   high
    quality      < 70 %   medium
    timeline     < 60 %   medium
    compliance   < 70 %   high
    guarantees   < 70 %   high
    feasibility  < 60 %   medium
    transparency < 60 %   medium
    innovation   < 50 %   low

Overall rules (rubrics with more than four axes):
    - the two weakest axes under 60 %, high priority
    - final score below 50 % of the scale → look for alternatives (high)
    - final score below 70 % of the scale → extra checks before signing (medium)

Output is sorted high → medium → low; ties keep generation order.
"""

from dataclasses import dataclass
from typing import List, Optional

from torp.models.enumerations import AxisId, Priority
from torp.models.result import AxisScore, Recommendation

WEAK_AXIS_THRESHOLD = 60.0
WEAK_AXIS_TARGET = 70.0
OVERALL_RULES_MIN_AXES = 5


@dataclass(frozen=True)
class AxisRecommendationRule:
    axis: AxisId
    threshold: float
    priority: Priority
    suggestion: str
    impact: Optional[str] = None


AXIS_RECOMMENDATION_RULES = (
    AxisRecommendationRule(
        AxisId.PRICE, 60.0, Priority.HIGH,
        "Request a detailed justification of unit prices",
        "Potential savings of 10-15% on the total amount",
    ),
    AxisRecommendationRule(
        AxisId.QUALITY, 70.0, Priority.MEDIUM,
        "Require brand references and certifications for materials",
    ),
    AxisRecommendationRule(
        AxisId.TIMELINE, 60.0, Priority.MEDIUM,
        "Request a detailed schedule with intermediate milestones",
    ),
    AxisRecommendationRule(
        AxisId.COMPLIANCE, 70.0, Priority.HIGH,
        "Verify decennial and liability insurances and request the certificates",
    ),
    AxisRecommendationRule(
        AxisId.GUARANTEES, 70.0, Priority.HIGH,
        "Obtain the written warranty terms (completion, biennial, decennial)",
    ),
    AxisRecommendationRule(
        AxisId.FEASIBILITY, 60.0, Priority.MEDIUM,
        "Ask for a site diagnostic and sizing calculations",
    ),
    AxisRecommendationRule(
        AxisId.TRANSPARENCY, 60.0, Priority.MEDIUM,
        "Request itemised descriptions with material references",
    ),
    AxisRecommendationRule(
        AxisId.INNOVATION, 50.0, Priority.LOW,
        "Ask about bio-based materials and energy-saving options",
    ),
)


class RecommendationGenerator:
    """Per-axis and overall recommendations."""

    def generate(
        self,
        breakdown: List[AxisScore],
        final_score: int,
        total_points: int,
    ) -> List[Recommendation]:
        recommendations: List[Recommendation] = []

        by_axis = {a.axis: a for a in breakdown}
        for rule in AXIS_RECOMMENDATION_RULES:
            axis_score = by_axis.get(rule.axis)
            if axis_score is not None and axis_score.percentage < rule.threshold:
                recommendations.append(Recommendation(
                    category=rule.axis.value,
                    priority=rule.priority,
                    suggestion=rule.suggestion,
                    impact=rule.impact,
                ))

        if len(breakdown) >= OVERALL_RULES_MIN_AXES:
            recommendations.extend(self._overall(breakdown, final_score, total_points))

        # sorted() is stable
        return sorted(recommendations, key=lambda r: -r.priority.rank)

    def _overall(
        self,
        breakdown: List[AxisScore],
        final_score: int,
        total_points: int,
    ) -> List[Recommendation]:
        recommendations: List[Recommendation] = []

        weakest = sorted(
            (a for a in breakdown if a.percentage < WEAK_AXIS_THRESHOLD),
            key=lambda a: a.percentage,
        )[:2]
        for axis_score in weakest:
            gain = round((WEAK_AXIS_TARGET - axis_score.percentage) * axis_score.max_points / 100)
            recommendations.append(Recommendation(
                category=axis_score.axis.value,
                priority=Priority.HIGH,
                suggestion=f"Improve {axis_score.label} ({round(axis_score.percentage)}% currently)",
                impact=f"+{gain} points possible",
            ))

        if final_score < total_points * 0.5:
            recommendations.append(Recommendation(
                category="general",
                priority=Priority.HIGH,
                suggestion="Look for alternative quotes - this one carries significant risks",
                impact="Lower financial and technical risk",
            ))
        elif final_score < total_points * 0.7:
            recommendations.append(Recommendation(
                category="general",
                priority=Priority.MEDIUM,
                suggestion="Run additional checks before accepting the quote",
                impact="Safer project",
            ))
        return recommendations
