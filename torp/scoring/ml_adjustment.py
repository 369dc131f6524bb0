"""
ML-adjusted scoring
torp/scoring/ml_adjustment.py

Wraps a finished ScoreResult with a model-based adjustment. The base result
is never modified, so the rule-based breakdown stays the explanation of
record.

Blend:
    w        = ml_confidence × ML_MAX_WEIGHT        (max 0.3)
    adjusted = base × (1 − w) + predicted × w       clamped to [0, max_score]

The default model is rule-based (price, quality and risk predictors); any
object implementing AdjustmentModel can replace it.
"""

import logging
from dataclasses import asdict, dataclass, field
from decimal import Decimal
from typing import Dict, Optional, Protocol

from torp.config import get_settings
from torp.models.enrichment import EnrichmentContext
from torp.models.enumerations import Grade
from torp.models.quote import ExtractedQuoteData
from torp.models.result import ScoreResult
from torp.scoring.criteria.common import mentions
from torp.scoring.rubric import RubricDefinition, get_rubric
from torp.scoring.utils import clamp, round_half_up, to_decimal

logger = logging.getLogger(__name__)

# Adjustment amounts are expressed on a 1000-point scale
REFERENCE_SCALE = 1000


@dataclass
class MLFeatures:
    """Model inputs derived from the quote and its enrichment."""
    total_amount: float
    price_per_sqm: Optional[float]
    items_count: int
    average_item_price: float
    company_has_legal_id: bool
    company_has_financial_data: bool
    company_has_certifications: bool
    company_years_active: Optional[int]
    enrichment_sources_count: int
    has_price_references: bool
    has_regional_data: bool
    description_quality: float        # share of lines with > 50 chars
    technical_completeness: float     # share of lines with unit, quantity and unit price
    materials_specified: int
    project_size: str                 # small | medium | large

    @classmethod
    def extract(
        cls,
        quote: ExtractedQuoteData,
        enrichment: Optional[EnrichmentContext] = None,
    ) -> "MLFeatures":
        enrichment = enrichment or EnrichmentContext()
        items = quote.items
        count = len(items)
        total = quote.total_amount

        if total > 100_000:
            size = "large"
        elif total > 30_000:
            size = "medium"
        else:
            size = "small"

        company = enrichment.company
        return cls(
            total_amount=total,
            price_per_sqm=total / quote.project.surface if quote.project.surface else None,
            items_count=count,
            average_item_price=quote.line_items_total / count if count else 0.0,
            company_has_legal_id=quote.company.has_legal_id or bool(company and company.legal_id),
            company_has_financial_data=bool(company and company.has_financial_data),
            company_has_certifications=bool(company and company.certifications),
            company_years_active=company.years_active if company else None,
            enrichment_sources_count=len(enrichment.sources()),
            has_price_references=bool(enrichment.price_references),
            has_regional_data=enrichment.regional_benchmark is not None,
            description_quality=(
                sum(1 for i in items if len(i.description) > 50) / count if count else 0.0
            ),
            technical_completeness=(
                sum(1 for i in items if i.unit and i.quantity and i.unit_price) / count
                if count else 0.0
            ),
            materials_specified=sum(
                1 for i in items
                if mentions(i.description.lower(), r"marque", r"r[ée]f[ée]rence", r"mod[èe]le")
            ),
            project_size=size,
        )


@dataclass
class MLPrediction:
    """Output of an AdjustmentModel."""
    predicted_score: float
    confidence: float                          # [0, 1]
    adjustments: Dict[str, float] = field(default_factory=dict)
    feature_importance: Dict[str, float] = field(default_factory=dict)


class AdjustmentModel(Protocol):
    def predict(self, features: MLFeatures, base_score: int, max_score: int) -> MLPrediction:
        ...


class RuleBasedAdjustmentModel:
    """Hand-tuned price, quality and risk predictors."""

    def predict(self, features: MLFeatures, base_score: int, max_score: int) -> MLPrediction:
        price, price_importance = self._price(features)
        quality, quality_importance = self._quality(features)
        risk, risk_importance = self._risk(features)

        scale = max_score / REFERENCE_SCALE
        adjustments = {
            "price": price * scale,
            "quality": quality * scale,
            "risk": risk * scale,
        }
        predicted = max(0.0, min(float(max_score), base_score + sum(adjustments.values())))

        confidence = min(
            1.0,
            0.5
            + features.enrichment_sources_count / 5 * 0.2
            + features.description_quality * 0.15
            + features.technical_completeness * 0.15,
        )

        return MLPrediction(
            predicted_score=predicted,
            confidence=confidence,
            adjustments=adjustments,
            feature_importance={
                "total_amount": price_importance,
                "enrichment_sources_count": quality_importance,
                "company_has_financial_data": risk_importance,
                "description_quality": quality_importance * 0.8,
                "technical_completeness": quality_importance * 0.6,
            },
        )

    @staticmethod
    def _price(features: MLFeatures):
        adjustment, importance = 0.0, 0.0
        if features.has_price_references:
            if features.average_item_price > 500:
                adjustment -= 20
                importance = 0.8
            elif features.average_item_price < 100:
                adjustment += 10
                importance = 0.6
        # few lines for a large project
        if features.project_size == "large" and features.items_count < 20:
            adjustment -= 15
            importance = max(importance, 0.7)
        return adjustment, importance

    @staticmethod
    def _quality(features: MLFeatures):
        adjustment = 0.0
        if features.description_quality > 0.8:
            adjustment += 15
        elif features.description_quality < 0.5:
            adjustment -= 20
        if features.technical_completeness > 0.9:
            adjustment += 10
        elif features.technical_completeness < 0.6:
            adjustment -= 15
        if features.materials_specified > features.items_count * 0.3:
            adjustment += 5
        return adjustment, 0.7

    @staticmethod
    def _risk(features: MLFeatures):
        adjustment, importance = 0.0, 0.6
        if not features.company_has_financial_data:
            adjustment -= 10
            importance = 0.8
        if not features.company_has_certifications and features.project_size == "large":
            adjustment -= 15
            importance = 0.9
        if features.enrichment_sources_count < 2:
            adjustment -= 5
        return adjustment, importance


@dataclass
class AdjustedScoreResult:
    """A base ScoreResult plus its model-blended score."""
    base: ScoreResult
    adjusted_score: int
    adjusted_grade: Grade
    ml_confidence: float
    blend_weight: float
    adjustments: Dict[str, float]
    feature_importance: Dict[str, float]
    features: MLFeatures

    def to_record(self) -> dict:
        record = self.base.to_record()
        record["mlAdjustment"] = {
            "adjustedScore": self.adjusted_score,
            "adjustedGrade": self.adjusted_grade.value,
            "confidence": round(self.ml_confidence, 4),
            "blendWeight": round(self.blend_weight, 4),
            "adjustments": self.adjustments,
            "featureImportance": self.feature_importance,
            "features": asdict(self.features),
        }
        return record


class MLAdjuster:
    """Decorates ScoreEngine output with an ML-blended score."""

    def __init__(self, model: Optional[AdjustmentModel] = None, max_weight: Optional[float] = None):
        self.model = model or RuleBasedAdjustmentModel()
        self.max_weight = max_weight if max_weight is not None else get_settings().ML_MAX_WEIGHT

    def adjust(
        self,
        result: ScoreResult,
        quote: ExtractedQuoteData,
        enrichment: Optional[EnrichmentContext] = None,
        rubric: Optional[RubricDefinition] = None,
    ) -> AdjustedScoreResult:
        """
        Blend the base score with the model prediction.

        Args:
            result: Base result from ScoreEngine (left untouched).
            quote: The scored quote.
            enrichment: The enrichment used for the base result.
            rubric: Rubric used for grading; resolved from
                    result.rubric_version when omitted.
        """
        rubric = rubric or get_rubric(result.rubric_version)
        features = MLFeatures.extract(quote, enrichment)
        prediction = self.model.predict(features, result.score, result.max_score)

        confidence = to_decimal(max(0.0, min(1.0, prediction.confidence)))
        weight = confidence * to_decimal(self.max_weight)
        blended = (
            Decimal(result.score) * (Decimal("1") - weight)
            + to_decimal(prediction.predicted_score, 2) * weight
        )
        adjusted = round_half_up(clamp(blended, Decimal("0"), Decimal(result.max_score)))
        grade = rubric.grades.classify(adjusted)

        logger.info(
            "ml_adjustment_applied",
            extra={
                "quote_id": result.quote_id,
                "base_score": result.score,
                "adjusted_score": adjusted,
                "ml_confidence": float(confidence),
                "blend_weight": float(weight),
            },
        )

        return AdjustedScoreResult(
            base=result,
            adjusted_score=adjusted,
            adjusted_grade=grade,
            ml_confidence=float(confidence),
            blend_weight=float(weight),
            adjustments=prediction.adjustments,
            feature_importance=prediction.feature_importance,
            features=features,
        )
