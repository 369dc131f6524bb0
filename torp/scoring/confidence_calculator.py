"""
scoring/confidence_calculator.py

Estimates how much the axis scores agree with each other. Confidence does not
depend on the grade: a uniformly average quote is as "confident" as a
uniformly excellent one.

Formula:
    p_i        = axis percentage on a per-mille scale (0-1000)
    penalty    = Σ |p_i − mean(p)| / 100        (= n × MAD / 100)
    confidence = clamp(85 − penalty, 50, 100)   rounded to an integer
"""

import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import List

from torp.config import get_settings
from torp.scoring.utils import clamp, mean_absolute_deviation, round_half_up, to_decimal

logger = logging.getLogger(__name__)

MIN_CONFIDENCE = Decimal("50")
MAX_CONFIDENCE = Decimal("100")


@dataclass
class ConfidenceResult:
    """Output of ConfidenceCalculator.calculate()."""
    confidence: int            # integer in [50, 100]
    dispersion_penalty: Decimal
    mean_absolute_deviation: Decimal   # per-mille scale
    axis_count: int


class ConfidenceCalculator:
    """Axis-disagreement confidence estimate."""

    def __init__(self, base_confidence: int = None):
        self.base_confidence = Decimal(
            base_confidence if base_confidence is not None else get_settings().BASE_CONFIDENCE
        )

    def calculate(self, axis_percentages: List[float]) -> ConfidenceResult:
        """
        Args:
            axis_percentages: Axis scores as percentages of their budgets (0-100).

        Returns:
            ConfidenceResult with the integer confidence and its penalty.

        Examples:
            >>> ConfidenceCalculator(85).calculate([70.0, 70.0, 70.0, 70.0]).confidence
            85
            >>> ConfidenceCalculator(85).calculate([100.0, 0.0]).confidence
            75
        """
        per_mille = [to_decimal(p * 10) for p in axis_percentages]
        mad = mean_absolute_deviation(per_mille)
        penalty = (mad * Decimal(len(per_mille)) / Decimal("100")).quantize(Decimal("0.0001"))
        confidence = round_half_up(
            clamp(self.base_confidence - penalty, MIN_CONFIDENCE, MAX_CONFIDENCE)
        )

        logger.info(
            "confidence_calculated",
            extra={
                "axis_count": len(per_mille),
                "mad_per_mille": float(mad),
                "penalty": float(penalty),
                "confidence": confidence,
            },
        )

        return ConfidenceResult(
            confidence=confidence,
            dispersion_penalty=penalty,
            mean_absolute_deviation=mad,
            axis_count=len(per_mille),
        )
