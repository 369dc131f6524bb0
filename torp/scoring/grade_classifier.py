"""
scoring/grade_classifier.py

Maps a final score to a letter grade through an ordered (threshold, grade)
table checked highest first. Scores below every threshold fall into the
catch-all lowest grade.

Legacy (1000 points):    A ≥ 800, B ≥ 600, C ≥ 400, D ≥ 200, else E
Advanced (1200 points):  A+ ≥ 1080, A ≥ 960, B ≥ 840, C ≥ 720, D ≥ 600, else E
"""

from typing import Sequence, Tuple

from torp.core.exceptions import RubricConfigurationError
from torp.models.enumerations import Grade


class GradeClassifier:
    """Threshold table, validated once at construction."""

    def __init__(
        self,
        thresholds: Sequence[Tuple[int, Grade]],
        lowest: Grade = Grade.E,
        rubric_version: str = "custom",
    ):
        if not thresholds:
            raise RubricConfigurationError(rubric_version, "grade table is empty")
        values = [t for t, _ in thresholds]
        if any(a <= b for a, b in zip(values, values[1:])):
            raise RubricConfigurationError(
                rubric_version,
                f"grade thresholds must be strictly decreasing, got {values}",
            )
        self.thresholds = tuple(thresholds)
        self.lowest = lowest

    def classify(self, score: float) -> Grade:
        for threshold, grade in self.thresholds:
            if score >= threshold:
                return grade
        return self.lowest

    @property
    def grades(self) -> Tuple[Grade, ...]:
        """All grades this table can produce, best first."""
        return tuple(g for _, g in self.thresholds) + (self.lowest,)
