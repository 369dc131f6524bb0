"""
Rubric definitions
torp/scoring/rubric.py

A rubric is a closed strategy: its axis list, weight table, point scale and
grade table. The engine is parameterised by one rubric and never branches on
the version itself.

Legacy (legacy-1.0), 1000 points:
    price       250  0.25
    quality     300  0.30
    timeline    200  0.20
    compliance  250  0.25

Advanced (advanced-2.0), 1200 points, weights per client profile:
                 points  standard  individual  business
    compliance     300     0.28       0.30       0.23
    price          250     0.20       0.16       0.24
    quality        200     0.17       0.19       0.13
    feasibility    150     0.12       0.07       0.16
    transparency   100     0.08       0.13       0.04
    guarantees      80     0.07       0.09       0.04
    innovation      50     0.03       0.02       0.07
    timeline        70     0.05       0.04       0.09
"""

from dataclasses import dataclass, field
from functools import lru_cache
from types import MappingProxyType
from typing import Dict, Mapping, Optional, Tuple, Union

from torp.config import get_settings
from torp.core.exceptions import RubricConfigurationError, UnknownRubricError
from torp.models.enumerations import AxisId, ClientProfile, Grade, RubricVersion
from torp.scoring.axes import AxisEvaluator
from torp.scoring.criteria import (
    ADVANCED_COMPLIANCE_CRITERIA,
    ADVANCED_PRICE_CRITERIA,
    ADVANCED_QUALITY_CRITERIA,
    ADVANCED_TIMELINE_CRITERIA,
    FEASIBILITY_CRITERIA,
    GUARANTEE_CRITERIA,
    INNOVATION_CRITERIA,
    LEGACY_COMPLIANCE_CRITERIA,
    LEGACY_PRICE_CRITERIA,
    LEGACY_QUALITY_CRITERIA,
    LEGACY_TIMELINE_CRITERIA,
    TRANSPARENCY_CRITERIA,
)
from torp.scoring.grade_classifier import GradeClassifier

WEIGHT_TOLERANCE = 1e-6

LEGACY_GRADES = (
    (800, Grade.A),
    (600, Grade.B),
    (400, Grade.C),
    (200, Grade.D),
)

ADVANCED_GRADES = (
    (1080, Grade.A_PLUS),
    (960, Grade.A),
    (840, Grade.B),
    (720, Grade.C),
    (600, Grade.D),
)

ADVANCED_PROFILE_WEIGHTS: Dict[ClientProfile, Dict[AxisId, float]] = {
    ClientProfile.STANDARD: {
        AxisId.COMPLIANCE:   0.28,
        AxisId.PRICE:        0.20,
        AxisId.QUALITY:      0.17,
        AxisId.FEASIBILITY:  0.12,
        AxisId.TRANSPARENCY: 0.08,
        AxisId.GUARANTEES:   0.07,
        AxisId.INNOVATION:   0.03,
        AxisId.TIMELINE:     0.05,
    },
    ClientProfile.INDIVIDUAL: {
        AxisId.COMPLIANCE:   0.30,
        AxisId.PRICE:        0.16,
        AxisId.QUALITY:      0.19,
        AxisId.FEASIBILITY:  0.07,
        AxisId.TRANSPARENCY: 0.13,
        AxisId.GUARANTEES:   0.09,
        AxisId.INNOVATION:   0.02,
        AxisId.TIMELINE:     0.04,
    },
    ClientProfile.BUSINESS: {
        AxisId.COMPLIANCE:   0.23,
        AxisId.PRICE:        0.24,
        AxisId.QUALITY:      0.13,
        AxisId.FEASIBILITY:  0.16,
        AxisId.TRANSPARENCY: 0.04,
        AxisId.GUARANTEES:   0.04,
        AxisId.INNOVATION:   0.07,
        AxisId.TIMELINE:     0.09,
    },
}


@dataclass(frozen=True)
class RubricDefinition:
    """Validated rubric variant. Construction fails fast on a bad table."""
    version: str
    total_points: int
    axes: Tuple[AxisEvaluator, ...]
    weights: Mapping[AxisId, float]
    grades: GradeClassifier
    profile: ClientProfile = ClientProfile.STANDARD
    labels: Mapping[AxisId, str] = field(init=False)

    def __post_init__(self):
        # read-only views of the tables
        object.__setattr__(self, "axes", tuple(self.axes))
        object.__setattr__(self, "weights", MappingProxyType(dict(self.weights)))
        self._validate()
        object.__setattr__(
            self, "labels", MappingProxyType({a.axis: a.label for a in self.axes})
        )

    def _validate(self) -> None:
        if self.total_points <= 0:
            raise RubricConfigurationError(self.version, "total_points must be positive")
        if not self.axes:
            raise RubricConfigurationError(self.version, "rubric has no axes")

        seen = set()
        for axis in self.axes:
            if axis.axis in seen:
                raise RubricConfigurationError(self.version, f"duplicate axis '{axis.axis.value}'")
            seen.add(axis.axis)
            if axis.max_points <= 0:
                raise RubricConfigurationError(
                    self.version, f"axis '{axis.axis.value}' has no points"
                )
            if not axis.criteria:
                raise RubricConfigurationError(
                    self.version, f"axis '{axis.axis.value}' has no criteria"
                )

        if set(self.weights) != seen:
            raise RubricConfigurationError(
                self.version, "weight table does not match the axis list"
            )
        if any(w < 0 for w in self.weights.values()):
            raise RubricConfigurationError(self.version, "weights must be non-negative")
        total_weight = sum(self.weights.values())
        if abs(total_weight - 1.0) > WEIGHT_TOLERANCE:
            raise RubricConfigurationError(
                self.version, f"weights must sum to 1.0, got {total_weight}"
            )

        budget = sum(a.max_points for a in self.axes)
        if budget != self.total_points:
            raise RubricConfigurationError(
                self.version,
                f"axis points sum to {budget}, expected {self.total_points}",
            )

    @property
    def axis_ids(self) -> Tuple[AxisId, ...]:
        return tuple(a.axis for a in self.axes)

    def has_axis(self, axis_id: AxisId) -> bool:
        return axis_id in self.weights


def build_legacy_rubric(weights: Optional[Dict[str, float]] = None) -> RubricDefinition:
    """Four-axis, 1000-point rubric. Weights default to the settings table."""
    table = weights or get_settings().legacy_weights
    axes = (
        AxisEvaluator(AxisId.PRICE, "Price", 250, LEGACY_PRICE_CRITERIA),
        AxisEvaluator(AxisId.QUALITY, "Quality", 300, LEGACY_QUALITY_CRITERIA),
        AxisEvaluator(AxisId.TIMELINE, "Timeline", 200, LEGACY_TIMELINE_CRITERIA),
        AxisEvaluator(AxisId.COMPLIANCE, "Compliance", 250, LEGACY_COMPLIANCE_CRITERIA),
    )
    version = RubricVersion.LEGACY.value
    return RubricDefinition(
        version=version,
        total_points=1000,
        axes=axes,
        weights={AxisId(k): v for k, v in table.items()},
        grades=GradeClassifier(LEGACY_GRADES, rubric_version=version),
    )


def build_advanced_rubric(profile: ClientProfile = ClientProfile.STANDARD) -> RubricDefinition:
    """Eight-axis, 1200-point rubric with profile-adapted weights."""
    axes = (
        AxisEvaluator(AxisId.COMPLIANCE, "Compliance", 300, ADVANCED_COMPLIANCE_CRITERIA),
        AxisEvaluator(AxisId.PRICE, "Price", 250, ADVANCED_PRICE_CRITERIA),
        AxisEvaluator(AxisId.QUALITY, "Quality", 200, ADVANCED_QUALITY_CRITERIA),
        AxisEvaluator(AxisId.FEASIBILITY, "Feasibility", 150, FEASIBILITY_CRITERIA),
        AxisEvaluator(AxisId.TRANSPARENCY, "Transparency", 100, TRANSPARENCY_CRITERIA),
        AxisEvaluator(AxisId.GUARANTEES, "Guarantees", 80, GUARANTEE_CRITERIA),
        AxisEvaluator(AxisId.INNOVATION, "Innovation & Sustainability", 50, INNOVATION_CRITERIA),
        AxisEvaluator(AxisId.TIMELINE, "Timeline", 70, ADVANCED_TIMELINE_CRITERIA),
    )
    version = RubricVersion.ADVANCED.value
    return RubricDefinition(
        version=version,
        total_points=1200,
        axes=axes,
        weights=dict(ADVANCED_PROFILE_WEIGHTS[profile]),
        grades=GradeClassifier(ADVANCED_GRADES, rubric_version=version),
        profile=profile,
    )


@lru_cache
def get_rubric(
    version: Union[RubricVersion, str],
    profile: ClientProfile = ClientProfile.STANDARD,
) -> RubricDefinition:
    """
    Resolve a rubric version (and profile) to its definition.

    Raises:
        UnknownRubricError: version is not registered.
    """
    try:
        version = RubricVersion(version)
    except ValueError:
        raise UnknownRubricError(str(version)) from None

    if version == RubricVersion.LEGACY:
        return build_legacy_rubric()
    return build_advanced_rubric(ClientProfile(profile))
