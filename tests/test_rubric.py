# tests/test_rubric.py

"""
Rubric definition and grade classifier tests.
"""

import pytest

from torp.core.exceptions import RubricConfigurationError, UnknownRubricError
from torp.models.enumerations import AxisId, ClientProfile, Grade, RubricVersion
from torp.scoring.axes import AxisEvaluator
from torp.scoring.criteria.common import placeholder
from torp.scoring.grade_classifier import GradeClassifier
from torp.scoring.rubric import (
    ADVANCED_GRADES,
    ADVANCED_PROFILE_WEIGHTS,
    LEGACY_GRADES,
    RubricDefinition,
    build_legacy_rubric,
    get_rubric,
)


def _two_axis_rubric(**overrides):
    data = dict(
        version="test",
        total_points=100,
        axes=(
            AxisEvaluator(AxisId.PRICE, "Price", 60, (placeholder("A", "a"),)),
            AxisEvaluator(AxisId.QUALITY, "Quality", 40, (placeholder("B", "b"),)),
        ),
        weights={AxisId.PRICE: 0.6, AxisId.QUALITY: 0.4},
        grades=GradeClassifier(((50, Grade.A),)),
    )
    data.update(overrides)
    return RubricDefinition(**data)


class TestBuiltInRubrics:

    def test_legacy_shape(self):
        rubric = get_rubric(RubricVersion.LEGACY)
        assert rubric.version == "legacy-1.0"
        assert rubric.total_points == 1000
        assert rubric.axis_ids == (AxisId.PRICE, AxisId.QUALITY, AxisId.TIMELINE, AxisId.COMPLIANCE)
        assert [a.max_points for a in rubric.axes] == [250, 300, 200, 250]

    def test_legacy_criteria_counts(self):
        rubric = get_rubric("legacy-1.0")
        assert [len(a.criteria) for a in rubric.axes] == [12, 20, 12, 36]

    @pytest.mark.parametrize("profile", list(ClientProfile))
    def test_advanced_shape(self, profile):
        rubric = get_rubric(RubricVersion.ADVANCED, profile)
        assert rubric.version == "advanced-2.0"
        assert rubric.total_points == 1200
        assert len(rubric.axes) == 8
        assert rubric.profile == profile

    @pytest.mark.parametrize("profile", list(ClientProfile))
    def test_profile_weights_sum_to_one(self, profile):
        assert sum(ADVANCED_PROFILE_WEIGHTS[profile].values()) == pytest.approx(1.0)

    def test_legacy_weights_sum_to_one(self):
        assert sum(get_rubric("legacy-1.0").weights.values()) == pytest.approx(1.0)

    def test_profiles_change_weights(self):
        individual = get_rubric("advanced-2.0", ClientProfile.INDIVIDUAL)
        business = get_rubric("advanced-2.0", ClientProfile.BUSINESS)
        assert individual.weights[AxisId.TRANSPARENCY] > business.weights[AxisId.TRANSPARENCY]

    def test_labels(self):
        assert get_rubric("advanced-2.0").labels[AxisId.INNOVATION] == "Innovation & Sustainability"

    def test_unknown_version(self):
        with pytest.raises(UnknownRubricError) as exc_info:
            get_rubric("v9")
        assert exc_info.value.rubric_version == "v9"

    def test_custom_legacy_weights(self):
        rubric = build_legacy_rubric(
            {"price": 0.4, "quality": 0.2, "timeline": 0.2, "compliance": 0.2}
        )
        assert rubric.weights[AxisId.PRICE] == 0.4


class TestRubricValidation:

    def test_valid_custom_rubric(self):
        rubric = _two_axis_rubric()
        assert rubric.has_axis(AxisId.PRICE)
        assert not rubric.has_axis(AxisId.TIMELINE)

    def test_weights_not_summing_to_one(self):
        with pytest.raises(RubricConfigurationError, match="sum to 1.0"):
            _two_axis_rubric(weights={AxisId.PRICE: 0.6, AxisId.QUALITY: 0.5})

    def test_weight_table_mismatch(self):
        with pytest.raises(RubricConfigurationError):
            _two_axis_rubric(weights={AxisId.PRICE: 1.0})

    def test_negative_weight(self):
        with pytest.raises(RubricConfigurationError):
            _two_axis_rubric(weights={AxisId.PRICE: 1.2, AxisId.QUALITY: -0.2})

    def test_duplicate_axis(self):
        axes = (
            AxisEvaluator(AxisId.PRICE, "Price", 50, (placeholder("A", "a"),)),
            AxisEvaluator(AxisId.PRICE, "Price", 50, (placeholder("B", "b"),)),
        )
        with pytest.raises(RubricConfigurationError, match="duplicate"):
            _two_axis_rubric(axes=axes, weights={AxisId.PRICE: 1.0})

    def test_axis_without_points(self):
        axes = (
            AxisEvaluator(AxisId.PRICE, "Price", 100, (placeholder("A", "a"),)),
            AxisEvaluator(AxisId.QUALITY, "Quality", 0, (placeholder("B", "b"),)),
        )
        with pytest.raises(RubricConfigurationError, match="no points"):
            _two_axis_rubric(axes=axes)

    def test_axis_without_criteria(self):
        axes = (
            AxisEvaluator(AxisId.PRICE, "Price", 60, ()),
            AxisEvaluator(AxisId.QUALITY, "Quality", 40, (placeholder("B", "b"),)),
        )
        with pytest.raises(RubricConfigurationError, match="no criteria"):
            _two_axis_rubric(axes=axes)

    def test_point_budget_mismatch(self):
        with pytest.raises(RubricConfigurationError, match="axis points"):
            _two_axis_rubric(total_points=120)

    def test_error_carries_version(self):
        with pytest.raises(RubricConfigurationError) as exc_info:
            _two_axis_rubric(version="broken", total_points=0)
        assert exc_info.value.rubric_version == "broken"


class TestGradeClassifier:

    @pytest.mark.parametrize("score,expected", [
        (1000, Grade.A), (800, Grade.A), (799, Grade.B), (600, Grade.B),
        (599, Grade.C), (400, Grade.C), (200, Grade.D), (199, Grade.E), (0, Grade.E),
    ])
    def test_legacy_thresholds(self, score, expected):
        assert GradeClassifier(LEGACY_GRADES).classify(score) == expected

    @pytest.mark.parametrize("score,expected", [
        (1200, Grade.A_PLUS), (1080, Grade.A_PLUS), (1079, Grade.A), (960, Grade.A),
        (840, Grade.B), (720, Grade.C), (600, Grade.D), (599, Grade.E),
    ])
    def test_advanced_thresholds(self, score, expected):
        assert GradeClassifier(ADVANCED_GRADES).classify(score) == expected

    def test_grades_listed_best_first(self):
        assert GradeClassifier(LEGACY_GRADES).grades == (Grade.A, Grade.B, Grade.C, Grade.D, Grade.E)

    def test_empty_table(self):
        with pytest.raises(RubricConfigurationError):
            GradeClassifier(())

    def test_non_decreasing_thresholds(self):
        with pytest.raises(RubricConfigurationError, match="strictly decreasing"):
            GradeClassifier(((600, Grade.A), (800, Grade.B)))

    def test_equal_thresholds(self):
        with pytest.raises(RubricConfigurationError):
            GradeClassifier(((600, Grade.A), (600, Grade.B)))


class TestRubricImmutability:

    def test_cached_weights_are_read_only(self):
        rubric = get_rubric("legacy-1.0")
        with pytest.raises(TypeError):
            rubric.weights[AxisId.PRICE] = 0.9
        assert get_rubric("legacy-1.0").weights[AxisId.PRICE] == 0.25

    def test_labels_are_read_only(self):
        with pytest.raises(TypeError):
            get_rubric("advanced-2.0").labels[AxisId.PRICE] = "Cost"

    def test_caller_dict_is_copied(self):
        weights = {AxisId.PRICE: 0.6, AxisId.QUALITY: 0.4}
        rubric = _two_axis_rubric(weights=weights)
        weights[AxisId.PRICE] = 0.9
        assert rubric.weights[AxisId.PRICE] == 0.6
