# tests/test_confidence_calculator.py

from decimal import Decimal

import pytest

from torp.scoring.confidence_calculator import ConfidenceCalculator


class TestConfidenceCalculator:

    def setup_method(self):
        self.calc = ConfidenceCalculator(base_confidence=85)

    def test_uniform_axes_keep_base_confidence(self):
        result = self.calc.calculate([70.0, 70.0, 70.0, 70.0])
        assert result.confidence == 85
        assert result.dispersion_penalty == Decimal("0")

    def test_uniform_excellent_equals_uniform_average(self):
        assert (
            self.calc.calculate([95.0] * 8).confidence
            == self.calc.calculate([40.0] * 8).confidence
        )

    def test_two_extreme_axes(self):
        # per-mille 1000 and 0: MAD 500, penalty 500 × 2 / 100 = 10
        result = self.calc.calculate([100.0, 0.0])
        assert result.mean_absolute_deviation == Decimal("500")
        assert result.confidence == 75

    def test_floor_at_50(self):
        result = self.calc.calculate([100.0, 0.0] * 4)
        assert result.confidence == 50

    def test_ceiling_at_100(self):
        assert ConfidenceCalculator(base_confidence=100).calculate([50.0]).confidence == 100

    def test_more_dispersion_lowers_confidence(self):
        tight = self.calc.calculate([60.0, 70.0, 80.0, 70.0])
        wide = self.calc.calculate([30.0, 70.0, 95.0, 70.0])
        assert wide.confidence < tight.confidence

    def test_axis_count(self):
        assert self.calc.calculate([70.0] * 8).axis_count == 8

    @pytest.mark.parametrize("percentages", [[], [0.0], [100.0, 100.0]])
    def test_degenerate_inputs_stay_in_bounds(self, percentages):
        assert 50 <= self.calc.calculate(percentages).confidence <= 100

    def test_default_base_from_settings(self):
        assert ConfidenceCalculator().calculate([70.0, 70.0]).confidence == 85
