# tests/test_config.py

import pytest
from pydantic import ValidationError

from torp.config import Settings


class TestSettings:

    def test_defaults(self):
        settings = Settings(_env_file=None)
        assert settings.DEFAULT_RUBRIC_VERSION == "legacy-1.0"
        assert settings.BASE_CONFIDENCE == 85
        assert sum(settings.legacy_weights.values()) == pytest.approx(1.0)

    def test_weights_must_sum_to_one(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, W_PRICE=0.5)

    def test_rebalanced_weights(self):
        settings = Settings(_env_file=None, W_PRICE=0.30, W_QUALITY=0.25)
        assert settings.legacy_weights["price"] == 0.30

    def test_unknown_rubric_rejected(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, DEFAULT_RUBRIC_VERSION="v3")

    def test_ml_weight_bounded(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, ML_MAX_WEIGHT=0.9)
