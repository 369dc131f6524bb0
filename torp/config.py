"""Application configuration with comprehensive validation."""
from typing import Literal, Dict
from functools import lru_cache
from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Scoring engine settings, loaded once and validated at startup."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    APP_NAME: str = "TORP Scoring Engine"
    APP_VERSION: str = "1.0.0"
    LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    LOG_FORMAT: Literal["json", "console"] = "json"

    # Rubric selection
    DEFAULT_RUBRIC_VERSION: Literal["legacy-1.0", "advanced-2.0"] = "legacy-1.0"

    # Scoring parameters
    NEUTRAL_SCORE: float = Field(default=0.7, ge=0.0, le=1.0)
    BASE_CONFIDENCE: int = Field(default=85, ge=50, le=100)
    TOTALS_TOLERANCE: float = Field(default=0.01, ge=0.0, le=0.10)

    # Legacy rubric weights (4 axes)
    W_PRICE: float = Field(default=0.25, ge=0.0, le=1.0)
    W_QUALITY: float = Field(default=0.30, ge=0.0, le=1.0)
    W_TIMELINE: float = Field(default=0.20, ge=0.0, le=1.0)
    W_COMPLIANCE: float = Field(default=0.25, ge=0.0, le=1.0)

    # ML adjustment
    ML_ADJUSTMENT_ENABLED: bool = False
    ML_MAX_WEIGHT: float = Field(default=0.30, ge=0.0, le=0.50)

    # Batch benchmark
    BENCHMARK_CONCURRENCY: int = Field(default=4, ge=1, le=64)
    BENCHMARK_REPEAT_RUNS: int = Field(default=2, ge=1, le=10)

    @model_validator(mode="after")
    def validate_legacy_weights(self):
        """Validate legacy axis weights sum to 1.0."""
        total = sum(self.legacy_weights.values())
        if abs(total - 1.0) > 1e-6:
            raise ValueError(f"Legacy axis weights must sum to 1.0, got {total}")
        return self

    @property
    def legacy_weights(self) -> Dict[str, float]:
        """Legacy weights keyed by axis id."""
        return {
            "price": self.W_PRICE,
            "quality": self.W_QUALITY,
            "timeline": self.W_TIMELINE,
            "compliance": self.W_COMPLIANCE,
        }


@lru_cache
def get_settings() -> Settings:
    return Settings()
