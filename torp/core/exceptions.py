"""
Custom Exceptions - TORP Scoring Engine
torp/core/exceptions.py

Only rubric configuration defects are raised as hard failures. Missing or
inconsistent quote data never raises; it is reported through alerts.
"""


class ScoringException(Exception):
    """Base exception for the scoring engine."""

    pass


class RubricConfigurationError(ScoringException):
    """Rubric definition is malformed (weights, point budgets, thresholds)."""

    def __init__(self, rubric_version: str, message: str):
        self.rubric_version = rubric_version
        self.message = message
        super().__init__(f"Invalid rubric '{rubric_version}': {message}")


class UnknownRubricError(ScoringException):
    """Requested rubric version is not registered."""

    def __init__(self, rubric_version: str):
        self.rubric_version = rubric_version
        super().__init__(f"Unknown rubric version: {rubric_version}")


class BenchmarkCancelledError(ScoringException):
    """Batch benchmark run was cancelled before any quote was scored."""

    def __init__(self, message: str = "Benchmark run cancelled"):
        self.message = message
        super().__init__(message)
