"""
Core Package - TORP Scoring Engine
torp/core/__init__.py

Core infrastructure: exceptions.
"""

from torp.core.exceptions import (
    BenchmarkCancelledError,
    RubricConfigurationError,
    ScoringException,
    UnknownRubricError,
)

__all__ = [
    "BenchmarkCancelledError",
    "RubricConfigurationError",
    "ScoringException",
    "UnknownRubricError",
]
