"""
Models Package - TORP Scoring Engine
torp/models/__init__.py

Pydantic models for quote input, enrichment context, scoring results and
benchmark runs.
"""

from torp.models.enumerations import (
    AmountBracket,
    AxisId,
    BenchmarkStatus,
    ClientProfile,
    Grade,
    Priority,
    ProjectType,
    RubricVersion,
    SampleStatus,
    Severity,
)
from torp.models.quote import (
    ClientInfo,
    CompanyInfo,
    ExtractedQuoteData,
    LegalMentions,
    LineItem,
    ProjectInfo,
    QuoteDates,
    QuoteTotals,
)
from torp.models.context import ScoringContext
from torp.models.enrichment import (
    Certification,
    CompanyRecord,
    DTUReference,
    EnrichmentContext,
    InsuranceStatus,
    PriceReference,
    RegionalBenchmarkData,
    Reputation,
)
from torp.models.result import (
    Alert,
    AxisScore,
    BenchmarkComparison,
    CriterionResult,
    Recommendation,
    RegionalBenchmark,
    ScoreResult,
    latest_result,
)
from torp.models.benchmark import (
    AccuracyMetrics,
    AlgorithmPerformanceMetrics,
    BenchmarkMetrics,
    BenchmarkResult,
    BenchmarkSample,
    BenchmarkTestCase,
    ConsistencyMetrics,
    DataQualityMetrics,
)

__all__ = [
    # Enumerations
    "AmountBracket",
    "AxisId",
    "BenchmarkStatus",
    "ClientProfile",
    "Grade",
    "Priority",
    "ProjectType",
    "RubricVersion",
    "SampleStatus",
    "Severity",
    # Quote
    "ClientInfo",
    "CompanyInfo",
    "ExtractedQuoteData",
    "LegalMentions",
    "LineItem",
    "ProjectInfo",
    "QuoteDates",
    "QuoteTotals",
    # Context
    "ScoringContext",
    # Enrichment
    "Certification",
    "CompanyRecord",
    "DTUReference",
    "EnrichmentContext",
    "InsuranceStatus",
    "PriceReference",
    "RegionalBenchmarkData",
    "Reputation",
    # Results
    "Alert",
    "AxisScore",
    "BenchmarkComparison",
    "CriterionResult",
    "Recommendation",
    "RegionalBenchmark",
    "ScoreResult",
    "latest_result",
    # Benchmark
    "AccuracyMetrics",
    "AlgorithmPerformanceMetrics",
    "BenchmarkMetrics",
    "BenchmarkResult",
    "BenchmarkSample",
    "BenchmarkTestCase",
    "ConsistencyMetrics",
    "DataQualityMetrics",
]
