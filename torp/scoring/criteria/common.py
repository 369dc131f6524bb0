"""
Shared criterion helpers.

Every criterion is a plain function ``(quote, enrichment, context) ->
CriterionResult`` returning a score in [0, 1]. A criterion that cannot be
evaluated because the data it needs is absent returns the neutral value
(``Settings.NEUTRAL_SCORE``) with ``data_available=False``.
"""

import re
from typing import Callable, Optional

from torp.config import get_settings
from torp.models.context import ScoringContext
from torp.models.enrichment import EnrichmentContext, RegionalBenchmarkData
from torp.models.quote import ExtractedQuoteData
from torp.models.result import CriterionResult

CriterionFn = Callable[[ExtractedQuoteData, EnrichmentContext, ScoringContext], CriterionResult]


def scored(criterion_id: str, score: float, justification: str = "") -> CriterionResult:
    """Build a result from data that was actually available, clamped to [0, 1]."""
    return CriterionResult(
        criterion_id=criterion_id,
        score=max(0.0, min(1.0, score)),
        justification=justification,
        data_available=True,
    )


def neutral(criterion_id: str, justification: str = "Data unavailable") -> CriterionResult:
    return CriterionResult(
        criterion_id=criterion_id,
        score=get_settings().NEUTRAL_SCORE,
        justification=justification,
        data_available=False,
    )


def placeholder(criterion_id: str, label: str) -> CriterionFn:
    """
    Criterion whose rule has not been specified yet.

    It always yields the neutral value, so it keeps its slot in the axis
    average without biasing it.
    """

    def evaluate(quote, enrichment, context) -> CriterionResult:
        return neutral(criterion_id, f"{label}: no rule defined")

    evaluate.__name__ = f"placeholder_{criterion_id.lower()}"
    return evaluate


def mentions(text: str, *patterns: str) -> bool:
    """True when any regex pattern matches the (lower-cased) text."""
    return any(re.search(p, text) for p in patterns)


def keyword_check(
    criterion_id: str,
    text: str,
    patterns: tuple,
    hit_score: float,
    miss_score: float,
    hit_message: str,
    miss_message: str,
) -> CriterionResult:
    """Score a keyword presence check on the quote text."""
    if mentions(text, *patterns):
        return scored(criterion_id, hit_score, hit_message)
    return scored(criterion_id, miss_score, miss_message)


def price_deviation(
    quote: ExtractedQuoteData,
    benchmark: Optional[RegionalBenchmarkData],
) -> Optional[float]:
    """Relative deviation of the quote total from the regional average price."""
    if benchmark is None or benchmark.average_price <= 0:
        return None
    amount = quote.total_amount
    if amount <= 0:
        return None
    return (amount - benchmark.average_price) / benchmark.average_price
