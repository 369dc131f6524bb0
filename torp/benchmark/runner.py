"""
Benchmark runner
torp/benchmark/runner.py

Scores a batch of samples through a bounded asyncio worker pool and
aggregates the outcome into a BenchmarkResult.

    - at most ``concurrency`` quotes are scored at once (asyncio.Semaphore)
    - each scoring call runs in a worker thread (the engine is thread-safe)
    - every sample is scored ``repeat_runs`` times to measure stability
    - a failing sample is recorded as FAILED and the run goes on
    - the cancel event is checked before each sample; once it is set, the
      remaining samples are recorded as CANCELLED
"""

import asyncio
import time
from typing import List, Optional, Sequence

import structlog

from torp.benchmark.metrics import compute_metrics, data_completeness, generate_recommendations
from torp.config import get_settings
from torp.core.exceptions import BenchmarkCancelledError
from torp.models.benchmark import BenchmarkResult, BenchmarkSample, BenchmarkTestCase
from torp.models.context import ScoringContext
from torp.models.enumerations import BenchmarkStatus, SampleStatus
from torp.scoring.engine import ScoreEngine
from torp.scoring.ml_adjustment import MLAdjuster

logger = structlog.get_logger(__name__)


class BenchmarkRunner:
    """Batch scorer producing accuracy, consistency, data and performance metrics."""

    def __init__(
        self,
        engine: Optional[ScoreEngine] = None,
        adjuster: Optional[MLAdjuster] = None,
        concurrency: Optional[int] = None,
        repeat_runs: Optional[int] = None,
        version: str = "1.0.0",
    ):
        settings = get_settings()
        self.engine = engine or ScoreEngine()
        self.adjuster = adjuster
        self.concurrency = settings.BENCHMARK_CONCURRENCY if concurrency is None else concurrency
        self.repeat_runs = settings.BENCHMARK_REPEAT_RUNS if repeat_runs is None else repeat_runs
        self.version = version
        if self.concurrency < 1:
            raise ValueError("concurrency must be >= 1")
        if self.repeat_runs < 1:
            raise ValueError("repeat_runs must be >= 1")

    async def run(
        self,
        samples: Sequence[BenchmarkSample],
        cancel_event: Optional[asyncio.Event] = None,
    ) -> BenchmarkResult:
        """
        Score every sample and aggregate the metrics.

        Raises:
            BenchmarkCancelledError: cancelled before any sample was scored.
        """
        rubric = self.engine.resolve_rubric(ScoringContext())
        semaphore = asyncio.Semaphore(self.concurrency)
        started = time.perf_counter()

        logger.info(
            "benchmark_started",
            samples=len(samples),
            rubric_version=rubric.version,
            concurrency=self.concurrency,
            repeat_runs=self.repeat_runs,
        )

        test_cases: List[BenchmarkTestCase] = list(await asyncio.gather(*(
            self._run_sample(sample, semaphore, cancel_event) for sample in samples
        )))

        cancelled = [c for c in test_cases if c.status == SampleStatus.CANCELLED]
        failed = [c for c in test_cases if c.status == SampleStatus.FAILED]

        if cancelled and len(cancelled) == len(test_cases):
            logger.info("benchmark_cancelled", completed=0, total=len(test_cases))
            raise BenchmarkCancelledError(
                f"Benchmark cancelled before any of {len(test_cases)} samples was scored"
            )

        if cancelled:
            status = BenchmarkStatus.CANCELLED
        elif failed:
            status = BenchmarkStatus.COMPLETED_WITH_ERRORS
        else:
            status = BenchmarkStatus.COMPLETED

        metrics = compute_metrics(test_cases, rubric.total_points, len(rubric.grades.grades))
        result = BenchmarkResult(
            version=self.version,
            rubric_version=rubric.version,
            status=status,
            sample_size=len(test_cases),
            metrics=metrics,
            test_cases=test_cases,
            recommendations=generate_recommendations(metrics),
        )

        logger.info(
            "benchmark_completed",
            status=status.value,
            total=len(test_cases),
            failed=len(failed),
            cancelled=len(cancelled),
            elapsed_s=round(time.perf_counter() - started, 3),
        )
        return result

    async def _run_sample(
        self,
        sample: BenchmarkSample,
        semaphore: asyncio.Semaphore,
        cancel_event: Optional[asyncio.Event],
    ) -> BenchmarkTestCase:
        async with semaphore:
            if cancel_event is not None and cancel_event.is_set():
                return BenchmarkTestCase(
                    sample_id=sample.key,
                    quote_id=sample.quote.quote_id,
                    status=SampleStatus.CANCELLED,
                    expected_grade=sample.expected_grade,
                    expected_score=sample.expected_score,
                    error="Benchmark cancelled",
                )

            try:
                return await self._score_sample(sample)
            except Exception as e:
                logger.error("benchmark_sample_failed", sample_id=sample.key, error=str(e))
                return BenchmarkTestCase(
                    sample_id=sample.key,
                    quote_id=sample.quote.quote_id,
                    status=SampleStatus.FAILED,
                    expected_grade=sample.expected_grade,
                    expected_score=sample.expected_score,
                    error=str(e),
                )

    async def _score_sample(self, sample: BenchmarkSample) -> BenchmarkTestCase:
        runs = []
        elapsed = 0.0
        for _ in range(self.repeat_runs):
            t0 = time.perf_counter()
            runs.append(await asyncio.to_thread(
                self.engine.calculate_score, sample.quote, sample.enrichment, sample.context
            ))
            elapsed += time.perf_counter() - t0

        result = runs[0]
        criteria = [c for axis in result.breakdown for c in axis.criteria]

        adjusted_score = None
        if self.adjuster is not None:
            rubric = self.engine.resolve_rubric(sample.context or ScoringContext())
            adjusted = await asyncio.to_thread(
                self.adjuster.adjust, result, sample.quote, sample.enrichment, rubric
            )
            adjusted_score = adjusted.adjusted_score

        return BenchmarkTestCase(
            sample_id=sample.key,
            quote_id=result.quote_id,
            status=SampleStatus.SUCCESS,
            actual_grade=result.grade,
            actual_score=result.score,
            expected_grade=sample.expected_grade,
            expected_score=sample.expected_score,
            score_deviation=(
                result.score - sample.expected_score if sample.expected_score is not None else None
            ),
            run_scores=[r.score for r in runs],
            adjusted_score=adjusted_score,
            alert_types=[a.type for a in result.alerts],
            expected_alert_types=sample.expected_alert_types,
            data_completeness=data_completeness(sample.quote),
            sources_used=result.enriched_sources,
            criteria_total=len(criteria),
            criteria_with_data=sum(1 for c in criteria if c.data_available),
            processing_time_ms=round(elapsed / self.repeat_runs * 1000, 3),
        )
