#!/usr/bin/env python
"""
Run the scoring benchmark over a file of labelled samples.

The samples file is a JSON array of BenchmarkSample objects (quote, optional
enrichment and context, optional expected grade / score / alert types).
Ctrl+C stops the run cooperatively: samples already scored are kept and the
rest are reported as cancelled.

Usage:
    python -m torp.scripts.run_benchmark samples.json
    python -m torp.scripts.run_benchmark samples.json --concurrency 8 --repeat-runs 3
    python -m torp.scripts.run_benchmark samples.json --rubric advanced-2.0 --output result.json
    python -m torp.scripts.run_benchmark samples.json --ml
"""

import argparse
import asyncio
import logging
import signal
import sys
from pathlib import Path
from typing import List

from pydantic import TypeAdapter

from torp.benchmark.runner import BenchmarkRunner
from torp.config import get_settings
from torp.core.exceptions import BenchmarkCancelledError
from torp.logging_config import configure_logging
from torp.models.benchmark import BenchmarkResult, BenchmarkSample
from torp.models.enumerations import BenchmarkStatus, RubricVersion
from torp.scoring.engine import ScoreEngine
from torp.scoring.ml_adjustment import MLAdjuster

logger = logging.getLogger(__name__)

_samples_adapter = TypeAdapter(List[BenchmarkSample])


def load_samples(path: Path) -> List[BenchmarkSample]:
    return _samples_adapter.validate_json(path.read_bytes())


async def run(args: argparse.Namespace) -> BenchmarkResult:
    samples = load_samples(args.samples)
    logger.info(f"Loaded {len(samples)} samples from {args.samples}")

    runner = BenchmarkRunner(
        engine=ScoreEngine(args.rubric),
        adjuster=MLAdjuster() if args.ml else None,
        concurrency=args.concurrency,
        repeat_runs=args.repeat_runs,
    )

    cancel_event = asyncio.Event()
    loop = asyncio.get_running_loop()
    try:
        loop.add_signal_handler(signal.SIGINT, cancel_event.set)
    except NotImplementedError:
        # Windows event loops have no signal handlers
        pass

    return await runner.run(samples, cancel_event=cancel_event)


def print_summary(result: BenchmarkResult) -> None:
    m = result.metrics
    logger.info("=" * 60)
    logger.info(f"BENCHMARK {result.status.value.upper()} ({result.rubric_version})")
    logger.info("=" * 60)
    logger.info(f"  Samples:              {result.sample_size}")
    if m.accuracy.score_prediction_accuracy is not None:
        logger.info(f"  Score accuracy:       {m.accuracy.score_prediction_accuracy:.1f}%")
    if m.accuracy.grade_prediction_accuracy is not None:
        logger.info(f"  Grade accuracy:       {m.accuracy.grade_prediction_accuracy:.1f}%")
    logger.info(f"  Score stability:      {m.consistency.score_stability:.1f}%")
    logger.info(f"  Grade entropy:        {m.consistency.grade_entropy:.1f}")
    logger.info(f"  Data completeness:    {m.data_quality.data_completeness:.1f}%")
    logger.info(f"  Enrichment success:   {m.data_quality.enrichment_success_rate:.1f}%")
    logger.info(f"  Mean latency:         {m.algorithm_performance.mean_latency_ms:.1f} ms")
    logger.info(f"  Criteria coverage:    {m.algorithm_performance.criteria_coverage:.1f}%")
    for recommendation in result.recommendations:
        logger.info(f"  -> {recommendation}")


def main(argv=None) -> int:
    settings = get_settings()
    parser = argparse.ArgumentParser(description="Run the TORP scoring benchmark")
    parser.add_argument("samples", type=Path, help="JSON file with an array of samples")
    parser.add_argument("--output", type=Path, default=None, help="Write the result JSON here")
    parser.add_argument(
        "--concurrency", type=int, default=settings.BENCHMARK_CONCURRENCY,
        help="Quotes scored in parallel",
    )
    parser.add_argument(
        "--repeat-runs", type=int, default=settings.BENCHMARK_REPEAT_RUNS,
        help="Scoring passes per quote, for the stability metric",
    )
    parser.add_argument(
        "--rubric", choices=[v.value for v in RubricVersion],
        default=settings.DEFAULT_RUBRIC_VERSION,
    )
    parser.add_argument(
        "--ml", action="store_true", default=settings.ML_ADJUSTMENT_ENABLED,
        help="Also compute the ML-adjusted score",
    )
    args = parser.parse_args(argv)

    configure_logging(log_format="console")
    # Banner output on stderr, result JSON on stdout
    handler = logging.getLogger().handlers[0]
    handler.setStream(sys.stderr)
    handler.setFormatter(logging.Formatter(
        "%(asctime)s | %(levelname)-8s | %(message)s", datefmt="%H:%M:%S",
    ))

    try:
        result = asyncio.run(run(args))
    except BenchmarkCancelledError as e:
        logger.warning(str(e))
        return 130

    print_summary(result)

    payload = result.model_dump_json(indent=2)
    if args.output:
        args.output.write_text(payload, encoding="utf-8")
        logger.info(f"Result written to {args.output}")
    else:
        sys.stdout.write(payload + "\n")
    return 130 if result.status == BenchmarkStatus.CANCELLED else 0


if __name__ == "__main__":
    sys.exit(main())
