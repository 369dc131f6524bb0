# tests/test_run_benchmark.py

import json

import pytest

from torp.benchmark.metrics import compute_metrics
from torp.benchmark.runner import BenchmarkRunner
from torp.models.benchmark import BenchmarkResult
from torp.models.enumerations import BenchmarkStatus
from torp.scripts.run_benchmark import load_samples, main

SAMPLES = [
    {"sample_id": "s1", "quote": {"quote_id": "q1", "company": {"legal_id": "12345678900011"}}},
    {"sample_id": "s2", "quote": {"quote_id": "q2"}, "expected_grade": "C"},
]


@pytest.fixture
def samples_file(tmp_path):
    path = tmp_path / "samples.json"
    path.write_text(json.dumps(SAMPLES), encoding="utf-8")
    return path


class TestRunBenchmarkScript:

    def test_load_samples(self, samples_file):
        samples = load_samples(samples_file)
        assert [s.key for s in samples] == ["s1", "s2"]
        assert samples[1].expected_grade.value == "C"

    def test_writes_result(self, samples_file, tmp_path):
        output = tmp_path / "result.json"
        code = main([str(samples_file), "--output", str(output), "--concurrency", "2", "--repeat-runs", "1"])

        assert code == 0
        payload = json.loads(output.read_text(encoding="utf-8"))
        assert payload["status"] == "completed"
        assert payload["sample_size"] == 2
        assert payload["rubric_version"] == "legacy-1.0"

    def test_advanced_rubric_with_ml(self, samples_file, tmp_path):
        output = tmp_path / "result.json"
        code = main([str(samples_file), "--output", str(output), "--rubric", "advanced-2.0", "--ml"])

        assert code == 0
        payload = json.loads(output.read_text(encoding="utf-8"))
        assert payload["rubric_version"] == "advanced-2.0"
        assert all(case["adjusted_score"] is not None for case in payload["test_cases"])

    def test_partially_cancelled_run_exits_130(self, samples_file, tmp_path, monkeypatch):
        async def cancelled_run(self, samples, cancel_event=None):
            return BenchmarkResult(
                version="1.0.0",
                rubric_version="legacy-1.0",
                status=BenchmarkStatus.CANCELLED,
                sample_size=len(samples),
                metrics=compute_metrics([], 1000, 5),
            )

        monkeypatch.setattr(BenchmarkRunner, "run", cancelled_run)
        output = tmp_path / "result.json"
        assert main([str(samples_file), "--output", str(output)]) == 130
        # partial results are still written
        assert json.loads(output.read_text(encoding="utf-8"))["status"] == "cancelled"
