import json
import threading

import pytest

from uiharness.framework.reporter import ConsoleReporter, ResultAggregator, success_rate, write_json_report
from uiharness.framework.runner import Failure, Outcome, TestStatus


def passed(name):
    return Outcome(name=name, status=TestStatus.PASSED)


def failed(name, message="boom"):
    return Outcome(name=name, status=TestStatus.FAILED, failure=Failure(message=message))


def test_report_arithmetic():
    aggregator = ResultAggregator()
    for outcome in [passed("a"), failed("b", "nope"), passed("c"), passed("d")]:
        aggregator.record(outcome)

    report = aggregator.finalize()

    assert report.total == 4
    assert report.passed == 3
    assert report.failed == 1
    assert report.total == report.passed + report.failed
    assert report.success_rate == pytest.approx(75.0)
    assert report.failures == (("b", "nope"),)
    assert not report.all_passed


def test_zero_cases_success_rate_is_zero():
    report = ResultAggregator().finalize()

    assert report.total == 0
    assert report.success_rate == 0.0
    assert success_rate(0, 0) == 0.0


def test_finalize_is_idempotent_and_snapshots():
    aggregator = ResultAggregator()
    aggregator.record(passed("a"))

    first = aggregator.finalize(not_run=["later"])
    second = aggregator.finalize()

    assert first is second
    assert second.not_run == ("later",)
    with pytest.raises(RuntimeError):
        aggregator.record(passed("b"))
    assert aggregator.finalize().total == 1


def test_record_rejects_non_terminal_outcome():
    aggregator = ResultAggregator()

    with pytest.raises(ValueError):
        aggregator.record(Outcome(name="x", status=TestStatus.RUNNING))


def test_failures_keep_recording_order():
    aggregator = ResultAggregator()
    for outcome in [failed("z", "1"), passed("m"), failed("a", "2")]:
        aggregator.record(outcome)

    assert [name for name, _ in aggregator.finalize().failures] == ["z", "a"]


def test_record_with_lock_from_threads():
    aggregator = ResultAggregator(lock=threading.Lock())

    def worker(prefix):
        for i in range(50):
            aggregator.record(passed(f"{prefix}-{i}"))

    threads = [threading.Thread(target=worker, args=(p,)) for p in "abcd"]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert aggregator.finalize().passed == 200


def test_json_report(tmp_path):
    aggregator = ResultAggregator()
    aggregator.record(passed("a"))
    aggregator.record(failed("b", "คล้ายกัน missing"))
    report = aggregator.finalize(not_run=["c"])

    path = write_json_report(report, tmp_path / "out" / "report.json", extra={"variant": "quick"})

    data = json.loads(path.read_text(encoding="utf-8"))
    assert data["total"] == 2
    assert data["success_rate"] == 50.0
    assert data["failures"] == [{"name": "b", "message": "คล้ายกัน missing"}]
    assert data["not_run"] == ["c"]
    assert data["variant"] == "quick"


def test_console_reporter_lists_failures_and_not_run():
    from loguru import logger

    lines = []
    sink = logger.add(lines.append, format="{message}")
    try:
        aggregator = ResultAggregator()
        aggregator.record(failed("Calculate ratio", "Should show similar triangles"))
        ConsoleReporter().render(aggregator.finalize(not_run=["Footer stats display"]))
    finally:
        logger.remove(sink)

    text = "".join(lines)
    assert "Total Tests: 1" in text
    assert "Success Rate: 0.0%" in text
    assert "Calculate ratio: Should show similar triangles" in text
    assert "Footer stats display" in text


def test_console_reporter_aborted_run_is_not_a_success():
    from loguru import logger

    lines = []
    sink = logger.add(lines.append, format="{level} {message}")
    try:
        aggregator = ResultAggregator()
        aggregator.record(passed("Navigation buttons exist"))
        ConsoleReporter().render(aggregator.finalize(), aborted=True)
    finally:
        logger.remove(sink)

    text = "".join(lines)
    assert "ALL TESTS PASSED" not in text
    assert "CRITICAL" in text
    assert "RUN ABORTED" in text
