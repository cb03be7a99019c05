"""
================================================================================
Result Aggregator & Reporter
================================================================================

Accumulates per-test outcomes, freezes them into a Report and renders it.

Features:
    - Explicit aggregator object (no ambient counters)
    - Idempotent finalize() over a snapshot taken at first call
    - Console summary through loguru
    - Optional JSON report file

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import json
import threading
from contextlib import nullcontext
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Tuple

from loguru import logger

from .runner import Outcome, TestStatus


@dataclass(frozen=True)
class Report:
    """Read-only summary of a completed suite."""
    total: int
    passed: int
    failed: int
    success_rate: float
    failures: Tuple[Tuple[str, str], ...] = ()
    not_run: Tuple[str, ...] = ()

    @property
    def all_passed(self) -> bool:
        return self.failed == 0 and not self.not_run

    def to_dict(self) -> Dict[str, Any]:
        return {
            "total": self.total,
            "passed": self.passed,
            "failed": self.failed,
            "success_rate": round(self.success_rate, 2),
            "failures": [{"name": name, "message": message} for name, message in self.failures],
            "not_run": list(self.not_run),
        }


def success_rate(passed: int, total: int) -> float:
    """Percentage of passed cases; 0.0 for an empty run."""
    if total == 0:
        return 0.0
    return passed / total * 100


class ResultAggregator:
    """
    Running tally of terminal outcomes.

    record() is not synchronized unless a lock is supplied; pass one when
    several suites record from separate threads.
    """

    def __init__(self, lock: Optional[threading.Lock] = None):
        self._lock = lock
        self._outcomes: List[Outcome] = []
        self._report: Optional[Report] = None

    def _guard(self):
        return self._lock if self._lock is not None else nullcontext()

    def record(self, outcome: Outcome) -> None:
        if not outcome.status.terminal:
            raise ValueError(f"Cannot record non-terminal outcome for '{outcome.name}'")
        with self._guard():
            if self._report is not None:
                raise RuntimeError("Aggregator already finalized")
            self._outcomes.append(outcome)

    @property
    def outcomes(self) -> List[Outcome]:
        return list(self._outcomes)

    def finalize(self, not_run: Sequence[str] = ()) -> Report:
        """
        Freeze the tally.

        The first call snapshots the recorded outcomes; later calls return
        the same Report.

        Args:
            not_run: Names of cases that never executed (fatal abort)
        """
        with self._guard():
            if self._report is None:
                snapshot = tuple(self._outcomes)
                passed = sum(1 for o in snapshot if o.status == TestStatus.PASSED)
                failed = sum(1 for o in snapshot if o.status == TestStatus.FAILED)
                total = passed + failed
                self._report = Report(
                    total=total,
                    passed=passed,
                    failed=failed,
                    success_rate=success_rate(passed, total),
                    failures=tuple(
                        (o.name, o.failure.message if o.failure else "")
                        for o in snapshot
                        if o.status == TestStatus.FAILED
                    ),
                    not_run=tuple(not_run),
                )
            return self._report


class ConsoleReporter:
    """Human-readable summary written through loguru."""

    def render(self, report: Report, output_dir: Optional[Path] = None, aborted: bool = False) -> None:
        """Print the summary; ``aborted`` marks a run stopped by a fatal error."""
        logger.info("=" * 60)
        logger.info("📊 TEST RESULTS SUMMARY")
        logger.info("=" * 60)
        logger.info(f"Total Tests: {report.total}")
        logger.info(f"Passed: {report.passed}")
        logger.info(f"Failed: {report.failed}")
        logger.info(f"Success Rate: {report.success_rate:.1f}%")

        for name, message in report.failures:
            logger.error(f"  ❌ {name}: {message}")

        if report.not_run:
            logger.warning(f"⏭️ Not run ({len(report.not_run)}): {', '.join(report.not_run)}")

        if aborted:
            logger.critical("💥 RUN ABORTED before completion")
        elif report.all_passed and report.total:
            logger.success("🎉 ALL TESTS PASSED!")
        elif report.failed:
            logger.warning(f"⚠️ {report.failed} tests failed. Please review the errors above.")

        if output_dir is not None:
            logger.info(f"📁 Test results saved in: {output_dir}")
        logger.info("=" * 60)


def write_json_report(report: Report, path: Path, extra: Optional[Dict[str, Any]] = None) -> Path:
    """Persist the report as JSON (opt-in)."""
    payload = {**report.to_dict(), **(extra or {})}
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(payload, indent=2, ensure_ascii=False, default=str), encoding="utf-8")
    logger.info(f"🧾 JSON report written: {path}")
    return path


__all__ = [
    "Report",
    "ResultAggregator",
    "ConsoleReporter",
    "success_rate",
    "write_json_report",
]
