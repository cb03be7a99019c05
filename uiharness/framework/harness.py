"""
================================================================================
Harness Run
================================================================================

One end-to-end execution of a suite against one target document.

Lifecycle:
    1. prepare the output directory
    2. open the browser session
    3. navigate to the target and let it render
    4. run every selected case in registration order
    5. capture the variant's final artifact (if any)
    6. on a fatal error: log it, capture the error screenshot, stop
    7. close the session (every exit path, exactly once)
    8. finalize and render the report

Exit status:
    0  every case passed
    1  one or more cases failed
    2  the run was aborted by a fatal error

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import asyncio
import time
from dataclasses import dataclass, field
from datetime import datetime
from enum import IntEnum
from pathlib import Path
from typing import Any, Callable, List, Optional

from loguru import logger

from .artifact_store import Artifact, ArtifactStore
from .browser_manager import BrowserSession
from .config_loader import RunConfig
from .errors import FatalError
from .page_base import PageBase
from .reporter import ConsoleReporter, Report, ResultAggregator, write_json_report
from .runner import Suite, TestCaseRunner

REPORT_FILE = "report.json"


class RunStatus(IntEnum):
    """Terminal status of a run; the value is the process exit code."""
    PASSED = 0
    FAILED = 1
    ABORTED = 2


@dataclass
class RunResult:
    """What a finished run hands back to its caller."""
    status: RunStatus
    report: Report
    output_dir: Path
    started_at: datetime
    duration_s: float
    artifacts: List[Artifact] = field(default_factory=list)
    fatal: Optional[str] = None

    @property
    def exit_code(self) -> int:
        return int(self.status)


class HarnessRun:
    """
    Drives one suite through one browser session.

    Usage:
        config = load_run_config("complete")
        result = await HarnessRun(config, build_suite("complete")).execute()
        sys.exit(result.exit_code)
    """

    def __init__(
        self,
        config: RunConfig,
        suite: Suite,
        session_factory: Callable[..., Any] = BrowserSession,
        reporter: Optional[ConsoleReporter] = None,
        attach_to_allure: bool = True,
    ):
        """
        Args:
            config: Assembled run configuration
            suite: Freshly built suite (cases must all be pending)
            session_factory: Called with the SessionConfig; returns an object
                with async open()/close(), page, has_page and is_alive()
            reporter: Summary renderer (defaults to ConsoleReporter)
            attach_to_allure: Attach captured screenshots to the allure report
        """
        self.config = config
        self.suite = suite.select(names=config.variant.cases, patterns=config.case_patterns)
        self.session_factory = session_factory
        self.reporter = reporter or ConsoleReporter()
        self.artifacts = ArtifactStore(
            config.output_path,
            error_name=config.variant.error_artifact,
            attach_to_allure=attach_to_allure,
        )
        self.aggregator = ResultAggregator()
        self.session: Any = None
        self.context: Optional[PageBase] = None

    def _build_context(self) -> PageBase:
        factory = self.suite.context_factory or PageBase
        return factory(self.session, self.artifacts, self.config.timeouts)

    async def _drive(self) -> None:
        variant = self.config.variant

        await self.session.open()
        self.context = self._build_context()
        await self.context.open(self.config.target_url, wait_until=variant.wait_until)

        runner = TestCaseRunner(
            self.context,
            self.aggregator,
            session=self.session,
            artifacts=self.artifacts,
            capture_on_failure=self.config.capture_on_failure,
        )
        logger.info("📋 STARTING ALL FUNCTION TESTS")
        await runner.run_suite(self.suite)

        if variant.final_artifact:
            await self.artifacts.capture(self.session.page, variant.final_artifact, full_page=True)

    async def execute(self) -> RunResult:
        """Run the suite; never raises for harness errors."""
        variant = self.config.variant
        timeout = self.config.timeouts.run_timeout_s
        started_at = datetime.now()
        start = time.monotonic()
        fatal: Optional[str] = None

        logger.info(f"🧪 Variant '{variant.name}': {variant.description or variant.suite}")
        self.session = self.session_factory(self.config.session)
        try:
            try:
                self.artifacts.prepare()
                if timeout:
                    await asyncio.wait_for(self._drive(), timeout=timeout)
                else:
                    await self._drive()
            except asyncio.TimeoutError:
                fatal = f"Run exceeded {timeout:g}s"
            except FatalError as e:
                fatal = str(e)
            except Exception as e:
                logger.exception("Unexpected error during run")
                fatal = f"{type(e).__name__}: {e}"

            if fatal is not None:
                logger.critical(f"💥 CRITICAL ERROR: {fatal}")
                if self.session.is_alive() and self.session.has_page:
                    await self.artifacts.capture_error(self.session.page)
        finally:
            await self.session.close()

        not_run = [case.name for case in self.suite if not case.status.terminal]
        report = self.aggregator.finalize(not_run=not_run)
        self.reporter.render(report, output_dir=self.config.output_path, aborted=fatal is not None)

        if fatal is not None:
            status = RunStatus.ABORTED
        elif report.failed:
            status = RunStatus.FAILED
        else:
            status = RunStatus.PASSED
            if report.total == 0:
                logger.warning("⚠️ No test cases were selected")

        result = RunResult(
            status=status,
            report=report,
            output_dir=self.config.output_path,
            started_at=started_at,
            duration_s=time.monotonic() - start,
            artifacts=list(self.artifacts.artifacts),
            fatal=fatal,
        )

        if self.context is not None:
            logger.info(self.context.locator.get_health_report())
        if self.config.json_report:
            self._write_json(result)

        logger.info(f"🏁 Testing completed! ({status.name.lower()}, exit code {result.exit_code})")
        return result

    def _write_json(self, result: RunResult) -> None:
        extra = {
            "variant": self.config.variant.name,
            "target": self.config.target_url,
            "status": result.status.name.lower(),
            "exit_code": result.exit_code,
            "fatal": result.fatal,
            "started_at": result.started_at.isoformat(timespec="seconds"),
            "duration_s": round(result.duration_s, 2),
            "artifacts": [
                {"file": a.name, "tag": a.tag, "test": a.test_name} for a in result.artifacts
            ],
        }
        try:
            write_json_report(result.report, result.output_dir / REPORT_FILE, extra=extra)
        except OSError as e:
            logger.error(f"🧾 JSON report not written: {e}")


def run(config: RunConfig, suite: Suite, **kwargs: Any) -> RunResult:
    """Synchronous entry point: execute a HarnessRun on a fresh event loop."""
    return asyncio.run(HarnessRun(config, suite, **kwargs).execute())


__all__ = [
    "REPORT_FILE",
    "RunStatus",
    "RunResult",
    "HarnessRun",
    "run",
]
