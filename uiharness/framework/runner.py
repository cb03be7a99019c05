"""
================================================================================
Test Case Runner
================================================================================

TestCase / Suite model and the runner that executes a suite against one
session.

State machine per TestCase:

    pending --(invoke body)--> running --(returns)--> passed
                                       --(raises)---> failed

Every ``Exception`` from a body becomes a failed outcome; FatalError and its
subclasses propagate and abort the run.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Awaitable, Callable, Iterator, List, Optional

import allure
from loguru import logger

from .errors import FatalError, SessionLostError

TestBody = Callable[[Any], Awaitable[None]]


class TestStatus(str, Enum):
    __test__ = False

    PENDING = "pending"
    RUNNING = "running"
    PASSED = "passed"
    FAILED = "failed"

    @property
    def terminal(self) -> bool:
        return self in (TestStatus.PASSED, TestStatus.FAILED)


@dataclass(frozen=True)
class Failure:
    """Why a TestCase failed."""
    message: str
    cause: Optional[str] = None


@dataclass
class TestCase:
    """A named, ordered unit of work."""

    __test__ = False

    name: str
    body: TestBody
    status: TestStatus = TestStatus.PENDING
    failure: Optional[Failure] = None
    duration_s: float = 0.0

    @property
    def passed(self) -> bool:
        return self.status == TestStatus.PASSED


@dataclass(frozen=True)
class Outcome:
    """Terminal result of one TestCase, as recorded by the aggregator."""
    name: str
    status: TestStatus
    failure: Optional[Failure] = None
    duration_s: float = 0.0

    @property
    def passed(self) -> bool:
        return self.status == TestStatus.PASSED


@dataclass
class Suite:
    """
    Ordered TestCases sharing one session.

    Usage:
        suite = Suite("quick")

        @suite.case("Navigation buttons")
        async def navigation_buttons(app):
            await app.verify.expect_count(".nav-button", 6)
    """
    name: str
    cases: List[TestCase] = field(default_factory=list)
    context_factory: Optional[Callable[..., Any]] = None

    def add(self, name: str, body: TestBody) -> TestCase:
        if any(existing.name == name for existing in self.cases):
            raise ValueError(f"Duplicate test case name in suite '{self.name}': {name}")
        case = TestCase(name=name, body=body)
        self.cases.append(case)
        return case

    def case(self, name: str) -> Callable[[TestBody], TestBody]:
        """Decorator registering a body under ``name``."""
        def decorator(body: TestBody) -> TestBody:
            self.add(name, body)
            return body
        return decorator

    def select(self, names: Optional[List[str]] = None, patterns: Optional[List[str]] = None) -> "Suite":
        """
        Subset preserving registration order.

        Args:
            names: Exact case names to keep
            patterns: Case-insensitive substrings; a case matching any is kept
        """
        if not names and not patterns:
            return self
        if names:
            unknown = set(names) - {case.name for case in self.cases}
            if unknown:
                raise ValueError(f"Unknown test case(s) in suite '{self.name}': {sorted(unknown)}")

        def keep(case: TestCase) -> bool:
            if names and case.name in names:
                return True
            return bool(patterns) and any(p.lower() in case.name.lower() for p in patterns)

        subset = Suite(name=self.name, context_factory=self.context_factory)
        for case in self.cases:
            if keep(case):
                subset.add(case.name, case.body)
        return subset

    def pending(self) -> List[TestCase]:
        return [case for case in self.cases if case.status == TestStatus.PENDING]

    def __iter__(self) -> Iterator[TestCase]:
        return iter(self.cases)

    def __len__(self) -> int:
        return len(self.cases)


class TestCaseRunner:
    """
    Executes TestCases one at a time and feeds the aggregator.

    Args:
        context: Object handed to every body (usually a page object)
        aggregator: Receives one Outcome per terminal transition
        session: Optional session; consulted after a failure to tell a broken
            page from a dead browser
        artifacts: Optional ArtifactStore; captures are bound to the running
            case and, with capture_on_failure, a screenshot is taken on failure
    """

    __test__ = False

    def __init__(
        self,
        context: Any,
        aggregator: Any,
        session: Any = None,
        artifacts: Any = None,
        capture_on_failure: bool = False,
    ):
        self.context = context
        self.aggregator = aggregator
        self.session = session
        self.artifacts = artifacts
        self.capture_on_failure = capture_on_failure

    async def run_case(self, case: TestCase) -> Outcome:
        if case.status != TestStatus.PENDING:
            raise RuntimeError(f"Test case '{case.name}' already executed ({case.status.value})")

        case.status = TestStatus.RUNNING
        if self.artifacts is not None:
            self.artifacts.bind(case.name)
        start = time.monotonic()

        try:
            with allure.step(f"Test case: {case.name}"):
                await case.body(self.context)
        except FatalError as e:
            self._fail(case, e, start)
            raise
        except Exception as e:
            if self.session is not None and not self.session.is_alive():
                lost = SessionLostError(f"Browser disconnected during '{case.name}': {e}")
                self._fail(case, lost, start)
                raise lost from e

            self._fail(case, e, start)
            if self.capture_on_failure and self.artifacts is not None and self.session is not None:
                await self.artifacts.capture(self.session.page, f"failed-{case.name}")
        else:
            case.status = TestStatus.PASSED
            case.duration_s = time.monotonic() - start
            logger.success(f"✅ {case.name} - PASSED")
            self.aggregator.record(self._outcome(case))
        finally:
            if self.artifacts is not None:
                self.artifacts.bind(None)

        return self._outcome(case)

    def _fail(self, case: TestCase, error: Exception, start: float) -> None:
        case.status = TestStatus.FAILED
        case.duration_s = time.monotonic() - start
        case.failure = Failure(message=str(error) or type(error).__name__, cause=type(error).__name__)
        logger.error(f"❌ {case.name} - FAILED: {case.failure.message}")
        self.aggregator.record(self._outcome(case))

    @staticmethod
    def _outcome(case: TestCase) -> Outcome:
        return Outcome(
            name=case.name,
            status=case.status,
            failure=case.failure,
            duration_s=case.duration_s,
        )

    async def run_suite(self, suite: Suite) -> List[Outcome]:
        """Run every pending case in registration order."""
        logger.info(f"📋 Running suite '{suite.name}' ({len(suite)} cases)")
        return [await self.run_case(case) for case in suite.pending()]


__all__ = [
    "TestStatus",
    "Failure",
    "TestCase",
    "Outcome",
    "Suite",
    "TestCaseRunner",
]
