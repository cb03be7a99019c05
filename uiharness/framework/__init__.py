"""
================================================================================
UI Harness Framework
================================================================================

Playwright-based acceptance-test harness for single-page applications.

Components:
    - browser_manager: Browser session lifecycle
    - element_locator: Selector model and bounded visibility waits
    - element_actions: Interaction primitives with settle waits
    - assertions: Read-only predicates and ``ensure``
    - runner: TestCase / Suite model and the case runner
    - reporter: Result aggregation and summary rendering
    - artifact_store: Screenshot persistence
    - harness: Run orchestration and exit status

Author: Automation Team
License: MIT
================================================================================
"""

from .artifact_store import Artifact, ArtifactStore
from .assertions import Assertions, ensure
from .browser_manager import BrowserSession, SessionConfig
from .config_loader import ConfigLoader, RunConfig, load_run_config
from .element_actions import ElementActions, ScrollActions
from .element_locator import ElementLocator, Selector
from .errors import (
    AssertionFailedError,
    ElementNotFoundError,
    FatalError,
    HarnessError,
    LaunchError,
    LocatorTimeoutError,
    NavigationError,
    SessionLostError,
    TestFailure,
)
from .harness import HarnessRun, RunResult, RunStatus
from .page_base import PageBase
from .reporter import ConsoleReporter, Report, ResultAggregator
from .runner import Suite, TestCase, TestCaseRunner, TestStatus

__all__ = [
    "Artifact",
    "ArtifactStore",
    "Assertions",
    "ensure",
    "BrowserSession",
    "SessionConfig",
    "ConfigLoader",
    "RunConfig",
    "load_run_config",
    "ElementActions",
    "ScrollActions",
    "ElementLocator",
    "Selector",
    "AssertionFailedError",
    "ElementNotFoundError",
    "FatalError",
    "HarnessError",
    "LaunchError",
    "LocatorTimeoutError",
    "NavigationError",
    "SessionLostError",
    "TestFailure",
    "HarnessRun",
    "RunResult",
    "RunStatus",
    "PageBase",
    "ConsoleReporter",
    "Report",
    "ResultAggregator",
    "Suite",
    "TestCase",
    "TestCaseRunner",
    "TestStatus",
]
