"""
================================================================================
Harness Error Taxonomy
================================================================================

Every error the harness raises derives from HarnessError and falls in one of
two families:

    - TestFailure: recovered at TestCase granularity (the case is recorded as
      failed and the run continues)
    - FatalError: aborts the whole run (session is torn down, an error
      screenshot is captured, the run reports a non-zero status)

ArtifactWriteError and ConfigurationError sit directly under HarnessError.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from typing import Any, Optional


class HarnessError(Exception):
    """Base class for all harness errors."""

    fatal: bool = False


# =============================================================================
# Per-test failures
# =============================================================================

class TestFailure(HarnessError):
    """A single TestCase failed; the run continues."""

    __test__ = False


class LocatorTimeoutError(TestFailure):
    """An expected element never appeared or became visible in time."""

    def __init__(self, selector: Any, timeout_ms: int):
        self.selector = selector
        self.timeout_ms = timeout_ms
        super().__init__(
            f"Timed out after {timeout_ms}ms waiting for visible element: {selector}"
        )


class ElementNotFoundError(TestFailure):
    """A predicate needed an element that is not in the document."""

    def __init__(self, selector: Any, message: Optional[str] = None):
        self.selector = selector
        super().__init__(message or f"Element not found: {selector}")


class AssertionFailedError(TestFailure):
    """An expectation evaluated to False."""
    pass


# =============================================================================
# Run-aborting errors
# =============================================================================

class FatalError(HarnessError):
    """The run cannot continue."""

    fatal = True


class LaunchError(FatalError):
    """Browser process or context could not be started."""
    pass


class NavigationError(FatalError):
    """Target document failed to load or never reached its ready signal."""

    def __init__(self, url: str, reason: str):
        self.url = url
        self.reason = reason
        super().__init__(f"Navigation to {url} failed: {reason}")


class SessionLostError(FatalError):
    """Browser disconnected while a TestCase was running."""
    pass


# =============================================================================
# Other
# =============================================================================

class ArtifactWriteError(HarnessError):
    """Screenshot capture or persistence failed (best-effort, logged only)."""
    pass


class ConfigurationError(HarnessError):
    """Raised when configuration loading or access fails."""
    pass


__all__ = [
    "HarnessError",
    "TestFailure",
    "LocatorTimeoutError",
    "ElementNotFoundError",
    "AssertionFailedError",
    "FatalError",
    "LaunchError",
    "NavigationError",
    "SessionLostError",
    "ArtifactWriteError",
    "ConfigurationError",
]
