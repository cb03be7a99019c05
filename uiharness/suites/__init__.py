"""
Suite registry.

Each variant in config/harness.yaml names one of these suites. Suites are
built fresh for every run because TestCases are single-use.
"""

from typing import Callable, Dict, List

from uiharness.framework.runner import Suite
from uiharness.suites import complete, home, modern, quick

SUITES: Dict[str, Callable[[], Suite]] = {
    "home": home.build_suite,
    "complete": complete.build_suite,
    "modern": modern.build_suite,
    "quick": quick.build_suite,
}


def build_suite(name: str) -> Suite:
    """Build a fresh suite by registry name."""
    try:
        factory = SUITES[name]
    except KeyError:
        raise KeyError(f"Unknown suite '{name}'. Available: {', '.join(SUITES)}") from None
    return factory()


def available_suites() -> List[str]:
    return list(SUITES)


__all__ = ["SUITES", "build_suite", "available_suites"]
