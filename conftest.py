"""
Repository-level pytest configuration.

Keeps local runs predictable:
  - browsers run headless unless the caller already chose otherwise
  - log output stays at INFO unless overridden
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Generator

import pytest


@pytest.fixture(scope="session")
def project_root() -> Path:
    """Return repo root path."""
    return Path(__file__).parent


@pytest.fixture(scope="session", autouse=True)
def _harness_env_defaults() -> Generator[None, None, None]:
    """Set environment defaults if not already provided by the user/CI."""
    defaults = {
        "LOGGING_LEVEL": "INFO",
    }

    for k, v in defaults.items():
        os.environ.setdefault(k, v)

    yield
