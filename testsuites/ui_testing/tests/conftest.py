"""
================================================================================
UI Testing Pytest Configuration
================================================================================

Fixtures for the browser-level tests: a real Playwright session pointed at the
local fixture document, and the modern page object bound to it.

Tests are skipped (not failed) when no browser binary is installed; run
``playwright install chromium`` to enable them.

================================================================================
"""

from pathlib import Path
from typing import AsyncGenerator

import pytest

from uiharness.framework.artifact_store import ArtifactStore
from uiharness.framework.browser_manager import BrowserSession, SessionConfig
from uiharness.framework.config_loader import RunConfig, Timeouts, VariantConfig
from uiharness.framework.errors import LaunchError
from uiharness.pages.modern_app_page import ModernAppPage

FIXTURES_DIR = Path(__file__).resolve().parent.parent / "fixtures"
MODERN_FIXTURE = FIXTURES_DIR / "similarity_modern.html"

E2E_TIMEOUTS = Timeouts(locator_ms=3000, settle_ms=200, initial_settle_ms=200, poll_ms=50)


# ================================================================================
# Browser Fixtures
# ================================================================================

@pytest.fixture
def session_config() -> SessionConfig:
    return SessionConfig(headless=True, locale="th-TH")


@pytest.fixture
async def browser_session(session_config: SessionConfig) -> AsyncGenerator[BrowserSession, None]:
    """Function-scoped session; skips the test when the browser cannot start."""
    session = BrowserSession(session_config)
    try:
        await session.open()
    except LaunchError as e:
        pytest.skip(f"Browser not available: {e}")
    yield session
    await session.close()


# ================================================================================
# Page Object Fixtures
# ================================================================================

@pytest.fixture
def modern_fixture() -> Path:
    return MODERN_FIXTURE


@pytest.fixture
def modern_url(modern_fixture: Path) -> str:
    return modern_fixture.as_uri()


@pytest.fixture
async def modern_app(browser_session: BrowserSession, modern_url: str, tmp_path: Path) -> ModernAppPage:
    store = ArtifactStore(tmp_path / "artifacts")
    store.prepare()
    app = ModernAppPage(browser_session, artifacts=store, timeouts=E2E_TIMEOUTS)
    await app.open(modern_url, wait_until="load")
    return app


@pytest.fixture
def run_config_for(tmp_path: Path):
    """Build a RunConfig for a target relative to tmp_path."""
    def build(target: str, suite: str = "quick", **variant_kwargs) -> RunConfig:
        variant = VariantConfig(
            name="e2e",
            target=target,
            output_dir="results",
            suite=suite,
            wait_until="load",
            **variant_kwargs,
        )
        return RunConfig(variant=variant, session=SessionConfig(), timeouts=E2E_TIMEOUTS, project_root=tmp_path)
    return build
