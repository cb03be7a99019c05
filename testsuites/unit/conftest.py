"""Fixtures shared by the browser-free unit tests."""

import pytest

from uiharness.framework.config_loader import ConfigLoader, Timeouts
from testsuites.unit.fakes import FakePage, FakeSession

# No settle pauses and short locator bounds keep the unit suite fast.
FAST_TIMEOUTS = Timeouts(locator_ms=200, settle_ms=0, initial_settle_ms=0, poll_ms=10)


@pytest.fixture
def timeouts() -> Timeouts:
    return Timeouts(**vars(FAST_TIMEOUTS))


@pytest.fixture
def page() -> FakePage:
    return FakePage()


@pytest.fixture
def session(page: FakePage) -> FakeSession:
    fake = FakeSession(page)
    fake.opened = True
    return fake


@pytest.fixture(autouse=True)
def _fresh_config_loader():
    ConfigLoader.reset()
    yield
    ConfigLoader.reset()
