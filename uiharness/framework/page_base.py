"""
================================================================================
Base Page Object
================================================================================

Foundation class for Page Object Model implementation.

Provides:
    - One bundle of locator, interaction primitives, scroll helpers and
      assertions bound to the run's session
    - Navigation to the target document
    - Screenshot capture through the run's ArtifactStore
    - Section-agnostic wait helpers

Test bodies receive a PageBase (or subclass) as their only argument.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from typing import Any, List, Optional

import allure
from loguru import logger
from playwright.async_api import Locator

from .artifact_store import Artifact, ArtifactStore
from .assertions import Assertions
from .config_loader import Timeouts
from .element_actions import ElementActions, ScrollActions, Target
from .element_locator import ElementLocator, SelectorLike


class PageBase:
    """
    Base class for all page objects.

    Usage:
        class CalculatorPage(PageBase):
            async def calculate(self):
                await self.click(".calculate-btn")
                return await self.verify.text_of(".result-panel")
    """

    # Override in subclasses
    PAGE_TITLE: str = ""

    def __init__(
        self,
        session: Any,
        artifacts: Optional[ArtifactStore] = None,
        timeouts: Optional[Timeouts] = None,
    ):
        """
        Initialize page object.

        Args:
            session: BrowserSession owning the page
            artifacts: Run's ArtifactStore (screenshot() is a no-op without one)
            timeouts: Locator/settle/poll bounds (defaults to Timeouts())
        """
        self.session = session
        self.artifacts = artifacts
        self.timeouts = timeouts or Timeouts()

        self.locator = ElementLocator(
            session,
            default_timeout_ms=self.timeouts.locator_ms,
            poll_ms=self.timeouts.poll_ms,
        )
        self.actions = ElementActions(
            session,
            self.locator,
            settle_ms=self.timeouts.settle_ms,
            poll_ms=self.timeouts.poll_ms,
        )
        self.scroll = ScrollActions(self.actions)
        self.verify = Assertions(self.locator)

    @property
    def page(self):
        return self.session.page

    @allure.step("Open {url}")
    async def open(
        self,
        url: str,
        wait_until: str = "networkidle",
        settle_ms: Optional[int] = None,
    ) -> "PageBase":
        """Navigate to the target document and let it render."""
        settle_ms = self.timeouts.initial_settle_ms if settle_ms is None else settle_ms
        await self.actions.navigate(url, wait_until=wait_until, settle_ms=settle_ms)
        return self

    # =========================================================================
    # Element Interactions
    # =========================================================================

    async def click(
        self,
        target: Target,
        settle_ms: Optional[int] = None,
        settle_until: Optional[SelectorLike] = None,
        **kwargs: Any,
    ) -> None:
        await self.actions.click(target, settle_ms=settle_ms, settle_until=settle_until, **kwargs)

    async def fill(
        self,
        target: Target,
        value: str,
        settle_ms: Optional[int] = None,
    ) -> None:
        await self.actions.fill(target, value, settle_ms=settle_ms)

    async def set_viewport(self, width: int, height: int, settle_ms: Optional[int] = None) -> None:
        await self.actions.set_viewport(width, height, settle_ms=settle_ms)

    async def settle(self, settle_ms: Optional[int] = None, until: Optional[SelectorLike] = None) -> bool:
        return await self.actions.settle(settle_ms, until=until)

    # =========================================================================
    # Location
    # =========================================================================

    async def wait_for(self, selector: SelectorLike, timeout_ms: Optional[int] = None) -> Locator:
        """Bounded wait for a visible element (LocatorTimeoutError on expiry)."""
        return await self.locator.wait_for(selector, timeout_ms)

    async def find(self, selector: SelectorLike) -> Optional[Locator]:
        return await self.locator.find(selector)

    async def find_all(self, selector: SelectorLike) -> List[Locator]:
        return await self.locator.find_all(selector)

    # =========================================================================
    # Screenshot Utilities
    # =========================================================================

    async def screenshot(self, tag: str, full_page: bool = True) -> Optional[Artifact]:
        """
        Capture the current page as the next ordinal artifact.

        Returns:
            The Artifact, or None when no store is attached or the write failed
        """
        if self.artifacts is None:
            logger.debug(f"No artifact store, skipping screenshot: {tag}")
            return None
        return await self.artifacts.capture(self.page, tag, full_page=full_page)


__all__ = ["PageBase"]
