# ================================================================================
# Element Actions Module
# ================================================================================
#
# Interaction primitives for harness test bodies. Each primitive:
#
#   1. locates its target (bounded wait, or an already-resolved Locator)
#   2. performs exactly one user-facing action
#   3. settles, so asynchronous UI updates can land
#
# Key Features:
#   - No retries: a failed locate or action surfaces immediately
#   - Settle waits that can return early on a condition
#   - Navigation mapped onto the NavigationError fatal error
#   - Allure step integration
#   - Scroll helpers
#
# ================================================================================

from typing import Any, Callable, Optional, Union

import allure
from loguru import logger
from playwright.async_api import Error as PlaywrightError, Locator

from .element_locator import ElementLocator, Selector, SelectorLike
from .errors import NavigationError
from .wait_helpers import PollConfig, settle

Target = Union[SelectorLike, Locator]

LOAD_STATES = ("load", "domcontentloaded", "networkidle", "commit")


class ElementActions:
    """
    Atomic UI interactions against the session's page.

    Example:
        actions = ElementActions(session, locator, settle_ms=500)
        await actions.navigate("file:///app/index.html", wait_until="networkidle")
        await actions.click(".nav-button:nth-child(4)")
        await actions.fill(".neon-input >> nth=0", "5")
    """

    def __init__(
        self,
        session: Any,
        locator: ElementLocator,
        settle_ms: int = 500,
        poll_ms: int = 100,
    ):
        """
        Args:
            session: BrowserSession (or any object with ``page`` and
                ``set_viewport``)
            locator: ElementLocator bound to the same session
            settle_ms: Default settle bound after each action
            poll_ms: Poll interval for condition-based settles
        """
        self.session = session
        self.locator = locator
        self.settle_ms = settle_ms
        self.poll_config = PollConfig(interval=poll_ms / 1000.0)

    @property
    def page(self):
        return self.session.page

    async def resolve_target(self, target: Target) -> Locator:
        if isinstance(target, (str, Selector)):
            return await self.locator.wait_for(target)
        return target

    async def settle(
        self,
        settle_ms: Optional[int] = None,
        until: Optional[SelectorLike] = None,
    ) -> bool:
        """
        Pause after an interaction.

        Args:
            settle_ms: Bound in milliseconds (defaults to the configured one)
            until: Selector whose visibility ends the wait early

        Returns:
            False if ``until`` was given and never became visible
        """
        settle_ms = self.settle_ms if settle_ms is None else settle_ms
        condition: Optional[Callable[[], Any]] = None
        if until is not None:
            async def condition():
                found = await self.locator.find(until)
                return found is not None and await found.is_visible()
        return await settle(settle_ms / 1000.0, until=condition, config=self.poll_config)

    @allure.step("Navigate to {url}")
    async def navigate(
        self,
        url: str,
        wait_until: str = "networkidle",
        settle_ms: Optional[int] = None,
    ) -> None:
        """
        Load a document and wait for its load-completion signal.

        Raises:
            NavigationError: If the load fails or the document answers with an
                error status
        """
        if wait_until not in LOAD_STATES:
            raise ValueError(f"Unknown load state: {wait_until}")

        logger.info(f"📄 Loading: {url}")
        try:
            response = await self.page.goto(url, wait_until=wait_until)
        except PlaywrightError as e:
            raise NavigationError(url, str(e).splitlines()[0]) from e

        if response is not None and not response.ok:
            raise NavigationError(url, f"HTTP {response.status}")

        await self.settle(settle_ms)

    @allure.step("Click: {target}")
    async def click(
        self,
        target: Target,
        settle_ms: Optional[int] = None,
        settle_until: Optional[SelectorLike] = None,
        **kwargs: Any,
    ) -> None:
        """Click an element once, then settle."""
        element = await self.resolve_target(target)
        logger.debug(f"Clicking: {target}")
        await element.click(**kwargs)
        await self.settle(settle_ms, until=settle_until)

    @allure.step("Fill: {target}")
    async def fill(
        self,
        target: Target,
        value: str,
        settle_ms: Optional[int] = None,
        **kwargs: Any,
    ) -> None:
        """Replace an input's value, then settle."""
        element = await self.resolve_target(target)
        logger.debug(f"Filling {target} with '{value[:50]}'")
        await element.fill(value, **kwargs)
        await self.settle(settle_ms)

    @allure.step("Press key: {key}")
    async def press(
        self,
        target: Target,
        key: str,
        settle_ms: Optional[int] = None,
    ) -> None:
        """Press a key on a focused element, then settle."""
        element = await self.resolve_target(target)
        await element.press(key)
        await self.settle(settle_ms)

    @allure.step("Set viewport: {width}x{height}")
    async def set_viewport(
        self,
        width: int,
        height: int,
        settle_ms: Optional[int] = None,
    ) -> None:
        """Resize the viewport for a responsive-breakpoint check, then settle."""
        logger.info(f"📐 Viewport -> {width}x{height}")
        await self.session.set_viewport(width, height)
        await self.settle(settle_ms)


class ScrollActions:
    """Utility class for scroll-related operations."""

    def __init__(self, actions: ElementActions):
        self.actions = actions

    @property
    def page(self):
        return self.actions.page

    @allure.step("Scroll to element: {target}")
    async def scroll_to_element(self, target: Target, settle_ms: Optional[int] = None) -> None:
        """Scroll element into view."""
        element = await self.actions.resolve_target(target)
        await element.scroll_into_view_if_needed()
        await self.actions.settle(settle_ms)

    @allure.step("Scroll to position: ({x}, {y})")
    async def scroll_to_position(self, x: int = 0, y: int = 0, settle_ms: Optional[int] = None) -> None:
        await self.page.evaluate("([x, y]) => window.scrollTo(x, y)", [x, y])
        await self.actions.settle(settle_ms)

    @allure.step("Scroll by offset: ({dx}, {dy})")
    async def scroll_by(self, dx: int = 0, dy: int = 0, settle_ms: Optional[int] = None) -> None:
        await self.page.evaluate("([dx, dy]) => window.scrollBy(dx, dy)", [dx, dy])
        await self.actions.settle(settle_ms)

    async def scroll_to_top(self, settle_ms: Optional[int] = None) -> None:
        await self.scroll_to_position(0, 0, settle_ms)

    @allure.step("Scroll to bottom")
    async def scroll_to_bottom(self, settle_ms: Optional[int] = None) -> None:
        await self.page.evaluate("() => window.scrollTo(0, document.body.scrollHeight)")
        await self.actions.settle(settle_ms)


__all__ = [
    "LOAD_STATES",
    "ElementActions",
    "ScrollActions",
]
