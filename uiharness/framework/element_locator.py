"""
================================================================================
Element Locator
================================================================================

Declarative element location against the live document:
    - Selector model combining CSS/attribute queries with positional,
      visibility, text-content and has-descendant predicates
    - find / find_all that re-resolve on every call (no cached identity)
    - wait_for with a bounded poll, the harness's only explicit timeout
    - Timeout analytics for maintenance insights

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import re
from dataclasses import dataclass, replace
from typing import Any, Dict, List, Optional, Union

from loguru import logger
from playwright.async_api import Locator, Page

from .errors import LocatorTimeoutError
from .wait_helpers import PollConfig, WaitTimeoutError, poll_until


@dataclass(frozen=True)
class Selector:
    """
    Declarative query identifying zero or more elements.

    Attributes:
        css: Structural/attribute query (any Playwright CSS selector)
        nth: Zero-based position among the (filtered) matches
        visible: Only consider visible matches
        has_text: Case-sensitive substring the element's text must contain
        has: Selector a descendant of the element must match
        name: Optional human-readable name for logs
    """
    css: str
    nth: Optional[int] = None
    visible: bool = False
    has_text: Optional[str] = None
    has: Optional["Selector"] = None
    name: Optional[str] = None

    @classmethod
    def of(cls, value: SelectorLike) -> "Selector":
        """Coerce a plain string into a Selector."""
        if isinstance(value, Selector):
            return value
        if isinstance(value, str):
            return cls(css=value)
        raise TypeError(f"Unsupported selector type: {type(value).__name__}")

    def at(self, index: int) -> "Selector":
        """Same query, restricted to the index-th match."""
        return replace(self, nth=index)

    def containing(self, text: str) -> "Selector":
        """Same query, restricted to matches whose text contains ``text``."""
        return replace(self, has_text=text)

    def having(self, descendant: SelectorLike) -> "Selector":
        """Same query, restricted to matches with a matching descendant."""
        return replace(self, has=Selector.of(descendant))

    def only_visible(self) -> "Selector":
        return replace(self, visible=True)

    def __str__(self) -> str:
        if self.name:
            return self.name
        text = self.css
        if self.visible:
            text += " >> visible"
        if self.has_text is not None:
            text += f" [text*={self.has_text!r}]"
        if self.has is not None:
            text += f" [has={self.has}]"
        if self.nth is not None:
            text += f" [nth={self.nth}]"
        return text


SelectorLike = Union[str, Selector]


def build_locator(page: Page, selector: Selector) -> Locator:
    """Translate a Selector into a lazy Playwright Locator."""
    query = f"{selector.css} >> visible=true" if selector.visible else selector.css
    locator = page.locator(query)
    if selector.has_text is not None:
        # Regex filters are case-sensitive, unlike string has_text.
        locator = locator.filter(has_text=re.compile(re.escape(selector.has_text)))
    if selector.has is not None:
        locator = locator.filter(has=build_locator(page, selector.has))
    if selector.nth is not None:
        locator = locator.nth(selector.nth)
    return locator


class ElementLocator:
    """
    Resolves selectors against the session's current page.

    Every call goes back to the live document; the page is reactive and a
    navigation or re-render invalidates anything resolved earlier.

    Usage:
        >>> locate = ElementLocator(session)
        >>> buttons = await locate.find_all(".nav-button")
        >>> panel = await locate.wait_for(".result-panel", timeout_ms=3000)
    """

    def __init__(
        self,
        session: Any,
        default_timeout_ms: int = 5000,
        poll_ms: int = 100,
    ):
        """
        Args:
            session: Object exposing the current Playwright page as ``.page``
            default_timeout_ms: Bound used by wait_for when none is given
            poll_ms: Interval between visibility checks
        """
        self.session = session
        self.default_timeout_ms = default_timeout_ms
        self.poll_config = PollConfig(interval=poll_ms / 1000.0)
        self._timeouts: Dict[str, int] = {}

    @property
    def page(self) -> Page:
        return self.session.page

    def resolve(self, selector: SelectorLike) -> Locator:
        """Build a lazy locator for the selector (no document access yet)."""
        return build_locator(self.page, Selector.of(selector))

    async def find(self, selector: SelectorLike) -> Optional[Locator]:
        """
        Resolve a single element.

        Returns:
            Locator pinned to the first (or nth) match, or None when nothing
            matches right now
        """
        sel = Selector.of(selector)
        locator = build_locator(self.page, sel)
        if await locator.count() == 0:
            logger.debug(f"No match for: {sel}")
            return None
        return locator if sel.nth is not None else locator.first

    async def find_all(self, selector: SelectorLike) -> List[Locator]:
        """Resolve every current match, in document order."""
        return await self.resolve(selector).all()

    async def count(self, selector: SelectorLike) -> int:
        return await self.resolve(selector).count()

    async def wait_for(
        self,
        selector: SelectorLike,
        timeout_ms: Optional[int] = None,
    ) -> Locator:
        """
        Suspend until a match exists and is visible.

        Args:
            selector: Selector or CSS string
            timeout_ms: Bound in milliseconds (defaults to default_timeout_ms)

        Returns:
            Locator for the visible element

        Raises:
            LocatorTimeoutError: Exactly once, no earlier than timeout_ms
        """
        sel = Selector.of(selector)
        timeout_ms = self.default_timeout_ms if timeout_ms is None else timeout_ms

        async def check_visible():
            locator = build_locator(self.page, sel)
            if await locator.count() == 0:
                return False, None
            target = locator if sel.nth is not None else locator.first
            return await target.is_visible(), target

        try:
            return await poll_until(
                check_visible,
                timeout=timeout_ms / 1000.0,
                description=f"visible {sel}",
                config=self.poll_config,
            )
        except WaitTimeoutError as e:
            key = str(sel)
            self._timeouts[key] = self._timeouts.get(key, 0) + 1
            logger.warning(f"⏱️ Locator timeout ({timeout_ms}ms): {sel}")
            raise LocatorTimeoutError(sel, timeout_ms) from e

    def get_health_report(self) -> str:
        """
        Summarize selectors that timed out during the run.

        Repeated timeouts usually point at a selector that drifted from the
        application's markup.
        """
        if not self._timeouts:
            return "✅ No locator timeouts."

        report_lines = ["⚠️ Locator Health Report - Timeouts:"]
        for key, count in sorted(self._timeouts.items(), key=lambda kv: -kv[1]):
            report_lines.append(f"  [{count}x] {key}")
        return "\n".join(report_lines)


__all__ = [
    "Selector",
    "SelectorLike",
    "ElementLocator",
    "build_locator",
]
