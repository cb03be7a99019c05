"""
================================================================================
Assertion Library
================================================================================

Read-only predicates over the live document plus a raising ``ensure``.

Predicates never wait beyond their locate call and never change page state:
    - is_visible(selector) -> bool
    - text_of(selector)    -> str   (ElementNotFoundError when absent)
    - count_of(selector)   -> int
    - has_class(selector, class_name) -> bool (ElementNotFoundError when absent)

Composite checks chain the predicates:

    ensure(await verify.is_visible(".result-panel")
           and await verify.has_class(".result-panel", "success"),
           "Result panel should mark the triangles as similar")

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from typing import Optional

from loguru import logger

from .element_locator import ElementLocator, SelectorLike
from .errors import AssertionFailedError, ElementNotFoundError


def ensure(condition: bool, message: str) -> None:
    """Raise AssertionFailedError with ``message`` unless condition holds."""
    if not condition:
        raise AssertionFailedError(message)


class Assertions:
    """Predicates bound to an ElementLocator."""

    def __init__(self, locator: ElementLocator):
        self.locator = locator

    async def is_visible(self, selector: SelectorLike) -> bool:
        element = await self.locator.find(selector)
        if element is None:
            return False
        return await element.is_visible()

    async def is_present(self, selector: SelectorLike) -> bool:
        return await self.locator.find(selector) is not None

    async def text_of(self, selector: SelectorLike) -> str:
        """Text content of the first match."""
        element = await self.locator.find(selector)
        if element is None:
            raise ElementNotFoundError(selector)
        return await element.text_content() or ""

    async def count_of(self, selector: SelectorLike) -> int:
        return await self.locator.count(selector)

    async def has_class(self, selector: SelectorLike, class_name: str) -> bool:
        """True if the first match carries ``class_name`` in its class list."""
        element = await self.locator.find(selector)
        if element is None:
            raise ElementNotFoundError(selector)
        classes = (await element.get_attribute("class") or "").split()
        return class_name in classes

    # =========================================================================
    # Raising compositions
    # =========================================================================

    async def expect_present(self, selector: SelectorLike, what: Optional[str] = None) -> None:
        ensure(await self.is_present(selector), f"{what or selector} not found")

    async def expect_visible(self, selector: SelectorLike, what: Optional[str] = None) -> None:
        ensure(await self.is_visible(selector), f"{what or selector} not visible")

    async def expect_count(
        self,
        selector: SelectorLike,
        expected: int,
        what: Optional[str] = None,
        at_least: bool = False,
    ) -> int:
        actual = await self.count_of(selector)
        if at_least:
            ensure(actual >= expected, f"Expected at least {expected} {what or selector}, found {actual}")
        else:
            ensure(actual == expected, f"Expected {expected} {what or selector}, found {actual}")
        logger.debug(f"Count {selector}: {actual}")
        return actual

    async def expect_text_contains(self, selector: SelectorLike, fragment: str) -> str:
        text = await self.text_of(selector)
        ensure(fragment in text, f"Text of {selector} does not contain {fragment!r}: {text[:80]!r}")
        return text

    async def expect_class(self, selector: SelectorLike, class_name: str) -> None:
        ensure(
            await self.has_class(selector, class_name),
            f"{selector} does not have class {class_name!r}",
        )


__all__ = [
    "Assertions",
    "ensure",
]
