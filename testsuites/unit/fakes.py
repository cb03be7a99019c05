"""
In-memory stand-ins for the Playwright objects the harness talks to.

Elements are registered per exact CSS string on a FakePage; a FakeLocator
re-reads that registry on every call, so tests can mutate the page between
calls just like a live document changes under a real locator.
"""

from __future__ import annotations

import asyncio
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Tuple

from playwright.async_api import Error as PlaywrightError

VISIBLE_SUFFIX = " >> visible=true"


@dataclass
class FakeElement:
    text: str = ""
    visible: bool = True
    classes: Tuple[str, ...] = ()
    children: Dict[str, List["FakeElement"]] = field(default_factory=dict)
    on_click: Optional[Callable[["FakePage"], None]] = None
    value: str = ""

    def descendants(self, css: str, visible_only: bool = False) -> List["FakeElement"]:
        found = []
        for child in self.children.get(css, []):
            if child.visible or not visible_only:
                found.append(child)
        for children in self.children.values():
            for child in children:
                found.extend(child.descendants(css, visible_only))
        return found


class FakeLocator:
    def __init__(self, page: "FakePage", css: str, visible_only: bool = False, filters=(), index=None):
        self.page = page
        self.css = css
        self.visible_only = visible_only
        self.filters = tuple(filters)
        self.index = index

    def _matches(self) -> List[FakeElement]:
        elements = list(self.page.elements.get(self.css, []))
        if self.visible_only:
            elements = [e for e in elements if e.visible]
        for predicate in self.filters:
            elements = [e for e in elements if predicate(e)]
        if self.index is not None:
            return elements[self.index:self.index + 1] if 0 <= self.index < len(elements) else []
        return elements

    def _one(self) -> FakeElement:
        matches = self._matches()
        if not matches:
            raise PlaywrightError(f"No element for {self.css}")
        return matches[0]

    def _derive(self, **changes: Any) -> "FakeLocator":
        params = dict(
            css=self.css,
            visible_only=self.visible_only,
            filters=self.filters,
            index=self.index,
        )
        params.update(changes)
        return FakeLocator(self.page, **params)

    def filter(self, has_text=None, has=None) -> "FakeLocator":
        predicates = list(self.filters)
        if has_text is not None:
            if isinstance(has_text, re.Pattern):
                predicates.append(lambda e: has_text.search(e.text) is not None)
            else:
                predicates.append(lambda e: has_text.lower() in e.text.lower())
        if has is not None:
            predicates.append(lambda e: bool(e.descendants(has.css, has.visible_only)))
        return self._derive(filters=predicates)

    def nth(self, index: int) -> "FakeLocator":
        return self._derive(index=index)

    @property
    def first(self) -> "FakeLocator":
        return self.nth(0)

    async def count(self) -> int:
        self.page.queries += 1
        return len(self._matches())

    async def all(self) -> List["FakeLocator"]:
        return [self.nth(i) for i in range(len(self._matches()))]

    async def is_visible(self) -> bool:
        matches = self._matches()
        return bool(matches) and matches[0].visible

    async def text_content(self) -> Optional[str]:
        return self._one().text

    async def get_attribute(self, name: str) -> Optional[str]:
        element = self._one()
        if name == "class":
            return " ".join(element.classes) or None
        return None

    async def click(self, **kwargs: Any) -> None:
        element = self._one()
        self.page.clicks.append(self.css)
        if element.on_click is not None:
            element.on_click(self.page)

    async def fill(self, value: str, **kwargs: Any) -> None:
        element = self._one()
        element.value = value
        self.page.fills.append((self.css, value))

    async def press(self, key: str) -> None:
        self._one()
        self.page.presses.append((self.css, key))

    async def scroll_into_view_if_needed(self) -> None:
        self._one()
        self.page.evaluations.append(("scroll_into_view", self.css))


@dataclass
class FakeResponse:
    status: int = 200

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 400


class FakePage:
    def __init__(
        self,
        elements: Optional[Dict[str, List[FakeElement]]] = None,
        goto_error: Optional[Exception] = None,
        response_status: int = 200,
        screenshot_error: Optional[Exception] = None,
    ):
        self.elements: Dict[str, List[FakeElement]] = elements or {}
        self.goto_error = goto_error
        self.response_status = response_status
        self.screenshot_error = screenshot_error

        self.gotos: List[Tuple[str, str]] = []
        self.clicks: List[str] = []
        self.fills: List[Tuple[str, str]] = []
        self.presses: List[Tuple[str, str]] = []
        self.screenshots: List[Tuple[str, bool]] = []
        self.evaluations: List[Any] = []
        self.viewport: Optional[Dict[str, int]] = None
        self.queries = 0

    def add(self, css: str, *elements: FakeElement) -> None:
        self.elements.setdefault(css, []).extend(elements)

    def locator(self, query: str) -> FakeLocator:
        if query.endswith(VISIBLE_SUFFIX):
            return FakeLocator(self, query[: -len(VISIBLE_SUFFIX)], visible_only=True)
        return FakeLocator(self, query)

    async def goto(self, url: str, wait_until: str = "load") -> FakeResponse:
        self.gotos.append((url, wait_until))
        if self.goto_error is not None:
            raise self.goto_error
        return FakeResponse(self.response_status)

    async def screenshot(self, path: str, full_page: bool = False) -> bytes:
        if self.screenshot_error is not None:
            raise self.screenshot_error
        Path(path).write_bytes(b"\x89PNG\r\n\x1a\n")
        self.screenshots.append((Path(path).name, full_page))
        return b""

    async def set_viewport_size(self, size: Dict[str, int]) -> None:
        self.viewport = dict(size)

    async def evaluate(self, script: str, arg: Any = None) -> None:
        self.evaluations.append((script, arg))


class FakeSession:
    """Stands in for BrowserSession inside harness and page-object tests."""

    def __init__(
        self,
        page: Optional[FakePage] = None,
        open_error: Optional[Exception] = None,
    ):
        self._page = page or FakePage()
        self.open_error = open_error
        self.alive = True
        self.opened = False
        self.open_calls = 0
        self.close_calls = 0
        self.config = None

    async def open(self) -> "FakeSession":
        self.open_calls += 1
        if self.open_error is not None:
            raise self.open_error
        self.opened = True
        return self

    async def close(self) -> None:
        self.close_calls += 1

    def is_alive(self) -> bool:
        return self.opened and self.alive

    @property
    def has_page(self) -> bool:
        return self.opened

    @property
    def page(self) -> FakePage:
        return self._page

    async def set_viewport(self, width: int, height: int) -> None:
        await self._page.set_viewport_size({"width": width, "height": height})

    def factory(self, config: Any) -> "FakeSession":
        self.config = config
        return self


# =============================================================================
# Playwright driver fakes (BrowserSession tests)
# =============================================================================

class FakeContext:
    def __init__(self, options: Dict[str, Any], page_delay: float = 0.0):
        self.options = options
        self.page_delay = page_delay
        self.closed = False
        self.page = FakePage()

    async def new_page(self) -> FakePage:
        if self.page_delay:
            await asyncio.sleep(self.page_delay)
        return self.page

    async def close(self) -> None:
        self.closed = True


class FakeBrowser:
    def __init__(self, context_error: Optional[Exception] = None, page_delay: float = 0.0):
        self.context_error = context_error
        self.page_delay = page_delay
        self.contexts: List[FakeContext] = []
        self.closed = False
        self.connected = True

    async def new_context(self, **options: Any) -> FakeContext:
        if self.context_error is not None:
            raise self.context_error
        context = FakeContext(options, self.page_delay)
        self.contexts.append(context)
        return context

    async def close(self) -> None:
        self.closed = True
        self.connected = False

    def is_connected(self) -> bool:
        return self.connected


class FakeBrowserType:
    def __init__(self, browser: FakeBrowser, launch_error: Optional[Exception] = None):
        self.browser = browser
        self.launch_error = launch_error
        self.launch_options: Optional[Dict[str, Any]] = None

    async def launch(self, **options: Any) -> FakeBrowser:
        self.launch_options = options
        if self.launch_error is not None:
            raise self.launch_error
        return self.browser


class FakePlaywright:
    def __init__(
        self,
        launch_error: Optional[Exception] = None,
        context_error: Optional[Exception] = None,
        page_delay: float = 0.0,
    ):
        self.browser = FakeBrowser(context_error=context_error, page_delay=page_delay)
        self.chromium = FakeBrowserType(self.browser, launch_error)
        self.firefox = FakeBrowserType(self.browser, launch_error)
        self.webkit = FakeBrowserType(self.browser, launch_error)
        self.stopped = 0

    async def stop(self) -> None:
        self.stopped += 1


class FakePlaywrightFactory:
    """Mimics ``async_playwright``: calling it returns an object with start()."""

    def __init__(self, **kwargs: Any):
        self.playwright = FakePlaywright(**kwargs)

    def __call__(self) -> "FakePlaywrightFactory":
        return self

    async def start(self) -> FakePlaywright:
        return self.playwright
