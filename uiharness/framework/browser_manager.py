"""
================================================================================
Browser Session
================================================================================

Browser lifecycle management for a harness run.

Features:
    - One browser process and one isolated context per run
    - Explicit viewport, locale and launch flags
    - Guaranteed single teardown on every exit path
    - Synchronous-from-the-caller viewport resizing

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional

from loguru import logger
from playwright.async_api import (
    async_playwright,
    Browser,
    BrowserContext,
    Page,
    Playwright,
)

from .errors import LaunchError


BROWSER_TYPES = ("chromium", "firefox", "webkit")


@dataclass
class SessionConfig:
    """
    Browser and context settings for one session.

    Attributes:
        browser_type: 'chromium', 'firefox' or 'webkit'
        headless: Run without a visible window
        viewport_width: Initial viewport width in CSS pixels
        viewport_height: Initial viewport height in CSS pixels
        locale: Context locale (e.g. 'th-TH')
        launch_args: Extra browser command-line flags
        slow_mo_ms: Delay inserted by Playwright between operations
    """
    browser_type: str = "chromium"
    headless: bool = True
    viewport_width: int = 1920
    viewport_height: int = 1080
    locale: Optional[str] = None
    launch_args: List[str] = field(default_factory=list)
    slow_mo_ms: int = 0

    def launch_options(self) -> Dict[str, Any]:
        options: Dict[str, Any] = {"headless": self.headless, "args": list(self.launch_args)}
        if self.slow_mo_ms:
            options["slow_mo"] = self.slow_mo_ms
        return options

    def context_options(self) -> Dict[str, Any]:
        options: Dict[str, Any] = {
            "viewport": {"width": self.viewport_width, "height": self.viewport_height},
        }
        if self.locale:
            options["locale"] = self.locale
        return options


class BrowserSession:
    """
    Owns one browser process, one context and one page.

    Usage:
        async with BrowserSession(SessionConfig(locale="th-TH")) as session:
            await session.page.goto("file:///path/index.html")
            await session.set_viewport(375, 812)
    """

    def __init__(
        self,
        config: Optional[SessionConfig] = None,
        playwright_factory: Callable[[], Any] = async_playwright,
    ):
        """
        Args:
            config: Session settings (defaults to SessionConfig())
            playwright_factory: Callable returning an object with an async
                ``start()`` (``async_playwright`` in production)
        """
        self.config = config or SessionConfig()
        self._playwright_factory = playwright_factory

        self._playwright: Optional[Playwright] = None
        self._browser: Optional[Browser] = None
        self._context: Optional[BrowserContext] = None
        self._page: Optional[Page] = None
        self._closed = False

    async def __aenter__(self) -> "BrowserSession":
        """Async context manager entry - launch browser."""
        await self.open()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Async context manager exit - close browser."""
        await self.close()

    async def open(self) -> "BrowserSession":
        """
        Start Playwright, launch the browser and create the context and page.

        Raises:
            LaunchError: If any step fails. Whatever was already started is
                torn down first.
        """
        if self.config.browser_type not in BROWSER_TYPES:
            raise LaunchError(f"Unsupported browser type: {self.config.browser_type}")

        try:
            self._playwright = await self._playwright_factory().start()
            launcher = getattr(self._playwright, self.config.browser_type)
            self._browser = await launcher.launch(**self.config.launch_options())
            self._context = await self._browser.new_context(**self.config.context_options())
            self._page = await self._context.new_page()
        except asyncio.CancelledError:
            logger.warning("Browser launch cancelled")
            await self._teardown()
            raise
        except Exception as e:
            logger.error(f"Browser launch failed: {e}")
            await self._teardown()
            raise LaunchError(f"Could not start {self.config.browser_type}: {e}") from e

        logger.info(
            f"🌐 Session started: {self.config.browser_type} "
            f"(headless={self.config.headless}, "
            f"viewport={self.config.viewport_width}x{self.config.viewport_height}, "
            f"locale={self.config.locale or 'default'})"
        )
        return self

    async def close(self) -> None:
        """Close page, context, browser and driver. Runs at most once."""
        if self._closed:
            return
        self._closed = True
        await self._teardown()
        logger.info("🏁 Session closed")

    async def _teardown(self) -> None:
        if self._context is not None:
            try:
                await self._context.close()
            except Exception as e:
                logger.debug(f"Context close failed: {e}")
            self._context = None
            self._page = None

        if self._browser is not None:
            try:
                await self._browser.close()
            except Exception as e:
                logger.debug(f"Browser close failed: {e}")
            self._browser = None

        if self._playwright is not None:
            try:
                await self._playwright.stop()
            except Exception as e:
                logger.debug(f"Playwright stop failed: {e}")
            self._playwright = None

    async def set_viewport(self, width: int, height: int) -> None:
        """Resize the rendered viewport; returns once the resize is applied."""
        await self.page.set_viewport_size({"width": width, "height": height})
        logger.debug(f"Viewport set to {width}x{height}")

    def is_alive(self) -> bool:
        """True while the browser process is connected."""
        return self._browser is not None and self._browser.is_connected()

    @property
    def has_page(self) -> bool:
        """True once open() has produced the page, until close()."""
        return self._page is not None

    @property
    def page(self) -> Page:
        """The session's single page."""
        if self._page is None:
            raise RuntimeError("Session not open. Call open() first.")
        return self._page

    @property
    def closed(self) -> bool:
        return self._closed


async def open_session(config: Optional[SessionConfig] = None) -> BrowserSession:
    """Launch a session; the caller owns closing it."""
    return await BrowserSession(config).open()


__all__ = [
    "BROWSER_TYPES",
    "SessionConfig",
    "BrowserSession",
    "open_session",
]
