"""Process-wide headless browser engine.

:class:`BrowserEngine` owns the Playwright driver and a single Chromium
instance for the lifetime of the service. Request handlers never share
pages: each one borrows a fresh page through :meth:`BrowserEngine.page`,
which closes it again when the ``async with`` block exits, whether the
block succeeded or not.

Example::

    engine = BrowserEngine(headless=True)
    await engine.start()
    async with engine.page() as page:
        await page.goto("https://petstore.swagger.io/")
    await engine.close()
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from playwright.async_api import Browser, Page, Playwright, async_playwright
from playwright.async_api import Error as PlaywrightError

from swagger_explorer.exceptions import BrowserLaunchError, UpstreamError

logger = logging.getLogger(__name__)


class BrowserEngine:
    """Singleton Chromium instance that hands out one page per request.

    The engine does not detect or recover from a crashed browser; once the
    browser is gone, :meth:`page` fails with
    :class:`~swagger_explorer.exceptions.UpstreamError` for every request.

    Args:
        headless: Launch Chromium without a visible window.
        navigation_timeout: Default navigation timeout applied to every page,
            in seconds.
    """

    def __init__(self, headless: bool = True, navigation_timeout: float = 30.0) -> None:
        self._headless = headless
        self._navigation_timeout = navigation_timeout
        self._playwright: Optional[Playwright] = None
        self._browser: Optional[Browser] = None

    @property
    def is_running(self) -> bool:
        """Whether :meth:`start` succeeded and :meth:`close` has not been called."""
        return self._browser is not None

    async def start(self) -> None:
        """Start the Playwright driver and launch Chromium.

        Raises:
            BrowserLaunchError: If the driver or the browser cannot start
                (for example when the Chromium build is not installed).
        """
        if self._browser is not None:
            return
        try:
            self._playwright = await async_playwright().start()
            self._browser = await self._playwright.chromium.launch(headless=self._headless)
        except Exception as exc:
            await self.close()
            raise BrowserLaunchError(f"Failed to launch browser: {exc}") from exc
        logger.debug("Chromium launched (headless=%s)", self._headless)

    @asynccontextmanager
    async def page(self) -> AsyncIterator[Page]:
        """Yield a fresh page and close it when the block exits.

        Raises:
            UpstreamError: If the engine is not running or the browser
                refuses to open a page.
        """
        if self._browser is None:
            raise UpstreamError("Browser engine is not running")
        try:
            page = await self._browser.new_page()
        except PlaywrightError as exc:
            raise UpstreamError(f"Failed to open browser page: {exc}") from exc
        page.set_default_navigation_timeout(self._navigation_timeout * 1000)
        try:
            yield page
        finally:
            try:
                await page.close()
            except PlaywrightError as exc:
                logger.warning("Failed to close browser page: %s", exc)

    async def close(self) -> None:
        """Close the browser and stop the driver. Safe to call more than once."""
        browser, self._browser = self._browser, None
        playwright, self._playwright = self._playwright, None
        if browser is not None:
            try:
                await browser.close()
            except PlaywrightError as exc:
                logger.warning("Error closing browser: %s", exc)
        if playwright is not None:
            await playwright.stop()
