"""
Direct Playwright Client
========================

Launches Playwright in-process and owns the browser, the default context and
the default page for one journey run.

Usage:
    async with PlaywrightClient(browser_type="firefox") as client:
        await client.page.goto("http://localhost:8000/")
"""

import logging
from typing import Optional

from playwright.async_api import async_playwright, Browser, BrowserContext, Page, Playwright

from poker_ui_tests.config import SUPPORTED_BROWSERS, settings

logger = logging.getLogger(__name__)


class PlaywrightClient:
    """
    Direct Playwright client with full API access.

    Example:
        async with PlaywrightClient() as client:
            await client.page.goto("http://localhost:8000/")
    """

    def __init__(
        self,
        browser_type: Optional[str] = None,
        headless: Optional[bool] = None,
        timeout: Optional[int] = None,
    ):
        """
        Initialize Playwright client.

        Args:
            browser_type: Browser to use (chromium, firefox, webkit); None = from config
            headless: Run in headless mode (None = from config)
            timeout: Default timeout in milliseconds (None = from config)
        """
        self.browser_type = browser_type or settings.browser_type
        if self.browser_type not in SUPPORTED_BROWSERS:
            raise ValueError(f"Unsupported browser type: {self.browser_type}")
        self.headless = settings.playwright_headless if headless is None else headless
        self.timeout = settings.navigation_timeout_ms if timeout is None else timeout

        self._playwright: Optional[Playwright] = None
        self._browser: Optional[Browser] = None
        self._context: Optional[BrowserContext] = None
        self._page: Optional[Page] = None

    async def __aenter__(self):
        await self.connect()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    async def connect(self):
        """Launch the browser and open a default context and page."""
        self._playwright = await async_playwright().start()
        launcher = getattr(self._playwright, self.browser_type)
        logger.debug("Launching %s (headless=%s)", self.browser_type, self.headless)
        try:
            self._browser = await launcher.launch(headless=self.headless)
        except Exception:
            await self._playwright.stop()
            self._playwright = None
            raise

        self._context = await self._browser.new_context()
        self._context.set_default_timeout(self.timeout)
        self._page = await self._context.new_page()

    async def close(self):
        """Close all connections and cleanup resources."""
        if self._page:
            await self._page.close()
            self._page = None

        if self._context:
            await self._context.close()
            self._context = None

        if self._browser:
            await self._browser.close()
            self._browser = None

        if self._playwright:
            await self._playwright.stop()
            self._playwright = None

    @property
    def page(self) -> Page:
        if not self._page:
            raise RuntimeError("Client not connected or page not created")
        return self._page

