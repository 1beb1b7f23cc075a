"""Thin wrapper around direct Playwright for ergonomic, retrying assertions."""
from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import Any, AsyncIterator, Awaitable, Callable, Dict, Optional

import anyio
from playwright.async_api import Page, TimeoutError as PlaywrightTimeout

from poker_ui_tests.config import settings
from poker_ui_tests.playwright_client import PlaywrightClient

logger = logging.getLogger(__name__)

COMPUTED_STYLE_JS = "(el, prop) => window.getComputedStyle(el).getPropertyValue(prop)"


@dataclass
class ToolError(Exception):
    """Raised when a browser operation fails."""

    name: str
    payload: Dict[str, Any]
    message: str

    def __str__(self) -> str:  # pragma: no cover - human readable helper
        return f"{self.name} failed ({self.message}) with payload={self.payload}"


class Browser:
    """Convenience wrapper over a Playwright page.

    The `expect_*` methods keep re-reading the DOM until the expectation holds
    or `timeout` seconds pass, so a step does not race the page's own
    re-rendering.
    """

    def __init__(
        self,
        page: Page,
        timeout: float | None = None,
        interval: float | None = None,
    ) -> None:
        self._page = page
        self.timeout = settings.assert_timeout if timeout is None else timeout
        self.interval = settings.poll_interval if interval is None else interval
        self.current_url: str | None = None
        self.current_title: str | None = None

    async def _update_state(self) -> None:
        self.current_url = self._page.url
        self.current_title = await self._page.title()

    async def reset(self) -> Dict[str, Any]:
        """Navigate to about:blank (reset state)."""
        await self._page.goto("about:blank")
        await self._update_state()
        return {"url": self.current_url, "title": self.current_title}

    async def goto(self, url: str, wait_until: str = "networkidle", timeout: int | None = None) -> Dict[str, Any]:
        """Navigate to URL and return response with status.

        Note: "networkidle" can time out when the app keeps a WebSocket or
        long-poll open; the navigation is then retried with "domcontentloaded".
        """
        timeout = settings.navigation_timeout_ms if timeout is None else timeout
        try:
            try:
                response = await self._page.goto(url, wait_until=wait_until, timeout=timeout)
            except PlaywrightTimeout:
                if wait_until != "networkidle":
                    raise
                logger.debug("networkidle timed out for %s, retrying with domcontentloaded", url)
                response = await self._page.goto(url, wait_until="domcontentloaded", timeout=timeout)
            await self._update_state()
        except Exception as exc:
            raise ToolError(name="goto", payload={"url": url, "wait_until": wait_until}, message=str(exc))
        return {"url": self.current_url, "title": self.current_title, "status": response.status if response else None}

    async def type(self, selector: str, value: str) -> Dict[str, Any]:
        """Type into an input key by key, appending to what is already there."""
        try:
            await self._page.type(selector, value)
            return {"selector": selector, "value": value}
        except Exception as exc:
            raise ToolError(name="type", payload={"selector": selector, "value": value}, message=str(exc))

    async def click(self, selector: str) -> Dict[str, Any]:
        """Click element."""
        try:
            await self._page.click(selector)
            await self._update_state()
            return {"selector": selector, "url": self.current_url}
        except Exception as exc:
            raise ToolError(name="click", payload={"selector": selector}, message=str(exc))

    async def text(self, selector: str, timeout: int = 1000) -> str:
        """Get text content of element."""
        try:
            text = await self._page.text_content(selector, timeout=timeout)
            return text or ""
        except Exception as exc:
            raise ToolError(name="text", payload={"selector": selector}, message=str(exc))

    async def css(self, selector: str, prop: str) -> str:
        """Get the computed value of a CSS property (e.g. "border-color")."""
        try:
            value = await self._page.eval_on_selector(selector, COMPUTED_STYLE_JS, prop)
            return value or ""
        except Exception as exc:
            raise ToolError(name="css", payload={"selector": selector, "property": prop}, message=str(exc))

    async def input_value(self, selector: str, timeout: int = 1000) -> str:
        """Current value of an input field."""
        try:
            return await self._page.input_value(selector, timeout=timeout)
        except Exception as exc:
            raise ToolError(name="input_value", payload={"selector": selector}, message=str(exc))

    async def count(self, selector: str) -> int:
        """Number of elements currently matching selector."""
        try:
            return await self._page.locator(selector).count()
        except Exception as exc:
            raise ToolError(name="count", payload={"selector": selector}, message=str(exc))

    async def screenshot(self, name: str, directory: Path | None = None) -> Path:
        """Save a full-page PNG screenshot as <directory>/<name>.png."""
        directory = directory or settings.screenshot_dir
        if directory is None:
            raise ToolError(
                name="screenshot",
                payload={"name": name},
                message="SCREENSHOT_DIR environment variable must be set to capture screenshots",
            )
        try:
            directory.mkdir(parents=True, exist_ok=True)
            path = directory / f"{name}.png"
            await self._page.screenshot(path=str(path), type="png", full_page=True)
            return path
        except Exception as exc:
            raise ToolError(name="screenshot", payload={"name": name}, message=str(exc))

    # ---- retrying expectations --------------------------------------------------
    async def _wait_until(
        self,
        read: Callable[[], Awaitable[Any]],
        check: Callable[[Any], bool],
        describe: str,
        timeout: float | None = None,
    ) -> Any:
        """Poll `read` until `check` accepts its value.

        ToolErrors from `read` (element not rendered yet) count as a miss.
        """
        timeout = self.timeout if timeout is None else timeout
        deadline = anyio.current_time() + timeout
        last_value: Any = None
        last_error: ToolError | None = None

        while True:
            try:
                last_value = await read()
                last_error = None
                if check(last_value):
                    return last_value
            except ToolError as exc:
                last_error = exc
            if anyio.current_time() >= deadline:
                break
            await anyio.sleep(self.interval)

        if last_error:
            raise AssertionError(
                f"Timed out after {timeout}s waiting for {describe}. Last error: {last_error}"
            ) from last_error
        raise AssertionError(f"Timed out after {timeout}s waiting for {describe}; last value={last_value!r}")

    async def expect_text(self, selector: str, expected: str, timeout: float | None = None) -> str:
        """Element text (trimmed) must equal `expected`."""
        return await self._wait_until(
            lambda: self.text(selector),
            lambda content: content.strip() == expected,
            f"text {expected!r} in {selector}",
            timeout,
        )

    async def expect_substring(self, selector: str, expected: str, timeout: float | None = None) -> str:
        """Element text must contain `expected`."""
        return await self._wait_until(
            lambda: self.text(selector),
            lambda content: expected in content,
            f"{expected!r} inside {selector}",
            timeout,
        )

    async def expect_css(self, selector: str, prop: str, expected: str, timeout: float | None = None) -> str:
        """Computed CSS property must equal `expected`."""
        return await self._wait_until(
            lambda: self.css(selector, prop),
            lambda value: value == expected,
            f"{prop}: {expected} on {selector}",
            timeout,
        )

    async def expect_value(self, selector: str, expected: str, timeout: float | None = None) -> str:
        """Input value must equal `expected`."""
        return await self._wait_until(
            lambda: self.input_value(selector),
            lambda value: value == expected,
            f"value {expected!r} in {selector}",
            timeout,
        )

    async def expect_count(self, selector: str, expected: int, timeout: float | None = None) -> int:
        """Exactly `expected` elements must match `selector`."""
        return await self._wait_until(
            lambda: self.count(selector),
            lambda found: found == expected,
            f"{expected} x {selector}",
            timeout,
        )

    async def expect_absent(self, selector: str, timeout: float | None = None) -> None:
        """No element may match `selector`."""
        await self._wait_until(
            lambda: self.count(selector),
            lambda found: found == 0,
            f"{selector} to disappear",
            timeout,
        )


@asynccontextmanager
async def browser_session(
    browser_type: Optional[str] = None,
    headless: Optional[bool] = None,
) -> AsyncIterator[Browser]:
    """Yield a Browser on a freshly launched Playwright page."""
    client = PlaywrightClient(browser_type=browser_type, headless=headless)
    await client.connect()
    try:
        browser = Browser(client.page)
        await browser.reset()
        yield browser
    finally:
        await client.close()
