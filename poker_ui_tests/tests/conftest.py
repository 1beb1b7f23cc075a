"""Fixtures for unit tests that must not launch a browser."""
from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace
from typing import Any, Dict, List

import pytest

from poker_ui_tests.browser import Browser


class FakeLocator:
    def __init__(self, page: "FakePage", selector: str):
        self._page = page
        self._selector = selector

    async def count(self) -> int:
        return 1 if self._selector in self._page.elements else 0


class FakePage:
    """Small stand-in for playwright.async_api.Page.

    `elements` maps a selector to {"text": ..., "value": ..., "style": {...}}.
    Text entries may be lists; each read then pops the next value so tests
    can simulate a page that is still re-rendering.
    """

    def __init__(self) -> None:
        self.url = "about:blank"
        self.elements: Dict[str, Dict[str, Any]] = {}
        self.calls: List[tuple] = []
        self.goto_error: Exception | None = None
        self.title_error: Exception | None = None

    def add(self, selector: str, text: Any = "", value: str = "", **style: str) -> None:
        self.elements[selector] = {"text": text, "value": value, "style": dict(style)}

    def _element(self, selector: str) -> Dict[str, Any]:
        if selector not in self.elements:
            raise Exception(f"Timeout waiting for selector {selector}")
        return self.elements[selector]

    async def goto(self, url, wait_until=None, timeout=None):
        self.calls.append(("goto", url, wait_until))
        if self.goto_error is not None:
            raise self.goto_error
        self.url = url
        return SimpleNamespace(status=200)

    async def title(self) -> str:
        if self.title_error is not None:
            raise self.title_error
        return "EST Poker"

    async def type(self, selector, value):
        self.calls.append(("type", selector, value))
        self._element(selector)["value"] += value

    async def click(self, selector):
        self.calls.append(("click", selector))
        self._element(selector)

    async def text_content(self, selector, timeout=None):
        text = self._element(selector)["text"]
        if isinstance(text, list):
            return text.pop(0) if len(text) > 1 else text[0]
        return text

    async def input_value(self, selector, timeout=None):
        return self._element(selector)["value"]

    async def eval_on_selector(self, selector, script, arg=None):
        return self._element(selector)["style"].get(arg, "")

    def locator(self, selector):
        return FakeLocator(self, selector)

    async def screenshot(self, path, type="png", full_page=False):
        Path(path).write_bytes(b"\x89PNG")


@pytest.fixture()
def fake_page():
    return FakePage()


@pytest.fixture()
def fake_browser(fake_page):
    return Browser(fake_page, timeout=0.3, interval=0.01)
