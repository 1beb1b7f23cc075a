"""Shared configuration for the EST Poker UI journeys.

Values come from the environment, then from `.env.defaults`, then from the
built-in defaults below:

- EST_POKER_BASE_URL: where the application under test is served
- PLAYWRIGHT_BROWSER: chromium, firefox or webkit
- PLAYWRIGHT_HEADLESS: "true"/"1" for headless runs
- UI_ASSERT_TIMEOUT: seconds an expectation keeps retrying
- UI_NAVIGATION_TIMEOUT_MS: Playwright default timeout in milliseconds
- SCREENSHOT_DIR: screenshots are written only when this is set
- UI_SMOKE_BASE_URL: optional second target (e.g. a staging deployment)
"""
from __future__ import annotations

import logging
from contextlib import contextmanager
from copy import deepcopy
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterator, List, Optional
from urllib.parse import urljoin

from poker_ui_tests.env_defaults import get_setting

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "http://localhost:8000/"
SUPPORTED_BROWSERS = ("chromium", "firefox", "webkit")


def _parse_bool(value: str) -> bool:
    return value.lower() in {"true", "1"}


def _parse_float(name: str, value: str) -> float:
    try:
        return float(value)
    except ValueError:
        raise ValueError(f"{name} must be a number, got {value!r}") from None


def _parse_int(name: str, value: str) -> int:
    try:
        return int(value)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {value!r}") from None


def _parse_browser(name: str, value: str) -> str:
    browser_type = value.lower()
    if browser_type not in SUPPORTED_BROWSERS:
        raise ValueError(
            f"{name} must be one of {', '.join(SUPPORTED_BROWSERS)}, got {value!r}"
        )
    return browser_type


@dataclass
class UiTargetProfile:
    """One deployment of the application under test."""

    name: str
    base_url: str
    browser_type: str = "chromium"
    headless: bool = True


class UiTestConfig:
    """Configuration for a journey run.

    A primary profile is always present. Setting UI_SMOKE_BASE_URL adds a
    "smoke" profile so the same journeys can be replayed against a second
    deployment.
    """

    def __init__(self) -> None:
        self.playwright_headless: bool = _parse_bool(get_setting("PLAYWRIGHT_HEADLESS", "true"))
        self.browser_type: str = _parse_browser(
            "PLAYWRIGHT_BROWSER", get_setting("PLAYWRIGHT_BROWSER", "chromium")
        )
        self.assert_timeout: float = _parse_float(
            "UI_ASSERT_TIMEOUT", get_setting("UI_ASSERT_TIMEOUT", "4.0")
        )
        self.poll_interval: float = _parse_float(
            "UI_POLL_INTERVAL", get_setting("UI_POLL_INTERVAL", "0.1")
        )
        self.navigation_timeout_ms: int = _parse_int(
            "UI_NAVIGATION_TIMEOUT_MS", get_setting("UI_NAVIGATION_TIMEOUT_MS", "30000")
        )
        self.screenshot_prefix: str = get_setting("UI_SCREENSHOT_PREFIX", "est-poker")
        screenshot_dir = get_setting("SCREENSHOT_DIR")
        self.screenshot_dir: Optional[Path] = Path(screenshot_dir) if screenshot_dir else None

        base_url = get_setting("EST_POKER_BASE_URL")
        if not base_url:
            base_url = DEFAULT_BASE_URL
            logger.debug("[CONFIG] EST_POKER_BASE_URL not set, using default: %s", base_url)

        primary = UiTargetProfile(
            name="primary",
            base_url=base_url,
            browser_type=self.browser_type,
            headless=self.playwright_headless,
        )
        self._profiles: Dict[str, UiTargetProfile] = {primary.name: primary}

        smoke_base = get_setting("UI_SMOKE_BASE_URL")
        if smoke_base:
            self._profiles["smoke"] = UiTargetProfile(
                name="smoke",
                base_url=smoke_base,
                browser_type=self.browser_type,
                headless=self.playwright_headless,
            )

        self._active: UiTargetProfile = primary

    # ---- active profile helpers -------------------------------------------------
    @property
    def active_profile(self) -> UiTargetProfile:
        return self._active

    @property
    def base_url(self) -> str:
        return self._active.base_url

    @property
    def screenshots_enabled(self) -> bool:
        return self.screenshot_dir is not None

    # ---- profile orchestration --------------------------------------------------
    def profiles(self) -> List[UiTargetProfile]:
        return list(self._profiles.values())

    @contextmanager
    def use_profile(self, profile: UiTargetProfile) -> Iterator[UiTargetProfile]:
        """Temporarily switch the active profile.

        The profile is deep-copied so edits made during a run do not leak into
        the next one.
        """
        previous = self._active
        self._active = deepcopy(profile)
        try:
            yield self._active
        finally:
            self._active = previous

    @contextmanager
    def override_base_url(self, base_url: str) -> Iterator[UiTargetProfile]:
        """Point the active profile at another URL for the duration of a block."""
        profile = deepcopy(self._active)
        profile.base_url = base_url
        with self.use_profile(profile) as active:
            yield active

    # ---- utility helpers --------------------------------------------------------
    def url(self, path: str = "") -> str:
        """Return an absolute URL for the provided path."""
        return urljoin(self.base_url.rstrip("/") + "/", path.lstrip("/"))


settings = UiTestConfig()
