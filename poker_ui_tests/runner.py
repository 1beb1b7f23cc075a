"""Execute a journey step by step and collect a report.

Steps share one browser session, so the run stops at the first failure and
the remaining steps are reported as skipped.
"""
from __future__ import annotations

import logging
import re
import time
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Tuple

from poker_ui_tests.browser import Browser, ToolError
from poker_ui_tests.config import settings
from poker_ui_tests.workflows import ADMIN_JOURNEY, JourneyData, JourneyStep, default_journey_data

logger = logging.getLogger(__name__)

PASSED = "passed"
FAILED = "failed"
SKIPPED = "skipped"


@dataclass
class StepResult:
    name: str
    status: str
    duration: float = 0.0
    error: Optional[str] = None
    screenshot: Optional[str] = None


@dataclass
class JourneyReport:
    journey: str
    base_url: str
    steps: List[StepResult] = field(default_factory=list)

    @property
    def passed(self) -> bool:
        return bool(self.steps) and all(step.status == PASSED for step in self.steps)

    @property
    def failed_step(self) -> Optional[StepResult]:
        for step in self.steps:
            if step.status == FAILED:
                return step
        return None

    def count(self, status: str) -> int:
        return sum(1 for step in self.steps if step.status == status)

    def summary(self) -> str:
        lines = [f"{self.journey} @ {self.base_url}"]
        marks = {PASSED: "✅", FAILED: "❌", SKIPPED: "⏭️"}
        for step in self.steps:
            line = f"  {marks[step.status]} {step.name} ({step.duration:.2f}s)"
            if step.error:
                line += f"\n      {step.error}"
            lines.append(line)
        lines.append(
            f"{self.count(PASSED)} passed, {self.count(FAILED)} failed, {self.count(SKIPPED)} skipped"
        )
        return "\n".join(lines)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "journey": self.journey,
            "base_url": self.base_url,
            "passed": self.passed,
            "steps": [asdict(step) for step in self.steps],
        }


def _slug(name: str) -> str:
    return re.sub(r"[^a-z0-9]+", "-", name.lower()).strip("-")


async def _capture(browser: Browser, index: int, name: str, directory: Path) -> Optional[str]:
    filename = f"{settings.screenshot_prefix}-{index:02d}-{_slug(name)}"
    try:
        path = await browser.screenshot(filename, directory)
    except ToolError as exc:
        logger.warning("Screenshot %s failed: %s", filename, exc)
        return None
    logger.info("📸 %s", path.name)
    return str(path)


async def run_journey(
    browser: Browser,
    steps: Sequence[Tuple[str, JourneyStep]] = ADMIN_JOURNEY,
    data: Optional[JourneyData] = None,
    journey: str = "Regular Admin journey",
    screenshot_dir: Optional[Path] = None,
    capture_every_step: bool = False,
) -> JourneyReport:
    """Run `steps` in order against `browser`.

    With a screenshot directory (argument or SCREENSHOT_DIR) a screenshot is
    taken after a failure, and after every step when `capture_every_step`.
    """
    data = data or default_journey_data()
    screenshot_dir = screenshot_dir or settings.screenshot_dir
    report = JourneyReport(journey=journey, base_url=settings.base_url)
    failed = False

    for index, (name, step) in enumerate(steps, start=1):
        if failed:
            report.steps.append(StepResult(name=name, status=SKIPPED))
            continue

        started = time.monotonic()
        try:
            await step(browser, data)
        except (AssertionError, ToolError) as exc:
            failed = True
            result = StepResult(
                name=name,
                status=FAILED,
                duration=time.monotonic() - started,
                error=str(exc) or type(exc).__name__,
            )
            logger.error("Step %r failed: %s", name, result.error)
        else:
            result = StepResult(name=name, status=PASSED, duration=time.monotonic() - started)
            logger.info("Step %r passed", name)

        if screenshot_dir is not None and (failed or capture_every_step):
            result.screenshot = await _capture(browser, index, name, screenshot_dir)
        report.steps.append(result)

    return report
