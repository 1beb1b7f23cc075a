"""Journey runner: ordering, fail-fast and reporting."""
import json

import pytest

from poker_ui_tests.browser import ToolError
from poker_ui_tests.config import settings
from poker_ui_tests.runner import FAILED, PASSED, SKIPPED, run_journey
from poker_ui_tests.workflows import default_journey_data


@pytest.fixture(autouse=True)
def no_screenshots(monkeypatch):
    monkeypatch.setattr(settings, "screenshot_dir", None)


def make_steps(log, failing=None, error=AssertionError):
    async def step(browser, data, name):
        log.append(name)
        if name == failing:
            raise error("Input is empty not found")

    def bind(name):
        async def run(browser, data):
            await step(browser, data, name)
        return run

    return [(name, bind(name)) for name in ("intro", "admin", "room", "story")]


@pytest.mark.asyncio
async def test_all_steps_pass_in_order():
    log = []
    report = await run_journey(browser=None, steps=make_steps(log))

    assert log == ["intro", "admin", "room", "story"]
    assert report.passed
    assert report.failed_step is None
    assert report.count(PASSED) == 4


@pytest.mark.asyncio
async def test_first_failure_skips_the_rest():
    log = []
    report = await run_journey(browser=None, steps=make_steps(log, failing="admin"))

    assert log == ["intro", "admin"]
    assert [s.status for s in report.steps] == [PASSED, FAILED, SKIPPED, SKIPPED]
    assert report.failed_step.name == "admin"
    assert "Input is empty" in report.failed_step.error
    assert not report.passed


@pytest.mark.asyncio
async def test_tool_errors_count_as_failures():
    def tool_error(message):
        return ToolError(name="click", payload={"selector": "#x"}, message=message)

    report = await run_journey(browser=None, steps=make_steps([], failing="room", error=tool_error))

    assert report.failed_step.name == "room"
    assert report.failed_step.error.startswith("click failed")


@pytest.mark.asyncio
async def test_unexpected_errors_propagate():
    with pytest.raises(KeyError):
        await run_journey(browser=None, steps=make_steps([], failing="intro", error=KeyError))


@pytest.mark.asyncio
async def test_steps_receive_journey_data():
    seen = []

    async def capture(browser, data):
        seen.append(data.admin_name)

    await run_journey(browser=None, steps=[("capture", capture)])
    assert seen == [default_journey_data().admin_name]


@pytest.mark.asyncio
async def test_screenshot_taken_on_failure(fake_browser, tmp_path):
    report = await run_journey(
        fake_browser,
        steps=make_steps([], failing="admin"),
        screenshot_dir=tmp_path,
    )

    shot = report.failed_step.screenshot
    assert shot is not None
    assert shot.endswith("-02-admin.png")
    assert report.steps[0].screenshot is None


@pytest.mark.asyncio
async def test_report_summary_and_json():
    report = await run_journey(browser=None, steps=make_steps([], failing="story"), journey="Regular Admin journey")
    summary = report.summary()
    payload = json.loads(json.dumps(report.to_dict()))

    assert summary.startswith(f"Regular Admin journey @ {settings.base_url}")
    assert summary.endswith("3 passed, 1 failed, 0 skipped")
    assert payload["passed"] is False
    assert payload["steps"][3]["status"] == FAILED
