"""Reusable steps of the Regular Admin journey.

Steps run in order on one shared browser session; each one expects the page
to be where the previous step left it.
"""
from __future__ import annotations

import logging
import secrets
from dataclasses import dataclass, field
from typing import Awaitable, Callable, List, Tuple

from poker_ui_tests.browser import Browser
from poker_ui_tests.config import settings
from poker_ui_tests.wizard import AdminNameStep, IntroStep, RoomStep, StoryStep

logger = logging.getLogger(__name__)


@dataclass
class JourneyData:
    admin_name: str
    room_name: str
    stories: List[str] = field(default_factory=list)
    final_story: str = ""


def default_journey_data() -> JourneyData:
    return JourneyData(
        admin_name="Steve",
        room_name="Most Agile Team out there !",
        stories=[
            "FGTH-1234: Technical debt jira",
            "FGTH-4321: Refactoring",
            "FGTH-4545: One more story",
        ],
        final_story="FGTH-7777: Last story for the sprint",
    )


def generate_journey_data(prefix: str = "ui") -> JourneyData:
    """Journey inputs tagged with a random suffix, for repeated runs on one deployment."""
    suffix = secrets.token_hex(4)
    return JourneyData(
        admin_name=f"{prefix}-admin-{suffix}",
        room_name=f"{prefix} room {suffix}",
        stories=[f"{prefix.upper()}-{n}: story {suffix}" for n in (1, 2, 3)],
        final_story=f"{prefix.upper()}-4: last story {suffix}",
    )


async def see_intro_step(browser: Browser, data: JourneyData) -> None:
    await browser.goto(settings.url("/"))
    intro = IntroStep(browser)
    await intro.expect_rendered()
    await intro.submit()


async def admin_step_rejects_empty_name(browser: Browser, data: JourneyData) -> None:
    step = AdminNameStep(browser)
    await step.expect_rendered()
    await step.submit()
    await step.expect_input_error()


async def pass_admin_step(browser: Browser, data: JourneyData) -> None:
    step = AdminNameStep(browser)
    await step.enter(data.admin_name)
    await step.submit()
    await step.error.expect_hidden()


async def room_step_rejects_empty_name(browser: Browser, data: JourneyData) -> None:
    step = RoomStep(browser)
    await step.expect_rendered()
    await step.submit()
    await step.expect_input_error()


async def pass_room_step(browser: Browser, data: JourneyData) -> None:
    step = RoomStep(browser)
    await step.enter(data.room_name)
    await step.submit()
    await step.error.expect_hidden()


async def story_step_ignores_empty_add(browser: Browser, data: JourneyData) -> None:
    step = StoryStep(browser)
    await step.expect_rendered()
    for _ in range(2):
        await step.add()
        await step.error.expect_hidden()


async def add_stories_and_stay(browser: Browser, data: JourneyData) -> None:
    step = StoryStep(browser)
    for story in data.stories:
        logger.debug("Adding story %r", story)
        await step.add_story(story)
    await step.expect_still_on_step()


async def save_stories_and_continue(browser: Browser, data: JourneyData) -> None:
    step = StoryStep(browser)
    if data.final_story:
        await step.enter(data.final_story)
    await step.submit()
    await step.expect_left_step()


JourneyStep = Callable[[Browser, JourneyData], Awaitable[None]]

ADMIN_JOURNEY: List[Tuple[str, JourneyStep]] = [
    ("should see intro step", see_intro_step),
    ("should get error on the admin step", admin_step_rejects_empty_name),
    ("should pass admin step", pass_admin_step),
    ("should get error on room step", room_step_rejects_empty_name),
    ("should pass room step", pass_room_step),
    ("should get error on story step by trying to add new one or save", story_step_ignores_empty_add),
    ("should be able to add multiple stories and stay on same step", add_stories_and_stay),
    ("should be able to save stories and continue", save_stories_and_continue),
]
