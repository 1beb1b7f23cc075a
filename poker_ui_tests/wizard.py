"""Page objects for the onboarding wizard.

Each step knows its own copy and selectors; the journey in `workflows` only
strings them together. One step is rendered at a time.
"""
from __future__ import annotations

from poker_ui_tests import locators
from poker_ui_tests.browser import Browser

ERROR_BORDER_COLOR = "rgb(239, 68, 68)"
EMPTY_INPUT_MESSAGE = "Input is empty"


class ErrorBanner:
    """The shared validation banner (`error-message`)."""

    def __init__(self, browser: Browser) -> None:
        self.browser = browser

    async def expect_visible(self, message: str = EMPTY_INPUT_MESSAGE) -> None:
        await self.browser.expect_substring(locators.ERROR_MESSAGE, message)

    async def expect_hidden(self) -> None:
        await self.browser.expect_css(locators.ERROR_MESSAGE, "display", "none")


class WizardStep:
    """Base for steps with a heading, an info line and a submit button."""

    heading_selector: str
    heading: str
    info_selector: str
    info: str
    submit_selector: str
    input_selector: str | None = None

    def __init__(self, browser: Browser) -> None:
        self.browser = browser
        self.error = ErrorBanner(browser)

    async def expect_rendered(self) -> None:
        await self.browser.expect_text(self.heading_selector, self.heading)
        await self.browser.expect_text(self.info_selector, self.info)

    async def enter(self, value: str) -> None:
        if self.input_selector is None:
            raise TypeError(f"{type(self).__name__} has no input field")
        await self.browser.type(self.input_selector, value)

    async def submit(self) -> None:
        await self.browser.click(self.submit_selector)

    async def expect_input_error(self) -> None:
        """Banner says the input is empty and the input border turns red."""
        if self.input_selector is None:
            raise TypeError(f"{type(self).__name__} has no input field")
        await self.error.expect_visible(EMPTY_INPUT_MESSAGE)
        await self.browser.expect_css(self.input_selector, "border-color", ERROR_BORDER_COLOR)


class IntroStep(WizardStep):
    heading_selector = locators.INTRO_H1
    heading = "Hi ! Welcome to EST Poker !"
    info_selector = locators.INTRO_SUB_HEAD
    info = "[ Simple web app for estimation story points within team ]"
    punchline_selector = locators.INTRO_PUNCHLINE
    punchline = "Precise Planning, Efficient Execution, Blazing Fast !"
    submit_selector = locators.INTRO_SUBMIT

    async def expect_rendered(self) -> None:
        await super().expect_rendered()
        await self.browser.expect_text(self.punchline_selector, self.punchline)


class AdminNameStep(WizardStep):
    heading_selector = locators.ADMIN_TEXT
    heading = "Add your name"
    info_selector = locators.ADMIN_INFO_TEXT
    info = "[ You're about to become an admin ]"
    input_selector = locators.ADMIN_INPUT
    submit_selector = locators.ADMIN_SUBMIT


class RoomStep(WizardStep):
    heading_selector = locators.ROOM_TEXT
    heading = "Create new room"
    info_selector = locators.ROOM_INFO_TEXT
    info = "[ Place where you can vote for stories ]"
    input_selector = locators.ROOM_INPUT
    submit_selector = locators.ROOM_SUBMIT


class StoryStep(WizardStep):
    heading_selector = locators.STORY_TEXT
    heading = "Create new story"
    info_selector = locators.STORY_INFO_TEXT
    info = "[ Add multiple or one story ]"
    input_selector = locators.STORY_INPUT
    add_selector = locators.STORY_ADD
    submit_selector = locators.STORY_SUBMIT
    submit_label = "Save"

    async def add(self) -> None:
        await self.browser.click(self.add_selector)

    async def add_story(self, story: str) -> None:
        await self.enter(story)
        await self.add()
        # Input is cleared once the story is taken; typing earlier would append.
        await self.browser.expect_value(self.input_selector, "")

    async def expect_still_on_step(self) -> None:
        # The Save button only exists on this step.
        await self.browser.expect_text(self.submit_selector, self.submit_label)

    async def expect_left_step(self) -> None:
        await self.browser.expect_absent(self.submit_selector)
