"""`data-testid` selectors exposed by the EST Poker front-end."""
from __future__ import annotations


def testid(name: str) -> str:
    """CSS selector for an element carrying data-testid=<name>."""
    return f'[data-testid="{name}"]'


ERROR_MESSAGE = testid("error-message")

# Intro
INTRO_H1 = testid("intro-h1")
INTRO_SUB_HEAD = testid("intro-sub-head")
INTRO_PUNCHLINE = testid("intro-punchline")
INTRO_SUBMIT = testid("intro-submit")

# Admin name
ADMIN_TEXT = testid("enter-name-admin-text")
ADMIN_INFO_TEXT = testid("enter-name-admin-info-text")
ADMIN_INPUT = testid("enter-name-admin-input")
ADMIN_SUBMIT = testid("enter-name-admin-submit")

# Room
ROOM_TEXT = testid("enter-room-text")
ROOM_INFO_TEXT = testid("enter-room-info-text")
ROOM_INPUT = testid("enter-room-input")
ROOM_SUBMIT = testid("enter-room-submit")

# Story creation
STORY_TEXT = testid("create-story-text")
STORY_INFO_TEXT = testid("create-story-info-text")
STORY_INPUT = testid("create-story-input")
STORY_ADD = testid("create-story-add")
STORY_SUBMIT = testid("create-story-submit")
