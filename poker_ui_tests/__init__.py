"""Playwright journeys for the EST Poker onboarding wizard."""

__version__ = "1.0.0"
