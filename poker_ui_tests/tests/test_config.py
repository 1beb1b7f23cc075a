"""Configuration loading from environment and .env.defaults."""
from pathlib import Path

import pytest

from poker_ui_tests import env_defaults
from poker_ui_tests.config import DEFAULT_BASE_URL, UiTargetProfile, UiTestConfig

CONFIG_VARS = (
    "EST_POKER_BASE_URL",
    "PLAYWRIGHT_BROWSER",
    "PLAYWRIGHT_HEADLESS",
    "UI_ASSERT_TIMEOUT",
    "UI_POLL_INTERVAL",
    "UI_NAVIGATION_TIMEOUT_MS",
    "UI_SCREENSHOT_PREFIX",
    "SCREENSHOT_DIR",
    "UI_SMOKE_BASE_URL",
)


@pytest.fixture()
def clean_env(monkeypatch, tmp_path):
    """No config variables set and an empty .env.defaults."""
    for name in CONFIG_VARS:
        monkeypatch.delenv(name, raising=False)
    defaults = tmp_path / ".env.defaults"
    defaults.write_text("", encoding="utf-8")
    monkeypatch.setenv("EST_POKER_ENV_DEFAULTS", str(defaults))
    env_defaults.clear_cache()
    yield defaults
    env_defaults.clear_cache()


def test_builtin_defaults(clean_env):
    config = UiTestConfig()

    assert config.base_url == DEFAULT_BASE_URL
    assert config.browser_type == "chromium"
    assert config.playwright_headless is True
    assert config.assert_timeout == 4.0
    assert config.navigation_timeout_ms == 30000
    assert config.screenshot_dir is None
    assert not config.screenshots_enabled
    assert [p.name for p in config.profiles()] == ["primary"]


def test_environment_overrides(clean_env, monkeypatch):
    monkeypatch.setenv("EST_POKER_BASE_URL", "https://poker.example.test/app")
    monkeypatch.setenv("PLAYWRIGHT_BROWSER", "Firefox")
    monkeypatch.setenv("PLAYWRIGHT_HEADLESS", "0")
    monkeypatch.setenv("UI_ASSERT_TIMEOUT", "7.5")
    monkeypatch.setenv("SCREENSHOT_DIR", "/tmp/shots")

    config = UiTestConfig()

    assert config.base_url == "https://poker.example.test/app"
    assert config.browser_type == "firefox"
    assert config.playwright_headless is False
    assert config.assert_timeout == 7.5
    assert config.screenshot_dir == Path("/tmp/shots")


def test_env_defaults_file_is_fallback(clean_env, monkeypatch):
    clean_env.write_text(
        '# local target\nEST_POKER_BASE_URL="http://127.0.0.1:3000/"\nUI_ASSERT_TIMEOUT=2\n',
        encoding="utf-8",
    )
    monkeypatch.setenv("UI_ASSERT_TIMEOUT", "9")
    env_defaults.clear_cache()

    config = UiTestConfig()

    assert config.base_url == "http://127.0.0.1:3000/"
    assert config.assert_timeout == 9.0


@pytest.mark.parametrize(
    "name, value, message",
    [
        ("PLAYWRIGHT_BROWSER", "netscape", "PLAYWRIGHT_BROWSER must be one of"),
        ("UI_ASSERT_TIMEOUT", "soon", "UI_ASSERT_TIMEOUT must be a number"),
        ("UI_NAVIGATION_TIMEOUT_MS", "1.5", "UI_NAVIGATION_TIMEOUT_MS must be an integer"),
    ],
)
def test_invalid_values_name_the_variable(clean_env, monkeypatch, name, value, message):
    monkeypatch.setenv(name, value)

    with pytest.raises(ValueError, match=message):
        UiTestConfig()


def test_url_joins_paths(clean_env, monkeypatch):
    monkeypatch.setenv("EST_POKER_BASE_URL", "http://localhost:8000")
    config = UiTestConfig()

    assert config.url("/") == "http://localhost:8000/"
    assert config.url("step/admin") == "http://localhost:8000/step/admin"
    assert config.url("/health") == "http://localhost:8000/health"


def test_smoke_profile_and_use_profile_copy(clean_env, monkeypatch):
    monkeypatch.setenv("UI_SMOKE_BASE_URL", "https://staging.example.test/")
    config = UiTestConfig()
    primary, smoke = config.profiles()

    assert smoke.name == "smoke"
    with config.use_profile(smoke) as active:
        assert config.base_url == "https://staging.example.test/"
        active.base_url = "https://changed.example.test/"
    assert config.base_url == primary.base_url
    assert smoke.base_url == "https://staging.example.test/"


def test_override_base_url_is_scoped(clean_env):
    config = UiTestConfig()

    with config.override_base_url("http://127.0.0.1:5000/") as profile:
        assert isinstance(profile, UiTargetProfile)
        assert config.url("/health") == "http://127.0.0.1:5000/health"
    assert config.base_url == DEFAULT_BASE_URL


def test_parse_env_defaults_ignores_noise():
    parsed = env_defaults.parse_env_defaults(
        "\n# comment\nNOT A PAIR\nA=1\nB = 'two words'\nC=\"x=y\"\n"
    )

    assert parsed == {"A": "1", "B": "two words", "C": "x=y"}
