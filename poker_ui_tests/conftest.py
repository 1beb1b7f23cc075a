import sys
import threading
from pathlib import Path

import pytest
import pytest_asyncio
from playwright.async_api import Error as PlaywrightError
from werkzeug.serving import make_server

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from poker_ui_tests.browser import Browser
from poker_ui_tests.config import settings
from poker_ui_tests.mock_estpoker_app import create_mock_app
from poker_ui_tests.playwright_client import PlaywrightClient


# ============================================================================
# Mock EST Poker server
# ============================================================================

class MockServer:
    """Mock front-end served from a background thread on a free port."""

    def __init__(self, host: str = "127.0.0.1", port: int = 0):
        self.app = create_mock_app()
        self.server = make_server(host, port, self.app, threaded=True)
        self.thread = None

    def start(self):
        self.thread = threading.Thread(target=self.server.serve_forever, daemon=True)
        self.thread.start()

    def stop(self):
        self.server.shutdown()
        if self.thread:
            self.thread.join(timeout=5)

    @property
    def url(self) -> str:
        host, port = self.server.server_address[:2]
        return f"http://{host}:{port}/"


@pytest.fixture(scope="session")
def mock_estpoker_server():
    """Running mock EST Poker front-end, shared by the whole session."""
    server = MockServer()
    server.start()
    yield server
    server.stop()


@pytest.fixture()
def estpoker_target(mock_estpoker_server):
    """Point `settings` at the mock server for one test."""
    with settings.override_base_url(mock_estpoker_server.url) as profile:
        yield profile


@pytest.fixture()
def mock_app():
    """Flask test client app (no network, no browser)."""
    return create_mock_app(secret_key="test-secret")


# ============================================================================
# Browser fixtures
# ============================================================================

@pytest_asyncio.fixture()
async def playwright_client():
    """Launch a Playwright browser, skipping when none is installed."""
    client = PlaywrightClient(headless=settings.playwright_headless)
    try:
        await client.connect()
    except PlaywrightError as exc:
        await client.close()
        pytest.skip(f"Playwright browser not available - run `playwright install {client.browser_type}` ({exc})")
    try:
        yield client
    finally:
        await client.close()


@pytest_asyncio.fixture()
async def browser(playwright_client):
    """Create a Browser instance with the Playwright page."""
    browser = Browser(playwright_client.page)
    await browser.reset()
    return browser

