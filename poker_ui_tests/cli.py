"""Command line entry point: `est-poker-ui`.

    est-poker-ui run --base-url http://localhost:8000/ --json report.json
    est-poker-ui serve-mock --port 8000
"""
from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

import httpx
from playwright.async_api import Error as PlaywrightError

from poker_ui_tests.browser import ToolError, browser_session
from poker_ui_tests.config import SUPPORTED_BROWSERS, UiTargetProfile, settings
from poker_ui_tests.runner import JourneyReport, run_journey
from poker_ui_tests.workflows import default_journey_data, generate_journey_data

logger = logging.getLogger("poker_ui_tests")

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_UNREACHABLE = 2
EXIT_BROWSER = 3


def check_reachable(url: str, timeout: float = 10.0) -> Optional[str]:
    """Return None when `url` answers, otherwise a short reason."""
    try:
        response = httpx.get(url, timeout=timeout, follow_redirects=True)
    except httpx.HTTPError as exc:
        return f"{type(exc).__name__}: {exc}"
    if response.status_code >= 500:
        return f"HTTP {response.status_code}"
    return None


async def _run(args: argparse.Namespace) -> JourneyReport:
    data = generate_journey_data() if args.unique_data else default_journey_data()
    async with browser_session(browser_type=args.browser, headless=False if args.headed else None) as browser:
        return await run_journey(
            browser,
            data=data,
            screenshot_dir=args.screenshots,
            capture_every_step=args.screenshots is not None,
        )


def _select_profile(name: str) -> UiTargetProfile:
    for profile in settings.profiles():
        if profile.name == name:
            return profile
    raise KeyError(name)


def cmd_run(args: argparse.Namespace) -> int:
    profile = _select_profile(args.profile)
    with settings.use_profile(profile), settings.override_base_url(args.base_url or profile.base_url):
        base_url = settings.base_url
        reason = check_reachable(settings.url("/"))
        if reason:
            print(f"❌ {base_url} is not reachable ({reason})", file=sys.stderr)
            return EXIT_UNREACHABLE
        try:
            report = asyncio.run(_run(args))
        except (PlaywrightError, ToolError) as exc:
            print(f"❌ Browser session failed: {exc}", file=sys.stderr)
            return EXIT_BROWSER

    print(report.summary())
    if args.json:
        args.json.write_text(json.dumps(report.to_dict(), indent=2), encoding="utf-8")
        logger.info("Report written to %s", args.json)
    return EXIT_OK if report.passed else EXIT_FAILED


def cmd_serve_mock(args: argparse.Namespace) -> int:
    from poker_ui_tests.mock_estpoker_app import main as serve

    serve(host=args.host, port=args.port)
    return EXIT_OK


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="est-poker-ui", description="EST Poker UI journeys")
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    run = sub.add_parser("run", help="run the Regular Admin journey")
    run.add_argument(
        "--profile",
        choices=[profile.name for profile in settings.profiles()],
        default=settings.active_profile.name,
        help="target profile; UI_SMOKE_BASE_URL adds 'smoke'",
    )
    run.add_argument("--base-url", help=f"application URL, overrides the profile's (default: {settings.base_url})")
    run.add_argument("--browser", choices=SUPPORTED_BROWSERS, default=None)
    run.add_argument("--headed", action="store_true", help="show the browser window")
    run.add_argument("--json", type=Path, help="write the report as JSON")
    run.add_argument("--screenshots", type=Path, help="capture a screenshot after every step")
    run.add_argument(
        "--unique-data",
        action="store_true",
        help="use randomised names instead of the fixed journey inputs",
    )
    run.set_defaults(func=cmd_run)

    serve = sub.add_parser("serve-mock", help="serve the local wizard stand-in")
    serve.add_argument("--host", default="127.0.0.1")
    serve.add_argument("--port", type=int, default=8000)
    serve.set_defaults(func=cmd_serve_mock)
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
