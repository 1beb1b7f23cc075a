"""Mock EST Poker front-end for exercising the journeys locally.

Serves the onboarding wizard (intro -> admin name -> room -> stories) with
the same data-testid contract, copy and validation styling as the real
front-end, rendered server-side so no JavaScript build is needed. Wizard
progress lives in the Flask session cookie, so every browser context gets its
own wizard.

Usage:
    # Start mock server
    python -m poker_ui_tests.mock_estpoker_app

    # Or use in tests via the `mock_estpoker_server` fixture
"""
from __future__ import annotations

import secrets
from typing import Any, Dict, List

from flask import Flask, jsonify, redirect, render_template_string, request, session, url_for

STEPS = ("intro", "admin", "room", "story", "overview")

ERROR_BORDER = "rgb(239, 68, 68)"
DEFAULT_BORDER = "rgb(209, 213, 219)"
EMPTY_INPUT_ERROR = "Input is empty"

PAGE_TEMPLATE = """<!doctype html>
<html lang="en">
<head>
  <meta charset="utf-8">
  <title>EST Poker</title>
  <style>
    body { font-family: sans-serif; margin: 3rem auto; max-width: 40rem; }
    input { border-width: 2px; border-style: solid; padding: .5rem; }
    .error { color: rgb(239, 68, 68); }
  </style>
</head>
<body>
{% if step == "intro" %}
  <h1 data-testid="intro-h1">Hi ! Welcome to EST Poker !</h1>
  <p data-testid="intro-sub-head">[ Simple web app for estimation story points within team ]</p>
  <p data-testid="intro-punchline">Precise Planning, Efficient Execution, Blazing Fast !</p>
  <form method="post" action="{{ url_for('submit_step', name='intro') }}">
    <button type="submit" data-testid="intro-submit">Start</button>
  </form>
{% elif step == "admin" %}
  <h2 data-testid="enter-name-admin-text">Add your name</h2>
  <p data-testid="enter-name-admin-info-text">[ You're about to become an admin ]</p>
  <form method="post" action="{{ url_for('submit_step', name='admin') }}" novalidate>
    <input name="value" autocomplete="off" data-testid="enter-name-admin-input" style="border-color: {{ border }}">
    <button type="submit" data-testid="enter-name-admin-submit">Next</button>
  </form>
{% elif step == "room" %}
  <h2 data-testid="enter-room-text">Create new room</h2>
  <p data-testid="enter-room-info-text">[ Place where you can vote for stories ]</p>
  <form method="post" action="{{ url_for('submit_step', name='room') }}" novalidate>
    <input name="value" autocomplete="off" data-testid="enter-room-input" style="border-color: {{ border }}">
    <button type="submit" data-testid="enter-room-submit">Next</button>
  </form>
{% elif step == "story" %}
  <h2 data-testid="create-story-text">Create new story</h2>
  <p data-testid="create-story-info-text">[ Add multiple or one story ]</p>
  <ul>
  {% for story in stories %}
    <li data-testid="story-item">{{ story }}</li>
  {% endfor %}
  </ul>
  <form method="post" action="{{ url_for('submit_step', name='story') }}" novalidate>
    <input name="value" autocomplete="off" data-testid="create-story-input" style="border-color: {{ border }}">
    <button type="submit" name="action" value="add" data-testid="create-story-add">Add new</button>
    <button type="submit" name="action" value="save" data-testid="create-story-submit">Save</button>
  </form>
{% else %}
  <h2 data-testid="room-name">{{ room_name }}</h2>
  <p data-testid="room-admin">{{ admin_name }}</p>
  <ul>
  {% for story in stories %}
    <li data-testid="story-item">{{ story }}</li>
  {% endfor %}
  </ul>
{% endif %}
  <p class="error" data-testid="error-message" style="display: {{ 'block' if error else 'none' }}">{{ error or '' }}</p>
</body>
</html>
"""


def _state() -> Dict[str, Any]:
    return {
        "step": session.get("step", "intro"),
        "admin_name": session.get("admin_name"),
        "room_name": session.get("room_name"),
        "stories": list(session.get("stories", [])),
    }


def _render(error: str | None = None, status: int = 200):
    state = _state()
    html = render_template_string(
        PAGE_TEMPLATE,
        step=state["step"],
        error=error,
        border=ERROR_BORDER if error else DEFAULT_BORDER,
        admin_name=state["admin_name"],
        room_name=state["room_name"],
        stories=state["stories"],
    )
    return html, status


def _advance(to: str):
    session["step"] = to
    return redirect(url_for("index"))


def create_mock_app(secret_key: str | None = None) -> Flask:
    """Create and configure the mock EST Poker Flask app."""
    app = Flask(__name__)
    app.config["TESTING"] = True
    app.secret_key = secret_key or secrets.token_hex(16)

    @app.route("/", methods=["GET"])
    def index():
        return _render()

    @app.route("/step/<name>", methods=["POST"])
    def submit_step(name: str):
        current = session.get("step", "intro")
        if name not in STEPS or name != current:
            # Stale form (e.g. back button): show whatever step is current.
            return redirect(url_for("index"))

        value = request.form.get("value", "").strip()

        if name == "intro":
            return _advance("admin")

        if name == "admin":
            if not value:
                return _render(EMPTY_INPUT_ERROR, 400)
            session["admin_name"] = value
            return _advance("room")

        if name == "room":
            if not value:
                return _render(EMPTY_INPUT_ERROR, 400)
            session["room_name"] = value
            return _advance("story")

        action = request.form.get("action", "add")
        if not value and action == "add":
            # Nothing to add: 204 keeps the browser on the current page.
            return "", 204

        stories: List[str] = list(session.get("stories", []))
        if value:
            stories.append(value)
            session["stories"] = stories

        if action == "save":
            if not stories:
                return _render(EMPTY_INPUT_ERROR, 400)
            return _advance("overview")
        return redirect(url_for("index"))

    @app.route("/reset", methods=["POST"])
    def reset():
        session.clear()
        return redirect(url_for("index"))

    @app.route("/api/state", methods=["GET"])
    def api_state():
        return jsonify(_state())

    @app.route("/health", methods=["GET"])
    def health():
        return jsonify({"status": "ok", "service": "mock-est-poker"})

    return app


# Create app instance for gunicorn (e.g., gunicorn poker_ui_tests.mock_estpoker_app:app)
app = create_mock_app()


def main(host: str = "127.0.0.1", port: int = 8000) -> None:
    print(f"Mock EST Poker running on http://{host}:{port}/")
    print("Endpoints:")
    print("  GET  /              - Current wizard step")
    print("  POST /step/<name>   - Submit intro, admin, room or story")
    print("  POST /reset         - Restart the wizard")
    print("  GET  /api/state     - Wizard state as JSON")
    print("  GET  /health        - Health check")
    app.run(host=host, port=port, debug=False)


if __name__ == "__main__":
    main()
