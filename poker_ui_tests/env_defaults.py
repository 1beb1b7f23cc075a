"""Read fallback settings from a workspace `.env.defaults` file.

The suite is usually pointed at a target through environment variables. For
day-to-day work it is handier to keep the local values in `.env.defaults`
next to `setup.py`; anything set in the real environment still wins.

Set `EST_POKER_ENV_DEFAULTS` to read a different file.
"""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path
from typing import Dict


def _defaults_path() -> Path:
    override = os.getenv("EST_POKER_ENV_DEFAULTS")
    if override:
        return Path(override)
    return Path(__file__).resolve().parents[1] / ".env.defaults"


def parse_env_defaults(text: str) -> Dict[str, str]:
    defaults: Dict[str, str] = {}
    for raw in text.splitlines():
        line = raw.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        key, value = line.split("=", 1)
        value = value.strip()
        if len(value) >= 2 and value[0] in ('"', "'") and value[-1] == value[0]:
            value = value[1:-1]
        defaults[key.strip()] = value
    return defaults


@lru_cache(maxsize=1)
def _load_env_defaults() -> Dict[str, str]:
    env_defaults = _defaults_path()
    if not env_defaults.exists():
        return {}
    return parse_env_defaults(env_defaults.read_text(encoding="utf-8"))


def get_env_default(key: str) -> str | None:
    return _load_env_defaults().get(key)


def get_setting(key: str, fallback: str | None = None) -> str | None:
    """Environment variable, then `.env.defaults`, then `fallback`."""
    value = os.getenv(key)
    if value is not None and value != "":
        return value
    default = get_env_default(key)
    if default is not None:
        return default
    return fallback


def clear_cache() -> None:
    _load_env_defaults.cache_clear()
