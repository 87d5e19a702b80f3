"""Configuration loading — reads optional TOML config file."""

from __future__ import annotations

import logging
import os
import tomllib
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATHS = [
    Path.home() / ".config" / "cookie-scope" / "config.toml",
    Path("cookie-scope.toml"),
]

IGNORE_LIST_ENV = "COOKIE_SCOPE_IGNORE_LIST"


def load_config(path: Path | None = None) -> dict[str, Any]:
    """Load configuration from a TOML file.

    Searches default paths if no explicit path is given.
    Returns an empty dict if no config file is found.
    """
    paths = [path] if path is not None else DEFAULT_CONFIG_PATHS

    for p in paths:
        if p.exists():
            with open(p, "rb") as f:
                return tomllib.load(f)

    return {}


def _split_names(value: Any) -> set[str]:
    if isinstance(value, str):
        items = value.split(",")
    elif isinstance(value, list):
        items = [str(v) for v in value]
    else:
        return set()
    return {item.strip() for item in items if item.strip()}


def get_cookie_ignore_list(config: dict[str, Any] | None = None) -> set[str]:
    """Cookie names excluded from cookie checks: env var → [rules.cookie] ignorelist → empty."""
    env = os.environ.get(IGNORE_LIST_ENV)
    if env:
        return _split_names(env)
    if config is None:
        return set()
    value = config.get("rules", {}).get("cookie", {}).get("ignorelist")
    return _split_names(value)


def load_ignore_list(path: Path | None = None) -> set[str]:
    """Resolve the ignore list, falling back to an empty set if the config is unusable.

    Read and parse errors are logged and treated as an empty config.
    """
    try:
        config = load_config(path)
    except (OSError, tomllib.TOMLDecodeError) as e:
        logger.warning("Ignoring unreadable config %s: %s", path or "(default)", e)
        config = {}
    ignore_list = get_cookie_ignore_list(config)
    logger.debug("Cookie ignore list: %s", sorted(ignore_list))
    return ignore_list
