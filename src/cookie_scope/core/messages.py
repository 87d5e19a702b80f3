"""Message catalog — localizable rule texts loaded from resources/messages.yaml."""

from __future__ import annotations

from functools import cache
from typing import Any

import yaml

from cookie_scope.core.paths import RESOURCES_DIR


@cache
def _load_catalog() -> dict[str, str]:
    path = RESOURCES_DIR / "messages.yaml"
    with open(path) as f:
        data = yaml.safe_load(f)
    catalog: dict[str, str] = {}
    for prefix, entries in data.items():
        for key, text in entries.items():
            catalog[f"{prefix}.{key}"] = str(text)
    return catalog


def get_message(key: str, *args: Any) -> str:
    """Look up a message and fill its positional placeholders.

    Raises KeyError if the key is not in the catalog.
    """
    text = _load_catalog()[key]
    if args:
        return text.format(*args)
    return text
