"""Recorded traffic — rebuild responses from HAR 1.2 archives.

Scans are passive: responses come from a capture exported by a browser or an
intercepting proxy, never from live requests.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import httpx

logger = logging.getLogger(__name__)

MAX_FILE_SIZE = 200 * 1024 * 1024  # 200 MB

# Bodies are not kept, so their encoding header goes too.
_DROPPED_RESPONSE_HEADERS = {"content-encoding"}


class HarFormatError(ValueError):
    """Raised when a file is not a usable HAR archive."""


def _header_pairs(headers: Any, where: str) -> list[tuple[str, str]]:
    if not isinstance(headers, list):
        raise HarFormatError(f"{where}: 'headers' must be a list")
    pairs: list[tuple[str, str]] = []
    for header in headers:
        try:
            pairs.append((str(header["name"]), str(header["value"])))
        except (KeyError, TypeError) as e:
            raise HarFormatError(f"{where}: malformed header entry {header!r}") from e
    return pairs


def entry_to_response(entry: dict[str, Any], index: int = 0) -> httpx.Response:
    """Convert one HAR entry into an httpx.Response with its request attached."""
    where = f"entry {index}"
    try:
        req = entry["request"]
        res = entry["response"]
        url = req["url"]
        method = req.get("method", "GET")
        status = int(res.get("status", 0))
    except (KeyError, TypeError, AttributeError, ValueError) as e:
        raise HarFormatError(f"{where}: missing request/response fields") from e

    try:
        request = httpx.Request(method, url, headers=_header_pairs(req.get("headers", []), where))
    except httpx.InvalidURL as e:
        raise HarFormatError(f"{where}: invalid request URL {url!r}") from e

    headers = [
        (name, value)
        for name, value in _header_pairs(res.get("headers", []), where)
        if name.lower() not in _DROPPED_RESPONSE_HEADERS
    ]
    return httpx.Response(status, headers=headers, request=request)


def parse_har(data: Any) -> list[httpx.Response]:
    """Convert decoded HAR JSON into responses, in archive order."""
    try:
        entries = data["log"]["entries"]
    except (KeyError, TypeError) as e:
        raise HarFormatError("Not a HAR archive: missing log.entries") from e
    if not isinstance(entries, list):
        raise HarFormatError("log.entries must be a list")

    return [entry_to_response(entry, i) for i, entry in enumerate(entries)]


def load_har(path: Path) -> list[httpx.Response]:
    """Read a HAR file from disk."""
    try:
        if path.stat().st_size > MAX_FILE_SIZE:
            raise HarFormatError(f"{path.name} is too large to scan")
        with open(path, encoding="utf-8-sig") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise HarFormatError(f"{path.name} is not valid JSON: {e}") from e
    except OSError as e:
        raise HarFormatError(f"Cannot read {path}: {e}") from e

    responses = parse_har(data)
    logger.debug("Loaded %d responses from %s", len(responses), path)
    return responses
