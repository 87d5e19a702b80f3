"""Shared test fixtures."""

from __future__ import annotations

import json
from collections.abc import Callable
from pathlib import Path
from typing import Any

import httpx
import pytest

from cookie_scope.core.config import IGNORE_LIST_ENV


@pytest.fixture(autouse=True)
def _clear_ignore_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep a developer's ignore list out of the tests."""
    monkeypatch.delenv(IGNORE_LIST_ENV, raising=False)


@pytest.fixture
def make_response() -> Callable[..., httpx.Response]:
    """Build a recorded response carrying the given Set-Cookie headers."""

    def _make(url: str, *set_cookies: str, status: int = 200) -> httpx.Response:
        request = httpx.Request("GET", url)
        headers = [("content-type", "text/html")]
        headers.extend(("set-cookie", value) for value in set_cookies)
        return httpx.Response(status, headers=headers, request=request)

    return _make


def har_entry(url: str, *set_cookies: str, status: int = 200) -> dict[str, Any]:
    return {
        "startedDateTime": "2024-05-01T10:00:00.000Z",
        "time": 12,
        "request": {
            "method": "GET",
            "url": url,
            "httpVersion": "HTTP/1.1",
            "headers": [{"name": "Accept", "value": "text/html"}],
        },
        "response": {
            "status": status,
            "statusText": "OK",
            "httpVersion": "HTTP/1.1",
            "headers": [{"name": "Content-Type", "value": "text/html"}]
            + [{"name": "Set-Cookie", "value": value} for value in set_cookies],
            "content": {"size": 0, "mimeType": "text/html"},
        },
    }


@pytest.fixture
def har_file(tmp_path: Path) -> Path:
    """HAR capture with one loosely scoped response, one clean and one cross-domain."""
    data = {
        "log": {
            "version": "1.2",
            "creator": {"name": "test", "version": "1"},
            "entries": [
                har_entry(
                    "https://app.example.com/login",
                    "session=abc123; Domain=example.com; Path=/; Secure; HttpOnly",
                    "_ga=GA1.2.3; Domain=.example.com; Path=/",
                ),
                har_entry("https://www.example.org/", "prefs=dark; Path=/"),
                har_entry("https://shop.example.net/", "cart=1; Domain=tracker.io"),
            ],
        }
    }
    path = tmp_path / "capture.har"
    path.write_text(json.dumps(data))
    return path
