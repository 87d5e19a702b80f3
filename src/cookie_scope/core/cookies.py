"""Cookie source — turn a response's Set-Cookie headers into cookie records."""

from __future__ import annotations

import logging
from dataclasses import dataclass

import httpx

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ResponseCookie:
    """A cookie set by a response. Only the attributes the rules need are kept."""

    name: str
    value: str
    domain: str | None = None
    path: str | None = None
    raw: str = ""

    def __str__(self) -> str:
        return f"{self.name}={self.value}"


# Attributes the rules read; all others (Secure, SameSite, Priority, Partitioned, ...) are skipped.
_KEPT_ATTRIBUTES = {"domain", "path"}


def parse_set_cookie(header: str) -> ResponseCookie | None:
    """Parse one Set-Cookie header value.

    A Set-Cookie header carries exactly one cookie: the first name=value pair.
    Domain and Path are read case-insensitively from the attributes after it,
    the last occurrence winning. Values are kept verbatim, so spaces, quotes
    and braces survive. Returns None when the header has no name=value pair.
    """
    pair, *attributes = header.split(";")
    name, sep, value = pair.partition("=")
    name = name.strip()
    if not sep or not name:
        logger.debug("Skipping Set-Cookie header without name=value %r", header[:80])
        return None

    kept: dict[str, str] = {}
    for attribute in attributes:
        key, _, attr_value = attribute.partition("=")
        key = key.strip().lower()
        if key in _KEPT_ATTRIBUTES:
            kept[key] = attr_value.strip()

    return ResponseCookie(
        name=name,
        value=value.strip(),
        domain=kept.get("domain") or None,
        path=kept.get("path") or None,
        raw=header,
    )


def get_response_cookies(response: httpx.Response) -> list[ResponseCookie]:
    """Return every cookie set by the response, in header order."""
    cookies: list[ResponseCookie] = []
    for header in response.headers.get_list("set-cookie"):
        cookie = parse_set_cookie(header)
        if cookie is not None:
            cookies.append(cookie)
    return cookies


def get_response_host(response: httpx.Response) -> str:
    """Host name the response was sent from, taken from the originating request.

    Falls back to the literal "null" when the request carries no host, which
    the domain checks treat as a placeholder rather than a real name.
    """
    try:
        host = response.request.url.host
    except RuntimeError:
        # httpx raises when no request is attached to the response
        return "null"
    return host or "null"


def get_response_url(response: httpx.Response) -> str:
    try:
        return str(response.request.url)
    except RuntimeError:
        return ""
