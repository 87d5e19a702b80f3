"""Loosely scoped cookie rule."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from cookie_scope.core.base import BaseRule, Confidence, Finding, RiskLevel, ScanResult
from cookie_scope.core.cookies import (
    ResponseCookie,
    get_response_cookies,
    get_response_host,
    get_response_url,
)
from cookie_scope.core.messages import get_message
from cookie_scope.core.tags import AlertTag, to_map
from cookie_scope.rules.cookie_loosely_scoped.analyzer import is_loosely_scoped

logger = logging.getLogger(__name__)

MESSAGE_PREFIX = "cookielooselyscoped."


class CookieLooselyScopedRule(BaseRule):
    name = "cookie_loosely_scoped"
    plugin_id = 90033
    display_name = get_message(MESSAGE_PREFIX + "name")
    description = get_message(MESSAGE_PREFIX + "desc")
    risk = RiskLevel.INFO
    confidence = Confidence.LOW
    cwe_id = 565  # CWE-565: Reliance on Cookies without Validation and Integrity Checking
    wasc_id = 15  # WASC-15: Application Misconfiguration
    tags = to_map(
        AlertTag.OWASP_2021_A08_INTEGRITY_FAIL,
        AlertTag.OWASP_2017_A06_SEC_MISCONFIG,
        AlertTag.WSTG_V42_SESS_02_COOKIE_ATTRS,
    )

    async def scan(
        self,
        response: httpx.Response,
        ignore_list: frozenset[str] = frozenset(),
        **kwargs: Any,
    ) -> ScanResult:
        host = get_response_host(response)
        cookies = get_response_cookies(response)

        loosely_scoped = [
            cookie
            for cookie in cookies
            if cookie.name not in ignore_list and is_loosely_scoped(cookie.domain, host)
        ]
        ignored = sorted({c.name for c in cookies if c.name in ignore_list})
        if ignored:
            logger.debug("Ignored cookies from %s: %s", host, ", ".join(ignored))

        findings = [self.build_finding(host, loosely_scoped)] if loosely_scoped else []

        return ScanResult(
            rule_name=self.name,
            url=get_response_url(response),
            host=host,
            findings=findings,
            raw_data={
                "cookies_seen": len(cookies),
                "cookies_ignored": ignored,
                "loosely_scoped": [c.name for c in loosely_scoped],
            },
        )

    def build_finding(self, host: str, cookies: list[ResponseCookie]) -> Finding:
        """Build the single finding raised for all loosely scoped cookies of a response."""
        cookie_lines = "".join(
            get_message(MESSAGE_PREFIX + "extrainfo.cookie", cookie) for cookie in cookies
        )
        return Finding(
            rule_id=self.plugin_id,
            title=self.display_name,
            description=self.description,
            risk=self.risk,
            confidence=self.confidence,
            solution=get_message(MESSAGE_PREFIX + "soln"),
            reference=get_message(MESSAGE_PREFIX + "refs"),
            other_info=get_message(MESSAGE_PREFIX + "extrainfo", host, cookie_lines),
            evidence=[cookie.raw for cookie in cookies if cookie.raw],
            cwe_id=self.cwe_id,
            wasc_id=self.wasc_id,
            tags=dict(self.tags),
        )

    def get_example_findings(self) -> list[Finding]:
        example = ResponseCookie(
            name="name", value="value", domain="example.com", raw="name=value; domain=example.com"
        )
        return [self.build_finding("subdomain.example.com", [example])]
