"""Tests for the HTML report generator."""

from __future__ import annotations

import pytest

from cookie_scope.core.base import RiskLevel, ScanResult
from cookie_scope.core.cookies import parse_set_cookie
from cookie_scope.core.report import count_by_risk, generate_html_report
from cookie_scope.rules.cookie_loosely_scoped.rule import CookieLooselyScopedRule


@pytest.fixture()
def flagged_result() -> ScanResult:
    rule = CookieLooselyScopedRule()
    finding = rule.build_finding(
        "www.example.com", [parse_set_cookie('x="<script>"; Domain=example.com')]
    )
    return ScanResult(
        rule_name=rule.name,
        url="https://www.example.com/?q=<b>",
        host="www.example.com",
        findings=[finding],
    )


def test_count_by_risk(flagged_result: ScanResult) -> None:
    clean = ScanResult(rule_name="cookie_loosely_scoped", url="", host="example.org")
    counts = count_by_risk([flagged_result, clean])
    assert counts == {
        RiskLevel.HIGH: 0,
        RiskLevel.MEDIUM: 0,
        RiskLevel.LOW: 0,
        RiskLevel.INFO: 1,
    }


def test_report_contains_finding(flagged_result: ScanResult) -> None:
    report = generate_html_report([flagged_result], source="capture.har")
    assert report.startswith("<!DOCTYPE html>")
    assert "Loosely Scoped Cookie" in report
    assert "capture.har" in report
    assert "CWE-565" in report
    assert 'href="https://tools.ietf.org/html/rfc6265#section-4.1"' in report


def test_report_escapes_user_text(flagged_result: ScanResult) -> None:
    report = generate_html_report([flagged_result])
    assert "<script>" not in report
    assert "?q=&lt;b&gt;" in report


def test_report_without_findings() -> None:
    clean = ScanResult(rule_name="cookie_loosely_scoped", url="https://a.example/", host="a.example")
    report = generate_html_report([clean])
    assert "No issues found." in report
    assert "https://a.example/" not in report
