"""HTML scan report generator — Primer-inspired design, single page."""

from __future__ import annotations

import html
from collections import Counter
from datetime import UTC, datetime

from cookie_scope.core.base import Finding, RiskLevel, ScanResult

_RISK_BADGE: dict[RiskLevel, dict[str, str]] = {
    RiskLevel.HIGH: {"bg": "#ffebe9", "fg": "#cf222e", "border": "#cf222e"},
    RiskLevel.MEDIUM: {"bg": "#fff8c5", "fg": "#9a6700", "border": "#efd97a"},
    RiskLevel.LOW: {"bg": "#ddf4ff", "fg": "#0969da", "border": "#b6d9fc"},
    RiskLevel.INFO: {"bg": "#f6f8fa", "fg": "#656d76", "border": "#d0d7de"},
}

_RISK_ORDER = [RiskLevel.HIGH, RiskLevel.MEDIUM, RiskLevel.LOW, RiskLevel.INFO]

_CSS = """\
:root {
  --color-canvas-default: #ffffff;
  --color-canvas-subtle: #f6f8fa;
  --color-border-default: #d0d7de;
  --color-border-muted: #d8dee4;
  --color-fg-default: #1f2328;
  --color-fg-muted: #656d76;
  --color-success: #1a7f37;
  --color-accent: #0969da;
}

@media (prefers-color-scheme: dark) {
  :root {
    --color-canvas-default: #161b22;
    --color-canvas-subtle: #0d1117;
    --color-border-default: #30363d;
    --color-border-muted: #21262d;
    --color-fg-default: #e6edf3;
    --color-fg-muted: #8b949e;
    --color-success: #3fb950;
    --color-accent: #58a6ff;
  }
}

* { margin: 0; padding: 0; box-sizing: border-box; }

body {
  font-family: -apple-system, BlinkMacSystemFont, "Segoe UI", "Noto Sans",
    Helvetica, Arial, sans-serif;
  font-size: 14px;
  line-height: 1.5;
  color: var(--color-fg-default);
  background: var(--color-canvas-subtle);
  padding: 32px 16px;
}

.container { max-width: 960px; margin: 0 auto; }

header { text-align: center; margin-bottom: 32px; }
header h1 { font-size: 24px; font-weight: 600; margin-bottom: 8px; }
header .subtitle { color: var(--color-fg-muted); }

.summary { display: flex; justify-content: center; gap: 8px; margin-top: 12px; }

.card {
  background: var(--color-canvas-default);
  border: 1px solid var(--color-border-default);
  border-radius: 6px;
  margin-bottom: 16px;
  overflow: hidden;
}

.card-header {
  padding: 12px 16px;
  border-bottom: 1px solid var(--color-border-muted);
  background: var(--color-canvas-subtle);
  font-family: ui-monospace, SFMono-Regular, Menlo, monospace;
  font-size: 13px;
  word-break: break-all;
}

.finding { padding: 12px 16px; border-bottom: 1px solid var(--color-border-muted); }
.finding:last-child { border-bottom: none; }
.finding-header { display: flex; align-items: center; gap: 8px; margin-bottom: 4px; }
.finding-title { font-weight: 600; }
.finding-desc { color: var(--color-fg-muted); font-size: 13px; margin: 4px 0; }
.finding-meta { color: var(--color-fg-muted); font-size: 12px; }

.badge {
  display: inline-block;
  padding: 1px 8px;
  border-radius: 24px;
  font-size: 11px;
  font-weight: 600;
  text-transform: uppercase;
  border: 1px solid;
  white-space: nowrap;
}

pre {
  font-size: 12px;
  background: var(--color-canvas-subtle);
  padding: 8px 12px;
  border-radius: 4px;
  margin: 8px 0;
  white-space: pre-wrap;
  word-break: break-all;
}

.finding-solution {
  font-size: 13px;
  margin-top: 8px;
  padding: 8px 12px;
  background: var(--color-canvas-subtle);
  border-left: 3px solid var(--color-accent);
  border-radius: 0 4px 4px 0;
}

.finding-solution strong { color: var(--color-accent); }

.no-findings { padding: 16px; color: var(--color-success); text-align: center; }

footer {
  text-align: center;
  color: var(--color-fg-muted);
  font-size: 12px;
  margin-top: 32px;
  padding-top: 16px;
  border-top: 1px solid var(--color-border-default);
}

@media print {
  body { background: #fff; padding: 0; }
  .card { break-inside: avoid; }
}
"""


def _esc(text: str) -> str:
    """HTML-escape user-provided text."""
    return html.escape(str(text))


def count_by_risk(results: list[ScanResult]) -> dict[RiskLevel, int]:
    """Count findings per risk level, highest risk first."""
    counts = Counter(f.risk for r in results for f in r.findings)
    return {level: counts.get(level, 0) for level in _RISK_ORDER}


def _render_badge(risk: RiskLevel, label: str | None = None) -> str:
    """Render a Primer-style risk badge."""
    colors = _RISK_BADGE[risk]
    return (
        f'<span class="badge" style="background:{colors["bg"]};'
        f'color:{colors["fg"]};border-color:{colors["border"]}">'
        f"{_esc(label or risk.value.upper())}</span>"
    )


def _render_references(reference: str) -> str:
    links = [
        f'<a href="{_esc(url)}">{_esc(url)}</a>'
        for url in reference.splitlines()
        if url.startswith(("http://", "https://"))
    ]
    return "<br>".join(links)


def _render_finding(finding: Finding) -> str:
    """Render a single finding as HTML."""
    meta = f"CWE-{finding.cwe_id} &middot; WASC-{finding.wasc_id} &middot; "
    meta += f"Confidence: {_esc(finding.confidence.value)}"
    if finding.tags:
        meta += " &middot; " + ", ".join(
            f'<a href="{_esc(url)}">{_esc(tag)}</a>' for tag, url in finding.tags.items()
        )
    evidence = "".join(f"<pre>{_esc(e)}</pre>" for e in finding.evidence)
    return (
        '<div class="finding">'
        '<div class="finding-header">'
        f"{_render_badge(finding.risk)}"
        f'<span class="finding-title">{_esc(finding.title)}</span>'
        "</div>"
        f'<div class="finding-desc">{_esc(finding.description)}</div>'
        f"<pre>{_esc(finding.other_info)}</pre>"
        f"{evidence}"
        f'<div class="finding-meta">{meta}</div>'
        '<div class="finding-solution">'
        f"<strong>Solution:</strong> {_esc(finding.solution)}"
        "</div>"
        f'<div class="finding-meta">{_render_references(finding.reference)}</div>'
        "</div>"
    )


def _render_result(result: ScanResult) -> str:
    findings_html = "".join(_render_finding(f) for f in result.findings)
    return (
        '<div class="card">'
        f'<div class="card-header">{_esc(result.url or result.host)}'
        f" &middot; {_esc(result.rule_name)}</div>"
        f"{findings_html}"
        "</div>"
    )


def generate_html_report(results: list[ScanResult], source: str = "") -> str:
    """Generate a self-contained HTML report for a scan.

    Only results that carry findings get a card; a scan without findings
    renders a single "no issues" notice.

    Args:
        results: Scan results, one per response and rule.
        source: Name of the scanned capture, shown in the header.

    Returns:
        Complete HTML document as a string.
    """
    now = datetime.now(tz=UTC).strftime("%Y-%m-%d %H:%M UTC")
    counts = count_by_risk(results)
    summary = "".join(
        _render_badge(level, f"{level.value}: {count}") for level, count in counts.items()
    )

    flagged = [r for r in results if r.findings]
    if flagged:
        body = "".join(_render_result(r) for r in flagged)
    else:
        body = '<div class="card"><div class="no-findings">No issues found.</div></div>'

    subtitle = f"{_esc(source)} &middot; {_esc(now)}" if source else _esc(now)

    return (
        "<!DOCTYPE html>"
        '<html lang="en">'
        "<head>"
        '<meta charset="utf-8">'
        '<meta name="viewport" content="width=device-width, initial-scale=1">'
        "<title>Cookie Scope Report</title>"
        f"<style>{_CSS}</style>"
        "</head>"
        "<body>"
        '<div class="container">'
        "<header>"
        "<h1>Cookie Scope Report</h1>"
        f'<div class="subtitle">{subtitle}</div>'
        f'<div class="summary">{summary}</div>'
        "</header>"
        f"{body}"
        "<footer>"
        f"Generated by cookie-scope &middot; {len(results)} checks"
        "</footer>"
        "</div>"
        "</body>"
        "</html>"
    )
