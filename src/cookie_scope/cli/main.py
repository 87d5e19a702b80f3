"""CLI entry point — the `cookie-scope` command."""

from __future__ import annotations

import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import Any

import click
import httpx
from rich.console import Console
from rich.logging import RichHandler
from rich.markdown import Markdown
from rich.panel import Panel
from rich.table import Table

from cookie_scope.core.base import BaseRule, Finding, RiskLevel, ScanResult
from cookie_scope.core.config import load_ignore_list
from cookie_scope.core.har import HarFormatError, load_har
from cookie_scope.core.registry import get_all_rules, get_rule
from cookie_scope.core.report import count_by_risk
from cookie_scope.rules.cookie_loosely_scoped.analyzer import (
    is_loosely_scoped,
    same_registrable_domain,
    split_labels,
)

console = Console()
err_console = Console(stderr=True)

RISK_COLORS = {
    RiskLevel.HIGH: "red bold",
    RiskLevel.MEDIUM: "yellow",
    RiskLevel.LOW: "blue",
    RiskLevel.INFO: "dim",
}


def _run_async(coro: Any) -> Any:
    """Run an async coroutine from sync Click commands."""
    return asyncio.run(coro)


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


async def scan_responses(
    responses: list[httpx.Response],
    rules: dict[str, BaseRule],
    ignore_list: frozenset[str],
) -> list[ScanResult]:
    """Run every rule against every response concurrently."""
    tasks = [
        rule.scan(response, ignore_list=ignore_list)
        for response in responses
        for rule in rules.values()
    ]
    return list(await asyncio.gather(*tasks))


def _render_finding(finding: Finding) -> None:
    style = RISK_COLORS.get(finding.risk, "")
    console.print(
        f"  [{style}][{finding.risk.value.upper()}][/{style}] {finding.title} "
        f"[dim](confidence: {finding.confidence.value}, CWE-{finding.cwe_id})[/dim]"
    )
    for line in finding.other_info.splitlines():
        if line.strip():
            console.print(f"    {line}", markup=False)
    console.print(f"    [dim]Solution:[/dim] {finding.solution}")


def _render_scan_result(result: ScanResult) -> None:
    """Render one flagged response with Rich."""
    console.print(f"\n[bold]{result.url or result.host}[/bold] [dim]({result.rule_name})[/dim]")
    for finding in result.findings:
        _render_finding(finding)


def _select_rules(names: str | None) -> dict[str, BaseRule]:
    if not names:
        return get_all_rules()
    selected: dict[str, BaseRule] = {}
    for name in names.split(","):
        name = name.strip()
        rule = get_rule(name)
        if rule is None:
            console.print(f"[red]Unknown rule: {name}[/red]")
            raise SystemExit(1)
        selected[name] = rule
    return selected


@click.group()
@click.version_option(package_name="cookie-scope")
@click.option("--verbose", "-v", is_flag=True, help="Log debug details to stderr.")
def cli(verbose: bool) -> None:
    """cookie-scope — find cookies scoped wider than the host that set them."""
    _setup_logging(verbose)


@cli.command()
@click.argument("har_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--rules", "-r", "rule_names", help="Comma-separated list of rules to run.")
@click.option(
    "--ignore",
    "ignore",
    multiple=True,
    help="Cookie name to skip. Repeatable; added to the configured ignore list.",
)
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="TOML config file. Defaults to ~/.config/cookie-scope/config.toml or ./cookie-scope.toml.",
)
@click.option(
    "--format", "output_format", type=click.Choice(["rich", "json", "html"]), default="rich"
)
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Output file path (for html format). Defaults to cookie-scope-report.html.",
)
def scan(
    har_file: Path,
    rule_names: str | None,
    ignore: tuple[str, ...],
    config_path: Path | None,
    output_format: str,
    output: Path | None,
) -> None:
    """Scan the responses recorded in a HAR file."""
    rules = _select_rules(rule_names)
    if not rules:
        console.print("[red]No rules available.[/red]")
        sys.exit(1)

    try:
        responses = load_har(har_file)
    except HarFormatError as e:
        console.print(f"[red]{e}[/red]")
        sys.exit(1)

    ignore_list = frozenset(load_ignore_list(config_path) | set(ignore))
    results = _run_async(scan_responses(responses, rules, ignore_list))
    flagged = [r for r in results if r.findings]

    if output_format == "json":
        data = [r.model_dump(mode="json") for r in flagged]
        click.echo(json.dumps(data, indent=2))
    elif output_format == "html":
        from cookie_scope.core.report import generate_html_report

        report_path = output or Path("cookie-scope-report.html")
        report_path.write_text(generate_html_report(results, source=har_file.name))
        console.print(f"[green]Report saved to {report_path}[/green]")
    else:
        console.print(
            Panel(
                f"[bold]Cookie Scope Results[/bold] — {har_file.name} "
                f"({len(responses)} responses)",
                style="blue",
            )
        )
        if not flagged:
            console.print("  [green]No issues found.[/green]")
        for result in flagged:
            _render_scan_result(result)
        counts = ", ".join(f"{level.value}: {n}" for level, n in count_by_risk(results).items())
        console.print(f"\n[bold]Findings:[/bold] {counts}\n")


@cli.command()
@click.argument("domain")
@click.argument("host")
@click.option("--json", "as_json", is_flag=True, help="Print the verdict as JSON.")
def check(domain: str, host: str, as_json: bool) -> None:
    """Check whether a cookie Domain value is loosely scoped for HOST."""
    loose = is_loosely_scoped(domain, host)
    same = same_registrable_domain(split_labels(domain), split_labels(host))

    if as_json:
        click.echo(
            json.dumps(
                {
                    "domain": domain,
                    "host": host,
                    "same_registrable_domain": same,
                    "loosely_scoped": loose,
                }
            )
        )
        return

    if loose:
        console.print(f"[yellow]Loosely scoped:[/yellow] Domain={domain} set by {host}")
        if not same:
            console.print("  [dim]Domain is outside the host's registrable domain.[/dim]")
    else:
        console.print(f"[green]Not loosely scoped:[/green] Domain={domain} set by {host}")


@cli.command("rules")
def list_rules() -> None:
    """List the available scan rules."""
    table = Table(title="Scan Rules")
    table.add_column("ID", justify="right")
    table.add_column("Rule", style="bold")
    table.add_column("Name")
    table.add_column("Risk")
    table.add_column("Confidence")
    table.add_column("CWE", justify="right")
    table.add_column("WASC", justify="right")

    for rule in sorted(get_all_rules().values(), key=lambda r: r.plugin_id):
        style = RISK_COLORS.get(rule.risk, "")
        table.add_row(
            str(rule.plugin_id),
            rule.name,
            rule.display_name,
            f"[{style}]{rule.risk.value}[/{style}]",
            rule.confidence.value,
            str(rule.cwe_id),
            str(rule.wasc_id),
        )

    console.print(table)


@cli.command()
@click.argument("rule_name")
def info(rule_name: str) -> None:
    """Show educational content and an example finding for a rule."""
    rule = get_rule(rule_name)
    if rule is None:
        console.print(f"[red]Unknown rule: {rule_name}[/red]")
        raise SystemExit(1)

    console.print(Panel(f"[bold]{rule.display_name}[/bold] ({rule.plugin_id})", style="blue"))
    console.print(Markdown(rule.get_educational_content()))
    console.print("\n[bold]Example finding[/bold]")
    for finding in rule.get_example_findings():
        _render_finding(finding)


if __name__ == "__main__":
    cli()
