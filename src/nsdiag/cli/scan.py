"""CLI command: nsdiag scan <file>... — run diagnostics over config documents."""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Any

import click
from rich.console import Console
from rich.table import Table

from nsdiag.catalog.models import RuleCatalog, Severity
from nsdiag.cli import get_catalog
from nsdiag.coordinator import UpdateCoordinator
from nsdiag.engine.models import Finding
from nsdiag.stats import catalog_stats, finding_stats

console = Console(stderr=True)

_SEVERITY_COLORS = {
    Severity.ERROR: "red",
    Severity.WARNING: "yellow",
    Severity.INFORMATION: "blue",
    Severity.HINT: "dim",
}


@click.command()
@click.argument("files", nargs=-1, required=True, type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--all",
    "scan_all",
    is_flag=True,
    help="Scan every file given, not only app.ns.conf / app.ns.json.",
)
@click.option(
    "--format",
    "fmt",
    type=click.Choice(["table", "json"]),
    default="table",
    show_default=True,
)
@click.option("--stats", "show_stats", is_flag=True, help="Also summarize the rule catalog.")
@click.pass_context
def scan(
    ctx: click.Context,
    files: tuple[str, ...],
    scan_all: bool,
    fmt: str,
    show_stats: bool,
) -> None:
    """Scan configuration FILES against the rule catalog."""
    config = ctx.obj["config"]
    catalog = get_catalog(ctx)

    names = config.document_names
    if scan_all:
        names = tuple(Path(f).name for f in files)

    coordinator = UpdateCoordinator(
        catalog,
        enabled=config.enabled,
        document_names=names,
    )
    if not coordinator.enabled:
        console.print("[yellow]Diagnostics are disabled (NSDIAG_ENABLED).[/yellow]")
        return

    results: dict[str, list[Finding]] = {}
    for file_path in files:
        if not coordinator.is_recognized(file_path):
            console.print(f"[dim]Skipping unrecognized document {file_path}[/dim]")
            continue
        text = Path(file_path).read_text(encoding="utf-8", errors="ignore")
        results[file_path] = coordinator.rescan(file_path, _document_unit(file_path, text))

    all_findings = [f for found in results.values() for f in found]

    if fmt == "json":
        payload: dict[str, Any] = {
            "documents": {
                path: [f.to_dict() for f in found] for path, found in results.items()
            },
            "stats": finding_stats(all_findings),
        }
        if show_stats:
            payload["catalog"] = catalog_stats(catalog).to_dict()
        click.echo(json.dumps(payload, indent=2))
    else:
        _print_table(results)
        if show_stats:
            _print_catalog_summary(catalog)

    if any(f.severity == Severity.ERROR for f in all_findings):
        sys.exit(1)


def _document_unit(file_path: str, text: str) -> Any:
    """JSON documents holding a string or nested string lists scan per app."""
    if Path(file_path).suffix.lower() != ".json":
        return text
    try:
        data = json.loads(text)
    except json.JSONDecodeError:
        return text
    if _is_string_tree(data):
        return data
    return text


def _is_string_tree(data: Any) -> bool:
    if isinstance(data, str):
        return True
    if isinstance(data, list):
        return all(_is_string_tree(item) for item in data)
    return False


def _print_table(results: dict[str, list[Finding]]) -> None:
    all_findings = [f for found in results.values() for f in found]
    if not all_findings:
        console.print("[green]No findings.[/green]")
        _print_summary(results, all_findings)
        return

    table = Table(title="Findings", show_lines=False)
    table.add_column("Severity", style="bold", width=12)
    table.add_column("File", style="cyan")
    table.add_column("Line", justify="right")
    table.add_column("Cols", justify="right")
    table.add_column("Code", no_wrap=True)
    table.add_column("Message", max_width=60)

    for path, found in results.items():
        for finding in found:
            color = _SEVERITY_COLORS.get(finding.severity, "white")
            start, end = finding.range.start, finding.range.end
            table.add_row(
                f"[{color}]{finding.severity.label}[/{color}]",
                path,
                str(start.line + 1),
                f"{start.character}-{end.character}",
                finding.code,
                finding.message,
            )

    console.print(table)
    _print_summary(results, all_findings)


def _print_summary(results: dict[str, list[Finding]], findings: list[Finding]) -> None:
    console.print(f"\nScanned {len(results)} document(s)")
    stats = finding_stats(findings)
    breakdown = ", ".join(f"{label}: {count}" for label, count in stats.items())
    console.print(f"Total findings: {len(findings)}" + (f" ({breakdown})" if breakdown else ""))


def _print_catalog_summary(catalog: RuleCatalog) -> None:
    summary = catalog_stats(catalog)
    console.print(f"Catalog: {summary.total} rules ({summary.active_rules} active)")
    by_technology = ", ".join(f"{t.value}: {n}" for t, n in summary.by_technology.items())
    console.print(f"By technology: {by_technology}")
