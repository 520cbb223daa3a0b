"""CLI command group: nsdiag rules — inspect, validate, and edit the rule catalog."""

from __future__ import annotations

import json
import sys

import click
from rich.console import Console
from rich.table import Table

from nsdiag.cli import get_catalog
from nsdiag.engine.scanner import compile_rule
from nsdiag.errors import RulePatternError
from nsdiag.stats import catalog_stats

console = Console(stderr=True)


@click.group()
def rules() -> None:
    """Inspect and edit the diagnostic rule catalog."""


@rules.command("list")
@click.pass_context
def list_rules(ctx: click.Context) -> None:
    """List every rule in catalog order."""
    catalog = get_catalog(ctx)

    table = Table(title=f"Rules ({catalog.source})")
    table.add_column("Code", style="cyan", no_wrap=True)
    table.add_column("Severity")
    table.add_column("Title")
    table.add_column("Category")
    table.add_column("Active", justify="center")

    for rule in catalog.rules():
        table.add_row(
            rule.code,
            rule.severity.label,
            rule.title,
            rule.category.value if rule.category else "",
            "yes" if rule.is_active else "[dim]no[/dim]",
        )
    console.print(table)


@rules.command()
@click.option(
    "--format",
    "fmt",
    type=click.Choice(["table", "json"]),
    default="table",
    show_default=True,
)
@click.pass_context
def stats(ctx: click.Context, fmt: str) -> None:
    """Summarize the catalog by technology, category and severity."""
    summary = catalog_stats(get_catalog(ctx))

    if fmt == "json":
        click.echo(json.dumps(summary.to_dict(), indent=2))
        return

    console.print(f"[bold]Total rules:[/bold] {summary.total} ({summary.active_rules} active)")
    data = summary.to_dict()
    for title in ("byTechnology", "byCategory", "bySeverity"):
        table = Table(title=title)
        table.add_column("Key")
        table.add_column("Count", justify="right")
        for key, count in data[title].items():
            table.add_row(key, str(count))
        console.print(table)


@rules.command()
@click.pass_context
def check(ctx: click.Context) -> None:
    """Report rules whose pattern does not compile."""
    catalog = get_catalog(ctx)
    bad = 0
    for rule in catalog.rules():
        if rule.pattern == "":
            continue
        try:
            compile_rule(rule)
        except RulePatternError as e:
            bad += 1
            console.print(f"[red]{rule.code}[/red]: {e.error}")

    if bad:
        console.print(f"\n[red]{bad} invalid rule(s)[/red]")
        sys.exit(1)
    console.print("[green]All rule patterns compile.[/green]")


@rules.command()
@click.pass_context
def edit(ctx: click.Context) -> None:
    """Open the rule catalog in $EDITOR."""
    path = str(ctx.obj["catalog_path"])
    console.print(f"Opening diagnostic rules file [cyan]{path}[/cyan]")
    click.edit(filename=path)
