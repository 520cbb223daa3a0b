"""CLI entry point — Click group with global options."""

from __future__ import annotations

import logging

import click

from nsdiag import __version__
from nsdiag.catalog.loader import default_catalog_path, load_catalog
from nsdiag.catalog.models import RuleCatalog
from nsdiag.config import NsDiagConfig
from nsdiag.errors import CatalogLoadError


@click.group()
@click.version_option(version=__version__, prog_name="nsdiag")
@click.option(
    "--catalog",
    "-c",
    type=click.Path(dir_okay=False),
    help="Path to a JSON or YAML rule catalog.",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.pass_context
def main(ctx: click.Context, catalog: str | None, verbose: bool) -> None:
    """nsdiag — pattern diagnostics for NetScaler configuration files."""
    ctx.ensure_object(dict)
    config = NsDiagConfig.load()
    config.verbose = verbose
    ctx.obj["config"] = config
    ctx.obj["catalog_path"] = catalog or config.catalog_path or default_catalog_path()

    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )


def get_catalog(ctx: click.Context) -> RuleCatalog:
    """Load the catalog selected on the command line, failing once and clearly."""
    try:
        return load_catalog(ctx.obj["catalog_path"])
    except CatalogLoadError as e:
        raise click.ClickException(str(e)) from e


def _register_commands() -> None:
    from nsdiag.cli.rules import rules  # noqa: F811
    from nsdiag.cli.scan import scan  # noqa: F811

    main.add_command(scan)
    main.add_command(rules)


_register_commands()
