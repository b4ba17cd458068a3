# ABOUTME: The `libris init` command for creating the catalog database.
# ABOUTME: Applies the idempotent schema at the configured location.

from pathlib import Path

import click
from rich.console import Console
from rich.markup import escape

from libris.catalog import Catalog
from libris.cli.options import db_option
from libris.db.connection import DEFAULT_DB_PATH
from libris.errors import CatalogError

console = Console()


@click.command("init")
@db_option
def init(db_path: Path | None) -> None:
    """Create the catalog database if it does not exist."""
    catalog = Catalog(db_path or DEFAULT_DB_PATH)
    try:
        catalog.create_schema()
    except CatalogError as exc:
        console.print(f"[red]{escape(str(exc))}[/red]")
        raise SystemExit(1) from exc

    console.print(f"Catalog ready at [bold]{escape(str(catalog.db_path))}[/bold].")
