# ABOUTME: The `libris series` command group for managing series.
# ABOUTME: Provides add, ls (optionally per author), and rm subcommands.

from pathlib import Path

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from libris.cli.options import db_option, open_catalog
from libris.errors import CatalogError

console = Console()


@click.group("series")
def series() -> None:
    """Manage series."""


@series.command("add")
@click.argument("name")
@click.argument("author_id", type=int)
@db_option
def series_add(name: str, author_id: int, db_path: Path | None) -> None:
    """Add a series written by AUTHOR_ID."""
    try:
        added = open_catalog(db_path).series.add(name, author_id)
    except CatalogError as exc:
        console.print(f"[red]{escape(str(exc))}[/red]")
        raise SystemExit(1) from exc

    console.print(f"Added series [bold]{escape(added.name)}[/bold] (id {added.id}).")


@series.command("ls")
@click.option("--author", "author_id", type=int, default=None, help="Only series by this author id.")
@db_option
def series_ls(author_id: int | None, db_path: Path | None) -> None:
    """List series."""
    try:
        catalog = open_catalog(db_path)
        if author_id is not None:
            entries = catalog.series.list_by_author(author_id)
        else:
            entries = catalog.series.list()
        author_names = {entry.id: entry.name for entry in catalog.authors.list()}
    except CatalogError as exc:
        console.print(f"[red]{escape(str(exc))}[/red]")
        raise SystemExit(1) from exc

    if not entries:
        console.print("[yellow]No series in the catalog.[/yellow]")
        return

    table = Table()
    table.add_column("ID", style="dim", width=4)
    table.add_column("Name", style="bold")
    table.add_column("Author")

    for entry in entries:
        author_name = author_names.get(entry.author_id)
        table.add_row(
            str(entry.id),
            escape(entry.name),
            escape(author_name) if author_name else "[dim]missing[/dim]",
        )

    console.print(table)


@series.command("rm")
@click.argument("series_id", type=int)
@db_option
def series_rm(series_id: int, db_path: Path | None) -> None:
    """Remove a series. Its documents are kept."""
    try:
        open_catalog(db_path).series.remove(series_id)
    except CatalogError as exc:
        console.print(f"[red]{escape(str(exc))}[/red]")
        raise SystemExit(1) from exc

    console.print(f"Removed series {series_id}.")
