# ABOUTME: The `libris author` command group for managing authors.
# ABOUTME: Provides add, ls, and rm subcommands for authors.

from pathlib import Path

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from libris.cli.options import db_option, open_catalog
from libris.errors import CatalogError

console = Console()


@click.group("author")
def author() -> None:
    """Manage authors."""


@author.command("add")
@click.argument("name")
@db_option
def author_add(name: str, db_path: Path | None) -> None:
    """Add an author."""
    try:
        added = open_catalog(db_path).authors.add(name)
    except CatalogError as exc:
        console.print(f"[red]{escape(str(exc))}[/red]")
        raise SystemExit(1) from exc

    console.print(f"Added author [bold]{escape(added.name)}[/bold] (id {added.id}).")


@author.command("ls")
@db_option
def author_ls(db_path: Path | None) -> None:
    """List all authors."""
    try:
        authors = open_catalog(db_path).authors.list()
    except CatalogError as exc:
        console.print(f"[red]{escape(str(exc))}[/red]")
        raise SystemExit(1) from exc

    if not authors:
        console.print("[yellow]No authors in the catalog.[/yellow]")
        return

    table = Table()
    table.add_column("ID", style="dim", width=4)
    table.add_column("Name", style="bold")

    for entry in authors:
        table.add_row(str(entry.id), escape(entry.name))

    console.print(table)


@author.command("rm")
@click.argument("author_id", type=int)
@db_option
def author_rm(author_id: int, db_path: Path | None) -> None:
    """Remove an author. Their documents and series are kept."""
    try:
        open_catalog(db_path).authors.remove(author_id)
    except CatalogError as exc:
        console.print(f"[red]{escape(str(exc))}[/red]")
        raise SystemExit(1) from exc

    console.print(f"Removed author {author_id}.")
