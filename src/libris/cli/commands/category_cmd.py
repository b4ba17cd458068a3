# ABOUTME: The `libris category` command group for managing storage roots.
# ABOUTME: Provides add, ls, and rm subcommands for categories.

from pathlib import Path

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from libris.cli.options import db_option, open_catalog
from libris.errors import CatalogError

console = Console()


@click.group("category")
def category() -> None:
    """Manage categories (named root directories)."""


@category.command("add")
@click.argument("name")
@click.argument("path", type=click.Path(file_okay=False, path_type=Path))
@db_option
def category_add(name: str, path: Path, db_path: Path | None) -> None:
    """Add a category rooted at PATH. Relative paths are stored resolved."""
    try:
        catalog = open_catalog(db_path)
        added = catalog.categories.add(name, str(path.expanduser().resolve()))
    except CatalogError as exc:
        console.print(f"[red]{escape(str(exc))}[/red]")
        raise SystemExit(1) from exc

    console.print(
        f"Added category [bold]{escape(added.name)}[/bold] "
        f"(id {added.id}) at {escape(added.path)}."
    )


@category.command("ls")
@db_option
def category_ls(db_path: Path | None) -> None:
    """List all categories."""
    try:
        categories = open_catalog(db_path).categories.list()
    except CatalogError as exc:
        console.print(f"[red]{escape(str(exc))}[/red]")
        raise SystemExit(1) from exc

    if not categories:
        console.print("[yellow]No categories in the catalog.[/yellow]")
        return

    table = Table()
    table.add_column("ID", style="dim", width=4)
    table.add_column("Name", style="bold")
    table.add_column("Path")

    for entry in categories:
        table.add_row(str(entry.id), escape(entry.name), escape(entry.path))

    console.print(table)


@category.command("rm")
@click.argument("category_id", type=int)
@db_option
def category_rm(category_id: int, db_path: Path | None) -> None:
    """Remove a category. Its documents are kept."""
    try:
        open_catalog(db_path).categories.remove(category_id)
    except CatalogError as exc:
        console.print(f"[red]{escape(str(exc))}[/red]")
        raise SystemExit(1) from exc

    console.print(f"Removed category {category_id}.")
