# ABOUTME: The `libris add`, `ls`, `info`, and `rm` commands for cataloged documents.
# ABOUTME: Lists are filterable by author, series, category, tag, or genre.

import datetime
from pathlib import Path

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from libris.cli.options import db_option, open_catalog
from libris.errors import CatalogError

console = Console()


@click.command("add")
@click.argument("name")
@click.option("--category", "category_id", type=int, required=True, help="Category id.")
@click.option("--path", "doc_path", required=True, help="File path relative to the category root.")
@click.option(
    "--date",
    "doc_date",
    type=click.DateTime(formats=["%Y-%m-%d"]),
    default=None,
    help="Document date as YYYY-MM-DD (default: today).",
)
@click.option("--author", "author_id", type=int, default=None, help="Author id.")
@click.option("--series", "series_id", type=int, default=None, help="Series id.")
@db_option
def add(
    name: str,
    category_id: int,
    doc_path: str,
    doc_date: datetime.datetime | None,
    author_id: int | None,
    series_id: int | None,
    db_path: Path | None,
) -> None:
    """Add a document to the catalog."""
    try:
        document = open_catalog(db_path).documents.add(
            name,
            category_id,
            date=doc_date.date() if doc_date else datetime.date.today(),
            path=doc_path,
            author_id=author_id,
            series_id=series_id,
        )
    except CatalogError as exc:
        console.print(f"[red]{escape(str(exc))}[/red]")
        raise SystemExit(1) from exc

    console.print(f"Added [bold]{escape(document.name)}[/bold] (id {document.id}).")


@click.command("ls")
@click.option("--author", "author_id", type=int, default=None, help="Filter by author id.")
@click.option("--series", "series_id", type=int, default=None, help="Filter by series id.")
@click.option("--category", "category_id", type=int, default=None, help="Filter by category id.")
@click.option("--tag", "tag_id", type=int, default=None, help="Filter by tag id.")
@click.option("--genre", "genre_id", type=int, default=None, help="Filter by genre id.")
@db_option
def ls(
    author_id: int | None,
    series_id: int | None,
    category_id: int | None,
    tag_id: int | None,
    genre_id: int | None,
    db_path: Path | None,
) -> None:
    """List cataloged documents."""
    filters = [f for f in (author_id, series_id, category_id, tag_id, genre_id) if f is not None]
    if len(filters) > 1:
        raise click.UsageError("Use at most one filter option.")

    try:
        documents = open_catalog(db_path).documents
        if author_id is not None:
            records = documents.list_by_author(author_id)
        elif series_id is not None:
            records = documents.list_by_series(series_id)
        elif category_id is not None:
            records = documents.list_by_category(category_id)
        elif tag_id is not None:
            records = documents.list_by_tag(tag_id)
        elif genre_id is not None:
            records = documents.list_by_genre(genre_id)
        else:
            records = documents.list_all()
    except CatalogError as exc:
        console.print(f"[red]{escape(str(exc))}[/red]")
        raise SystemExit(1) from exc

    if not records:
        console.print("[yellow]No documents in the catalog.[/yellow]")
        return

    table = Table()
    table.add_column("ID", style="dim", width=4)
    table.add_column("Name", style="bold")
    table.add_column("Author")
    table.add_column("Series")
    table.add_column("Category")
    table.add_column("Date", width=10)

    for record in records:
        table.add_row(
            str(record.id),
            escape(record.name),
            escape(record.author.name) if record.author else "[dim]unknown[/dim]",
            escape(record.series.name) if record.series else "",
            escape(record.category.name) if record.category else "[dim]missing[/dim]",
            record.date.isoformat(),
        )

    console.print(table)
    console.print(f"\n[dim]{len(records)} document(s)[/dim]")


@click.command("info")
@click.argument("document_id", type=int)
@db_option
def info(document_id: int, db_path: Path | None) -> None:
    """Show details for a document by ID."""
    try:
        catalog = open_catalog(db_path)
        document = catalog.documents.get_by_id(document_id)
        if document is not None:
            tags = catalog.document_tags.list_for_document(document_id)
            genres = catalog.document_genres.list_for_document(document_id)
    except CatalogError as exc:
        console.print(f"[red]{escape(str(exc))}[/red]")
        raise SystemExit(1) from exc

    if document is None:
        console.print(f"[red]Document {document_id} not found.[/red]")
        raise SystemExit(1)

    table = Table(show_header=False, box=None, pad_edge=False)
    table.add_column("Field", style="bold", width=10)
    table.add_column("Value")

    table.add_row("ID", str(document.id))
    table.add_row("Name", escape(document.name))
    table.add_row(
        "Category", escape(document.category.name) if document.category else "[dim]missing[/dim]"
    )
    table.add_row("Author", escape(document.author.name) if document.author else "unknown")
    if document.series:
        table.add_row("Series", escape(document.series.name))
    table.add_row("Date", document.date.isoformat())
    table.add_row("Path", escape(document.path))
    if tags:
        table.add_row("Tags", escape(", ".join(tag.name for tag in tags)))
    if genres:
        table.add_row("Genres", escape(", ".join(genre.name for genre in genres)))

    console.print(table)


@click.command("rm")
@click.argument("document_id", type=int)
@db_option
def rm(document_id: int, db_path: Path | None) -> None:
    """Remove a document from the catalog. The file is not touched."""
    try:
        open_catalog(db_path).documents.remove(document_id)
    except CatalogError as exc:
        console.print(f"[red]{escape(str(exc))}[/red]")
        raise SystemExit(1) from exc

    console.print(f"Removed document {document_id}.")
