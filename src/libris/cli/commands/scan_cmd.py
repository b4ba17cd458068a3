# ABOUTME: The `libris scan` command for reconciling a category with its directory.
# ABOUTME: Reports files not yet cataloged and documents whose file is gone.

import json as json_lib
from pathlib import Path

import click
from rich.console import Console
from rich.markup import escape

from libris.cli.options import db_option, open_catalog
from libris.core.scanner import DEFAULT_EXTENSIONS, ScanReport, scan_category
from libris.errors import CatalogError

console = Console()


@click.command("scan")
@click.argument("category_id", type=int)
@click.option(
    "--ext",
    "extensions",
    multiple=True,
    help=f"Extension to include; repeatable (default: {', '.join(DEFAULT_EXTENSIONS)}).",
)
@click.option(
    "--json",
    "json_output",
    is_flag=True,
    default=False,
    help="Output results as JSON.",
)
@db_option
def scan(
    category_id: int, extensions: tuple[str, ...], json_output: bool, db_path: Path | None
) -> None:
    """Compare a category's directory against the catalog.

    Exits with status 1 when any file is uncataloged or any document is missing.
    """
    try:
        catalog = open_catalog(db_path)
        category = catalog.categories.get_by_id(category_id)
        if category is None:
            console.print(f"[red]Category {category_id} not found.[/red]")
            raise SystemExit(1)
        report = scan_category(catalog.documents, category, extensions or DEFAULT_EXTENSIONS)
    except CatalogError as exc:
        console.print(f"[red]{escape(str(exc))}[/red]")
        raise SystemExit(1) from exc

    if json_output:
        _print_json(report)
    else:
        _print_rich(report)

    if not report.in_sync:
        raise SystemExit(1)


def _print_json(report: ScanReport) -> None:
    """Print the scan report as JSON."""
    data = {
        "category": {
            "id": report.category.id,
            "name": report.category.name,
            "path": report.category.path,
        },
        "uncataloged": report.uncataloged,
        "missing": [
            {"id": document.id, "name": document.name, "path": document.path}
            for document in report.missing
        ],
    }
    click.echo(json_lib.dumps(data, indent=2))


def _print_rich(report: ScanReport) -> None:
    """Print the scan report with Rich formatting."""
    name = escape(report.category.name)
    if report.in_sync:
        console.print(f"[green]Category {name} is in sync with disk.[/green]")
        return

    if report.uncataloged:
        console.print(f"[yellow]{len(report.uncataloged)} uncataloged file(s):[/yellow]")
        for path in report.uncataloged:
            console.print(f"  {escape(path)}")

    if report.missing:
        console.print(f"[red]{len(report.missing)} document(s) missing on disk:[/red]")
        for document in report.missing:
            console.print(
                f"  [dim]{document.id}[/dim] {escape(document.name)} ({escape(document.path)})"
            )
