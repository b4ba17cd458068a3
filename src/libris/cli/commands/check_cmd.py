# ABOUTME: The `libris check` command for finding dangling references.
# ABOUTME: Lists documents, series, and links that point at deleted rows.

import json as json_lib
from pathlib import Path

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from libris.cli.options import db_option, open_catalog
from libris.core.integrity import IntegrityReport, find_dangling_references
from libris.errors import CatalogError

console = Console()


@click.command("check")
@click.option(
    "--json",
    "json_output",
    is_flag=True,
    default=False,
    help="Output results as JSON.",
)
@db_option
def check(json_output: bool, db_path: Path | None) -> None:
    """Check the catalog for references to deleted rows."""
    try:
        report = find_dangling_references(open_catalog(db_path))
    except CatalogError as exc:
        console.print(f"[red]{escape(str(exc))}[/red]")
        raise SystemExit(1) from exc

    if json_output:
        _print_json(report)
    else:
        _print_rich(report)

    if report.total_issues > 0:
        raise SystemExit(1)


def _print_json(report: IntegrityReport) -> None:
    data = {
        "ok": report.ok,
        "total_issues": report.total_issues,
        "missing_category": [record.id for record in report.missing_category],
        "missing_author": [record.id for record in report.missing_author],
        "missing_series": [record.id for record in report.missing_series],
        "orphaned_series": [entry.id for entry in report.orphaned_series],
        "dangling_tag_links": [[link.document_id, link.tag_id] for link in report.dangling_tag_links],
        "dangling_genre_links": [
            [link.document_id, link.genre_id] for link in report.dangling_genre_links
        ],
    }
    click.echo(json_lib.dumps(data, indent=2))


def _print_rich(report: IntegrityReport) -> None:
    if report.total_issues == 0:
        console.print(f"[green]All {report.ok} document(s) verified.[/green]")
        return

    table = Table()
    table.add_column("Row", style="bold")
    table.add_column("Issue", style="red")

    for record in report.missing_category:
        table.add_row(f"document {record.id}", f"Missing category {record.category_id}")
    for record in report.missing_author:
        table.add_row(f"document {record.id}", f"Missing author {record.author_id}")
    for record in report.missing_series:
        table.add_row(f"document {record.id}", f"Missing series {record.series_id}")
    for entry in report.orphaned_series:
        table.add_row(f"series {entry.id}", f"Missing author {entry.author_id}")
    for link in report.dangling_tag_links:
        table.add_row(f"document_tag {link.document_id}/{link.tag_id}", "Dangling link")
    for link in report.dangling_genre_links:
        table.add_row(f"document_genre {link.document_id}/{link.genre_id}", "Dangling link")

    console.print(table)
    console.print(
        f"\n[red]{report.total_issues} issue(s) found, {report.ok} document(s) verified.[/red]"
    )
