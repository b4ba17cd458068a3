# ABOUTME: The `libris tag` and `libris genre` command groups.
# ABOUTME: Both manage a named label and its links to documents with identical subcommands.

from pathlib import Path

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from libris.catalog import Catalog
from libris.cli.options import db_option, open_catalog
from libris.errors import CatalogError

console = Console()


def _label_group(kind: str, entities: str, links: str) -> click.Group:
    """Build the command group for one label kind.

    ``entities`` and ``links`` name the Catalog attributes holding the entity
    service and the document link service for this kind.
    """

    def entity_service(catalog: Catalog):
        return getattr(catalog, entities)

    def link_service(catalog: Catalog):
        return getattr(catalog, links)

    @click.group(kind, help=f"Manage {kind}s and their links to documents.")
    def group() -> None:
        pass

    @group.command("add", help=f"Add a {kind}.")
    @click.argument("name")
    @db_option
    def label_add(name: str, db_path: Path | None) -> None:
        try:
            added = entity_service(open_catalog(db_path)).add(name)
        except CatalogError as exc:
            console.print(f"[red]{escape(str(exc))}[/red]")
            raise SystemExit(1) from exc

        console.print(f"Added {kind} [cyan]{escape(added.name)}[/cyan] (id {added.id}).")

    @group.command("ls", help=f"List all {kind}s.")
    @db_option
    def label_ls(db_path: Path | None) -> None:
        try:
            labels = entity_service(open_catalog(db_path)).list()
        except CatalogError as exc:
            console.print(f"[red]{escape(str(exc))}[/red]")
            raise SystemExit(1) from exc

        if not labels:
            console.print(f"[yellow]No {kind}s in the catalog.[/yellow]")
            return

        table = Table()
        table.add_column("ID", style="dim", width=4)
        table.add_column(kind.capitalize(), style="cyan")

        for label in labels:
            table.add_row(str(label.id), escape(label.name))

        console.print(table)

    @group.command("rm", help=f"Remove a {kind}. Its document links are kept.")
    @click.argument("label_id", type=int)
    @db_option
    def label_rm(label_id: int, db_path: Path | None) -> None:
        try:
            entity_service(open_catalog(db_path)).remove(label_id)
        except CatalogError as exc:
            console.print(f"[red]{escape(str(exc))}[/red]")
            raise SystemExit(1) from exc

        console.print(f"Removed {kind} {label_id}.")

    @group.command("link", help=f"Link a document to a {kind}.")
    @click.argument("document_id", type=int)
    @click.argument("label_id", type=int)
    @db_option
    def label_link(document_id: int, label_id: int, db_path: Path | None) -> None:
        try:
            link_service(open_catalog(db_path)).link(document_id, label_id)
        except CatalogError as exc:
            console.print(f"[red]{escape(str(exc))}[/red]")
            raise SystemExit(1) from exc

        console.print(f"Linked document {document_id} to {kind} {label_id}.")

    @group.command("unlink", help=f"Unlink a document from a {kind}.")
    @click.argument("document_id", type=int)
    @click.argument("label_id", type=int)
    @db_option
    def label_unlink(document_id: int, label_id: int, db_path: Path | None) -> None:
        try:
            removed = link_service(open_catalog(db_path)).unlink(document_id, label_id)
        except CatalogError as exc:
            console.print(f"[red]{escape(str(exc))}[/red]")
            raise SystemExit(1) from exc

        if removed:
            console.print(f"Unlinked document {document_id} from {kind} {label_id}.")
        else:
            console.print(f"[dim]Document {document_id} was not linked to {kind} {label_id}.[/dim]")

    return group


tag = _label_group("tag", "tags", "document_tags")
genre = _label_group("genre", "genres", "document_genres")
