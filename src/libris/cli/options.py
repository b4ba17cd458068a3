# ABOUTME: Shared Click options and catalog bootstrap for Libris CLI commands.
# ABOUTME: Resolves the database location once per invocation from --db or LIBRIS_DB.

from pathlib import Path

import click

from libris.catalog import Catalog
from libris.db.connection import DEFAULT_DB_PATH

db_option = click.option(
    "--db",
    "db_path",
    type=click.Path(dir_okay=False, path_type=Path),
    envvar="LIBRIS_DB",
    default=None,
    help=f"Path to catalog database (default: {DEFAULT_DB_PATH}, env: LIBRIS_DB)",
)


def open_catalog(db_path: Path | None) -> Catalog:
    """Build a Catalog for the chosen database, creating missing tables."""
    catalog = Catalog(db_path or DEFAULT_DB_PATH)
    catalog.create_schema()
    return catalog
