# ABOUTME: SQLite connection management for the Libris catalog.
# ABOUTME: Opens short-lived connections per operation and applies the idempotent schema.

import logging
import sqlite3
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

from libris.db.schema import SCHEMA
from libris.errors import StoreError, StoreUnavailable

logger = logging.getLogger(__name__)

DEFAULT_DB_PATH = Path.home() / ".libris" / "catalog.db"


def _database_uri(path: Path, mode: str) -> str:
    return f"{path.expanduser().resolve().as_uri()}?mode={mode}"


def open_connection(path: Path, *, create: bool = False) -> sqlite3.Connection:
    """Open a connection to the catalog database.

    The file must already exist unless ``create`` is set. Foreign keys are
    declared in the schema but not enforced: removing a parent row leaves
    dangling references instead of failing or cascading.

    Raises:
        StoreUnavailable: If the database file cannot be opened.
    """
    mode = "rwc" if create else "rw"
    try:
        conn = sqlite3.connect(_database_uri(path, mode), uri=True)
    except sqlite3.Error as exc:
        raise StoreUnavailable(f"Could not open catalog database {path}: {exc}") from exc

    conn.row_factory = sqlite3.Row
    return conn


@contextmanager
def connect(path: Path, *, create: bool = False) -> Iterator[sqlite3.Connection]:
    """Yield a connection that is closed when the block exits."""
    conn = open_connection(path, create=create)
    try:
        yield conn
    finally:
        conn.close()


def create_schema(path: Path) -> None:
    """Create the catalog database and every table that is missing.

    Creates parent directories if needed. Safe to run against an existing
    catalog: every statement is ``IF NOT EXISTS``.

    Raises:
        StoreUnavailable: If the database file cannot be created or opened.
        StoreError: If the DDL batch fails.
    """
    db_path = path.expanduser()
    try:
        db_path.parent.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise StoreUnavailable(f"Could not create directory for {db_path}: {exc}") from exc

    with connect(db_path, create=True) as conn:
        try:
            conn.execute("PRAGMA journal_mode=WAL")
            conn.executescript(SCHEMA)
        except sqlite3.Error as exc:
            raise StoreError(f"An error occurred while initializing the catalog: {exc}") from exc

    logger.debug("Schema applied to %s", db_path)
