# ABOUTME: Raw single-statement persistence primitives for the Libris catalog.
# ABOUTME: Insert, select, and delete by key, each on its own short-lived connection.

import logging
import sqlite3
from pathlib import Path
from typing import Any

from libris.db.connection import connect, create_schema
from libris.db.schema import TABLE_COLUMNS, TABLE_ORDER
from libris.errors import AlreadyExists, DuplicateOrStoreError, StoreError

logger = logging.getLogger(__name__)


def _check_table(table: str) -> tuple[str, ...]:
    try:
        return TABLE_COLUMNS[table]
    except KeyError:
        raise ValueError(f"Unknown table '{table}'") from None


def _check_columns(table: str, columns) -> None:
    known = _check_table(table)
    for column in columns:
        if column not in known:
            raise ValueError(f"Unknown column '{column}' for table '{table}'")


def _where_clause(where: dict[str, Any], prefix: str = "") -> tuple[str, list[Any]]:
    if not where:
        return "", []
    clause = " AND ".join(f"{prefix}{column} = ?" for column in where)
    return f" WHERE {clause}", list(where.values())


def _order_clause(table: str, prefix: str = "") -> str:
    keys = TABLE_ORDER.get(table, ("id",))
    return " ORDER BY " + ", ".join(f"{prefix}{key}" for key in keys)


class CatalogStore:
    """Explicit handle on one catalog database.

    Holds only the database location. Every method opens a fresh connection,
    runs exactly one statement, and closes the connection again, so
    concurrent callers never share state through a store instance.
    """

    def __init__(self, db_path: Path) -> None:
        self.db_path = Path(db_path)

    def __repr__(self) -> str:
        return f"CatalogStore({str(self.db_path)!r})"

    def create_schema(self) -> None:
        """Create any missing tables. Safe to call repeatedly."""
        create_schema(self.db_path)

    def insert(
        self,
        table: str,
        values: dict[str, Any],
        requires: dict[str, str] | None = None,
    ) -> int:
        """Insert one row and return the number of affected rows.

        Args:
            table: Target table.
            values: Column to value mapping for the new row.
            requires: Column to referenced-table mapping. The insert only
                happens if every referenced row exists, checked within the
                same statement. A ``None`` value skips its check.

        Returns:
            The affected-row count: 1 on success, 0 if a required parent
            row was missing.

        Raises:
            AlreadyExists: If a primary-key or unique constraint is violated.
            DuplicateOrStoreError: If the insert fails for any other reason.
        """
        _check_columns(table, values)
        columns = ", ".join(values)
        placeholders = ", ".join("?" for _ in values)
        params = list(values.values())

        guards = []
        for column, parent in (requires or {}).items():
            _check_columns(table, [column])
            _check_table(parent)
            if values.get(column) is None:
                continue
            guards.append(f"EXISTS (SELECT 1 FROM {parent} WHERE id = ?)")
            params.append(values[column])

        if guards:
            sql = (
                f"INSERT INTO {table} ({columns}) SELECT {placeholders} "
                f"WHERE {' AND '.join(guards)}"
            )
        else:
            sql = f"INSERT INTO {table} ({columns}) VALUES ({placeholders})"

        with connect(self.db_path) as conn:
            try:
                affected = conn.execute(sql, params).rowcount
                conn.commit()
            except sqlite3.IntegrityError as exc:
                message = str(exc)
                if "UNIQUE constraint failed" in message or "PRIMARY KEY" in message:
                    raise AlreadyExists(f"Row already exists in {table}: {message}") from exc
                raise DuplicateOrStoreError(f"Could not insert into {table}: {message}") from exc
            except sqlite3.Error as exc:
                raise DuplicateOrStoreError(f"Could not insert into {table}: {exc}") from exc

        logger.debug("INSERT %s %s -> %d row(s)", table, values, affected)
        return affected

    def select_one(self, table: str, where: dict[str, Any]) -> sqlite3.Row | None:
        """Return the first matching row by key order, or None."""
        _check_columns(table, where)
        clause, params = _where_clause(where)
        sql = f"SELECT * FROM {table}{clause}{_order_clause(table)} LIMIT 1"
        with connect(self.db_path) as conn:
            try:
                return conn.execute(sql, params).fetchone()
            except sqlite3.Error as exc:
                raise StoreError(f"Could not read from {table}: {exc}") from exc

    def select_all(self, table: str, where: dict[str, Any] | None = None) -> list[sqlite3.Row]:
        """Return every matching row in ascending key order."""
        where = where or {}
        _check_columns(table, where)
        clause, params = _where_clause(where)
        sql = f"SELECT * FROM {table}{clause}{_order_clause(table)}"
        with connect(self.db_path) as conn:
            try:
                return conn.execute(sql, params).fetchall()
            except sqlite3.Error as exc:
                raise StoreError(f"Could not read from {table}: {exc}") from exc

    def select_linked(
        self,
        table: str,
        link_table: str,
        link_column: str,
        other_column: str,
        other_id: int,
    ) -> list[sqlite3.Row]:
        """Return rows of ``table`` joined through an association table.

        Selects every ``table`` row whose id appears in ``link_table.link_column``
        on a link row where ``other_column`` equals ``other_id``.
        """
        _check_columns(table, ["id"])
        _check_columns(link_table, [link_column, other_column])
        sql = (
            f"SELECT t.* FROM {table} t "
            f"JOIN {link_table} l ON t.id = l.{link_column} "
            f"WHERE l.{other_column} = ?"
            f"{_order_clause(table, prefix='t.')}"
        )
        with connect(self.db_path) as conn:
            try:
                return conn.execute(sql, (other_id,)).fetchall()
            except sqlite3.Error as exc:
                raise StoreError(f"Could not read {table} through {link_table}: {exc}") from exc

    def delete_one(self, table: str, where: dict[str, Any]) -> int:
        """Delete rows matching ``where`` and return the affected-row count.

        Callers interpret the count: 1 is success, 0 means not found, and
        anything above 1 means the key did not identify a single row.
        """
        if not where:
            raise ValueError("delete_one requires a key")
        _check_columns(table, where)
        clause, params = _where_clause(where)
        with connect(self.db_path) as conn:
            try:
                affected = conn.execute(f"DELETE FROM {table}{clause}", params).rowcount
                conn.commit()
            except sqlite3.Error as exc:
                raise StoreError(f"Could not delete from {table}: {exc}") from exc

        logger.debug("DELETE %s %s -> %d row(s)", table, where, affected)
        return affected
