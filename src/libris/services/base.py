# ABOUTME: Shared add/remove/lookup protocol for catalog entity services.
# ABOUTME: Implements insert-then-refetch creation and single-row delete checks.

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any, Generic, TypeVar

from libris.db.store import CatalogStore
from libris.errors import (
    AmbiguousDelete,
    CatalogIntegrityError,
    DanglingReference,
    NotFound,
    NotFoundAfterInsert,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")


def check_single_delete(affected: int, description: str) -> None:
    """Map a delete's affected-row count to success or a typed error.

    Raises:
        NotFound: If no row was deleted.
        AmbiguousDelete: If more than one row was deleted.
    """
    if affected == 0:
        raise NotFound(f"{description} not found")
    if affected > 1:
        raise AmbiguousDelete(f"Deleting {description} removed {affected} rows")


class EntityService(Generic[T]):
    """Uniform add/remove/get/list operations over one entity table.

    Subclasses set ``table``, ``label``, and ``mapper``; ``key`` is the
    natural key used to re-read a row after it is inserted.
    """

    table: str
    label: str
    key: str = "name"
    mapper: Callable[[Any], T]

    def __init__(self, store: CatalogStore) -> None:
        self._store = store

    def _map(self, row: Any) -> T:
        return self.mapper(row)

    def _insert_and_fetch(self, values: dict[str, Any], requires: dict[str, str] | None = None) -> T:
        """Insert a row, then re-read it by natural key to learn its id.

        The two steps are separate statements. A concurrent delete between
        them surfaces as NotFoundAfterInsert.
        """
        affected = self._store.insert(self.table, values, requires)
        if affected == 0 and requires:
            missing = ", ".join(
                f"{parent} {values[column]}"
                for column, parent in requires.items()
                if values.get(column) is not None
            )
            raise DanglingReference(
                f"Could not add {self.label} {values[self.key]!r}: no such {missing}"
            )
        if affected != 1:
            raise CatalogIntegrityError(
                f"Adding {self.label} {values[self.key]!r} affected {affected} rows"
            )

        row = self._store.select_one(self.table, {self.key: values[self.key]})
        if row is None:
            raise NotFoundAfterInsert(
                f"Newly created {self.label} {values[self.key]!r} could not be found"
            )
        entity = self._map(row)
        logger.debug("Added %s %r", self.label, entity)
        return entity

    def remove(self, entity_id: int) -> None:
        """Delete one row by id. Rows that reference it are left in place.

        Raises:
            NotFound: If no row has this id.
            AmbiguousDelete: If more than one row was deleted.
        """
        affected = self._store.delete_one(self.table, {"id": entity_id})
        check_single_delete(affected, f"{self.label.capitalize()} {entity_id}")
        logger.info("Removed %s %d", self.label, entity_id)

    def get_by_id(self, entity_id: int) -> T | None:
        row = self._store.select_one(self.table, {"id": entity_id})
        return self._map(row) if row else None

    def _get_by_key(self, value: Any) -> T | None:
        # Natural keys are not unique in the schema; the oldest row wins.
        row = self._store.select_one(self.table, {self.key: value})
        return self._map(row) if row else None

    def list(self) -> list[T]:
        """Return every row in creation (ascending id) order."""
        return [self._map(row) for row in self._store.select_all(self.table)]
