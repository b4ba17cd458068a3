# ABOUTME: Document catalog operations: add, remove, lookups, and filtered listings.
# ABOUTME: Documents are hydrated on read, resolving category, author, and series ids.

from __future__ import annotations

import datetime
import logging
from pathlib import PurePosixPath
from typing import Any

from libris.db.mapping import Document, DocumentRecord, row_to_document_record
from libris.db.store import CatalogStore
from libris.services.base import EntityService
from libris.services.entities import AuthorService, CategoryService, SeriesService

logger = logging.getLogger(__name__)


class DocumentService(EntityService[Document]):
    """Typed operations on the document table.

    Author and series ids are trusted as already resolved by the caller;
    only the category is checked on insert. Nothing cascades on delete:
    reads tolerate references to rows that no longer exist.
    """

    table = "document"
    label = "document"
    mapper = staticmethod(row_to_document_record)

    def __init__(
        self,
        store: CatalogStore,
        categories: CategoryService,
        authors: AuthorService,
        series: SeriesService,
    ) -> None:
        super().__init__(store)
        self._categories = categories
        self._authors = authors
        self._series = series

    def _map(self, row: Any) -> Document:
        return self.hydrate(row_to_document_record(row))

    def hydrate(self, record: DocumentRecord) -> Document:
        """Resolve a stored document's foreign keys into entity values.

        A stored id whose row is gone resolves to None instead of failing
        the whole read.
        """
        category = self._categories.get_by_id(record.category_id)
        if category is None:
            logger.warning(
                "Document %d references missing category %d", record.id, record.category_id
            )

        author = None
        if record.author_id is not None:
            author = self._authors.get_by_id(record.author_id)
            if author is None:
                logger.warning(
                    "Document %d references missing author %d", record.id, record.author_id
                )

        series = None
        if record.series_id is not None:
            series = self._series.get_by_id(record.series_id)
            if series is None:
                logger.warning(
                    "Document %d references missing series %d", record.id, record.series_id
                )

        return Document(
            id=record.id,
            name=record.name,
            category=category,
            author=author,
            series=series,
            date=record.date,
            path=record.path,
        )

    def add(
        self,
        name: str,
        category_id: int,
        *,
        date: datetime.date,
        path: str,
        author_id: int | None = None,
        series_id: int | None = None,
    ) -> Document:
        """Add a document stored under a category.

        Args:
            name: Display name, also the key used to re-read the new row.
            category_id: Id of an existing category.
            date: Calendar date of the document. A datetime is truncated.
            path: File path relative to the category root. Stored in
                normalised POSIX form, so "./a.epub" is kept as "a.epub".
            author_id: Optional id of the author.
            series_id: Optional id of the series.

        Raises:
            DanglingReference: If the category does not exist.
            NotFoundAfterInsert: If the new row vanished before it was re-read.
        """
        if isinstance(date, datetime.datetime):
            date = date.date()
        return self._insert_and_fetch(
            {
                "name": name,
                "category": category_id,
                "author": author_id,
                "series": series_id,
                "date": date.isoformat(),
                "path": PurePosixPath(path).as_posix(),
            },
            requires={"category": "category"},
        )

    def get_by_name(self, name: str) -> Document | None:
        return self._get_by_key(name)

    def list_all(self) -> list[Document]:
        return self.list()

    def list_records(self) -> list[DocumentRecord]:
        """Return every document row without hydration, in id order."""
        return [row_to_document_record(row) for row in self._store.select_all(self.table)]

    def list_by_author(self, author_id: int) -> list[Document]:
        return self._list_where({"author": author_id})

    def list_by_series(self, series_id: int) -> list[Document]:
        return self._list_where({"series": series_id})

    def list_by_category(self, category_id: int) -> list[Document]:
        return self._list_where({"category": category_id})

    def list_by_tag(self, tag_id: int) -> list[Document]:
        """Return documents linked to a tag, in id order."""
        rows = self._store.select_linked(self.table, "document_tag", "document", "tag", tag_id)
        return [self._map(row) for row in rows]

    def list_by_genre(self, genre_id: int) -> list[Document]:
        """Return documents linked to a genre, in id order."""
        rows = self._store.select_linked(
            self.table, "document_genre", "document", "genre", genre_id
        )
        return [self._map(row) for row in rows]

    def _list_where(self, where: dict[str, Any]) -> list[Document]:
        return [self._map(row) for row in self._store.select_all(self.table, where)]
