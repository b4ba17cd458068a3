# ABOUTME: Many-to-many links between documents and their tags or genres.
# ABOUTME: Linking is strict (no duplicates, no dangling ends); unlinking is idempotent.

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any, Generic, TypeVar

from libris.db.mapping import (
    DocumentGenre,
    DocumentTag,
    Genre,
    Tag,
    row_to_document_genre,
    row_to_document_tag,
    row_to_genre,
    row_to_tag,
)
from libris.db.store import CatalogStore
from libris.errors import (
    AlreadyExists,
    AlreadyLinked,
    AmbiguousDelete,
    CatalogIntegrityError,
    DanglingReference,
    NotFoundAfterInsert,
)

logger = logging.getLogger(__name__)

L = TypeVar("L")
E = TypeVar("E")


class LinkService(Generic[L, E]):
    """Document links stored in one association table.

    ``other`` names both the linked entity table and its column in the
    association table.
    """

    link_table: str
    other: str
    link_mapper: Callable[[Any], L]
    entity_mapper: Callable[[Any], E]

    def __init__(self, store: CatalogStore) -> None:
        self._store = store

    def _key(self, document_id: int, other_id: int) -> dict[str, int]:
        return {"document": document_id, self.other: other_id}

    def link(self, document_id: int, other_id: int) -> L:
        """Link a document to an entity and return the stored pair.

        Raises:
            AlreadyLinked: If the pair is already linked.
            DanglingReference: If the document or the entity does not exist.
            NotFoundAfterInsert: If the pair vanished before it was re-read.
        """
        key = self._key(document_id, other_id)
        try:
            affected = self._store.insert(
                self.link_table,
                key,
                requires={"document": "document", self.other: self.other},
            )
        except AlreadyExists as exc:
            raise AlreadyLinked(
                f"Document {document_id} is already linked to {self.other} {other_id}"
            ) from exc

        if affected == 0:
            raise DanglingReference(
                f"Could not link document {document_id} to {self.other} {other_id}: "
                "one of them does not exist"
            )
        if affected != 1:
            raise CatalogIntegrityError(
                f"Linking document {document_id} to {self.other} {other_id} "
                f"affected {affected} rows"
            )

        link = self.get(document_id, other_id)
        if link is None:
            raise NotFoundAfterInsert(
                f"Link between document {document_id} and {self.other} {other_id} "
                "could not be found after insert"
            )
        logger.debug("Linked document %d to %s %d", document_id, self.other, other_id)
        return link

    def unlink(self, document_id: int, other_id: int) -> bool:
        """Remove a link. Unlinking a pair that is not linked is not an error.

        Returns:
            True if a link was removed, False if there was nothing to remove.

        Raises:
            AmbiguousDelete: If more than one row matched the pair.
        """
        affected = self._store.delete_one(self.link_table, self._key(document_id, other_id))
        if affected > 1:
            raise AmbiguousDelete(
                f"Unlinking document {document_id} from {self.other} {other_id} "
                f"removed {affected} rows"
            )
        if affected == 0:
            logger.debug(
                "Document %d was not linked to %s %d", document_id, self.other, other_id
            )
        return affected == 1

    def get(self, document_id: int, other_id: int) -> L | None:
        row = self._store.select_one(self.link_table, self._key(document_id, other_id))
        return self.link_mapper(row) if row else None

    def list_links(self) -> list[L]:
        """Return every stored pair, ordered by document then entity id."""
        return [self.link_mapper(row) for row in self._store.select_all(self.link_table)]

    def list_for_document(self, document_id: int) -> list[E]:
        """Return the entities linked to a document, in id order."""
        rows = self._store.select_linked(
            self.other, self.link_table, self.other, "document", document_id
        )
        return [self.entity_mapper(row) for row in rows]


class DocumentTagService(LinkService[DocumentTag, Tag]):
    link_table = "document_tag"
    other = "tag"
    link_mapper = staticmethod(row_to_document_tag)
    entity_mapper = staticmethod(row_to_tag)


class DocumentGenreService(LinkService[DocumentGenre, Genre]):
    link_table = "document_genre"
    other = "genre"
    link_mapper = staticmethod(row_to_document_genre)
    entity_mapper = staticmethod(row_to_genre)
