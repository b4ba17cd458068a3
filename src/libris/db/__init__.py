# ABOUTME: Public API for the Libris catalog database layer.
# ABOUTME: Exports the store handle, connection helpers, and entity types.

from libris.db.connection import DEFAULT_DB_PATH, create_schema
from libris.db.mapping import (
    Author,
    Category,
    Document,
    DocumentGenre,
    DocumentRecord,
    DocumentTag,
    Genre,
    Series,
    Tag,
    User,
)
from libris.db.store import CatalogStore

__all__ = [
    "DEFAULT_DB_PATH",
    "Author",
    "CatalogStore",
    "Category",
    "Document",
    "DocumentGenre",
    "DocumentRecord",
    "DocumentTag",
    "Genre",
    "Series",
    "Tag",
    "User",
    "create_schema",
]
