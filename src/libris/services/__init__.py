# ABOUTME: Public API for the Libris entity, document, and association services.
# ABOUTME: Services compose the store's single-statement primitives into named operations.

from libris.services.associations import DocumentGenreService, DocumentTagService
from libris.services.documents import DocumentService
from libris.services.entities import (
    AuthorService,
    CategoryService,
    GenreService,
    SeriesService,
    TagService,
)
from libris.services.users import UserService

__all__ = [
    "AuthorService",
    "CategoryService",
    "DocumentGenreService",
    "DocumentService",
    "DocumentTagService",
    "GenreService",
    "SeriesService",
    "TagService",
    "UserService",
]
