# ABOUTME: The Catalog facade bundling the store handle and every service.
# ABOUTME: One Catalog per database location; it holds no connection between calls.

from pathlib import Path

from libris.db.store import CatalogStore
from libris.services import (
    AuthorService,
    CategoryService,
    DocumentGenreService,
    DocumentService,
    DocumentTagService,
    GenreService,
    SeriesService,
    TagService,
    UserService,
)


class Catalog:
    """Entry point to the catalog core for one database file.

    Example:
        catalog = Catalog(Path("catalog.db"))
        catalog.create_schema()
        books = catalog.categories.add("Books", "~/Documents/Books")
    """

    def __init__(self, db_path: Path) -> None:
        self.store = CatalogStore(db_path)
        self.authors = AuthorService(self.store)
        self.series = SeriesService(self.store)
        self.categories = CategoryService(self.store)
        self.genres = GenreService(self.store)
        self.tags = TagService(self.store)
        self.documents = DocumentService(self.store, self.categories, self.authors, self.series)
        self.document_tags = DocumentTagService(self.store)
        self.document_genres = DocumentGenreService(self.store)
        self.users = UserService(self.store)

    @property
    def db_path(self) -> Path:
        return self.store.db_path

    def create_schema(self) -> None:
        self.store.create_schema()
