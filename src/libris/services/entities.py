# ABOUTME: Services for the named catalog entities: authors, series, categories, genres, tags.
# ABOUTME: Each service adds by name and re-reads the row to obtain its store-assigned id.

from __future__ import annotations

from libris.db.mapping import (
    Author,
    Category,
    Genre,
    Series,
    Tag,
    row_to_author,
    row_to_category,
    row_to_genre,
    row_to_series,
    row_to_tag,
)
from libris.services.base import EntityService


class AuthorService(EntityService[Author]):
    table = "author"
    label = "author"
    mapper = staticmethod(row_to_author)

    def add(self, name: str) -> Author:
        """Add an author and return it with its assigned id.

        Adding a name that already exists inserts a second row but returns
        the oldest author with that name.
        """
        return self._insert_and_fetch({"name": name})

    def get_by_name(self, name: str) -> Author | None:
        return self._get_by_key(name)


class SeriesService(EntityService[Series]):
    table = "series"
    label = "series"
    mapper = staticmethod(row_to_series)

    def add(self, name: str, author_id: int) -> Series:
        """Add a series written by an existing author.

        Series are looked up by name alone, so two authors with a series of
        the same name resolve to the oldest one.

        Raises:
            DanglingReference: If the author does not exist.
        """
        return self._insert_and_fetch(
            {"author": author_id, "name": name},
            requires={"author": "author"},
        )

    def get_by_name(self, name: str) -> Series | None:
        return self._get_by_key(name)

    def list_by_author(self, author_id: int) -> list[Series]:
        """Return the series belonging to an author, in creation order."""
        rows = self._store.select_all(self.table, {"author": author_id})
        return [self._map(row) for row in rows]


class CategoryService(EntityService[Category]):
    table = "category"
    label = "category"
    mapper = staticmethod(row_to_category)

    def add(self, name: str, path: str) -> Category:
        """Add a category rooted at ``path``. The directory is not checked here."""
        return self._insert_and_fetch({"name": name, "path": path})

    def get_by_name(self, name: str) -> Category | None:
        return self._get_by_key(name)


class GenreService(EntityService[Genre]):
    table = "genre"
    label = "genre"
    mapper = staticmethod(row_to_genre)

    def add(self, name: str) -> Genre:
        return self._insert_and_fetch({"name": name})

    def get_by_name(self, name: str) -> Genre | None:
        return self._get_by_key(name)


class TagService(EntityService[Tag]):
    table = "tag"
    label = "tag"
    mapper = staticmethod(row_to_tag)

    def add(self, name: str) -> Tag:
        return self._insert_and_fetch({"name": name})

    def get_by_name(self, name: str) -> Tag | None:
        return self._get_by_key(name)
