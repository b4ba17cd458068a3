# ABOUTME: Unit tests for the CatalogStore single-statement primitives.
# ABOUTME: Covers insert guards, constraint mapping, ordering, and delete counts.

from pathlib import Path

import pytest

from libris.db.connection import connect
from libris.db.store import CatalogStore
from libris.errors import AlreadyExists, DuplicateOrStoreError, StoreError, StoreUnavailable


@pytest.fixture()
def store(db_path: Path) -> CatalogStore:
    store = CatalogStore(db_path)
    store.create_schema()
    return store


class TestInsert:
    """Tests for CatalogStore.insert()."""

    def test_insert_returns_one(self, store: CatalogStore) -> None:
        assert store.insert("author", {"name": "Frank Herbert"}) == 1

    def test_guarded_insert_with_existing_parent(self, store: CatalogStore) -> None:
        store.insert("author", {"name": "Frank Herbert"})
        affected = store.insert(
            "series", {"author": 1, "name": "Dune"}, requires={"author": "author"}
        )
        assert affected == 1

    def test_guarded_insert_with_missing_parent_affects_nothing(
        self, store: CatalogStore
    ) -> None:
        affected = store.insert(
            "series", {"author": 42, "name": "Dune"}, requires={"author": "author"}
        )
        assert affected == 0
        assert store.select_all("series") == []

    def test_guard_skipped_for_null_value(self, store: CatalogStore) -> None:
        store.insert("category", {"name": "Books", "path": "/books"})
        affected = store.insert(
            "document",
            {
                "name": "Dune",
                "category": 1,
                "author": None,
                "series": None,
                "date": "1965-08-01",
                "path": "dune.epub",
            },
            requires={"category": "category", "author": "author"},
        )
        assert affected == 1

    def test_primary_key_violation_raises_already_exists(self, store: CatalogStore) -> None:
        store.insert("document_tag", {"document": 1, "tag": 1})
        with pytest.raises(AlreadyExists):
            store.insert("document_tag", {"document": 1, "tag": 1})

    def test_unique_violation_raises_already_exists(self, store: CatalogStore) -> None:
        row = {"username": "bilbo", "email": "b@shire", "password": "x"}
        store.insert("users", row)
        with pytest.raises(AlreadyExists):
            store.insert("users", row)

    def test_not_null_violation_raises_store_error(self, store: CatalogStore) -> None:
        with pytest.raises(DuplicateOrStoreError) as excinfo:
            store.insert("author", {"name": None})
        assert not isinstance(excinfo.value, AlreadyExists)

    def test_unknown_table_rejected(self, store: CatalogStore) -> None:
        with pytest.raises(ValueError, match="Unknown table"):
            store.insert("books", {"name": "x"})

    def test_unknown_column_rejected(self, store: CatalogStore) -> None:
        with pytest.raises(ValueError, match="Unknown column"):
            store.insert("author", {"title": "x"})


class TestSelect:
    """Tests for select_one(), select_all(), and select_linked()."""

    def test_select_one_absent_returns_none(self, store: CatalogStore) -> None:
        assert store.select_one("author", {"id": 1}) is None

    def test_select_one_returns_lowest_id_match(self, store: CatalogStore) -> None:
        store.insert("author", {"name": "Anonymous"})
        store.insert("author", {"name": "Anonymous"})
        row = store.select_one("author", {"name": "Anonymous"})
        assert row["id"] == 1

    def test_select_all_in_id_order(self, store: CatalogStore) -> None:
        for name in ("C", "A", "B"):
            store.insert("tag", {"name": name})
        rows = store.select_all("tag")
        assert [row["name"] for row in rows] == ["C", "A", "B"]

    def test_select_all_with_predicate(self, store: CatalogStore) -> None:
        store.insert("author", {"name": "A"})
        store.insert("author", {"name": "B"})
        store.insert("series", {"author": 1, "name": "S1"})
        store.insert("series", {"author": 2, "name": "S2"})
        store.insert("series", {"author": 1, "name": "S3"})
        rows = store.select_all("series", {"author": 1})
        assert [row["name"] for row in rows] == ["S1", "S3"]

    def test_select_all_empty(self, store: CatalogStore) -> None:
        assert store.select_all("genre") == []

    def test_select_linked(self, store: CatalogStore) -> None:
        for name in ("fantasy", "classic", "sci-fi"):
            store.insert("tag", {"name": name})
        store.insert("document_tag", {"document": 7, "tag": 3})
        store.insert("document_tag", {"document": 7, "tag": 1})
        store.insert("document_tag", {"document": 8, "tag": 2})
        rows = store.select_linked("tag", "document_tag", "tag", "document", 7)
        assert [row["name"] for row in rows] == ["fantasy", "sci-fi"]


class TestDeleteOne:
    """Tests for CatalogStore.delete_one()."""

    def test_delete_existing_returns_one(self, store: CatalogStore) -> None:
        store.insert("genre", {"name": "horror"})
        assert store.delete_one("genre", {"id": 1}) == 1
        assert store.select_one("genre", {"id": 1}) is None

    def test_delete_absent_returns_zero(self, store: CatalogStore) -> None:
        assert store.delete_one("genre", {"id": 99}) == 0

    def test_delete_reports_every_matched_row(self, store: CatalogStore) -> None:
        store.insert("author", {"name": "Twin"})
        store.insert("author", {"name": "Twin"})
        assert store.delete_one("author", {"name": "Twin"}) == 2

    def test_delete_requires_key(self, store: CatalogStore) -> None:
        with pytest.raises(ValueError):
            store.delete_one("genre", {})


class TestStoreFailures:
    """Store errors surface as typed exceptions."""

    def test_operations_on_missing_database(self, db_path: Path) -> None:
        store = CatalogStore(db_path)
        with pytest.raises(StoreUnavailable):
            store.select_all("author")

    def test_missing_table_raises_store_error(self, db_path: Path) -> None:
        with connect(db_path, create=True):
            pass
        store = CatalogStore(db_path)
        with pytest.raises(StoreError):
            store.select_all("author")
