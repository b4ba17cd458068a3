# ABOUTME: Shared pytest fixtures for Libris tests.
# ABOUTME: Provides a temporary catalog and a category directory tree on disk.

import datetime
from pathlib import Path

import pytest

from libris.catalog import Catalog


@pytest.fixture
def db_path(tmp_path: Path) -> Path:
    """Path for a temporary catalog database (not yet created)."""
    return tmp_path / "catalog.db"


@pytest.fixture
def catalog(db_path: Path) -> Catalog:
    """A Catalog backed by a fresh temporary database."""
    catalog = Catalog(db_path)
    catalog.create_schema()
    return catalog


@pytest.fixture
def library_root(tmp_path: Path) -> Path:
    """Create a category root with nested documents and noise files.

    Layout:
        Books/
            Tolkien/
                the_hobbit.epub
                The Lord of the Rings/
                    fellowship.epub
                    two_towers.EPUB
                notes.txt
            dune.pdf
            cover.jpg
    """
    root = tmp_path / "Books"
    rings = root / "Tolkien" / "The Lord of the Rings"
    rings.mkdir(parents=True)
    (root / "Tolkien" / "the_hobbit.epub").write_bytes(b"fake epub")
    (rings / "fellowship.epub").write_bytes(b"fake epub")
    (rings / "two_towers.EPUB").write_bytes(b"fake epub")
    (root / "Tolkien" / "notes.txt").write_text("notes")
    (root / "dune.pdf").write_bytes(b"fake pdf")
    (root / "cover.jpg").write_bytes(b"fake jpg")
    return root


@pytest.fixture
def some_date() -> datetime.date:
    return datetime.date(1954, 7, 29)
