# ABOUTME: Unit tests for the filesystem scanner and category reconciliation.
# ABOUTME: Covers enumeration order, extension filtering, diffing, and failure modes.

import os
from pathlib import Path

import pytest

from libris.catalog import Catalog
from libris.core.scanner import (
    ScanReport,
    enumerate_files,
    normalize_extensions,
    scan_category,
)
from libris.errors import NotADirectory, ScanError


class TestNormalizeExtensions:
    def test_strips_leading_dot(self) -> None:
        assert normalize_extensions([".epub", "pdf"]) == frozenset({"epub", "pdf"})

    def test_keeps_case(self) -> None:
        assert normalize_extensions(["EPUB"]) == frozenset({"EPUB"})


class TestEnumerateFiles:
    """Tests for enumerate_files()."""

    def test_depth_first_in_name_order(self, library_root: Path) -> None:
        files = enumerate_files(library_root, ["epub", "pdf"])
        assert files == [
            "Tolkien/The Lord of the Rings/fellowship.epub",
            "Tolkien/The Lord of the Rings/two_towers.EPUB",
            "Tolkien/the_hobbit.epub",
            "dune.pdf",
        ]

    def test_filters_extensions(self, library_root: Path) -> None:
        assert enumerate_files(library_root, ["pdf"]) == ["dune.pdf"]

    def test_suffix_is_lowercased(self, library_root: Path) -> None:
        files = enumerate_files(library_root, [".epub"])
        assert "Tolkien/The Lord of the Rings/two_towers.EPUB" in files

    def test_uppercase_allow_list_matches_nothing(self, library_root: Path) -> None:
        """Matching is exact against the lower-cased suffix."""
        assert enumerate_files(library_root, ["EPUB"]) == []

    def test_empty_directory(self, tmp_path: Path) -> None:
        assert enumerate_files(tmp_path, ["epub"]) == []

    def test_expands_user(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("HOME", str(tmp_path))
        (tmp_path / "Books").mkdir()
        (tmp_path / "Books" / "a.epub").write_bytes(b"x")
        assert enumerate_files(Path("~/Books"), ["epub"]) == ["a.epub"]

    def test_file_root_raises_not_a_directory(self, library_root: Path) -> None:
        with pytest.raises(NotADirectory):
            enumerate_files(library_root / "dune.pdf", ["pdf"])

    def test_missing_root_raises_scan_error(self, tmp_path: Path) -> None:
        missing = tmp_path / "nowhere"
        with pytest.raises(ScanError) as excinfo:
            enumerate_files(missing, ["epub"])
        assert excinfo.value.path == missing

    def test_subdirectory_read_error_aborts(
        self, library_root: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        locked = library_root / "Tolkien"
        real_iterdir = Path.iterdir

        def iterdir(self: Path):
            if self == locked:
                raise PermissionError(13, "Permission denied", str(self))
            return real_iterdir(self)

        monkeypatch.setattr(Path, "iterdir", iterdir)

        with pytest.raises(ScanError, match="Tolkien") as excinfo:
            enumerate_files(library_root, ["epub", "pdf"])
        assert excinfo.value.path == locked

    @pytest.mark.skipif(
        not hasattr(os, "geteuid") or os.geteuid() == 0,
        reason="directory permissions are not enforced for root",
    )
    def test_unreadable_subdirectory_aborts(self, library_root: Path) -> None:
        locked = library_root / "Tolkien"
        locked.chmod(0)
        try:
            with pytest.raises(ScanError, match="Tolkien"):
                enumerate_files(library_root, ["epub", "pdf"])
        finally:
            locked.chmod(0o755)

    def test_symlinked_directory_not_descended(self, library_root: Path) -> None:
        (library_root / "loop").symlink_to(library_root, target_is_directory=True)
        files = enumerate_files(library_root, ["pdf"])
        assert files == ["dune.pdf"]


class TestScanCategory:
    """Tests for scan_category()."""

    def test_reports_uncataloged(self, catalog: Catalog, tmp_path: Path, some_date) -> None:
        root = tmp_path / "Books"
        root.mkdir()
        for name in ("x.epub", "y.epub", "z.txt"):
            (root / name).write_bytes(b"x")
        books = catalog.categories.add("Books", str(root))
        catalog.documents.add("X", books.id, date=some_date, path="x.epub")

        report = scan_category(catalog.documents, books, ["epub"])

        assert report.uncataloged == ["y.epub"]
        assert report.missing == []
        assert not report.in_sync

    def test_reports_missing_documents(
        self, catalog: Catalog, library_root: Path, some_date
    ) -> None:
        books = catalog.categories.add("Books", str(library_root))
        gone = catalog.documents.add("Silmarillion", books.id, date=some_date, path="silm.epub")
        catalog.documents.add("Dune", books.id, date=some_date, path="dune.pdf")

        report = scan_category(catalog.documents, books, ["pdf"])

        assert report.missing == [gone]
        assert report.uncataloged == []

    def test_lists_are_disjoint(self, catalog: Catalog, library_root: Path, some_date) -> None:
        books = catalog.categories.add("Books", str(library_root))
        catalog.documents.add("Hobbit", books.id, date=some_date, path="Tolkien/the_hobbit.epub")
        catalog.documents.add("Lost", books.id, date=some_date, path="lost.epub")

        report = scan_category(catalog.documents, books, ["epub", "pdf"])

        missing_paths = {document.path for document in report.missing}
        assert missing_paths == {"lost.epub"}
        assert "Tolkien/the_hobbit.epub" not in report.uncataloged
        assert not missing_paths & set(report.uncataloged)

    def test_dot_prefixed_path_matches_disk(
        self, catalog: Catalog, tmp_path: Path, some_date
    ) -> None:
        (tmp_path / "x.epub").write_bytes(b"x")
        books = catalog.categories.add("Books", str(tmp_path))
        catalog.documents.add("X", books.id, date=some_date, path="./x.epub")

        report = scan_category(catalog.documents, books, ["epub"])

        assert report.in_sync

    def test_unnormalised_stored_path_matches_disk(
        self, catalog: Catalog, tmp_path: Path, some_date
    ) -> None:
        (tmp_path / "Tolkien").mkdir()
        (tmp_path / "Tolkien" / "hobbit.epub").write_bytes(b"x")
        books = catalog.categories.add("Books", str(tmp_path))
        catalog.store.insert(
            "document",
            {
                "name": "Hobbit",
                "category": books.id,
                "author": None,
                "series": None,
                "date": some_date.isoformat(),
                "path": "./Tolkien//hobbit.epub",
            },
        )

        report = scan_category(catalog.documents, books, ["epub"])

        assert report.uncataloged == []
        assert report.missing == []

    def test_in_sync(self, catalog: Catalog, tmp_path: Path, some_date) -> None:
        (tmp_path / "only.cbz").write_bytes(b"x")
        manga = catalog.categories.add("Manga", str(tmp_path))
        catalog.documents.add("Only", manga.id, date=some_date, path="only.cbz")

        report = scan_category(catalog.documents, manga, ["cbz"])

        assert report == ScanReport(category=manga)
        assert report.in_sync

    def test_other_categories_ignored(
        self, catalog: Catalog, library_root: Path, some_date
    ) -> None:
        books = catalog.categories.add("Books", str(library_root))
        comics = catalog.categories.add("Comics", str(library_root))
        catalog.documents.add("Dune", comics.id, date=some_date, path="dune.pdf")

        report = scan_category(catalog.documents, books, ["pdf"])

        assert report.uncataloged == ["dune.pdf"]

    def test_does_not_write(self, catalog: Catalog, library_root: Path) -> None:
        books = catalog.categories.add("Books", str(library_root))
        scan_category(catalog.documents, books, ["epub", "pdf"])
        assert catalog.documents.list_all() == []

    def test_category_root_is_file(self, catalog: Catalog, library_root: Path) -> None:
        broken = catalog.categories.add("Broken", str(library_root / "dune.pdf"))
        with pytest.raises(NotADirectory):
            scan_category(catalog.documents, broken, ["pdf"])
