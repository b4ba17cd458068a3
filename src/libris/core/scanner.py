# ABOUTME: Filesystem reconciliation for one category root.
# ABOUTME: Diffs files on disk against cataloged documents without writing to the catalog.

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path, PurePosixPath
from typing import TYPE_CHECKING

from libris.db.mapping import Category, Document
from libris.errors import NotADirectory, ScanError

if TYPE_CHECKING:
    from libris.services.documents import DocumentService

logger = logging.getLogger(__name__)

DEFAULT_EXTENSIONS: tuple[str, ...] = ("epub", "pdf", "cbz", "cbr", "mobi", "azw3")


@dataclass
class ScanReport:
    """Result of reconciling one category root against the catalog.

    ``uncataloged`` holds root-relative paths found on disk with no
    document; ``missing`` holds documents whose file is not on disk.
    """

    category: Category
    uncataloged: list[str] = field(default_factory=list)
    missing: list[Document] = field(default_factory=list)

    @property
    def in_sync(self) -> bool:
        return not self.uncataloged and not self.missing


def normalize_extensions(extensions: Iterable[str]) -> frozenset[str]:
    """Strip a leading dot from each allow-list entry. Case is kept as given."""
    return frozenset(ext[1:] if ext.startswith(".") else ext for ext in extensions)


def _walk(directory: Path, allowed: frozenset[str], found: list[Path]) -> None:
    try:
        entries = sorted(directory.iterdir(), key=lambda entry: entry.name)
    except OSError as exc:
        raise ScanError(directory, exc.strerror or str(exc)) from exc

    for entry in entries:
        try:
            # Symlinked directories are not descended so a link cycle cannot recurse forever
            if entry.is_dir() and not entry.is_symlink():
                _walk(entry, allowed, found)
            elif entry.is_file() and entry.suffix[1:].lower() in allowed:
                found.append(entry)
        except OSError as exc:
            raise ScanError(entry, exc.strerror or str(exc)) from exc


def _normalized(path: str) -> str:
    return PurePosixPath(path).as_posix()


def enumerate_files(root: Path, extensions: Iterable[str]) -> list[str]:
    """List every allowed file under ``root``, depth first.

    Entries in each directory are visited in name order. A file matches when
    its lower-cased suffix, without the dot, equals an allow-list entry.

    Args:
        root: Directory to walk. ``~`` is expanded.
        extensions: Allowed extensions, with or without a leading dot.

    Returns:
        POSIX-style paths relative to ``root``.

    Raises:
        NotADirectory: If ``root`` exists but is not a directory.
        ScanError: If ``root`` or any directory below it cannot be read.
    """
    root = Path(root).expanduser()
    if root.exists() and not root.is_dir():
        raise NotADirectory(root)

    found: list[Path] = []
    _walk(root, normalize_extensions(extensions), found)
    return [path.relative_to(root).as_posix() for path in found]


def scan_category(
    documents: DocumentService,
    category: Category,
    extensions: Iterable[str] = DEFAULT_EXTENSIONS,
) -> ScanReport:
    """Reconcile a category's root directory with its cataloged documents.

    The whole tree is enumerated before anything is compared, so any read
    failure aborts the scan with no partial report. The catalog is only read.

    Args:
        documents: Document service used to list the category's documents.
        category: Category whose root directory is scanned.
        extensions: Allow-list of file extensions.

    Returns:
        A ScanReport with uncataloged paths (in walk order) and missing
        documents (in id order).
    """
    on_disk = enumerate_files(Path(category.path), extensions)
    cataloged = documents.list_by_category(category.id)

    cataloged_paths = {_normalized(document.path) for document in cataloged}
    disk_paths = set(on_disk)

    report = ScanReport(
        category=category,
        uncataloged=[path for path in on_disk if path not in cataloged_paths],
        missing=[
            document for document in cataloged if _normalized(document.path) not in disk_paths
        ],
    )
    logger.info(
        "Scanned category %r: %d file(s), %d uncataloged, %d missing",
        category.name,
        len(on_disk),
        len(report.uncataloged),
        len(report.missing),
    )
    return report
