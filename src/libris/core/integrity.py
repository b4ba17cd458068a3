# ABOUTME: Read-only sweep for dangling references left by non-cascading deletes.
# ABOUTME: Reports documents, series, and links that point at rows which no longer exist.

from __future__ import annotations

from dataclasses import dataclass, field

from libris.catalog import Catalog
from libris.db.mapping import DocumentGenre, DocumentRecord, DocumentTag, Series


@dataclass
class IntegrityReport:
    """Aggregated dangling references found in a catalog."""

    ok: int = 0
    missing_category: list[DocumentRecord] = field(default_factory=list)
    missing_author: list[DocumentRecord] = field(default_factory=list)
    missing_series: list[DocumentRecord] = field(default_factory=list)
    orphaned_series: list[Series] = field(default_factory=list)
    dangling_tag_links: list[DocumentTag] = field(default_factory=list)
    dangling_genre_links: list[DocumentGenre] = field(default_factory=list)

    @property
    def total_issues(self) -> int:
        return (
            len(self.missing_category)
            + len(self.missing_author)
            + len(self.missing_series)
            + len(self.orphaned_series)
            + len(self.dangling_tag_links)
            + len(self.dangling_genre_links)
        )


def find_dangling_references(catalog: Catalog) -> IntegrityReport:
    """Check every stored reference against the rows that currently exist.

    Each table is read once; nothing is modified. ``ok`` counts documents
    whose category, author, and series all resolve.
    """
    report = IntegrityReport()

    category_ids = {category.id for category in catalog.categories.list()}
    author_ids = {author.id for author in catalog.authors.list()}
    series = catalog.series.list()
    series_ids = {entry.id for entry in series}
    tag_ids = {tag.id for tag in catalog.tags.list()}
    genre_ids = {genre.id for genre in catalog.genres.list()}
    records = catalog.documents.list_records()
    document_ids = {record.id for record in records}

    for record in records:
        has_issue = False
        if record.category_id not in category_ids:
            report.missing_category.append(record)
            has_issue = True
        if record.author_id is not None and record.author_id not in author_ids:
            report.missing_author.append(record)
            has_issue = True
        if record.series_id is not None and record.series_id not in series_ids:
            report.missing_series.append(record)
            has_issue = True
        if not has_issue:
            report.ok += 1

    report.orphaned_series = [entry for entry in series if entry.author_id not in author_ids]
    report.dangling_tag_links = [
        link
        for link in catalog.document_tags.list_links()
        if link.document_id not in document_ids or link.tag_id not in tag_ids
    ]
    report.dangling_genre_links = [
        link
        for link in catalog.document_genres.list_links()
        if link.document_id not in document_ids or link.genre_id not in genre_ids
    ]
    return report
