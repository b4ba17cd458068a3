# ABOUTME: Typed dataclasses for catalog entities and the row mappers that build them.
# ABOUTME: Mappers validate column count and types, raising RowMappingError on bad rows.

from dataclasses import dataclass
from datetime import date
from typing import Any

from libris.db.schema import TABLE_COLUMNS
from libris.errors import RowMappingError


@dataclass
class Author:
    id: int
    name: str


@dataclass
class Series:
    id: int
    author_id: int
    name: str


@dataclass
class Category:
    """A named storage root. ``path`` is the directory the scanner walks."""

    id: int
    name: str
    path: str


@dataclass
class Genre:
    id: int
    name: str


@dataclass
class Tag:
    id: int
    name: str


@dataclass
class DocumentRecord:
    """A document row as stored, with foreign keys left as ids."""

    id: int
    name: str
    category_id: int
    author_id: int | None
    series_id: int | None
    date: date
    path: str


@dataclass
class Document:
    """A hydrated document: foreign keys resolved into entity values.

    Any related entity whose row has been deleted is None.
    """

    id: int
    name: str
    category: Category | None
    author: Author | None
    series: Series | None
    date: date
    path: str


@dataclass
class DocumentTag:
    document_id: int
    tag_id: int


@dataclass
class DocumentGenre:
    document_id: int
    genre_id: int


@dataclass
class User:
    """A login account. ``password_hash`` is stored and returned verbatim."""

    id: int
    username: str
    email: str
    password_hash: str


def _checked(row: Any, table: str) -> Any:
    """Ensure a row carries exactly the columns of ``table``."""
    if row is None:
        raise RowMappingError(f"Expected a {table} row, got None")
    expected = TABLE_COLUMNS[table]
    try:
        keys = tuple(row.keys())
    except AttributeError:
        raise RowMappingError(f"Expected a {table} row, got {type(row).__name__}") from None
    if keys != expected:
        raise RowMappingError(f"{table} row has columns {keys}, expected {expected}")
    return row


def _value(row: Any, column: str, kind: type, *, nullable: bool = False) -> Any:
    value = row[column]
    if value is None:
        if nullable:
            return None
        raise RowMappingError(f"Column '{column}' is NULL")
    # bool is an int subclass; a bool in an integer column is still corrupt data
    if not isinstance(value, kind) or isinstance(value, bool):
        raise RowMappingError(
            f"Column '{column}' holds {type(value).__name__}, expected {kind.__name__}"
        )
    return value


def _date(row: Any, column: str) -> date:
    raw = _value(row, column, str)
    try:
        return date.fromisoformat(raw)
    except ValueError as exc:
        raise RowMappingError(f"Column '{column}' holds invalid date {raw!r}") from exc


def row_to_author(row: Any) -> Author:
    row = _checked(row, "author")
    return Author(id=_value(row, "id", int), name=_value(row, "name", str))


def row_to_series(row: Any) -> Series:
    row = _checked(row, "series")
    return Series(
        id=_value(row, "id", int),
        author_id=_value(row, "author", int),
        name=_value(row, "name", str),
    )


def row_to_category(row: Any) -> Category:
    row = _checked(row, "category")
    return Category(
        id=_value(row, "id", int),
        name=_value(row, "name", str),
        path=_value(row, "path", str),
    )


def row_to_genre(row: Any) -> Genre:
    row = _checked(row, "genre")
    return Genre(id=_value(row, "id", int), name=_value(row, "name", str))


def row_to_tag(row: Any) -> Tag:
    row = _checked(row, "tag")
    return Tag(id=_value(row, "id", int), name=_value(row, "name", str))


def row_to_document_record(row: Any) -> DocumentRecord:
    row = _checked(row, "document")
    return DocumentRecord(
        id=_value(row, "id", int),
        name=_value(row, "name", str),
        category_id=_value(row, "category", int),
        author_id=_value(row, "author", int, nullable=True),
        series_id=_value(row, "series", int, nullable=True),
        date=_date(row, "date"),
        path=_value(row, "path", str),
    )


def row_to_document_tag(row: Any) -> DocumentTag:
    row = _checked(row, "document_tag")
    return DocumentTag(document_id=_value(row, "document", int), tag_id=_value(row, "tag", int))


def row_to_document_genre(row: Any) -> DocumentGenre:
    row = _checked(row, "document_genre")
    return DocumentGenre(
        document_id=_value(row, "document", int),
        genre_id=_value(row, "genre", int),
    )


def row_to_user(row: Any) -> User:
    row = _checked(row, "users")
    return User(
        id=_value(row, "id", int),
        username=_value(row, "username", str),
        email=_value(row, "email", str),
        password_hash=_value(row, "password", str),
    )
