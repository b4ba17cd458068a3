# ABOUTME: SQL DDL statements for the Libris catalog database schema.
# ABOUTME: Defines entity tables, association tables, and the column map used to validate queries.

SCHEMA = """
CREATE TABLE IF NOT EXISTS author (
    id   INTEGER PRIMARY KEY AUTOINCREMENT,
    name TEXT NOT NULL
);

CREATE TABLE IF NOT EXISTS series (
    id     INTEGER PRIMARY KEY AUTOINCREMENT,
    author INTEGER NOT NULL,
    name   TEXT NOT NULL,
    FOREIGN KEY (author) REFERENCES author(id)
);

CREATE TABLE IF NOT EXISTS category (
    id   INTEGER PRIMARY KEY AUTOINCREMENT,
    name TEXT NOT NULL,
    path TEXT NOT NULL
);

CREATE TABLE IF NOT EXISTS genre (
    id   INTEGER PRIMARY KEY AUTOINCREMENT,
    name TEXT NOT NULL
);

CREATE TABLE IF NOT EXISTS tag (
    id   INTEGER PRIMARY KEY AUTOINCREMENT,
    name TEXT NOT NULL
);

CREATE TABLE IF NOT EXISTS document (
    id       INTEGER PRIMARY KEY AUTOINCREMENT,
    name     TEXT NOT NULL,
    category INTEGER NOT NULL,
    author   INTEGER,
    series   INTEGER,
    date     TEXT NOT NULL,
    path     TEXT NOT NULL,
    FOREIGN KEY (category) REFERENCES category(id),
    FOREIGN KEY (author) REFERENCES author(id),
    FOREIGN KEY (series) REFERENCES series(id)
);

CREATE INDEX IF NOT EXISTS idx_document_category ON document(category);
CREATE INDEX IF NOT EXISTS idx_document_author ON document(author) WHERE author IS NOT NULL;
CREATE INDEX IF NOT EXISTS idx_document_series ON document(series) WHERE series IS NOT NULL;

CREATE TABLE IF NOT EXISTS document_genre (
    document INTEGER NOT NULL,
    genre    INTEGER NOT NULL,
    PRIMARY KEY (document, genre),
    FOREIGN KEY (document) REFERENCES document(id),
    FOREIGN KEY (genre) REFERENCES genre(id)
);

CREATE TABLE IF NOT EXISTS document_tag (
    document INTEGER NOT NULL,
    tag      INTEGER NOT NULL,
    PRIMARY KEY (document, tag),
    FOREIGN KEY (document) REFERENCES document(id),
    FOREIGN KEY (tag) REFERENCES tag(id)
);

CREATE TABLE IF NOT EXISTS users (
    id       INTEGER PRIMARY KEY AUTOINCREMENT,
    username TEXT NOT NULL UNIQUE,
    email    TEXT NOT NULL,
    password TEXT NOT NULL
);
"""

# Column order matches the DDL above; row mappers rely on it.
TABLE_COLUMNS: dict[str, tuple[str, ...]] = {
    "author": ("id", "name"),
    "series": ("id", "author", "name"),
    "category": ("id", "name", "path"),
    "genre": ("id", "name"),
    "tag": ("id", "name"),
    "document": ("id", "name", "category", "author", "series", "date", "path"),
    "document_genre": ("document", "genre"),
    "document_tag": ("document", "tag"),
    "users": ("id", "username", "email", "password"),
}

# Association tables have no id column; they are ordered by their composite key.
TABLE_ORDER: dict[str, tuple[str, ...]] = {
    "document_genre": ("document", "genre"),
    "document_tag": ("document", "tag"),
}
