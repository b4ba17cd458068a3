# ABOUTME: Exception hierarchy for the Libris catalog core.
# ABOUTME: Store, service, and scanner failures all derive from CatalogError.


class CatalogError(Exception):
    """Base class for every error raised by the catalog core."""


class NotFound(CatalogError):
    """Raised when an operation targets a row that does not exist."""


class NotFoundAfterInsert(CatalogError):
    """Raised when an insert succeeded but the row could not be read back.

    A concurrent delete between the insert and the re-fetch produces this.
    """


class StoreError(CatalogError):
    """Raised when the underlying SQLite database fails an operation."""


class StoreUnavailable(StoreError):
    """Raised when the database file cannot be opened."""


class RowMappingError(StoreError):
    """Raised when a stored row does not have the shape its entity expects."""


class DuplicateOrStoreError(StoreError):
    """Raised when an insert is rejected by the store."""


class AlreadyExists(DuplicateOrStoreError):
    """Raised when an insert violates a primary-key or unique constraint."""


class AlreadyLinked(AlreadyExists):
    """Raised when linking a document to a tag or genre it is already linked to."""


class DanglingReference(DuplicateOrStoreError):
    """Raised when an insert references a parent row that does not exist."""


class CatalogIntegrityError(CatalogError):
    """Raised when the store reports an affected-row count a key lookup cannot produce."""


class AmbiguousDelete(CatalogIntegrityError):
    """Raised when a delete by primary key removed more than one row."""


class ScanError(CatalogError):
    """Raised when a directory under a category root cannot be read."""

    def __init__(self, path, reason: str) -> None:
        super().__init__(f"Could not scan {path}: {reason}")
        self.path = path


class NotADirectory(CatalogError):
    """Raised when a scan is requested on a path that is not a directory."""

    def __init__(self, path) -> None:
        super().__init__(f"Could not scan {path} because it is not a directory")
        self.path = path
