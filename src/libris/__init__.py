# ABOUTME: Libris, a catalog of personal documents kept in sync with the filesystem.
# ABOUTME: Exposes the Catalog facade and the error hierarchy.

from libris.catalog import Catalog
from libris.errors import CatalogError

__all__ = ["Catalog", "CatalogError"]
