# ABOUTME: Public API for the device catalog layer.
# ABOUTME: Exports connection management, catalog operations, and row types.

from readershelf.db.catalog import DeviceCatalog, mime_type_for
from readershelf.db.connection import (
    CATALOG_RELATIVE_PATH,
    CatalogNotFoundError,
    catalog_path,
    create_device_catalog,
    open_catalog,
)
from readershelf.db.mapping import BookRecord, CollectionRecord, MembershipRecord

__all__ = [
    "CATALOG_RELATIVE_PATH",
    "BookRecord",
    "CatalogNotFoundError",
    "CollectionRecord",
    "DeviceCatalog",
    "MembershipRecord",
    "catalog_path",
    "create_device_catalog",
    "mime_type_for",
    "open_catalog",
]
