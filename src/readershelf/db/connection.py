# ABOUTME: Locates and opens the SQLite catalog on a mounted Sony Reader volume.
# ABOUTME: Provides a scoped connection that is closed whether the sync succeeds or fails.

import logging
import sqlite3
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

from readershelf.core.config import ConfigurationError
from readershelf.db.schema import DEVICE_SCHEMA

logger = logging.getLogger(__name__)

CATALOG_RELATIVE_PATH = Path("Sony_Reader") / "database" / "books.db"


class CatalogNotFoundError(ConfigurationError):
    """Raised when a device root has no catalog database file."""


def catalog_path(device_root: Path) -> Path:
    """Path of the catalog database under a device volume root."""
    return device_root / CATALOG_RELATIVE_PATH


@contextmanager
def open_catalog(device_root: Path) -> Iterator[sqlite3.Connection]:
    """Open the device catalog for the duration of a with-block.

    The catalog is never created: the device owns it, so a missing file is a
    configuration problem.

    Raises:
        CatalogNotFoundError: If the catalog file does not exist.
    """
    db_path = catalog_path(device_root)
    if not db_path.is_file():
        raise CatalogNotFoundError(f"No database file: {db_path}")

    conn = sqlite3.connect(str(db_path))
    conn.row_factory = sqlite3.Row
    logger.debug("Opened catalog %s", db_path)
    try:
        yield conn
    finally:
        conn.close()
        logger.debug("Closed catalog %s", db_path)


def create_device_catalog(device_root: Path) -> Path:
    """Create an empty catalog on a device root, as a factory-fresh reader has.

    Used to set up scratch device volumes. Returns the database path.
    """
    db_path = catalog_path(device_root)
    db_path.parent.mkdir(parents=True, exist_ok=True)

    conn = sqlite3.connect(str(db_path))
    try:
        conn.executescript(DEVICE_SCHEMA)
    finally:
        conn.close()
    return db_path
