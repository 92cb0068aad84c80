# ABOUTME: Puts synced books on the shelf named after their source sub-directory.
# ABOUTME: Creates missing shelves and moves books whose shelf changed since the last sync.

import logging
from collections.abc import Mapping, Sequence

from readershelf.core.content import ContentDescriptor
from readershelf.core.progress import NullReporter, SyncReporter
from readershelf.db.catalog import DeviceCatalog

logger = logging.getLogger(__name__)


class ShelfAssigner:
    """Writes shelf membership for the books of each shelf."""

    def __init__(self, catalog: DeviceCatalog, reporter: SyncReporter | None = None) -> None:
        self._catalog = catalog
        self._reporter = reporter or NullReporter()

    def resolve_book_id(self, descriptor: ContentDescriptor) -> int:
        """Catalog id of a descriptor, looked up by device path when unset.

        A file that is on the device but was never registered gets a book
        row now, so every shelved file is a catalog entry.
        """
        if descriptor.catalog_id is None:
            descriptor.catalog_id = self._catalog.find_book_by_path(descriptor.dest_path)
        if descriptor.catalog_id is None:
            logger.warning("Registering uncataloged file %s", descriptor.dest_path)
            self._catalog.upsert_book(descriptor)
        return descriptor.catalog_id  # type: ignore[return-value]

    def assign_shelf(self, name: str, descriptors: Sequence[ContentDescriptor]) -> int:
        """Put every descriptor on the shelf called ``name``.

        Returns:
            The shelf's collection id.
        """
        collection_id = self._catalog.find_or_create_collection(name)
        for descriptor in descriptors:
            book_id = self.resolve_book_id(descriptor)
            self._catalog.assign_membership(collection_id, book_id)
        logger.info("Shelf %r: %d book(s)", name, len(descriptors))
        return collection_id

    def assign_all(self, shelves: Mapping[str, Sequence[ContentDescriptor]]) -> int:
        """Assign every shelf's books. Returns the number of memberships written."""
        written = 0
        for name, descriptors in shelves.items():
            self._reporter.phase(f"Make Shelf: {name}")
            self.assign_shelf(name, descriptors)
            written += len(descriptors)
        return written
