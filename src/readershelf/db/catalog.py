# ABOUTME: Reads and mutates the Sony Reader catalog: books, shelves, and shelf membership.
# ABOUTME: Upserts book rows by file path and allocates ids as max(_id) + 1 per table.

import logging
import sqlite3
import time
from collections.abc import Callable
from pathlib import PurePath

from readershelf.core.content import ContentDescriptor, readable_name
from readershelf.db.mapping import (
    BookRecord,
    CollectionRecord,
    MembershipRecord,
    row_to_book,
    row_to_collection,
    row_to_membership,
)

logger = logging.getLogger(__name__)

# Tables whose _id column is allocated by this module
_ID_TABLES: frozenset[str] = frozenset({"books", "collection", "collections"})

_MIME_TYPES: dict[str, str] = {
    ".pdf": "application/pdf",
    ".epub": "application/epub+zip",
}

# source_id the reader uses for books and shelves added over USB
LOCAL_SOURCE_ID = 0


def now_millis() -> int:
    """Current time as whole milliseconds since the epoch."""
    return int(time.time() * 1000)


def mime_type_for(path: PurePath) -> str | None:
    """MIME type for a device path by extension, or None if it is not a known format."""
    return _MIME_TYPES.get(path.suffix.lower())


class DeviceCatalog:
    """Wraps a sqlite3 connection to the reader's catalog.

    Ids are allocated as ``max(_id) + 1`` on every call with no reservation,
    which is only correct while this is the sole writer. Every mutation is
    committed immediately.
    """

    def __init__(
        self,
        conn: sqlite3.Connection,
        *,
        clock: Callable[[], int] = now_millis,
    ) -> None:
        self._conn = conn
        self._clock = clock

    # --- Id allocation ---

    def allocate_id(self, table: str) -> int:
        """Return the next free _id for a table: max(_id) + 1, or 1 when empty.

        Raises:
            ValueError: If the table is not one of the catalog tables.
        """
        if table not in _ID_TABLES:
            raise ValueError(f"Unknown catalog table: {table}")
        cursor = self._conn.execute(f"SELECT MAX(_id) FROM {table}")
        max_id = cursor.fetchone()[0]
        next_id = (max_id or 0) + 1
        logger.debug("Allocated %s._id = %d", table, next_id)
        return next_id

    def next_book_id(self) -> int:
        return self.allocate_id("books")

    def next_collection_id(self) -> int:
        return self.allocate_id("collection")

    def next_membership_id(self) -> int:
        return self.allocate_id("collections")

    # --- Books ---

    def find_book_by_path(self, path: PurePath) -> int | None:
        """Return the id of the book stored at a device path, if any."""
        cursor = self._conn.execute(
            "SELECT _id FROM books WHERE file_path = ?", (path.as_posix(),)
        )
        row = cursor.fetchone()
        return row[0] if row else None

    def get_book(self, book_id: int) -> BookRecord | None:
        cursor = self._conn.execute("SELECT * FROM books WHERE _id = ?", (book_id,))
        row = cursor.fetchone()
        return row_to_book(row) if row else None

    def list_books(self) -> list[BookRecord]:
        """Return all books, ordered by id."""
        cursor = self._conn.execute("SELECT * FROM books ORDER BY _id")
        return [row_to_book(row) for row in cursor.fetchall()]

    def upsert_book(self, descriptor: ContentDescriptor) -> int:
        """Register a synced file, keyed by its device path.

        An existing row only has its modified_date bumped, so its id,
        added_date, and anything the reader stored on it are kept. Otherwise
        a complete row is inserted under a freshly allocated id.

        Returns:
            The book id, which is also stored on ``descriptor.catalog_id``.
        """
        now = self._clock()
        book_id = self.find_book_by_path(descriptor.dest_path)

        if book_id is not None:
            self._conn.execute(
                "UPDATE books SET modified_date = ? WHERE _id = ?",
                (now, book_id),
            )
            self._conn.commit()
            logger.debug("Touched book %d (%s)", book_id, descriptor.dest_path)
        else:
            book_id = self.next_book_id()
            self._conn.execute(
                "INSERT INTO books "
                "(_id, title, author, source_id, added_date, modified_date, "
                "file_path, file_name, file_size, mime_type, prevent_delete) "
                "VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, 0)",
                (
                    book_id,
                    descriptor.title,
                    descriptor.author,
                    LOCAL_SOURCE_ID,
                    now,
                    now,
                    descriptor.dest_path.as_posix(),
                    descriptor.file_name,
                    descriptor.size,
                    mime_type_for(descriptor.dest_path),
                ),
            )
            self._conn.commit()
            logger.debug("Inserted book %d (%s)", book_id, descriptor.dest_path)

        descriptor.catalog_id = book_id
        return book_id

    # --- Shelves ---

    def find_collection(self, title: str) -> CollectionRecord | None:
        title = readable_name(title)
        cursor = self._conn.execute("SELECT * FROM collection WHERE title = ?", (title,))
        row = cursor.fetchone()
        return row_to_collection(row) if row else None

    def list_collections(self) -> list[CollectionRecord]:
        """Return all shelves, ordered by title."""
        cursor = self._conn.execute("SELECT * FROM collection ORDER BY title")
        return [row_to_collection(row) for row in cursor.fetchall()]

    def find_or_create_collection(self, title: str) -> int:
        """Return the id of the shelf with this exact title, creating it if needed."""
        title = readable_name(title)
        existing = self.find_collection(title)
        if existing is not None:
            return existing.id

        collection_id = self.next_collection_id()
        self._conn.execute(
            "INSERT INTO collection (_id, title, source_id) VALUES (?, ?, ?)",
            (collection_id, title, LOCAL_SOURCE_ID),
        )
        self._conn.commit()
        logger.info("Created shelf %r (id %d)", title, collection_id)
        return collection_id

    # --- Membership ---

    def get_membership(self, book_id: int) -> MembershipRecord | None:
        """Return the membership row of a book, if it is on a shelf."""
        cursor = self._conn.execute(
            "SELECT * FROM collections WHERE content_id = ?", (book_id,)
        )
        row = cursor.fetchone()
        return row_to_membership(row) if row else None

    def list_memberships(self) -> list[MembershipRecord]:
        cursor = self._conn.execute("SELECT * FROM collections ORDER BY _id")
        return [row_to_membership(row) for row in cursor.fetchall()]

    def assign_membership(self, collection_id: int, book_id: int) -> None:
        """Put a book on exactly one shelf.

        A book already on a shelf is moved by rewriting its row in place, so
        there is never more than one membership row per book.
        """
        existing = self.get_membership(book_id)
        if existing is None:
            membership_id = self.next_membership_id()
            self._conn.execute(
                "INSERT INTO collections (_id, collection_id, content_id) VALUES (?, ?, ?)",
                (membership_id, collection_id, book_id),
            )
        else:
            if existing.collection_id != collection_id:
                logger.debug(
                    "Moving book %d from shelf %d to %d",
                    book_id, existing.collection_id, collection_id,
                )
            self._conn.execute(
                "UPDATE collections SET collection_id = ? WHERE content_id = ?",
                (collection_id, book_id),
            )
        self._conn.commit()

    def shelf_counts(self) -> list[tuple[str, int]]:
        """List every shelf with its number of books, alphabetically sorted."""
        cursor = self._conn.execute(
            "SELECT c.title, COUNT(m.content_id) AS book_count "
            "FROM collection c "
            "LEFT JOIN collections m ON c._id = m.collection_id "
            "GROUP BY c._id "
            "ORDER BY c.title"
        )
        return [(row[0], row[1]) for row in cursor.fetchall()]
