# ABOUTME: Typed records for rows of the device catalog tables.
# ABOUTME: Converts raw sqlite3 rows into BookRecord, CollectionRecord, and MembershipRecord.

from dataclasses import dataclass
from pathlib import Path
from typing import Any


@dataclass
class BookRecord:
    """A row of the ``books`` table."""

    id: int
    title: str
    author: str | None
    source_id: int
    added_date: int
    modified_date: int
    file_path: Path
    file_name: str
    file_size: int
    mime_type: str | None
    prevent_delete: bool


@dataclass
class CollectionRecord:
    """A row of the ``collection`` table: one shelf."""

    id: int
    title: str
    source_id: int


@dataclass
class MembershipRecord:
    """A row of the ``collections`` join table: one book on one shelf."""

    id: int
    collection_id: int
    content_id: int


def row_to_book(row: Any) -> BookRecord:
    """Convert a full ``books`` row to a BookRecord."""
    return BookRecord(
        id=row["_id"],
        title=row["title"],
        author=row["author"],
        source_id=row["source_id"],
        added_date=row["added_date"],
        modified_date=row["modified_date"],
        file_path=Path(row["file_path"]),
        file_name=row["file_name"],
        file_size=row["file_size"],
        mime_type=row["mime_type"],
        prevent_delete=bool(row["prevent_delete"]),
    )


def row_to_collection(row: Any) -> CollectionRecord:
    return CollectionRecord(id=row["_id"], title=row["title"], source_id=row["source_id"])


def row_to_membership(row: Any) -> MembershipRecord:
    return MembershipRecord(
        id=row["_id"],
        collection_id=row["collection_id"],
        content_id=row["content_id"],
    )
