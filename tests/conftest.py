# ABOUTME: Shared pytest fixtures for readershelf tests.
# ABOUTME: Provides scratch device volumes with empty catalogs, source trees, and real EPUBs.

import sqlite3
from collections.abc import Iterator
from pathlib import Path

import pytest
from ebooklib import epub

from readershelf.db.catalog import DeviceCatalog
from readershelf.db.connection import create_device_catalog


class FakeClock:
    """Millisecond clock that advances by one second on every reading."""

    def __init__(self, start: int = 1_700_000_000_000) -> None:
        self.now = start

    def __call__(self) -> int:
        self.now += 1000
        return self.now


@pytest.fixture
def device(tmp_path: Path) -> Path:
    """A mounted reader body volume with an empty catalog."""
    root = tmp_path / "READER"
    create_device_catalog(root)
    return root


@pytest.fixture
def device_db(device: Path) -> Path:
    """Path to the catalog database of the ``device`` fixture."""
    return device / "Sony_Reader" / "database" / "books.db"


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def conn(device_db: Path) -> Iterator[sqlite3.Connection]:
    """Open connection to the device catalog."""
    connection = sqlite3.connect(str(device_db))
    connection.row_factory = sqlite3.Row
    yield connection
    connection.close()


@pytest.fixture
def catalog(conn: sqlite3.Connection, clock: FakeClock) -> DeviceCatalog:
    """A DeviceCatalog on the empty device catalog, driven by a fake clock."""
    return DeviceCatalog(conn, clock=clock)


@pytest.fixture
def source_tree(tmp_path: Path) -> Path:
    """A source folder with two shelves and a few non-book files.

    Layout:
        books/
            Fiction/
                [Jane Doe] My Book.epub
                notes.txt
            Nonfiction/
                [John Roe] Facts.PDF
                Untagged.pdf
                cover.jpg
            loose.epub
    """
    root = tmp_path / "books"
    fiction = root / "Fiction"
    nonfiction = root / "Nonfiction"
    fiction.mkdir(parents=True)
    nonfiction.mkdir()

    (fiction / "[Jane Doe] My Book.epub").write_bytes(b"fake epub")
    (fiction / "notes.txt").write_text("not a book")
    (nonfiction / "[John Roe] Facts.PDF").write_bytes(b"fake pdf, uppercase")
    (nonfiction / "Untagged.pdf").write_bytes(b"untagged pdf")
    (nonfiction / "cover.jpg").write_bytes(b"fake jpg")
    (root / "loose.epub").write_bytes(b"not on a shelf")
    return root


@pytest.fixture
def sample_epub(tmp_path: Path) -> Path:
    """A small real EPUB, named "[Mariko Tanaka] Lantern Harbor.epub"."""
    book = epub.EpubBook()

    book.set_identifier("urn:uuid:readershelf-lantern-harbor")
    book.set_title("Lantern Harbor")
    book.set_language("en")
    book.add_author("Mariko Tanaka")

    page = epub.EpubHtml(title="Arrival", file_name="arrival.xhtml", lang="en")
    page.content = b"<html><body><h1>Arrival</h1><p>The ferry docked at dusk.</p></body></html>"
    book.add_item(page)

    book.toc = [epub.Link("arrival.xhtml", "Arrival", "arrival")]
    book.add_item(epub.EpubNcx())
    book.add_item(epub.EpubNav())
    book.spine = ["nav", page]

    staging = tmp_path / "staging"
    staging.mkdir()
    filepath = staging / "[Mariko Tanaka] Lantern Harbor.epub"
    epub.write_epub(str(filepath), book)
    return filepath
