# ABOUTME: In-memory descriptor for one file being synced onto the reader.
# ABOUTME: Derives title and author from the "[Author] Title.ext" naming convention.

import re
from dataclasses import dataclass
from enum import Enum
from pathlib import Path, PurePath


class SourceKind(Enum):
    """Which device volume a file is synced onto."""

    PRIMARY = "body"
    SECONDARY = "sd"


# Leading "[Author]" tag plus the whitespace that follows it
_AUTHOR_TAG_RE = re.compile(r"\A\[([^\]]+)\]\s*")


def readable_name(name: str) -> str:
    """Make a file-system name safe to store as text.

    Bytes that did not decode (lone surrogates) become U+FFFD, so the result
    always encodes to UTF-8.
    """
    try:
        raw = name.encode("utf-8", "surrogateescape")
    except UnicodeEncodeError:
        raw = name.encode("utf-8", "surrogatepass")
    return raw.decode("utf-8", "replace")


def parse_source_name(name: str) -> tuple[str, str | None]:
    """Split a source file name into (title, author).

    The last extension is dropped and a leading bracket tag is taken as the
    author. Names without a tag yield an author of None.

    Examples:
        "[Jane Doe] My Book.epub" -> ("My Book", "Jane Doe")
        "Untagged.pdf"            -> ("Untagged", None)
    """
    name = readable_name(name)
    stem = PurePath(name).stem
    match = _AUTHOR_TAG_RE.match(name)
    author = match.group(1) if match else None
    title = _AUTHOR_TAG_RE.sub("", stem, count=1)
    return title, author


@dataclass
class ContentDescriptor:
    """One synced file: where it lands on the device and its catalog identity."""

    kind: SourceKind
    dest_path: Path
    source_name: str
    size: int
    catalog_id: int | None = None

    @property
    def title(self) -> str:
        return parse_source_name(self.source_name)[0]

    @property
    def author(self) -> str | None:
        return parse_source_name(self.source_name)[1]

    @property
    def file_name(self) -> str:
        """Name of the file on the device, after escaping."""
        return self.dest_path.name
