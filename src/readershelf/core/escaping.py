# ABOUTME: Converts arbitrary relative paths into names safe for the reader's file system.
# ABOUTME: Non-ASCII name parts are re-encoded to CP932 and stored as base64 text.

import base64
from pathlib import Path, PurePath

# Code page the reader firmware expects for non-ASCII names
LEGACY_CODEC = "cp932"

# Substituted for characters the legacy code page cannot represent
REPLACEMENT = b"="


def _is_printable_ascii(part: str) -> bool:
    return all(0x20 <= ord(char) <= 0x7E for char in part)


def _encode_legacy(text: str) -> bytes:
    """Encode text to the legacy code page, one replacement byte per bad character.

    Lone surrogates (file-system bytes Python could not decode) cannot be
    encoded either, so they are replaced the same way.
    """
    encoded = bytearray()
    for char in text:
        try:
            encoded += char.encode(LEGACY_CODEC)
        except UnicodeEncodeError:
            encoded += REPLACEMENT
    return bytes(encoded)


def _escape_part(part: str) -> str:
    if _is_printable_ascii(part):
        return part
    encoded = base64.b64encode(_encode_legacy(part)).decode("ascii")
    return encoded.replace("/", "-")


def escape_segment(name: str) -> str:
    """Escape a single path segment, keeping its dot-separated structure.

    Each dot-separated part made only of printable ASCII is kept as is, so
    extensions and readable titles survive. Any other part is replaced by the
    base64 form of its CP932 bytes with "/" translated to "-".
    """
    return ".".join(_escape_part(part) for part in name.split("."))


def escape_path(path: PurePath | str) -> Path:
    """Escape every component of a relative path independently.

    Components are processed from the leaf upward and reassembled in their
    original order. Escaping an already-escaped path is the identity.
    """
    parts = PurePath(path).parts
    escaped = [escape_segment(part) for part in reversed(parts)]
    return Path(*reversed(escaped)) if escaped else Path()


def unescape_part(part: str) -> bytes:
    """Recover the CP932 bytes behind an escaped (non-ASCII) name part."""
    return base64.b64decode(part.replace("-", "/"))
