# ABOUTME: Walks a source folder's shelves and plans which books to copy onto the reader.
# ABOUTME: Computes escaped device paths and skips books already present at the same size.

import logging
import shutil
from dataclasses import dataclass
from pathlib import Path, PurePath

from readershelf.core.content import ContentDescriptor, SourceKind
from readershelf.core.escaping import escape_path

logger = logging.getLogger(__name__)

ELIGIBLE_EXTENSIONS: frozenset[str] = frozenset({".epub", ".pdf"})

# Double extension the reader uses for its own EPUB variant
KEPUB_SUFFIX = ".kepub.epub"


class CopyError(OSError):
    """Raised when a book cannot be copied onto the device."""


@dataclass
class PlannedCopy:
    """One eligible source file and what the sync will do with it."""

    source: Path
    target: Path
    descriptor: ContentDescriptor
    needs_copy: bool


def list_shelves(source_root: Path) -> list[str]:
    """Names of the top-level sub-directories of a source root, sorted."""
    return sorted(entry.name for entry in source_root.iterdir() if entry.is_dir())


def eligible_files(shelf_dir: Path) -> list[Path]:
    """Regular EPUB and PDF files directly inside a shelf directory, sorted by name.

    The extension match is case-insensitive. Everything else is ignored.
    """
    return sorted(
        entry
        for entry in shelf_dir.iterdir()
        if entry.is_file() and entry.suffix.lower() in ELIGIBLE_EXTENSIONS
    )


def destination_path(shelf: str, file_name: str, sub_directory: PurePath = Path()) -> Path:
    """Device path (relative to the volume root) for a book on a shelf.

    EPUBs get the ``.kepub.epub`` double extension; only the name changes.
    """
    dest = Path(sub_directory) / escape_path(PurePath(shelf) / file_name)
    if dest.suffix.lower() == ".epub":
        dest = dest.with_name(dest.stem + KEPUB_SUFFIX)
    return dest


def needs_copy(source: Path, target: Path) -> bool:
    """Whether a book must be (re)copied.

    A target that exists with exactly the source's size counts as synced.
    Modification times are not compared.
    """
    if target.exists() and target.stat().st_size == source.stat().st_size:
        return False
    return True


def copy_book(source: Path, target: Path) -> None:
    """Copy a book onto the device, creating missing directories first.

    Raises:
        CopyError: If the copy fails. Partially written files are left in place.
    """
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        shutil.copy2(source, target)
    except OSError as exc:
        raise CopyError(f"Could not copy {source} to {target}: {exc}") from exc
    logger.debug("Copied %s -> %s", source, target)


def plan_shelf(
    kind: SourceKind,
    source_root: Path,
    device_root: Path,
    shelf: str,
    sub_directory: PurePath = Path(),
) -> list[PlannedCopy]:
    """Plan the copies for one shelf of a source root.

    Args:
        kind: Which device volume the shelf is synced onto.
        source_root: The source folder holding the shelf directories.
        device_root: Mount point of the destination volume.
        shelf: Name of the shelf sub-directory.
        sub_directory: Relative prefix for every device path.

    Returns:
        One PlannedCopy per eligible file, in enumeration order. Descriptors
        have no catalog id yet.
    """
    plans: list[PlannedCopy] = []
    for source in eligible_files(source_root / shelf):
        dest = destination_path(shelf, source.name, sub_directory)
        target = device_root / dest
        descriptor = ContentDescriptor(
            kind=kind,
            dest_path=dest,
            source_name=source.name,
            size=source.stat().st_size,
        )
        copy = needs_copy(source, target)
        if not copy:
            logger.debug("Up to date: %s", target)
        plans.append(PlannedCopy(source, target, descriptor, copy))
    return plans
