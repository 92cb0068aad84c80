# ABOUTME: Runs a full sync: copy books from each source root, register them, then shelve them.
# ABOUTME: The shelf map is built per run and handed to the ShelfAssigner by value.

import logging
from dataclasses import dataclass, field

from readershelf.core.config import SourceRoot, SyncConfig
from readershelf.core.content import ContentDescriptor
from readershelf.core.planner import copy_book, list_shelves, plan_shelf
from readershelf.core.progress import NullReporter, SyncReporter
from readershelf.core.shelves import ShelfAssigner
from readershelf.db.catalog import DeviceCatalog
from readershelf.db.connection import open_catalog

logger = logging.getLogger(__name__)

ShelfMap = dict[str, list[ContentDescriptor]]


@dataclass
class SyncResult:
    """Summary of a sync run."""

    shelves: ShelfMap = field(default_factory=dict)
    copied: int = 0
    skipped: int = 0
    memberships: int = 0

    @property
    def summary(self) -> str:
        return (
            f"{self.copied} copied, {self.skipped} skipped, "
            f"{len(self.shelves)} shelf(s)"
        )


def sync_root(
    root: SourceRoot,
    catalog: DeviceCatalog,
    config: SyncConfig,
    reporter: SyncReporter,
    result: SyncResult,
) -> ShelfMap:
    """Copy and register every eligible book of one source root.

    Both copied and skipped books are upserted, so every path seen in this
    run has its modified_date bumped.

    Returns:
        The root's books grouped by shelf name, in enumeration order.
    """
    reporter.phase(f"Copy: {root.kind.value}")
    shelves: ShelfMap = {}

    for shelf in list_shelves(root.source):
        contents = shelves[shelf] = []
        for plan in plan_shelf(
            root.kind, root.source, root.device_root, shelf, config.sub_directory,
        ):
            reporter.file(plan.source.name, plan.descriptor.dest_path)
            if plan.needs_copy:
                copy_book(plan.source, plan.target)
                result.copied += 1
            else:
                result.skipped += 1
            catalog.upsert_book(plan.descriptor)
            contents.append(plan.descriptor)
            reporter.outcome(plan.needs_copy)

    return shelves


def run_sync(
    config: SyncConfig,
    catalog: DeviceCatalog,
    reporter: SyncReporter | None = None,
) -> SyncResult:
    """Sync every configured source root, then rebuild shelf membership.

    Shelves with the same name under both roots are merged into one shelf.
    The first error aborts the run; rows already committed stay.
    """
    reporter = reporter or NullReporter()
    result = SyncResult()

    for root in config.roots():
        logger.info("Syncing %s -> %s", root.source, root.device_root)
        for name, contents in sync_root(root, catalog, config, reporter, result).items():
            result.shelves.setdefault(name, []).extend(contents)

    result.memberships = ShelfAssigner(catalog, reporter).assign_all(result.shelves)
    logger.info("Sync finished: %s", result.summary)
    return result


def sync_device(config: SyncConfig, reporter: SyncReporter | None = None) -> SyncResult:
    """Validate the configuration and run a sync against the body's catalog.

    Raises:
        ConfigurationError: If the roots are incomplete or the catalog is missing.
    """
    config.validate()
    with open_catalog(config.body_root) as conn:  # type: ignore[arg-type]
        return run_sync(config, DeviceCatalog(conn), reporter)
