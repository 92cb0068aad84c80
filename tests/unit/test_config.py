# ABOUTME: Unit tests for sync configuration and catalog location.
# ABOUTME: Validates root combinations, root ordering, and the missing-catalog failure.

from pathlib import Path

import pytest

from readershelf.core.config import ConfigurationError, SourceRoot, SyncConfig
from readershelf.core.content import SourceKind
from readershelf.db.connection import (
    CATALOG_RELATIVE_PATH,
    CatalogNotFoundError,
    catalog_path,
    open_catalog,
)


class TestSyncConfigValidate:
    """Tests for SyncConfig.validate()."""

    def test_body_with_source_is_valid(self) -> None:
        SyncConfig(body_root=Path("/body"), body_source=Path("/src")).validate()

    def test_sd_pair_alone_is_valid(self) -> None:
        SyncConfig(
            body_root=Path("/body"), sd_root=Path("/sd"), sd_source=Path("/sd-src"),
        ).validate()

    def test_missing_body_root(self) -> None:
        with pytest.raises(ConfigurationError, match="body root"):
            SyncConfig(body_source=Path("/src")).validate()

    def test_no_source_at_all(self) -> None:
        with pytest.raises(ConfigurationError):
            SyncConfig(body_root=Path("/body")).validate()

    def test_incomplete_sd_pair(self) -> None:
        with pytest.raises(ConfigurationError):
            SyncConfig(body_root=Path("/body"), sd_source=Path("/sd-src")).validate()

    def test_absolute_sub_directory(self) -> None:
        with pytest.raises(ConfigurationError, match="relative"):
            SyncConfig(
                body_root=Path("/body"), body_source=Path("/src"), sub_directory=Path("/abs"),
            ).validate()


class TestSyncConfigRoots:
    """Tests for SyncConfig.roots()."""

    def test_primary_then_secondary(self) -> None:
        config = SyncConfig(
            body_root=Path("/body"),
            body_source=Path("/src"),
            sd_root=Path("/sd"),
            sd_source=Path("/sd-src"),
        )
        assert list(config.roots()) == [
            SourceRoot(SourceKind.PRIMARY, Path("/src"), Path("/body")),
            SourceRoot(SourceKind.SECONDARY, Path("/sd-src"), Path("/sd")),
        ]

    def test_incomplete_pairs_are_left_out(self) -> None:
        config = SyncConfig(body_root=Path("/body"), sd_source=Path("/sd-src"))
        assert list(config.roots()) == []


class TestOpenCatalog:
    """Tests for catalog location and scoped opening."""

    def test_catalog_path(self) -> None:
        assert CATALOG_RELATIVE_PATH == Path("Sony_Reader/database/books.db")
        assert catalog_path(Path("/mnt/reader")) == Path("/mnt/reader/Sony_Reader/database/books.db")

    def test_missing_catalog_raises(self, tmp_path: Path) -> None:
        with pytest.raises(CatalogNotFoundError, match="No database file"):
            with open_catalog(tmp_path):
                pass

    def test_missing_catalog_is_configuration_error(self) -> None:
        assert issubclass(CatalogNotFoundError, ConfigurationError)

    def test_does_not_create_catalog(self, tmp_path: Path) -> None:
        with pytest.raises(CatalogNotFoundError):
            with open_catalog(tmp_path):
                pass
        assert not catalog_path(tmp_path).exists()

    def test_rows_are_dict_like(self, device: Path) -> None:
        with open_catalog(device) as conn:
            row = conn.execute("SELECT COUNT(*) AS n FROM books").fetchone()
        assert row["n"] == 0

    def test_closed_after_error(self, device: Path) -> None:
        """The connection is closed even when the block raises."""
        with pytest.raises(RuntimeError):
            with open_catalog(device) as conn:
                raise RuntimeError("boom")
        with pytest.raises(Exception, match="closed"):
            conn.execute("SELECT 1")
