# ABOUTME: Run configuration for a sync: which source folders go to which device volumes.
# ABOUTME: Validates the combination of roots before anything touches the device.

from collections.abc import Iterator
from dataclasses import dataclass, field
from pathlib import Path

from readershelf.core.content import SourceKind


class ConfigurationError(Exception):
    """Raised when the supplied roots cannot describe a valid sync run."""


@dataclass(frozen=True)
class SourceRoot:
    """A source folder paired with the device volume it is synced onto."""

    kind: SourceKind
    source: Path
    device_root: Path


@dataclass
class SyncConfig:
    """Roots and options for one sync run.

    The catalog always lives on the device body, so ``body_root`` is required
    even when only the SD card is being filled.
    """

    body_root: Path | None = None
    body_source: Path | None = None
    sd_root: Path | None = None
    sd_source: Path | None = None
    sub_directory: Path = field(default_factory=Path)

    def validate(self) -> None:
        """Check that at least one complete source/device pair is present.

        Raises:
            ConfigurationError: If the body root is missing, or neither a body
                source nor a complete SD root/source pair was given.
        """
        if self.body_root is None:
            raise ConfigurationError("A device body root is required.")
        if self.body_source is None and (self.sd_root is None or self.sd_source is None):
            raise ConfigurationError(
                "Give a body source, or both an SD root and an SD source."
            )
        if self.sub_directory.is_absolute():
            raise ConfigurationError(
                f"Sub-directory must be relative: {self.sub_directory}"
            )

    def roots(self) -> Iterator[SourceRoot]:
        """Yield the complete source/device pairs, primary first."""
        if self.body_source is not None and self.body_root is not None:
            yield SourceRoot(SourceKind.PRIMARY, self.body_source, self.body_root)
        if self.sd_source is not None and self.sd_root is not None:
            yield SourceRoot(SourceKind.SECONDARY, self.sd_source, self.sd_root)
