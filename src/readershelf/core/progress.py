# ABOUTME: SyncReporter protocol for user-facing progress of a sync run.
# ABOUTME: The core reports phases and per-file outcomes; the CLI decides how to show them.

from pathlib import PurePath
from typing import Protocol, runtime_checkable


@runtime_checkable
class SyncReporter(Protocol):
    """Receives progress events. Advisory only: nothing depends on them."""

    def phase(self, name: str) -> None: ...

    def file(self, name: str, destination: PurePath) -> None: ...

    def outcome(self, copied: bool) -> None: ...


class NullReporter:
    """Reporter that discards every event."""

    def phase(self, name: str) -> None:
        pass

    def file(self, name: str, destination: PurePath) -> None:
        pass

    def outcome(self, copied: bool) -> None:
        pass
