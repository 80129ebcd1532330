from typing import Protocol, runtime_checkable

from wash.domain.shared.port import Port


@runtime_checkable
class ProgressReporter(Port, Protocol):
    """Side channel for stage messages while a workflow runs."""

    def report(self, message: str) -> None: ...


class SilentProgress:
    """Discards progress messages."""

    def report(self, message: str) -> None:
        pass
