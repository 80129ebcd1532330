"""Console output for the CLI.

Provides a Console class that wraps rich for consistent output.
All CLI output should go through this module.
"""

from contextlib import contextmanager
from typing import Any, Iterator

from rich.console import Console as RichConsole
from rich.markup import escape
from rich.status import Status
from rich.table import Table

from wash.domain.artifact.port.progress import ProgressReporter


class Console:
    """CLI output manager wrapping rich.

    Results go to stdout, errors and transient status go to stderr so
    that piping a command's output never picks up spinner frames.
    """

    def __init__(self) -> None:
        self._console = RichConsole(stderr=False)
        self._err_console = RichConsole(stderr=True)

    # -------------------------------------------------------------------------
    # Status messages
    # -------------------------------------------------------------------------

    def success(self, message: str) -> None:
        """Print a success message."""
        self._console.print(message, soft_wrap=True)

    def error(self, message: str) -> None:
        """Print an error message to stderr."""
        self._err_console.print(f"[red]Error:[/red] {escape(message)}", soft_wrap=True)

    # -------------------------------------------------------------------------
    # Structured output
    # -------------------------------------------------------------------------

    def table(
        self,
        rows: list[dict[str, Any]],
        columns: list[tuple[str, str]],  # (key, header)
        *,
        title: str | None = None,
    ) -> None:
        """Print a table.

        Args:
            rows: List of dicts containing row data.
            columns: List of (key, header) tuples defining columns.
            title: Optional table title.
        """
        table = Table(title=title, show_header=True, header_style="bold")

        for _, header in columns:
            table.add_column(header)

        for row in rows:
            table.add_row(*[escape(str(row.get(key, ""))) for key, _ in columns])

        self._console.print(table)

    # -------------------------------------------------------------------------
    # Progress and status
    # -------------------------------------------------------------------------

    @contextmanager
    def status(self, message: str) -> Iterator["StatusProgress"]:
        """Show a spinner for the duration of a long operation.

        Usage:
            with console.status("Starting...") as progress:
                progress.report("Downloading ...")
        """
        if not self._err_console.is_terminal:
            yield StatusProgress(None)
            return
        with self._err_console.status(escape(message)) as status:
            yield StatusProgress(status)


class StatusProgress(ProgressReporter):
    """ProgressReporter that drives a rich spinner."""

    def __init__(self, status: Status | None) -> None:
        self._status = status

    def report(self, message: str) -> None:
        if self._status is not None:
            self._status.update(escape(message))


# Module-level default instance for convenience
_default: Console | None = None


def get_console() -> Console:
    """Get the default console instance."""
    global _default
    if _default is None:
        _default = Console()
    return _default
