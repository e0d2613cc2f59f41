"""
Manages a Rich progress bar on stderr while accessions are being queried.
"""

from rich.console import Console
from rich.progress import (
    BarColumn,
    MofNCompleteColumn,
    Progress,
    SpinnerColumn,
    TaskID,
    TextColumn,
    TimeElapsedColumn,
)


class ProgressManager:
    """
    Shows how many accessions have been queried so far. The display is only
    started when enabled, so the manager can be passed around unconditionally.
    """

    def __init__(self, console: Console, enabled: bool = True):
        self.console = console
        self.enabled = enabled

        self.progress = Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            BarColumn(bar_width=30),
            MofNCompleteColumn(),
            "•",
            TextColumn("[red]{task.fields[failed]} failed"),
            "•",
            TimeElapsedColumn(),
            console=console,
            transient=True,
        )
        self._task_id: TaskID | None = None
        self.failed = 0

    def initialize_session(self, total_accessions: int):
        if self.enabled:
            self._task_id = self.progress.add_task(
                "Querying ENA", total=total_accessions, failed=0
            )

    def advance(self, accession: str, failed: bool = False):
        """Records that an accession finished, successfully or not."""
        if failed:
            self.failed += 1
        if self.enabled and self._task_id is not None:
            self.progress.update(
                self._task_id,
                advance=1,
                failed=self.failed,
                description=f"Querying ENA [dim]({accession})[/dim]",
            )

    async def __aenter__(self):
        if self.enabled:
            self.progress.start()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        if self.enabled:
            self.progress.stop()
