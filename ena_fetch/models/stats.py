"""
Dataclass for tracking resolution session statistics.
"""

from dataclasses import dataclass, field

from ena_fetch.models.run import Run


@dataclass
class FetchStats:
    """Tracks statistics for a resolution session."""

    accessions_requested: int = 0
    accessions_succeeded: int = 0
    accessions_failed: int = 0
    accessions_empty: int = 0
    invalid_lines_skipped: int = 0
    records_skipped: int = 0
    runs_resolved: int = 0
    reads_resolved: int = 0
    total_bytes: int = 0
    failed_accessions: list[str] = field(default_factory=list)

    def record_success(self, accession: str, runs: list[Run]) -> None:
        self.accessions_succeeded += 1
        if not runs:
            self.accessions_empty += 1
        self.runs_resolved += len(runs)
        for run in runs:
            self.reads_resolved += len(run.reads)
            self.total_bytes += run.total_bytes

    def record_failure(self, accession: str) -> None:
        self.accessions_failed += 1
        self.failed_accessions.append(accession)
