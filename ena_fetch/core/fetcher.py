"""
Concurrent file report fetching with per-accession error isolation.
"""

import asyncio
import logging
from typing import Optional

import aiohttp
from rich.markup import escape

from ena_fetch.exceptions import RecordShapeError, RequestError
from ena_fetch.models.config import clamp_concurrency
from ena_fetch.models.run import Run
from ena_fetch.models.stats import FetchStats

from .parser import build_run

log = logging.getLogger(__name__)

# Failures that only cost the accession being fetched
FETCH_ERRORS = (aiohttp.ClientError, asyncio.TimeoutError, RequestError)


class ConcurrentFetcher:
    """
    Fetches file reports for many accessions with a bounded number of requests
    in flight. A failed accession is logged and contributes no runs; it never
    affects the other accessions.
    """

    def __init__(
        self,
        api_client,
        max_concurrent: int = 1,
        stats: FetchStats | None = None,
        progress=None,
    ):
        """
        Args:
            api_client: The ENAPortalClient instance.
            max_concurrent: Maximum number of requests in flight, clamped to [1, 10].
            stats: Optional session statistics to update.
            progress: Optional ProgressManager notified as accessions complete.
        """
        self.api_client = api_client
        self.max_concurrent = clamp_concurrency(max_concurrent)
        self.semaphore = asyncio.Semaphore(self.max_concurrent)
        self.stats = stats
        self.progress = progress

    async def fetch_accession(self, accession: str) -> tuple[str, Optional[list[Run]]]:
        """
        Fetches and parses the runs of one accession.

        Returns:
            (accession, runs), with runs set to None if the request failed.
        """
        async with self.semaphore:
            log.info(f"Querying ENA for accession: {accession}")
            try:
                records = await self.api_client.fetch_file_report(accession)
            except FETCH_ERRORS as e:
                log.warning(
                    f"[red]Error querying ENA for accession {accession}: "
                    f"{escape(str(e)) or type(e).__name__}[/red]"
                )
                return accession, None

        runs = []
        for record in records:
            try:
                runs.append(build_run(record))
            except RecordShapeError as e:
                log.warning(f"[yellow]Skipping record: {escape(str(e))}[/yellow]")
                if self.stats is not None:
                    self.stats.records_skipped += 1
        if not runs:
            log.info(f"No runs found for accession {accession}.")
        return accession, runs

    async def fetch_runs(self, accessions: list[str]) -> list[Run]:
        """
        Fetches the runs of every accession.

        Results are collected as requests complete, so the order of the returned
        runs does not follow the order of the accessions.
        """
        if not accessions:
            return []

        log.debug(
            f"Fetching file reports for {len(accessions)} accessions "
            f"with up to {self.max_concurrent} concurrent requests..."
        )
        if self.stats is not None:
            self.stats.accessions_requested += len(accessions)

        tasks = [asyncio.ensure_future(self.fetch_accession(a)) for a in accessions]
        resolved: list[Run] = []
        for next_done in asyncio.as_completed(tasks):
            accession, runs = await next_done
            if runs is None:
                if self.stats is not None:
                    self.stats.record_failure(accession)
            else:
                resolved.extend(runs)
                if self.stats is not None:
                    self.stats.record_success(accession, runs)
            if self.progress is not None:
                self.progress.advance(accession, failed=runs is None)

        return resolved
