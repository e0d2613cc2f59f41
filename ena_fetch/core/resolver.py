"""
Runs the resolution pipeline: fetch, sort, then normalize.
"""

import logging

from ena_fetch.models.config import FetchConfig
from ena_fetch.models.run import Run
from ena_fetch.models.stats import FetchStats

from .fetcher import ConcurrentFetcher
from .normalizer import normalize_runs

log = logging.getLogger(__name__)


def sort_runs(runs: list[Run]) -> list[Run]:
    """Orders runs by accession; runs sharing an accession keep their order."""
    return sorted(runs, key=lambda run: run.accession)


async def resolve_runs(
    config: FetchConfig,
    api_client,
    stats: FetchStats | None = None,
    progress=None,
) -> list[Run]:
    """
    Resolves every accession in the configuration into runs.

    Sorting and normalization only start once all requests have finished, so
    the result does not depend on network timing.
    """
    fetcher = ConcurrentFetcher(
        api_client, config.num_requests, stats=stats, progress=progress
    )
    runs = await fetcher.fetch_runs(config.accessions)
    runs = normalize_runs(sort_runs(runs), config.keep_single_end)
    log.info(
        f"Resolved {len(runs)} runs from {len(config.accessions)} accessions."
    )
    return runs
