"""
Async client for the ENA Portal API file report endpoint.
"""

import json
import logging
import time
from typing import Any, Optional
from urllib.parse import urlencode

import aiohttp
from pydantic import ValidationError

from ena_fetch import __version__
from ena_fetch.exceptions import RequestError
from ena_fetch.models.config import DEFAULT_BASE_URL
from ena_fetch.models.run import FileReportRecord

log = logging.getLogger(__name__)


class ENAPortalClient:
    """
    Async client for the ENA Portal API.

    A single aiohttp session is created lazily and shared by every request made
    through the client; requests carry no per-call mutable state.
    """

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        max_workers: int = 1,
        timeout: float | None = 60.0,
    ):
        """
        Initializes the API client.

        Args:
            base_url: Root of the Portal API, without a trailing slash.
            max_workers: The number of concurrent requests, used to size the
                connection pool.
            timeout: Total time allowed for one request in seconds. None or 0
                means no limit.
        """
        self.base_url = base_url.rstrip("/")
        self.max_workers = max_workers
        self.timeout = timeout or None

        self._session: Optional[aiohttp.ClientSession] = None

    async def _initialize_session(self) -> None:
        """Ensures an active aiohttp session is available."""
        if self._session is None or self._session.closed:
            connector = aiohttp.TCPConnector(
                limit=self.max_workers,
                limit_per_host=self.max_workers,
                ttl_dns_cache=300,
            )
            self._session = aiohttp.ClientSession(
                connector=connector,
                headers={
                    "User-Agent": f"ena-fetch/{__version__}",
                    "Accept": "application/json",
                    "Accept-Encoding": "gzip, deflate",
                },
                timeout=aiohttp.ClientTimeout(total=self.timeout),
            )

    async def close(self) -> None:
        """Gracefully closes the aiohttp session."""
        if self._session and not self._session.closed:
            await self._session.close()

    async def __aenter__(self) -> "ENAPortalClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    def build_report_url(self, accession: str) -> str:
        """Returns the file report URL listing the runs of an accession."""
        params = {"accession": accession, "result": "read_run", "format": "json"}
        return f"{self.base_url}/filereport?{urlencode(params)}"

    async def api_call(self, url: str) -> Any:
        """
        Makes a single GET request and decodes the JSON body.

        ENA answers with an empty body when an accession has no runs, which is
        returned as an empty list.
        """
        await self._initialize_session()

        start_time = time.monotonic()
        async with self._session.get(url) as r:
            duration_ms = (time.monotonic() - start_time) * 1000
            log.debug(f"GET {url} -> {r.status} in {duration_ms:.0f} ms")
            r.raise_for_status()
            try:
                body = await r.text()
            except UnicodeDecodeError as e:
                raise RequestError(
                    f"Response from {url} could not be decoded: {e}"
                ) from e

        if not body.strip():
            return []
        try:
            return json.loads(body)
        except json.JSONDecodeError as e:
            raise RequestError(f"Response from {url} is not valid JSON: {e}") from e

    async def fetch_file_report(self, accession: str) -> list[FileReportRecord]:
        """
        Fetches the read_run file report for an accession.

        An accession may resolve to several runs, e.g. when it names a study.

        Raises:
            RequestError: If the body is not a JSON array of report records.
            aiohttp.ClientError: On connection failures or error statuses.
        """
        url = self.build_report_url(accession)
        payload = await self.api_call(url)
        if not isinstance(payload, list):
            raise RequestError(
                f"Expected a JSON array for {accession}, got {type(payload).__name__}."
            )
        try:
            return [FileReportRecord.model_validate(item) for item in payload]
        except ValidationError as e:
            raise RequestError(
                f"Unexpected file report record for {accession}: {e}"
            ) from e
