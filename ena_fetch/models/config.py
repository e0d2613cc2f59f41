"""
Pydantic model for application configuration.
Provides robust validation for all settings.
"""

import logging
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator

log = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://www.ebi.ac.uk/ena/portal/api"

# Upper bound on simultaneous requests to the shared ENA service
MAX_CONCURRENT_REQUESTS = 10
MIN_CONCURRENT_REQUESTS = 1


class OutputFormat(str, Enum):
    """The output shapes a resolved run collection can be written in."""

    JSON = "json"
    CSV = "csv"
    CSV_WIDE = "csv-wide"
    CSV_LONG = "csv-long"


def clamp_concurrency(num_requests: int) -> int:
    """
    Bounds the number of concurrent requests to the range [1, 10], warning when
    the requested value had to be adjusted.
    """
    if num_requests > MAX_CONCURRENT_REQUESTS:
        log.warning(
            f"[yellow]To be nice to ENA, only up to {MAX_CONCURRENT_REQUESTS} "
            f"concurrent requests are allowed. Setting number of requests to "
            f"{MAX_CONCURRENT_REQUESTS}.[/yellow]"
        )
        return MAX_CONCURRENT_REQUESTS
    if num_requests < MIN_CONCURRENT_REQUESTS:
        log.warning(
            "[yellow]Number of requests should be at least 1. "
            "Setting number of requests to 1.[/yellow]"
        )
        return MIN_CONCURRENT_REQUESTS
    return num_requests


class FetchConfig(BaseModel):
    """A validated configuration model for one resolution session."""

    model_config = ConfigDict(validate_assignment=True, str_strip_whitespace=True)

    # Input
    accessions: list[str] = Field(default_factory=list)

    # Fetch settings
    num_requests: int = 1
    base_url: str = DEFAULT_BASE_URL
    timeout: float = 60.0

    # Output settings
    keep_single_end: bool = False
    output_format: OutputFormat = OutputFormat.JSON
    output_path: str | None = None

    @field_validator("num_requests")
    @classmethod
    def validate_num_requests(cls, v: int) -> int:
        return clamp_concurrency(v)

    @field_validator("base_url")
    @classmethod
    def validate_base_url(cls, v: str) -> str:
        """Ensures the API base URL is an http(s) URL without a trailing slash."""
        if not v.startswith(("http://", "https://")):
            raise ValueError(f"Base URL must start with http:// or https://, got: {v}")
        return v.rstrip("/")

    @field_validator("timeout")
    @classmethod
    def validate_timeout(cls, v: float) -> float:
        if v < 0:
            raise ValueError("Timeout cannot be negative (use 0 to disable it).")
        return v

    @classmethod
    def get_ini_keys(cls) -> set[str]:
        """Returns the set of keys that may be set from the INI file."""
        internal_fields = {"accessions", "output_path"}
        return {key for key in cls.model_fields if key not in internal_fields}
