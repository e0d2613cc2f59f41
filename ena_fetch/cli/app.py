"""
Defines the command-line interface for the application using Typer.
"""

import asyncio
import logging
import time
from pathlib import Path

import typer
from rich.console import Console
from rich.logging import RichHandler

from ena_fetch import __version__
from ena_fetch.api.client import ENAPortalClient
from ena_fetch.core.accession import (
    OnInvalid,
    read_accession_file,
    validate_accessions,
)
from ena_fetch.core.resolver import resolve_runs
from ena_fetch.exceptions import AccessionValidationError, EnaFetchError
from ena_fetch.models.config import OutputFormat
from ena_fetch.models.stats import FetchStats
from ena_fetch.output.formatters import format_runs
from ena_fetch.output.writer import write_output
from ena_fetch.storage.config_manager import ConfigManager

from .formatters import format_error_with_suggestions, print_summary_panel
from .progress_manager import ProgressManager

# stdout carries only the formatted document; everything else goes to stderr.
err_console = Console(stderr=True)

logging.basicConfig(
    level="WARNING",
    format="%(message)s",
    datefmt="[%X]",
    handlers=[
        RichHandler(
            console=err_console,
            rich_tracebacks=True,
            show_path=False,
            show_level=False,
            markup=True,
        )
    ],
)
log = logging.getLogger("ena_fetch")

app = typer.Typer(
    name="ena-fetch",
    help=(
        "Resolve SRA, ENA and DDBJ run accessions into FASTQ download URLs, md5"
        " checksums and file sizes using the ENA Portal API."
    ),
    rich_markup_mode="rich",
    pretty_exceptions_show_locals=False,
    add_completion=False,
)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"ena-fetch {__version__}")
        raise typer.Exit()


def _validate_direct_accessions(value: list[str] | None) -> list[str] | None:
    """Rejects the whole invocation if any accession argument is malformed."""
    if not value:
        return value
    try:
        return validate_accessions(value, OnInvalid.REJECT_INVOCATION)
    except AccessionValidationError as e:
        raise typer.BadParameter(str(e)) from e


def _set_log_level(verbose: int) -> None:
    log_level = "WARNING"
    if verbose == 1:
        log_level = "INFO"
    elif verbose >= 2:
        log_level = "DEBUG"
    logging.getLogger("ena_fetch").setLevel(log_level)


@app.command()
def fetch(
    accessions: list[str] | None = typer.Option(  # noqa: B008
        None,
        "--accession",
        "-a",
        help="Run accession to query (SRR, ERR or DRR). Repeat for several.",
        callback=_validate_direct_accessions,
    ),
    accession_file: Path | None = typer.Option(  # noqa: B008
        None,
        "--file",
        "-f",
        help="File with one accession per line. Invalid lines are skipped.",
    ),
    num_requests: int | None = typer.Option(
        None,
        "--num-requests",
        "-n",
        metavar="NUM",
        help="Maximum number of concurrent requests to ENA (1-10, default 1).",
    ),
    keep_single_end: bool | None = typer.Option(
        None,
        "--keep-single-end/--drop-single-end",
        "-s",
        help="Keep the unpaired FASTQ file of runs that also have a read pair.",
    ),
    output_format: OutputFormat | None = typer.Option(  # noqa: B008
        None,
        "--format",
        "-F",
        help="Output format (default json).",
    ),
    output_path: Path | None = typer.Option(  # noqa: B008
        None,
        "--output",
        "-o",
        help="Write the output to this file instead of stdout.",
    ),
    config_file: Path | None = typer.Option(  # noqa: B008
        None,
        "--config",
        "-c",
        help="INI file providing defaults for the options above.",
    ),
    base_url: str | None = typer.Option(
        None, "--base-url", help="Override the ENA Portal API base URL."
    ),
    timeout: float | None = typer.Option(
        None,
        "--timeout",
        help="Total time allowed per request in seconds (0 disables it).",
    ),
    summary: bool = typer.Option(
        False, "--summary", help="Print a session summary to stderr."
    ),
    verbose: int = typer.Option(
        0,
        "--verbose",
        "-v",
        count=True,
        help="Increase logging verbosity (-vv for debug).",
    ),
    version: bool = typer.Option(
        False,
        "--version",
        help="Show version and exit.",
        is_eager=True,
        callback=_version_callback,
    ),
):
    """Fetch FASTQ file metadata for run accessions from ENA."""
    _set_log_level(verbose)

    if not accessions and accession_file is None:
        raise typer.BadParameter(
            "Provide at least one --accession or an accession --file."
        )

    cli_options = {
        key: value
        for key, value in {
            "num_requests": num_requests,
            "keep_single_end": keep_single_end,
            "output_format": output_format,
            "output_path": str(output_path) if output_path else None,
            "base_url": base_url,
            "timeout": timeout,
        }.items()
        if value is not None
    }

    stats = FetchStats()

    async def _fetch_async():
        requested = list(accessions or [])
        if accession_file is not None:
            requested.extend(await read_accession_file(accession_file, stats))
        requested = list(dict.fromkeys(requested))

        config = ConfigManager(config_file).load_config(
            {**cli_options, "accessions": requested}
        )
        if not config.accessions:
            log.warning("[yellow]No valid accessions to query.[/yellow]")

        start_time = time.monotonic()
        async with (
            ENAPortalClient(
                config.base_url, config.num_requests, config.timeout
            ) as api_client,
            ProgressManager(
                console=err_console, enabled=err_console.is_terminal
            ) as progress_manager,
        ):
            progress_manager.initialize_session(len(config.accessions))
            runs = await resolve_runs(config, api_client, stats, progress_manager)
        duration = time.monotonic() - start_time

        document = format_runs(runs, config.output_format, config.keep_single_end)
        await write_output(document, config.output_path)

        if summary:
            print_summary_panel(err_console, stats, duration)

    try:
        asyncio.run(_fetch_async())
    except EnaFetchError as e:
        err_console.print(format_error_with_suggestions(e))
        raise typer.Exit(code=1) from e
