"""
Turns ENA file report records into runs.

`parse_run_record` is pure and returns its diagnostics alongside the run;
`build_run` is the logging wrapper used by the fetcher.
"""

import logging
from dataclasses import dataclass, field

from rich.markup import escape

from ena_fetch.exceptions import RecordShapeError
from ena_fetch.models.run import FileReportRecord, ReadFile, Run

log = logging.getLogger(__name__)

FIELD_SEPARATOR = ";"
URL_SCHEME = "ftp://"


@dataclass
class ParsedRun:
    """A parsed run and any non-fatal problems found while parsing it."""

    run: Run
    warnings: list[str] = field(default_factory=list)


def split_field(value: str) -> list[str]:
    """Splits a semicolon-joined field; an empty field has no values."""
    if not value:
        return []
    return value.split(FIELD_SEPARATOR)


def parse_bytes(value: str) -> int | None:
    """Parses a byte count, returning None if it is not a non-negative integer."""
    if not (value.isascii() and value.isdigit()):
        return None
    return int(value)


def parse_run_record(record: FileReportRecord) -> ParsedRun:
    """
    Builds a run from the FASTQ fields of a file report record.

    Reads are kept in the order ENA lists them, whatever their number; deciding
    whether that number is usable is left to the consumers.

    Raises:
        RecordShapeError: If the url, byte and md5 fields hold different numbers
            of values.
    """
    urls = split_field(record.fastq_ftp)
    sizes = split_field(record.fastq_bytes)
    checksums = split_field(record.fastq_md5)

    if not len(urls) == len(sizes) == len(checksums):
        raise RecordShapeError(
            f"Record for {record.run_accession} lists {len(urls)} url(s), "
            f"{len(sizes)} byte count(s) and {len(checksums)} md5(s)."
        )

    warnings = []
    reads = []
    for url, size, checksum in zip(urls, sizes, checksums):
        num_bytes = parse_bytes(size)
        if num_bytes is None:
            warnings.append(
                f"Invalid byte count '{size}' for {url} in {record.run_accession}; "
                "using 0."
            )
            num_bytes = 0
        reads.append(ReadFile(url=f"{URL_SCHEME}{url}", md5=checksum, bytes=num_bytes))

    return ParsedRun(Run(accession=record.run_accession, reads=reads), warnings)


def build_run(record: FileReportRecord) -> Run:
    """Parses a record, logging any parse warnings."""
    parsed = parse_run_record(record)
    for message in parsed.warnings:
        log.warning(f"[yellow]{escape(message)}[/yellow]")
    if parsed.run.layout is None:
        log.debug(
            f"Run {parsed.run.accession} has {len(parsed.run.reads)} FASTQ files."
        )
    return parsed.run
