"""
Serializes resolved runs as JSON or one of three CSV layouts.

Every formatter renders the complete document in memory, so a run that cannot
be represented raises before any output is written.
"""

import csv
import io
import json
from collections.abc import Callable

from ena_fetch.exceptions import StructuralError
from ena_fetch.models.config import OutputFormat
from ena_fetch.models.run import ReadFile, ReadLayout, Run

READ_HEADER = ["accession", "url", "md5", "bytes"]

# Kept as historically published, including the placement of bytes_1 and
# bytes_se. Data cells always follow (url, md5, bytes) for se, 1, 2.
WIDE_HEADER = [
    "accession",
    "url_se",
    "md5_se",
    "bytes_1",
    "url_1",
    "md5_1",
    "bytes_se",
    "url_2",
    "md5_2",
    "bytes_2",
]

LONG_HEADER = ["accession", "variable", "value"]

SINGLE_END = "se"
FIRST_MATE = "1"
SECOND_MATE = "2"


def _new_writer(buffer: io.StringIO):
    return csv.writer(buffer, lineterminator="\n")


def _slots(run: Run, output_format: OutputFormat) -> dict[str, ReadFile]:
    """Maps each read of a run to its single-end or mate suffix."""
    layout = run.layout
    if layout is ReadLayout.SINGLE:
        return {SINGLE_END: run.reads[0]}
    if layout is ReadLayout.PAIRED:
        return {FIRST_MATE: run.reads[0], SECOND_MATE: run.reads[1]}
    if layout is ReadLayout.PAIRED_PLUS_ONE:
        return {
            SINGLE_END: run.reads[0],
            FIRST_MATE: run.reads[1],
            SECOND_MATE: run.reads[2],
        }
    raise StructuralError(run.accession, len(run.reads), output_format.value)


def format_json(runs: list[Run], keep_single_end: bool = False) -> str:
    """Pretty-prints the runs as a JSON array."""
    document = [run.model_dump(mode="json") for run in runs]
    return json.dumps(document, indent=2) + "\n"


def format_csv_reads(runs: list[Run], keep_single_end: bool = False) -> str:
    """One row per read file, under a single header."""
    buffer = io.StringIO()
    writer = _new_writer(buffer)
    writer.writerow(READ_HEADER)
    for run in runs:
        for read in run.reads:
            writer.writerow([run.accession, read.url, read.md5, read.bytes])
    return buffer.getvalue()


def format_csv_wide(runs: list[Run], keep_single_end: bool = False) -> str:
    """
    One row per run with a (url, md5, bytes) triple for the single-end file and
    each mate. Single-end runs are only accepted when single-end reads are kept.

    Raises:
        StructuralError: If a run's read count cannot be represented.
    """
    buffer = io.StringIO()
    writer = _new_writer(buffer)
    writer.writerow(WIDE_HEADER)
    for run in runs:
        if run.layout is ReadLayout.SINGLE and not keep_single_end:
            raise StructuralError(run.accession, 1, OutputFormat.CSV_WIDE.value)
        slots = _slots(run, OutputFormat.CSV_WIDE)
        row = [run.accession]
        for suffix in (SINGLE_END, FIRST_MATE, SECOND_MATE):
            read = slots.get(suffix)
            if read is None:
                row.extend(["", "", ""])
            else:
                row.extend([read.url, read.md5, read.bytes])
        writer.writerow(row)
    return buffer.getvalue()


def format_csv_long(runs: list[Run], keep_single_end: bool = False) -> str:
    """
    One (accession, variable, value) row per field: 3, 6 or 9 rows per run.

    Raises:
        StructuralError: If a run's read count cannot be represented.
    """
    buffer = io.StringIO()
    writer = _new_writer(buffer)
    writer.writerow(LONG_HEADER)
    for run in runs:
        for suffix, read in _slots(run, OutputFormat.CSV_LONG).items():
            writer.writerow([run.accession, f"url_{suffix}", read.url])
            writer.writerow([run.accession, f"md5_{suffix}", read.md5])
            writer.writerow([run.accession, f"bytes_{suffix}", read.bytes])
    return buffer.getvalue()


FORMATTERS: dict[OutputFormat, Callable[[list[Run], bool], str]] = {
    OutputFormat.JSON: format_json,
    OutputFormat.CSV: format_csv_reads,
    OutputFormat.CSV_WIDE: format_csv_wide,
    OutputFormat.CSV_LONG: format_csv_long,
}


def format_runs(
    runs: list[Run],
    output_format: OutputFormat = OutputFormat.JSON,
    keep_single_end: bool = False,
) -> str:
    """Renders the runs in the requested output format."""
    return FORMATTERS[OutputFormat(output_format)](runs, keep_single_end)
