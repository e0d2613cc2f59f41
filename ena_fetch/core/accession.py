"""
Accession validation and accession list file reading.

A single validator is shared by both input paths; the caller chooses what
happens to malformed values through an explicit `OnInvalid` policy.
"""

import logging
import re
from collections.abc import Iterable
from enum import Enum
from pathlib import Path

import aiofiles
from rich.markup import escape

from ena_fetch.exceptions import AccessionFileError, AccessionValidationError
from ena_fetch.models.stats import FetchStats

log = logging.getLogger(__name__)

ACCESSION_PATTERN = re.compile(r"^(SRR|ERR|DRR)[0-9]{6,10}$")


class OnInvalid(str, Enum):
    """What to do with an accession that fails validation."""

    SKIP_WITH_WARNING = "skip"
    REJECT_INVOCATION = "reject"


def is_valid_accession(value: str) -> bool:
    """Returns True if the value is an SRR, ERR or DRR run accession."""
    return ACCESSION_PATTERN.fullmatch(value) is not None


def validate_accessions(
    values: Iterable[str],
    on_invalid: OnInvalid,
    source: str = "command line",
) -> list[str]:
    """
    Validates accessions and removes duplicates, keeping first occurrences.

    Args:
        values: Candidate accession strings.
        on_invalid: Policy for malformed values.
        source: Where the values came from, used in diagnostics.

    Returns:
        The valid accessions in input order.

    Raises:
        AccessionValidationError: If a value is malformed and the policy is
            REJECT_INVOCATION.
    """
    accepted: list[str] = []
    seen: set[str] = set()
    for value in values:
        if not is_valid_accession(value):
            if on_invalid is OnInvalid.REJECT_INVOCATION:
                raise AccessionValidationError(
                    f"{value} is not a valid accession number "
                    "(expected SRR, ERR or DRR followed by 6-10 digits)."
                )
            log.warning(
                f"[yellow]Skipping '{escape(value)}' from {source}: "
                "not a valid accession number.[/yellow]"
            )
            continue
        if value in seen:
            log.debug(f"Ignoring duplicate accession {value} from {source}.")
            continue
        seen.add(value)
        accepted.append(value)
    return accepted


async def read_accession_lines(path: Path) -> list[tuple[int, str]]:
    """
    Reads candidate accessions from a file, one per line.

    Blank lines and lines starting with '#' are ignored.

    Returns:
        (line number, stripped value) pairs.
    """
    try:
        async with aiofiles.open(path, encoding="utf-8") as f:
            content = await f.read()
    except (OSError, UnicodeDecodeError) as e:
        raise AccessionFileError(f"Could not read accession file '{path}': {e}") from e

    lines = []
    for lineno, line in enumerate(content.splitlines(), start=1):
        line = line.strip()
        if line and not line.startswith("#"):
            lines.append((lineno, line))
    return lines


async def read_accession_file(
    path: Path, stats: FetchStats | None = None
) -> list[str]:
    """
    Reads and validates an accession list file.

    Malformed lines (such as a header) are skipped with a warning rather than
    failing the whole file.
    """
    accepted: list[str] = []
    for lineno, value in await read_accession_lines(path):
        valid = validate_accessions(
            [value], OnInvalid.SKIP_WITH_WARNING, source=f"{path}:{lineno}"
        )
        if not valid and stats is not None:
            stats.invalid_lines_skipped += 1
        accepted.extend(valid)
    accepted = list(dict.fromkeys(accepted))
    log.info(f"Read {len(accepted)} accessions from {path}.")
    return accepted
