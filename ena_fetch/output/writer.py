"""
Writes a formatted document to standard output or to a file.
"""

import logging
import sys
from pathlib import Path

import aiofiles

from ena_fetch.exceptions import OutputWriteError

log = logging.getLogger(__name__)

STDOUT_PATH = "-"


async def write_output(document: str, path: str | Path | None = None) -> None:
    """
    Writes the document to `path`, or to stdout when no path (or '-') is given.

    Raises:
        OutputWriteError: If the file cannot be written.
    """
    if path is None or str(path) == STDOUT_PATH:
        sys.stdout.write(document)
        sys.stdout.flush()
        return

    destination = Path(path)
    try:
        async with aiofiles.open(destination, "w", encoding="utf-8") as f:
            await f.write(document)
    except OSError as e:
        raise OutputWriteError(f"Could not write output to '{destination}': {e}") from e
    log.info(f"Wrote {len(document)} characters to {destination}.")
