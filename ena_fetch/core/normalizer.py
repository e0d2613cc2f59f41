"""
Optional removal of the unpaired FASTQ file from runs that also carry a pair.
"""

from ena_fetch.models.run import ReadLayout, Run


def normalize_reads(run: Run, keep_single_end: bool) -> Run:
    """
    Drops the leading unpaired file of a three-file run unless single-end reads
    are kept. Any other run is returned unchanged.
    """
    if not keep_single_end and run.layout is ReadLayout.PAIRED_PLUS_ONE:
        run.reads = run.reads[1:]
    return run


def normalize_runs(runs: list[Run], keep_single_end: bool) -> list[Run]:
    return [normalize_reads(run, keep_single_end) for run in runs]
