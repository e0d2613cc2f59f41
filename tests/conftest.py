"""
Global pytest configuration and fixtures.
"""

import asyncio

import pytest

from ena_fetch.models.run import FileReportRecord, ReadFile, Run

SE_URL = "ftp.sra.ebi.ac.uk/vol1/fastq/SRR162/057/SRR16298157/SRR16298157.fastq.gz"
R1_URL = "ftp.sra.ebi.ac.uk/vol1/fastq/SRR162/057/SRR16298157/SRR16298157_1.fastq.gz"
R2_URL = "ftp.sra.ebi.ac.uk/vol1/fastq/SRR162/057/SRR16298157/SRR16298157_2.fastq.gz"


def make_record(accession, urls=(), sizes=(), md5s=(), **extra):
    """Builds a file report record from lists of per-file values."""
    return FileReportRecord(
        run_accession=accession,
        fastq_ftp=";".join(urls),
        fastq_bytes=";".join(str(s) for s in sizes),
        fastq_md5=";".join(md5s),
        **extra,
    )


def make_run(accession, count):
    """Builds a run with `count` numbered read files."""
    return Run(
        accession=accession,
        reads=[
            ReadFile(url=f"ftp://host/{accession}_{i}.fastq.gz", md5=f"md5_{i}", bytes=i)
            for i in range(count)
        ],
    )


class FakeENAClient:
    """
    Stands in for ENAPortalClient. `reports` maps accessions to record lists or
    to an exception instance that is raised instead.
    """

    def __init__(self, reports=None, delay=0.0):
        self.reports = reports or {}
        self.delay = delay
        self.calls = []
        self.in_flight = 0
        self.max_in_flight = 0

    async def fetch_file_report(self, accession):
        self.calls.append(accession)
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            await asyncio.sleep(self.delay)
            result = self.reports.get(accession, [])
            if isinstance(result, Exception):
                raise result
            return result
        finally:
            self.in_flight -= 1

    async def close(self):
        pass

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()


@pytest.fixture
def paired_record():
    return make_record(
        "SRR16298157",
        [R1_URL, R2_URL],
        [43409, 42752],
        ["aaf5b365c1b45083c014baa35657b463", "e80f09063bf017fa08b0dd881e840ed9"],
        sra_ftp="ftp.sra.ebi.ac.uk/vol1/srr/SRR162/057/SRR16298157",
        sra_bytes="157435",
        sra_md5="baa98dd72f2a966be8f76569e46c03d9",
    )


@pytest.fixture
def three_file_record():
    return make_record(
        "SRR16298157",
        [SE_URL, R1_URL, R2_URL],
        [100, 43409, 42752],
        ["md5se", "md5r1", "md5r2"],
    )


@pytest.fixture
def fake_client_factory():
    return FakeENAClient
