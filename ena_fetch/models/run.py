"""
Pydantic models for ENA file report records and the runs resolved from them.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ReadLayout(str, Enum):
    """The supported shapes of a run's FASTQ file set, keyed by file count."""

    SINGLE = "single"
    PAIRED = "paired"
    PAIRED_PLUS_ONE = "paired_plus_one"

    @classmethod
    def from_count(cls, count: int) -> "ReadLayout | None":
        """Returns the layout for a number of read files, or None if unsupported."""
        return _LAYOUT_BY_COUNT.get(count)


_LAYOUT_BY_COUNT = {
    1: ReadLayout.SINGLE,
    2: ReadLayout.PAIRED,
    3: ReadLayout.PAIRED_PLUS_ONE,
}


class ReadFile(BaseModel):
    """One downloadable FASTQ file."""

    url: str
    md5: str
    bytes: int = Field(default=0, ge=0)


class Run(BaseModel):
    """
    A sequencing run and its FASTQ files.

    When three files are present the first one is the unpaired file and the
    remaining two are the read pair, in the order ENA reports them.
    """

    model_config = ConfigDict(validate_assignment=True)

    accession: str
    reads: list[ReadFile] = Field(default_factory=list)

    @property
    def layout(self) -> ReadLayout | None:
        return ReadLayout.from_count(len(self.reads))

    @property
    def total_bytes(self) -> int:
        return sum(read.bytes for read in self.reads)


class FileReportRecord(BaseModel):
    """
    One element of the JSON array returned by the ENA Portal API filereport
    endpoint for `result=read_run`.

    Multi-file fields are semicolon-joined strings. Only the `fastq_*` fields
    are used to build runs; the submitted and SRA fields are kept for
    completeness.
    """

    model_config = ConfigDict(extra="ignore")

    run_accession: str
    fastq_ftp: str = ""
    fastq_bytes: str = ""
    fastq_md5: str = ""
    submitted_ftp: str = ""
    submitted_md5: str = ""
    submitted_bytes: str = ""
    sra_ftp: str = ""
    sra_bytes: str = ""
    sra_md5: str = ""

    @field_validator("*", mode="before")
    @classmethod
    def null_to_empty(cls, v):
        """ENA reports missing values as null in some result sets."""
        return "" if v is None else v
