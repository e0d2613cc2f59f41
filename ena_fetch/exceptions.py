"""
Defines custom exceptions for the application to allow for more specific error handling.
"""


class EnaFetchError(Exception):
    """Base exception for all application-specific errors."""


class AccessionValidationError(EnaFetchError):
    """Raised when an accession given directly on the command line is malformed."""


class AccessionFileError(EnaFetchError):
    """Raised when an accession list file cannot be read."""


class RequestError(EnaFetchError):
    """Raised when the file report for a single accession cannot be retrieved."""


class RecordShapeError(EnaFetchError):
    """
    Raised when the FASTQ url, byte and md5 fields of a record split into
    different numbers of values.
    """


class StructuralError(EnaFetchError):
    """
    Raised when a run carries a number of read files that the active output
    format cannot represent.
    """

    def __init__(self, accession: str, read_count: int, output_format: str):
        self.accession = accession
        self.read_count = read_count
        self.output_format = output_format
        super().__init__(
            f"Run {accession} has {read_count} read file(s), which cannot be "
            f"written in '{output_format}' format."
        )


class ConfigurationError(EnaFetchError):
    """Raised for issues related to configuration loading or validation."""


class OutputWriteError(EnaFetchError):
    """Raised when the formatted output cannot be written to its destination."""
