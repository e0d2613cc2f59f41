"""
Data Models Layer.

This package contains the Pydantic models and dataclasses that define the core
data structures used throughout the application: raw file report records,
resolved runs, configuration, and session statistics.
"""

from .config import FetchConfig, OutputFormat
from .run import FileReportRecord, ReadFile, ReadLayout, Run
from .stats import FetchStats

__all__ = [
    "FetchConfig",
    "FetchStats",
    "FileReportRecord",
    "OutputFormat",
    "ReadFile",
    "ReadLayout",
    "Run",
]
