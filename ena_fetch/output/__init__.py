"""
Output Layer.

Renders resolved runs in the supported output formats and writes the result.
"""

from .formatters import format_runs
from .writer import write_output

__all__ = ["format_runs", "write_output"]
