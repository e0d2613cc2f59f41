"""
Settings Layer.

Loads the optional INI configuration file that supplies defaults for the
command-line options.
"""

from .config_manager import ConfigManager

__all__ = ["ConfigManager"]
