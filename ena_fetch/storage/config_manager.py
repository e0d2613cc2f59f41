"""
Manages loading and validation of the optional INI configuration file.
"""

import configparser
import logging
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from ena_fetch.exceptions import ConfigurationError
from ena_fetch.models.config import FetchConfig

log = logging.getLogger(__name__)


class ConfigManager:
    """
    Builds the session configuration from an optional INI file and CLI options.

    Settings are read from the INI file's [DEFAULT] section; options given on
    the command line take precedence.
    """

    def __init__(self, config_file_path: Path | None = None):
        self.config_file_path = config_file_path
        self._parser = configparser.ConfigParser()

    def load_config(self, cli_options: dict[str, Any] | None = None) -> FetchConfig:
        """
        Loads configuration from the INI file, applies CLI overrides, and validates it.

        Args:
            cli_options: A dictionary of options provided via the command line.

        Returns:
            A validated FetchConfig object.

        Raises:
            ConfigurationError: If the config file is missing, invalid, or validation
            fails.
        """
        config_from_file: dict[str, Any] = {}
        if self.config_file_path is not None:
            if not self.config_file_path.is_file():
                raise ConfigurationError(
                    f"Configuration file not found at '{self.config_file_path}'."
                )
            try:
                self._parser.read(self.config_file_path, encoding="utf-8")
                config_from_file = self._get_config_as_dict()
            except (configparser.Error, ValueError) as e:
                raise ConfigurationError(
                    f"Error parsing configuration file: {e}"
                ) from e
            log.debug(
                f"Loaded settings from {self.config_file_path}: {config_from_file}"
            )

        if cli_options:
            config_from_file.update(cli_options)

        try:
            return FetchConfig(**config_from_file)
        except ValidationError as e:
            raise ConfigurationError(f"Configuration validation failed:\n{e}") from e

    def _get_config_as_dict(self) -> dict[str, Any]:
        """Reads the keys present in the 'DEFAULT' section into a dictionary."""
        section = self._parser["DEFAULT"]
        readers = {
            "num_requests": section.getint,
            "keep_single_end": section.getboolean,
            "output_format": section.get,
            "base_url": section.get,
            "timeout": section.getfloat,
        }
        unknown = set(section) - FetchConfig.get_ini_keys()
        if unknown:
            log.warning(
                f"[yellow]Ignoring unknown configuration keys: "
                f"{', '.join(sorted(unknown))}[/yellow]"
            )
        return {key: read(key) for key, read in readers.items() if key in section}
