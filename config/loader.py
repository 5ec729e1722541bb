"""Configuration file loader and validator.

Reads the INI configuration of the translator client, coerces each value to the type declared
in ``models.config_models`` and validates the result. Raises exceptions for any issue encountered.
"""

from __future__ import annotations

import ast
import configparser
import logging
from configparser import ConfigParser
from dataclasses import fields
from pathlib import Path
from typing import TYPE_CHECKING, Any

from models.config_models import Config
from utils.logger_utils import LoggerUtils

if TYPE_CHECKING:
    from collections.abc import Callable
    from dataclasses import Field as DataclassField

__all__: list[str] = [
    "ConfigFileNotFoundError",
    "ConfigFormatError",
    "ConfigLoader",
    "ConfigLoaderError",
    "ConfigTypeError",
    "ConfigValueError",
]

logger: logging.Logger = LoggerUtils.get_logger(__name__)


class ConfigLoaderError(Exception):
    """An error occurred while processing the configuration file."""


class ConfigFileNotFoundError(ConfigLoaderError):
    """The specified configuration file does not exist."""


class ConfigFormatError(ConfigLoaderError):
    """The configuration file is not formatted correctly."""


class ConfigValueError(ConfigFormatError):
    """The configuration file contains an invalid value."""


class ConfigTypeError(ConfigFormatError):
    """The configuration file contains an invalid type."""


class ConfigLoader:
    """Handles loading and validation of the client configuration.

    Args:
        config_filename (str): INI file name to load.
        **overrides: Optional ``version``, ``url`` and ``debug`` values applied after reading the file.

    Raises:
        ConfigFileNotFoundError: If the configuration file does not exist.
        ConfigFormatError: If the file cannot be parsed or contains invalid values/types.
    """

    def __init__(self, *, config_filename: str, **overrides: Any) -> None:
        config_path = Path(config_filename)
        msg: str
        if not config_path.exists():
            msg = f"Configuration file '{config_filename}' not found."
            raise ConfigFileNotFoundError(msg)

        parser: ConfigParser = ConfigParser(interpolation=None)

        try:
            parser.read(config_filename, encoding="utf-8")
        except configparser.Error as err:
            msg = f"Failed to parse configuration file '{config_filename}': {err}"
            raise ConfigFormatError(msg) from None

        self.config = Config()
        self._convert_settings(parser)

        if overrides.get("version") is not None:
            self.config.SERVICE.VERSION = overrides["version"]
        if overrides.get("url") is not None:
            self.config.SERVICE.URL = overrides["url"]
        if overrides.get("debug", False):
            self.config.LOGGING.LEVEL = "DEBUG"
        self._validate_settings()

    def _convert_settings(self, parser: ConfigParser) -> None:
        formatter = _ConfigFormatter(self.config, parser)
        for section in fields(self.config):
            if not parser.has_section(section.name):
                logger.debug("Skipping undefined section: '%s'", section.name)
                continue
            for key in fields(getattr(self.config, section.name)):
                if not parser.has_option(section.name, key.name):
                    logger.debug("Skipping undefined setting: '%s.%s'", section.name, key.name)
                    continue
                setattr(getattr(self.config, section.name), key.name, formatter.apply_format(section, key))

    def _validate_settings(self) -> None:
        """Validate the converted settings.

        Raises:
            ConfigValueError: If a value is out of range or missing.
            ConfigTypeError: If a value has the wrong type.
        """
        service = self.config.SERVICE
        if not service.VERSION:
            msg = "'SERVICE.VERSION' must be specified."
            raise ConfigValueError(msg)
        if not service.URL.startswith(("http://", "https://")):
            msg = f"'SERVICE.URL' must be an http(s) URL: {service.URL}"
            raise ConfigValueError(msg)
        if not isinstance(service.HEADERS, dict) or not all(
            isinstance(k, str) and isinstance(v, str) for k, v in service.HEADERS.items()
        ):
            msg = f"'SERVICE.HEADERS' must be a dictionary of strings: {service.HEADERS!r}"
            raise ConfigTypeError(msg)

        if self.config.TRANSPORT.TIMEOUT <= 0:
            msg = f"'TRANSPORT.TIMEOUT' must be positive: {self.config.TRANSPORT.TIMEOUT}"
            raise ConfigValueError(msg)

        auth = self.config.AUTHENTICATION
        if bool(auth.USERNAME) != bool(auth.PASSWORD):
            msg = "'AUTHENTICATION.USERNAME' and 'AUTHENTICATION.PASSWORD' must be specified together."
            raise ConfigValueError(msg)
        if auth.BEARER_TOKEN and auth.USERNAME:
            logger.warning("Both a bearer token and basic credentials are set. The bearer token is used.")

        level: str = self.config.LOGGING.LEVEL.upper()
        if level not in logging.getLevelNamesMapping():
            msg = f"Unknown logging level for 'LOGGING.LEVEL': {self.config.LOGGING.LEVEL}"
            raise ConfigValueError(msg)
        self.config.LOGGING.LEVEL = level


class _ConfigFormatter:
    """Converts INI string values to typed Python objects (bool, float, str, dict)."""

    def __init__(self, config: Config, parser: ConfigParser) -> None:
        self.config: Config = config
        self.parser: ConfigParser = parser

    def apply_format(self, section: DataclassField[Any], key: DataclassField[Any]) -> Any:
        """Convert an INI value to the type of the default value of the Config field.

        Raises:
            ConfigValueError: If a value cannot be coerced to the expected type.
            ConfigFormatError: If literal evaluation fails due to invalid syntax.
            ConfigTypeError: If an unexpected type is encountered during coercion.
        """
        formatters: dict[type, Callable[[DataclassField[Any], DataclassField[Any]], Any]] = {
            bool: self.parse_as_boolean,
            float: self.parse_as_float,
            str: self.parse_as_string,
        }

        formatter = formatters.get(type(getattr(getattr(self.config, section.name), key.name)))
        if formatter:
            try:
                return formatter(section, key)
            except ValueError as err:
                msg = f"Invalid value for {section.name}.{key.name}: {err}"
                raise ConfigValueError(msg) from err
            except TypeError as err:
                msg = f"Invalid value for {section.name}.{key.name}: {err}"
                raise ConfigTypeError(msg) from err

        value_str: str = self.parser[section.name][key.name]
        try:
            return ast.literal_eval(value_str)
        except ValueError as err:
            msg = f"Invalid literal for {section.name}.{key.name}: {value_str}"
            raise ConfigValueError(msg) from err
        except SyntaxError as err:
            msg = f"Invalid literal for {section.name}.{key.name}: {value_str}"
            raise ConfigFormatError(msg) from err

    def parse_as_float(self, section: DataclassField[Any], key: DataclassField[Any]) -> float:
        return float(self.parse_as_string(section, key))

    def parse_as_string(self, section: DataclassField[Any], key: DataclassField[Any]) -> str:
        """Strip one pair of surrounding quotes, if any."""
        value: str = self.parser.get(section.name, key.name).strip()
        for char in ("'", '"'):
            if len(value) >= 2 and value.startswith(char) and value.endswith(char):
                return value[1:-1]
        return value

    def parse_as_boolean(self, section: DataclassField[Any], key: DataclassField[Any]) -> bool:
        return self.parser.getboolean(section.name, key.name)
