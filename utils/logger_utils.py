from __future__ import annotations

import logging
import sys
from logging import Formatter, NullHandler, StreamHandler
from logging.handlers import RotatingFileHandler
from typing import TYPE_CHECKING, ClassVar, Final, Literal, NamedTuple, TextIO, TypeAlias

if TYPE_CHECKING:
    from pathlib import Path

__all__: list[str] = ["LogLevel", "LoggerUtils"]

LevelType: TypeAlias = Literal[
    "NOTSET",
    "DEBUG",
    "INFO",
    "WARNING",
    "ERROR",
    "CRITICAL",
]

_LOG_FILE_SIZE: Final[int] = 2 * 1024 * 1024  # 2MB
_LOG_BACKUP_COUNT: Final[int] = 2

DEFAULT_LOG_LEVEL: Final[int] = logging.WARNING
DEFAULT_NAMESPACE: Final[str] = "LanguageTranslator"


class LogLevel(NamedTuple):
    """Logging level with both name and numeric value."""

    name: str
    value: int


class LoggerUtils:
    """Namespaced logging helpers for the translator client.

    Every module obtains its logger through ``get_logger(__name__)`` so that all records
    end up below a single namespace logger. As a library, the namespace logger only carries
    a NullHandler until an application calls ``configure()``.

    Attributes:
        _LOGGER_NAMESPACE (str): Namespace prefixed to every logger name.
        _configured (bool): Whether ``configure()`` has attached handlers.
    """

    _LOGGER_NAMESPACE: ClassVar[str] = DEFAULT_NAMESPACE
    _configured: ClassVar[bool] = False

    @classmethod
    def root_logger(cls) -> logging.Logger:
        """Return the namespace logger, installing a NullHandler on first use."""
        root: logging.Logger = logging.getLogger(cls._LOGGER_NAMESPACE)
        if not root.handlers:
            root.addHandler(NullHandler())
        return root

    @classmethod
    def configure(
        cls,
        filename: str | Path = "",
        *,
        level: str = "INFO",
        console: bool = False,
    ) -> None:
        """Attach console and/or file handlers to the namespace logger.

        Calling this more than once only updates the level; handlers are attached once.

        Args:
            filename (str | Path): Log file path. If empty, logging to a file is not performed.
            level (str): Logging level name applied to the namespace logger.
            console (bool): If True, WARNING and above are also written to stderr.
        """
        root: logging.Logger = cls.root_logger()
        cls.set_level(level)  # type: ignore[arg-type]
        if cls._configured:
            root.debug("Logging is already configured, only the level was updated.")
            return

        if console and sys.stderr is not None:
            cls._console_logging(root)
        filename = str(filename)
        if filename.strip():
            cls._file_logging(root, filename)

        cls._configured = True

    @staticmethod
    def _has_handler(root: logging.Logger, handler_type: type) -> bool:
        return any(type(h) is handler_type for h in root.handlers)

    @classmethod
    def _console_logging(cls, root: logging.Logger) -> None:
        if cls._has_handler(root, StreamHandler):
            return
        console_handler: StreamHandler[TextIO] = StreamHandler(sys.stderr)
        console_handler.setLevel(logging.WARNING)
        console_handler.setFormatter(Formatter("%(levelname)s: %(message)s"))
        root.addHandler(console_handler)

    @classmethod
    def _file_logging(cls, root: logging.Logger, filename: str) -> None:
        """Configure log output to a size-rotated UTF-8 file.

        Args:
            filename (str): Path to the log file.
        """
        if cls._has_handler(root, RotatingFileHandler):
            return

        try:
            file_handler = RotatingFileHandler(
                filename=filename,
                maxBytes=_LOG_FILE_SIZE,
                backupCount=_LOG_BACKUP_COUNT,
                encoding="utf-8",
            )
        except (FileNotFoundError, PermissionError):
            root.error("Incorrect log file name: %s\nLogging to the file is not performed.", filename)
            return

        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(
            Formatter("%(asctime)s %(levelname)-8s %(lineno)4d %(name)-48s\t%(funcName)s\t%(message)s")
        )
        root.addHandler(file_handler)

    @classmethod
    def set_level(cls, level: LevelType) -> None:
        """Set the level of the namespace logger.

        An unknown level name falls back to WARNING and logs a warning.

        Args:
            level (LevelType): Name of the logging level.
        """
        root: logging.Logger = cls.root_logger()
        level_map: dict[str, int] = logging.getLevelNamesMapping()
        try:
            root.setLevel(level_map[level.upper()])
        except KeyError:
            root.setLevel(DEFAULT_LOG_LEVEL)
            root.warning("Unknown logging level '%s' specified. Logging level set to 'WARNING'.", level)

    @classmethod
    def get_level(cls) -> LogLevel:
        level_value: int = cls.root_logger().getEffectiveLevel()
        return LogLevel(name=logging.getLevelName(level_value), value=level_value)

    @staticmethod
    def get_logger(name: str | None = None) -> logging.Logger:
        """Get a logger below the client namespace.

        Args:
            name (str | None): The module name. If None, the namespace logger itself is returned.

        Returns:
            logging.Logger: The logger instance.
        """
        LoggerUtils.root_logger()
        if name:
            return logging.getLogger(f"{LoggerUtils._LOGGER_NAMESPACE}.{name}")
        return logging.getLogger(LoggerUtils._LOGGER_NAMESPACE)
