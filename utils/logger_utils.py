from __future__ import annotations

import logging
import os
import sys
from logging import Formatter, NullHandler, StreamHandler
from logging.handlers import RotatingFileHandler
from typing import TYPE_CHECKING, ClassVar, Final, Self, TextIO

if TYPE_CHECKING:
    from pathlib import Path

__all__: list[str] = ["LoggerUtils"]

_LOG_FILE_SIZE: Final[int] = 1 * 1024 * 1024  # 1MB
_LOG_BACKUP_COUNT: Final[int] = 2

DEFAULT_LOG_LEVEL: Final[int] = logging.INFO
DEFAULT_NAMESPACE: Final[str] = "YandexTranslate"
DEBUG_ENV_KEY: Final[str] = "DEBUG"


class LoggerUtils:
    """Process-wide logging setup for the translation client.

    Loggers are handed out under a single namespace so that an application embedding the client
    can route or silence all of its output in one place.

    Attributes:
        _LOGGER_NAMESPACE (str): The namespace for the logger.
        _configured (bool): Indicates whether handlers have been attached.
        _instance (LoggerUtils | None): The singleton instance of LoggerUtils.
    """

    _LOGGER_NAMESPACE: ClassVar[str] = DEFAULT_NAMESPACE
    _configured: ClassVar[bool] = False
    _instance: ClassVar[Self | None] = None

    def __new__(cls, *args, **kwargs) -> Self:
        _ = args, kwargs
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self, filename: str | Path = "", *, use_null_console: bool = False) -> None:
        """Attach console and file handlers to the namespace logger.

        Does nothing when the logger has already been configured.

        Args:
            filename (str | Path): Absolute path of the log file. If empty, no file logging is performed.
            use_null_console (bool): If True, uses NullHandler instead of StreamHandler for console output.
        """
        if LoggerUtils._configured:
            return

        self.root_logger: logging.Logger = logging.getLogger(self._LOGGER_NAMESPACE)
        self._use_null_console: bool = bool(use_null_console) or sys.stderr is None
        filename = str(filename)
        # must be lower than the handler levels, otherwise nothing reaches them
        self.root_logger.setLevel(logging.DEBUG if self.debug_requested() else DEFAULT_LOG_LEVEL)

        self._console_logging()
        if filename.strip():
            self._file_logging(filename)

        LoggerUtils._configured = True

    @staticmethod
    def debug_requested() -> bool:
        """Report whether verbose request tracing was asked for through the environment.

        Returns:
            bool: True if the 'DEBUG' environment variable is set to a non-empty value.
        """
        return os.getenv(DEBUG_ENV_KEY, "") != ""

    @classmethod
    def apply_debug_switch(cls) -> bool:
        """Turn on request tracing when the 'DEBUG' environment variable asks for it.

        An unconfigured namespace logger is configured with the default handlers; an already configured
        one only has its level lowered to DEBUG. Nothing changes when the variable is empty or unset.

        Returns:
            bool: True if debug logging is in effect.
        """
        if not cls.debug_requested():
            return False

        if not cls._configured:
            cls()
        else:
            logging.getLogger(cls._LOGGER_NAMESPACE).setLevel(logging.DEBUG)
        return True

    @classmethod
    def initialize(cls, namespace: str) -> None:
        """Change the logger namespace before configuration.

        Raises:
            RuntimeError: If the logger is already configured.
        """
        if cls._configured:
            msg = "LoggerUtils is already configured. Reinitialization is not allowed."
            raise RuntimeError(msg)

        cls._LOGGER_NAMESPACE = namespace

    def _console_logging(self) -> None:
        """Console output is set to WARNING level or above, with minimal formatting."""
        if self._use_null_console:
            if not self._has_handler(NullHandler):
                self.root_logger.addHandler(NullHandler())
            return

        if self._has_handler(StreamHandler):
            self.root_logger.warning("Console logging is already configured.")
            return

        console_handler: StreamHandler[TextIO] = StreamHandler(sys.stderr)
        console_handler.setLevel(logging.DEBUG if self.debug_requested() else logging.WARNING)
        console_handler.setFormatter(Formatter("%(levelname)s %(name)s: %(message)s"))
        self.root_logger.addHandler(console_handler)

    def _file_logging(self, filename: str) -> None:
        if self._has_handler(RotatingFileHandler):
            self.root_logger.warning("File logging is already configured.")
            return

        try:
            file_handler = RotatingFileHandler(
                filename=filename,
                maxBytes=_LOG_FILE_SIZE,
                backupCount=_LOG_BACKUP_COUNT,
                encoding="utf-8",
            )
        except (FileNotFoundError, PermissionError):
            self.root_logger.error("Incorrect log file name: %s\nLogging to the file is not performed.", filename)
            return

        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(
            Formatter("%(asctime)s %(levelname)-8s %(thread)5d %(name)-40s\t%(funcName)s\t%(message)s")
        )
        self.root_logger.addHandler(file_handler)

    def _has_handler(self, handler_type: type) -> bool:
        return any(isinstance(h, handler_type) for h in self.root_logger.handlers)

    @staticmethod
    def get_logger(name: str | None = None) -> logging.Logger:
        """Get a logger under the client namespace.

        Args:
            name (str | None): The module name. If None, the namespace root logger is returned.

        Returns:
            logging.Logger: The logger instance.
        """
        full_name: str | None
        if LoggerUtils._LOGGER_NAMESPACE:
            full_name = f"{LoggerUtils._LOGGER_NAMESPACE}.{name}" if name else LoggerUtils._LOGGER_NAMESPACE
        else:
            full_name = name or None
        return logging.getLogger(full_name)
