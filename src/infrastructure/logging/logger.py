"""Logging helpers for the net worth dashboard.

Loggers write to ``<project root>/logs/<subdir>/<YYYYMMDD>_<prefix>.log`` and,
optionally, to the console. ``AppLogger`` records application events (use
cases, repositories); ``UsageLogger`` records user-triggered actions from the
interface adapters.
"""

from datetime import date
import logging
from pathlib import Path
from typing import Callable

from src.utils.utils import get_project_root


FormatterFactory = Callable[[], logging.Formatter]
FileHandlerFactory = Callable[[Path, logging.Formatter], logging.Handler]
ConsoleHandlerFactory = Callable[[logging.Formatter], logging.Handler]


class LoggerBuilder:
    """Fluent builder for configured ``logging.Logger`` instances."""

    def __init__(self) -> None:
        self._name = "networth"
        self._subdir = "app"
        self._prefix = "app"
        self._console = False
        self._level = logging.INFO
        self._formatter_factory: FormatterFactory = self._default_formatter
        self._file_handler_factory: FileHandlerFactory = (
            self._default_file_handler
        )
        self._console_handler_factory: ConsoleHandlerFactory = (
            self._default_console_handler
        )

    def name(self, name: str) -> "LoggerBuilder":
        self._name = name
        return self

    def subdir(self, subdir: str) -> "LoggerBuilder":
        self._subdir = subdir
        return self

    def prefix(self, prefix: str) -> "LoggerBuilder":
        self._prefix = prefix
        return self

    def console(self, enabled: bool) -> "LoggerBuilder":
        self._console = enabled
        return self

    def level(self, level: int) -> "LoggerBuilder":
        self._level = level
        return self

    def formatter(self, factory: FormatterFactory) -> "LoggerBuilder":
        self._formatter_factory = factory
        return self

    def file_handler(self, factory: FileHandlerFactory) -> "LoggerBuilder":
        self._file_handler_factory = factory
        return self

    def console_handler(
        self,
        factory: ConsoleHandlerFactory,
    ) -> "LoggerBuilder":
        self._console_handler_factory = factory
        return self

    def build(self) -> logging.Logger:
        """Return the configured logger, attaching handlers only once.

        Returns:
            logging.Logger: Logger writing to the dated log file.
        """
        logger = logging.getLogger(self._name)
        logger.setLevel(self._level)
        logger.propagate = False
        if logger.handlers:
            return logger

        log_dir = get_project_root() / "logs" / self._subdir
        log_dir.mkdir(parents=True, exist_ok=True)
        log_path = log_dir / f"{self._today_stamp()}_{self._prefix}.log"

        fmt = self._formatter_factory()
        logger.addHandler(self._file_handler_factory(log_path, fmt))
        if self._console:
            logger.addHandler(self._console_handler_factory(fmt))
        return logger

    @staticmethod
    def _today_stamp() -> str:
        return date.today().strftime("%Y%m%d")

    @staticmethod
    def _default_formatter() -> logging.Formatter:
        return logging.Formatter(
            "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
        )

    @staticmethod
    def _default_file_handler(
        path: Path,
        fmt: logging.Formatter,
    ) -> logging.Handler:
        handler = logging.FileHandler(path, encoding="utf-8")
        handler.setLevel(logging.INFO)
        handler.setFormatter(fmt)
        return handler

    @staticmethod
    def _default_console_handler(fmt: logging.Formatter) -> logging.Handler:
        handler = logging.StreamHandler()
        handler.setLevel(logging.INFO)
        handler.setFormatter(fmt)
        return handler


class Logger:
    """Singleton wrapper delegating to a built ``logging.Logger``."""

    _instance = None
    _subdir = "app"
    _prefix = "app"
    _console = False

    def __new__(cls, name: str | None = None):
        if cls._instance is None:
            instance = super().__new__(cls)
            instance._initialized = False
            cls._instance = instance
        return cls._instance

    def __init__(self, name: str | None = None) -> None:
        if self._initialized:
            return
        self.logger = (
            LoggerBuilder()
            .name(name or f"networth.{self._prefix}")
            .subdir(self._subdir)
            .prefix(self._prefix)
            .console(self._console)
            .build()
        )
        self._initialized = True

    def debug(self, message: str) -> None:
        self.logger.debug(message)

    def info(self, message: str) -> None:
        self.logger.info(message)

    def warning(self, message: str) -> None:
        self.logger.warning(message)

    def error(self, message: str) -> None:
        self.logger.error(message)

    def critical(self, message: str) -> None:
        self.logger.critical(message)


class AppLogger(Logger):
    """Logger for application and infrastructure events."""

    _instance = None
    _subdir = "app"
    _prefix = "app"
    _console = True


class UsageLogger(Logger):
    """Logger for user actions triggered from the interface."""

    _instance = None
    _subdir = "usage"
    _prefix = "usage"


def get_app_logger() -> AppLogger:
    """Return the application logger singleton."""
    return AppLogger()


def get_usage_logger() -> UsageLogger:
    """Return the usage logger singleton."""
    return UsageLogger()


__all__ = [
    "LoggerBuilder",
    "Logger",
    "AppLogger",
    "UsageLogger",
    "get_app_logger",
    "get_usage_logger",
]
