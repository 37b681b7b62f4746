"""Tests for the logging helpers."""

import logging
from unittest.mock import MagicMock

import pytest

from src.infrastructure.logging import logger as logger_module


@pytest.fixture
def fixed_log_root(tmp_path, monkeypatch):
    monkeypatch.setattr(logger_module, "get_project_root", lambda: tmp_path)
    monkeypatch.setattr(
        logger_module.LoggerBuilder,
        "_today_stamp",
        staticmethod(lambda: "20240131"),
    )
    return tmp_path


def test_builder_writes_dated_file_under_logs(fixed_log_root):
    """Built loggers should write to logs/<subdir>/<date>_<prefix>.log."""
    builder = (
        logger_module.LoggerBuilder()
        .name("networth.test.backfill")
        .subdir("fx")
        .prefix("backfill")
        .console(True)
        .level(logging.WARNING)
    )

    built = builder.build()

    assert built.name == "networth.test.backfill"
    assert built.level == logging.WARNING
    assert built.propagate is False
    [file_handler] = [
        handler
        for handler in built.handlers
        if isinstance(handler, logging.FileHandler)
    ]
    assert file_handler.baseFilename == str(
        fixed_log_root / "logs" / "fx" / "20240131_backfill.log"
    )
    assert len(built.handlers) == 2
    assert builder.build() is built


def test_builder_uses_injected_factories(fixed_log_root):
    """Custom formatter and handler factories should be honoured."""
    fmt = logging.Formatter("%(message)s")
    created = []

    def file_factory(path, formatter):
        created.append((path.name, formatter))
        return logging.NullHandler()

    built = (
        logger_module.LoggerBuilder()
        .name("networth.test.factories")
        .formatter(lambda: fmt)
        .file_handler(file_factory)
        .build()
    )

    assert created == [("20240131_app.log", fmt)]
    assert [type(handler) for handler in built.handlers] == [logging.NullHandler]


def test_default_handlers_use_formatter(tmp_path):
    """Default handlers should log at INFO with the shared formatter."""
    fmt = logger_module.LoggerBuilder._default_formatter()
    file_handler = logger_module.LoggerBuilder._default_file_handler(
        tmp_path / "entries.log",
        fmt,
    )
    console_handler = logger_module.LoggerBuilder._default_console_handler(fmt)

    assert file_handler.level == logging.INFO
    assert file_handler.formatter is fmt
    assert console_handler.level == logging.INFO
    assert console_handler.formatter is fmt
    file_handler.close()


def test_logger_wrapper_delegates_every_level(monkeypatch):
    """The singleton wrapper should forward each level to logging."""
    fake_logger = MagicMock()
    monkeypatch.setattr(logger_module.LoggerBuilder, "build", lambda self: fake_logger)
    monkeypatch.setattr(logger_module.Logger, "_instance", None)

    wrapper = logger_module.Logger()
    wrapper.debug("rate lookup")
    wrapper.info("entry saved")
    wrapper.warning("rates pending")
    wrapper.error("save failed")
    wrapper.critical("schema missing")

    fake_logger.debug.assert_called_with("rate lookup")
    fake_logger.info.assert_called_with("entry saved")
    fake_logger.warning.assert_called_with("rates pending")
    fake_logger.error.assert_called_with("save failed")
    fake_logger.critical.assert_called_with("schema missing")
    assert logger_module.Logger() is wrapper


def test_app_and_usage_loggers_are_separate_singletons(monkeypatch):
    """App and usage loggers should each be built once with their own files."""
    built_for = []

    def fake_build(self):
        built_for.append((self._name, self._subdir, self._prefix, self._console))
        return MagicMock()

    monkeypatch.setattr(logger_module.LoggerBuilder, "build", fake_build)
    monkeypatch.setattr(logger_module.AppLogger, "_instance", None)
    monkeypatch.setattr(logger_module.UsageLogger, "_instance", None)

    app_logger = logger_module.get_app_logger()
    usage_logger = logger_module.get_usage_logger()

    assert logger_module.get_app_logger() is app_logger
    assert logger_module.get_usage_logger() is usage_logger
    assert app_logger is not usage_logger
    assert built_for == [
        ("networth.app", "app", "app", True),
        ("networth.usage", "usage", "usage", False),
    ]
