"""Tests for the logging helpers."""

import logging
from unittest.mock import MagicMock

from src.infrastructure.logging import logger as logger_module


def test_logger_builder_writes_under_project_logs(tmp_path, monkeypatch):
    """LoggerBuilder should build loggers in the project logs directory."""
    monkeypatch.setattr(
        logger_module,
        "get_project_root",
        lambda: tmp_path,
    )
    monkeypatch.setattr(
        logger_module.LoggerBuilder,
        "_today_stamp",
        staticmethod(lambda: "20240501"),
    )

    builder = logger_module.LoggerBuilder()
    sync_logger = (
        builder.name("ledger-sync-test")
        .subdir("sync")
        .prefix("sync_logs")
        .console(False)
        .level(logging.WARNING)
        .build()
    )

    assert sync_logger.name == "ledger-sync-test"
    assert sync_logger.level == logging.WARNING
    assert sync_logger.propagate is False
    assert len(sync_logger.handlers) == 1
    expected_path = tmp_path / "logs" / "sync" / "20240501_sync_logs.log"
    assert sync_logger.handlers[0].baseFilename == str(expected_path)
    # Handlers are attached once per logger name.
    assert builder.build() is sync_logger
    assert len(sync_logger.handlers) == 1


def test_logger_builder_uses_custom_factories(tmp_path, monkeypatch):
    """Custom formatter and handler factories should be honored."""
    monkeypatch.setattr(logger_module, "get_project_root", lambda: tmp_path)
    fmt = logging.Formatter("%(message)s")
    file_handler = logging.NullHandler()
    console_handler = logging.NullHandler()
    seen = {}

    def _file_factory(path, formatter):
        seen["path"] = path
        seen["formatter"] = formatter
        return file_handler

    built = (
        logger_module.LoggerBuilder()
        .name("ledger-custom-test")
        .formatter(lambda: fmt)
        .file_handler(_file_factory)
        .console_handler(lambda formatter: console_handler)
        .build()
    )

    assert built.handlers == [file_handler, console_handler]
    assert seen["formatter"] is fmt
    assert seen["path"].parent == tmp_path / "logs" / "app"


def test_default_handlers_use_formatter(tmp_path):
    """Default handlers should apply the provided formatter."""
    fmt = logger_module.LoggerBuilder._default_formatter()
    file_handler = logger_module.LoggerBuilder._default_file_handler(
        tmp_path / "sync.log",
        fmt,
    )
    console_handler = logger_module.LoggerBuilder._default_console_handler(fmt)

    assert isinstance(file_handler, logging.FileHandler)
    assert file_handler.level == logging.INFO
    assert file_handler.formatter is fmt
    assert isinstance(console_handler, logging.StreamHandler)
    assert console_handler.level == logging.INFO
    file_handler.close()


def test_logger_singleton_delegates_to_underlying_logger(monkeypatch):
    """Logger methods should call the wrapped logger."""
    fake_logger = MagicMock()
    monkeypatch.setattr(
        logger_module.LoggerBuilder,
        "build",
        lambda self: fake_logger,
    )
    monkeypatch.setattr(logger_module.Logger, "_instance", None)

    logger = logger_module.Logger("app")
    logger.info("hello")
    logger.warning("warn")
    logger.error("err")
    logger.debug("dbg")
    logger.critical("crit")
    logger.exception("boom")

    fake_logger.info.assert_called_with("hello")
    fake_logger.warning.assert_called_with("warn")
    fake_logger.error.assert_called_with("err")
    fake_logger.debug.assert_called_with("dbg")
    fake_logger.critical.assert_called_with("crit")
    fake_logger.exception.assert_called_with("boom")
    assert logger_module.Logger("app") is logger


def test_app_and_usage_loggers_are_separate_singletons(monkeypatch):
    """get_app_logger and get_usage_logger should return singletons."""
    built_subdirs = []

    def _fake_build(self):
        built_subdirs.append(self._subdir)
        return MagicMock()

    monkeypatch.setattr(logger_module.LoggerBuilder, "build", _fake_build)
    monkeypatch.setattr(logger_module.AppLogger, "_instance", None)
    monkeypatch.setattr(logger_module.UsageLogger, "_instance", None)

    app_logger = logger_module.get_app_logger()
    usage_logger = logger_module.get_usage_logger()

    assert logger_module.get_app_logger() is app_logger
    assert logger_module.get_usage_logger() is usage_logger
    assert app_logger is not usage_logger
    assert built_subdirs == ["app", "usage"]
