"""Tests for the workshop logger builder and singletons."""

import logging
from unittest.mock import MagicMock

import pytest

from src.infrastructure.logging import logger as logger_module


@pytest.fixture
def logs_root(tmp_path, monkeypatch):
    monkeypatch.setattr(logger_module, "get_project_root", lambda: tmp_path)
    monkeypatch.setattr(
        logger_module.LoggerBuilder,
        "_today_stamp",
        staticmethod(lambda: "20250315"),
    )
    return tmp_path


def _close(logger: logging.Logger) -> None:
    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)


def test_builder_writes_dated_file_under_subdir(logs_root):
    built = (
        logger_module.LoggerBuilder()
        .name("workshop.test.usage")
        .subdir("usage")
        .prefix("usage_logs")
        .console(False)
        .level(logging.WARNING)
        .build()
    )
    try:
        assert built.level == logging.WARNING
        assert built.propagate is False
        assert len(built.handlers) == 1
        handler = built.handlers[0]
        assert isinstance(handler, logging.FileHandler)
        expected = logs_root / "logs" / "usage" / "20250315_usage_logs.log"
        assert handler.baseFilename == str(expected)
        assert expected.parent.is_dir()
    finally:
        _close(built)


def test_builder_reuses_configured_logger(logs_root):
    builder = logger_module.LoggerBuilder().name("workshop.test.reuse")
    first = builder.build()
    try:
        handlers = list(first.handlers)
        assert len(handlers) == 2
        assert builder.build() is first
        assert first.handlers == handlers
    finally:
        _close(first)


def test_default_handlers_share_formatter(tmp_path):
    fmt = logger_module.LoggerBuilder._default_formatter()
    file_handler = logger_module.LoggerBuilder._default_file_handler(
        tmp_path / "workshop.log",
        fmt,
    )
    console_handler = logger_module.LoggerBuilder._default_console_handler(fmt)
    try:
        assert file_handler.level == logging.INFO
        assert file_handler.formatter is fmt
        assert console_handler.formatter is fmt
        assert fmt._fmt == logger_module.DEFAULT_FORMAT
    finally:
        file_handler.close()


def test_logger_delegates_every_level(monkeypatch):
    fake_logger = MagicMock()
    monkeypatch.setattr(
        logger_module.LoggerBuilder,
        "build",
        lambda self: fake_logger,
    )
    monkeypatch.setattr(logger_module.Logger, "_instance", None)

    logger = logger_module.Logger("workshop.test")
    logger.info("Loaded 3 products")
    logger.warning("negative margin")
    logger.error("commit failed")
    logger.debug("dbg")
    logger.critical("crit")
    logger.exception("boom")

    fake_logger.info.assert_called_with("Loaded 3 products")
    fake_logger.warning.assert_called_with("negative margin")
    fake_logger.error.assert_called_with("commit failed")
    fake_logger.debug.assert_called_with("dbg")
    fake_logger.critical.assert_called_with("crit")
    fake_logger.exception.assert_called_with("boom")
    assert logger_module.Logger("other") is logger


def test_app_and_usage_loggers_are_separate_singletons(monkeypatch):
    built = []

    def _fake_build(self):
        built.append((self._name, self._subdir, self._prefix))
        return MagicMock()

    monkeypatch.setattr(logger_module.LoggerBuilder, "build", _fake_build)
    monkeypatch.setattr(logger_module.AppLogger, "_instance", None)
    monkeypatch.setattr(logger_module.UsageLogger, "_instance", None)

    app_logger = logger_module.get_app_logger()
    usage_logger = logger_module.get_usage_logger()

    assert logger_module.get_app_logger() is app_logger
    assert logger_module.get_usage_logger() is usage_logger
    assert app_logger is not usage_logger
    assert built == [
        ("workshop.app", "app", "app_logs"),
        ("workshop.usage", "usage", "usage_logs"),
    ]
