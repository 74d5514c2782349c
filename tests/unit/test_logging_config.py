"""Tests for logging configuration."""

import logging

import pytest

from bot_permissions.config.logging_config import (
    LoggingConfig, LogFormat, get_log_level_from_verbosity, setup_logging
)


@pytest.mark.parametrize("verbosity,level", [
    ("QUIET", "ERROR"),
    ("normal", "WARNING"),
    ("VERBOSE", "INFO"),
    ("DEBUG", "DEBUG"),
    ("LOUD", "WARNING"),
])
def test_verbosity_mapping(verbosity, level):
    assert get_log_level_from_verbosity(verbosity) == level


def test_build_quiets_resolution_trace_unless_debugging():
    walk_logger = "bot_permissions.features.permissions.entities.override_walk"

    assert LoggingConfig.build("VERBOSE")["loggers"][walk_logger]["level"] == "WARNING"
    assert LoggingConfig.build("DEBUG")["loggers"][walk_logger]["level"] == "DEBUG"


def test_build_drivers_error_only():
    config = LoggingConfig.build()

    for module in ("asyncpg", "redis"):
        assert config["loggers"][module]["level"] == "ERROR"


def test_build_format_selection():
    detailed = LoggingConfig.build(log_format="DETAILED")
    fallback = LoggingConfig.build(log_format="xml")

    assert detailed["formatters"]["default"]["format"] == LoggingConfig.FORMATS[LogFormat.DETAILED]
    assert fallback["formatters"]["default"]["format"] == LoggingConfig.FORMATS[LogFormat.SIMPLE]


def test_setup_logging_honours_log_level(monkeypatch):
    monkeypatch.setenv("LOG_VERBOSITY", "QUIET")
    monkeypatch.setenv("LOG_LEVEL", "info")
    root = logging.getLogger()
    previous_level = root.level
    previous_handlers = list(root.handlers)

    try:
        setup_logging()
        assert root.level == logging.INFO
    finally:
        root.handlers = previous_handlers
        root.setLevel(previous_level)


def test_set_module_level():
    LoggingConfig.set_module_level("bot_permissions.test_module", "debug")

    assert logging.getLogger("bot_permissions.test_module").level == logging.DEBUG
