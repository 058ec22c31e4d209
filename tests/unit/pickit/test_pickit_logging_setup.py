"""
Tests for the logging setup module.
"""
from __future__ import annotations

import logging
from unittest.mock import patch

import pytest

from pickit.logging_setup import setup_logging

pytestmark = pytest.mark.unit


@pytest.fixture(autouse=True)
def restore_root_logger():
    root_logger = logging.getLogger()
    handlers = list(root_logger.handlers)
    level = root_logger.level
    yield
    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)
        handler.close()
    for handler in handlers:
        root_logger.addHandler(handler)
    root_logger.setLevel(level)


def test_setup_logging_creates_log_directory(tmp_path):
    """setup_logging should create the log directory and file"""
    with patch("pickit.logging_setup.Path.home", return_value=tmp_path):
        log_file = setup_logging()

    assert log_file == tmp_path / ".pickit_configurator" / "app.log"
    assert log_file.exists()


def test_setup_logging_sets_root_logger_level(tmp_path):
    with patch("pickit.logging_setup.Path.home", return_value=tmp_path):
        setup_logging(debug=True)
    assert logging.getLogger().level == logging.DEBUG

    with patch("pickit.logging_setup.Path.home", return_value=tmp_path):
        setup_logging()
    assert logging.getLogger().level == logging.INFO


def test_setup_logging_adds_file_and_console_handlers(tmp_path):
    with patch("pickit.logging_setup.Path.home", return_value=tmp_path):
        setup_logging()
        setup_logging()  # re-running must not stack handlers

    assert len(logging.getLogger().handlers) == 2


def test_quiet_limits_console_to_warnings(tmp_path):
    with patch("pickit.logging_setup.Path.home", return_value=tmp_path):
        setup_logging(quiet=True)

    console = [
        h for h in logging.getLogger().handlers
        if type(h) is logging.StreamHandler
    ]
    assert len(console) == 1
    assert console[0].level == logging.WARNING
