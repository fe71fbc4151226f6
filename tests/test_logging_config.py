"""
Tests for logging setup and formatters.
"""

import json
import logging

import pytest

from jobsift.logging_config import (
    ConsoleFormatter,
    JSONFormatter,
    resolve_log_level,
    setup_logging,
)


@pytest.fixture(autouse=True)
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)


def _record(message="hello", level=logging.INFO):
    return logging.LogRecord("jobsift.test", level, __file__, 10, message, None, None)


def test_json_formatter_emits_one_object():
    """Test that JSON logs carry level, logger and message."""
    data = json.loads(JSONFormatter().format(_record()))
    assert data["level"] == "INFO"
    assert data["logger"] == "jobsift.test"
    assert data["message"] == "hello"
    assert data["timestamp"].endswith("Z")


def test_console_formatter_truncates_long_messages():
    output = ConsoleFormatter().format(_record("x" * 1000))
    assert "jobsift.test" in output
    assert output.endswith("x...")


def test_resolve_log_level(monkeypatch):
    """Test that an explicit level wins over the FLASK_ENV default."""
    monkeypatch.setenv("FLASK_ENV", "production")
    assert resolve_log_level() == logging.INFO
    assert resolve_log_level("debug") == logging.DEBUG

    monkeypatch.setenv("FLASK_ENV", "testing")
    assert resolve_log_level() == logging.WARNING


def test_setup_logging_with_file(tmp_path, monkeypatch):
    """Test that a log file gets a JSON handler and noisy loggers are quieted."""
    monkeypatch.setenv("FLASK_ENV", "development")
    log_file = tmp_path / "jobsift.log"

    root = setup_logging(level="INFO", log_file=str(log_file))
    logging.getLogger("jobsift.test").info("written to file")
    for handler in root.handlers:
        handler.flush()

    assert len(root.handlers) == 2
    assert json.loads(log_file.read_text().splitlines()[-1])["message"] == "written to file"
    assert logging.getLogger("urllib3").level == logging.WARNING
