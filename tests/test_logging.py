"""Tests for structured logging functionality."""

from __future__ import annotations

import json
import logging
import logging.handlers
import sys

import pytest

from trak.config import BaseConfig
from trak.logging_config import JSONFormatter, get_logger, setup_logging


@pytest.fixture
def log_config(tmp_path, monkeypatch):
    monkeypatch.setenv("TRAK_DATA_DIR", str(tmp_path))
    config = BaseConfig()
    yield config
    logger = logging.getLogger("trak")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()


def _record(**overrides) -> logging.LogRecord:
    record = logging.LogRecord(
        name="trak.test",
        level=overrides.pop("level", logging.INFO),
        pathname="test.py",
        lineno=42,
        msg=overrides.pop("msg", "Test message"),
        args=(),
        exc_info=overrides.pop("exc_info", None),
    )
    record.module = "test_module"
    record.funcName = "test_function"
    for key, value in overrides.items():
        setattr(record, key, value)
    return record


def test_json_formatter():
    """JSONFormatter emits the standard fields as a JSON object."""
    log_data = json.loads(JSONFormatter().format(_record()))

    assert log_data["level"] == "INFO"
    assert log_data["logger"] == "trak.test"
    assert log_data["message"] == "Test message"
    assert log_data["module"] == "test_module"
    assert log_data["function"] == "test_function"
    assert log_data["line"] == 42
    assert "timestamp" in log_data
    assert "extra" not in log_data


def test_json_formatter_with_extra_fields():
    """Values passed through ``extra`` end up under the ``extra`` key."""
    log_data = json.loads(JSONFormatter().format(_record(habit_id=7, period="weekly")))

    assert log_data["extra"] == {"habit_id": 7, "period": "weekly"}


def test_json_formatter_with_exception():
    """JSONFormatter includes type, message and traceback of an exception."""
    try:
        raise ValueError("Test error")
    except ValueError:
        exc_info = sys.exc_info()

    log_data = json.loads(
        JSONFormatter().format(_record(level=logging.ERROR, msg="Error occurred", exc_info=exc_info))
    )

    assert log_data["exception"]["type"] == "ValueError"
    assert "Test error" in log_data["exception"]["message"]
    assert log_data["exception"]["traceback"]


def test_setup_logging(log_config, tmp_path):
    """Setup attaches console and rotating JSON file handlers."""
    logger = setup_logging(log_config)

    assert logger.name == "trak"
    assert logger.level == logging.INFO
    assert len(logger.handlers) == 2

    log_file = tmp_path / "logs" / "trak.log"
    assert log_file.exists()

    get_logger("services.habits").warning("Test warning message", extra={"habit_id": 3})
    for handler in logger.handlers:
        handler.flush()

    lines = [line for line in log_file.read_text(encoding="utf-8").splitlines() if line.strip()]
    entries = [json.loads(line) for line in lines]
    assert entries[0]["message"] == "Logging initialized"
    assert entries[-1]["logger"] == "trak.services.habits"
    assert entries[-1]["extra"]["habit_id"] == 3


def test_setup_logging_twice_does_not_duplicate_handlers(log_config):
    """Recreating the app replaces handlers rather than stacking them."""
    setup_logging(log_config)
    logger = setup_logging(log_config)
    assert len(logger.handlers) == 2


def test_get_logger():
    """get_logger namespaces short names under ``trak`` and keeps module names."""
    assert get_logger("module1").name == "trak.module1"
    assert get_logger("trak.services.journal").name == "trak.services.journal"
    assert get_logger("module1") is not get_logger("module2")


@pytest.mark.parametrize("dev_mode", [True, False])
def test_logging_levels_by_mode(log_config, dev_mode):
    """Console logging level adjusts based on dev mode."""
    log_config.DEV_MODE = dev_mode
    logger = setup_logging(log_config)

    console_handler = next(
        handler
        for handler in logger.handlers
        if isinstance(handler, logging.StreamHandler)
        and not isinstance(handler, logging.handlers.RotatingFileHandler)
    )
    assert console_handler.level == (logging.INFO if dev_mode else logging.WARNING)
