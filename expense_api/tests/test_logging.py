"""Tests for the shared logging helpers."""

from __future__ import annotations

import json
import logging
from collections.abc import Iterator

import pytest

from expense_api import logging as logging_utils


@pytest.fixture(autouse=True)
def clean_root_logger() -> Iterator[None]:
    """Strip root handlers and cached env lookups around each test."""

    logging.getLogger().handlers = []
    logging.getLogger().setLevel(logging.NOTSET)
    logging_utils.reset_cache()
    yield
    logging.getLogger().handlers = []
    logging.getLogger().setLevel(logging.NOTSET)
    logging_utils.reset_cache()


def test_stream_logger_uses_format_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("EXPENSE_API_LOG_FORMAT", "%(message)s")
    monkeypatch.delenv("EXPENSE_API_JSON_LOGS", raising=False)
    logging_utils.get_stream_logger("probe")
    handler = logging.getLogger().handlers[0]
    assert isinstance(handler, logging.StreamHandler)
    assert handler.formatter._fmt == "%(message)s"


def test_stream_logger_honours_level(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("EXPENSE_API_LOG_LEVEL", "DEBUG")
    logger = logging_utils.get_stream_logger("probe")
    assert logger.isEnabledFor(logging.DEBUG)


def test_invalid_level_falls_back_to_info(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("EXPENSE_API_LOG_LEVEL", "LOUD")
    logger = logging_utils.get_stream_logger("probe")
    assert logger.isEnabledFor(logging.INFO)
    assert not logger.isEnabledFor(logging.DEBUG)


def test_json_logs_switch_formatter(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("EXPENSE_API_JSON_LOGS", "true")
    logging_utils.get_stream_logger("probe")
    handler = logging.getLogger().handlers[0]
    assert isinstance(handler.formatter, logging_utils.JsonRequestFormatter)


def test_json_formatter_includes_request_fields() -> None:
    record = logging.LogRecord("expense_api.server", logging.INFO, __file__, 1, "GET /api/users", None, None)
    record.method = "GET"
    record.path = "/api/users"
    record.status_code = 200
    record.process_time_ms = "3.5"
    payload = json.loads(logging_utils.JsonRequestFormatter().format(record))
    assert payload["level"] == "INFO"
    assert payload["source"] == "expense_api.server"
    assert payload["path"] == "/api/users"
    assert payload["status_code"] == 200
    assert payload["process_time_ms"] == 3.5


def test_configure_logging_enables_json(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("EXPENSE_API_JSON_LOGS", "0")
    logging_utils.configure_logging(json_logs=True)
    handler = logging.getLogger().handlers[0]
    assert isinstance(handler.formatter, logging_utils.JsonRequestFormatter)
