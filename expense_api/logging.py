"""Logging helpers shared by the expense API.

Every module obtains its logger through :func:`get_stream_logger`, which
attaches a single stream handler to the root logger. The environment drives
the output so that operators can change verbosity without touching code:

``EXPENSE_API_LOG_LEVEL``
    Level name such as ``DEBUG`` or ``WARNING``. Unknown names fall back to
    ``INFO``.
``EXPENSE_API_LOG_FORMAT``
    :mod:`logging` format string used by the console handler.
``EXPENSE_API_JSON_LOGS``
    When truthy, records are rendered as one-line JSON payloads carrying the
    request fields attached by the HTTP middleware.
"""

from __future__ import annotations

import json
import logging
import os
from datetime import datetime, timezone
from functools import cache
from typing import Final

DEFAULT_FORMAT: Final[str] = "[%(levelname)s] %(name)s: %(message)s"
DEFAULT_LEVEL: Final[str] = "INFO"
LEVEL_ENV_FLAG: Final[str] = "EXPENSE_API_LOG_LEVEL"
FORMAT_ENV_FLAG: Final[str] = "EXPENSE_API_LOG_FORMAT"
JSON_ENV_FLAG: Final[str] = "EXPENSE_API_JSON_LOGS"

_REQUEST_FIELDS: Final[tuple[str, ...]] = ("method", "path", "status_code")


class JsonRequestFormatter(logging.Formatter):
    """Render log records as single-line JSON objects."""

    def format(self, record: logging.LogRecord) -> str:
        timestamp = datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat()
        payload: dict[str, object] = {
            "timestamp": timestamp,
            "level": record.levelname,
            "source": record.name,
            "message": record.getMessage(),
        }
        for name in _REQUEST_FIELDS:
            value = getattr(record, name, None)
            if value is not None:
                payload[name] = value
        payload["process_time_ms"] = _coerce_number(getattr(record, "process_time_ms", None))
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False)


def _coerce_number(value: object) -> float | None:
    if value is None:
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


@cache
def _determine_level() -> int:
    """Translate ``EXPENSE_API_LOG_LEVEL`` into a numeric level.

    Misconfigured values must never silence the service, so anything that is
    not a known level name resolves to ``INFO``.
    """

    level_name = os.environ.get(LEVEL_ENV_FLAG, DEFAULT_LEVEL).upper().strip()
    level = logging.getLevelName(level_name)
    if isinstance(level, int):
        return level
    return logging.INFO


@cache
def _determine_format() -> str:
    fmt = os.environ.get(FORMAT_ENV_FLAG, DEFAULT_FORMAT).strip()
    return fmt or DEFAULT_FORMAT


@cache
def _json_logging_enabled() -> bool:
    value = os.environ.get(JSON_ENV_FLAG)
    if value is None:
        return False
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _build_formatter() -> logging.Formatter:
    if _json_logging_enabled():
        return JsonRequestFormatter()
    return logging.Formatter(_determine_format())


def get_stream_logger(name: str) -> logging.Logger:
    """Return a module logger wired to the shared root stream handler."""

    logger = logging.getLogger(name)
    root_logger = logging.getLogger()
    if not root_logger.handlers:
        root_logger.addHandler(logging.StreamHandler())
    formatter = _build_formatter()
    for handler in root_logger.handlers:
        handler.setFormatter(formatter)
    root_logger.setLevel(_determine_level())
    return logger


def configure_logging(json_logs: bool = False, level: str | None = None) -> logging.Logger:
    """Reconfigure the root handler for a CLI run and return the package logger."""

    if json_logs:
        os.environ[JSON_ENV_FLAG] = "1"
    if level:
        os.environ[LEVEL_ENV_FLAG] = level
    reset_cache()
    return get_stream_logger("expense_api")


def reset_cache() -> None:
    """Forget cached environment lookups so the next logger sees fresh values."""

    _determine_level.cache_clear()
    _determine_format.cache_clear()
    _json_logging_enabled.cache_clear()


__all__ = [
    "JsonRequestFormatter",
    "configure_logging",
    "get_stream_logger",
    "reset_cache",
]
