"""Environment-driven configuration for the expense API."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from functools import cache
from pathlib import Path
from typing import Any, Final

ENV_PREFIX: Final[str] = "EXPENSE_API_"
DEFAULT_SQLITE_PATH: Final[Path] = Path(__file__).resolve().parent / "expenses.db"
DEFAULT_HOST: Final[str] = "127.0.0.1"
DEFAULT_PORT: Final[int] = 8000

_TRUTHY = {"1", "true", "yes", "on"}
_FALSY = {"0", "false", "no", "off"}


def _parse_bool(raw: str | None, default: bool) -> bool:
    if raw is None:
        return default
    value = raw.strip().lower()
    if value in _TRUTHY:
        return True
    if value in _FALSY:
        return False
    return default


def _parse_port(raw: str | None) -> int:
    if raw is None or not raw.strip():
        return DEFAULT_PORT
    try:
        port = int(raw)
    except ValueError as exc:
        raise ValueError(f"{ENV_PREFIX}PORT must be an integer, got {raw!r}") from exc
    if not 0 < port < 65536:
        raise ValueError(f"{ENV_PREFIX}PORT out of range: {port}")
    return port


def _parse_origins(raw: str | None) -> tuple[str, ...]:
    if raw is None:
        return ("*",)
    origins = tuple(item.strip() for item in raw.split(",") if item.strip())
    return origins or ("*",)


@dataclass(frozen=True)
class Settings:
    """Runtime settings resolved from ``EXPENSE_API_*`` environment variables."""

    database_url: str = f"sqlite:///{DEFAULT_SQLITE_PATH}"
    seed_demo_data: bool = True
    cors_origins: tuple[str, ...] = field(default=("*",))
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    echo_sql: bool = False

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "Settings":
        env = os.environ if environ is None else environ
        database_url = env.get(f"{ENV_PREFIX}DATABASE_URL", "").strip()
        return cls(
            database_url=database_url or f"sqlite:///{DEFAULT_SQLITE_PATH}",
            seed_demo_data=_parse_bool(env.get(f"{ENV_PREFIX}SEED_DEMO_DATA"), True),
            cors_origins=_parse_origins(env.get(f"{ENV_PREFIX}CORS_ORIGINS")),
            host=env.get(f"{ENV_PREFIX}HOST", "").strip() or DEFAULT_HOST,
            port=_parse_port(env.get(f"{ENV_PREFIX}PORT")),
            echo_sql=_parse_bool(env.get(f"{ENV_PREFIX}ECHO_SQL"), False),
        )

    @property
    def is_sqlite(self) -> bool:
        return self.database_url.startswith("sqlite")

    def engine_options(self) -> dict[str, Any]:
        """Keyword arguments for :func:`sqlalchemy.create_engine`."""

        options: dict[str, Any] = {"echo": self.echo_sql, "future": True}
        if self.is_sqlite:
            options["connect_args"] = {"check_same_thread": False}
        else:
            options["pool_pre_ping"] = True
            options["pool_recycle"] = 300
        return options


@cache
def get_settings() -> Settings:
    """Return the process-wide settings, read once from the environment."""

    return Settings.from_env()


__all__ = ["ENV_PREFIX", "Settings", "get_settings"]
