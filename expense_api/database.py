"""Engine and session management for the expense API.

The module-level ``engine`` and ``SessionLocal`` are built from
:func:`expense_api.settings.get_settings`; :func:`build_engine` lets callers
such as the CLI or tests construct an engine for another configuration.
"""
from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from .settings import Settings, get_settings

Base = declarative_base()


def build_engine(settings: Settings) -> Engine:
    return create_engine(settings.database_url, **settings.engine_options())


def build_sessionmaker(bind: Engine) -> sessionmaker:
    return sessionmaker(bind=bind, autocommit=False, autoflush=False, future=True)


engine = build_engine(get_settings())
SessionLocal = build_sessionmaker(engine)


def init_db(bind: Engine | None = None) -> None:
    """Create the ``users`` and ``expenses`` tables when missing."""
    from . import models  # noqa: F401  # registers the tables on Base.metadata

    Base.metadata.create_all(bind=bind or engine)


@contextmanager
def session_scope() -> Iterator[Session]:
    """Commit on success, roll back on any error, always close."""
    session = SessionLocal()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


def get_db() -> Iterator[Session]:
    """FastAPI dependency yielding one session per request."""
    with session_scope() as session:
        yield session
