"""Database models and session management.

Import models from their respective modules:
    from ht_dashboard.db.players import Player, PlayerSnapshot
    from ht_dashboard.db.sync import SyncRun

The engine and session factory are built once per process with
``create_session_factory`` and handed to services explicitly. Tests pass
their own in-memory factory.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator

from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from ..config import settings
from ..logging import logger
from .base import Base
from .matches import Match, MatchStatus, MatchType
from .players import Player, PlayerChange, PlayerSnapshot
from .sync import SyncRun, SyncRunStatus

_default_factory: sessionmaker[Session] | None = None


def create_db_engine(database_url: str, echo: bool = False) -> Engine:
    """Create an engine; SQLite gets a thread-shareable connection setup."""
    if database_url.startswith("sqlite"):
        kwargs: dict = {"connect_args": {"check_same_thread": False}}
        if ":memory:" in database_url or database_url in {"sqlite://", "sqlite:///"}:
            kwargs["poolclass"] = StaticPool
        return create_engine(database_url, echo=echo, future=True, **kwargs)
    return create_engine(database_url, echo=echo, future=True, pool_pre_ping=True)


def create_session_factory(
    database_url: str | None = None, echo: bool | None = None
) -> sessionmaker[Session]:
    """Build the engine and session factory for one process."""
    engine = create_db_engine(
        database_url or settings.database_url,
        echo=settings.sql_echo if echo is None else echo,
    )
    return sessionmaker(
        bind=engine,
        class_=Session,
        autoflush=False,
        autocommit=False,
        expire_on_commit=False,
    )


def get_default_session_factory() -> sessionmaker[Session]:
    """Process-wide factory built from settings on first use."""
    global _default_factory
    if _default_factory is None:
        _default_factory = create_session_factory()
    return _default_factory


@contextmanager
def get_session(session_factory: sessionmaker[Session]) -> Iterator[Session]:
    """
    Provide a transactional session.

    Commits on clean exit, rolls back and re-raises on any exception,
    and always closes the session.

    Usage:
        with get_session(factory) as session:
            session.add(obj)
    """
    session = session_factory()
    try:
        yield session
        session.commit()
    except Exception as exc:
        session.rollback()
        logger.warning("db_session_rollback", error=str(exc))
        raise
    finally:
        session.close()


def init_db(session_factory: sessionmaker[Session]) -> None:
    """Create any missing tables; existing tables are left untouched."""
    engine = session_factory.kw["bind"]
    Base.metadata.create_all(engine)


__all__ = [
    "Base",
    "Match",
    "MatchStatus",
    "MatchType",
    "Player",
    "PlayerChange",
    "PlayerSnapshot",
    "SyncRun",
    "SyncRunStatus",
    "create_db_engine",
    "create_session_factory",
    "get_default_session_factory",
    "get_session",
    "init_db",
]
