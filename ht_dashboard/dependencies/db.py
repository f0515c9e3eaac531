"""Database session and CHPP feed dependencies."""

from __future__ import annotations

from typing import Iterator

from fastapi import HTTPException, Request, status
from sqlalchemy.orm import Session, sessionmaker

from ..chpp import ChppAuthError, ChppClient, ChppFeed
from ..db import get_session
from ..logging import logger


def get_session_factory(request: Request) -> sessionmaker[Session]:
    """The factory the app was created with."""
    return request.app.state.session_factory


def get_db(request: Request) -> Iterator[Session]:
    """FastAPI dependency for database sessions with commit/rollback semantics."""
    with get_session(get_session_factory(request)) as session:
        yield session


def get_chpp_feed() -> Iterator[ChppFeed]:
    try:
        client = ChppClient()
    except ChppAuthError as exc:
        logger.error("chpp_client_unavailable", error=str(exc))
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(exc)
        ) from exc
    with client:
        yield client
