"""Helpers for recording sync runs."""

from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Generator

from sqlalchemy import desc, select
from sqlalchemy.orm import Session, sessionmaker

from ..db import SyncRun, SyncRunStatus, get_session
from ..logging import logger
from ..utils.datetime_utils import now_utc

MAX_MESSAGE_LENGTH = 500


def start_sync_run(session_factory: sessionmaker[Session]) -> int:
    """Create a PENDING sync run record and return its ID."""
    with get_session(session_factory) as session:
        run = SyncRun(status=SyncRunStatus.PENDING.value, requested_at=now_utc())
        session.add(run)
        session.flush()
        run_id = int(run.id)
    logger.info("sync_run_started", run_id=run_id)
    return run_id


def complete_sync_run(
    session_factory: sessionmaker[Session],
    run_id: int,
    status: SyncRunStatus,
    changes_count: int = 0,
    message: str | None = None,
    summary_data: dict[str, Any] | None = None,
) -> None:
    """Finalize a sync run record with status and completion time."""
    with get_session(session_factory) as session:
        run = session.get(SyncRun, run_id)
        if not run:
            logger.error("sync_run_missing", run_id=run_id)
            return
        run.status = status.value
        run.completed_at = now_utc()
        run.changes_count = changes_count
        run.message = message
        if summary_data is not None:
            run.summary_data = summary_data
    logger.info(
        "sync_run_completed",
        run_id=run_id,
        status=status.value,
        changes_count=changes_count,
    )


class SyncRunTracker:
    """Mutable tracker for accumulating counters during a sync run."""

    def __init__(self, run_id: int) -> None:
        self.run_id = run_id
        self.changes_count = 0
        self.summary_data: dict[str, Any] = {}

    def set(self, key: str, value: Any) -> None:
        self.summary_data[key] = value

    def increment(self, key: str, amount: int = 1) -> None:
        self.summary_data[key] = self.summary_data.get(key, 0) + amount


@contextmanager
def track_sync_run(
    session_factory: sessionmaker[Session],
) -> Generator[SyncRunTracker, None, None]:
    """Context manager that creates a sync run on enter and finalizes on exit.

    Usage:
        with track_sync_run(factory) as tracker:
            # ... do work ...
            tracker.changes_count += 3

    On normal exit: status SUCCESS with the tracker's changes count.
    On exception: status FAILED with the error message, then re-raised.
    """
    run_id = start_sync_run(session_factory)
    tracker = SyncRunTracker(run_id)

    try:
        yield tracker
    except Exception as exc:
        complete_sync_run(
            session_factory,
            run_id,
            SyncRunStatus.FAILED,
            changes_count=tracker.changes_count,
            message=(str(exc) or type(exc).__name__)[:MAX_MESSAGE_LENGTH],
            summary_data=tracker.summary_data or None,
        )
        raise
    else:
        complete_sync_run(
            session_factory,
            run_id,
            SyncRunStatus.SUCCESS,
            changes_count=tracker.changes_count,
            summary_data=tracker.summary_data or None,
        )


def list_sync_runs(session: Session, limit: int = 20) -> list[SyncRun]:
    """Most recent sync runs first."""
    return list(
        session.execute(
            select(SyncRun)
            .order_by(desc(SyncRun.requested_at), desc(SyncRun.id))
            .limit(limit)
        ).scalars()
    )
