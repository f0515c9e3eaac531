"""Sync trigger and sync run history endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session, sessionmaker

from ..chpp import ChppFeed
from ..db import SyncRun
from ..dependencies import get_chpp_feed, get_db, get_session_factory, verify_api_key
from ..logging import logger
from ..services.job_runs import list_sync_runs
from ..services.sync import SyncFailedError, run_player_sync
from .schemas import SyncResponse, SyncRunResponse, SyncSummaryResponse

router = APIRouter()


@router.post("", response_model=SyncResponse, dependencies=[Depends(verify_api_key)])
def trigger_sync(
    session_factory: sessionmaker[Session] = Depends(get_session_factory),
    feed: ChppFeed = Depends(get_chpp_feed),
) -> SyncResponse:
    """Run one sync cycle in-request and return its summary."""
    logger.info("sync_requested")
    try:
        summary = run_player_sync(session_factory, feed)
    except SyncFailedError as exc:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(exc)) from exc
    return SyncResponse(summary=SyncSummaryResponse(**summary))


def _serialize_run(run: SyncRun) -> SyncRunResponse:
    return SyncRunResponse(
        id=run.id,
        requested_at=run.requested_at,
        completed_at=run.completed_at,
        status=run.status,
        message=run.message,
        changes_count=run.changes_count,
        summary_data=run.summary_data,
    )


@router.get("/runs", response_model=list[SyncRunResponse])
def get_sync_runs(
    limit: int = Query(20, ge=1, le=200),
    session: Session = Depends(get_db),
) -> list[SyncRunResponse]:
    return [_serialize_run(run) for run in list_sync_runs(session, limit)]
