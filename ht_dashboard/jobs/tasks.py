"""Celery tasks for running syncs outside the request cycle."""

from __future__ import annotations

from celery import shared_task

from ..logging import logger


@shared_task(name="run_player_sync")
def run_player_sync_task() -> dict:
    """Run one sync cycle against CHPP with the process default database.

    Returns:
        The sync summary (syncRunId, totalPlayers, playersCreated,
        playersUpdated, totalChanges).
    """
    from ..chpp import ChppClient
    from ..db import get_default_session_factory
    from ..services.sync import run_player_sync

    logger.info("sync_task_started")
    with ChppClient() as client:
        summary = run_player_sync(get_default_session_factory(), client)
    logger.info("sync_task_completed", **summary)
    return dict(summary)
