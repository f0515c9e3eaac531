"""Celery application for on-demand background syncs."""

from celery import Celery
from celery.signals import worker_process_init

from .config import settings

celery_app = Celery(
    "hattrick_dashboard",
    broker=settings.redis_url,
    backend=settings.redis_url,
    include=["ht_dashboard.jobs.tasks"],
)

celery_app.conf.update(
    task_serializer="json",
    accept_content=["json"],
    result_serializer="json",
    timezone="UTC",
    enable_utc=True,
    task_track_started=True,
    task_time_limit=600,
    task_soft_time_limit=540,
    result_expires=86400,
)


@worker_process_init.connect
def prepare_database(**_kwargs) -> None:
    """Create missing tables in each worker process before tasks run."""
    from .db import get_default_session_factory, init_db

    init_db(get_default_session_factory())
