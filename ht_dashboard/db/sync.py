"""Sync run tracking models."""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Any

from sqlalchemy import DateTime, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from ..utils.datetime_utils import now_utc
from .base import Base, JSONType


class SyncRunStatus(str, Enum):
    PENDING = "PENDING"
    SUCCESS = "SUCCESS"
    FAILED = "FAILED"


class SyncRun(Base):
    """Audit record for one sync invocation."""

    __tablename__ = "sync_runs"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    requested_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=now_utc, nullable=False
    )
    completed_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    status: Mapped[str] = mapped_column(
        String(20), default=SyncRunStatus.PENDING.value, nullable=False, index=True
    )
    message: Mapped[str | None] = mapped_column(Text, nullable=True)
    changes_count: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    summary_data: Mapped[dict[str, Any] | None] = mapped_column(JSONType, nullable=True)

    __table_args__ = (Index("idx_sync_runs_requested", "requested_at"),)
