"""Match models."""

from __future__ import annotations

from datetime import datetime
from enum import Enum

from sqlalchemy import (
    BigInteger,
    Boolean,
    DateTime,
    Index,
    Integer,
    String,
    func,
)
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base


class MatchStatus(str, Enum):
    FINISHED = "FINISHED"
    ONGOING = "ONGOING"
    UPCOMING = "UPCOMING"


class MatchType(str, Enum):
    """Hattrick match categories (CHPP ``MatchType`` codes 1-11)."""

    LEAGUE = "LEAGUE"
    QUALIFICATION = "QUALIFICATION"
    CUP = "CUP"
    FRIENDLY = "FRIENDLY"
    HATTRICK_MASTERS = "HATTRICK_MASTERS"
    WORLD_CUP = "WORLD_CUP"
    U20_WORLD_CUP = "U20_WORLD_CUP"
    LADDER = "LADDER"
    TOURNAMENT = "TOURNAMENT"
    SINGLE = "SINGLE"
    PREPARATION = "PREPARATION"


OFFICIAL_MATCH_TYPES = (MatchType.LEAGUE.value, MatchType.CUP.value)


class Match(Base):
    """Senior team matches keyed by the CHPP match id."""

    __tablename__ = "matches"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    match_id: Mapped[int] = mapped_column(
        BigInteger, unique=True, nullable=False, index=True
    )
    team_id: Mapped[int] = mapped_column(BigInteger, nullable=False, index=True)
    match_date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, index=True
    )
    home_team_id: Mapped[int] = mapped_column(BigInteger, nullable=False)
    home_team_name: Mapped[str] = mapped_column(String(200), nullable=False)
    home_team_short_name: Mapped[str | None] = mapped_column(String(100), nullable=True)
    away_team_id: Mapped[int] = mapped_column(BigInteger, nullable=False)
    away_team_name: Mapped[str] = mapped_column(String(200), nullable=False)
    away_team_short_name: Mapped[str | None] = mapped_column(String(100), nullable=True)
    home_goals: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    away_goals: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    status: Mapped[str] = mapped_column(
        String(20), default=MatchStatus.UPCOMING.value, nullable=False
    )
    match_type: Mapped[str] = mapped_column(String(30), nullable=False)
    match_context_id: Mapped[int] = mapped_column(BigInteger, default=0, nullable=False)
    cup_level: Mapped[int | None] = mapped_column(Integer, nullable=True)
    cup_level_index: Mapped[int | None] = mapped_column(Integer, nullable=True)
    source_system: Mapped[str | None] = mapped_column(String(50), nullable=True)
    orders_given: Mapped[bool | None] = mapped_column(Boolean, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )

    __table_args__ = (
        Index("idx_matches_team_date", "team_id", "match_date"),
        Index("idx_matches_status_type", "status", "match_type"),
    )

    def __repr__(self) -> str:
        return f"<Match(match_id={self.match_id}, status='{self.status}')>"
