"""Player roster, snapshot history and field-level change log models."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from sqlalchemy import (
    BigInteger,
    Boolean,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    UniqueConstraint,
    func,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from ..utils.datetime_utils import now_utc
from .base import Base, JSONType


class Player(Base):
    """One row per (external player id, team id).

    Players are never deleted; roster departures flip ``active`` to False.
    ``latest_snapshot_id`` is a lookup pointer into the player's own
    snapshot history and only moves inside the sync transaction.
    """

    __tablename__ = "players"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    external_id: Mapped[int] = mapped_column(BigInteger, nullable=False)
    team_id: Mapped[int] = mapped_column(BigInteger, nullable=False, index=True)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    latest_snapshot_id: Mapped[int | None] = mapped_column(
        Integer,
        ForeignKey(
            "player_snapshots.id",
            ondelete="SET NULL",
            use_alter=True,
            name="fk_players_latest_snapshot",
        ),
        nullable=True,
        unique=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )

    latest_snapshot: Mapped["PlayerSnapshot | None"] = relationship(
        "PlayerSnapshot",
        foreign_keys=[latest_snapshot_id],
        post_update=True,
    )
    snapshots: Mapped[list["PlayerSnapshot"]] = relationship(
        "PlayerSnapshot",
        foreign_keys="[PlayerSnapshot.player_id]",
        back_populates="player",
        cascade="all, delete-orphan",
        order_by="PlayerSnapshot.fetched_at",
    )
    changes: Mapped[list["PlayerChange"]] = relationship(
        "PlayerChange",
        back_populates="player",
        cascade="all, delete-orphan",
    )

    __table_args__ = (
        UniqueConstraint("external_id", "team_id", name="uq_player_identity"),
        Index("idx_players_team_active", "team_id", "active"),
    )

    def __repr__(self) -> str:
        return f"<Player(id={self.id}, external_id={self.external_id}, name='{self.name}')>"


class PlayerSnapshot(Base):
    """Immutable capture of a player's raw CHPP attribute bag."""

    __tablename__ = "player_snapshots"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    player_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("players.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    fetched_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=now_utc, nullable=False
    )
    data: Mapped[dict[str, Any]] = mapped_column(JSONType, nullable=False)
    hash: Mapped[str] = mapped_column(String(64), nullable=False)

    player: Mapped[Player] = relationship(
        "Player", foreign_keys=[player_id], back_populates="snapshots"
    )
    changes: Mapped[list["PlayerChange"]] = relationship(
        "PlayerChange", back_populates="snapshot"
    )

    __table_args__ = (
        Index("idx_player_snapshots_player_fetched", "player_id", "fetched_at"),
    )


class PlayerChange(Base):
    """One changed field between two consecutive snapshots of a player."""

    __tablename__ = "player_changes"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    player_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("players.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    snapshot_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("player_snapshots.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    field_name: Mapped[str] = mapped_column(String(200), nullable=False)
    old_value: Mapped[str | None] = mapped_column(Text, nullable=True)
    new_value: Mapped[str | None] = mapped_column(Text, nullable=True)
    recorded_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=now_utc, nullable=False
    )

    player: Mapped[Player] = relationship("Player", back_populates="changes")
    snapshot: Mapped[PlayerSnapshot] = relationship(
        "PlayerSnapshot", back_populates="changes"
    )

    __table_args__ = (
        Index("idx_player_changes_player_recorded", "player_id", "recorded_at"),
    )
