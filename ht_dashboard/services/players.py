"""Read-side player queries for the dashboard."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Mapping

from sqlalchemy import select
from sqlalchemy.orm import Session, selectinload

from ..db import Player, PlayerChange, PlayerSnapshot
from ..scoring.formations import get_formation, select_players_for_formation
from ..scoring.positions import Position
from ..scoring.preparation import PlayerRanking, prepare_player_ranking
from .snapshots import list_changes
from .weekly_diff import DEFAULT_WINDOW_DAYS, FieldDelta, compute_weekly_diffs

DEFAULT_RECENT_CHANGES = 5


@dataclass
class PlayerView:
    player: Player
    latest_snapshot: PlayerSnapshot | None
    changes: list[PlayerChange]
    weekly_diff: dict[str, FieldDelta] | None
    ranking: PlayerRanking | None = None


def _rank(
    player: Player,
    overrides: Mapping[int, Position | str] | None,
    now: datetime | None,
) -> PlayerRanking | None:
    snapshot = player.latest_snapshot
    if snapshot is None:
        return None
    override = (overrides or {}).get(player.external_id)
    return prepare_player_ranking(player.external_id, snapshot.data, override, now)


def list_players(
    session: Session,
    recent_changes_limit: int = DEFAULT_RECENT_CHANGES,
    window_days: int = DEFAULT_WINDOW_DAYS,
    overrides: Mapping[int, Position | str] | None = None,
    now: datetime | None = None,
) -> list[PlayerView]:
    """All players by external id, each with latest snapshot, recent changes,
    weekly diff and position ranking.

    ``overrides`` maps external player id to a forced best position.
    """
    players = list(
        session.execute(
            select(Player)
            .options(selectinload(Player.latest_snapshot))
            .order_by(Player.external_id, Player.id)
        ).scalars()
    )

    weekly = compute_weekly_diffs(session, [p.id for p in players], window_days, now)
    return [
        PlayerView(
            player=player,
            latest_snapshot=player.latest_snapshot,
            changes=list_changes(session, player.id, recent_changes_limit),
            weekly_diff=weekly.get(player.id),
            ranking=_rank(player, overrides, now),
        )
        for player in players
    ]


def find_player_with_history(
    session: Session,
    external_id: int,
    window_days: int = DEFAULT_WINDOW_DAYS,
    override: Position | str | None = None,
    now: datetime | None = None,
) -> PlayerView | None:
    """One player by external id with the complete change log, newest first."""
    player = session.execute(
        select(Player)
        .options(selectinload(Player.latest_snapshot))
        .where(Player.external_id == external_id)
        .order_by(Player.id)
        .limit(1)
    ).scalar_one_or_none()
    if player is None:
        return None

    weekly = compute_weekly_diffs(session, [player.id], window_days, now)
    overrides = {external_id: override} if override else None
    return PlayerView(
        player=player,
        latest_snapshot=player.latest_snapshot,
        changes=list_changes(session, player.id),
        weekly_diff=weekly.get(player.id),
        ranking=_rank(player, overrides, now),
    )


def select_formation_players(
    session: Session,
    formation_id: str,
    overrides: Mapping[int, Position | str] | None = None,
    now: datetime | None = None,
) -> list[int] | None:
    """External ids of active players picked for a formation, or None for an
    unknown formation id."""
    formation = get_formation(formation_id)
    if formation is None:
        return None

    players = session.execute(
        select(Player)
        .options(selectinload(Player.latest_snapshot))
        .where(Player.active.is_(True))
        .order_by(Player.external_id, Player.id)
    ).scalars()
    rankings = [
        ranking
        for ranking in (_rank(player, overrides, now) for player in players)
        if ranking is not None
    ]
    return sorted(select_players_for_formation(rankings, formation))
