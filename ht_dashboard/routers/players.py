"""Player roster endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from ..config import settings
from ..db import PlayerChange, PlayerSnapshot
from ..dependencies import get_db, get_position_overrides
from ..logging import logger
from ..scoring.positions import Position, get_position_display_info
from ..scoring.preparation import PlayerRanking
from ..services.players import PlayerView, find_player_with_history, list_players
from .schemas import (
    FieldDeltaResponse,
    PlayerChangeResponse,
    PlayerDetailEnvelope,
    PlayerDetailResponse,
    PlayerListResponse,
    PlayerRankingResponse,
    PlayerResponse,
    PositionDisplay,
    SnapshotResponse,
)

router = APIRouter()


def serialize_snapshot(snapshot: PlayerSnapshot | None) -> SnapshotResponse | None:
    if snapshot is None:
        return None
    return SnapshotResponse(
        snapshot_id=snapshot.id,
        fetched_at=snapshot.fetched_at,
        data=snapshot.data,
    )


def serialize_change(change: PlayerChange) -> PlayerChangeResponse:
    return PlayerChangeResponse(
        change_id=change.id,
        snapshot_id=change.snapshot_id,
        field_name=change.field_name,
        old_value=change.old_value,
        new_value=change.new_value,
        recorded_at=change.recorded_at,
    )


def serialize_ranking(ranking: PlayerRanking | None) -> PlayerRankingResponse | None:
    if ranking is None:
        return None
    display = get_position_display_info(ranking.best_position)
    return PlayerRankingResponse(
        best_position=ranking.best_position.value if ranking.best_position else None,
        best_position_score=ranking.best_position_score,
        computed_best_position=(
            ranking.computed_best_position.value if ranking.computed_best_position else None
        ),
        computed_best_score=ranking.computed_best_score,
        best_position_is_overridden=ranking.best_position_is_overridden,
        best_position_display=PositionDisplay(**display) if display else None,
        position_scores={pos.value: score for pos, score in ranking.position_scores.items()},
        has_played_this_period=ranking.has_played_this_period,
        injury_days_remaining=ranking.injury_days_remaining,
    )


def _weekly(view: PlayerView) -> dict[str, FieldDeltaResponse] | None:
    if view.weekly_diff is None:
        return None
    return {name: FieldDeltaResponse(**delta) for name, delta in view.weekly_diff.items()}


@router.get("", response_model=PlayerListResponse)
def get_players(
    session: Session = Depends(get_db),
    overrides: dict[int, Position] = Depends(get_position_overrides),
) -> PlayerListResponse:
    sync_config = settings.sync_config
    views = list_players(
        session,
        recent_changes_limit=sync_config.recent_changes_limit,
        window_days=sync_config.weekly_window_days,
        overrides=overrides,
    )
    logger.info("players_listed", count=len(views))
    return PlayerListResponse(
        players=[
            PlayerResponse(
                player_id=view.player.external_id,
                team_id=view.player.team_id,
                name=view.player.name,
                active=view.player.active,
                latest_snapshot=serialize_snapshot(view.latest_snapshot),
                recent_changes=[serialize_change(c) for c in view.changes],
                weekly_diff=_weekly(view),
                ranking=serialize_ranking(view.ranking),
            )
            for view in views
        ]
    )


@router.get("/{player_id}", response_model=PlayerDetailEnvelope)
def get_player(
    player_id: int,
    session: Session = Depends(get_db),
    overrides: dict[int, Position] = Depends(get_position_overrides),
) -> PlayerDetailEnvelope:
    view = find_player_with_history(
        session,
        player_id,
        window_days=settings.sync_config.weekly_window_days,
        override=overrides.get(player_id),
    )
    if view is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Player not found")
    return PlayerDetailEnvelope(
        player=PlayerDetailResponse(
            player_id=view.player.external_id,
            team_id=view.player.team_id,
            name=view.player.name,
            active=view.player.active,
            latest_snapshot=serialize_snapshot(view.latest_snapshot),
            changes=[serialize_change(c) for c in view.changes],
            weekly_diff=_weekly(view),
            ranking=serialize_ranking(view.ranking),
        )
    )
