"""Derive lineup-ranking fields from a player's latest snapshot."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Mapping

from ..utils.datetime_utils import match_week_bounds, parse_chpp_datetime
from ..utils.parsing import parse_float
from .positions import Position, compute_position_scores, parse_position

LAST_MATCH_KEY = "LastMatch"
LAST_MATCH_DATE_KEY = "Date"
INJURY_LEVEL_KEY = "InjuryLevel"


@dataclass
class PlayerRanking:
    player_id: int
    best_position: Position | None
    best_position_score: float | None
    computed_best_position: Position | None
    computed_best_score: float | None
    best_position_is_overridden: bool
    has_played_this_period: bool
    injury_days_remaining: float | None
    position_scores: dict[Position, float] = field(default_factory=dict)


def has_played_this_period(data: Mapping[str, Any] | None, now: datetime | None = None) -> bool:
    """True when ``LastMatch.Date`` falls inside the current match week."""
    last_match = (data or {}).get(LAST_MATCH_KEY)
    if not isinstance(last_match, Mapping):
        return False
    played_at = parse_chpp_datetime(last_match.get(LAST_MATCH_DATE_KEY))
    if played_at is None:
        return False
    start, end = match_week_bounds(now)
    return start <= played_at < end


def injury_days_remaining(data: Mapping[str, Any] | None) -> float | None:
    level = parse_float((data or {}).get(INJURY_LEVEL_KEY))
    return level if level is not None and level > 0 else None


def prepare_player_ranking(
    player_id: int,
    data: Mapping[str, Any] | None,
    override_position: Position | str | None = None,
    now: datetime | None = None,
) -> PlayerRanking:
    """Score a snapshot and apply an optional best-position override.

    An unknown override value is ignored.
    """
    result = compute_position_scores(data)
    override = parse_position(override_position) if override_position else None
    best_position = override or result.best_position
    return PlayerRanking(
        player_id=player_id,
        best_position=best_position,
        best_position_score=(
            result.scores.get(best_position) if best_position else result.best_score
        ),
        computed_best_position=result.best_position,
        computed_best_score=result.best_score,
        best_position_is_overridden=override is not None,
        has_played_this_period=has_played_this_period(data, now),
        injury_days_remaining=injury_days_remaining(data),
        position_scores=result.scores,
    )
