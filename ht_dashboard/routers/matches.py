"""Match listing endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from ..config import settings
from ..db import Match
from ..dependencies import get_db
from ..services.matches import find_match, list_matches, this_week_official_match_ids
from .schemas import MatchEnvelope, MatchListResponse, MatchResponse, ThisWeekMatchesResponse

router = APIRouter()


def serialize_match(match: Match) -> MatchResponse:
    return MatchResponse(
        id=match.id,
        match_id=match.match_id,
        team_id=match.team_id,
        match_date=match.match_date,
        home_team_id=match.home_team_id,
        home_team_name=match.home_team_name,
        home_team_short_name=match.home_team_short_name,
        away_team_id=match.away_team_id,
        away_team_name=match.away_team_name,
        away_team_short_name=match.away_team_short_name,
        home_goals=match.home_goals,
        away_goals=match.away_goals,
        status=match.status,
        match_type=match.match_type,
        match_context_id=match.match_context_id,
        cup_level=match.cup_level,
        cup_level_index=match.cup_level_index,
        source_system=match.source_system,
        orders_given=match.orders_given,
        created_at=match.created_at,
        updated_at=match.updated_at,
    )


@router.get("", response_model=MatchListResponse)
def get_matches(
    limit: int | None = Query(None, ge=1, le=500),
    session: Session = Depends(get_db),
) -> MatchListResponse:
    matches = list_matches(session, team_id=settings.chpp_team_id, limit=limit)
    return MatchListResponse(matches=[serialize_match(m) for m in matches])


@router.get("/this-week", response_model=ThisWeekMatchesResponse)
def get_this_week_matches(session: Session = Depends(get_db)) -> ThisWeekMatchesResponse:
    match_ids = this_week_official_match_ids(session, team_id=settings.chpp_team_id)
    return ThisWeekMatchesResponse(match_ids=match_ids)


@router.get("/{match_id}", response_model=MatchEnvelope)
def get_match(match_id: int, session: Session = Depends(get_db)) -> MatchEnvelope:
    match = find_match(session, match_id)
    if match is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Match not found")
    return MatchEnvelope(match=serialize_match(match))
