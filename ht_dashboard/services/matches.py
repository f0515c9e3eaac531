"""Match upsert and read queries."""

from __future__ import annotations

from datetime import datetime
from typing import TypedDict

from sqlalchemy import desc, select
from sqlalchemy.orm import Session, sessionmaker

from ..chpp.models import ChppFeed, ChppMatch
from ..db import Match, MatchStatus, get_session
from ..db.matches import OFFICIAL_MATCH_TYPES
from ..logging import logger
from ..utils.datetime_utils import last_friday_utc, now_utc

OFFICIAL_MATCHES_PER_WEEK = 2


class MatchSyncResult(TypedDict):
    matchesAdded: int
    totalMatches: int


def _new_match(chpp_match: ChppMatch) -> Match:
    return Match(
        match_id=chpp_match.match_id,
        team_id=chpp_match.team_id,
        match_date=chpp_match.match_date,
        home_team_id=chpp_match.home_team.id,
        home_team_name=chpp_match.home_team.name,
        home_team_short_name=chpp_match.home_team.short_name,
        away_team_id=chpp_match.away_team.id,
        away_team_name=chpp_match.away_team.name,
        away_team_short_name=chpp_match.away_team.short_name,
        home_goals=chpp_match.home_goals,
        away_goals=chpp_match.away_goals,
        status=chpp_match.status.value,
        match_type=chpp_match.match_type.value,
        match_context_id=chpp_match.match_context_id,
        cup_level=chpp_match.cup_level,
        cup_level_index=chpp_match.cup_level_index,
        source_system=chpp_match.source_system,
        orders_given=chpp_match.orders_given,
    )


def _apply_feed_update(match: Match, chpp_match: ChppMatch) -> None:
    match.home_goals = chpp_match.home_goals
    match.away_goals = chpp_match.away_goals
    match.status = chpp_match.status.value
    match.orders_given = chpp_match.orders_given


def upsert_matches(session: Session, chpp_matches: list[ChppMatch]) -> int:
    """Insert unseen matches and refresh score/status on known ones.

    A match id repeated within one feed is inserted once; later entries
    update it. Returns the number of newly inserted matches.
    """
    added = 0
    batch: dict[int, Match] = {}
    for chpp_match in chpp_matches:
        existing = batch.get(chpp_match.match_id)
        if existing is None:
            existing = session.execute(
                select(Match).where(Match.match_id == chpp_match.match_id)
            ).scalar_one_or_none()

        if existing is None:
            match = _new_match(chpp_match)
            session.add(match)
            batch[chpp_match.match_id] = match
            added += 1
            continue

        _apply_feed_update(existing, chpp_match)
        batch[chpp_match.match_id] = existing
    session.flush()
    return added


def sync_matches(
    session_factory: sessionmaker[Session],
    feed: ChppFeed,
    team_id: int | None = None,
) -> MatchSyncResult:
    """Fetch the team's matches up to now and upsert them by match id."""
    logger.info("match_sync_started", team_id=team_id)
    chpp_matches = feed.fetch_matches(team_id=team_id, last_match_date=now_utc())

    with get_session(session_factory) as session:
        added = upsert_matches(session, chpp_matches)

    logger.info(
        "match_sync_completed",
        team_id=team_id,
        matches_added=added,
        matches_updated=len(chpp_matches) - added,
    )
    return {"matchesAdded": added, "totalMatches": len(chpp_matches)}


def list_matches(
    session: Session, team_id: int | None = None, limit: int | None = None
) -> list[Match]:
    """Matches newest first, optionally for one team and capped at ``limit``."""
    stmt = select(Match).order_by(desc(Match.match_date), desc(Match.id))
    if team_id is not None:
        stmt = stmt.where(Match.team_id == team_id)
    if limit is not None:
        stmt = stmt.limit(limit)
    return list(session.execute(stmt).scalars())


def find_match(session: Session, match_id: int) -> Match | None:
    return session.execute(
        select(Match).where(Match.match_id == match_id)
    ).scalar_one_or_none()


def this_week_official_match_ids(
    session: Session, team_id: int | None = None, now: datetime | None = None
) -> list[int]:
    """Ids of the latest finished league/cup matches since the last Friday."""
    stmt = (
        select(Match.match_id)
        .where(
            Match.match_date >= last_friday_utc(now),
            Match.status == MatchStatus.FINISHED.value,
            Match.match_type.in_(OFFICIAL_MATCH_TYPES),
        )
        .order_by(desc(Match.match_date))
        .limit(OFFICIAL_MATCHES_PER_WEEK)
    )
    if team_id is not None:
        stmt = stmt.where(Match.team_id == team_id)
    return list(session.execute(stmt).scalars())
