"""Shared pytest fixtures and configuration."""

from __future__ import annotations

import copy
import os
from datetime import datetime, timezone
from typing import Any

import pytest

# Set environment variables before any package import reads settings
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("REDIS_URL", "redis://localhost:6379/0")
os.environ.setdefault("LOG_LEVEL", "WARNING")

from ht_dashboard.chpp.models import ChppAvatar, ChppMatch, ChppPlayer, TeamRef  # noqa: E402
from ht_dashboard.config import Settings  # noqa: E402
from ht_dashboard.db import MatchStatus, MatchType, create_session_factory, init_db  # noqa: E402

TEAM_ID = 4242


class FakeFeed:
    """In-memory stand-in for the CHPP client."""

    def __init__(
        self,
        players: list[ChppPlayer] | None = None,
        avatars: list[ChppAvatar] | None = None,
        matches: list[ChppMatch] | None = None,
    ) -> None:
        self.players = players or []
        self.avatars = avatars or []
        self.matches = matches or []
        self.match_calls: list[dict[str, Any]] = []

    def fetch_players(self) -> list[ChppPlayer]:
        return copy.deepcopy(self.players)

    def fetch_avatars(self) -> list[ChppAvatar]:
        return list(self.avatars)

    def fetch_matches(self, team_id=None, last_match_date=None) -> list[ChppMatch]:
        self.match_calls.append({"team_id": team_id, "last_match_date": last_match_date})
        return list(self.matches)


def make_player(external_id: int, name: str = "", **raw: Any) -> ChppPlayer:
    data = {"PlayerID": external_id, "FirstName": name or f"Player{external_id}", **raw}
    return ChppPlayer(
        external_id=external_id,
        team_id=TEAM_ID,
        name=name or f"Player{external_id}",
        raw=data,
    )


def make_match(
    match_id: int,
    match_date: datetime,
    status: MatchStatus = MatchStatus.FINISHED,
    match_type: MatchType = MatchType.LEAGUE,
    home_goals: int = 0,
    away_goals: int = 0,
) -> ChppMatch:
    return ChppMatch(
        match_id=match_id,
        team_id=TEAM_ID,
        match_date=match_date,
        home_team=TeamRef(id=TEAM_ID, name="Home FC", short_name="HFC"),
        away_team=TeamRef(id=99, name="Away United", short_name=None),
        home_goals=home_goals,
        away_goals=away_goals,
        status=status,
        match_type=match_type,
        match_context_id=1,
    )


@pytest.fixture
def session_factory():
    """Fresh in-memory SQLite database per test."""
    factory = create_session_factory("sqlite://", echo=False)
    init_db(factory)
    yield factory
    factory.kw["bind"].dispose()


@pytest.fixture
def test_settings() -> Settings:
    return Settings(
        ENVIRONMENT="test",
        CHPP_TEAM_ID=TEAM_ID,
        CHPP_CONSUMER_KEY="ck",
        CHPP_CONSUMER_SECRET="cs",
        CHPP_ACCESS_TOKEN="at",
        CHPP_ACCESS_TOKEN_SECRET="ats",
    )


@pytest.fixture
def fixed_now() -> datetime:
    # A Wednesday; the match week started Friday 2024-03-15
    return datetime(2024, 3, 20, 12, 0, tzinfo=timezone.utc)
