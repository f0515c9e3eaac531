"""Data models for CHPP feed records."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Protocol

from ..db.matches import MatchStatus, MatchType


@dataclass
class ChppPlayer:
    """One roster entry; ``raw`` is the verbatim Player element."""

    external_id: int
    team_id: int
    name: str
    raw: dict[str, Any]


@dataclass(frozen=True)
class AvatarLayer:
    image_url: str
    x: int
    y: int


@dataclass
class ChppAvatar:
    external_id: int
    background_image_url: str | None
    layers: list[AvatarLayer] = field(default_factory=list)

    def to_raw(self) -> dict[str, Any]:
        return {
            "backgroundImageUrl": self.background_image_url,
            "layers": [
                {"imageUrl": layer.image_url, "x": layer.x, "y": layer.y}
                for layer in self.layers
            ],
        }


@dataclass(frozen=True)
class TeamRef:
    id: int
    name: str
    short_name: str | None = None


@dataclass
class ChppMatch:
    match_id: int
    team_id: int
    match_date: datetime
    home_team: TeamRef
    away_team: TeamRef
    home_goals: int
    away_goals: int
    status: MatchStatus
    match_type: MatchType
    match_context_id: int
    cup_level: int | None = None
    cup_level_index: int | None = None
    source_system: str | None = None
    orders_given: bool | None = None


class ChppFeed(Protocol):
    """What the sync engine needs from the external game API."""

    def fetch_players(self) -> list[ChppPlayer]: ...

    def fetch_avatars(self) -> list[ChppAvatar]: ...

    def fetch_matches(
        self, team_id: int | None = None, last_match_date: datetime | None = None
    ) -> list[ChppMatch]: ...
