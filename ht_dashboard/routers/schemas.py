"""Pydantic response schemas for the dashboard API (camelCase on the wire)."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class _Schema(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class SnapshotResponse(_Schema):
    snapshot_id: int = Field(..., alias="snapshotId")
    fetched_at: datetime = Field(..., alias="fetchedAt")
    data: dict[str, Any]


class PlayerChangeResponse(_Schema):
    change_id: int = Field(..., alias="changeId")
    snapshot_id: int = Field(..., alias="snapshotId")
    field_name: str = Field(..., alias="fieldName")
    old_value: str | None = Field(None, alias="oldValue")
    new_value: str | None = Field(None, alias="newValue")
    recorded_at: datetime = Field(..., alias="recordedAt")


class FieldDeltaResponse(_Schema):
    current: float | None = None
    previous: float | None = None
    delta: float | None = None


class PositionDisplay(_Schema):
    label: str
    color: str


class PlayerRankingResponse(_Schema):
    best_position: str | None = Field(None, alias="bestPosition")
    best_position_score: float | None = Field(None, alias="bestPositionScore")
    computed_best_position: str | None = Field(None, alias="computedBestPosition")
    computed_best_score: float | None = Field(None, alias="computedBestScore")
    best_position_is_overridden: bool = Field(False, alias="bestPositionIsOverridden")
    best_position_display: PositionDisplay | None = Field(None, alias="bestPositionDisplay")
    position_scores: dict[str, float] = Field(default_factory=dict, alias="positionScores")
    has_played_this_period: bool = Field(False, alias="hasPlayedThisPeriod")
    injury_days_remaining: float | None = Field(None, alias="injuryDaysRemaining")


class PlayerResponse(_Schema):
    player_id: int = Field(..., alias="playerId")
    team_id: int = Field(..., alias="teamId")
    name: str
    active: bool
    latest_snapshot: SnapshotResponse | None = Field(None, alias="latestSnapshot")
    recent_changes: list[PlayerChangeResponse] = Field(
        default_factory=list, alias="recentChanges"
    )
    weekly_diff: dict[str, FieldDeltaResponse] | None = Field(None, alias="weeklyDiff")
    ranking: PlayerRankingResponse | None = None


class PlayerDetailResponse(_Schema):
    player_id: int = Field(..., alias="playerId")
    team_id: int = Field(..., alias="teamId")
    name: str
    active: bool
    latest_snapshot: SnapshotResponse | None = Field(None, alias="latestSnapshot")
    changes: list[PlayerChangeResponse] = Field(default_factory=list)
    weekly_diff: dict[str, FieldDeltaResponse] | None = Field(None, alias="weeklyDiff")
    ranking: PlayerRankingResponse | None = None


class PlayerListResponse(_Schema):
    players: list[PlayerResponse]


class PlayerDetailEnvelope(_Schema):
    player: PlayerDetailResponse


class MatchResponse(_Schema):
    id: int
    match_id: int = Field(..., alias="matchId")
    team_id: int = Field(..., alias="teamId")
    match_date: datetime = Field(..., alias="matchDate")
    home_team_id: int = Field(..., alias="homeTeamId")
    home_team_name: str = Field(..., alias="homeTeamName")
    home_team_short_name: str | None = Field(None, alias="homeTeamShortName")
    away_team_id: int = Field(..., alias="awayTeamId")
    away_team_name: str = Field(..., alias="awayTeamName")
    away_team_short_name: str | None = Field(None, alias="awayTeamShortName")
    home_goals: int = Field(..., alias="homeGoals")
    away_goals: int = Field(..., alias="awayGoals")
    status: str
    match_type: str = Field(..., alias="matchType")
    match_context_id: int = Field(..., alias="matchContextId")
    cup_level: int | None = Field(None, alias="cupLevel")
    cup_level_index: int | None = Field(None, alias="cupLevelIndex")
    source_system: str | None = Field(None, alias="sourceSystem")
    orders_given: bool | None = Field(None, alias="ordersGiven")
    created_at: datetime | None = Field(None, alias="createdAt")
    updated_at: datetime | None = Field(None, alias="updatedAt")


class MatchListResponse(_Schema):
    matches: list[MatchResponse]


class MatchEnvelope(_Schema):
    match: MatchResponse


class ThisWeekMatchesResponse(_Schema):
    match_ids: list[int] = Field(..., alias="matchIds")


class SyncSummaryResponse(_Schema):
    sync_run_id: int = Field(..., alias="syncRunId")
    total_players: int = Field(..., alias="totalPlayers")
    players_created: int = Field(..., alias="playersCreated")
    players_updated: int = Field(..., alias="playersUpdated")
    total_changes: int = Field(..., alias="totalChanges")


class SyncResponse(_Schema):
    summary: SyncSummaryResponse


class SyncRunResponse(_Schema):
    id: int
    requested_at: datetime = Field(..., alias="requestedAt")
    completed_at: datetime | None = Field(None, alias="completedAt")
    status: str
    message: str | None = None
    changes_count: int = Field(..., alias="changesCount")
    summary_data: dict[str, Any] | None = Field(None, alias="summaryData")


class FormationResponse(_Schema):
    id: str
    name: str
    positions: list[str]
    required_slots: dict[str, int] = Field(..., alias="requiredSlots")


class FormationSelectionResponse(_Schema):
    formation_id: str = Field(..., alias="formationId")
    player_ids: list[int] = Field(..., alias="playerIds")


class TableListResponse(_Schema):
    tables: list[str]


class TableDataResponse(_Schema):
    table_name: str = Field(..., alias="tableName")
    columns: list[str]
    rows: list[dict[str, Any]]
    row_count: int = Field(..., alias="rowCount")


class TableEnvelope(_Schema):
    table: TableDataResponse
