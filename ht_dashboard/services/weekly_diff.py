"""Week-over-week deltas for tracked numeric player fields.

Read-side enrichment only; nothing here is persisted.
"""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import Any, Sequence, TypedDict

from sqlalchemy.orm import Session

from ..db import PlayerSnapshot
from ..utils.datetime_utils import ensure_utc, now_utc
from ..utils.parsing import parse_float
from .snapshots import list_snapshots

TRACKED_FIELDS = (
    "TSI",
    "PlayerForm",
    "Experience",
    "StaminaSkill",
    "KeeperSkill",
    "PlaymakerSkill",
    "ScorerSkill",
    "PassingSkill",
    "WingerSkill",
    "DefenderSkill",
    "SetPiecesSkill",
)

DEFAULT_WINDOW_DAYS = 7


class FieldDelta(TypedDict):
    current: float | None
    previous: float | None
    delta: float | None


def pick_previous_snapshot(
    snapshots: Sequence[PlayerSnapshot], cutoff: datetime
) -> PlayerSnapshot | None:
    """First snapshot after the current one fetched at or before ``cutoff``.

    ``snapshots`` must be newest first. Falls back to the oldest snapshot,
    which is the current one itself when only one exists.
    """
    if not snapshots:
        return None
    for snapshot in snapshots[1:]:
        if ensure_utc(snapshot.fetched_at) <= cutoff:
            return snapshot
    return snapshots[-1]


def compute_field_deltas(
    current: dict[str, Any] | None, previous: dict[str, Any] | None
) -> dict[str, FieldDelta]:
    current = current or {}
    previous = previous or {}
    deltas: dict[str, FieldDelta] = {}
    for field in TRACKED_FIELDS:
        current_value = parse_float(current.get(field))
        previous_value = parse_float(previous.get(field))
        delta = (
            current_value - previous_value
            if current_value is not None and previous_value is not None
            else None
        )
        deltas[field] = {"current": current_value, "previous": previous_value, "delta": delta}
    return deltas


def compute_weekly_diffs(
    session: Session,
    player_ids: list[int],
    window_days: int = DEFAULT_WINDOW_DAYS,
    now: datetime | None = None,
) -> dict[int, dict[str, FieldDelta]]:
    """Per-player tracked field deltas between now and ``window_days`` ago.

    Players without any snapshot are omitted.
    """
    cutoff = (ensure_utc(now) if now else now_utc()) - timedelta(days=window_days)
    result: dict[int, dict[str, FieldDelta]] = {}
    for player_id, snapshots in list_snapshots(session, player_ids).items():
        if not snapshots:
            continue
        previous = pick_previous_snapshot(snapshots, cutoff)
        result[player_id] = compute_field_deltas(
            snapshots[0].data, previous.data if previous else None
        )
    return result
