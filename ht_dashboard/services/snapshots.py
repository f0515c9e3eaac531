"""Snapshot and change-log persistence for a single player.

All helpers take an open session and never commit; the caller owns the
per-player transaction.
"""

from __future__ import annotations

from typing import Any

from sqlalchemy import desc, select
from sqlalchemy.orm import Session

from ..db import Player, PlayerChange, PlayerSnapshot
from ..logging import logger
from ..utils.datetime_utils import now_utc
from .diff import diff_records
from .hashing import compute_content_hash


def upsert_player(
    session: Session, external_id: int, team_id: int, name: str
) -> tuple[Player, bool]:
    """Find or create the roster row; returns ``(player, created)``.

    An existing row gets its name refreshed and is re-activated.
    """
    player = session.execute(
        select(Player).where(
            Player.external_id == external_id,
            Player.team_id == team_id,
        )
    ).scalar_one_or_none()

    if player is None:
        player = Player(external_id=external_id, team_id=team_id, name=name, active=True)
        session.add(player)
        session.flush()
        return player, True

    player.name = name
    player.active = True
    return player, False


def record_snapshot(
    session: Session, player: Player, raw: dict[str, Any]
) -> tuple[PlayerSnapshot | None, int]:
    """Append a snapshot when the raw bag changed; returns ``(snapshot, diff_count)``.

    Unchanged content (same hash as the latest snapshot) is a no-op and
    returns ``(None, 0)``. Diffs are only written when a previous snapshot
    exists; the first snapshot is the baseline.
    """
    previous = player.latest_snapshot
    content_hash = compute_content_hash(raw)
    if previous is not None and previous.hash == content_hash:
        return None, 0

    fetched_at = now_utc()
    snapshot = PlayerSnapshot(
        player_id=player.id,
        fetched_at=fetched_at,
        data=raw,
        hash=content_hash,
    )
    session.add(snapshot)
    session.flush()
    player.latest_snapshot = snapshot

    if previous is None:
        return snapshot, 0

    diffs = diff_records(previous.data, raw)
    session.add_all(
        PlayerChange(
            player_id=player.id,
            snapshot_id=snapshot.id,
            field_name=diff.field_name,
            old_value=diff.old_value,
            new_value=diff.new_value,
            recorded_at=fetched_at,
        )
        for diff in diffs
    )
    if diffs:
        logger.debug(
            "player_changes_recorded",
            player_id=player.id,
            snapshot_id=snapshot.id,
            count=len(diffs),
        )
    return snapshot, len(diffs)


def list_snapshots(session: Session, player_ids: list[int]) -> dict[int, list[PlayerSnapshot]]:
    """Snapshots per player, newest first."""
    grouped: dict[int, list[PlayerSnapshot]] = {player_id: [] for player_id in player_ids}
    if not player_ids:
        return grouped
    rows = session.execute(
        select(PlayerSnapshot)
        .where(PlayerSnapshot.player_id.in_(player_ids))
        .order_by(
            PlayerSnapshot.player_id,
            desc(PlayerSnapshot.fetched_at),
            desc(PlayerSnapshot.id),
        )
    ).scalars()
    for snapshot in rows:
        grouped[snapshot.player_id].append(snapshot)
    return grouped


def list_changes(
    session: Session, player_id: int, limit: int | None = None
) -> list[PlayerChange]:
    """A player's change log, most recent first."""
    stmt = (
        select(PlayerChange)
        .where(PlayerChange.player_id == player_id)
        .order_by(desc(PlayerChange.recorded_at), desc(PlayerChange.id))
    )
    if limit is not None:
        stmt = stmt.limit(limit)
    return list(session.execute(stmt).scalars())
