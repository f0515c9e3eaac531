"""One end-to-end sync cycle: roster, snapshots, change log, matches.

Each player is processed in its own transaction so the latest-snapshot
pointer, the snapshot and its change rows commit together. A failure
aborts the run; players committed before the failure stay committed and
the sync run is recorded as FAILED.
"""

from __future__ import annotations

from typing import TypedDict

from sqlalchemy import update
from sqlalchemy.orm import Session, sessionmaker

from ..chpp.constants import AVATAR_KEY
from ..chpp.models import ChppFeed, ChppPlayer
from ..config import Settings, settings as default_settings
from ..db import Player, get_session
from ..logging import logger
from .job_runs import track_sync_run
from .matches import sync_matches
from .snapshots import record_snapshot, upsert_player


class SyncFailedError(RuntimeError):
    """A sync run aborted; the run row is already marked FAILED."""

    def __init__(self, message: str, sync_run_id: int) -> None:
        super().__init__(message)
        self.sync_run_id = sync_run_id


class SyncSummary(TypedDict):
    syncRunId: int
    totalPlayers: int
    playersCreated: int
    playersUpdated: int
    totalChanges: int


class PlayerSyncResult(TypedDict):
    created: bool
    updated: bool
    changes: int


def sync_player(
    session_factory: sessionmaker[Session], chpp_player: ChppPlayer
) -> PlayerSyncResult:
    """Upsert one player and append a snapshot when its data changed."""
    with get_session(session_factory) as session:
        player, created = upsert_player(
            session, chpp_player.external_id, chpp_player.team_id, chpp_player.name
        )
        snapshot, changes = record_snapshot(session, player, chpp_player.raw)
        if snapshot is None:
            logger.debug("player_snapshot_unchanged", external_id=chpp_player.external_id)
    return {"created": created, "updated": not created and changes > 0, "changes": changes}


def deactivate_missing_players(
    session_factory: sessionmaker[Session], team_id: int, seen_external_ids: list[int]
) -> int:
    """Flip ``active`` off for team players absent from the fetched roster."""
    with get_session(session_factory) as session:
        result = session.execute(
            update(Player)
            .where(
                Player.team_id == team_id,
                Player.active.is_(True),
                Player.external_id.not_in(seen_external_ids),
            )
            .values(active=False)
            .execution_options(synchronize_session=False)
        )
        deactivated = result.rowcount or 0
    if deactivated:
        logger.info("players_deactivated", team_id=team_id, count=deactivated)
    return deactivated


def attach_avatars(feed: ChppFeed, players: list[ChppPlayer]) -> None:
    """Merge avatar compositions into each player's raw bag under ``Avatar``."""
    avatars = {avatar.external_id: avatar for avatar in feed.fetch_avatars()}
    for player in players:
        avatar = avatars.get(player.external_id)
        if avatar is not None:
            player.raw[AVATAR_KEY] = avatar.to_raw()


def run_player_sync(
    session_factory: sessionmaker[Session],
    feed: ChppFeed,
    settings: Settings | None = None,
) -> SyncSummary:
    """Run one sync cycle and return its summary.

    Raises:
        SyncFailedError: wrapping whatever aborted the run.
    """
    settings = settings or default_settings
    sync_config = settings.sync_config
    tracker_run_id: int | None = None

    try:
        with track_sync_run(session_factory) as tracker:
            tracker_run_id = tracker.run_id
            players = feed.fetch_players()
            team_id = settings.chpp_team_id or (players[0].team_id if players else None)
            logger.info(
                "sync_players_fetched",
                run_id=tracker.run_id,
                team_id=team_id,
                count=len(players),
            )
            if sync_config.include_avatars and players:
                attach_avatars(feed, players)

            created = updated = 0
            for chpp_player in players:
                result = sync_player(session_factory, chpp_player)
                created += int(result["created"])
                updated += int(result["updated"])
                tracker.changes_count += result["changes"]

            deactivated = 0
            if team_id is None:
                logger.warning("sync_deactivation_skipped", reason="unknown_team")
            elif len(players) < sync_config.min_roster_size:
                logger.warning(
                    "sync_deactivation_skipped",
                    reason="roster_below_minimum",
                    fetched=len(players),
                    min_roster_size=sync_config.min_roster_size,
                )
            else:
                deactivated = deactivate_missing_players(
                    session_factory, team_id, [p.external_id for p in players]
                )

            match_result = sync_matches(session_factory, feed, team_id)

            tracker.set("playersCreated", created)
            tracker.set("playersUpdated", updated)
            tracker.set("playersDeactivated", deactivated)
            tracker.set("matchesAdded", match_result["matchesAdded"])
    except Exception as exc:
        logger.error(
            "sync_run_failed",
            run_id=tracker_run_id,
            error=str(exc),
            exc_info=True,
        )
        if tracker_run_id is None:
            raise
        raise SyncFailedError(str(exc) or type(exc).__name__, tracker_run_id) from exc

    summary: SyncSummary = {
        "syncRunId": tracker.run_id,
        "totalPlayers": len(players),
        "playersCreated": created,
        "playersUpdated": updated,
        "totalChanges": tracker.changes_count,
    }
    logger.info("sync_run_succeeded", **summary)
    return summary
