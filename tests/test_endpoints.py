"""Tests for the HTTP API."""

from __future__ import annotations

from datetime import datetime, timezone
from unittest.mock import MagicMock, patch

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import inspect

from conftest import FakeFeed, make_match, make_player
from ht_dashboard.chpp import ChppTransportError
from ht_dashboard.db import create_session_factory, get_session
from ht_dashboard.dependencies import get_chpp_feed
from ht_dashboard.main import create_app
from ht_dashboard.services.matches import upsert_matches


@pytest.fixture
def feed() -> FakeFeed:
    return FakeFeed(
        players=[
            make_player(1001, "Keeper", KeeperSkill=14, PlayerForm=6, StaminaSkill=6),
            make_player(1002, "Striker", ScorerSkill=12, PassingSkill=6, PlayerForm=7),
        ]
    )


@pytest.fixture
def client(session_factory, feed):
    app = create_app(session_factory)
    app.dependency_overrides[get_chpp_feed] = lambda: feed
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


class TestHealth:
    def test_healthz(self, client):
        assert client.get("/healthz").json() == {"status": "ok"}


class TestSyncEndpoints:
    """Tests for /api/sync."""

    def test_trigger_sync_returns_summary(self, client):
        response = client.post("/api/sync")

        assert response.status_code == 200
        summary = response.json()["summary"]
        assert summary["totalPlayers"] == 2
        assert summary["playersCreated"] == 2
        assert summary["totalChanges"] == 0
        assert isinstance(summary["syncRunId"], int)

    def test_sync_failure_is_bad_gateway(self, client, feed):
        feed.fetch_players = MagicMock(side_effect=ChppTransportError("CHPP returned HTTP 503"))

        response = client.post("/api/sync")

        assert response.status_code == 502
        assert "503" in response.json()["detail"]
        runs = client.get("/api/sync/runs").json()
        assert runs[0]["status"] == "FAILED"
        assert runs[0]["message"] == "CHPP returned HTTP 503"

    def test_runs_are_listed(self, client):
        client.post("/api/sync")
        runs = client.get("/api/sync/runs").json()
        assert len(runs) == 1
        assert runs[0]["status"] == "SUCCESS"
        assert runs[0]["summaryData"]["playersCreated"] == 2

    def test_api_key_required_when_configured(self, client):
        with patch("ht_dashboard.dependencies.auth.settings", MagicMock(api_key="s3cret")):
            assert client.post("/api/sync").status_code == 401
            assert client.post("/api/sync", headers={"X-API-Key": "wrong"}).status_code == 401
            assert client.post("/api/sync", headers={"X-API-Key": "s3cret"}).status_code == 200


class TestPlayerEndpoints:
    """Tests for /api/players."""

    def test_list_players(self, client, feed):
        client.post("/api/sync")
        feed.players[0].raw["KeeperSkill"] = 15
        client.post("/api/sync")

        players = client.get("/api/players").json()["players"]

        assert [p["playerId"] for p in players] == [1001, 1002]
        keeper = players[0]
        assert keeper["active"] is True
        assert keeper["latestSnapshot"]["data"]["KeeperSkill"] == 15
        assert keeper["recentChanges"][0]["fieldName"] == "KeeperSkill"
        assert keeper["recentChanges"][0]["oldValue"] == "14"
        assert keeper["weeklyDiff"]["KeeperSkill"]["current"] == 15
        assert keeper["ranking"]["bestPosition"] == "GK"
        assert keeper["ranking"]["bestPositionDisplay"] == {"label": "GK", "color": "#1e88e5"}
        assert set(keeper["ranking"]["positionScores"]) == {"GK", "CD", "WB", "IM", "WNG", "FW"}
        assert players[1]["ranking"]["bestPosition"] == "FW"

    def test_player_detail(self, client, feed):
        client.post("/api/sync")
        feed.players[1].raw["ScorerSkill"] = 13
        client.post("/api/sync")

        player = client.get("/api/players/1002").json()["player"]

        assert player["name"] == "Striker"
        assert [c["fieldName"] for c in player["changes"]] == ["ScorerSkill"]

    def test_list_players_with_override(self, client):
        client.post("/api/sync")

        players = client.get("/api/players", params={"override": "1002:WNG"}).json()["players"]

        striker = players[1]["ranking"]
        assert striker["bestPosition"] == "WNG"
        assert striker["computedBestPosition"] == "FW"
        assert striker["bestPositionIsOverridden"] is True
        assert striker["bestPositionScore"] == striker["positionScores"]["WNG"]
        assert players[0]["ranking"]["bestPositionIsOverridden"] is False

    def test_player_detail_with_override(self, client):
        client.post("/api/sync")

        ranking = client.get("/api/players/1001", params={"override": "1001:cd"}).json()[
            "player"
        ]["ranking"]

        assert ranking["bestPosition"] == "CD"
        assert ranking["computedBestPosition"] == "GK"

    def test_unknown_player(self, client):
        assert client.get("/api/players/9999").status_code == 404

    def test_invalid_player_id(self, client):
        assert client.get("/api/players/abc").status_code == 422


class TestMatchEndpoints:
    """Tests for /api/matches."""

    @pytest.fixture(autouse=True)
    def _matches(self, session_factory):
        with get_session(session_factory) as session:
            upsert_matches(
                session,
                [
                    make_match(1, datetime(2024, 3, 9, 15, tzinfo=timezone.utc)),
                    make_match(2, datetime(2024, 3, 16, 15, tzinfo=timezone.utc), home_goals=2),
                ],
            )

    def test_list_matches(self, client):
        matches = client.get("/api/matches").json()["matches"]
        assert [m["matchId"] for m in matches] == [2, 1]
        assert matches[0]["homeGoals"] == 2
        assert matches[0]["homeTeamShortName"] == "HFC"

    def test_limit(self, client):
        assert len(client.get("/api/matches?limit=1").json()["matches"]) == 1
        assert client.get("/api/matches?limit=0").status_code == 422

    def test_get_match(self, client):
        assert client.get("/api/matches/1").json()["match"]["matchType"] == "LEAGUE"
        assert client.get("/api/matches/3").status_code == 404

    def test_this_week(self, client):
        with patch(
            "ht_dashboard.services.matches.last_friday_utc",
            return_value=datetime(2024, 3, 15, tzinfo=timezone.utc),
        ):
            assert client.get("/api/matches/this-week").json() == {"matchIds": [2]}


class TestFormationEndpoints:
    """Tests for /api/formations."""

    def test_catalogue(self, client):
        formations = client.get("/api/formations").json()
        assert formations[0]["id"] == "4-4-2"
        assert formations[0]["requiredSlots"]["CD"] == 2
        assert len(formations[1]["positions"]) == 13

    def test_selection(self, client):
        client.post("/api/sync")
        selection = client.get("/api/formations/4-4-2/selection").json()
        assert selection == {"formationId": "4-4-2", "playerIds": [1001, 1002]}

    def test_unknown_formation(self, client):
        assert client.get("/api/formations/1-1-8/selection").status_code == 404

    def test_override_moves_player_into_another_slot(self, client, feed):
        feed.players.append(make_player(1003, "Backup", ScorerSkill=10, PlayerForm=5))
        client.post("/api/sync")

        plain = client.get("/api/formations/4-5-1/selection").json()
        overridden = client.get(
            "/api/formations/4-5-1/selection", params={"override": "1003:IM"}
        ).json()

        assert plain["playerIds"] == [1001, 1002]
        assert overridden["playerIds"] == [1001, 1002, 1003]

    def test_invalid_override_is_bad_request(self, client):
        response = client.get(
            "/api/formations/4-4-2/selection", params={"override": "1003-IM"}
        )
        assert response.status_code == 400


class TestDbBrowserEndpoints:
    """Tests for /api/db-browser."""

    def test_tables(self, client):
        assert client.get("/api/db-browser/tables").json() == {
            "tables": ["Player", "PlayerSnapshot", "PlayerChange", "SyncRun", "Match"]
        }

    def test_table_rows(self, client):
        client.post("/api/sync")
        table = client.get("/api/db-browser/tables/Player?limit=1").json()["table"]
        assert table["tableName"] == "Player"
        assert "externalId" in table["columns"]
        assert table["rowCount"] == 1
        assert table["rows"][0]["externalId"] == 1002

    def test_snapshot_data_is_pretty_json(self, client):
        client.post("/api/sync")
        rows = client.get("/api/db-browser/tables/PlayerSnapshot").json()["table"]["rows"]
        assert rows[0]["data"].startswith("{\n")

    def test_unknown_table(self, client):
        assert client.get("/api/db-browser/tables/sqlite_master").status_code == 404


class TestSchemaBootstrap:
    """The app creates its tables on startup."""

    def test_fresh_database_serves_requests(self, tmp_path):
        factory = create_session_factory(f"sqlite:///{tmp_path / 'fresh.db'}")
        app = create_app(factory)

        with TestClient(app) as test_client:
            response = test_client.get("/api/players")

        assert response.status_code == 200
        assert response.json() == {"players": []}
        assert "players" in inspect(factory.kw["bind"]).get_table_names()
