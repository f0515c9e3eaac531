"""Tests for Celery tasks."""

from __future__ import annotations

from unittest.mock import MagicMock, patch

from sqlalchemy import inspect

from conftest import FakeFeed, make_player
from ht_dashboard.celery_app import prepare_database
from ht_dashboard.db import create_session_factory
from ht_dashboard.jobs.tasks import run_player_sync_task


class TestRunPlayerSyncTask:
    """Tests for run_player_sync_task."""

    def test_runs_sync_with_default_factory(self, session_factory):
        feed = FakeFeed(players=[make_player(1), make_player(2)])
        client_cls = MagicMock()
        client_cls.return_value.__enter__.return_value = feed

        with patch("ht_dashboard.chpp.ChppClient", client_cls), patch(
            "ht_dashboard.db.get_default_session_factory", return_value=session_factory
        ):
            result = run_player_sync_task.run()

        assert result["totalPlayers"] == 2
        assert result["playersCreated"] == 2
        client_cls.return_value.__exit__.assert_called_once()

    def test_task_is_registered_by_name(self):
        assert run_player_sync_task.name == "run_player_sync"


class TestWorkerProcessInit:
    """Tests for the worker schema hook."""

    def test_creates_tables_in_worker(self, tmp_path):
        factory = create_session_factory(f"sqlite:///{tmp_path / 'worker.db'}")

        with patch("ht_dashboard.db.get_default_session_factory", return_value=factory):
            prepare_database()

        assert "sync_runs" in inspect(factory.kw["bind"]).get_table_names()
