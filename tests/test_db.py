"""Tests for session management and schema helpers."""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest
from sqlalchemy import inspect

from ht_dashboard.db import create_db_engine, get_session


class TestGetSession:
    """Tests for get_session context manager."""

    def test_yields_session_and_commits(self):
        mock_session = MagicMock()
        factory = MagicMock(return_value=mock_session)

        with get_session(factory) as session:
            assert session is mock_session

        mock_session.commit.assert_called_once()
        mock_session.close.assert_called_once()

    def test_rolls_back_on_exception(self):
        mock_session = MagicMock()
        factory = MagicMock(return_value=mock_session)

        with pytest.raises(ValueError):
            with get_session(factory):
                raise ValueError("test error")

        mock_session.rollback.assert_called_once()
        mock_session.close.assert_called_once()
        mock_session.commit.assert_not_called()


class TestSchema:
    """Tests for the created schema."""

    def test_tables_exist(self, session_factory):
        tables = set(inspect(session_factory.kw["bind"]).get_table_names())
        assert {"players", "player_snapshots", "player_changes", "matches", "sync_runs"} <= tables

    def test_in_memory_engine_shares_one_connection(self):
        engine = create_db_engine("sqlite://")
        assert engine.pool.__class__.__name__ == "StaticPool"
