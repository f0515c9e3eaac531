"""Tests for player ranking preparation."""

from __future__ import annotations

from datetime import datetime, timezone

from ht_dashboard.scoring.positions import Position
from ht_dashboard.scoring.preparation import (
    has_played_this_period,
    injury_days_remaining,
    prepare_player_ranking,
)

KEEPER = {"KeeperSkill": 12, "PlayerForm": 6, "StaminaSkill": 5}


class TestHasPlayedThisPeriod:
    """Tests for has_played_this_period."""

    def test_match_since_friday(self, fixed_now):
        data = {"LastMatch": {"Date": "2024-03-16 15:00:00"}}
        assert has_played_this_period(data, fixed_now) is True

    def test_match_before_friday(self, fixed_now):
        data = {"LastMatch": {"Date": "2024-03-14 20:00:00"}}
        assert has_played_this_period(data, fixed_now) is False

    def test_friday_counts_as_start_of_period(self):
        friday_noon = datetime(2024, 3, 15, 12, 0, tzinfo=timezone.utc)
        data = {"LastMatch": {"Date": "2024-03-15 09:00:00"}}
        assert has_played_this_period(data, friday_noon) is True

    def test_missing_or_malformed(self, fixed_now):
        assert has_played_this_period({}, fixed_now) is False
        assert has_played_this_period(None, fixed_now) is False
        assert has_played_this_period({"LastMatch": "x"}, fixed_now) is False
        assert has_played_this_period({"LastMatch": {"Date": "soon"}}, fixed_now) is False


class TestInjuryDaysRemaining:
    """Tests for injury_days_remaining."""

    def test_positive_level(self):
        assert injury_days_remaining({"InjuryLevel": 2}) == 2

    def test_healthy_or_bruised(self):
        assert injury_days_remaining({"InjuryLevel": -1}) is None
        assert injury_days_remaining({"InjuryLevel": 0}) is None
        assert injury_days_remaining({}) is None


class TestPreparePlayerRanking:
    """Tests for prepare_player_ranking."""

    def test_computed_best_position(self, fixed_now):
        ranking = prepare_player_ranking(10, KEEPER, now=fixed_now)
        assert ranking.player_id == 10
        assert ranking.best_position is Position.GK
        assert ranking.best_position_score == ranking.position_scores[Position.GK]
        assert ranking.best_position_is_overridden is False

    def test_override_replaces_best_position(self, fixed_now):
        ranking = prepare_player_ranking(10, KEEPER, override_position="CD", now=fixed_now)
        assert ranking.best_position is Position.CD
        assert ranking.computed_best_position is Position.GK
        assert ranking.best_position_score == ranking.position_scores[Position.CD]
        assert ranking.best_position_is_overridden is True

    def test_unknown_override_is_ignored(self, fixed_now):
        ranking = prepare_player_ranking(10, KEEPER, override_position="LIBERO", now=fixed_now)
        assert ranking.best_position is Position.GK
        assert ranking.best_position_is_overridden is False
