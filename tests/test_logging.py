"""Tests for the structlog configuration."""

from __future__ import annotations

import json
import logging

import structlog

from ht_dashboard.logging import SERVICE_NAME, logger, resolve_log_level


class TestResolveLogLevel:
    """Tests for resolve_log_level."""

    def test_explicit_level_wins(self):
        assert resolve_log_level("warning", "production") == logging.WARNING

    def test_unknown_level_falls_back_to_info(self):
        assert resolve_log_level("chatty", "development") == logging.INFO

    def test_production_default_is_info(self):
        assert resolve_log_level(None, "production") == logging.INFO

    def test_other_environments_default_to_debug(self):
        assert resolve_log_level(None, "development") == logging.DEBUG
        assert resolve_log_level("", "test") == logging.DEBUG


class TestLoggerOutput:
    """The configured logger renders one JSON object per event."""

    def test_module_logger_is_bound(self):
        assert logger is not None

    def test_event_rendered_as_json(self, capsys):
        structlog.get_logger(SERVICE_NAME).bind(service=SERVICE_NAME).warning(
            "sync_deactivation_skipped", run_id=7
        )
        line = capsys.readouterr().out.strip().splitlines()[-1]
        payload = json.loads(line)
        assert payload["message"] == "sync_deactivation_skipped"
        assert payload["level"] == "warning"
        assert payload["service"] == SERVICE_NAME
        assert payload["run_id"] == 7
        assert "timestamp" in payload
