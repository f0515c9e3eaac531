"""Fail-fast environment validation for the dashboard service."""

from __future__ import annotations

import os
from functools import lru_cache
from urllib.parse import urlparse


ALLOWED_ENVIRONMENTS = {"development", "test", "staging", "production"}

CHPP_CREDENTIAL_VARS = (
    "CHPP_CONSUMER_KEY",
    "CHPP_CONSUMER_SECRET",
    "CHPP_ACCESS_TOKEN",
    "CHPP_ACCESS_TOKEN_SECRET",
)


def _require_env(name: str) -> str:
    value = os.getenv(name)
    if value is None or not value.strip():
        raise RuntimeError(f"{name} is required and must be set before startup.")
    return value.strip()


def _validate_environment_value(environment: str) -> None:
    if environment not in ALLOWED_ENVIRONMENTS:
        allowed = ", ".join(sorted(ALLOWED_ENVIRONMENTS))
        raise RuntimeError(f"ENVIRONMENT must be one of: {allowed}.")


def _validate_team_id(value: str) -> None:
    if not value.isdigit() or int(value) <= 0:
        raise RuntimeError("CHPP_TEAM_ID must be a positive integer.")


def _validate_database_url(value: str) -> None:
    parsed = urlparse(value)
    if parsed.scheme.startswith("sqlite"):
        raise RuntimeError("DATABASE_URL must not use SQLite in production.")
    if parsed.hostname in {"localhost", "127.0.0.1"}:
        raise RuntimeError("DATABASE_URL must not point to localhost in production.")


@lru_cache(maxsize=1)
def validate_env() -> None:
    """Validate environment variables before the service starts.

    Development and test environments only check ``ENVIRONMENT`` itself;
    production additionally requires the CHPP credentials, the team id and
    a non-local database.
    """
    environment = os.getenv("ENVIRONMENT", "development").strip()
    _validate_environment_value(environment)

    if environment != "production":
        return

    for name in CHPP_CREDENTIAL_VARS:
        _require_env(name)
    _validate_team_id(_require_env("CHPP_TEAM_ID"))
    _validate_database_url(_require_env("DATABASE_URL"))
    _require_env("API_KEY")
