"""
Typed settings for the Hattrick dashboard service.

Uses Pydantic Settings to load configuration from environment variables
with validation and type safety. Settings are loaded from the root .env
file when present.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .validate_env import validate_env


class ChppConfig(BaseModel):
    base_url: str = Field(default="https://chpp.hattrick.org/chppxml.ashx")
    request_timeout_seconds: int = 10
    players_version: str = "2.7"
    matches_version: str = "2.9"
    avatars_version: str = "1.1"
    user_agent: str = "hattrick-dashboard/1.0"


class SyncConfig(BaseModel):
    include_avatars: bool = True
    # An empty or near-empty roster fetch would otherwise deactivate every player
    min_roster_size: int = Field(default=1, ge=0)
    recent_changes_limit: int = Field(default=5, ge=0)
    weekly_window_days: int = Field(default=7, ge=1)


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    For local development the root .env file is read as well. CHPP
    credentials are optional here so read-only tooling can start without
    them; the production check lives in ``validate_env``.
    """
    model_config = SettingsConfigDict(
        env_file=Path(__file__).resolve().parents[1] / ".env",
        env_file_encoding="utf-8",
        env_ignore_empty=True,
        extra="allow",
    )

    database_url: str = Field("sqlite:///./hattrick.db", alias="DATABASE_URL")

    @field_validator("database_url", mode="before")
    @classmethod
    def convert_async_to_sync(cls, v: str) -> str:
        """The service uses synchronous SQLAlchemy sessions throughout."""
        if isinstance(v, str) and "asyncpg" in v:
            return v.replace("asyncpg", "psycopg")
        return v

    environment: str = Field("development", alias="ENVIRONMENT")
    log_level: str | None = Field(None, alias="LOG_LEVEL")
    sql_echo: bool = Field(False, alias="SQL_ECHO")
    api_key: str | None = Field(None, alias="API_KEY")
    redis_url: str = Field("redis://localhost:6379/0", alias="REDIS_URL")

    chpp_consumer_key: str | None = Field(None, alias="CHPP_CONSUMER_KEY")
    chpp_consumer_secret: str | None = Field(None, alias="CHPP_CONSUMER_SECRET")
    chpp_access_token: str | None = Field(None, alias="CHPP_ACCESS_TOKEN")
    chpp_access_token_secret: str | None = Field(None, alias="CHPP_ACCESS_TOKEN_SECRET")
    chpp_team_id: int | None = Field(None, alias="CHPP_TEAM_ID")

    chpp_config: ChppConfig = Field(default_factory=ChppConfig)
    sync_config: SyncConfig = Field(default_factory=SyncConfig)

    @property
    def allowed_cors_origins(self) -> list[str]:
        """Allow local dev ports for the web UI."""
        return [
            "http://localhost:3000",
            "http://127.0.0.1:3000",
            "http://localhost:5173",
            "http://127.0.0.1:5173",
        ]


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Return cached settings instance.

    Settings are cached to avoid re-parsing environment variables
    on every access.
    """
    validate_env()
    return Settings()


settings = get_settings()
