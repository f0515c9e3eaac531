"""CHPP XML API client (players, avatars, matches).

Requests are signed with OAuth 1.0a (HMAC-SHA1) against the single
``chppxml.ashx`` endpoint; the ``file`` query parameter selects the
resource. Any transport, auth or parse failure raises a ``ChppError``.
A response that parses but lacks the expected list container is logged
and treated as an empty result.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

import httpx
from authlib.integrations.httpx_client import OAuth1Auth

from ..config import Settings, settings as default_settings
from ..logging import logger
from ..utils.datetime_utils import now_utc, parse_chpp_datetime
from ..utils.parsing import parse_bool, parse_int
from .constants import (
    AVATARS_FILE,
    DEFAULT_MATCH_STATUS,
    DEFAULT_MATCH_TYPE,
    DEFAULT_MATCH_TYPE_CODE,
    MATCH_STATUS_VALUES,
    MATCH_TYPE_CODES,
    MATCHES_FILE,
    PLAYERS_FILE,
)
from .exceptions import (
    ChppApiError,
    ChppAuthError,
    ChppParseError,
    ChppTransportError,
)
from .models import AvatarLayer, ChppAvatar, ChppMatch, ChppPlayer, TeamRef
from .xml import as_dict, ensure_list, parse_chpp_xml


def normalize_player_name(raw: dict[str, Any]) -> str:
    """Join FirstName, NickName and LastName, skipping empty parts."""
    parts = []
    for key in ("FirstName", "NickName", "LastName"):
        value = raw.get(key)
        if value is None:
            continue
        text = str(value).strip()
        if text:
            parts.append(text)
    return " ".join(parts)


def parse_match_status(value: Any) -> Any:
    return MATCH_STATUS_VALUES.get(str(value or "").upper(), DEFAULT_MATCH_STATUS)


def parse_match_type(value: Any) -> Any:
    code = parse_int(value)
    if code is None:
        code = DEFAULT_MATCH_TYPE_CODE
    return MATCH_TYPE_CODES.get(code, DEFAULT_MATCH_TYPE)


def _optional_int(value: Any) -> int | None:
    # CHPP sends 0 for "no cup level"; falsy values mean absent
    return parse_int(value) if value else None


class ChppClient:
    """Synchronous CHPP client built on httpx."""

    def __init__(
        self,
        settings: Settings | None = None,
        client: httpx.Client | None = None,
    ) -> None:
        self._settings = settings or default_settings
        self._config = self._settings.chpp_config
        self.team_id = self._settings.chpp_team_id
        if client is None:
            auth = self._build_auth()
            if auth is None:
                raise ChppAuthError("CHPP OAuth credentials are not configured")
            client = httpx.Client(
                timeout=self._config.request_timeout_seconds,
                headers={"User-Agent": self._config.user_agent},
                auth=auth,
            )
        self.client = client

    def _build_auth(self) -> OAuth1Auth | None:
        s = self._settings
        credentials = (
            s.chpp_consumer_key,
            s.chpp_consumer_secret,
            s.chpp_access_token,
            s.chpp_access_token_secret,
        )
        if not all(credentials):
            return None
        return OAuth1Auth(
            client_id=s.chpp_consumer_key,
            client_secret=s.chpp_consumer_secret,
            token=s.chpp_access_token,
            token_secret=s.chpp_access_token_secret,
        )

    def close(self) -> None:
        self.client.close()

    def __enter__(self) -> ChppClient:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def _request(self, file: str, params: dict[str, Any]) -> dict[str, Any]:
        query = {"file": file, **{k: str(v) for k, v in params.items() if v is not None}}
        logger.info("chpp_request", file=file, params=query)

        try:
            response = self.client.get(self._config.base_url, params=query)
        except httpx.TimeoutException as exc:
            logger.error("chpp_request_timeout", file=file, error=str(exc))
            raise ChppTransportError(f"CHPP request timed out ({file})") from exc
        except httpx.HTTPError as exc:
            logger.error("chpp_request_failed", file=file, error=str(exc))
            raise ChppTransportError(f"CHPP request failed ({file}): {exc}") from exc

        if response.status_code in (401, 403):
            raise ChppAuthError(
                f"CHPP rejected credentials ({file}): HTTP {response.status_code}"
            )
        if response.status_code >= 400:
            raise ChppTransportError(
                f"CHPP returned HTTP {response.status_code} ({file})",
                status_code=response.status_code,
            )

        logger.debug("chpp_response", file=file, snippet=response.text[:200])
        data = parse_chpp_xml(response.text)
        if "ErrorCode" in data or "Error" in data:
            code = parse_int(data.get("ErrorCode"))
            message = str(data.get("Error") or "Unknown CHPP error")
            logger.error("chpp_error_document", file=file, error_code=code, error=message)
            raise ChppApiError(f"CHPP error {code}: {message}", error_code=code)
        return data

    def fetch_players(self) -> list[ChppPlayer]:
        """Fetch the senior roster with match info included."""
        data = self._request(
            PLAYERS_FILE,
            {
                "version": self._config.players_version,
                "teamID": self.team_id,
                "includeMatchInfo": "true",
            },
        )
        team = as_dict(data.get("Team"))
        player_list = team["PlayerList"] if "PlayerList" in team else data.get("PlayerList")
        team_id = parse_int(team.get("TeamID")) or self.team_id or 0

        if not player_list:
            logger.warning(
                "chpp_player_list_missing",
                has_team=bool(team),
                keys=list(data.keys()),
            )
        players_raw = ensure_list(as_dict(player_list).get("Player"))
        if not players_raw:
            logger.warning("chpp_no_players", team_id=team_id)
            return []

        players: list[ChppPlayer] = []
        for raw in players_raw:
            if not isinstance(raw, dict):
                raise ChppParseError(f"Unexpected Player element: {raw!r}")
            external_id = parse_int(raw.get("PlayerID"))
            if external_id is None:
                raise ChppParseError("Player element without a PlayerID")
            players.append(
                ChppPlayer(
                    external_id=external_id,
                    team_id=parse_int(raw.get("TeamID")) or team_id,
                    name=normalize_player_name(raw),
                    raw=raw,
                )
            )
        logger.info("chpp_players_fetched", team_id=team_id, count=len(players))
        return players

    def fetch_avatars(self) -> list[ChppAvatar]:
        """Fetch avatar layer compositions for the roster."""
        data = self._request(
            AVATARS_FILE,
            {
                "version": self._config.avatars_version,
                "actionType": "players",
                "teamId": self.team_id,
            },
        )
        team = as_dict(data.get("Team"))
        container = team.get("Players") or team.get("PlayerList") or data.get("Players")
        if not container:
            logger.warning("chpp_avatar_list_missing", keys=list(data.keys()))
            return []

        avatars: list[ChppAvatar] = []
        for raw in ensure_list(as_dict(container).get("Player")):
            raw = as_dict(raw)
            external_id = parse_int(raw.get("PlayerID"))
            if external_id is None:
                continue
            avatar = as_dict(raw.get("Avatar"))
            layers = [
                AvatarLayer(
                    image_url=str(layer.get("Image") or ""),
                    x=parse_int(layer.get("x")) or 0,
                    y=parse_int(layer.get("y")) or 0,
                )
                for layer in (as_dict(item) for item in ensure_list(avatar.get("Layer")))
            ]
            background = avatar.get("BackgroundImage")
            avatars.append(
                ChppAvatar(
                    external_id=external_id,
                    background_image_url=str(background) if background else None,
                    layers=layers,
                )
            )
        return avatars

    def fetch_matches(
        self, team_id: int | None = None, last_match_date: datetime | None = None
    ) -> list[ChppMatch]:
        """Fetch the senior match list up to ``last_match_date``."""
        requested_team = team_id or self.team_id
        params: dict[str, Any] = {
            "version": self._config.matches_version,
            "isYouth": "false",
            "teamID": requested_team,
        }
        if last_match_date:
            params["LastMatchDate"] = last_match_date.strftime("%Y-%m-%d %H:%M:%S")

        data = self._request(MATCHES_FILE, params)
        team = as_dict(data.get("Team"))
        match_list = team.get("MatchList") or data.get("MatchList")
        effective_team_id = parse_int(team.get("TeamID")) or requested_team or 0

        if not match_list:
            logger.warning(
                "chpp_match_list_missing",
                has_team=bool(team),
                keys=list(data.keys()),
            )
        matches_raw = ensure_list(as_dict(match_list).get("Match"))
        if not matches_raw:
            logger.warning("chpp_no_matches", team_id=effective_team_id)
            return []

        return [self._parse_match(as_dict(raw), effective_team_id) for raw in matches_raw]

    def _parse_match(self, raw: dict[str, Any], team_id: int) -> ChppMatch:
        match_id = parse_int(raw.get("MatchID"))
        if match_id is None:
            raise ChppParseError("Match element without a MatchID")
        home = as_dict(raw.get("HomeTeam"))
        away = as_dict(raw.get("AwayTeam"))
        source_system = raw.get("SourceSystem")
        return ChppMatch(
            match_id=match_id,
            team_id=team_id,
            match_date=parse_chpp_datetime(raw.get("MatchDate")) or now_utc(),
            home_team=TeamRef(
                id=parse_int(home.get("HomeTeamID")) or 0,
                name=str(home.get("HomeTeamName") or ""),
                short_name=home.get("HomeTeamShortName") or None,
            ),
            away_team=TeamRef(
                id=parse_int(away.get("AwayTeamID")) or 0,
                name=str(away.get("AwayTeamName") or ""),
                short_name=away.get("AwayTeamShortName") or None,
            ),
            home_goals=parse_int(raw.get("HomeGoals")) or 0,
            away_goals=parse_int(raw.get("AwayGoals")) or 0,
            status=parse_match_status(raw.get("Status")),
            match_type=parse_match_type(raw.get("MatchType")),
            match_context_id=parse_int(raw.get("MatchContextId")) or 0,
            cup_level=_optional_int(raw.get("CupLevel")),
            cup_level_index=_optional_int(raw.get("CupLevelIndex")),
            source_system=str(source_system) if source_system else None,
            orders_given=parse_bool(raw.get("OrdersGiven")),
        )
