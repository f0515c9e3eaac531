"""CHPP protocol constants."""

from __future__ import annotations

from ..db.matches import MatchStatus, MatchType

PLAYERS_FILE = "players"
MATCHES_FILE = "matches"
AVATARS_FILE = "avatars"

# CHPP MatchType codes (matches.xml v2.9)
MATCH_TYPE_CODES: dict[int, MatchType] = {
    1: MatchType.LEAGUE,
    2: MatchType.QUALIFICATION,
    3: MatchType.CUP,
    4: MatchType.FRIENDLY,
    5: MatchType.HATTRICK_MASTERS,
    6: MatchType.WORLD_CUP,
    7: MatchType.U20_WORLD_CUP,
    8: MatchType.LADDER,
    9: MatchType.TOURNAMENT,
    10: MatchType.SINGLE,
    11: MatchType.PREPARATION,
}
DEFAULT_MATCH_TYPE = MatchType.FRIENDLY
DEFAULT_MATCH_TYPE_CODE = 4

MATCH_STATUS_VALUES: dict[str, MatchStatus] = {
    MatchStatus.FINISHED.value: MatchStatus.FINISHED,
    MatchStatus.ONGOING.value: MatchStatus.ONGOING,
}
DEFAULT_MATCH_STATUS = MatchStatus.UPCOMING

# Raw attribute bag key under which avatar data is merged
AVATAR_KEY = "Avatar"
