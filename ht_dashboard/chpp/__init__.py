"""CHPP (Hattrick public API) feed access."""

from .client import ChppClient
from .exceptions import (
    ChppApiError,
    ChppAuthError,
    ChppError,
    ChppParseError,
    ChppTransportError,
)
from .models import AvatarLayer, ChppAvatar, ChppFeed, ChppMatch, ChppPlayer, TeamRef

__all__ = [
    "AvatarLayer",
    "ChppApiError",
    "ChppAuthError",
    "ChppAvatar",
    "ChppClient",
    "ChppError",
    "ChppFeed",
    "ChppMatch",
    "ChppParseError",
    "ChppPlayer",
    "ChppTransportError",
    "TeamRef",
]
