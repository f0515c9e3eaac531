"""FastAPI dependencies."""

from .auth import verify_api_key
from .db import get_chpp_feed, get_db, get_session_factory
from .overrides import get_position_overrides

__all__ = [
    "get_chpp_feed",
    "get_db",
    "get_position_overrides",
    "get_session_factory",
    "verify_api_key",
]
