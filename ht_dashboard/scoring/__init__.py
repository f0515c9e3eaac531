"""Position scoring, best-position selection and formation assignment.

Pure functions only: no I/O and no shared state.
"""

from .formations import (
    FORMATIONS,
    Formation,
    count_required_slots,
    get_formation,
    player_matches_formation,
    select_players_for_formation,
)
from .positions import (
    POSITION_ORDER,
    Position,
    PositionScoreResult,
    compute_position_scores,
    get_position_display_info,
    select_best_position,
)

__all__ = [
    "FORMATIONS",
    "Formation",
    "POSITION_ORDER",
    "Position",
    "PositionScoreResult",
    "compute_position_scores",
    "count_required_slots",
    "get_formation",
    "get_position_display_info",
    "player_matches_formation",
    "select_best_position",
    "select_players_for_formation",
]
