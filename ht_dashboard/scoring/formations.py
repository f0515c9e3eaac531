"""Formation catalogue and greedy per-position lineup selection.

Selection is deliberately greedy: a player is only ever picked for their
own best position, even when another slot of the formation would stay
empty. It is not a global optimal assignment.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from typing import Hashable, Iterable, Mapping, Protocol

from .positions import Position

GK, CD, WB, IM, WNG, FW = (
    Position.GK,
    Position.CD,
    Position.WB,
    Position.IM,
    Position.WNG,
    Position.FW,
)


@dataclass(frozen=True)
class Formation:
    id: str
    name: str
    positions: tuple[Position, ...]


# Every formation plays wing backs and wingers
FORMATIONS: tuple[Formation, ...] = (
    Formation("4-4-2", "4-4-2", (GK, CD, CD, WB, WB, IM, IM, WNG, WNG, FW, FW)),
    Formation("3-5-2", "3-5-2", (GK, CD, CD, CD, WB, WB, IM, IM, IM, WNG, WNG, FW, FW)),
    Formation("4-3-3", "4-3-3", (GK, CD, CD, WB, WB, IM, IM, IM, WNG, WNG, FW, FW, FW)),
    Formation("5-3-2", "5-3-2", (GK, CD, CD, CD, WB, WB, IM, IM, IM, WNG, WNG, FW, FW)),
    Formation("4-5-1", "4-5-1", (GK, CD, CD, WB, WB, IM, IM, IM, WNG, WNG, FW)),
    Formation("3-4-3", "3-4-3", (GK, CD, CD, CD, WB, WB, IM, IM, WNG, WNG, FW, FW, FW)),
)

_FORMATIONS_BY_ID = {formation.id: formation for formation in FORMATIONS}


class FormationCandidate(Protocol):
    @property
    def player_id(self) -> Hashable: ...

    @property
    def best_position(self) -> Position | None: ...

    @property
    def position_scores(self) -> Mapping[Position, float]: ...

    @property
    def has_played_this_period(self) -> bool: ...


def get_formation(formation_id: str) -> Formation | None:
    return _FORMATIONS_BY_ID.get(formation_id)


def count_required_slots(formation: Formation) -> dict[Position, int]:
    """Slots needed per position, in first-appearance order."""
    return dict(Counter(formation.positions))


def select_players_for_formation(
    candidates: Iterable[FormationCandidate], formation: Formation
) -> set[Hashable]:
    """Ids of the top-N unplayed candidates per position of the formation.

    A candidate is eligible for position P only when P is its best position,
    it has not played this period and it has a score for P. Equal scores
    keep the candidates' input order.
    """
    candidates = list(candidates)
    selected: set[Hashable] = set()
    for position, needed in count_required_slots(formation).items():
        eligible = [
            candidate
            for candidate in candidates
            if not candidate.has_played_this_period
            and candidate.best_position == position
            and candidate.position_scores.get(position) is not None
        ]
        eligible.sort(key=lambda candidate: candidate.position_scores[position], reverse=True)
        selected.update(candidate.player_id for candidate in eligible[:needed])
    return selected


def player_matches_formation(best_position: Position | None, formation: Formation) -> bool:
    """Whether a player's best position appears anywhere in the formation."""
    if best_position is None:
        return False
    return best_position in formation.positions
