"""Per-position performance scores from a raw player attribute bag.

Score for position P:

    effective(skill) = skill + Loyalty / 20
    base(P)          = sum(weight(P, skill) * effective(skill))
    score(P)         = ((0.8 * base(P)) * form_factor + 0.2 * experience_factor)
                       * stamina_factor

with ``form_factor = 0.85 + 0.025 * PlayerForm``,
``experience_factor = 0.02 * Experience`` and
``stamina_factor = 0.9 + 0.01 * StaminaSkill``. Missing or non-numeric
attributes count as 0, so every position always gets a score.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Mapping

from ..utils.parsing import to_number


class Position(str, Enum):
    GK = "GK"
    CD = "CD"
    WB = "WB"
    IM = "IM"
    WNG = "WNG"
    FW = "FW"


# Iteration order doubles as the tie-break for best position
POSITION_ORDER: tuple[Position, ...] = (
    Position.GK,
    Position.CD,
    Position.WB,
    Position.IM,
    Position.WNG,
    Position.FW,
)

KEEPER = "KeeperSkill"
DEFENDER = "DefenderSkill"
PASSING = "PassingSkill"
PLAYMAKER = "PlaymakerSkill"
WINGER = "WingerSkill"
SCORER = "ScorerSkill"
SET_PIECES = "SetPiecesSkill"

SKILL_KEYS = (KEEPER, DEFENDER, PASSING, PLAYMAKER, WINGER, SCORER, SET_PIECES)

LOYALTY_KEY = "Loyalty"
FORM_KEY = "PlayerForm"
EXPERIENCE_KEY = "Experience"
STAMINA_KEY = "StaminaSkill"

LOYALTY_DIVISOR = 20

POSITION_WEIGHTS: dict[Position, dict[str, float]] = {
    Position.GK: {KEEPER: 0.85, DEFENDER: 0.05, PASSING: 0.03, SET_PIECES: 0.05, PLAYMAKER: 0.02},
    Position.CD: {DEFENDER: 0.70, PASSING: 0.12, PLAYMAKER: 0.08, SET_PIECES: 0.05, WINGER: 0.05},
    Position.WB: {
        DEFENDER: 0.55,
        WINGER: 0.20,
        PASSING: 0.12,
        PLAYMAKER: 0.07,
        SCORER: 0.03,
        SET_PIECES: 0.03,
    },
    Position.IM: {
        PLAYMAKER: 0.60,
        PASSING: 0.15,
        DEFENDER: 0.10,
        WINGER: 0.05,
        SCORER: 0.05,
        SET_PIECES: 0.05,
    },
    Position.WNG: {
        WINGER: 0.55,
        PASSING: 0.15,
        PLAYMAKER: 0.10,
        SCORER: 0.10,
        DEFENDER: 0.07,
        SET_PIECES: 0.03,
    },
    Position.FW: {
        SCORER: 0.60,
        PASSING: 0.20,
        WINGER: 0.07,
        PLAYMAKER: 0.05,
        SET_PIECES: 0.05,
        DEFENDER: 0.03,
    },
}

POSITION_LABELS: dict[Position, str] = {
    Position.GK: "Goalkeeper",
    Position.CD: "Central Defender",
    Position.WB: "Wing Back",
    Position.IM: "Inner Midfielder",
    Position.WNG: "Winger",
    Position.FW: "Forward",
}

POSITION_ABBREVIATIONS: dict[Position, str] = {
    Position.GK: "GK",
    Position.CD: "CD",
    Position.WB: "WB",
    Position.IM: "IM",
    Position.WNG: "WG",
    Position.FW: "FW",
}

POSITION_COLORS: dict[Position, str] = {
    Position.GK: "#1e88e5",
    Position.CD: "#6d4c41",
    Position.WB: "#00897b",
    Position.IM: "#8e24aa",
    Position.WNG: "#f4511e",
    Position.FW: "#c62828",
}

DEFAULT_POSITION_COLOR = "#424242"


@dataclass
class PositionScoreResult:
    best_position: Position | None
    best_score: float | None
    scores: dict[Position, float] = field(default_factory=dict)


def effective_skills(attributes: Mapping[str, Any]) -> dict[str, float]:
    """Each skill boosted by ``Loyalty / 20``."""
    loyalty_bonus = to_number(attributes.get(LOYALTY_KEY)) / LOYALTY_DIVISOR
    return {key: to_number(attributes.get(key)) + loyalty_bonus for key in SKILL_KEYS}


def base_scores(attributes: Mapping[str, Any]) -> dict[Position, float]:
    skills = effective_skills(attributes)
    return {
        position: sum(weight * skills[key] for key, weight in POSITION_WEIGHTS[position].items())
        for position in POSITION_ORDER
    }


def compute_scores(attributes: Mapping[str, Any] | None) -> dict[Position, float]:
    """Score every position; always returns all six."""
    attributes = attributes or {}
    form_factor = 0.85 + 0.025 * to_number(attributes.get(FORM_KEY))
    experience_factor = 0.02 * to_number(attributes.get(EXPERIENCE_KEY))
    stamina_factor = 0.9 + 0.01 * to_number(attributes.get(STAMINA_KEY))

    return {
        position: ((0.8 * base) * form_factor + 0.2 * experience_factor) * stamina_factor
        for position, base in base_scores(attributes).items()
    }


def select_best_position(
    scores: Mapping[Position, float],
) -> tuple[Position | None, float | None]:
    """Highest score wins; on exact ties the earlier position in POSITION_ORDER wins."""
    best_position: Position | None = None
    best_score: float | None = None
    for position in POSITION_ORDER:
        if position not in scores:
            continue
        score = scores[position]
        if best_score is None or score > best_score:
            best_position, best_score = position, score
    return best_position, best_score


def compute_position_scores(attributes: Mapping[str, Any] | None) -> PositionScoreResult:
    scores = compute_scores(attributes)
    best_position, best_score = select_best_position(scores)
    return PositionScoreResult(best_position=best_position, best_score=best_score, scores=scores)


def parse_position(value: Any) -> Position | None:
    if isinstance(value, Position):
        return value
    try:
        return Position(str(value).upper())
    except ValueError:
        return None


def get_position_label(position: Position | str) -> str:
    parsed = parse_position(position)
    return POSITION_LABELS[parsed] if parsed else str(position)


def get_position_abbreviation(position: Position | str) -> str:
    parsed = parse_position(position)
    return POSITION_ABBREVIATIONS[parsed] if parsed else str(position).upper()


def get_position_color(position: Position | str) -> str:
    parsed = parse_position(position)
    return POSITION_COLORS[parsed] if parsed else DEFAULT_POSITION_COLOR


def get_position_display_info(position: Position | str | None) -> dict[str, str] | None:
    """Short badge label and colour for a position, or None when unset."""
    if not position:
        return None
    return {
        "label": get_position_abbreviation(position),
        "color": get_position_color(position),
    }
