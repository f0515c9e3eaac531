"""Best-position override query parameter."""

from __future__ import annotations

from fastapi import HTTPException, Query, status

from ..scoring.positions import Position, parse_position


def get_position_overrides(
    override: list[str] | None = Query(
        None,
        description="Forced best position as <playerId>:<position>, e.g. 1001:FW",
    ),
) -> dict[int, Position]:
    """Parse repeated ``override`` params into ``{player_id: position}``.

    A later entry for the same player replaces an earlier one.
    """
    overrides: dict[int, Position] = {}
    for item in override or []:
        player_part, sep, position_part = item.partition(":")
        position = parse_position(position_part.strip()) if sep else None
        if position is None or not player_part.strip().isdigit():
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=f"Invalid override {item!r}; expected <playerId>:<position>",
            )
        overrides[int(player_part)] = position
    return overrides
