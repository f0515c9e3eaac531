"""Formation catalogue and lineup suggestion endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from ..dependencies import get_db, get_position_overrides
from ..scoring.formations import FORMATIONS, Formation, count_required_slots
from ..scoring.positions import Position
from ..services.players import select_formation_players
from .schemas import FormationResponse, FormationSelectionResponse

router = APIRouter()


def serialize_formation(formation: Formation) -> FormationResponse:
    return FormationResponse(
        id=formation.id,
        name=formation.name,
        positions=[position.value for position in formation.positions],
        required_slots={
            position.value: count
            for position, count in count_required_slots(formation).items()
        },
    )


@router.get("", response_model=list[FormationResponse])
def get_formations() -> list[FormationResponse]:
    return [serialize_formation(formation) for formation in FORMATIONS]


@router.get("/{formation_id}/selection", response_model=FormationSelectionResponse)
def get_formation_selection(
    formation_id: str,
    session: Session = Depends(get_db),
    overrides: dict[int, Position] = Depends(get_position_overrides),
) -> FormationSelectionResponse:
    """Active players suggested for the formation, by external player id.

    ``override=<playerId>:<position>`` forces a player's best position.
    """
    player_ids = select_formation_players(session, formation_id, overrides)
    if player_ids is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Formation not found")
    return FormationSelectionResponse(formation_id=formation_id, player_ids=player_ids)
