"""Movement endpoints - arrow buttons and absolute position fixes."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from geocoin.api.dependencies import get_session
from geocoin.api.routes.state import serialize_player
from geocoin.api.schemas import CellSchema, GeoPointSchema, MoveResponse
from geocoin.api.session import Direction, GameSession
from geocoin.core.models import Cache, GeoPoint

router = APIRouter()


def _moved(session: GameSession, fresh: list[Cache]) -> MoveResponse:
    return MoveResponse(
        player=session.read(serialize_player),
        discovered=[CellSchema(i=c.cell.i, j=c.cell.j) for c in fresh],
    )


@router.post("/move/{direction}", response_model=MoveResponse)
def move(
    direction: Direction,
    session: GameSession = Depends(get_session),
) -> MoveResponse:
    return _moved(session, session.move(direction))


@router.post("/position", response_model=MoveResponse)
def set_position(
    fix: GeoPointSchema,
    session: GameSession = Depends(get_session),
) -> MoveResponse:
    """Accept a geolocation fix from the client's location sensor."""
    return _moved(session, session.set_position(GeoPoint(fix.lat, fix.lng)))
