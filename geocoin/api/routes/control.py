"""POST /api/v1/control/{action} - save and reset."""

from __future__ import annotations

from enum import Enum

from fastapi import APIRouter, Depends

from geocoin.api.dependencies import get_session
from geocoin.api.schemas import ControlResponse
from geocoin.api.session import GameSession

router = APIRouter()


class ControlAction(str, Enum):
    save = "save"
    reset = "reset"


@router.post("/control/{action}", response_model=ControlResponse)
def control(
    action: ControlAction,
    session: GameSession = Depends(get_session),
) -> ControlResponse:
    match action:
        case ControlAction.save:
            snap = session.save()
            return ControlResponse(
                status="ok",
                message=f"Saved {len(snap.caches)} caches and {snap.player_coins} coins in pocket.",
            )

        case ControlAction.reset:
            session.reset()
            return ControlResponse(status="ok", message="World reset.")
