"""Cache endpoints - list, inspect, collect and deposit."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from geocoin.api.dependencies import get_session
from geocoin.api.routes.state import serialize_cache
from geocoin.api.schemas import CacheSchema, TransferResponse
from geocoin.api.session import GameSession
from geocoin.core.models import GridCell, TransferResult, TransferStatus
from geocoin.core.world import World

router = APIRouter()

_MESSAGES = {
    TransferStatus.OK: "Transferred 1 coin.",
    TransferStatus.EMPTY: "Cache is empty; zero coins transferred.",
    TransferStatus.INSUFFICIENT_FUNDS: "No coins in pocket; zero coins transferred.",
}


@router.get("/caches", response_model=list[CacheSchema])
def list_caches(
    session: GameSession = Depends(get_session),
) -> list[CacheSchema]:
    """Every cache discovered so far, near or not."""
    return session.read(lambda w: [serialize_cache(w, c) for c in w.registry])


@router.get("/caches/{i}/{j}", response_model=CacheSchema)
def get_cache(
    i: int,
    j: int,
    session: GameSession = Depends(get_session),
) -> CacheSchema:
    cell = GridCell(i, j)

    def build(world: World) -> CacheSchema | None:
        if cell not in world.registry:
            return None
        return serialize_cache(world, world.registry.get(cell))

    result = session.read(build)
    if result is None:
        raise HTTPException(status_code=404, detail=f"No cache at {cell.key}.")
    return result


def _respond(session: GameSession, result: TransferResult) -> TransferResponse:
    cell = result.cell
    if result.status is TransferStatus.NOT_FOUND:
        raise HTTPException(status_code=404, detail=f"No cache at {cell.key}.")
    if result.status is TransferStatus.OUT_OF_REACH:
        raise HTTPException(status_code=409, detail=f"Cache at {cell.key} is out of reach.")
    player_coins, cache_coins = session.read(
        lambda w: (w.player.coins, len(w.registry.get(cell))),
    )
    return TransferResponse(
        status=result.status.value,
        message=_MESSAGES[result.status],
        coin=result.coin.id if result.coin else None,
        player_coins=player_coins,
        cache_coins=cache_coins,
    )


@router.post("/caches/{i}/{j}/collect", response_model=TransferResponse)
def collect(
    i: int,
    j: int,
    session: GameSession = Depends(get_session),
) -> TransferResponse:
    return _respond(session, session.collect(GridCell(i, j)))


@router.post("/caches/{i}/{j}/deposit", response_model=TransferResponse)
def deposit(
    i: int,
    j: int,
    session: GameSession = Depends(get_session),
) -> TransferResponse:
    return _respond(session, session.deposit(GridCell(i, j)))
