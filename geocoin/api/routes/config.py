"""GET /api/v1/config - expose game configuration."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from geocoin.api.dependencies import get_session
from geocoin.api.schemas import GameConfigResponse
from geocoin.api.session import GameSession

router = APIRouter()


@router.get("/config", response_model=GameConfigResponse)
def get_config(
    session: GameSession = Depends(get_session),
) -> GameConfigResponse:
    cfg = session.config
    return GameConfigResponse(
        world_seed=cfg.world_seed,
        tile_degrees=cfg.tile_degrees,
        neighborhood_size=cfg.neighborhood_size,
        spawn_probability=cfg.spawn_probability,
        max_coins_per_cache=cfg.max_coins_per_cache,
        spawn_i=cfg.spawn_i,
        spawn_j=cfg.spawn_j,
        initial_player_coins=cfg.initial_player_coins,
    )
