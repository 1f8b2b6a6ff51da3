"""GET /api/v1/state - player, nearby caches, trail and events (polled by UI)."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from geocoin.api.dependencies import get_session
from geocoin.api.schemas import (
    BoundsSchema,
    CacheSchema,
    CellSchema,
    EventSchema,
    GeoPointSchema,
    PlayerSchema,
    WorldStateResponse,
)
from geocoin.api.session import GameSession
from geocoin.core.models import Cache, GeoPoint
from geocoin.core.world import World
from geocoin.utils.event_log import GameEvent

router = APIRouter()


def _point(p: GeoPoint) -> GeoPointSchema:
    return GeoPointSchema(lat=p.lat, lng=p.lng)


def serialize_player(world: World) -> PlayerSchema:
    pos = world.player.position
    geo = world.projection.cell_to_geo(pos)
    return PlayerSchema(i=pos.i, j=pos.j, lat=geo.lat, lng=geo.lng, coins=world.player.coins)


def serialize_cache(world: World, cache: Cache) -> CacheSchema:
    bounds = world.projection.cell_bounds(cache.cell)
    return CacheSchema(
        i=cache.cell.i,
        j=cache.cell.j,
        coins=[c.id for c in cache.coins],
        coin_count=len(cache),
        bounds=BoundsSchema(south_west=_point(bounds.south_west), north_east=_point(bounds.north_east)),
        in_reach=world.is_near(cache.cell),
    )


def serialize_event(ev: GameEvent) -> EventSchema:
    cell = CellSchema(i=ev.cell[0], j=ev.cell[1]) if ev.cell is not None else None
    return EventSchema(seq=ev.seq, category=ev.category, message=ev.message, cell=cell)


@router.get("/state", response_model=WorldStateResponse)
def get_state(
    since: int = Query(0, ge=0, description="Only return events with a higher sequence number"),
    session: GameSession = Depends(get_session),
) -> WorldStateResponse:
    def build(world: World) -> WorldStateResponse:
        return WorldStateResponse(
            player=serialize_player(world),
            caches=[serialize_cache(world, c) for c in world.nearby_caches()],
            trail=[_point(p) for p in world.trail],
        )

    response = session.read(build)
    response.events = [serialize_event(ev) for ev in session.event_log.since(since)]
    return response


@router.get("/events", response_model=list[EventSchema])
def get_events(
    count: int = Query(50, ge=1, le=500),
    session: GameSession = Depends(get_session),
) -> list[EventSchema]:
    return [serialize_event(ev) for ev in session.event_log.latest(count)]
