"""Pydantic response models for the REST API."""

from __future__ import annotations

from pydantic import BaseModel, Field


# --- Geometry ---

class CellSchema(BaseModel):
    i: int
    j: int


class GeoPointSchema(BaseModel):
    lat: float = Field(ge=-90.0, le=90.0)
    lng: float = Field(ge=-180.0, le=180.0)


class BoundsSchema(BaseModel):
    south_west: GeoPointSchema
    north_east: GeoPointSchema


# --- Caches ---

class CacheSchema(BaseModel):
    i: int
    j: int
    coins: list[str] = Field(description="Coin ids, oldest first; collect takes the last one")
    coin_count: int
    bounds: BoundsSchema
    in_reach: bool


class TransferResponse(BaseModel):
    status: str
    message: str
    coin: str | None = None
    player_coins: int
    cache_coins: int


# --- Player / World State ---

class PlayerSchema(BaseModel):
    i: int
    j: int
    lat: float
    lng: float
    coins: int


class EventSchema(BaseModel):
    seq: int
    category: str
    message: str
    cell: CellSchema | None = None


class WorldStateResponse(BaseModel):
    player: PlayerSchema
    caches: list[CacheSchema] = Field(default_factory=list)
    trail: list[GeoPointSchema] = Field(default_factory=list)
    events: list[EventSchema] = Field(default_factory=list)


class MoveResponse(BaseModel):
    player: PlayerSchema
    discovered: list[CellSchema] = Field(default_factory=list)


# --- Control ---

class ControlResponse(BaseModel):
    status: str
    message: str


# --- Config ---

class GameConfigResponse(BaseModel):
    world_seed: int
    tile_degrees: float
    neighborhood_size: int
    spawn_probability: float
    max_coins_per_cache: int
    spawn_i: int
    spawn_j: int
    initial_player_coins: int
