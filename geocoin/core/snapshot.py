"""Persisted snapshot of a world: player, live caches and movement trail.

Field names are the stable wire format of the save file. Mementos are
not part of it; they are regenerated from the oracle when needed.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from geocoin.core.models import Coin, GeoPoint, GridCell

if TYPE_CHECKING:
    from geocoin.config import GameConfig
    from geocoin.core.world import World

logger = logging.getLogger(__name__)


class PositionModel(BaseModel):
    i: int
    j: int


class CoinModel(BaseModel):
    id: str


class CacheContentModel(BaseModel):
    coins: list[CoinModel] = Field(default_factory=list)


class TrailPointModel(BaseModel):
    lat: float
    lng: float


class Snapshot(BaseModel):
    """Serializable game state."""

    model_config = ConfigDict(populate_by_name=True)

    player_position: PositionModel = Field(alias="playerPosition")
    player_coins: int = Field(alias="playerCoins", ge=0)
    caches: list[tuple[str, CacheContentModel]] = Field(default_factory=list)
    movement_trail: list[TrailPointModel] = Field(default_factory=list, alias="movementTrail")

    @field_validator("caches")
    @classmethod
    def _check_cache_keys(
        cls, value: list[tuple[str, CacheContentModel]],
    ) -> list[tuple[str, CacheContentModel]]:
        for key, _ in value:
            GridCell.from_key(key)
        return value

    # -- JSON --

    def to_json(self) -> str:
        return self.model_dump_json(by_alias=True)

    @classmethod
    def from_json(cls, raw: str | bytes) -> Snapshot:
        return cls.model_validate_json(raw)

    @classmethod
    def initial(cls, config: GameConfig) -> Snapshot:
        """Fresh game: player at spawn with the starting wallet, nothing discovered."""
        return cls(
            player_position=PositionModel(i=config.spawn_i, j=config.spawn_j),
            player_coins=config.initial_player_coins,
        )


def save(world: World) -> Snapshot:
    """Capture the player, every live cache and the trail."""
    return Snapshot(
        player_position=PositionModel(i=world.player.position.i, j=world.player.position.j),
        player_coins=world.player.coins,
        caches=[
            (cache.cell.key, CacheContentModel(coins=[CoinModel(id=c.id) for c in cache.coins]))
            for cache in world.registry
        ],
        movement_trail=[TrailPointModel(lat=p.lat, lng=p.lng) for p in world.trail],
    )


def load(world: World, snapshot: Snapshot) -> None:
    """Restore player and live caches verbatim.

    Loaded cells count as discovered so the next neighborhood sweep keeps
    their saved contents. Mementos recorded in this process are kept.
    """
    world.player.position = GridCell(snapshot.player_position.i, snapshot.player_position.j)
    world.player.coins = snapshot.player_coins
    world.registry.clear()
    world.discovery.clear()
    for key, content in snapshot.caches:
        cell = GridCell.from_key(key)
        world.registry.replace(cell, (Coin(id=c.id) for c in content.coins))
        world.discovery.mark(cell)
    world.trail[:] = [GeoPoint(p.lat, p.lng) for p in snapshot.movement_trail]
    logger.info(
        "Loaded snapshot: player at %s with %d coins, %d caches, %d trail points",
        world.player.position, world.player.coins, len(world.registry), len(world.trail),
    )


def load_or_default(world: World, raw: str | bytes | None) -> bool:
    """Load *raw* JSON into *world*, falling back to the initial state.

    Returns True if the saved state was used. A missing or corrupt blob is
    logged and never raises.
    """
    if raw:
        try:
            load(world, Snapshot.from_json(raw))
            return True
        except ValidationError as exc:
            logger.warning("Discarding corrupt save (%d errors): %s", exc.error_count(), exc)
    else:
        logger.info("No saved game found, starting fresh.")
    load(world, Snapshot.initial(world.config))
    return False
