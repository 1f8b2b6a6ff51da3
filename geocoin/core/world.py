"""World aggregate: the single source of truth for one game.

Owned by the caller and passed explicitly; nothing here is a module-level
singleton, so independent games can coexist in one process.
"""

from __future__ import annotations

import logging

from geocoin.config import GameConfig
from geocoin.core.grid import GridProjection
from geocoin.core.mementos import DiscoveryTracker, MementoStore
from geocoin.core.models import Cache, Coin, GeoPoint, GridCell, PlayerState, TransferResult
from geocoin.core.registry import CacheRegistry
from geocoin.systems.generator import CacheGenerator
from geocoin.systems.rng import LuckOracle, Oracle

logger = logging.getLogger(__name__)


class World:
    """Player, caches, mementos, discoveries and the movement trail."""

    __slots__ = (
        "config", "oracle", "projection", "generator", "mementos",
        "discovery", "registry", "player", "trail",
    )

    def __init__(self, config: GameConfig | None = None, oracle: Oracle | None = None) -> None:
        if config is None:
            config = GameConfig()
        self.config = config
        self.oracle: Oracle = oracle if oracle is not None else LuckOracle(config.world_seed)
        self.projection = GridProjection(
            config.tile_degrees, GeoPoint(config.origin_lat, config.origin_lng),
        )
        self.generator = CacheGenerator(
            self.oracle, config.spawn_probability, config.max_coins_per_cache,
        )
        self.mementos = MementoStore()
        self.discovery = DiscoveryTracker()
        self.registry = CacheRegistry(self.generator, self.mementos)
        self.player = PlayerState(position=self.spawn_cell, coins=config.initial_player_coins)
        self.trail: list[GeoPoint] = []

    @property
    def spawn_cell(self) -> GridCell:
        return GridCell(self.config.spawn_i, self.config.spawn_j)

    # -- discovery --

    def materialize(self, cell: GridCell) -> Cache | None:
        """Ensure the cache at *cell* exists if the cell holds one.

        A discovered cell is returned as-is without consulting the oracle,
        so player changes to its cache survive revisits. A cell whose cache
        is already live (restored by reset) is only marked discovered; its
        coins are never refilled.
        """
        if cell in self.discovery:
            return self.registry.get(cell)
        if cell in self.registry:
            self.discovery.mark(cell)
            return self.registry.get(cell)
        if not self.generator.should_spawn(cell):
            return None
        cache = self.registry.materialize(cell)
        self.discovery.mark(cell)
        return cache

    def materialize_neighborhood(self) -> list[Cache]:
        """Materialize every cell around the player; return caches that are newly discovered."""
        fresh: list[Cache] = []
        for cell in self.projection.neighborhood(self.player.position, self.config.neighborhood_size):
            if cell in self.discovery:
                continue
            cache = self.materialize(cell)
            if cache is not None:
                fresh.append(cache)
        return fresh

    def is_near(self, cell: GridCell) -> bool:
        return self.projection.in_neighborhood(
            self.player.position, self.config.neighborhood_size, cell,
        )

    def nearby_caches(self) -> list[Cache]:
        return [c for c in self.registry if self.is_near(c.cell)]

    # -- movement --

    def move(self, di: int, dj: int) -> list[Cache]:
        """Translate the player by (di, dj) and discover the new neighborhood."""
        self.player.position = self.player.position + GridCell(di, dj)
        return self._arrive()

    def set_absolute_position(self, cell: GridCell) -> list[Cache]:
        self.player.position = cell
        return self._arrive()

    def set_geo_position(self, point: GeoPoint) -> list[Cache]:
        """Accept a position fix from a location sensor.

        A fix that maps to no grid cell is ignored and leaves the player in place.
        """
        try:
            cell = self.projection.geo_to_cell(point)
        except ValueError as exc:
            logger.warning("Ignoring position fix %s: %s", point, exc)
            return []
        return self.set_absolute_position(cell)

    def _arrive(self) -> list[Cache]:
        fresh = self.materialize_neighborhood()
        self.trail.append(self.projection.cell_to_geo(self.player.position))
        logger.debug(
            "Player at %s, %d new caches, %d known",
            self.player.position, len(fresh), len(self.registry),
        )
        return fresh

    # -- transfers --

    def collect(self, cell: GridCell) -> TransferResult:
        return self.registry.collect(cell, self.player)

    def deposit(self, cell: GridCell) -> TransferResult:
        return self.registry.deposit(cell, self.player)

    def query(self, cell: GridCell) -> tuple[Coin, ...] | None:
        return self.registry.query(cell)

    def total_coins(self) -> int:
        """Player wallet plus every live cache."""
        return self.player.coins + self.registry.total_coins()

    # -- reset --

    def reset(self) -> None:
        """Return the player to spawn and every cache to its original contents.

        Live caches restored from a save have no memento in this process;
        theirs is regenerated from the oracle first.
        """
        for cell in self.registry.cells():
            if cell not in self.mementos:
                self.mementos.snapshot(cell, self.generator.generate(cell))
        self.mementos.reset_all(self.registry, self.discovery)
        self.player.position = self.spawn_cell
        self.player.coins = self.config.initial_player_coins
        self.trail.clear()
        logger.info("World reset to spawn %s", self.player.position)
