"""GameSession: owns one World and serializes access to it.

FastAPI runs sync endpoints on a thread pool, while every invariant of the
world (non-negative wallets, write-once mementos) spans several fields.
One lock guards the whole world; each public method is one atomic command.
"""

from __future__ import annotations

import logging
import threading
from enum import Enum
from typing import TYPE_CHECKING, Callable, TypeVar

from geocoin.core import snapshot as persistence
from geocoin.core.models import Cache, Coin, GeoPoint, GridCell, TransferResult, TransferStatus
from geocoin.core.snapshot import Snapshot
from geocoin.core.world import World
from geocoin.utils.event_log import EventLog
from geocoin.utils.save_store import SaveStore

if TYPE_CHECKING:
    from geocoin.config import GameConfig
    from geocoin.systems.rng import Oracle

logger = logging.getLogger(__name__)

T = TypeVar("T")


class Direction(str, Enum):
    """The four movement buttons. North is +i (latitude)."""

    north = "north"
    south = "south"
    east = "east"
    west = "west"


DIRECTION_DELTAS: dict[Direction, tuple[int, int]] = {
    Direction.north: (1, 0),
    Direction.south: (-1, 0),
    Direction.east: (0, 1),
    Direction.west: (0, -1),
}


class GameSession:
    """Manages the game lifecycle: load at start, save at stop, commands in between."""

    def __init__(
        self,
        config: GameConfig,
        store: SaveStore | None = None,
        oracle: Oracle | None = None,
    ) -> None:
        self.config = config
        self._store = store if store is not None else SaveStore(config.save_file)
        self._world = World(config, oracle)
        self._lock = threading.Lock()
        self._event_log = EventLog(config.event_log_size)
        self._started = False

    # -- public properties --

    @property
    def event_log(self) -> EventLog:
        return self._event_log

    @property
    def store(self) -> SaveStore:
        return self._store

    @property
    def started(self) -> bool:
        return self._started

    def read(self, fn: Callable[[World], T]) -> T:
        """Run a read-only function against the world under the lock."""
        with self._lock:
            return fn(self._world)

    # -- lifecycle --

    def start(self) -> bool:
        """Load the saved game (or start fresh) and discover the player's neighborhood."""
        with self._lock:
            restored = persistence.load_or_default(self._world, self._store.read())
            self._world.materialize_neighborhood()
            self._started = True
        self._event_log.append(
            "session", "Saved game restored." if restored else "New game started.",
        )
        logger.info("GameSession started (restored=%s)", restored)
        return restored

    def stop(self) -> None:
        """Save on normal shutdown."""
        if not self._started:
            return
        self.save()
        self._started = False
        logger.info("GameSession stopped.")

    def save(self) -> Snapshot:
        with self._lock:
            snap = persistence.save(self._world)
        self._store.write(snap.to_json())
        self._event_log.append("session", "Game saved.")
        return snap

    def reset(self) -> None:
        """Restore every cache to its original contents and persist the fresh state."""
        with self._lock:
            self._world.reset()
            self._world.materialize_neighborhood()
            snap = persistence.save(self._world)
        self._store.write(snap.to_json())
        self._event_log.append("session", "World reset.")

    # -- movement --

    def move(self, direction: Direction) -> list[Cache]:
        di, dj = DIRECTION_DELTAS[direction]
        with self._lock:
            fresh = self._world.move(di, dj)
            pos = self._world.player.position
        self._log_arrival(pos, fresh)
        return fresh

    def set_position(self, point: GeoPoint) -> list[Cache]:
        with self._lock:
            fresh = self._world.set_geo_position(point)
            pos = self._world.player.position
        self._log_arrival(pos, fresh)
        return fresh

    def _log_arrival(self, pos: GridCell, fresh: list[Cache]) -> None:
        self._event_log.append("move", f"Moved to {pos.key}.", (pos.i, pos.j))
        for cache in fresh:
            self._event_log.append(
                "discover",
                f"Found a cache at {cache.cell.key} with {len(cache)} coins.",
                (cache.cell.i, cache.cell.j),
            )

    # -- transfers --

    def collect(self, cell: GridCell) -> TransferResult:
        return self._transfer(cell, World.collect, "Collected")

    def deposit(self, cell: GridCell) -> TransferResult:
        return self._transfer(cell, World.deposit, "Deposited")

    def _transfer(
        self, cell: GridCell, op: Callable[[World, GridCell], TransferResult], verb: str,
    ) -> TransferResult:
        with self._lock:
            if cell in self._world.registry and not self._world.is_near(cell):
                result = TransferResult(TransferStatus.OUT_OF_REACH, cell)
            else:
                result = op(self._world, cell)
        if result.coin is not None:
            self._event_log.append("transfer", f"{verb} coin {result.coin.id}.", (cell.i, cell.j))
        return result

    def query(self, cell: GridCell) -> tuple[Coin, ...] | None:
        with self._lock:
            return self._world.query(cell)
