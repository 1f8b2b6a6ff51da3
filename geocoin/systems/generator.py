"""Cache generation policy: which cells hold a cache and how many coins it starts with."""

from __future__ import annotations

import logging
import math

from geocoin.core.models import Coin, GridCell
from geocoin.systems.rng import Oracle, luck_key

logger = logging.getLogger(__name__)

COINS_TAG = "coins"


class CacheGenerator:
    """Pure spawn decisions driven by the luck oracle.

    Calling any method twice for the same cell yields the same answer,
    which is what lets mementos be regenerated instead of stored.
    """

    __slots__ = ("_oracle", "spawn_probability", "max_coins")

    def __init__(self, oracle: Oracle, spawn_probability: float = 0.1, max_coins: int = 10) -> None:
        self._oracle = oracle
        self.spawn_probability = spawn_probability
        self.max_coins = max_coins

    def should_spawn(self, cell: GridCell) -> bool:
        return self._oracle.luck(luck_key(cell.i, cell.j)) < self.spawn_probability

    def initial_coin_count(self, cell: GridCell) -> int:
        """At least one coin; a spawned cache is never empty at birth."""
        roll = self._oracle.luck(luck_key(cell.i, cell.j, COINS_TAG))
        return max(1, math.floor(roll * self.max_coins))

    def generate(self, cell: GridCell) -> tuple[Coin, ...]:
        count = self.initial_coin_count(cell)
        logger.debug("Generated cache at %s with %d coins", cell, count)
        return tuple(Coin.mint(cell, serial) for serial in range(count))
