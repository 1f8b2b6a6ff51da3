"""Cache registry: the authoritative cell -> cache mapping."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Iterable, Iterator

from geocoin.core.models import (
    Cache,
    Coin,
    GridCell,
    PlayerState,
    TransferResult,
    TransferStatus,
)

if TYPE_CHECKING:
    from geocoin.core.mementos import MementoStore
    from geocoin.systems.generator import CacheGenerator

logger = logging.getLogger(__name__)


class CacheNotFoundError(KeyError):
    """Raised by ``CacheRegistry.get`` for a cell that was never materialized."""

    def __init__(self, cell: GridCell) -> None:
        super().__init__(cell)
        self.cell = cell

    def __str__(self) -> str:
        return f"No cache materialized at {self.cell}"


class CacheRegistry:
    """Owns cache creation, transfers, and queries.

    Coins are immutable, so copying the list is a deep copy of the
    cache contents.
    """

    __slots__ = ("_caches", "_generator", "_mementos")

    def __init__(self, generator: CacheGenerator, mementos: MementoStore) -> None:
        self._caches: dict[GridCell, Cache] = {}
        self._generator = generator
        self._mementos = mementos

    # -- container protocol --

    def __contains__(self, cell: GridCell) -> bool:
        return cell in self._caches

    def __len__(self) -> int:
        return len(self._caches)

    def __iter__(self) -> Iterator[Cache]:
        return iter(self._caches.values())

    def cells(self) -> list[GridCell]:
        return list(self._caches)

    def get(self, cell: GridCell) -> Cache:
        cache = self._caches.get(cell)
        if cache is None:
            raise CacheNotFoundError(cell)
        return cache

    def total_coins(self) -> int:
        return sum(len(c) for c in self._caches.values())

    # -- lifecycle --

    def materialize(self, cell: GridCell) -> Cache:
        """Populate the live cache for *cell* from its memento, generating one if needed."""
        original = self._mementos.restore(cell)
        if original is None:
            original = self._generator.generate(cell)
            self._mementos.snapshot(cell, original)
        cache = Cache(cell=cell, coins=list(original))
        self._caches[cell] = cache
        return cache

    def replace(self, cell: GridCell, coins: Iterable[Coin]) -> Cache:
        cache = Cache(cell=cell, coins=list(coins))
        self._caches[cell] = cache
        return cache

    def clear(self) -> None:
        self._caches.clear()

    # -- transfers --

    def collect(self, cell: GridCell, player: PlayerState) -> TransferResult:
        """Move the highest-serial coin from the cache into the player's wallet."""
        cache = self._caches.get(cell)
        if cache is None:
            return TransferResult(TransferStatus.NOT_FOUND, cell)
        if not cache.coins:
            return TransferResult(TransferStatus.EMPTY, cell)
        coin = cache.coins.pop()
        player.coins += 1
        logger.debug("Collected %s (player now has %d)", coin.id, player.coins)
        return TransferResult(TransferStatus.OK, cell, coin)

    def deposit(self, cell: GridCell, player: PlayerState) -> TransferResult:
        """Mint a coin into the cache from one unit of the player's wallet."""
        cache = self._caches.get(cell)
        if cache is None:
            return TransferResult(TransferStatus.NOT_FOUND, cell)
        if player.coins < 1:
            return TransferResult(TransferStatus.INSUFFICIENT_FUNDS, cell)
        coin = Coin.mint(cell, len(cache.coins))
        cache.coins.append(coin)
        player.coins -= 1
        logger.debug("Deposited %s (player now has %d)", coin.id, player.coins)
        return TransferResult(TransferStatus.OK, cell, coin)

    def query(self, cell: GridCell) -> tuple[Coin, ...] | None:
        cache = self._caches.get(cell)
        return cache.view() if cache is not None else None
