"""Memento store (original cache contents) and discovery tracking."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Iterable, Iterator

from geocoin.core.models import Coin, GridCell

if TYPE_CHECKING:
    from geocoin.core.registry import CacheRegistry

logger = logging.getLogger(__name__)


class DiscoveryTracker:
    """Cells already materialized this session."""

    __slots__ = ("_cells",)

    def __init__(self) -> None:
        self._cells: set[GridCell] = set()

    def __contains__(self, cell: GridCell) -> bool:
        return cell in self._cells

    def __len__(self) -> int:
        return len(self._cells)

    def __iter__(self) -> Iterator[GridCell]:
        return iter(self._cells)

    def mark(self, cell: GridCell) -> None:
        self._cells.add(cell)

    def clear(self) -> None:
        self._cells.clear()


class MementoStore:
    """Write-once record of each cache's generated coins.

    Once a cell is recorded its memento never changes; it is the single
    source of truth for reset.
    """

    __slots__ = ("_mementos",)

    def __init__(self) -> None:
        self._mementos: dict[GridCell, tuple[Coin, ...]] = {}

    def __contains__(self, cell: GridCell) -> bool:
        return cell in self._mementos

    def __len__(self) -> int:
        return len(self._mementos)

    def snapshot(self, cell: GridCell, coins: Iterable[Coin]) -> bool:
        """Record *coins* for *cell*. Returns False if a memento already existed."""
        if cell in self._mementos:
            return False
        self._mementos[cell] = tuple(coins)
        return True

    def restore(self, cell: GridCell) -> tuple[Coin, ...] | None:
        return self._mementos.get(cell)

    def reset_all(self, registry: CacheRegistry, discovery: DiscoveryTracker) -> int:
        """Overwrite every recorded live cache with its memento, then forget discoveries.

        Returns the number of caches restored.
        """
        restored = 0
        for cell, coins in self._mementos.items():
            if cell in registry:
                registry.replace(cell, coins)
                restored += 1
        discovery.clear()
        logger.info("Restored %d caches from mementos", restored)
        return restored
