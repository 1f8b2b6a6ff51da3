"""Core data models: GridCell, GeoPoint, Coin, Cache, PlayerState."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


@dataclass(frozen=True, slots=True)
class GridCell:
    """Immutable integer grid coordinate. Unbounded on both axes."""

    i: int = 0
    j: int = 0

    def __add__(self, other: GridCell) -> GridCell:
        return GridCell(self.i + other.i, self.j + other.j)

    @property
    def key(self) -> str:
        return f"{self.i},{self.j}"

    @classmethod
    def from_key(cls, key: str) -> GridCell:
        """Parse an ``"i,j"`` key. Raises ValueError on malformed input."""
        i, j = key.split(",")
        return cls(int(i), int(j))

    def __repr__(self) -> str:
        return f"({self.i}, {self.j})"


@dataclass(frozen=True, slots=True)
class GeoPoint:
    """Geographic coordinate in degrees."""

    lat: float
    lng: float


@dataclass(frozen=True, slots=True)
class CellBounds:
    """Rectangle covered by one grid cell."""

    south_west: GeoPoint
    north_east: GeoPoint


@dataclass(frozen=True, slots=True)
class Coin:
    """A single coin. Worth exactly one unit; the id is for display only."""

    id: str

    @classmethod
    def mint(cls, cell: GridCell, serial: int) -> Coin:
        return cls(id=f"{cell.key}#{serial}")


@dataclass(slots=True)
class Cache:
    """Mutable coin inventory for one cell. Coins leave and arrive at the tail."""

    cell: GridCell
    coins: list[Coin] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.coins)

    def view(self) -> tuple[Coin, ...]:
        return tuple(self.coins)


@dataclass(slots=True)
class PlayerState:
    """Player position and wallet. The wallet is a count, not a bag of coins."""

    position: GridCell
    coins: int = 0


class TransferStatus(str, Enum):
    """Outcome of a collect or deposit request."""

    OK = "ok"
    EMPTY = "empty"
    INSUFFICIENT_FUNDS = "insufficient_funds"
    NOT_FOUND = "not_found"
    OUT_OF_REACH = "out_of_reach"


@dataclass(frozen=True, slots=True)
class TransferResult:
    """Explicit result of a transfer. ``coin`` is set only when one moved."""

    status: TransferStatus
    cell: GridCell
    coin: Coin | None = None

    @property
    def ok(self) -> bool:
        return self.status is TransferStatus.OK

    @property
    def transferred(self) -> int:
        return 1 if self.ok else 0
