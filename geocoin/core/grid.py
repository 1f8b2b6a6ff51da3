"""Grid / geographic coordinate conversion."""

from __future__ import annotations

import math
from typing import Iterator

from geocoin.core.models import CellBounds, GeoPoint, GridCell

_UNIT = GridCell(1, 1)


class GridProjection:
    """Maps integer grid cells to lat/lng and back.

    A cell's geographic point is its lower-left corner, measured from
    ``origin`` in steps of ``tile_degrees``.
    """

    __slots__ = ("tile_degrees", "origin", "_bounds")

    def __init__(self, tile_degrees: float = 1e-4, origin: GeoPoint | None = None) -> None:
        self.tile_degrees = tile_degrees
        self.origin = origin if origin is not None else GeoPoint(0.0, 0.0)
        # Flyweight: bounds never change for a given cell
        self._bounds: dict[GridCell, CellBounds] = {}

    # -- conversion --

    def cell_to_geo(self, cell: GridCell) -> GeoPoint:
        return GeoPoint(
            self.origin.lat + cell.i * self.tile_degrees,
            self.origin.lng + cell.j * self.tile_degrees,
        )

    def geo_to_cell(self, point: GeoPoint) -> GridCell:
        """Return the nearest cell. Halves round up, matching the map client.

        Raises ValueError when the point lies at no finite cell (inf, nan,
        or coordinates that overflow once scaled to tiles).
        """
        i = (point.lat - self.origin.lat) / self.tile_degrees + 0.5
        j = (point.lng - self.origin.lng) / self.tile_degrees + 0.5
        if not (math.isfinite(i) and math.isfinite(j)):
            raise ValueError(f"no grid cell for ({point.lat}, {point.lng})")
        return GridCell(math.floor(i), math.floor(j))

    def cell_bounds(self, cell: GridCell) -> CellBounds:
        bounds = self._bounds.get(cell)
        if bounds is None:
            bounds = CellBounds(self.cell_to_geo(cell), self.cell_to_geo(cell + _UNIT))
            self._bounds[cell] = bounds
        return bounds

    # -- neighborhood --

    @staticmethod
    def neighborhood(center: GridCell, radius: int) -> Iterator[GridCell]:
        """Yield every cell in ``[center - radius, center + radius)`` on both axes."""
        for i in range(center.i - radius, center.i + radius):
            for j in range(center.j - radius, center.j + radius):
                yield GridCell(i, j)

    @staticmethod
    def in_neighborhood(center: GridCell, radius: int, cell: GridCell) -> bool:
        return (
            center.i - radius <= cell.i < center.i + radius
            and center.j - radius <= cell.j < center.j + radius
        )
