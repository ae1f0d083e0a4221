"""Uniform hash grid for minimum-separation queries."""

import math
from collections import defaultdict
from typing import Dict, Iterable, List, Tuple

from .geometry import distance


class SpatialGrid:
    """
    Hash partition of the horizontal plane.

    The cell size is ``2 * min_distance`` so that a 3x3 neighborhood always
    covers every point closer than ``min_distance``. Overlap queries at a
    larger distance than the grid was built for are unsound.
    """

    def __init__(self, min_distance: float):
        if min_distance <= 0:
            raise ValueError(f"min_distance must be positive, got {min_distance}")
        self.min_distance = float(min_distance)
        self.cell_size = self.min_distance * 2.0
        self._cells: Dict[Tuple[int, int], List[tuple]] = defaultdict(list)
        self._count = 0

    @classmethod
    def from_points(cls, points: Iterable, min_distance: float) -> "SpatialGrid":
        grid = cls(min_distance)
        for point in points:
            grid.add(point)
        return grid

    def cell_of(self, position) -> Tuple[int, int]:
        return (math.floor(position[0] / self.cell_size),
                math.floor(position[2] / self.cell_size))

    def add(self, point) -> None:
        """Insert a ScatterPoint or a raw position."""
        position = getattr(point, "position", point)
        self._cells[self.cell_of(position)].append(tuple(position))
        self._count += 1

    def overlaps(self, position, min_distance: float) -> bool:
        """True if a stored point lies strictly closer than ``min_distance``."""
        cx, cz = self.cell_of(position)
        for dx in (-1, 0, 1):
            for dz in (-1, 0, 1):
                bucket = self._cells.get((cx + dx, cz + dz))
                if not bucket:
                    continue
                for other in bucket:
                    if distance(position, other) < min_distance:
                        return True
        return False

    def __len__(self) -> int:
        return self._count
