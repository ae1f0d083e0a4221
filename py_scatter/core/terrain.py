"""
Terrain query interface and simple terrain implementations.

The engine only ever probes straight down from above a candidate. Any object
with a matching ``query`` method can stand in for the terrain; the classes
here cover flat ground, sampled heightfields and "no terrain at all".
"""

from dataclasses import dataclass
from typing import Optional, Protocol, runtime_checkable

import numpy as np
from scipy.interpolate import RegularGridInterpolator

from .geometry import UP, Vec3, angle_between


@dataclass(frozen=True)
class TerrainHit:
    """Result of a terrain probe."""
    hit: bool
    point: Optional[Vec3] = None
    normal: Vec3 = UP
    slope: float = 0.0


MISS = TerrainHit(hit=False)


@runtime_checkable
class TerrainQuery(Protocol):
    """Anything that can answer a ray-style terrain probe."""

    def query(self, origin: Vec3, direction: Vec3) -> TerrainHit:
        ...


def slope_between(normal, up=UP) -> float:
    """Surface slope in degrees for a given normal."""
    return angle_between(normal, up)


def _is_downward(direction) -> bool:
    return direction[1] < 0 and abs(direction[0]) < 1e-9 and abs(direction[2]) < 1e-9


class NoTerrain:
    """Terrain that is never hit."""

    def query(self, origin: Vec3, direction: Vec3) -> TerrainHit:
        return MISS


class FlatTerrain:
    """Infinite plane at a fixed height."""

    def __init__(self, height: float = 0.0, normal: Vec3 = UP):
        self.height = float(height)
        self.normal = Vec3(*normal).normalized()
        self.slope = slope_between(self.normal)

    def query(self, origin: Vec3, direction: Vec3) -> TerrainHit:
        if not _is_downward(direction) or origin[1] < self.height:
            return MISS
        return TerrainHit(
            hit=True,
            point=Vec3(origin[0], self.height, origin[2]),
            normal=self.normal,
            slope=self.slope,
        )


class HeightfieldTerrain:
    """
    Terrain sampled from a regular 2D height grid.

    ``heights[i, j]`` is the height at world ``x = origin_x + i * cell_size``,
    ``z = origin_z + j * cell_size``. Heights are bilinearly interpolated and
    normals come from the finite-difference gradient of the grid.
    """

    def __init__(self, heights: np.ndarray, origin_x: float = 0.0,
                 origin_z: float = 0.0, cell_size: float = 1.0):
        heights = np.asarray(heights, dtype=float)
        if heights.ndim != 2 or min(heights.shape) < 2:
            raise ValueError("Heightfield needs a 2D grid of at least 2x2 samples")

        self.heights = heights
        self.cell_size = float(cell_size)
        xs = origin_x + np.arange(heights.shape[0]) * self.cell_size
        zs = origin_z + np.arange(heights.shape[1]) * self.cell_size

        grad_x, grad_z = np.gradient(heights, self.cell_size)
        self._height = RegularGridInterpolator((xs, zs), heights, bounds_error=False, fill_value=None)
        self._grad_x = RegularGridInterpolator((xs, zs), grad_x, bounds_error=False, fill_value=None)
        self._grad_z = RegularGridInterpolator((xs, zs), grad_z, bounds_error=False, fill_value=None)
        self._bounds = (xs[0], xs[-1], zs[0], zs[-1])

    def covers(self, x: float, z: float) -> bool:
        min_x, max_x, min_z, max_z = self._bounds
        return min_x <= x <= max_x and min_z <= z <= max_z

    def height_at(self, x: float, z: float) -> float:
        return float(self._height([[x, z]])[0])

    def normal_at(self, x: float, z: float) -> Vec3:
        dx = float(self._grad_x([[x, z]])[0])
        dz = float(self._grad_z([[x, z]])[0])
        return Vec3(-dx, 1.0, -dz).normalized()

    def query(self, origin: Vec3, direction: Vec3) -> TerrainHit:
        x, z = origin[0], origin[2]
        if not _is_downward(direction) or not self.covers(x, z):
            return MISS

        height = self.height_at(x, z)
        if origin[1] < height:
            return MISS

        normal = self.normal_at(x, z)
        return TerrainHit(hit=True, point=Vec3(x, height, z), normal=normal,
                          slope=slope_between(normal))
