"""
Wang-tile synthesis for geological scatter (rocks, boulders, outcrops).

A coarse grid is filled row by row with tiles whose edge codes match their
already-placed north and west neighbors. Each placed tile then seeds points in
its footprint with one Bernoulli trial per density value.

Reference: Cohen et al., "Wang Tiles for Image and Texture Generation" (2003).
"""

import math
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple, Union

import structlog
from pydantic import BaseModel, ConfigDict, Field, model_validator

from .alea_prng import AleaPRNG
from .finalizer import PointFinalizer, make_finalizer
from .geometry import Vec3
from .terrain import TerrainQuery
from .zone import ScatterPoint, ScatterSettings, ScatterZone
from ..utils.random import SeedLike

logger = structlog.get_logger()

NORTH, EAST, SOUTH, WEST = 0, 1, 2, 3
TILE_WORLD_SIZE = 10.0
HEIGHT_JITTER = 0.1


class WangTile(BaseModel):
    """Edge codes plus the height/density samples a tile seeds points with."""

    model_config = ConfigDict(frozen=True)

    edges: Tuple[int, int, int, int] = Field(description="North, east, south, west edge codes")
    heights: Tuple[float, ...] = Field(description="Height offset for each seeded point")
    densities: Tuple[float, ...] = Field(description="Placement probability for each seeded point")

    @model_validator(mode="after")
    def _check_samples(self):
        if len(self.heights) != len(self.densities):
            raise ValueError("heights and densities must have the same length")
        if any(d < 0.0 or d > 1.0 for d in self.densities):
            raise ValueError("densities must lie within [0, 1]")
        return self

    @property
    def north(self) -> int:
        return self.edges[NORTH]

    @property
    def east(self) -> int:
        return self.edges[EAST]

    @property
    def south(self) -> int:
        return self.edges[SOUTH]

    @property
    def west(self) -> int:
        return self.edges[WEST]


DEFAULT_TILE_SET: Tuple[WangTile, ...] = (
    WangTile(edges=(1, 2, 3, 0), heights=(0.2, 0.3, 0.1), densities=(0.7, 0.5, 0.3)),
    WangTile(edges=(2, 1, 0, 3), heights=(0.5, 0.4, 0.6), densities=(0.6, 0.8, 0.4)),
    WangTile(edges=(3, 0, 1, 2), heights=(0.1, 0.2, 0.4), densities=(0.5, 0.6, 0.7)),
    WangTile(edges=(0, 3, 2, 1), heights=(0.4, 0.5, 0.3), densities=(0.8, 0.4, 0.5)),
)


class Unconstrained:
    """No neighbor on this side, so any edge code is admitted."""

    def admits(self, code: int) -> bool:
        return True

    def __repr__(self):
        return "Unconstrained()"


@dataclass(frozen=True)
class Must:
    """The neighbor on this side requires an exact edge code."""
    code: int

    def admits(self, code: int) -> bool:
        return code == self.code


EdgeConstraint = Union[Unconstrained, Must]
UNCONSTRAINED = Unconstrained()

TileGrid = List[List[Optional[WangTile]]]


def north_constraint(grid: TileGrid, row: int, col: int) -> EdgeConstraint:
    above = grid[row - 1][col] if row > 0 else None
    return Must(above.south) if above is not None else UNCONSTRAINED


def west_constraint(grid: TileGrid, row: int, col: int) -> EdgeConstraint:
    left = grid[row][col - 1] if col > 0 else None
    return Must(left.east) if left is not None else UNCONSTRAINED


def compatible_tiles(tile_set: Sequence[WangTile], north: EdgeConstraint,
                     west: EdgeConstraint) -> List[WangTile]:
    return [tile for tile in tile_set if north.admits(tile.north) and west.admits(tile.west)]


def synthesize_tile_grid(grid_size: int, tile_set: Sequence[WangTile],
                         prng: AleaPRNG) -> TileGrid:
    """
    Fill a ``grid_size`` x ``grid_size`` grid with edge-compatible tiles.

    ``grid[row][col]``: row grows southwards, col grows eastwards. A cell
    with no compatible tile stays None and constrains nothing.
    """
    grid: TileGrid = [[None] * grid_size for _ in range(grid_size)]
    dead_ends = 0

    for row in range(grid_size):
        for col in range(grid_size):
            candidates = compatible_tiles(
                tile_set,
                north_constraint(grid, row, col),
                west_constraint(grid, row, col),
            )
            if not candidates:
                dead_ends += 1
                continue
            grid[row][col] = prng.choice(candidates)

    if dead_ends:
        logger.warning("Wang tile cells left empty", dead_ends=dead_ends, grid_size=grid_size)
    return grid


def tile_grid_size(zone: ScatterZone) -> int:
    return math.ceil(max(zone.size.x, zone.size.z) / TILE_WORLD_SIZE)


def scatter_tile_grid(grid: TileGrid, finalizer: PointFinalizer) -> List[ScatterPoint]:
    """Seed points inside each placed tile's footprint."""
    zone = finalizer.zone
    prng = finalizer.prng
    jitter = finalizer.settings.jitter_strength * HEIGHT_JITTER

    grid_size = len(grid)
    if grid_size == 0:
        return []
    tile_x = zone.size.x / grid_size
    tile_z = zone.size.z / grid_size
    origin_x = zone.center.x - zone.size.x / 2.0
    origin_z = zone.center.z - zone.size.z / 2.0

    points = []
    for row in range(grid_size):
        for col in range(grid_size):
            tile = grid[row][col]
            if tile is None:
                continue

            for height, density in zip(tile.heights, tile.densities):
                if not prng.chance(density):
                    continue

                position = Vec3(
                    origin_x + col * tile_x + prng.uniform(0.0, tile_x),
                    zone.center.y + height + prng.uniform(-jitter, jitter),
                    origin_z + row * tile_z + prng.uniform(0.0, tile_z),
                )
                point = finalizer.accept(position)
                if point is not None:
                    points.append(point)
    return points


def generate_geological_distribution(zone: ScatterZone,
                                     settings: Optional[ScatterSettings] = None,
                                     terrain: Optional[TerrainQuery] = None,
                                     rng: SeedLike = None,
                                     tile_set: Sequence[WangTile] = DEFAULT_TILE_SET) -> List[ScatterPoint]:
    """
    Wang-tile distribution over the zone.

    The grid has ``ceil(max(size_x, size_z) / 10)`` tiles per side.
    """
    finalizer = make_finalizer(zone, settings, terrain, rng)
    if zone.is_degenerate or not tile_set:
        return []

    grid_size = tile_grid_size(zone)
    grid = synthesize_tile_grid(grid_size, tile_set, finalizer.prng)
    points = scatter_tile_grid(grid, finalizer)

    logger.info("Geological distribution complete", grid_size=grid_size, points=len(points))
    return points
