"""
Scatter samplers.

Each sampler turns a zone and settings into a list of finalized ScatterPoints:

1. generate_tree_distribution() - Poisson-disk growth from the zone center
2. generate_blue_noise_distribution() - frontier blue noise with a target count
3. generate_dla_distribution() - diffusion-limited aggregation around the center
4. generate_flower_distribution() - layered-noise thresholding, parallel per column

All samplers take an explicit seed or AleaPRNG and return an empty list for
degenerate input instead of raising.
"""

import math
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import List, Optional, Set, Tuple

import structlog

from ..config import settings as engine_settings
from ..utils.random import SeedLike, derive_prng
from .finalizer import PointFinalizer, make_finalizer
from .frontier import blue_noise_positions, poisson_disk_candidates
from .geometry import Vec3
from .noise import generate_layered_noise
from .spatial_grid import SpatialGrid
from .terrain import TerrainQuery
from .zone import ScatterPoint, ScatterSettings, ScatterZone

logger = structlog.get_logger()

Cell = Tuple[int, int]


def generate_tree_distribution(zone: ScatterZone, min_distance: float,
                               settings: Optional[ScatterSettings] = None,
                               terrain: Optional[TerrainQuery] = None,
                               rng: SeedLike = None, relaxation: float = 0.5,
                               max_points: Optional[int] = None,
                               max_total_attempts: Optional[int] = None) -> List[ScatterPoint]:
    """
    Poisson-disk distribution for sparse, evenly spaced objects.

    Candidates are grown from the zone center, re-validated against a fresh
    grid and finalized.

    Args:
        zone: Placement zone
        min_distance: Minimum distance between accepted points
        settings: Appearance settings
        terrain: Terrain to conform to
        rng: Seed or generator
        relaxation: Candidate ring radius is ``min_distance * (1 + relaxation)``
        max_points: Cap on candidates
        max_total_attempts: Cap on candidate attempts

    Returns:
        List of scatter points
    """
    finalizer = make_finalizer(zone, settings, terrain, rng)
    logger.info("Generating tree distribution", min_distance=min_distance,
                relaxation=relaxation)

    candidates = poisson_disk_candidates(finalizer, min_distance, relaxation,
                                         max_points=max_points,
                                         max_total_attempts=max_total_attempts)
    if not candidates:
        logger.warning("No Poisson-disk candidates", zone_area=zone.area)
        return []

    grid = SpatialGrid(min_distance)
    points = []
    for candidate in candidates:
        if finalizer.validate(candidate, grid, min_distance) is None:
            continue
        point = finalizer.accept(candidate)
        if point is None:
            continue
        points.append(point)
        grid.add(point)

    logger.info("Tree distribution complete", candidates=len(candidates), points=len(points))
    return points


def generate_blue_noise_distribution(zone: ScatterZone, count: int,
                                     settings: Optional[ScatterSettings] = None,
                                     terrain: Optional[TerrainQuery] = None,
                                     rng: SeedLike = None) -> List[ScatterPoint]:
    """Up to ``count`` finalized blue-noise points."""
    finalizer = make_finalizer(zone, settings, terrain, rng)
    positions = blue_noise_positions(finalizer, count)

    points = []
    for position in positions:
        point = finalizer.accept(position)
        if point is not None:
            points.append(point)

    logger.info("Blue noise distribution complete", requested=count, points=len(points))
    return points


@dataclass
class DLAResult:
    """Points of a DLA run plus the occupied cell recorded for each of them."""
    points: List[ScatterPoint] = field(default_factory=list)
    cells: List[Cell] = field(default_factory=list)
    attempts: int = 0


def _cell_of(position) -> Cell:
    return math.floor(position[0]), math.floor(position[2])


def _has_neighbor(cell: Cell, occupied: Set[Cell]) -> bool:
    cx, cz = cell
    for dx in (-1, 0, 1):
        for dz in (-1, 0, 1):
            if dx == 0 and dz == 0:
                continue
            if (cx + dx, cz + dz) in occupied:
                return True
    return False


def grow_dla(finalizer: PointFinalizer, particle_count: int,
             attempt_factor: Optional[int] = None) -> DLAResult:
    """
    Diffusion-limited aggregation around the zone center.

    Walkers start at uniform zone positions and take unit steps in random
    directions until they leave the zone or touch an occupied cell
    (8-connected, unit cells). A walker that touches sticks and becomes a
    point. At most ``particle_count * attempt_factor`` walkers are released.
    """
    result = DLAResult()
    zone = finalizer.zone
    prng = finalizer.prng
    if particle_count <= 0 or zone.is_degenerate:
        return result

    if attempt_factor is None:
        attempt_factor = engine_settings.dla_attempt_factor

    seed = finalizer.accept(zone.center)
    if seed is None:
        logger.warning("DLA seed rejected by zone height band", center=tuple(zone.center))
        return result

    occupied: Set[Cell] = {_cell_of(zone.center)}
    result.points.append(seed)
    result.cells.append(_cell_of(zone.center))

    max_attempts = particle_count * attempt_factor
    while len(result.points) < particle_count and result.attempts < max_attempts:
        walker = zone.random_position(prng)

        while zone.contains(walker):
            cell = _cell_of(walker)
            if _has_neighbor(cell, occupied):
                point = finalizer.accept(walker)
                if point is not None:
                    result.points.append(point)
                    result.cells.append(cell)
                    occupied.add(cell)
                break

            angle = prng.angle()
            walker = Vec3(walker.x + math.cos(angle), walker.y, walker.z + math.sin(angle))

        result.attempts += 1

    if len(result.points) < particle_count:
        logger.warning("DLA attempt cap exhausted", requested=particle_count,
                       points=len(result.points), attempts=result.attempts)
    return result


def generate_dla_distribution(zone: ScatterZone, particle_count: int,
                              settings: Optional[ScatterSettings] = None,
                              terrain: Optional[TerrainQuery] = None,
                              rng: SeedLike = None) -> List[ScatterPoint]:
    """Organic, connected clumps grown by diffusion-limited aggregation."""
    finalizer = make_finalizer(zone, settings, terrain, rng)
    logger.info("Generating DLA distribution", particle_count=particle_count)
    return grow_dla(finalizer, particle_count).points


def _threshold_column(x: int, noise_column, threshold: float, step_x: float,
                      step_z: float, finalizer: PointFinalizer) -> List[ScatterPoint]:
    """Points for one noise-map column. Touches no shared mutable state."""
    zone = finalizer.zone
    settings = finalizer.settings
    prng = finalizer.prng
    origin_x = zone.center.x - zone.size.x / 2.0
    base_y = zone.center.y - zone.size.y / 2.0
    origin_z = zone.center.z - zone.size.z / 2.0

    points = []
    for z, value in enumerate(noise_column):
        if value <= threshold:
            continue

        jitter_x = prng.uniform(-step_x, step_x) * settings.jitter_strength
        jitter_z = prng.uniform(-step_z, step_z) * settings.jitter_strength
        position = Vec3(origin_x + x * step_x + jitter_x, base_y,
                        origin_z + z * step_z + jitter_z)
        if not zone.contains(position):
            continue

        point = finalizer.accept(position)
        if point is not None:
            points.append(point)
    return points


def generate_flower_distribution(zone: ScatterZone, density: float,
                                 settings: Optional[ScatterSettings] = None,
                                 terrain: Optional[TerrainQuery] = None,
                                 rng: SeedLike = None,
                                 resolution: Optional[int] = None,
                                 max_workers: Optional[int] = None) -> List[ScatterPoint]:
    """
    Dense patchy cover from a thresholded layered-noise map.

    Every noise cell above ``density_falloff(0.5)`` emits one jittered point.
    Points start at the bottom of the zone's vertical extent,
    ``center.y - size.y / 2``, until terrain snapping moves them.
    Columns are processed in parallel; each worker owns a generator derived
    from the caller's seed and its column index, so the result does not
    depend on scheduling. Worker results are merged once, in column order.
    """
    finalizer = make_finalizer(zone, settings, terrain, rng)
    if zone.is_degenerate or density <= 0:
        return []

    resolution = resolution or engine_settings.noise_resolution
    max_workers = max_workers or engine_settings.max_workers

    noise_map = generate_layered_noise(resolution, density, finalizer.prng)
    threshold = finalizer.settings.density_falloff(0.5)
    step_x = zone.size.x / resolution
    step_z = zone.size.z / resolution
    base_seed = finalizer.prng.integer_seed()

    logger.info("Generating flower distribution", resolution=resolution,
                threshold=threshold, workers=max_workers)

    def run_column(x: int) -> List[ScatterPoint]:
        column_finalizer = PointFinalizer(
            zone, finalizer.settings, finalizer.terrain,
            derive_prng(finalizer.prng, "column", x, base=base_seed),
            finalizer.probe_height, finalizer.acceptance_floor,
        )
        return _threshold_column(x, noise_map[x], threshold, step_x, step_z, column_finalizer)

    with ThreadPoolExecutor(max_workers=max_workers) as executor:
        columns = list(executor.map(run_column, range(resolution)))

    points = [point for column in columns for point in column]
    logger.info("Flower distribution complete", points=len(points))
    return points
