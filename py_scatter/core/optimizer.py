"""
Post-generation density normalization.

Two passes over an existing point set:
1. remove_overlapping_points() - greedy de-overlap, densest points first
2. fill_density_gaps() - top up towards a target areal density with blue noise
"""

import math
from typing import List, Optional

import structlog

from .finalizer import PointFinalizer, make_finalizer
from .frontier import blue_noise_positions
from .spatial_grid import SpatialGrid
from .terrain import TerrainQuery
from .zone import ScatterPoint, ScatterSettings, ScatterZone
from ..utils.random import SeedLike

logger = structlog.get_logger()


def remove_overlapping_points(points: List[ScatterPoint], min_distance: float) -> List[ScatterPoint]:
    """
    Keep a subset with no pair closer than ``min_distance``.

    Points are visited by density weight, highest first (ties keep input
    order), and each is kept only if it clears every point kept before it.
    """
    if min_distance <= 0:
        return list(points)

    grid = SpatialGrid(min_distance)
    kept = []
    for point in sorted(points, key=lambda p: p.density, reverse=True):
        if grid.overlaps(point.position, min_distance):
            continue
        kept.append(point)
        grid.add(point)
    return kept


def target_point_count(zone: ScatterZone, target_density: float) -> int:
    return math.ceil(zone.area * target_density)


def fill_density_gaps(existing: List[ScatterPoint], finalizer: PointFinalizer,
                      min_distance: float, target_density: float) -> List[ScatterPoint]:
    """
    New points that bring ``existing`` towards the target density.

    Twice the shortfall in blue-noise candidates is generated; candidates
    that clear ``min_distance`` from every existing and newly added point are
    accepted until the shortfall is met.
    """
    zone = finalizer.zone
    if zone.is_degenerate:
        return []

    needed = target_point_count(zone, target_density) - len(existing)
    if needed <= 0:
        return []

    grid: Optional[SpatialGrid] = None
    if min_distance > 0:
        grid = SpatialGrid.from_points(existing, min_distance)

    fillers = []
    candidates = blue_noise_positions(finalizer, needed * 2)
    for candidate in candidates:
        if len(fillers) >= needed:
            break
        if grid is not None and grid.overlaps(candidate, min_distance):
            continue

        point = finalizer.accept(candidate)
        if point is None:
            continue
        if grid is not None:
            if grid.overlaps(point.position, min_distance):
                continue
            grid.add(point)
        fillers.append(point)

    logger.debug("Density gaps filled", needed=needed, candidates=len(candidates),
                 added=len(fillers))
    return fillers


def optimize_distribution(points: List[ScatterPoint], zone: ScatterZone,
                          min_distance: float, target_density: float,
                          settings: Optional[ScatterSettings] = None,
                          terrain: Optional[TerrainQuery] = None,
                          rng: SeedLike = None) -> List[ScatterPoint]:
    """
    De-overlap a point set, then fill density gaps.

    Args:
        points: Existing points (not modified)
        zone: Zone the points belong to
        min_distance: Minimum separation in the result
        target_density: Desired points per unit area
        settings: Appearance settings for gap-fill points
        terrain: Terrain for gap-fill points
        rng: Seed or generator

    Returns:
        Optimized point list; gap-fill never pushes the count past the target
    """
    finalizer = make_finalizer(zone, settings, terrain, rng)

    optimized = remove_overlapping_points(points, min_distance)
    removed = len(points) - len(optimized)

    added = []
    if calculate_actual_density(optimized, zone) < target_density:
        added = fill_density_gaps(optimized, finalizer, min_distance, target_density)
        optimized.extend(added)

    logger.info("Distribution optimized", input=len(points), removed=removed,
                added=len(added), output=len(optimized))
    return optimized


def calculate_actual_density(points: List[ScatterPoint], zone: ScatterZone) -> float:
    """Points per unit of zone area; 0 for a zero-area zone."""
    if zone.is_degenerate:
        return 0.0
    return len(points) / zone.area
