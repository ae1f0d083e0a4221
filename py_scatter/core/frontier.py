"""
Frontier growth sampling.

Both the Poisson-disk candidate stage and the blue-noise sampler grow a point
set outward from a seed: every accepted point joins a FIFO active queue and
later spawns candidates on a circle around itself. Based on Bridson's
"Fast Poisson Disk Sampling in Arbitrary Dimensions".

Candidates always pass the full acceptance test: zone bounds, height band,
slope response and minimum separation.
"""

import math
from collections import deque
from typing import Callable, Iterable, List, Optional

import structlog

from ..config import settings as engine_settings
from .alea_prng import AleaPRNG
from .finalizer import PointFinalizer
from .geometry import Vec3
from .spatial_grid import SpatialGrid

logger = structlog.get_logger()

AcceptFn = Callable[[Vec3], Optional[Vec3]]


def grow_frontier(seed_candidates: Iterable[Vec3], radius: float, accept: AcceptFn,
                  prng: AleaPRNG, max_points: Optional[int] = None,
                  max_total_attempts: Optional[int] = None,
                  attempts_per_point: Optional[int] = None) -> List[Vec3]:
    """
    Grow a point set from the first acceptable seed.

    Args:
        seed_candidates: Positions tried in order until one is accepted
        radius: Distance from the current frontier point to each candidate
        accept: Returns the accepted position (and records it) or None
        prng: Random generator
        max_points: Stop once this many points are accepted
        max_total_attempts: Stop once this many candidates were tried
        attempts_per_point: Candidates spawned around each frontier point

    Returns:
        Accepted positions in acceptance order
    """
    if attempts_per_point is None:
        attempts_per_point = engine_settings.candidate_attempts

    points: List[Vec3] = []
    if max_points is not None and max_points <= 0:
        return points

    attempts = 0

    def exhausted() -> bool:
        return max_total_attempts is not None and attempts >= max_total_attempts

    def full() -> bool:
        return max_points is not None and len(points) >= max_points

    active = deque()
    for candidate in seed_candidates:
        if exhausted():
            break
        attempts += 1
        accepted = accept(candidate)
        if accepted is not None:
            points.append(accepted)
            active.append(accepted)
            break

    while active and not full() and not exhausted():
        current = active.popleft()

        for _ in range(attempts_per_point):
            if exhausted():
                break
            attempts += 1

            angle = prng.angle()
            candidate = Vec3(
                current.x + math.cos(angle) * radius,
                current.y,
                current.z + math.sin(angle) * radius,
            )
            accepted = accept(candidate)
            if accepted is None:
                continue

            points.append(accepted)
            active.append(accepted)
            if full():
                break

    if exhausted():
        logger.warning("Frontier growth hit its attempt cap",
                       attempts=attempts, points=len(points))

    return points


def _random_seeds(finalizer: PointFinalizer, count: Optional[int] = None,
                  first: Optional[Vec3] = None):
    if count is None:
        count = engine_settings.seed_attempts
    if first is not None:
        yield first
    for _ in range(count):
        yield finalizer.zone.random_position(finalizer.prng)


def _grid_acceptor(finalizer: PointFinalizer, grid: SpatialGrid, min_distance: float) -> AcceptFn:
    def accept(candidate: Vec3) -> Optional[Vec3]:
        measured = finalizer.validate(candidate, grid, min_distance)
        if measured is not None:
            grid.add(measured)
        return measured
    return accept


def poisson_disk_candidates(finalizer: PointFinalizer, min_distance: float,
                            relaxation: float = 0.5, max_points: Optional[int] = None,
                            max_total_attempts: Optional[int] = None,
                            seed_attempts: Optional[int] = None) -> List[Vec3]:
    """
    Poisson-disk candidate positions grown from the zone center.

    Candidates spawn at ``min_distance * (1 + relaxation)`` from their parent
    and are kept at least ``min_distance`` apart. When the center itself is
    rejected, up to ``seed_attempts`` random zone positions are tried as seeds
    instead.
    """
    zone = finalizer.zone
    if zone.is_degenerate or min_distance <= 0:
        return []

    if max_points is None:
        max_points = engine_settings.poisson_max_points
    if max_total_attempts is None:
        max_total_attempts = engine_settings.poisson_max_total_attempts

    grid = SpatialGrid(min_distance)
    seeds = _random_seeds(finalizer, seed_attempts, first=zone.center)

    return grow_frontier(
        seeds,
        radius=min_distance * (1.0 + relaxation),
        accept=_grid_acceptor(finalizer, grid, min_distance),
        prng=finalizer.prng,
        max_points=max_points,
        max_total_attempts=max_total_attempts,
    )


def blue_noise_cell_size(area: float, count: int) -> float:
    """Separation used to fit roughly ``count`` blue-noise points in ``area``."""
    return math.sqrt(area / (count * 2.0))


def blue_noise_positions(finalizer: PointFinalizer, count: int,
                         seed_attempts: Optional[int] = None) -> List[Vec3]:
    """
    Up to ``count`` blue-noise positions grown from a random zone point.

    Points stay ``cell_size`` apart and candidates spawn ``2 * cell_size`` from
    their parent, where ``cell_size = sqrt(area / (2 * count))``.
    """
    zone = finalizer.zone
    if count <= 0 or zone.is_degenerate:
        return []

    cell_size = blue_noise_cell_size(zone.area, count)
    grid = SpatialGrid(cell_size)

    return grow_frontier(
        _random_seeds(finalizer, seed_attempts),
        radius=cell_size * 2.0,
        accept=_grid_acceptor(finalizer, grid, cell_size),
        prng=finalizer.prng,
        max_points=count,
    )
