"""
Clustered scatter.

Cluster centers come from blue noise; each cluster is filled with one of three
sub-patterns picked at random:

- Gaussian: Box-Muller radial falloff around the center
- Ring: annulus of width 20% of the cluster radius
- Spiral: Archimedean spiral with four turns and light jitter
"""

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Dict, Iterator, List, Optional, Tuple

import structlog

from .alea_prng import AleaPRNG
from .finalizer import make_finalizer
from .frontier import blue_noise_positions
from .geometry import Vec3
from .terrain import TerrainQuery
from .zone import ScatterPoint, ScatterSettings, ScatterZone
from ..utils.random import SeedLike

logger = structlog.get_logger()

RING_WIDTH_FRACTION = 0.2
SPIRAL_TURNS_ANGLE = math.pi * 8.0
SPIRAL_JITTER = 0.5

Offset = Tuple[float, float]


class ClusterPattern(str, Enum):
    """Sub-pattern used to fill a cluster."""

    GAUSSIAN = "gaussian"
    RING = "ring"
    SPIRAL = "spiral"


def gaussian_offsets(count: int, radius: float, prng: AleaPRNG) -> Iterator[Offset]:
    """Box-Muller offsets with standard-normal radial falloff scaled by ``radius``."""
    for _ in range(count):
        u1 = max(prng.random(), 1e-12)
        u2 = prng.random()
        r = radius * math.sqrt(-2.0 * math.log(u1))
        theta = 2.0 * math.pi * u2
        yield r * math.cos(theta), r * math.sin(theta)


def ring_offsets(count: int, radius: float, prng: AleaPRNG) -> Iterator[Offset]:
    width = radius * RING_WIDTH_FRACTION
    for _ in range(count):
        angle = prng.angle()
        r = radius + prng.uniform(-width, width)
        yield r * math.cos(angle), r * math.sin(angle)


def spiral_offsets(count: int, radius: float, prng: AleaPRNG) -> Iterator[Offset]:
    for i in range(count):
        t = i / count
        angle = t * SPIRAL_TURNS_ANGLE
        r = t * radius
        yield (r * math.cos(angle) + prng.uniform(-SPIRAL_JITTER, SPIRAL_JITTER),
               r * math.sin(angle) + prng.uniform(-SPIRAL_JITTER, SPIRAL_JITTER))


PATTERN_OFFSETS: Dict[ClusterPattern, Callable[[int, float, AleaPRNG], Iterator[Offset]]] = {
    ClusterPattern.GAUSSIAN: gaussian_offsets,
    ClusterPattern.RING: ring_offsets,
    ClusterPattern.SPIRAL: spiral_offsets,
}


@dataclass
class Cluster:
    """One generated cluster and the points assigned to it."""
    center: Vec3
    pattern: ClusterPattern
    zone: ScatterZone
    points: List[ScatterPoint] = field(default_factory=list)


@dataclass
class ClusterResult:
    clusters: List[Cluster] = field(default_factory=list)

    @property
    def points(self) -> List[ScatterPoint]:
        return [point for cluster in self.clusters for point in cluster.points]


def compose_clusters(zone: ScatterZone, cluster_count: int, points_per_cluster: int,
                     cluster_radius: float, settings: Optional[ScatterSettings] = None,
                     terrain: Optional[TerrainQuery] = None,
                     rng: SeedLike = None) -> ClusterResult:
    """
    Place cluster centers and fill each with a random sub-pattern.

    Offsets are kept only if they fall inside both the cluster's sub-zone and
    the parent zone.
    """
    result = ClusterResult()
    finalizer = make_finalizer(zone, settings, terrain, rng)
    if cluster_count <= 0 or points_per_cluster <= 0 or cluster_radius <= 0:
        return result

    prng = finalizer.prng
    centers = blue_noise_positions(finalizer, cluster_count)
    patterns = list(ClusterPattern)

    for center in centers:
        sub_zone = zone.sub_zone(center, cluster_radius)
        pattern = prng.choice(patterns)
        cluster = Cluster(center=center, pattern=pattern, zone=sub_zone)
        cluster_finalizer = finalizer.with_zone(sub_zone)

        for dx, dz in PATTERN_OFFSETS[pattern](points_per_cluster, cluster_radius, prng):
            position = Vec3(center.x + dx, center.y, center.z + dz)
            if not sub_zone.contains(position) or not zone.contains(position):
                continue
            point = cluster_finalizer.accept(position)
            if point is not None:
                cluster.points.append(point)

        result.clusters.append(cluster)
        logger.debug("Cluster filled", pattern=pattern.value, points=len(cluster.points))

    logger.info("Clustered distribution complete", clusters=len(result.clusters),
                points=len(result.points))
    return result


def generate_clustered_distribution(zone: ScatterZone, cluster_count: int,
                                    points_per_cluster: int, cluster_radius: float,
                                    settings: Optional[ScatterSettings] = None,
                                    terrain: Optional[TerrainQuery] = None,
                                    rng: SeedLike = None) -> List[ScatterPoint]:
    """Flat list of points from compose_clusters()."""
    return compose_clusters(zone, cluster_count, points_per_cluster, cluster_radius,
                            settings, terrain, rng).points
