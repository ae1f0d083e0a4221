"""
Scatter generation facade.

ScatterGenerator binds a zone, settings, terrain and random generator so a
caller can run several samplers over the same zone. Every sampler has an
async twin that runs the work on a worker thread; callers await the full
result, nothing partial is exposed while generation is running.
"""

import asyncio
from typing import List, Optional, Sequence

from ..utils.random import SeedLike, ensure_prng
from .analysis import calculate_clustering_index
from .clusters import ClusterResult, compose_clusters
from .optimizer import calculate_actual_density, optimize_distribution
from .samplers import (
    generate_blue_noise_distribution,
    generate_dla_distribution,
    generate_flower_distribution,
    generate_tree_distribution,
)
from .terrain import NoTerrain, TerrainQuery
from .wang_tiles import DEFAULT_TILE_SET, WangTile, generate_geological_distribution
from .zone import ScatterPoint, ScatterSettings, ScatterZone


class ScatterGenerator:
    """
    Runs scatter samplers over one zone.

    The generator's PRNG advances across calls, so two generators built from
    the same seed produce the same sequence of results for the same sequence
    of calls. Concurrent async calls on one generator share that PRNG, so
    use one generator per concurrent task when results must be reproducible.
    """

    def __init__(self, zone: ScatterZone, settings: Optional[ScatterSettings] = None,
                 terrain: Optional[TerrainQuery] = None, seed: SeedLike = None):
        """
        Initialize the generator.

        Args:
            zone: Placement zone
            settings: Appearance settings; defaults when omitted
            terrain: Terrain query; no terrain when omitted
            seed: Seed or AleaPRNG instance
        """
        self.zone = zone
        self.settings = settings or ScatterSettings()
        self.terrain = terrain if terrain is not None else NoTerrain()
        self.prng = ensure_prng(seed)

    def _common(self):
        return dict(settings=self.settings, terrain=self.terrain, rng=self.prng)

    def tree_distribution(self, min_distance: float, relaxation: float = 0.5,
                          max_points: Optional[int] = None,
                          max_total_attempts: Optional[int] = None) -> List[ScatterPoint]:
        return generate_tree_distribution(
            self.zone, min_distance, relaxation=relaxation, max_points=max_points,
            max_total_attempts=max_total_attempts, **self._common())

    def blue_noise_distribution(self, count: int) -> List[ScatterPoint]:
        return generate_blue_noise_distribution(self.zone, count, **self._common())

    def dla_distribution(self, particle_count: int) -> List[ScatterPoint]:
        return generate_dla_distribution(self.zone, particle_count, **self._common())

    def geological_distribution(self, tile_set: Sequence[WangTile] = DEFAULT_TILE_SET) -> List[ScatterPoint]:
        return generate_geological_distribution(self.zone, tile_set=tile_set, **self._common())

    def flower_distribution(self, density: float, resolution: Optional[int] = None,
                            max_workers: Optional[int] = None) -> List[ScatterPoint]:
        return generate_flower_distribution(
            self.zone, density, resolution=resolution, max_workers=max_workers,
            **self._common())

    def clustered_distribution(self, cluster_count: int, points_per_cluster: int,
                               cluster_radius: float) -> List[ScatterPoint]:
        return self.clusters(cluster_count, points_per_cluster, cluster_radius).points

    def clusters(self, cluster_count: int, points_per_cluster: int,
                 cluster_radius: float) -> ClusterResult:
        return compose_clusters(self.zone, cluster_count, points_per_cluster,
                                cluster_radius, **self._common())

    def optimize(self, points: List[ScatterPoint], min_distance: float,
                 target_density: float) -> List[ScatterPoint]:
        return optimize_distribution(points, self.zone, min_distance, target_density,
                                     **self._common())

    def density(self, points: List[ScatterPoint]) -> float:
        return calculate_actual_density(points, self.zone)

    @staticmethod
    def clustering_index(points: List[ScatterPoint]) -> float:
        return calculate_clustering_index(points)

    # Async twins

    async def tree_distribution_async(self, min_distance: float, relaxation: float = 0.5,
                                      max_points: Optional[int] = None,
                                      max_total_attempts: Optional[int] = None) -> List[ScatterPoint]:
        return await asyncio.to_thread(self.tree_distribution, min_distance, relaxation,
                                       max_points, max_total_attempts)

    async def blue_noise_distribution_async(self, count: int) -> List[ScatterPoint]:
        return await asyncio.to_thread(self.blue_noise_distribution, count)

    async def dla_distribution_async(self, particle_count: int) -> List[ScatterPoint]:
        return await asyncio.to_thread(self.dla_distribution, particle_count)

    async def geological_distribution_async(
            self, tile_set: Sequence[WangTile] = DEFAULT_TILE_SET) -> List[ScatterPoint]:
        return await asyncio.to_thread(self.geological_distribution, tile_set)

    async def flower_distribution_async(self, density: float, resolution: Optional[int] = None,
                                        max_workers: Optional[int] = None) -> List[ScatterPoint]:
        return await asyncio.to_thread(self.flower_distribution, density, resolution, max_workers)

    async def clustered_distribution_async(self, cluster_count: int, points_per_cluster: int,
                                           cluster_radius: float) -> List[ScatterPoint]:
        return await asyncio.to_thread(self.clustered_distribution, cluster_count,
                                       points_per_cluster, cluster_radius)

    async def optimize_async(self, points: List[ScatterPoint], min_distance: float,
                             target_density: float) -> List[ScatterPoint]:
        return await asyncio.to_thread(self.optimize, points, min_distance, target_density)
