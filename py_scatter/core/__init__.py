"""
Core scatter generation functionality.
"""

from .alea_prng import AleaPRNG
from .geometry import Vec3, UP, DOWN
from .curves import ResponseCurve
from .zone import ScatterZone, ScatterSettings, ScatterPoint
from .terrain import TerrainHit, TerrainQuery, NoTerrain, FlatTerrain, HeightfieldTerrain
from .spatial_grid import SpatialGrid
from .finalizer import PointFinalizer, make_finalizer
from .samplers import (generate_tree_distribution, generate_blue_noise_distribution,
                       generate_dla_distribution, generate_flower_distribution)
from .wang_tiles import WangTile, DEFAULT_TILE_SET, generate_geological_distribution
from .clusters import ClusterPattern, ClusterResult, compose_clusters, generate_clustered_distribution
from .optimizer import optimize_distribution, calculate_actual_density
from .analysis import calculate_clustering_index, classify_pattern, ripleys_k
from .scatter import ScatterGenerator

__all__ = ['AleaPRNG', 'Vec3', 'UP', 'DOWN', 'ResponseCurve',
           'ScatterZone', 'ScatterSettings', 'ScatterPoint',
           'TerrainHit', 'TerrainQuery', 'NoTerrain', 'FlatTerrain', 'HeightfieldTerrain',
           'SpatialGrid', 'PointFinalizer', 'make_finalizer',
           'generate_tree_distribution', 'generate_blue_noise_distribution',
           'generate_dla_distribution', 'generate_flower_distribution',
           'WangTile', 'DEFAULT_TILE_SET', 'generate_geological_distribution',
           'ClusterPattern', 'ClusterResult', 'compose_clusters', 'generate_clustered_distribution',
           'optimize_distribution', 'calculate_actual_density',
           'calculate_clustering_index', 'classify_pattern', 'ripleys_k',
           'ScatterGenerator']
