"""
Spatial pattern analysis for finished point sets.

``ripleys_k()`` is the plain estimator ``K(r)``. The clustering index averages
``K(r) / (pi * r^2)`` over five radii (10% to 50% of the largest pairwise
distance), dividing each K by its expectation under complete spatial
randomness:

- about 1: consistent with a random (Poisson) pattern
- above 1: clustered
- below 1: regular / inhibited, as produced by Poisson-disk sampling

All distances and the reference area are measured on the horizontal X/Z plane.
"""

from typing import List, Sequence

import numpy as np
import structlog
from scipy.spatial import ConvexHull
from scipy.spatial.distance import pdist
from sklearn.neighbors import KDTree

from .zone import ScatterPoint

logger = structlog.get_logger()

RIPLEY_SCALES = (0.1, 0.2, 0.3, 0.4, 0.5)
PDIST_LIMIT = 2000


def _horizontal(points: Sequence[ScatterPoint]) -> np.ndarray:
    return np.array([[p.position.x, p.position.z] for p in points], dtype=float).reshape(-1, 2)


def point_cloud_area(points: Sequence[ScatterPoint]) -> float:
    """Area of the X/Z bounding box; 0 for fewer than two points."""
    if len(points) < 2:
        return 0.0
    xz = _horizontal(points)
    extent = xz.max(axis=0) - xz.min(axis=0)
    return float(extent[0] * extent[1])


def max_pairwise_distance(xz: np.ndarray) -> float:
    """Largest horizontal distance between any two points."""
    if len(xz) < 2:
        return 0.0
    if len(xz) > PDIST_LIMIT:
        # Farthest pair always lies on the hull; QJ joggles degenerate input
        hull = ConvexHull(xz, qhull_options="QJ")
        xz = xz[hull.vertices]
    return float(pdist(xz).max())


def _neighbor_counts(tree: KDTree, xz: np.ndarray, radius: float) -> np.ndarray:
    """Neighbors within ``radius``, not counting the point itself or coincident points."""
    within = tree.query_radius(xz, r=radius, count_only=True)
    coincident = tree.query_radius(xz, r=0.0, count_only=True)
    return within - coincident


def _k_estimate(tree: KDTree, xz: np.ndarray, radius: float, area: float) -> float:
    n = len(xz)
    return float(_neighbor_counts(tree, xz, radius).sum() / (n * (n / area)))


def ripleys_k(points: Sequence[ScatterPoint], radius: float) -> float:
    """
    Ripley's K estimate at ``radius``.

    ``K(r) = sum_i |{j != i : d(i, j) <= r}| / (n * lambda)`` with
    ``lambda = n / area`` over the X/Z bounding box. Returns 0 for degenerate
    input.
    """
    n = len(points)
    area = point_cloud_area(points)
    if n < 2 or area <= 0:
        return 0.0

    xz = _horizontal(points)
    return _k_estimate(KDTree(xz), xz, radius, area)


def calculate_clustering_index(points: List[ScatterPoint]) -> float:
    """
    Multi-scale clustering index (see module docstring).

    The index is measured against the points' own bounding box, so a single
    compact cluster scores below 1: inside that box it is evenly filled.
    Clustering registers once groups are separated by empty space within the
    extent of the set.

    Returns 0 for fewer than two points or a zero-area point cloud.
    """
    n = len(points)
    if n < 2:
        return 0.0

    area = point_cloud_area(points)
    xz = _horizontal(points)
    max_distance = max_pairwise_distance(xz)
    if area <= 0 or max_distance <= 0:
        logger.debug("Degenerate point cloud for clustering index", points=n, area=area)
        return 0.0

    tree = KDTree(xz)

    ratios = []
    for scale in RIPLEY_SCALES:
        radius = max_distance * scale
        ratios.append(_k_estimate(tree, xz, radius, area) / (np.pi * radius ** 2))

    index = float(np.mean(ratios))
    logger.debug("Clustering index computed", points=n, index=index)
    return index


def classify_pattern(index: float, tolerance: float = 0.15) -> str:
    """Label a clustering index as "clustered", "random" or "regular"."""
    if index > 1.0 + tolerance:
        return "clustered"
    if index < 1.0 - tolerance:
        return "regular"
    return "random"
