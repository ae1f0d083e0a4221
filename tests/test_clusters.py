"""Tests for the cluster composer."""

import math

import pytest

from py_scatter.core.alea_prng import AleaPRNG
from py_scatter.core.clusters import (
    ClusterPattern,
    compose_clusters,
    gaussian_offsets,
    generate_clustered_distribution,
    ring_offsets,
    spiral_offsets,
)
from py_scatter.core.geometry import Vec3
from py_scatter.core.zone import ScatterZone


class TestOffsets:
    """Test the sub-pattern offset generators."""

    def test_ring_width(self):
        """Test that ring offsets stay within 20% of the radius."""
        for dx, dz in ring_offsets(200, 5.0, AleaPRNG("ring")):
            assert 4.0 <= math.hypot(dx, dz) <= 6.0

    def test_spiral_grows_outwards(self):
        """Test that spiral offsets stay within radius plus jitter."""
        offsets = list(spiral_offsets(40, 4.0, AleaPRNG("spiral")))

        assert len(offsets) == 40
        assert math.hypot(*offsets[0]) <= math.hypot(0.5, 0.5)
        for dx, dz in offsets:
            assert math.hypot(dx, dz) <= 4.0 + math.hypot(0.5, 0.5)

    def test_gaussian_concentrates(self):
        """Test that most Gaussian offsets fall within two radii."""
        offsets = list(gaussian_offsets(500, 1.0, AleaPRNG("gauss")))
        inside = sum(1 for dx, dz in offsets if math.hypot(dx, dz) <= 2.0)

        assert inside / len(offsets) > 0.8


class TestComposeClusters:
    """Test clustered distributions."""

    def setup_method(self):
        """Set up a 40x40 zone."""
        self.zone = ScatterZone(center=Vec3(0, 0, 0), size=Vec3(40, 0, 40))

    def test_five_by_ten_scenario(self):
        """Test 5 clusters of 10 points with radius 2."""
        result = compose_clusters(self.zone, 5, 10, 2.0, rng="clusters")

        assert len(result.clusters) <= 5
        assert len(result.points) <= 50
        for cluster in result.clusters:
            assert cluster.pattern in ClusterPattern
            assert cluster.zone.size.x == pytest.approx(4.0)
            for point in cluster.points:
                assert cluster.zone.contains(point.position)
                assert self.zone.contains(point.position)

    def test_flat_list_matches(self):
        """Test that the flat list equals the per-cluster points."""
        result = compose_clusters(self.zone, 4, 8, 3.0, rng="flat")
        points = generate_clustered_distribution(self.zone, 4, 8, 3.0, rng="flat")
        assert points == result.points

    def test_clusters_near_edge_stay_in_zone(self):
        """Test that clusters in a small zone drop out-of-bounds offsets."""
        zone = ScatterZone(center=Vec3(0, 0, 0), size=Vec3(6, 0, 6))
        points = generate_clustered_distribution(zone, 3, 20, 3.0, rng="edge")

        assert len(points) <= 60
        assert all(zone.contains(p.position) for p in points)

    def test_degenerate_input(self):
        """Test zero counts and radius."""
        assert generate_clustered_distribution(self.zone, 0, 10, 2.0) == []
        assert generate_clustered_distribution(self.zone, 5, 0, 2.0) == []
        assert generate_clustered_distribution(self.zone, 5, 10, 0.0) == []
