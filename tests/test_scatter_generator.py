"""Tests for the ScatterGenerator facade and its async twins."""

import numpy as np
import pytest

from py_scatter import ScatterGenerator, ScatterSettings, ScatterZone, Vec3
from py_scatter.core.curves import ResponseCurve
from py_scatter.core.terrain import HeightfieldTerrain


@pytest.fixture
def zone():
    """20x20 zone at the origin."""
    return ScatterZone(center=Vec3(0, 0, 0), size=Vec3(20, 0, 20))


@pytest.fixture
def banded_zone():
    """20x20 zone that only admits heights in [-1, 2]."""
    return ScatterZone(center=Vec3(0, 0, 0), size=Vec3(20, 0, 20),
                       min_height=-1.0, max_height=2.0)


@pytest.fixture
def ramp():
    """Heightfield rising 0.2 per unit of X over [-15, 15]."""
    xs = np.arange(-15.0, 16.0)
    heights = np.repeat((0.2 * xs)[:, None], len(xs), axis=1)
    return HeightfieldTerrain(heights, origin_x=-15.0, origin_z=-15.0, cell_size=1.0)


def run_all(generator):
    return {
        "tree": generator.tree_distribution(1.5),
        "blue_noise": generator.blue_noise_distribution(60),
        "dla": generator.dla_distribution(20),
        "geological": generator.geological_distribution(),
        "flower": generator.flower_distribution(1.0, resolution=12),
        "clustered": generator.clustered_distribution(4, 10, 2.0),
    }


class TestContainment:
    """Test that every sampler respects the zone on sloped terrain."""

    def test_all_samplers(self, banded_zone, ramp):
        """Test horizontal bounds and the height band for each sampler."""
        settings = ScatterSettings(density_falloff=ResponseCurve.constant(0.0))
        generator = ScatterGenerator(banded_zone, settings, ramp, seed="contain")

        for name, points in run_all(generator).items():
            for point in points:
                assert banded_zone.contains(point.position), name
                assert -1.0 <= point.position.y <= 2.0, name
                assert point.slope == pytest.approx(np.degrees(np.arctan(0.2)), abs=1e-6), name

    def test_points_sit_on_terrain(self, zone, ramp):
        """Test that placed points are snapped to the heightfield."""
        generator = ScatterGenerator(zone, terrain=ramp, seed="snap")

        for point in generator.blue_noise_distribution(30):
            assert point.position.y == pytest.approx(ramp.height_at(point.position.x, point.position.z))


class TestScatterGenerator:
    """Test facade behavior."""

    def test_seed_reproducibility(self, zone):
        """Test that equal seeds give equal call sequences."""
        first = run_all(ScatterGenerator(zone, seed=99))
        second = run_all(ScatterGenerator(zone, seed=99))
        assert first == second

    def test_generator_advances(self, zone):
        """Test that repeated calls draw fresh randomness."""
        generator = ScatterGenerator(zone, seed="advance")
        assert generator.blue_noise_distribution(20) != generator.blue_noise_distribution(20)

    def test_clusters_and_analysis(self, zone):
        """Test cluster results, optimization and metrics through the facade."""
        generator = ScatterGenerator(zone, seed="facade")
        result = generator.clusters(3, 15, 2.0)

        assert len(result.clusters) <= 3
        optimized = generator.optimize(result.points, 0.5, 0.1)
        assert generator.density(optimized) == pytest.approx(len(optimized) / 400.0)
        assert generator.clustering_index(optimized) >= 0.0

    def test_empty_zone(self):
        """Test that every sampler returns nothing for a zero-area zone."""
        generator = ScatterGenerator(ScatterZone(center=Vec3(0, 0, 0), size=Vec3(0, 0, 0)))
        assert all(points == [] for points in run_all(generator).values())
        assert generator.optimize([], 1.0, 1.0) == []


class TestAsyncGeneration:
    """Test the awaitable twins."""

    @pytest.mark.asyncio
    async def test_async_matches_sync(self, zone):
        """Test that async twins return the same points as the sync calls."""
        sync = ScatterGenerator(zone, seed="twin")
        asynchronous = ScatterGenerator(zone, seed="twin")

        assert await asynchronous.tree_distribution_async(2.0) == sync.tree_distribution(2.0)
        assert (await asynchronous.blue_noise_distribution_async(30)
                == sync.blue_noise_distribution(30))
        assert await asynchronous.dla_distribution_async(10) == sync.dla_distribution(10)
        assert (await asynchronous.geological_distribution_async()
                == sync.geological_distribution())
        assert (await asynchronous.flower_distribution_async(1.0, resolution=8)
                == sync.flower_distribution(1.0, resolution=8))
        assert (await asynchronous.clustered_distribution_async(3, 5, 1.5)
                == sync.clustered_distribution(3, 5, 1.5))

    @pytest.mark.asyncio
    async def test_async_optimize(self, zone):
        """Test the async optimizer."""
        generator = ScatterGenerator(zone, seed="opt")
        points = await generator.blue_noise_distribution_async(40)
        optimized = await generator.optimize_async(points, 3.0, 0.0)

        assert len(optimized) <= len(points)

    @pytest.mark.asyncio
    async def test_async_empty_request(self, zone):
        """Test that zero requests complete with empty results."""
        generator = ScatterGenerator(zone, seed="zero")
        assert await generator.blue_noise_distribution_async(0) == []
        assert await generator.dla_distribution_async(0) == []
