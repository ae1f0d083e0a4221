"""Tests for zone, settings and point value objects."""

import math

import pytest
from pydantic import ValidationError

from py_scatter.core.alea_prng import AleaPRNG
from py_scatter.core.curves import ResponseCurve
from py_scatter.core.geometry import UP, Vec3
from py_scatter.core.zone import ScatterPoint, ScatterSettings, ScatterZone


class TestScatterZone:
    """Test ScatterZone construction and derived values."""

    def setup_method(self):
        """Set up a 10x20 zone centered at (5, 1, -5)."""
        self.zone = ScatterZone(center=Vec3(5.0, 1.0, -5.0), size=Vec3(10.0, 2.0, 20.0))

    def test_defaults(self):
        """Test default constraint values."""
        assert self.zone.normal == UP
        assert self.zone.slope == 0.0
        assert self.zone.min_height == -math.inf
        assert self.zone.max_height == math.inf
        assert self.zone.slope_falloff(0.0) == pytest.approx(1.0)
        assert self.zone.slope_falloff(1.0) == pytest.approx(0.0)

    def test_derived_values(self):
        """Test area and half extents."""
        assert self.zone.area == pytest.approx(200.0)
        assert self.zone.half_extents == (5.0, 10.0)
        assert not self.zone.is_degenerate

    def test_tuple_input_is_coerced(self):
        """Test that plain tuples validate into Vec3."""
        zone = ScatterZone(center=(0, 0, 0), size=(4, 0, 4))
        assert isinstance(zone.center, Vec3)
        assert zone.area == pytest.approx(16.0)

    def test_contains_is_inclusive(self):
        """Test horizontal bounds, edges included."""
        assert self.zone.contains(Vec3(0.0, 100.0, -15.0))
        assert self.zone.contains(Vec3(10.0, -100.0, 5.0))
        assert not self.zone.contains(Vec3(10.01, 0.0, 0.0))
        assert not self.zone.contains(Vec3(5.0, 0.0, 5.01))

    def test_random_position(self):
        """Test that random positions stay inside at the reference height."""
        prng = AleaPRNG("zone")
        for _ in range(200):
            position = self.zone.random_position(prng)
            assert self.zone.contains(position)
            assert position.y == 1.0

    def test_sub_zone(self):
        """Test that sub-zones keep constraints but take a new footprint."""
        zone = ScatterZone(center=Vec3(0, 0, 0), size=Vec3(50, 3, 50),
                           min_height=-1.0, max_height=1.0, slope=12.0)
        sub = zone.sub_zone(Vec3(10, 0, 10), 2.0)

        assert sub.center == Vec3(10, 0, 10)
        assert sub.size == Vec3(4.0, 3, 4.0)
        assert sub.min_height == -1.0
        assert sub.max_height == 1.0
        assert sub.slope == 12.0
        assert zone.center == Vec3(0, 0, 0)

    def test_degenerate_zone(self):
        """Test that zero-size zones are valid but degenerate."""
        zone = ScatterZone(center=Vec3(0, 0, 0), size=Vec3(0, 0, 10))
        assert zone.is_degenerate
        assert zone.area == 0.0

    def test_invalid_zones(self):
        """Test invariant violations."""
        with pytest.raises(ValidationError):
            ScatterZone(center=Vec3(0, 0, 0), size=Vec3(-1, 0, 1))
        with pytest.raises(ValidationError):
            ScatterZone(center=Vec3(0, 0, 0), size=Vec3(1, 0, 1),
                        slope_falloff=ResponseCurve.linear(0.0, 1.0, 2.0, 0.0))
        with pytest.raises(ValidationError):
            ScatterZone(center=Vec3(0, 0, 0), size=Vec3(1, 0, 1), min_height=5.0, max_height=1.0)

    def test_frozen(self):
        """Test that zones cannot be mutated."""
        with pytest.raises(ValidationError):
            self.zone.slope = 10.0

    def test_height_allowed(self):
        """Test the inclusive height band."""
        zone = ScatterZone(center=Vec3(0, 0, 0), size=Vec3(1, 0, 1), min_height=0.0, max_height=2.0)
        assert zone.height_allowed(0.0)
        assert zone.height_allowed(2.0)
        assert not zone.height_allowed(-0.1)
        assert not zone.height_allowed(2.1)


class TestScatterSettings:
    """Test ScatterSettings defaults and validation."""

    def test_defaults(self):
        """Test default appearance settings."""
        settings = ScatterSettings()

        assert settings.min_scale == 0.8
        assert settings.max_scale == 1.2
        assert settings.min_rotation == 0.0
        assert settings.max_rotation == 360.0
        assert settings.align_to_normal is True
        assert settings.random_rotation_weight == 0.3
        assert settings.jitter_strength == 0.5
        assert settings.density_falloff(0.5) == pytest.approx(0.5)

    def test_invalid_settings(self):
        """Test range and bound violations."""
        with pytest.raises(ValidationError):
            ScatterSettings(min_scale=2.0, max_scale=1.0)
        with pytest.raises(ValidationError):
            ScatterSettings(min_rotation=90.0, max_rotation=10.0)
        with pytest.raises(ValidationError):
            ScatterSettings(random_rotation_weight=1.5)
        with pytest.raises(ValidationError):
            ScatterSettings(jitter_strength=-0.1)


class TestScatterPoint:
    """Test the output record."""

    def test_immutable(self):
        """Test that points are frozen."""
        point = ScatterPoint(position=Vec3(1, 2, 3))
        with pytest.raises(AttributeError):
            point.scale = 2.0

    def test_defaults(self):
        """Test default point attributes."""
        point = ScatterPoint(position=Vec3(1, 2, 3))
        assert point.rotation == 0.0
        assert point.scale == 1.0
        assert point.normal == UP
