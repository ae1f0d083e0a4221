"""Tests for vector helpers, rotations and response curves."""

import numpy as np
import pytest

from py_scatter.core.curves import ResponseCurve
from py_scatter.core.geometry import (
    UP,
    Vec3,
    angle_between,
    blend_rotations,
    distance,
    from_to_rotation,
    heading_of,
    heading_rotation,
)


class TestVec3:
    """Test Vec3 arithmetic."""

    def test_arithmetic(self):
        """Test addition, subtraction and scaling."""
        a = Vec3(1.0, 2.0, 3.0)
        b = Vec3(0.5, 0.5, 0.5)

        assert a + b == Vec3(1.5, 2.5, 3.5)
        assert a - b == Vec3(0.5, 1.5, 2.5)
        assert b.scaled(4.0) == Vec3(2.0, 2.0, 2.0)

    def test_normalized(self):
        """Test normalization, including the zero vector."""
        v = Vec3(3.0, 0.0, 4.0).normalized()
        assert v.length() == pytest.approx(1.0)
        assert Vec3(0.0, 0.0, 0.0).normalized() == UP

    def test_with_y(self):
        """Test replacing the height component."""
        assert Vec3(1.0, 2.0, 3.0).with_y(9.0) == Vec3(1.0, 9.0, 3.0)

    def test_distance_is_3d(self):
        """Test that distance includes the vertical axis."""
        assert distance((0, 0, 0), (0, 3, 4)) == pytest.approx(5.0)

    def test_angle_between(self):
        """Test angles between vectors."""
        assert angle_between(UP, UP) == pytest.approx(0.0)
        assert angle_between(UP, (1, 0, 0)) == pytest.approx(90.0)
        assert angle_between(UP, (0, -1, 0)) == pytest.approx(180.0)


class TestRotations:
    """Test rotation construction and heading extraction."""

    def test_from_to_rotation_maps_source_to_target(self):
        """Test that the rotation carries the source onto the target."""
        target = Vec3(1.0, 1.0, 0.0).normalized()
        rotated = from_to_rotation(UP, target).apply(np.array(UP))

        np.testing.assert_allclose(rotated, np.array(target), atol=1e-9)

    def test_from_to_rotation_parallel_and_antiparallel(self):
        """Test degenerate axis cases."""
        identity = from_to_rotation(UP, UP)
        np.testing.assert_allclose(identity.apply([0.0, 1.0, 0.0]), [0.0, 1.0, 0.0], atol=1e-9)

        flipped = from_to_rotation(UP, (0.0, -1.0, 0.0))
        np.testing.assert_allclose(flipped.apply([0.0, 1.0, 0.0]), [0.0, -1.0, 0.0], atol=1e-9)

    def test_heading_round_trip(self):
        """Test that heading_of() recovers a pure yaw."""
        for degrees in (0.0, 45.0, 135.0, 270.0, 359.0):
            assert heading_of(heading_rotation(degrees)) == pytest.approx(degrees, abs=1e-6)

    def test_heading_range(self):
        """Test that headings are normalized to [0, 360)."""
        for degrees in (-90.0, 360.0, 720.0, -1e-12):
            heading = heading_of(heading_rotation(degrees))
            assert 0.0 <= heading < 360.0

    def test_blend_endpoints(self):
        """Test that blending returns the endpoints at weights 0 and 1."""
        a = heading_rotation(10.0)
        b = heading_rotation(80.0)

        assert heading_of(blend_rotations(a, b, 0.0)) == pytest.approx(10.0, abs=1e-6)
        assert heading_of(blend_rotations(a, b, 1.0)) == pytest.approx(80.0, abs=1e-6)
        assert heading_of(blend_rotations(a, b, 0.5)) == pytest.approx(45.0, abs=1e-6)


class TestResponseCurve:
    """Test piecewise-linear response curves."""

    def test_linear_interpolation(self):
        """Test evaluation inside the keyframe range."""
        curve = ResponseCurve.linear(0.0, 1.0, 1.0, 0.0)

        assert curve(0.0) == pytest.approx(1.0)
        assert curve(0.25) == pytest.approx(0.75)
        assert curve(1.0) == pytest.approx(0.0)

    def test_clamping(self):
        """Test that inputs outside the range clamp to the end values."""
        curve = ResponseCurve([(0.2, 0.5), (0.8, 1.0)])

        assert curve(-5.0) == pytest.approx(0.5)
        assert curve(5.0) == pytest.approx(1.0)
        assert curve.domain == (0.2, 0.8)

    def test_constant(self):
        """Test a constant curve."""
        curve = ResponseCurve.constant(0.3)
        assert all(curve(t) == pytest.approx(0.3) for t in np.linspace(-1, 2, 7))

    def test_keyframes_are_sorted(self):
        """Test that keyframes given out of order are sorted."""
        curve = ResponseCurve([(1.0, 0.0), (0.0, 1.0)])
        assert curve == ResponseCurve.linear(0.0, 1.0, 1.0, 0.0)

    def test_invalid_keyframes(self):
        """Test rejection of empty and duplicate-time keyframes."""
        with pytest.raises(ValueError):
            ResponseCurve([])
        with pytest.raises(ValueError):
            ResponseCurve([(0.5, 1.0), (0.5, 0.0)])

    def test_hashable(self):
        """Test that equal curves hash equally."""
        assert hash(ResponseCurve.constant(1.0)) == hash(ResponseCurve.constant(1.0))
