"""Vector and rotation primitives shared by the samplers."""

import math
from typing import NamedTuple

import numpy as np
from scipy.spatial.transform import Rotation, Slerp


class Vec3(NamedTuple):
    """Immutable 3D vector. Y is up; X/Z span the horizontal plane."""
    x: float
    y: float
    z: float

    def __add__(self, other):
        return Vec3(self.x + other[0], self.y + other[1], self.z + other[2])

    def __sub__(self, other):
        return Vec3(self.x - other[0], self.y - other[1], self.z - other[2])

    def scaled(self, factor: float) -> "Vec3":
        return Vec3(self.x * factor, self.y * factor, self.z * factor)

    def length(self) -> float:
        return math.sqrt(self.x * self.x + self.y * self.y + self.z * self.z)

    def normalized(self) -> "Vec3":
        length = self.length()
        if length < 1e-12:
            return UP
        return self.scaled(1.0 / length)

    def with_y(self, y: float) -> "Vec3":
        return Vec3(self.x, y, self.z)


UP = Vec3(0.0, 1.0, 0.0)
DOWN = Vec3(0.0, -1.0, 0.0)


def distance(a, b) -> float:
    """Euclidean distance between two 3D points."""
    dx = a[0] - b[0]
    dy = a[1] - b[1]
    dz = a[2] - b[2]
    return math.sqrt(dx * dx + dy * dy + dz * dz)


def angle_between(a, b) -> float:
    """Angle in degrees between two vectors."""
    va = np.asarray(a, dtype=float)
    vb = np.asarray(b, dtype=float)
    denom = np.linalg.norm(va) * np.linalg.norm(vb)
    if denom < 1e-12:
        return 0.0
    cos_angle = np.clip(np.dot(va, vb) / denom, -1.0, 1.0)
    return float(np.degrees(np.arccos(cos_angle)))


def from_to_rotation(source, target) -> Rotation:
    """
    Shortest rotation taking ``source`` onto ``target``.

    Antiparallel vectors rotate half a turn about an axis perpendicular to
    ``source``.
    """
    a = np.asarray(source, dtype=float)
    b = np.asarray(target, dtype=float)
    a = a / np.linalg.norm(a)
    b = b / np.linalg.norm(b)

    axis = np.cross(a, b)
    sin_angle = np.linalg.norm(axis)
    cos_angle = float(np.clip(np.dot(a, b), -1.0, 1.0))

    if sin_angle < 1e-9:
        if cos_angle > 0:
            return Rotation.identity()
        perpendicular = np.cross(a, [1.0, 0.0, 0.0])
        if np.linalg.norm(perpendicular) < 1e-9:
            perpendicular = np.cross(a, [0.0, 0.0, 1.0])
        perpendicular /= np.linalg.norm(perpendicular)
        return Rotation.from_rotvec(perpendicular * math.pi)

    angle = math.atan2(sin_angle, cos_angle)
    return Rotation.from_rotvec(axis / sin_angle * angle)


def heading_rotation(degrees: float) -> Rotation:
    """Rotation about the up axis."""
    return Rotation.from_euler("y", degrees, degrees=True)


def blend_rotations(a: Rotation, b: Rotation, weight: float) -> Rotation:
    """Spherical interpolation from ``a`` (weight 0) to ``b`` (weight 1)."""
    weight = min(max(weight, 0.0), 1.0)
    slerp = Slerp([0.0, 1.0], Rotation.concatenate([a, b]))
    return slerp([weight])[0]


def heading_of(rotation: Rotation) -> float:
    """Yaw of a rotation in degrees, normalized to [0, 360)."""
    yaw = float(rotation.as_euler("YXZ", degrees=True)[0]) % 360.0
    # -1e-15 % 360 rounds to 360.0
    return 0.0 if yaw >= 360.0 else yaw
