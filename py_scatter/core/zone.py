"""
Scatter value objects.

ScatterZone and ScatterSettings are caller-supplied configuration, validated on
construction and immutable afterwards. ScatterPoint is the engine's output
record.
"""

import math
from dataclasses import dataclass

from pydantic import BaseModel, ConfigDict, Field, model_validator

from .alea_prng import AleaPRNG
from .curves import ResponseCurve
from .geometry import UP, Vec3


def _default_falloff() -> ResponseCurve:
    return ResponseCurve.linear(0.0, 1.0, 1.0, 0.0)


class ScatterZone(BaseModel):
    """Bounded placement domain with optional height and slope constraints."""

    model_config = ConfigDict(arbitrary_types_allowed=True, frozen=True)

    center: Vec3 = Field(description="Center of the zone")
    size: Vec3 = Field(description="Extents on X/Z; Y is the reference height extent")
    normal: Vec3 = Field(default=UP, description="Reference surface normal")
    slope: float = Field(default=0.0, description="Reference slope in degrees")
    slope_falloff: ResponseCurve = Field(
        default_factory=_default_falloff,
        description="Maps normalized slope (0..1 for 0..90 degrees) to acceptance weight",
    )
    min_height: float = Field(default=-math.inf, description="Lowest allowed world Y")
    max_height: float = Field(default=math.inf, description="Highest allowed world Y")

    @model_validator(mode="after")
    def _check_invariants(self):
        if min(self.size) < 0:
            raise ValueError(f"Zone size components must be >= 0, got {tuple(self.size)}")
        low, high = self.slope_falloff.domain
        if low < 0.0 or high > 1.0:
            raise ValueError(f"Slope falloff domain must lie within [0, 1], got [{low}, {high}]")
        if self.min_height > self.max_height:
            raise ValueError("min_height must not exceed max_height")
        return self

    @property
    def half_extents(self):
        return self.size.x / 2.0, self.size.z / 2.0

    @property
    def area(self) -> float:
        return self.size.x * self.size.z

    @property
    def is_degenerate(self) -> bool:
        return self.size.x <= 0 or self.size.z <= 0

    def contains(self, position) -> bool:
        """Inclusive horizontal bounds test."""
        half_x, half_z = self.half_extents
        return (self.center.x - half_x <= position[0] <= self.center.x + half_x
                and self.center.z - half_z <= position[2] <= self.center.z + half_z)

    def height_allowed(self, y: float) -> bool:
        return self.min_height <= y <= self.max_height

    def random_position(self, prng: AleaPRNG) -> Vec3:
        """Uniform position in the zone at the reference height."""
        half_x, half_z = self.half_extents
        return Vec3(
            prng.uniform(self.center.x - half_x, self.center.x + half_x),
            self.center.y,
            prng.uniform(self.center.z - half_z, self.center.z + half_z),
        )

    def sub_zone(self, center, radius: float) -> "ScatterZone":
        """Square zone of side ``2 * radius`` sharing this zone's constraints."""
        return self.model_copy(update={
            "center": Vec3(*center),
            "size": Vec3(radius * 2.0, self.size.y, radius * 2.0),
        })


class ScatterSettings(BaseModel):
    """Per-instance appearance sampling; read-only during generation."""

    model_config = ConfigDict(arbitrary_types_allowed=True, frozen=True)

    min_scale: float = Field(default=0.8, description="Minimum scale")
    max_scale: float = Field(default=1.2, description="Maximum scale")
    min_rotation: float = Field(default=0.0, description="Minimum heading in degrees")
    max_rotation: float = Field(default=360.0, description="Maximum heading in degrees")
    align_to_normal: bool = Field(default=True, description="Conform rotation to the terrain normal")
    random_rotation_weight: float = Field(
        default=0.3, ge=0.0, le=1.0, description="Blend from normal-aligned (0) to random heading (1)"
    )
    density_falloff: ResponseCurve = Field(
        default_factory=_default_falloff, description="Maps a uniform draw to a density weight"
    )
    jitter_strength: float = Field(default=0.5, ge=0.0, description="Positional jitter multiplier")

    @model_validator(mode="after")
    def _check_ranges(self):
        if self.min_scale > self.max_scale:
            raise ValueError("min_scale must not exceed max_scale")
        if self.min_rotation > self.max_rotation:
            raise ValueError("min_rotation must not exceed max_rotation")
        return self


@dataclass(frozen=True)
class ScatterPoint:
    """One placed instance."""
    position: Vec3
    rotation: float = 0.0
    scale: float = 1.0
    density: float = 1.0
    slope: float = 0.0
    normal: Vec3 = UP
