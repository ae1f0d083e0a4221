"""
Point finalization.

Turns raw horizontal positions into ScatterPoint records: probes the terrain,
snaps to the surface, derives the heading from the surface normal blended with
a random heading, and samples scale and density weight.
"""

from typing import Optional

from ..config import settings as engine_settings
from .alea_prng import AleaPRNG
from .geometry import (
    DOWN,
    UP,
    Vec3,
    blend_rotations,
    from_to_rotation,
    heading_of,
    heading_rotation,
)
from .spatial_grid import SpatialGrid
from .terrain import NoTerrain, TerrainHit, TerrainQuery
from .zone import ScatterPoint, ScatterSettings, ScatterZone
from ..utils.random import SeedLike, ensure_prng


class PointFinalizer:
    """Validates candidates against a zone and builds ScatterPoints."""

    def __init__(self, zone: ScatterZone, settings: ScatterSettings,
                 terrain: TerrainQuery, prng: AleaPRNG,
                 probe_height: Optional[float] = None,
                 acceptance_floor: Optional[float] = None):
        self.zone = zone
        self.settings = settings
        self.terrain = terrain
        self.prng = prng
        self.probe_height = engine_settings.probe_height if probe_height is None else probe_height
        self.acceptance_floor = (engine_settings.acceptance_floor
                                 if acceptance_floor is None else acceptance_floor)

    def with_zone(self, zone: ScatterZone) -> "PointFinalizer":
        """Same terrain, settings and generator over a different zone."""
        return PointFinalizer(zone, self.settings, self.terrain, self.prng,
                              self.probe_height, self.acceptance_floor)

    def probe(self, position) -> TerrainHit:
        origin = Vec3(position[0], position[1] + self.probe_height, position[2])
        return self.terrain.query(origin, DOWN)

    def validate(self, position, grid: Optional[SpatialGrid] = None,
                 min_distance: float = 0.0) -> Optional[Vec3]:
        """
        Check a candidate against bounds, height, slope and separation.

        Args:
            position: Candidate position
            grid: Grid of already accepted points, or None to skip separation
            min_distance: Separation enforced against ``grid``

        Returns:
            The candidate at its measured (terrain) height, or None if rejected
        """
        position = Vec3(*position)
        if not self.zone.contains(position):
            return None

        hit = self.probe(position)
        height = hit.point.y if hit.hit else position.y
        if not self.zone.height_allowed(height):
            return None

        if hit.hit and self.zone.slope_falloff(hit.slope / 90.0) < self.acceptance_floor:
            return None

        measured = position.with_y(height)
        if grid is not None and grid.overlaps(measured, min_distance):
            return None

        return measured

    def finalize(self, position) -> ScatterPoint:
        """Build the ScatterPoint for a raw position."""
        position = Vec3(*position)
        normal = Vec3(*self.zone.normal).normalized()
        slope = self.zone.slope

        hit = self.probe(position)
        if hit.hit:
            normal = hit.normal
            slope = hit.slope
            position = hit.point

        settings = self.settings
        base_heading = self.prng.uniform(settings.min_rotation, settings.max_rotation)
        if settings.align_to_normal:
            rotation = heading_of(blend_rotations(
                from_to_rotation(UP, normal),
                heading_rotation(base_heading),
                settings.random_rotation_weight,
            ))
        else:
            rotation = heading_of(heading_rotation(base_heading))

        scale = self.prng.uniform(settings.min_scale, settings.max_scale)
        density = settings.density_falloff(self.prng.random())

        return ScatterPoint(
            position=position,
            rotation=rotation,
            scale=scale,
            density=density,
            slope=slope,
            normal=normal,
        )

    def accept(self, position) -> Optional[ScatterPoint]:
        """Finalize a position and keep it only if it lands inside the zone's height band."""
        point = self.finalize(position)
        if not self.zone.contains(point.position) or not self.zone.height_allowed(point.position.y):
            return None
        return point


def make_finalizer(zone: ScatterZone, settings: Optional[ScatterSettings] = None,
                   terrain: Optional[TerrainQuery] = None,
                   rng: SeedLike = None) -> PointFinalizer:
    """Finalizer with defaults filled in: default settings, no terrain, default seed."""
    return PointFinalizer(
        zone,
        settings or ScatterSettings(),
        terrain if terrain is not None else NoTerrain(),
        ensure_prng(rng),
    )
