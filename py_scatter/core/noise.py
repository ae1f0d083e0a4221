"""
Layered noise fields for density-threshold sampling.

Four Perlin layers (frequencies 1, 2, 4, 8 with halving amplitudes) are summed
and blended 30% towards a Worley field, giving patchy meadows with soft
clearings around the Worley feature points.
"""

import numpy as np
import structlog
from perlin_noise import PerlinNoise

from .alea_prng import AleaPRNG

logger = structlog.get_logger()

LAYER_FREQUENCIES = (1.0, 2.0, 4.0, 8.0)
LAYER_AMPLITUDES = (0.5, 0.25, 0.125, 0.0625)
WORLEY_BLEND = 0.3
WORLEY_FEATURE_POINTS = 16


def worley_noise(resolution: int, prng: AleaPRNG,
                 feature_points: int = WORLEY_FEATURE_POINTS) -> np.ndarray:
    """
    Distance-to-nearest-feature field normalized to [0, 1].

    Distances are divided by 10% of the resolution and clamped.
    """
    features = np.array([
        [prng.uniform(0, resolution), prng.uniform(0, resolution)]
        for _ in range(feature_points)
    ])

    xs, ys = np.meshgrid(np.arange(resolution), np.arange(resolution), indexing="ij")
    cells = np.stack([xs, ys], axis=-1).astype(float)

    # (res, res, features) distances
    deltas = cells[:, :, None, :] - features[None, None, :, :]
    nearest = np.sqrt((deltas ** 2).sum(axis=-1)).min(axis=-1)

    return np.clip(nearest / (resolution * 0.1), 0.0, 1.0)


def layered_perlin_noise(resolution: int, density: float, prng: AleaPRNG) -> np.ndarray:
    """Sum of the Perlin layers, each remapped from [-0.5, 0.5] to [0, 1]."""
    scale = 1.0 / density
    field = np.zeros((resolution, resolution), dtype=np.float64)

    for frequency, amplitude in zip(LAYER_FREQUENCIES, LAYER_AMPLITUDES):
        # perlin_noise replaces a falsy seed with an unseeded random one
        layer = PerlinNoise(octaves=1, seed=prng.integer_seed() + 1)
        offset_x = prng.uniform(0.0, 1000.0)
        offset_y = prng.uniform(0.0, 1000.0)

        for x in range(resolution):
            u = x / resolution * scale * frequency + offset_x
            for y in range(resolution):
                v = y / resolution * scale * frequency + offset_y
                field[x, y] += min(max(layer([u, v]) + 0.5, 0.0), 1.0) * amplitude

    return field


def generate_layered_noise(resolution: int, density: float, prng: AleaPRNG) -> np.ndarray:
    """
    Noise map indexed ``[x, z]`` with values in [0, 1].

    Args:
        resolution: Cells per side
        density: Feature density; higher values stretch the noise less
        prng: Random generator for layer seeds, offsets and Worley points

    Returns:
        Array of shape (resolution, resolution)
    """
    if resolution <= 0 or density <= 0:
        return np.zeros((0, 0))

    perlin = layered_perlin_noise(resolution, density, prng)
    worley = worley_noise(resolution, prng)
    field = perlin + (worley - perlin) * WORLEY_BLEND

    logger.debug("Layered noise generated", resolution=resolution,
                 mean=float(field.mean()), max=float(field.max()))
    return field
