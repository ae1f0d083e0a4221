"""
Random number generation utilities.

Scatter samplers never share a process-wide generator. Callers pass either a
seed or an ``AleaPRNG`` instance, and these helpers turn that into the
generator the sampler threads through its work.
"""

from typing import Any, Optional, Union

from ..core.alea_prng import AleaPRNG

DEFAULT_SEED = "py-scatter"

SeedLike = Union[None, str, int, float, AleaPRNG]


def ensure_prng(rng: SeedLike = None) -> AleaPRNG:
    """
    Coerce a seed or generator into an AleaPRNG instance.

    An existing generator is returned as-is so its state keeps advancing
    across calls. ``None`` falls back to the fixed default seed, which keeps
    unseeded calls reproducible.

    Args:
        rng: Seed value, existing generator, or None

    Returns:
        AleaPRNG instance
    """
    if isinstance(rng, AleaPRNG):
        return rng
    if rng is None:
        return AleaPRNG(DEFAULT_SEED)
    return AleaPRNG(rng)


def derive_prng(parent: AleaPRNG, *salt: Any, base: Optional[int] = None) -> AleaPRNG:
    """
    Build an independent child generator.

    The child seed combines a draw from the parent (or ``base`` when the caller
    drew it already) with the salt values, so workers seeded with different
    salts never share a sequence.
    """
    if base is None:
        base = parent.integer_seed()
    return AleaPRNG([base, *salt])
