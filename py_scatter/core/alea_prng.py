"""
Alea pseudo-random generator used by every scatter sampler.

Based on Johannes Baagøe's Alea algorithm. Each generation call receives its
own instance, so a seed fully determines the resulting distribution.
"""

import math

TWO_POW_32 = 0x100000000
TWO_POW_NEG_32 = 2.3283064365386963e-10
MASH_START = 0xEFC8249D
MASH_FACTOR = 0.02519603282416938
ALEA_MULTIPLIER = 2091639


def _uint32(n):
    return int(n) & 0xFFFFFFFF


def _make_mash():
    """Stateful string hash returning floats in [0, 1)."""
    state = MASH_START

    def mash(data) -> float:
        nonlocal state
        for char in str(data):
            state += ord(char)
            h = MASH_FACTOR * state
            state = _uint32(h)
            h = (h - state) * state
            state = _uint32(h)
            state += (h - state) * TWO_POW_32
        return _uint32(state) * TWO_POW_NEG_32

    return mash


class AleaPRNG:
    """
    Seedable Alea PRNG with the sampling helpers the scatter engine needs.

    Seeds may be strings, numbers or an iterable of either. Two generators
    built from the same seed produce the same sequence.
    """

    def __init__(self, seed):
        self.call_count = 0
        if hasattr(seed, "__iter__") and not isinstance(seed, str):
            self.seed = list(seed)
        else:
            self.seed = [seed]

        mash = _make_mash()
        state = [mash(" ") for _ in range(3)]
        for part in self.seed:
            for i in range(3):
                state[i] -= mash(part)
                if state[i] < 0:
                    state[i] += 1

        self.s0, self.s1, self.s2 = state
        self.c = 1

    def random(self) -> float:
        """Next float in [0, 1)."""
        self.call_count += 1
        t = ALEA_MULTIPLIER * self.s0 + self.c * TWO_POW_NEG_32
        self.c = int(t)
        self.s0, self.s1, self.s2 = self.s1, self.s2, t - self.c
        return self.s2

    def uniform(self, low: float, high: float) -> float:
        """Uniform float in [low, high)."""
        return low + (high - low) * self.random()

    def randint(self, low: int, high: int) -> int:
        """Integer in [low, high], both inclusive."""
        return low + int(self.random() * (high - low + 1))

    def chance(self, probability: float) -> bool:
        """Bernoulli trial with the given success probability."""
        if probability >= 1:
            return True
        if probability <= 0:
            return False
        return self.random() < probability

    def angle(self) -> float:
        """Uniform angle in radians, [0, 2π)."""
        return self.random() * math.pi * 2.0

    def choice(self, seq):
        """Pick one element of a non-empty sequence."""
        if not seq:
            raise IndexError("cannot pick from an empty sequence")
        return seq[int(self.random() * len(seq))]

    def integer_seed(self) -> int:
        """Draw a 32-bit integer suitable for seeding another library."""
        return int(self.random() * TWO_POW_32)
