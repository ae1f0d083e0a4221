"""Piecewise-linear response curves for slope and density falloff."""

from typing import Iterable, Tuple

import numpy as np


class ResponseCurve:
    """
    Keyframed curve evaluated by linear interpolation.

    Inputs outside the keyframe range clamp to the first or last value.
    """

    def __init__(self, keyframes: Iterable[Tuple[float, float]]):
        frames = sorted((float(t), float(v)) for t, v in keyframes)
        if not frames:
            raise ValueError("A response curve needs at least one keyframe")

        times = np.array([t for t, _ in frames])
        if len(times) > 1 and np.any(np.diff(times) <= 0):
            raise ValueError("Keyframe times must be strictly increasing")

        self.times = times
        self.values = np.array([v for _, v in frames])

    @classmethod
    def linear(cls, t0: float, v0: float, t1: float, v1: float) -> "ResponseCurve":
        return cls([(t0, v0), (t1, v1)])

    @classmethod
    def constant(cls, value: float) -> "ResponseCurve":
        return cls([(0.0, value), (1.0, value)])

    @property
    def domain(self) -> Tuple[float, float]:
        return float(self.times[0]), float(self.times[-1])

    def evaluate(self, t: float) -> float:
        return float(np.interp(t, self.times, self.values))

    __call__ = evaluate

    def __eq__(self, other):
        if not isinstance(other, ResponseCurve):
            return NotImplemented
        return (np.array_equal(self.times, other.times)
                and np.array_equal(self.values, other.values))

    def __hash__(self):
        return hash((tuple(self.times), tuple(self.values)))

    def __repr__(self):
        frames = ", ".join(f"({t:g}, {v:g})" for t, v in zip(self.times, self.values))
        return f"ResponseCurve([{frames}])"
