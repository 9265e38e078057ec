"""
Random variate generation for the single-server queue.

Entities consume uniform(0, 1] draws from a `UniformSource` and turn them
into exponential durations with the inverse transform -ln(U) / rate.
"""

import math
from typing import Callable, Optional, Sequence

import numpy as np


# Any zero-argument callable returning a float in (0, 1].
UniformSource = Callable[[], float]


class BufferedUniformSource:
    """
    Uniform(0, 1] source backed by a numpy Generator.

    Draws are pulled from numpy in blocks since per-call scalar draws
    dominate the cost of a Python event loop. numpy yields [0, 1), which
    is mapped onto (0, 1] so that log(U) is always finite.
    """

    def __init__(self, seed: Optional[int] = None, block_size: int = 65536):
        if block_size <= 0:
            raise ValueError(f"block_size must be positive, got {block_size}")
        self.seed = seed
        self.block_size = block_size
        self._rng = np.random.default_rng(seed)
        self._block: list = []
        self._index = 0

    def _refill(self):
        self._block = (1.0 - self._rng.random(self.block_size)).tolist()
        self._index = 0

    def __call__(self) -> float:
        if self._index >= len(self._block):
            self._refill()
        value = self._block[self._index]
        self._index += 1
        return value


def uniform_source(seed: Optional[int] = None) -> UniformSource:
    """Create a seeded uniform(0, 1] source."""
    return BufferedUniformSource(seed)


def sequence_source(values: Sequence[float]) -> UniformSource:
    """
    Replay a fixed list of uniform draws.

    Useful for scripted scenarios where every service and inter-arrival
    time must be known in advance. Raises IndexError once exhausted.
    """
    iterator = iter(values)

    def sample() -> float:
        try:
            return next(iterator)
        except StopIteration:
            raise IndexError("sequence_source exhausted") from None

    return sample


def validate_rate(rate: float, name: str = 'rate') -> float:
    """Return `rate` as a float, or raise if it is not positive and finite."""
    rate = float(rate)
    if not math.isfinite(rate) or rate <= 0:
        raise ValueError(f"{name} must be a positive finite number, got {rate!r}")
    return rate


def exponential(rate: float, uniform: UniformSource) -> float:
    """
    Generate an exponential random variable from one uniform draw.

    Uses the scalar math.log rather than np.log: one value is drawn per
    call, and numpy's per-call overhead dominates at that size.
    """
    rate = validate_rate(rate)
    u = uniform()
    if not 0.0 < u <= 1.0:
        raise ValueError(f"Uniform source produced {u!r}, expected a value in (0, 1]")
    return -math.log(u) / rate


def exponential_distribution(rate: float, uniform: UniformSource) -> Callable[[], float]:
    """Create an exponential distribution function."""
    rate = validate_rate(rate)
    return lambda: exponential(rate, uniform)


def exponential_pdf(x: np.ndarray, rate: float) -> np.ndarray:
    """Density of the exponential distribution, for plotting against samples."""
    x = np.asarray(x, dtype=float)
    return np.where(x >= 0, rate * np.exp(-rate * x), 0.0)
