"""
🎲 Random Source
Uniform random bits and reals consumed by every stochastic step of the engine
"""

from abc import ABC, abstractmethod
from functools import lru_cache
from typing import List, Optional

import numpy as np

from .config import get_settings

UINT64_MAX = np.iinfo(np.uint64).max


class RandomSource(ABC):
    """
    Stream of uniform random numbers.

    Implementations provide 64-bit unsigned integers and reals in [0, 1).
    Everything else is derived from those two draws so that a scripted
    source fully controls a run.
    """

    @abstractmethod
    def next_uint64(self) -> int:
        """Draw an integer uniformly from [0, 2**64)."""

    @abstractmethod
    def next_float(self) -> float:
        """Draw a real uniformly from [0, 1)."""

    def next_floats(self, count: int) -> List[float]:
        """Draw ``count`` reals from [0, 1), in stream order."""
        return [self.next_float() for _ in range(count)]

    def randbelow(self, n: int) -> int:
        """Draw an integer uniformly from [0, n) using one real draw."""
        if n <= 0:
            raise ValueError(f"randbelow requires a positive bound, got {n}")
        return min(int(self.next_float() * n), n - 1)


class NumpyRandomSource(RandomSource):
    """RandomSource backed by a numpy ``Generator`` (PCG64)."""

    def __init__(self, seed: Optional[int] = None):
        self.seed = seed
        self._rng = np.random.default_rng(seed)

    def next_uint64(self) -> int:
        return int(self._rng.integers(0, UINT64_MAX, dtype=np.uint64, endpoint=True))

    def next_float(self) -> float:
        return float(self._rng.random())

    def next_floats(self, count: int) -> List[float]:
        return self._rng.random(count).tolist()

    def __repr__(self) -> str:
        return f"NumpyRandomSource(seed={self.seed})"


@lru_cache()
def default_random_source() -> RandomSource:
    """
    Process-wide random source.

    Seeded from ``Settings.random_seed`` (``GENOPT_RANDOM_SEED``); unseeded
    when the setting is absent.
    """
    return NumpyRandomSource(get_settings().random_seed)
