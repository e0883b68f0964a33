"""
🧪 Shared fixtures
Scripted random sources and lightweight chromosomes for deterministic tests
"""

import math
from dataclasses import dataclass
from typing import Iterable, List

import pytest

from genopt.core.random_source import NumpyRandomSource, RandomSource
from genopt.genetic import ClosedInterval


class ScriptedRandomSource(RandomSource):
    """RandomSource replaying fixed draws; fails loudly when a script runs out"""

    def __init__(self, floats: Iterable[float] = (), uints: Iterable[int] = ()):
        self.floats: List[float] = list(floats)
        self.uints: List[int] = list(uints)
        self.float_draws = 0
        self.uint_draws = 0

    def next_uint64(self) -> int:
        if not self.uints:
            raise AssertionError("Scripted uint64 draws exhausted")
        self.uint_draws += 1
        return self.uints.pop(0)

    def next_float(self) -> float:
        if not self.floats:
            raise AssertionError("Scripted float draws exhausted")
        self.float_draws += 1
        return self.floats.pop(0)


@dataclass(frozen=True)
class FakeChromosome:
    """Chromosome stand-in with fixed value and fitness"""

    value: float
    fitness: float
    tag: str = ""

    def crossover(self, other):
        return (
            FakeChromosome(self.value, self.fitness, f"{self.tag}x{other.tag}"),
            FakeChromosome(other.value, other.fitness, f"{other.tag}x{self.tag}"),
        )

    def mutate(self, mutation_rate):
        return FakeChromosome(self.value, self.fitness, f"{self.tag}'")


@pytest.fixture
def scripted_source():
    """Factory for scripted random sources"""
    return ScriptedRandomSource


@pytest.fixture
def fake_chromosome():
    return FakeChromosome


@pytest.fixture
def seeded_source():
    return NumpyRandomSource(seed=12345)


@pytest.fixture
def unit_domain():
    return ClosedInterval(0.0, 1.0)


@pytest.fixture
def sin_ridge():
    """f(x) = x + |sin(32x)| on [0, pi]"""
    return (lambda x: x + abs(math.sin(32 * x))), ClosedInterval(0.0, math.pi)
