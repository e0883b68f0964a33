"""
🧬 Chromosome Class
64-bit encoded candidate solutions for maximizing a function on an interval
"""

import operator
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional, Protocol, Tuple, TypeVar

from genopt.core.exceptions import OutOfRange
from genopt.core.random_source import RandomSource, default_random_source
from .crossover import CrossoverOperator
from .encoding import MAXUINT64, ClosedInterval, decode
from .mutation import MutationOperator

ObjectiveFunction = Callable[[float], float]

C = TypeVar("C", bound="ChromosomeLike")


class ChromosomeLike(Protocol):
    """What the optimizer needs from a chromosome."""

    @property
    def value(self) -> Any: ...

    @property
    def fitness(self) -> float: ...

    def crossover(self: C, other: C) -> Tuple[C, C]: ...

    def mutate(self: C, mutation_rate: float) -> C: ...


@dataclass(frozen=True)
class Chromosome:
    """
    Chromosome representing a point of the domain as a 64-bit pattern.

    ``value`` and ``fitness`` are computed once at construction. Crossover and
    mutation return new chromosomes; an existing one never changes.

    Leave ``bitvector`` unset to draw a random one; pass it when building
    offspring from a known pattern.
    """

    objective_fn: ObjectiveFunction = field(compare=False, repr=False)
    domain: ClosedInterval
    bitvector: Optional[int] = None
    random_source: Optional[RandomSource] = field(default=None, compare=False, repr=False)
    value: float = field(init=False, compare=False)
    fitness: float = field(init=False, compare=False)

    def __post_init__(self):
        self.domain.validate()

        random_source = self.random_source
        if random_source is None:
            random_source = default_random_source()
        object.__setattr__(self, "random_source", random_source)

        bitvector = self.bitvector
        if bitvector is None:
            bitvector = random_source.next_uint64()
        else:
            bitvector = operator.index(bitvector)
            if not 0 <= bitvector <= MAXUINT64:
                raise OutOfRange(f"Bitvector {bitvector} does not fit in 64 bits")
        object.__setattr__(self, "bitvector", int(bitvector))

        value = decode(self.bitvector, self.domain)
        object.__setattr__(self, "value", value)
        object.__setattr__(self, "fitness", self.objective_fn(value))

    def decode(self, bitvector: int) -> float:
        """Real value encoded by ``bitvector`` in this chromosome's domain."""
        return decode(bitvector, self.domain)

    def with_bitvector(self, bitvector: int) -> "Chromosome":
        """New chromosome sharing this one's objective, domain and random source."""
        return Chromosome(
            objective_fn=self.objective_fn,
            domain=self.domain,
            bitvector=bitvector,
            random_source=self.random_source,
        )

    def crossover(self, other: "Chromosome") -> Tuple["Chromosome", "Chromosome"]:
        """Recombine with ``other`` around a random locus."""
        return CrossoverOperator(self.random_source).single_point_crossover(self, other)

    def mutate(self, mutation_rate: float) -> "Chromosome":
        """Flip each bit independently with probability ``mutation_rate``."""
        return MutationOperator(self.random_source).bit_flip_mutation(self, mutation_rate)

    def to_dict(self) -> Dict[str, Any]:
        """Convert chromosome to dictionary for serialization."""
        return {
            'bitvector': self.bitvector,
            'value': self.value,
            'fitness': self.fitness,
        }

    def __str__(self) -> str:
        return f"Chromosome(bitvector={self.bitvector:#018x}, value={self.value:.6f}, fitness={self.fitness:.6f})"
