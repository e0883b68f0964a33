"""
🧬 Genetic Algorithm Optimizer
Generational loop: roulette selection, crossover and mutation
"""

from datetime import datetime
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple

import numpy as np

from genopt.core.exceptions import InvalidConfiguration
from genopt.core.logger import get_optimizer_logger
from genopt.core.random_source import RandomSource, default_random_source
from genopt.utils.fitness_tracker import FitnessTracker
from .chromosome import ChromosomeLike
from .selection import WeightedSampler

ChromosomeFactory = Callable[..., ChromosomeLike]


class GeneticOptimizer:
    """
    Genetic algorithm over a population of fixed size.

    Each ``step()`` builds the next generation from fitness-weighted pairs,
    crossed over with probability ``crossover_rate``, then mutates every
    member with per-bit rate ``mutation_rate``. No individual is carried over
    unchanged, so the best fitness may drop between generations.

    Every random draw (selection, crossover decision, locus, trimming,
    mutation) comes from ``random_source``; the same source is handed to the
    chromosome factory so a seeded source reproduces a run exactly.
    """

    def __init__(
        self,
        chromosome_factory: ChromosomeFactory,
        popsize: int = 100,
        crossover_rate: float = 0.7,
        mutation_rate: float = 0.001,
        random_source: Optional[RandomSource] = None,
        **chromosome_kwargs
    ):
        """
        Initialize Genetic Optimizer.

        Args:
            chromosome_factory: Callable building a random chromosome; called as
                ``chromosome_factory(random_source=..., **chromosome_kwargs)``
            popsize: Number of chromosomes in population
            crossover_rate: Probability that a selected pair is crossed over
            mutation_rate: Per-bit flip probability
            random_source: Source of every random draw (process default when omitted)
            **chromosome_kwargs: Forwarded to the factory (e.g. objective_fn, domain)
        """
        if popsize < 2:
            raise InvalidConfiguration(f"Population size must be at least 2, got {popsize}")

        self._configure(crossover_rate, mutation_rate, random_source)
        self.chromosomes: List[ChromosomeLike] = [
            chromosome_factory(random_source=self.random_source, **chromosome_kwargs)
            for _ in range(popsize)
        ]

        self.logger.info(
            f"Initialized GeneticOptimizer with popsize={popsize}, "
            f"crossover_rate={crossover_rate}, mutation_rate={mutation_rate}"
        )

    @classmethod
    def from_chromosomes(
        cls,
        chromosomes: Sequence[ChromosomeLike],
        crossover_rate: float = 0.7,
        mutation_rate: float = 0.001,
        random_source: Optional[RandomSource] = None
    ) -> "GeneticOptimizer":
        """
        Build an optimizer around an existing population.

        Args:
            chromosomes: Initial population, at least two members
            crossover_rate: Probability that a selected pair is crossed over
            mutation_rate: Per-bit flip probability
            random_source: Source of every random draw

        Returns:
            GeneticOptimizer: Optimizer in the "constructed" state
        """
        if len(chromosomes) < 2:
            raise InvalidConfiguration(
                f"Population size must be at least 2, got {len(chromosomes)}"
            )

        optimizer = cls.__new__(cls)
        optimizer._configure(crossover_rate, mutation_rate, random_source)
        optimizer.chromosomes = list(chromosomes)
        return optimizer

    def _configure(
        self,
        crossover_rate: float,
        mutation_rate: float,
        random_source: Optional[RandomSource]
    ):
        for name, rate in (("crossover_rate", crossover_rate), ("mutation_rate", mutation_rate)):
            if not 0.0 <= rate <= 1.0:
                raise InvalidConfiguration(f"{name} must be within [0, 1], got {rate}")

        self.crossover_rate = crossover_rate
        self.mutation_rate = mutation_rate
        if random_source is None:
            random_source = default_random_source()
        self.random_source = random_source
        self.sampler = WeightedSampler(self.random_source)
        self.generation = 0
        self.logger = get_optimizer_logger()

    @property
    def popsize(self) -> int:
        return len(self.chromosomes)

    def population(self) -> List[Any]:
        """Decoded values of the population, in order."""
        return [c.value for c in self.chromosomes]

    def fitnesses(self) -> List[float]:
        """Fitnesses of the population, in order."""
        return [c.fitness for c in self.chromosomes]

    def select_pair(self) -> Tuple[ChromosomeLike, ChromosomeLike]:
        """
        Pick two distinct members by fitness, then cross them over with
        probability ``crossover_rate``.
        """
        a, b = self.sampler.choose(
            values=self.chromosomes, weights=self.fitnesses(), count=2, replace=False
        )

        if self.random_source.next_float() < self.crossover_rate:
            a, b = a.crossover(b)

        return a, b

    def step(self):
        """Advance the population by exactly one generation."""
        new_chromosomes: List[ChromosomeLike] = []

        # Selection and crossover
        while len(new_chromosomes) < len(self.chromosomes):
            new_chromosomes.extend(self.select_pair())

        # Pairs overshoot an odd population size by one
        if len(new_chromosomes) > len(self.chromosomes):
            removed = self.random_source.randbelow(len(new_chromosomes))
            del new_chromosomes[removed]
            self.logger.debug(f"Dropped offspring {removed} to keep population size {self.popsize}")

        # Mutation
        self.chromosomes = [c.mutate(self.mutation_rate) for c in new_chromosomes]
        self.generation += 1

        self.logger.debug(f"Generation {self.generation}: best fitness {max(self.fitnesses()):.6f}")

    def best_chromosome(self) -> ChromosomeLike:
        """Fittest member; the earliest one on ties."""
        return max(self.chromosomes, key=lambda c: c.fitness)

    def best(self) -> Any:
        """Decoded value of the fittest member."""
        return self.best_chromosome().value

    def get_generation_stats(self) -> Dict[str, Any]:
        """Fitness statistics of the current population."""
        fitnesses = np.asarray(self.fitnesses(), dtype=float)
        best = self.best_chromosome()

        return {
            'generation': self.generation,
            'best_fitness': float(best.fitness),
            'best_value': best.value,
            'avg_fitness': float(fitnesses.mean()),
            'std_fitness': float(fitnesses.std()),
            'min_fitness': float(fitnesses.min()),
            'timestamp': datetime.now().isoformat()
        }

    def run(self, generations: int, tracker: Optional[FitnessTracker] = None) -> Dict[str, Any]:
        """
        Call ``step()`` exactly ``generations`` times.

        Args:
            generations: Number of generations to run
            tracker: Records the running best (a fresh one when omitted)

        Returns:
            Dict: Run results
        """
        if generations < 0:
            raise InvalidConfiguration(f"Cannot run a negative number of generations: {generations}")

        if tracker is None:
            tracker = FitnessTracker()

        generation_stats = []

        self.logger.info(f"Starting genetic algorithm for {generations} generations")

        for _ in range(generations):
            self.step()

            stats = self.get_generation_stats()
            generation_stats.append(stats)
            tracker.update(stats['best_fitness'], stats['best_value'])

            self.logger.info(f"Generation {self.generation}: "
                             f"Best={stats['best_fitness']:.6f}, Avg={stats['avg_fitness']:.6f}")

        best = self.best_chromosome()
        results = {
            'best_value': best.value,
            'best_fitness': best.fitness,
            'best_ever_value': tracker.best_value,
            'best_ever_fitness': tracker.best_fitness,
            'generations_completed': self.generation,
            'fitness_history': list(tracker.fitness_history),
            'running_best_history': tracker.get_running_best(),
            'generation_stats': generation_stats,
            'optimization_config': {
                'popsize': self.popsize,
                'crossover_rate': self.crossover_rate,
                'mutation_rate': self.mutation_rate
            }
        }

        self.logger.info(f"Genetic optimization completed. Best fitness: {best.fitness:.6f}")
        return results
