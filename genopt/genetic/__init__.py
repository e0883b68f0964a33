"""
🧬 Genetic Algorithm Module
Binary-encoded genetic algorithm on a closed interval
"""

from .encoding import MAXUINT64, CHROMOSOME_BITS, ClosedInterval, decode
from .chromosome import Chromosome, ChromosomeLike
from .crossover import CrossoverOperator
from .mutation import MutationOperator
from .selection import WeightedSampler
from .genetic_optimizer import GeneticOptimizer

__all__ = [
    'GeneticOptimizer',
    'Chromosome',
    'ChromosomeLike',
    'ClosedInterval',
    'CrossoverOperator',
    'MutationOperator',
    'WeightedSampler',
    'MAXUINT64',
    'CHROMOSOME_BITS',
    'decode',
]
