"""
🧬 genopt
Binary-encoded genetic algorithm for maximizing a real function on an interval
"""

__version__ = "0.1.0"

from .core.exceptions import GenOptError, InvalidDomain, InvalidWeights, OutOfRange, InvalidConfiguration
from .core.random_source import RandomSource, NumpyRandomSource, default_random_source
from .genetic import (
    GeneticOptimizer,
    Chromosome,
    ClosedInterval,
    CrossoverOperator,
    MutationOperator,
    WeightedSampler,
    MAXUINT64,
)
from .utils import FitnessTracker

__all__ = [
    # Errors
    'GenOptError', 'InvalidDomain', 'InvalidWeights', 'OutOfRange', 'InvalidConfiguration',

    # Randomness
    'RandomSource', 'NumpyRandomSource', 'default_random_source',

    # Genetic Algorithm
    'GeneticOptimizer', 'Chromosome', 'ClosedInterval', 'CrossoverOperator',
    'MutationOperator', 'WeightedSampler', 'MAXUINT64',

    # Tracking
    'FitnessTracker',
]
