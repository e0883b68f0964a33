"""
🎯 Selection
Roulette-wheel sampling with or without replacement
"""

import math
from typing import List, Optional, Sequence, TypeVar

from genopt.core.exceptions import InvalidWeights, OutOfRange
from genopt.core.random_source import RandomSource, default_random_source

T = TypeVar("T")


class WeightedSampler:
    """
    Draws indices or values with probability proportional to their weights.
    """

    def __init__(self, random_source: Optional[RandomSource] = None):
        if random_source is None:
            random_source = default_random_source()
        self.random_source = random_source

    @staticmethod
    def validate_weights(weights: Sequence[float]) -> float:
        """
        Check that ``weights`` define a distribution.

        Returns:
            float: Sum of the weights
        """
        if len(weights) == 0:
            raise InvalidWeights("Cannot sample from an empty set of weights")

        for i, weight in enumerate(weights):
            if math.isnan(weight) or weight < 0:
                raise InvalidWeights(f"Weight at index {i} is negative or NaN: {weight}")

        total = math.fsum(weights)
        if not total > 0 or math.isinf(total):
            raise InvalidWeights(f"Weights must sum to a positive finite value, got {total}")

        return total

    def choose_one(self, weights: Sequence[float]) -> int:
        """
        Roulette wheel selection of one index.

        Args:
            weights: Non-negative weights with a positive sum

        Returns:
            int: Index ``i`` with cumulative(0..i) <= r < cumulative(0..i+1)
        """
        total = self.validate_weights(weights)

        # 0.0 <= r < total
        r = self.random_source.next_float() * total

        cumulative = 0.0
        for i, weight in enumerate(weights):
            if cumulative + weight > r:
                return i
            cumulative += weight

        # Rounding can leave r at or above the running sum; fall back to the
        # last index that carries weight
        return max(i for i, weight in enumerate(weights) if weight > 0)

    def choose(
        self,
        values: Sequence[T],
        weights: Sequence[float],
        count: int,
        replace: bool = False
    ) -> List[T]:
        """
        Draw ``count`` values with probability proportional to ``weights``.

        Args:
            values: Candidates
            weights: Weight of each candidate, aligned with ``values``
            count: Number of draws
            replace: Allow the same candidate to be drawn more than once

        Returns:
            List: Drawn values in draw order
        """
        if len(values) != len(weights):
            raise InvalidWeights(
                f"Got {len(values)} values but {len(weights)} weights"
            )
        if count < 0:
            raise OutOfRange(f"Cannot draw a negative number of values: {count}")
        if not replace and count > len(values):
            raise OutOfRange(
                f"Cannot draw {count} values without replacement from {len(values)}"
            )

        remaining_values = list(values)
        remaining_weights = list(weights)
        chosen = []

        while len(chosen) < count:
            idx = self.choose_one(remaining_weights)
            chosen.append(remaining_values[idx])
            if not replace:
                del remaining_values[idx]
                del remaining_weights[idx]

        return chosen
