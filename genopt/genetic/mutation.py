"""
🧬 Mutation Operator
Independent per-bit flips of a 64-bit pattern
"""

from typing import TYPE_CHECKING, Optional

from genopt.core.exceptions import InvalidConfiguration
from genopt.core.random_source import RandomSource, default_random_source
from .encoding import CHROMOSOME_BITS

if TYPE_CHECKING:
    from .chromosome import Chromosome


class MutationOperator:
    """
    Bit-flip mutation.

    Every bit is an independent Bernoulli trial with one real draw per bit,
    scanned from the most significant bit down, so 64 draws are consumed per
    call whatever the rate.
    """

    def __init__(self, random_source: Optional[RandomSource] = None):
        if random_source is None:
            random_source = default_random_source()
        self.random_source = random_source

    def flip_bits(self, bitvector: int, mutation_rate: float) -> int:
        """
        Flip each bit of ``bitvector`` with probability ``mutation_rate``.

        Args:
            bitvector: Bit pattern to mutate
            mutation_rate: Per-bit flip probability in [0, 1]

        Returns:
            int: Mutated bit pattern
        """
        if not 0.0 <= mutation_rate <= 1.0:
            raise InvalidConfiguration(f"Mutation rate must be within [0, 1], got {mutation_rate}")

        draws = self.random_source.next_floats(CHROMOSOME_BITS)
        bitmask = 1 << (CHROMOSOME_BITS - 1)

        for draw in draws:
            if draw < mutation_rate:
                bitvector ^= bitmask
            bitmask >>= 1

        return bitvector

    def bit_flip_mutation(self, chromosome: "Chromosome", mutation_rate: float) -> "Chromosome":
        """
        Mutate a chromosome.

        Args:
            chromosome: Chromosome to mutate
            mutation_rate: Per-bit flip probability

        Returns:
            Chromosome: New chromosome with freshly computed fitness
        """
        return chromosome.with_bitvector(self.flip_bits(chromosome.bitvector, mutation_rate))
