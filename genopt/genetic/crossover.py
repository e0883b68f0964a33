"""
🔀 Crossover Operator
Recombination of two 64-bit patterns around a random locus
"""

from typing import TYPE_CHECKING, Optional, Tuple

from genopt.core.exceptions import OutOfRange
from genopt.core.random_source import RandomSource, default_random_source
from .encoding import CHROMOSOME_BITS, MAXUINT64

if TYPE_CHECKING:
    from .chromosome import Chromosome


class CrossoverOperator:
    """
    Single-locus crossover on bit patterns.

    The masks are ``MAXUINT64 >> locus`` (low side) and that mask shifted back
    left by ``locus`` (high side). They only partition the 64 bits when
    ``locus == 32``: below 32 they overlap on bits ``locus..63-locus``, where
    a child receives the OR of both parents, and above 32 they leave bits
    ``64-locus..locus-1`` cleared in both children.
    """

    def __init__(self, random_source: Optional[RandomSource] = None):
        if random_source is None:
            random_source = default_random_source()
        self.random_source = random_source

    @staticmethod
    def masks(locus: int) -> Tuple[int, int]:
        """
        High and low masks for ``locus``.

        Returns:
            Tuple[int, int]: (mask_high, mask_low)
        """
        if not 0 <= locus < CHROMOSOME_BITS:
            raise OutOfRange(f"Locus must be within [0, {CHROMOSOME_BITS}), got {locus}")

        mask_low = MAXUINT64 >> locus
        mask_high = mask_low << locus
        return mask_high, mask_low

    @classmethod
    def recombine(cls, a: int, b: int, locus: int) -> Tuple[int, int]:
        """
        Recombine two bit patterns around ``locus``.

        Args:
            a: Bit pattern of the first parent
            b: Bit pattern of the second parent
            locus: Split position in [0, 64)

        Returns:
            Tuple[int, int]: Bit patterns of the two children
        """
        mask_high, mask_low = cls.masks(locus)
        c = (mask_high & a) | (mask_low & b)
        d = (mask_high & b) | (mask_low & a)
        return c, d

    def draw_locus(self) -> int:
        """Uniform locus in [0, 64)."""
        return self.random_source.randbelow(CHROMOSOME_BITS)

    def single_point_crossover(
        self,
        parent1: "Chromosome",
        parent2: "Chromosome"
    ) -> Tuple["Chromosome", "Chromosome"]:
        """
        Crossover of two chromosomes.

        Args:
            parent1: First parent chromosome
            parent2: Second parent chromosome

        Returns:
            Tuple[Chromosome, Chromosome]: Two offspring sharing parent1's
            objective function, domain and random source
        """
        locus = self.draw_locus()
        c, d = self.recombine(parent1.bitvector, parent2.bitvector, locus)
        return parent1.with_bitvector(c), parent1.with_bitvector(d)
