"""
🔢 Encoding
Fixed-width bit patterns and their decoding onto a closed interval
"""

from dataclasses import dataclass

from genopt.core.exceptions import InvalidDomain

CHROMOSOME_BITS = 64

# Largest 64-bit unsigned integer
MAXUINT64 = (1 << CHROMOSOME_BITS) - 1


@dataclass(frozen=True)
class ClosedInterval:
    """Closed interval [l, h] of reals."""

    l: float
    h: float

    @property
    def width(self) -> float:
        return self.h - self.l

    def validate(self) -> "ClosedInterval":
        """Raise InvalidDomain unless l <= h."""
        if self.l > self.h:
            raise InvalidDomain(f"Lower bound {self.l} is above upper bound {self.h}")
        return self

    def __contains__(self, x: float) -> bool:
        return self.l <= x <= self.h


def decode(bitvector: int, domain: ClosedInterval) -> float:
    """Affine, non-decreasing map of [0, MAXUINT64] onto [domain.l, domain.h]."""
    scale = (domain.h - domain.l) / MAXUINT64
    return min(domain.l + bitvector * scale, domain.h)
