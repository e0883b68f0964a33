"""
🧪 Chromosome, crossover and mutation tests
"""

import dataclasses
import math

import numpy as np
import pytest

from genopt.core.exceptions import InvalidConfiguration, InvalidDomain, OutOfRange
from genopt.core.random_source import NumpyRandomSource
from genopt.genetic import (
    CHROMOSOME_BITS,
    MAXUINT64,
    Chromosome,
    ClosedInterval,
    CrossoverOperator,
    MutationOperator,
    WeightedSampler,
    decode,
)


def identity(x):
    return x


def bit(x, position):
    return (x >> position) & 1


class TestDecoding:
    """Tests for the bit pattern to real mapping"""

    def test_decode_endpoints(self):
        domain = ClosedInterval(-2.0, 3.5)
        assert decode(0, domain) == -2.0
        assert decode(MAXUINT64, domain) == pytest.approx(3.5)

    def test_decode_is_monotonic(self, seeded_source):
        domain = ClosedInterval(0.0, math.pi)
        patterns = sorted(seeded_source.next_uint64() for _ in range(2000))
        patterns = [0, 1, 2] + patterns + [MAXUINT64 - 1, MAXUINT64]
        values = [decode(p, domain) for p in patterns]
        assert all(a <= b for a, b in zip(values, values[1:]))

    def test_decode_is_affine(self):
        domain = ClosedInterval(10.0, 20.0)
        midpoint = decode(MAXUINT64 // 2, domain)
        assert midpoint == pytest.approx(15.0)

    def test_degenerate_domain(self):
        domain = ClosedInterval(1.0, 1.0)
        assert decode(12345, domain) == 1.0

    def test_decode_wide_domain_stays_finite(self):
        domain = ClosedInterval(0.0, 1e300)
        middle = decode(1 << 63, domain)
        assert math.isfinite(middle)
        assert middle in domain
        assert middle == pytest.approx(5e299)
        assert decode(MAXUINT64, domain) in domain

    def test_decode_never_exceeds_upper_bound(self):
        for domain in (ClosedInterval(0.1, 0.3), ClosedInterval(-7.3, 1e-3), ClosedInterval(0.0, math.pi)):
            assert decode(MAXUINT64, domain) <= domain.h
            assert decode(MAXUINT64 - 1, domain) <= domain.h

    def test_interval_contains(self):
        domain = ClosedInterval(0.0, 1.0)
        assert 0.0 in domain
        assert 1.0 in domain
        assert 1.5 not in domain
        assert domain.width == 1.0


class TestChromosomeConstruction:
    """Tests for chromosome construction and immutability"""

    def test_random_bitvector_drawn_from_source(self, scripted_source, unit_domain):
        source = scripted_source(uints=[MAXUINT64])
        chromosome = Chromosome(identity, unit_domain, random_source=source)

        assert chromosome.bitvector == MAXUINT64
        assert chromosome.value == pytest.approx(1.0)
        assert source.uint_draws == 1

    def test_explicit_bitvector_draws_nothing(self, scripted_source, unit_domain):
        source = scripted_source()
        chromosome = Chromosome(identity, unit_domain, bitvector=0, random_source=source)

        assert chromosome.value == 0.0
        assert chromosome.fitness == 0.0
        assert source.uint_draws == 0

    def test_fitness_is_objective_of_value(self, unit_domain):
        chromosome = Chromosome(lambda x: 3 * x + 1, unit_domain, bitvector=MAXUINT64 // 4)
        assert chromosome.fitness == pytest.approx(3 * chromosome.value + 1)

    def test_objective_evaluated_once(self, unit_domain):
        calls = []

        def objective(x):
            calls.append(x)
            return x

        chromosome = Chromosome(objective, unit_domain, bitvector=42)
        chromosome.fitness
        chromosome.fitness
        chromosome.value
        assert len(calls) == 1

    def test_invalid_domain(self):
        with pytest.raises(InvalidDomain):
            Chromosome(identity, ClosedInterval(2.0, 1.0), bitvector=0)

    def test_invalid_domain_is_value_error(self):
        with pytest.raises(ValueError):
            ClosedInterval(5.0, -5.0).validate()

    @pytest.mark.parametrize("bitvector", [-1, MAXUINT64 + 1])
    def test_bitvector_out_of_range(self, unit_domain, bitvector):
        with pytest.raises(OutOfRange):
            Chromosome(identity, unit_domain, bitvector=bitvector)

    def test_non_integral_bitvector_rejected(self, unit_domain):
        with pytest.raises(TypeError):
            Chromosome(identity, unit_domain, bitvector=1.9)

    def test_integer_like_bitvector_accepted(self, unit_domain):
        chromosome = Chromosome(identity, unit_domain, bitvector=np.uint64(MAXUINT64))
        assert chromosome.bitvector == MAXUINT64
        assert type(chromosome.bitvector) is int

    def test_falsy_random_source_is_kept(self, scripted_source, unit_domain):
        class EmptyScriptedSource(scripted_source):
            """Falsy like an empty container"""

            def __len__(self):
                return 0

        source = EmptyScriptedSource(uints=[5])
        assert not source
        chromosome = Chromosome(identity, unit_domain, random_source=source)

        assert chromosome.random_source is source
        assert chromosome.bitvector == 5
        assert CrossoverOperator(source).random_source is source
        assert MutationOperator(source).random_source is source
        assert WeightedSampler(source).random_source is source

    def test_chromosome_is_immutable(self, unit_domain):
        chromosome = Chromosome(identity, unit_domain, bitvector=7)
        with pytest.raises(dataclasses.FrozenInstanceError):
            chromosome.bitvector = 8
        with pytest.raises(dataclasses.FrozenInstanceError):
            chromosome.fitness = 100.0

    def test_equality_and_hash(self, unit_domain):
        a = Chromosome(identity, unit_domain, bitvector=99)
        b = Chromosome(lambda x: -x, unit_domain, bitvector=99)
        c = Chromosome(identity, unit_domain, bitvector=100)

        assert a == b
        assert hash(a) == hash(b)
        assert a != c
        assert len({a, b, c}) == 2

    def test_with_bitvector_shares_context(self, seeded_source, unit_domain):
        parent = Chromosome(identity, unit_domain, bitvector=1, random_source=seeded_source)
        child = parent.with_bitvector(MAXUINT64)

        assert child.objective_fn is parent.objective_fn
        assert child.domain is parent.domain
        assert child.random_source is parent.random_source
        assert child.value == pytest.approx(1.0)
        assert parent.bitvector == 1

    def test_to_dict(self, unit_domain):
        chromosome = Chromosome(identity, unit_domain, bitvector=0)
        assert chromosome.to_dict() == {'bitvector': 0, 'value': 0.0, 'fitness': 0.0}


class TestCrossover:
    """Tests for the locus mask recombination"""

    A = 0xFFFFFFFF00000000
    B = 0x00000000FFFFFFFF

    def test_masks_at_midpoint_partition_bits(self):
        mask_high, mask_low = CrossoverOperator.masks(32)
        assert mask_high == 0xFFFFFFFF00000000
        assert mask_low == 0x00000000FFFFFFFF
        assert mask_high & mask_low == 0
        assert mask_high | mask_low == MAXUINT64

    def test_masks_at_zero_select_everything(self):
        assert CrossoverOperator.masks(0) == (MAXUINT64, MAXUINT64)

    def test_masks_reject_bad_locus(self):
        with pytest.raises(OutOfRange):
            CrossoverOperator.masks(64)
        with pytest.raises(OutOfRange):
            CrossoverOperator.masks(-1)

    def test_recombine_at_midpoint(self):
        a = 0x0123456789ABCDEF
        b = 0xFEDCBA9876543210
        c, d = CrossoverOperator.recombine(a, b, 32)
        assert c == 0x0123456776543210
        assert d == 0xFEDCBA9889ABCDEF

    def test_recombine_at_zero_is_bitwise_or(self):
        a = 0x0F0F0F0F0F0F0F0F
        b = 0x00FF00FF00FF00FF
        assert CrossoverOperator.recombine(a, b, 0) == (a | b, a | b)

    def test_recombine_overlap_band(self):
        # locus 8: mask_low covers bits 0..55, mask_high bits 8..63
        c, d = CrossoverOperator.recombine(self.A, self.B, 8)
        assert c == MAXUINT64
        assert d == 0x00FFFFFFFFFFFF00

    def test_recombine_gap_band(self):
        # locus 40: mask_low covers bits 0..23, mask_high bits 40..63
        c, d = CrossoverOperator.recombine(MAXUINT64, MAXUINT64, 40)
        expected = MAXUINT64 & ~(((1 << 16) - 1) << 24)
        assert c == expected
        assert d == expected

    def test_bit_provenance(self, seeded_source):
        for locus in range(CHROMOSOME_BITS):
            mask_high, mask_low = CrossoverOperator.masks(locus)
            for _ in range(20):
                a = seeded_source.next_uint64()
                b = seeded_source.next_uint64()
                c, d = CrossoverOperator.recombine(a, b, locus)

                for position in range(CHROMOSOME_BITS):
                    in_high = bit(mask_high, position)
                    in_low = bit(mask_low, position)
                    if in_high and in_low:
                        assert bit(c, position) == bit(a, position) | bit(b, position)
                        assert bit(d, position) == bit(a, position) | bit(b, position)
                    elif in_high:
                        assert bit(c, position) == bit(a, position)
                        assert bit(d, position) == bit(b, position)
                    elif in_low:
                        assert bit(c, position) == bit(b, position)
                        assert bit(d, position) == bit(a, position)
                    else:
                        assert bit(c, position) == 0
                        assert bit(d, position) == 0

    def test_chromosome_crossover_uses_one_locus_draw(self, scripted_source, unit_domain):
        # 0.5 * 64 -> locus 32
        source = scripted_source(floats=[0.5])
        a = Chromosome(identity, unit_domain, bitvector=self.A, random_source=source)
        b = Chromosome(lambda x: -x, unit_domain, bitvector=self.B, random_source=source)

        child1, child2 = a.crossover(b)

        assert source.float_draws == 1
        assert child1.bitvector == MAXUINT64
        assert child2.bitvector == 0
        assert child1.objective_fn is a.objective_fn
        assert child2.objective_fn is a.objective_fn
        assert a.bitvector == self.A
        assert b.bitvector == self.B

    def test_crossover_children_fitness_fresh(self, scripted_source):
        domain = ClosedInterval(0.0, 1.0)
        source = scripted_source(floats=[0.0])
        a = Chromosome(lambda x: 2 * x, domain, bitvector=1, random_source=source)
        b = Chromosome(lambda x: 2 * x, domain, bitvector=2, random_source=source)

        child1, child2 = a.crossover(b)

        assert child1.bitvector == 3
        assert child1.fitness == pytest.approx(2 * decode(3, domain))
        assert child2.fitness == child1.fitness


class TestMutation:
    """Tests for independent bit flips"""

    def test_zero_rate_keeps_bits(self, seeded_source, unit_domain):
        chromosome = Chromosome(identity, unit_domain, bitvector=0xDEADBEEF, random_source=seeded_source)
        assert chromosome.mutate(0.0).bitvector == 0xDEADBEEF

    def test_full_rate_flips_every_bit(self, seeded_source, unit_domain):
        chromosome = Chromosome(identity, unit_domain, bitvector=0xDEADBEEF, random_source=seeded_source)
        assert chromosome.mutate(1.0).bitvector == MAXUINT64 ^ 0xDEADBEEF

    def test_draws_scanned_from_high_bit(self, scripted_source):
        operator = MutationOperator(scripted_source(floats=[0.0] + [0.9] * 63))
        assert operator.flip_bits(0, 0.5) == 1 << 63

        operator = MutationOperator(scripted_source(floats=[0.9] * 63 + [0.0]))
        assert operator.flip_bits(0, 0.5) == 1

    def test_consumes_one_draw_per_bit(self, scripted_source):
        source = scripted_source(floats=[0.9] * 64)
        MutationOperator(source).flip_bits(12345, 0.001)
        assert source.float_draws == CHROMOSOME_BITS

    def test_mutation_returns_new_chromosome(self, scripted_source, unit_domain):
        source = scripted_source(floats=[0.9] * 63 + [0.0])
        original = Chromosome(identity, unit_domain, bitvector=0, random_source=source)

        mutated = original.mutate(0.5)

        assert mutated is not original
        assert original.bitvector == 0
        assert mutated.bitvector == 1
        assert mutated.fitness == pytest.approx(decode(1, unit_domain))

    def test_invalid_rate(self, seeded_source):
        with pytest.raises(InvalidConfiguration):
            MutationOperator(seeded_source).flip_bits(0, 1.5)

    def test_flip_frequency(self):
        source = NumpyRandomSource(seed=2024)
        operator = MutationOperator(source)
        rate = 0.05
        trials = 10000

        flips = 0
        for _ in range(trials):
            bitvector = source.next_uint64()
            flips += bin(operator.flip_bits(bitvector, rate) ^ bitvector).count("1")

        frequency = flips / (trials * CHROMOSOME_BITS)
        assert frequency == pytest.approx(rate, rel=0.05)

    def test_flip_frequency_per_position(self):
        source = NumpyRandomSource(seed=7)
        operator = MutationOperator(source)
        rate = 0.2
        trials = 10000

        counts = [0] * CHROMOSOME_BITS
        for _ in range(trials):
            flipped = operator.flip_bits(0, rate)
            for position in range(CHROMOSOME_BITS):
                counts[position] += bit(flipped, position)

        for count in counts:
            assert count / trials == pytest.approx(rate, abs=0.03)
