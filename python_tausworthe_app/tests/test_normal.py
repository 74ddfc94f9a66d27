"""Tests for normal.py: Box-Muller arithmetic and the U1 == 0 boundary."""

import math

import numpy as np
import pytest

from enums import ZeroPolicy
from exceptions import InvalidParameterError, NumericDomainError
from generator import TauswortheGenerator
from normal import (
    NormalDeviatePair, NormalGenerator, NormalSequence, box_muller, default_clamp_floor,
)
from packer import UniformSequence
from parameters import GeneratorParameters


def _uniform(values, l=5):
    return UniformSequence(np.asarray(values, dtype=np.float64), l)


class TestBoxMuller:
    def test_closed_form(self):
        out = box_muller([0.5], [0.25])
        magnitude = math.sqrt(-2.0 * math.log(0.5))
        assert out.z1[0] == pytest.approx(magnitude * math.cos(2 * math.pi * 0.25), abs=1e-12)
        assert out.z2[0] == pytest.approx(magnitude * math.sin(2 * math.pi * 0.25))
        assert out.z2[0] == pytest.approx(math.sqrt(2.0 * math.log(2.0)))

    def test_several_values(self):
        u1 = [0.1, 0.5, 0.9]
        u2 = [0.0, 0.5, 0.75]
        out = box_muller(u1, u2)
        for i, (a, b) in enumerate(zip(u1, u2)):
            m = math.sqrt(-2.0 * math.log(a))
            assert out.z1[i] == pytest.approx(m * math.cos(2 * math.pi * b), abs=1e-12)
            assert out.z2[i] == pytest.approx(m * math.sin(2 * math.pi * b), abs=1e-12)

    def test_length_is_shorter_input(self):
        out = box_muller([0.5, 0.25, 0.75], [0.1, 0.2])
        assert len(out) == 2

    def test_accepts_uniform_sequences(self):
        out = box_muller(_uniform([0.5, 0.25]), _uniform([0.25, 0.5]))
        assert len(out) == 2

    def test_pairs_and_values(self):
        out = box_muller([0.5, 0.25], [0.25, 0.5])
        pairs = list(out.pairs())
        assert isinstance(pairs[0], NormalDeviatePair)
        assert pairs[1].z1 == pytest.approx(out.z1[1])
        flat = out.values()
        assert flat.tolist() == [out.z1[0], out.z2[0], out.z1[1], out.z2[1]]

    def test_zero_raises_by_default(self):
        with pytest.raises(NumericDomainError) as excinfo:
            box_muller([0.5, 0.0, 0.25, 0.0], [0.1, 0.2, 0.3, 0.4])
        assert excinfo.value.indices == [1, 3]

    def test_zero_is_arithmetic_error(self):
        with pytest.raises(ArithmeticError):
            box_muller([0.0], [0.5])

    def test_zero_in_u2_is_fine(self):
        out = box_muller([0.5], [0.0])
        assert np.isfinite(out.z1[0])
        assert out.z2[0] == pytest.approx(0.0)

    def test_zero_skip(self):
        out = box_muller([0.5, 0.0, 0.25], [0.1, 0.2, 0.3], zero_policy=ZeroPolicy.SKIP)
        assert len(out) == 2
        assert out.skipped == [1]
        assert np.all(np.isfinite(out.z1))
        expected = math.sqrt(-2.0 * math.log(0.25)) * math.cos(2 * math.pi * 0.3)
        assert out.z1[1] == pytest.approx(expected)

    def test_zero_clamp_uses_half_grid_step(self):
        out = box_muller(_uniform([0.0], l=5), _uniform([0.0], l=5), zero_policy=ZeroPolicy.CLAMP)
        assert np.isfinite(out.z1[0])
        assert out.z1[0] == pytest.approx(math.sqrt(-2.0 * math.log(2.0 ** -6)))
        assert out.skipped == []

    def test_zero_clamp_raw_array(self):
        out = box_muller([0.0], [0.0], zero_policy=ZeroPolicy.CLAMP)
        eps = np.finfo(np.float64).eps
        assert out.z1[0] == pytest.approx(math.sqrt(-2.0 * math.log(eps)))

    def test_zero_clamp_custom_floor(self):
        out = box_muller([0.0], [0.0], zero_policy=ZeroPolicy.CLAMP, clamp_floor=0.5)
        assert out.z1[0] == pytest.approx(math.sqrt(2.0 * math.log(2.0)))

    def test_invalid_clamp_floor(self):
        with pytest.raises(InvalidParameterError):
            box_muller([0.0], [0.0], zero_policy=ZeroPolicy.CLAMP, clamp_floor=0.0)

    def test_default_clamp_floor(self):
        assert default_clamp_floor(_uniform([0.5], l=15)) == 2.0 ** -16

    def test_negative_u1(self):
        with pytest.raises(NumericDomainError):
            box_muller([-0.1], [0.5])

    def test_nan(self):
        with pytest.raises(NumericDomainError):
            box_muller([float('nan')], [0.5])

    @pytest.mark.parametrize("u1, u2", [([1.0], [0.5]), ([0.5], [1.0]), ([0.5], [-0.5])])
    def test_out_of_unit_interval(self, u1, u2):
        with pytest.raises(InvalidParameterError):
            box_muller(u1, u2)

    def test_two_dimensional_input(self):
        with pytest.raises(InvalidParameterError):
            box_muller([[0.5]], [0.5])

    def test_output_read_only(self):
        out = box_muller([0.5], [0.25])
        with pytest.raises(ValueError):
            out.z1[0] = 0.0

    def test_unknown_zero_policy_rejected_without_zeros(self):
        with pytest.raises(InvalidParameterError):
            box_muller([0.5], [0.1], zero_policy="bogus")

    def test_zero_policy_by_value(self):
        out = box_muller([0.5, 0.0], [0.1, 0.2], zero_policy="skip")
        assert out.skipped == [1]

    def test_clamp_floor_requires_clamp_policy(self):
        with pytest.raises(InvalidParameterError):
            box_muller([0.5], [0.1], clamp_floor=0.01)
        with pytest.raises(InvalidParameterError):
            box_muller([0.5], [0.1], zero_policy=ZeroPolicy.SKIP, clamp_floor=0.01)

    def test_invalid_clamp_floor_without_zeros(self):
        with pytest.raises(InvalidParameterError):
            box_muller([0.5], [0.1], zero_policy=ZeroPolicy.CLAMP, clamp_floor=1.5)

    def test_sequence_copies_inputs(self):
        z1 = np.array([0.1, 0.2])
        z2 = np.array([0.3, 0.4])
        seq = NormalSequence(z1, z2)
        z1[0] = 9.0
        assert seq.z1[0] == 0.1


class TestNormalGenerator:
    def test_generated_streams(self):
        first = TauswortheGenerator(GeneratorParameters(9, 10, 15))
        second = TauswortheGenerator(GeneratorParameters(3, 10, 15))
        gen = NormalGenerator(first, second)
        assert gen.distinct_taps
        out = gen.normal_sequence(zero_policy=ZeroPolicy.SKIP)
        assert len(out) + len(out.skipped) == 2183
        assert np.all(np.isfinite(out.z1))
        assert np.all(np.isfinite(out.z2))

    def test_same_taps_flagged(self):
        first = TauswortheGenerator(GeneratorParameters(3, 10, 15))
        second = TauswortheGenerator(GeneratorParameters(3, 10, 12))
        assert not NormalGenerator(first, second).distinct_taps

    def test_count(self):
        first = TauswortheGenerator(GeneratorParameters(9, 10, 15))
        second = TauswortheGenerator(GeneratorParameters(3, 10, 15))
        out = NormalGenerator(first, second).normal_sequence(
            zero_policy=ZeroPolicy.CLAMP, count=50
        )
        assert len(out) == 50
