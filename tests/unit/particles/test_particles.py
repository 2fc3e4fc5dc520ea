"""
Tests for the Particles value type

Construction, index-wise arithmetic, numpy interoperability and the guard
against collapsing an uncertain value to a single scalar.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import copy
import math

import numpy as np
import pytest

from pysatl_particles.distributions import Exponential, Normal, Uniform
from pysatl_particles.errors import (
    IncompatibleSampleCount,
    InvalidDistribution,
    UnregisteredBranchingOperation,
)
from pysatl_particles.particles import NumericLike, Particles
from pysatl_particles.propagation import replay
from pysatl_particles.sampling import SampleBuffer


class ParticlesTestBase:
    N = 2000

    def setup_method(self) -> None:
        self.rng = np.random.default_rng(31415)
        self.x = Particles(self.N, Normal(0.0, 1.0), rng=self.rng)
        self.y = Particles(self.N, Uniform(1.0, 2.0), rng=self.rng)


class TestConstruction(ParticlesTestBase):
    def test_from_distribution(self) -> None:
        p = Particles(1000, Normal(2.0, 0.5), rng=0)
        assert p.n == len(p) == 1000
        assert p.mean() == pytest.approx(2.0, abs=0.01)
        assert p.std() == pytest.approx(0.5, abs=0.02)

    def test_defaults(self) -> None:
        p = Particles(rng=0)
        assert p.n == 2000
        assert p.mean() == pytest.approx(0.0, abs=0.01)

    def test_from_samples(self) -> None:
        p = Particles([1.0, 2.0, 3.0])
        np.testing.assert_array_equal(p.values, [1.0, 2.0, 3.0])
        assert Particles.from_samples(np.arange(4)).n == 4

    def test_from_buffer(self) -> None:
        buffer = SampleBuffer([1.0, 2.0])
        assert Particles(buffer).buffer is buffer

    def test_constant(self) -> None:
        p = Particles.constant(3.5, 10)
        assert p.n == 10
        assert p.std() == 0.0

    def test_samples_with_distribution(self) -> None:
        with pytest.raises(TypeError):
            Particles([1.0, 2.0], Normal())

    @pytest.mark.parametrize("n", [0, -1])
    def test_invalid_count(self, n) -> None:
        with pytest.raises(InvalidDistribution):
            Particles(n, Normal())

    def test_non_systematic(self) -> None:
        p = Particles(500, Exponential(1.0), systematic=False, rng=1)
        assert p.values.min() >= 0.0

    def test_unpermuted_systematic_is_sorted(self) -> None:
        p = Particles(100, Normal(), permute=False, rng=1)
        assert p.buffer.ordered
        assert np.all(np.diff(p.values) > 0)


class TestArithmetic(ParticlesTestBase):
    def test_scalar_operations(self) -> None:
        xs = self.x.values
        np.testing.assert_allclose((self.x + 1).values, xs + 1)
        np.testing.assert_allclose((1 + self.x).values, xs + 1)
        np.testing.assert_allclose((2 * self.x - 3).values, 2 * xs - 3)
        np.testing.assert_allclose((1 - self.x).values, 1 - xs)
        np.testing.assert_allclose((self.x / 4).values, xs / 4)
        np.testing.assert_allclose((self.x**2).values, xs**2)
        np.testing.assert_allclose((2**self.x).values, 2**xs)
        np.testing.assert_allclose((-self.x).values, -xs)
        np.testing.assert_allclose(abs(self.x).values, np.abs(xs))

    def test_particle_operations_are_indexwise(self) -> None:
        np.testing.assert_allclose((self.x * self.y).values, self.x.values * self.y.values)
        np.testing.assert_allclose((self.x / self.y).values, self.x.values / self.y.values)

    def test_numpy_scalars_broadcast(self) -> None:
        np.testing.assert_allclose((self.x + np.float64(1.5)).values, self.x.values + 1.5)
        np.testing.assert_allclose((self.x * np.array(2.0)).values, self.x.values * 2.0)

    def test_mismatched_counts(self) -> None:
        other = Particles(self.N + 1, Normal(), rng=self.rng)
        with pytest.raises(IncompatibleSampleCount):
            _ = self.x + other

    def test_array_operands_are_rejected(self) -> None:
        with pytest.raises(TypeError):
            _ = self.x + np.ones(self.N)
        with pytest.raises(TypeError):
            _ = self.x + [1.0, 2.0]

    def test_result_tracks_origins(self) -> None:
        z = self.x + self.y
        assert z.buffer.shares_origin(self.x.buffer)
        assert z.buffer.shares_origin(self.y.buffer)
        assert not self.x.buffer.shares_origin(self.y.buffer)

    def test_inputs_are_untouched(self) -> None:
        before = self.x.values.copy()
        _ = self.x * 10 + self.y
        np.testing.assert_array_equal(self.x.values, before)


class TestUfuncs(ParticlesTestBase):
    def test_unary_ufunc(self) -> None:
        result = np.sin(self.x)
        assert isinstance(result, Particles)
        np.testing.assert_allclose(result.values, np.sin(self.x.values))

    def test_binary_ufunc_with_scalar(self) -> None:
        result = np.maximum(self.x, 0.0)
        assert isinstance(result, Particles)
        assert result.values.min() == 0.0

    def test_multiple_outputs(self) -> None:
        quotient, remainder = np.divmod(self.y * 10, 3)
        assert isinstance(quotient, Particles)
        np.testing.assert_allclose((quotient * 3 + remainder).values, (self.y * 10).values)

    def test_out_argument_is_rejected(self) -> None:
        with pytest.raises(TypeError):
            np.add(self.x, 1.0, out=np.empty(self.N))

    def test_reductions_are_rejected(self) -> None:
        with pytest.raises(TypeError):
            np.add.reduce(self.x)

    def test_matmul_is_rejected(self) -> None:
        with pytest.raises(TypeError):
            _ = self.x @ self.y


class TestComparisons(ParticlesTestBase):
    def test_comparison_yields_boolean_cloud(self) -> None:
        positive = self.x > 0
        assert isinstance(positive, Particles)
        assert positive.is_boolean
        assert positive.mean() == pytest.approx(0.5, abs=0.02)
        np.testing.assert_array_equal(positive.values, self.x.values > 0)

    def test_boolean_cloud_arithmetic(self) -> None:
        count = (self.x > 0) + 0
        assert not count.is_boolean
        assert set(np.unique(count.values)) <= {0.0, 1.0}

    def test_boolean_clouds_add_as_counts(self) -> None:
        z = Particles(self.N, Normal(0.0, 1.0), rng=self.rng)
        count = (self.x > 0) + (z > 0)
        per_sample = replay(lambda a, b: (a > 0) + (b > 0), self.x, z)

        assert not count.is_boolean
        assert count.values.max() == 2.0
        np.testing.assert_array_equal(count.values, per_sample.values)
        assert count.mean() == pytest.approx(per_sample.mean())

    def test_boolean_cloud_negation_and_difference(self) -> None:
        positive = self.x > 0
        np.testing.assert_array_equal((-positive).values, -(self.x.values > 0).astype(float))
        diff = positive - (self.x > 1)
        np.testing.assert_array_equal(
            diff.values, ((self.x.values > 0) & (self.x.values <= 1)).astype(float)
        )

    def test_logical_operators_stay_boolean(self) -> None:
        both = (self.x > 0) & (self.y > 1.5)
        assert both.is_boolean
        assert (~both).is_boolean
        assert ((self.x > 0) == (self.x > 0)).is_boolean

    def test_equality_is_indexwise(self) -> None:
        assert (self.x == self.x).values.all()

    def test_unhashable(self) -> None:
        with pytest.raises(TypeError):
            hash(self.x)


class TestBranchGuard(ParticlesTestBase):
    def test_ambiguous_truth_value(self) -> None:
        with pytest.raises(UnregisteredBranchingOperation, match="ambiguous"):
            if self.x > 0:
                pass

    def test_guard_is_type_error(self) -> None:
        with pytest.raises(TypeError):
            bool(self.x > 0)

    def test_unanimous_truth_value(self) -> None:
        assert bool(self.y > 0)
        assert not bool(self.y > 5)
        assert not bool(Particles([0.0, 0.0]))

    def test_float_conversion(self) -> None:
        with pytest.raises(UnregisteredBranchingOperation):
            float(self.x)
        assert float(Particles.constant(2.5, 5)) == 2.5
        assert int(Particles.constant(3.0, 5)) == 3

    def test_math_functions_need_registration(self) -> None:
        with pytest.raises(UnregisteredBranchingOperation):
            math.sin(self.x)

    def test_builtin_max_branches(self) -> None:
        with pytest.raises(UnregisteredBranchingOperation):
            max(self.x, 0.0)


class TestStatisticsShortcuts(ParticlesTestBase):
    def test_methods(self) -> None:
        values = self.x.values
        assert self.x.mean() == pytest.approx(values.mean())
        assert self.x.var() == pytest.approx(values.var(ddof=1))
        assert self.x.std(ddof=0) == pytest.approx(values.std())
        assert self.x.median() == pytest.approx(np.median(values))
        assert self.x.quantile(0.9) == pytest.approx(np.quantile(values, 0.9))
        lo, hi = self.x.interval(0.9)
        assert lo == pytest.approx(np.quantile(values, 0.05))
        assert hi == pytest.approx(np.quantile(values, 0.95))
        assert self.x.extrema() == (values.min(), values.max())


class TestMisc(ParticlesTestBase):
    def test_repr(self) -> None:
        assert "±" in repr(self.x)
        assert repr(self.x).startswith(f"Particles(n={self.N}")
        assert "P(true)" in repr(self.x > 0)

    def test_copy_returns_same_object(self) -> None:
        assert copy.copy(self.x) is self.x
        assert copy.deepcopy(self.x) is self.x

    def test_numeric_like(self) -> None:
        assert isinstance(self.x, NumericLike)
        assert isinstance(1.5, NumericLike)


class TestConvergence:
    def test_affine_transform(self) -> None:
        x = Particles(100_000, Normal(0.0, 1.0), rng=2718)
        y = 3 * x + 1
        assert y.mean() == pytest.approx(1.0, abs=0.01)
        assert y.std() == pytest.approx(3.0, rel=0.01)

    def test_product_of_independent_clouds(self) -> None:
        rng = np.random.default_rng(2718)
        x = Particles(100_000, Normal(0.0, 1.0), rng=rng)
        y = Particles(100_000, Normal(0.0, 1.0), rng=rng)
        z = x * y
        assert z.mean() == pytest.approx(0.0, abs=0.02)
        assert z.var() == pytest.approx(1.0, rel=0.05)

    def test_nonlinear_function(self) -> None:
        x = Particles(100_000, Normal(0.0, 1.0), rng=2718)
        assert np.exp(x).mean() == pytest.approx(math.exp(0.5), rel=0.01)
