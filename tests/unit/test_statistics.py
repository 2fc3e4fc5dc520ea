from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import numpy as np
import pytest

from pysatl_particles import statistics
from pysatl_particles.distributions import Normal
from pysatl_particles.errors import MisalignedParticles
from pysatl_particles.particles import Particles
from pysatl_particles.sampling import SampleBuffer


class TestMoments:
    def setup_method(self) -> None:
        self.samples = np.array([1.0, 2.0, 3.0, 4.0, 10.0])
        self.x = Particles(self.samples)

    def test_mean(self) -> None:
        assert statistics.mean(self.x) == pytest.approx(4.0)

    def test_variance_is_unbiased_by_default(self) -> None:
        assert statistics.var(self.x) == pytest.approx(np.var(self.samples, ddof=1))
        assert statistics.var(self.x, ddof=0) == pytest.approx(np.var(self.samples))

    def test_std(self) -> None:
        assert statistics.std(self.x) == pytest.approx(np.sqrt(statistics.var(self.x)))

    def test_accepts_buffers(self) -> None:
        assert statistics.mean(self.x.buffer) == statistics.mean(self.x)

    def test_rejects_plain_arrays(self) -> None:
        with pytest.raises(TypeError):
            statistics.mean(self.samples)

    def test_boolean_cloud_is_a_probability(self) -> None:
        flags = Particles(np.array([True, False, True, True]))
        assert statistics.mean(flags) == pytest.approx(0.75)


class TestQuantiles:
    def setup_method(self) -> None:
        self.x = Particles(np.arange(101, dtype=float))

    def test_scalar_level(self) -> None:
        q = statistics.quantile(self.x, 0.25)
        assert isinstance(q, float)
        assert q == pytest.approx(25.0)

    def test_array_levels(self) -> None:
        np.testing.assert_allclose(statistics.quantile(self.x, [0.0, 0.5, 1.0]), [0.0, 50.0, 100.0])

    @pytest.mark.parametrize("q", [-0.1, 1.5, float("nan")])
    def test_invalid_level(self, q) -> None:
        with pytest.raises(ValueError, match="Quantile levels"):
            statistics.quantile(self.x, q)

    def test_median(self) -> None:
        assert statistics.median(self.x) == pytest.approx(50.0)

    def test_interval(self) -> None:
        lo, hi = statistics.interval(self.x, 0.9)
        assert lo == pytest.approx(5.0)
        assert hi == pytest.approx(95.0)

    @pytest.mark.parametrize("level", [0.0, 1.0, 1.2])
    def test_invalid_interval_level(self, level) -> None:
        with pytest.raises(ValueError):
            statistics.interval(self.x, level)

    def test_extrema(self) -> None:
        assert statistics.extrema(self.x) == (0.0, 100.0)


class TestAlignment:
    def test_shared_origin_is_aligned(self) -> None:
        buffer = SampleBuffer([1.0, 2.0, 3.0], ordered=True)
        derived = SampleBuffer.derived(np.array([2.0, 4.0, 6.0]), [buffer])
        assert statistics.check_alignment([buffer, derived]) == 3

    def test_shuffled_independent_buffers_are_aligned(self) -> None:
        a = SampleBuffer([1.0, 2.0, 3.0])
        b = SampleBuffer([3.0, 1.0, 2.0])
        assert statistics.check_alignment([a, b]) == 3

    def test_ordered_independent_buffers_are_misaligned(self) -> None:
        a = SampleBuffer([1.0, 2.0, 3.0], ordered=True)
        b = SampleBuffer([3.0, 1.0, 2.0])
        with pytest.raises(MisalignedParticles, match="Components 0 and 1"):
            statistics.check_alignment([a, b])

    def test_length_mismatch(self) -> None:
        with pytest.raises(MisalignedParticles, match="different sample counts"):
            statistics.check_alignment([SampleBuffer([1.0, 2.0]), SampleBuffer([1.0])])

    def test_empty(self) -> None:
        with pytest.raises(ValueError):
            statistics.check_alignment([])


class TestCovariance:
    def setup_method(self) -> None:
        self.x = Particles(5000, Normal(0.0, 1.0), rng=11)
        self.noise = Particles(5000, Normal(0.0, 1.0), rng=12)

    def test_covariance_of_derived_values(self) -> None:
        y = 3 * self.x + 1
        cov = statistics.covariance([self.x, y])
        assert cov.shape == (2, 2)
        assert cov[0, 1] == pytest.approx(3 * self.x.var())
        assert statistics.correlation([self.x, y])[0, 1] == pytest.approx(1.0)

    def test_independent_draws_are_uncorrelated(self) -> None:
        corr = statistics.correlation([self.x, self.noise])
        assert abs(corr[0, 1]) < 0.05

    def test_single_component(self) -> None:
        cov = statistics.covariance(self.x)
        assert cov.shape == (1, 1)
        assert cov[0, 0] == pytest.approx(self.x.var())

    def test_unpermuted_draws_are_rejected(self) -> None:
        sorted_x = Particles(100, Normal(), permute=False, rng=1)
        sorted_y = Particles(100, Normal(), permute=False, rng=2)
        with pytest.raises(MisalignedParticles):
            statistics.covariance([sorted_x, sorted_y])

    def test_unpermuted_draws_with_their_transforms(self) -> None:
        sorted_x = Particles(100, Normal(), permute=False, rng=1)
        cov = statistics.covariance([sorted_x, sorted_x**2])
        assert cov.shape == (2, 2)
