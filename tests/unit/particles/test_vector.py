from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import numpy as np
import pytest

from pysatl_particles.distributions import MvNormal, Normal
from pysatl_particles.errors import IncompatibleSampleCount, MisalignedParticles
from pysatl_particles.particles import ParticleVector, Particles, independent


class VectorTestBase:
    N = 1000

    def setup_method(self) -> None:
        self.rng = np.random.default_rng(99)
        self.mean = np.array([1.0, -2.0])
        self.cov = np.array([[2.0, 0.8], [0.8, 1.0]])
        self.vector = ParticleVector.from_distribution(
            self.N, MvNormal(self.mean, self.cov), rng=self.rng
        )


class TestConstruction(VectorTestBase):
    def test_from_distribution(self) -> None:
        assert len(self.vector) == self.vector.dimension == 2
        assert self.vector.n == self.N
        assert isinstance(self.vector[0], Particles)
        assert self.vector[0].buffer.shares_origin(self.vector[1].buffer)

    def test_mismatched_counts(self) -> None:
        with pytest.raises(IncompatibleSampleCount):
            ParticleVector([Particles([1.0, 2.0]), Particles([1.0, 2.0, 3.0])])

    def test_empty(self) -> None:
        with pytest.raises(ValueError):
            ParticleVector([])

    def test_from_matrix(self) -> None:
        matrix = self.rng.normal(size=(50, 3))
        vector = ParticleVector.from_matrix(matrix)
        np.testing.assert_array_equal(vector.matrix, matrix)
        assert vector[0].buffer.origins == vector[2].buffer.origins

    def test_slicing_and_iteration(self) -> None:
        matrix = self.rng.normal(size=(20, 3))
        vector = ParticleVector.from_matrix(matrix)
        head = vector[:2]
        assert isinstance(head, ParticleVector)
        assert len(head) == 2
        assert [c.n for c in vector] == [20, 20, 20]


class TestStatistics(VectorTestBase):
    def test_moments_are_matched(self) -> None:
        np.testing.assert_allclose(self.vector.mean(), self.mean, atol=1e-10)
        np.testing.assert_allclose(self.vector.cov(), self.cov, atol=1e-10)

    def test_correlation(self) -> None:
        corr = self.vector.corr()
        expected = 0.8 / np.sqrt(2.0 * 1.0)
        assert corr[0, 1] == pytest.approx(expected)
        np.testing.assert_allclose(np.diag(corr), [1.0, 1.0])


class TestLinearAlgebra(VectorTestBase):
    def test_covariance_law(self) -> None:
        a = np.array([[1.0, 2.0], [0.5, -1.0], [3.0, 0.0]])
        transformed = a @ self.vector

        assert isinstance(transformed, ParticleVector)
        assert len(transformed) == 3
        np.testing.assert_allclose(transformed.mean(), a @ self.mean, atol=1e-10)
        np.testing.assert_allclose(transformed.cov(), a @ self.cov @ a.T, atol=1e-9)

    def test_projection_to_scalar(self) -> None:
        weights = np.array([1.0, 1.0])
        total = self.vector @ weights
        assert isinstance(total, Particles)
        expected_var = self.cov.sum()
        assert total.var() == pytest.approx(expected_var)
        np.testing.assert_allclose(total.values, (self.vector[0] + self.vector[1]).values)

    def test_transformed_components_stay_aligned(self) -> None:
        transformed = np.eye(2) @ self.vector
        assert transformed[0].buffer.shares_origin(self.vector[0].buffer)


class TestComponentwise(VectorTestBase):
    def test_scalar_operations(self) -> None:
        shifted = self.vector + 1.0
        np.testing.assert_allclose(shifted.matrix, self.vector.matrix + 1.0)
        scaled = 2.0 * self.vector
        np.testing.assert_allclose(scaled.matrix, 2.0 * self.vector.matrix)
        np.testing.assert_allclose((-self.vector).matrix, -self.vector.matrix)
        np.testing.assert_allclose((self.vector / 4).matrix, self.vector.matrix / 4)

    def test_array_operand(self) -> None:
        offsets = np.array([10.0, 20.0])
        np.testing.assert_allclose((self.vector + offsets).matrix, self.vector.matrix + offsets)
        np.testing.assert_allclose((offsets - self.vector).matrix, offsets - self.vector.matrix)

    def test_vector_operand(self) -> None:
        doubled = self.vector + self.vector
        np.testing.assert_allclose(doubled.matrix, 2.0 * self.vector.matrix)

    def test_particles_operand(self) -> None:
        scale = Particles(self.N, Normal(1.0, 0.1), rng=self.rng)
        product = scale * self.vector
        assert isinstance(product, ParticleVector)
        np.testing.assert_allclose(
            product.matrix, self.vector.matrix * scale.values[:, np.newaxis]
        )

    def test_dimension_mismatch(self) -> None:
        with pytest.raises(ValueError, match="Dimension mismatch"):
            _ = self.vector + self.vector[:1]

    def test_map(self) -> None:
        squared = self.vector.map(lambda c: c**2)
        np.testing.assert_allclose(squared.matrix, self.vector.matrix**2)


class TestIndependent:
    def test_independent_components(self) -> None:
        vector = independent([Normal(0.0, 1.0), Normal(5.0, 2.0)], n=5000, rng=7)
        assert not vector[0].buffer.shares_origin(vector[1].buffer)
        assert abs(vector.corr()[0, 1]) < 0.05
        np.testing.assert_allclose(vector.mean(), [0.0, 5.0], atol=0.01)

    def test_unpermuted_components_are_misaligned(self) -> None:
        vector = independent([Normal(), Normal()], n=100, permute=False, rng=7)
        with pytest.raises(MisalignedParticles):
            vector.cov()

    def test_linear_map_of_stacked_clouds(self) -> None:
        vector = independent([Normal(0.0, 1.0), Normal(0.0, 3.0)], n=20000, rng=3)
        a = np.array([[1.0, 1.0], [2.0, -1.0]])
        expected = a @ np.diag([1.0, 9.0]) @ a.T
        np.testing.assert_allclose((a @ vector).cov(), expected, rtol=0.05, atol=0.2)
