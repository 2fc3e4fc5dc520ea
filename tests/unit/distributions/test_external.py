from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import numpy as np
import pytest
from scipy import stats

from pysatl_particles.distributions import ScipyDistribution
from pysatl_particles.errors import InvalidDistribution
from pysatl_particles.types import (
    CharacteristicName,
    UnivariateContinuous,
    UnivariateDiscrete,
)


class TestScipyDistribution:
    def test_continuous(self) -> None:
        distr = ScipyDistribution(stats.gamma(a=2.0, scale=3.0))
        assert distr.distribution_type == UnivariateContinuous
        assert distr.provides(CharacteristicName.PPF)
        assert distr.calculate_characteristic(CharacteristicName.MEAN, None) == pytest.approx(6.0)
        assert distr.calculate_characteristic(CharacteristicName.VAR, None) == pytest.approx(18.0)

        levels = np.array([0.1, 0.5, 0.9])
        np.testing.assert_allclose(
            distr.query_method(CharacteristicName.PPF)(levels),
            stats.gamma(a=2.0, scale=3.0).ppf(levels),
        )

    def test_discrete(self) -> None:
        distr = ScipyDistribution(stats.poisson(mu=4.0))
        assert distr.distribution_type == UnivariateDiscrete
        assert distr.provides(CharacteristicName.PPF)

    def test_multivariate(self) -> None:
        cov = np.array([[1.0, 0.3], [0.3, 2.0]])
        distr = ScipyDistribution(stats.multivariate_normal(mean=[0.0, 1.0], cov=cov))
        assert distr.is_multivariate
        assert distr.dimension == 2
        np.testing.assert_allclose(
            distr.calculate_characteristic(CharacteristicName.COV, None), cov
        )
        draws = distr.draw(10, np.random.default_rng(0))
        assert draws.shape == (10, 2)

    def test_draw_is_reproducible(self) -> None:
        distr = ScipyDistribution(stats.norm())
        a = distr.draw(5, np.random.default_rng(42))
        b = distr.draw(5, np.random.default_rng(42))
        np.testing.assert_array_equal(a, b)

    def test_rejects_non_distributions(self) -> None:
        with pytest.raises(InvalidDistribution):
            ScipyDistribution(object())
