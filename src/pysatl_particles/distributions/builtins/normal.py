"""
Normal distribution.

Gaussian distribution with mean ``mu`` and standard deviation ``sigma``:

    f(x) = 1/(σ√(2π)) * exp(-(x-μ)²/(2σ²))

It is the default base distribution of the ``mean ± spread`` constructor.
"""

from __future__ import annotations

__author__ = "Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import math
from dataclasses import dataclass
from typing import TYPE_CHECKING, cast

import numpy as np
from scipy.special import erf, erfinv

from pysatl_particles.distributions.parametrizations import ParametricDistribution, constraint
from pysatl_particles.types import CharacteristicName, UnivariateContinuous

if TYPE_CHECKING:
    from collections.abc import Callable
    from typing import Any

    from pysatl_particles.types import EuclideanDistributionType, NumericArray


@dataclass(frozen=True)
class Normal(ParametricDistribution):
    """
    Normal (Gaussian) distribution.

    Parameters
    ----------
    mu : float, default 0.0
        Mean of the distribution.
    sigma : float, default 1.0
        Standard deviation of the distribution.
    """

    mu: float = 0.0
    sigma: float = 1.0

    @constraint(description="sigma > 0")
    def check_sigma_positive(self) -> bool:
        """Check that standard deviation is positive."""
        return bool(self.sigma > 0)

    @constraint(description="mu is finite")
    def check_mu_finite(self) -> bool:
        return math.isfinite(self.mu)

    @property
    def distribution_type(self) -> EuclideanDistributionType:
        return UnivariateContinuous

    def pdf(self, x: NumericArray) -> NumericArray:
        coefficient = 1.0 / (self.sigma * np.sqrt(2 * np.pi))
        exponent = -((np.asarray(x) - self.mu) ** 2) / (2 * self.sigma**2)
        return cast("NumericArray", coefficient * np.exp(exponent))

    def cdf(self, x: NumericArray) -> NumericArray:
        z = (np.asarray(x) - self.mu) / (self.sigma * np.sqrt(2))
        return cast("NumericArray", 0.5 * (1 + erf(z)))

    def ppf(self, p: NumericArray) -> NumericArray:
        """
        Percent point function (inverse CDF).

        Raises
        ------
        ValueError
            If probability is outside [0, 1].
        """
        p = np.asarray(p, dtype=np.float64)
        if np.any((p < 0) | (p > 1)):
            raise ValueError("Probability must be in [0, 1]")
        return cast("NumericArray", self.mu + self.sigma * np.sqrt(2) * erfinv(2 * p - 1))

    def draw(self, n: int, rng: np.random.Generator) -> NumericArray:
        return rng.normal(self.mu, self.sigma, size=n)

    def _characteristics(self) -> dict[str, Callable[..., Any]]:
        return {
            CharacteristicName.PDF: self.pdf,
            CharacteristicName.CDF: self.cdf,
            CharacteristicName.PPF: self.ppf,
            CharacteristicName.MEAN: lambda *_: self.mu,
            CharacteristicName.VAR: lambda *_: self.sigma**2,
        }
