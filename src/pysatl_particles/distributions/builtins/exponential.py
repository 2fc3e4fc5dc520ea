"""
Exponential distribution with rate ``lambda_``.
"""

from __future__ import annotations

__author__ = "Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import math
from dataclasses import dataclass
from typing import TYPE_CHECKING, cast

import numpy as np

from pysatl_particles.distributions.parametrizations import ParametricDistribution, constraint
from pysatl_particles.types import CharacteristicName, UnivariateContinuous

if TYPE_CHECKING:
    from collections.abc import Callable
    from typing import Any

    from pysatl_particles.types import EuclideanDistributionType, NumericArray


@dataclass(frozen=True)
class Exponential(ParametricDistribution):
    """
    Exponential distribution.

    Probability density function:
        f(x) = λ * exp(-λx) for x ≥ 0

    Parameters
    ----------
    lambda_ : float, default 1.0
        Rate parameter.
    """

    lambda_: float = 1.0

    @constraint(description="lambda > 0")
    def check_lambda_positive(self) -> bool:
        return bool(self.lambda_ > 0) and math.isfinite(self.lambda_)

    @property
    def distribution_type(self) -> EuclideanDistributionType:
        return UnivariateContinuous

    def pdf(self, x: NumericArray) -> NumericArray:
        x = np.asarray(x, dtype=np.float64)
        return cast("NumericArray", np.where(x >= 0, self.lambda_ * np.exp(-self.lambda_ * x), 0.0))

    def cdf(self, x: NumericArray) -> NumericArray:
        x = np.asarray(x, dtype=np.float64)
        return cast("NumericArray", np.where(x >= 0, -np.expm1(-self.lambda_ * x), 0.0))

    def ppf(self, p: NumericArray) -> NumericArray:
        p = np.asarray(p, dtype=np.float64)
        if np.any((p < 0) | (p > 1)):
            raise ValueError("Probability must be in [0, 1]")
        return cast("NumericArray", -np.log1p(-p) / self.lambda_)

    def draw(self, n: int, rng: np.random.Generator) -> NumericArray:
        return rng.exponential(1.0 / self.lambda_, size=n)

    def _characteristics(self) -> dict[str, Callable[..., Any]]:
        return {
            CharacteristicName.PDF: self.pdf,
            CharacteristicName.CDF: self.cdf,
            CharacteristicName.PPF: self.ppf,
            CharacteristicName.MEAN: lambda *_: 1.0 / self.lambda_,
            CharacteristicName.VAR: lambda *_: 1.0 / self.lambda_**2,
        }
