"""
Continuous uniform distribution on ``[lower_bound, upper_bound]``.
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
class Uniform(ParametricDistribution):
    """
    Continuous uniform distribution.

    Parameters
    ----------
    lower_bound : float, default 0.0
    upper_bound : float, default 1.0
    """

    lower_bound: float = 0.0
    upper_bound: float = 1.0

    @constraint(description="lower_bound < upper_bound")
    def check_lower_less_than_upper(self) -> bool:
        """Check that lower bound is strictly less than upper bound."""
        return bool(self.lower_bound < self.upper_bound)

    @constraint(description="bounds are finite")
    def check_bounds_finite(self) -> bool:
        return math.isfinite(self.lower_bound) and math.isfinite(self.upper_bound)

    @property
    def distribution_type(self) -> EuclideanDistributionType:
        return UnivariateContinuous

    @property
    def width(self) -> float:
        return self.upper_bound - self.lower_bound

    def pdf(self, x: NumericArray) -> NumericArray:
        x = np.asarray(x)
        inside = (x >= self.lower_bound) & (x <= self.upper_bound)
        return cast("NumericArray", np.where(inside, 1.0 / self.width, 0.0))

    def cdf(self, x: NumericArray) -> NumericArray:
        return cast(
            "NumericArray", np.clip((np.asarray(x) - self.lower_bound) / self.width, 0.0, 1.0)
        )

    def ppf(self, p: NumericArray) -> NumericArray:
        p = np.asarray(p, dtype=np.float64)
        if np.any((p < 0) | (p > 1)):
            raise ValueError("Probability must be in [0, 1]")
        return cast("NumericArray", self.lower_bound + p * self.width)

    def draw(self, n: int, rng: np.random.Generator) -> NumericArray:
        return rng.uniform(self.lower_bound, self.upper_bound, size=n)

    def _characteristics(self) -> dict[str, Callable[..., Any]]:
        return {
            CharacteristicName.PDF: self.pdf,
            CharacteristicName.CDF: self.cdf,
            CharacteristicName.PPF: self.ppf,
            CharacteristicName.MEAN: lambda *_: 0.5 * (self.lower_bound + self.upper_bound),
            CharacteristicName.VAR: lambda *_: self.width**2 / 12,
        }
