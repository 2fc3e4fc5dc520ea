"""
Multivariate normal distribution.

Has no inverse CDF, so samplers draw it with plain sampling and, by default,
match the sample moments to ``mean`` and ``cov`` exactly.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from dataclasses import dataclass
from typing import TYPE_CHECKING

import numpy as np

from pysatl_particles.distributions.parametrizations import ParametricDistribution, constraint
from pysatl_particles.types import CharacteristicName, multivariate_continuous

if TYPE_CHECKING:
    from collections.abc import Callable
    from typing import Any

    from pysatl_particles.types import EuclideanDistributionType, NumericArray


@dataclass(frozen=True, eq=False)
class MvNormal(ParametricDistribution):
    """
    Multivariate normal distribution.

    Parameters
    ----------
    mean : array_like
        Mean vector of length ``d``.
    cov : array_like
        Symmetric positive definite ``d x d`` covariance matrix.
    """

    mean: NumericArray
    cov: NumericArray

    def __post_init__(self) -> None:
        object.__setattr__(self, "mean", np.atleast_1d(np.asarray(self.mean, dtype=np.float64)))
        object.__setattr__(self, "cov", np.atleast_2d(np.asarray(self.cov, dtype=np.float64)))
        super().__post_init__()

    @constraint(description="mean is a finite vector")
    def check_mean(self) -> bool:
        return self.mean.ndim == 1 and bool(np.all(np.isfinite(self.mean)))

    @constraint(description="cov is a d x d matrix")
    def check_cov_shape(self) -> bool:
        d = self.mean.shape[0]
        return self.cov.shape == (d, d)

    @constraint(description="cov is symmetric positive definite")
    def check_cov_positive_definite(self) -> bool:
        if self.cov.shape[0] != self.cov.shape[1]:
            return False
        if not np.allclose(self.cov, self.cov.T):
            return False
        try:
            np.linalg.cholesky(self.cov)
        except np.linalg.LinAlgError:
            return False
        return True

    @property
    def distribution_type(self) -> EuclideanDistributionType:
        return multivariate_continuous(int(self.mean.shape[0]))

    def draw(self, n: int, rng: np.random.Generator) -> NumericArray:
        return rng.multivariate_normal(self.mean, self.cov, size=n)

    def _characteristics(self) -> dict[str, Callable[..., Any]]:
        return {
            CharacteristicName.MEAN: lambda *_: self.mean.copy(),
            CharacteristicName.COV: lambda *_: self.cov.copy(),
        }
