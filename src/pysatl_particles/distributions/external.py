"""
Adapter for distributions provided by :mod:`scipy.stats`.

Wraps a *frozen* scipy distribution (``scipy.stats.norm(0, 1)``,
``scipy.stats.gamma(2.0)``, ``scipy.stats.multivariate_normal(mean, cov)``, ...)
so that the samplers can consume it through the :class:`Distribution`
protocol.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

import numpy as np

from pysatl_particles.distributions.computation import (
    AnalyticalComputation,
    DefaultComputationStrategy,
)
from pysatl_particles.distributions.distribution import Distribution
from pysatl_particles.errors import InvalidDistribution
from pysatl_particles.types import (
    CharacteristicName,
    UnivariateContinuous,
    UnivariateDiscrete,
    multivariate_continuous,
)

if TYPE_CHECKING:
    from collections.abc import Mapping

    from pysatl_particles.distributions.computation import ComputationStrategy
    from pysatl_particles.types import (
        EuclideanDistributionType,
        GenericCharacteristicName,
        NumericArray,
    )


_UNIVARIATE_METHODS = (
    CharacteristicName.PDF,
    CharacteristicName.CDF,
    CharacteristicName.PPF,
)


@dataclass(frozen=True, eq=False)
class ScipyDistribution(Distribution):
    """
    Frozen :mod:`scipy.stats` distribution seen as a :class:`Distribution`.

    Parameters
    ----------
    frozen : Any
        A frozen scipy distribution. Univariate distributions expose
        ``ppf``/``cdf``/``pdf`` (``pmf`` for discrete ones); multivariate
        ones must expose ``mean`` and ``cov`` attributes.

    Raises
    ------
    InvalidDistribution
        If ``frozen`` cannot generate random variates.
    """

    frozen: Any

    def __post_init__(self) -> None:
        if not callable(getattr(self.frozen, "rvs", None)):
            raise InvalidDistribution(
                f"{type(self.frozen).__name__} does not look like a frozen scipy distribution"
            )

    @property
    def is_multivariate(self) -> bool:
        return not hasattr(self.frozen, "ppf")

    @property
    def distribution_type(self) -> EuclideanDistributionType:
        if self.is_multivariate:
            mean = np.atleast_1d(np.asarray(getattr(self.frozen, "mean")))
            return multivariate_continuous(int(mean.shape[0]))
        if hasattr(self.frozen, "pmf"):
            return UnivariateDiscrete
        return UnivariateContinuous

    @property
    def analytical_computations(
        self,
    ) -> Mapping[GenericCharacteristicName, AnalyticalComputation[Any, Any]]:
        frozen = self.frozen
        if self.is_multivariate:
            result: dict[GenericCharacteristicName, AnalyticalComputation[Any, Any]] = {}
            if hasattr(frozen, "mean"):
                result[CharacteristicName.MEAN] = AnalyticalComputation(
                    target=CharacteristicName.MEAN,
                    func=lambda *_: np.atleast_1d(np.asarray(frozen.mean, dtype=np.float64)),
                )
            if hasattr(frozen, "cov"):
                cov = getattr(frozen, "cov")
                result[CharacteristicName.COV] = AnalyticalComputation(
                    target=CharacteristicName.COV,
                    func=lambda *_: np.atleast_2d(
                        np.asarray(cov() if callable(cov) else cov, dtype=np.float64)
                    ),
                )
            return result

        result = {
            name: AnalyticalComputation(target=name, func=getattr(frozen, name))
            for name in _UNIVARIATE_METHODS
            if hasattr(frozen, name)
        }
        result[CharacteristicName.MEAN] = AnalyticalComputation(
            target=CharacteristicName.MEAN, func=lambda *_: float(frozen.mean())
        )
        result[CharacteristicName.VAR] = AnalyticalComputation(
            target=CharacteristicName.VAR, func=lambda *_: float(frozen.var())
        )
        return result

    @property
    def computation_strategy(self) -> ComputationStrategy:
        return DefaultComputationStrategy()

    def draw(self, n: int, rng: np.random.Generator) -> NumericArray:
        return np.asarray(self.frozen.rvs(size=n, random_state=rng), dtype=np.float64)
