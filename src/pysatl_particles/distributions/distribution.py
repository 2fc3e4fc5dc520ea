"""
Distribution Interfaces
=======================

This module defines the public :class:`Distribution` protocol, the narrow
interface through which samplers consume a source of randomness. A
distribution declares its type (kind and dimension), the characteristics it
computes analytically (``ppf``, ``cdf``, ``mean``, ``cov``, ...) and, when it
can, direct draw generation.

Notes
-----
- Systematic sampling needs a ``ppf``; it is either analytical or fitted from
  an analytical ``cdf`` by the distribution's computation strategy.
- Plain sampling uses :meth:`Distribution.draw` if present, otherwise inverse
  transform sampling through ``ppf``.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Mapping
    from typing import Any

    import numpy as np

    from pysatl_particles.distributions.computation import (
        AnalyticalComputation,
        ComputationStrategy,
        Method,
    )
    from pysatl_particles.types import (
        EuclideanDistributionType,
        GenericCharacteristicName,
        NumericArray,
    )


@runtime_checkable
class Distribution(Protocol):
    """Public distribution interface used by samplers."""

    @property
    def distribution_type(self) -> EuclideanDistributionType: ...

    @property
    def analytical_computations(
        self,
    ) -> Mapping[GenericCharacteristicName, AnalyticalComputation[Any, Any]]: ...

    @property
    def computation_strategy(self) -> ComputationStrategy: ...

    @property
    def dimension(self) -> int:
        return self.distribution_type.dimension

    def provides(self, characteristic_name: GenericCharacteristicName) -> bool:
        return self.computation_strategy.can_resolve(characteristic_name, self)

    def query_method(
        self, characteristic_name: GenericCharacteristicName, **options: Any
    ) -> Method[Any, Any]:
        return self.computation_strategy.query_method(characteristic_name, self, **options)

    def calculate_characteristic(
        self, characteristic_name: GenericCharacteristicName, value: Any, **options: Any
    ) -> Any:
        return self.query_method(characteristic_name, **options)(value)


@runtime_checkable
class DrawableDistribution(Distribution, Protocol):
    """Distribution able to generate i.i.d. draws without an inverse CDF."""

    def draw(self, n: int, rng: np.random.Generator) -> NumericArray:
        """
        Draw ``n`` independent samples.

        Returns
        -------
        NumericArray
            Array of shape ``(n,)`` for univariate and ``(n, d)`` for
            multivariate distributions.
        """
        ...
