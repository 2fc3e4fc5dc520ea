"""
Core Type Definitions
=====================

Fundamental types and data structures used throughout PySATL particles.
"""

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from collections.abc import Callable
from dataclasses import dataclass
from enum import StrEnum
from typing import Any

import numpy as np
from numpy.typing import NDArray


class Kind(StrEnum):
    """
    Enumeration of distribution kinds.

    Attributes
    ----------
    DISCRETE : str
        Discrete probability distribution.
    CONTINUOUS : str
        Continuous probability distribution.
    """

    DISCRETE = "discrete"
    CONTINUOUS = "continuous"


class DistributionType:
    """Marker base of distribution type descriptors consumed by the samplers."""

    __slots__ = ()


@dataclass(frozen=True, slots=True)
class EuclideanDistributionType(DistributionType):
    """
    Distribution type for Euclidean space distributions.

    Parameters
    ----------
    kind : Kind
        Distribution kind (discrete or continuous).
    dimension : int
        Spatial dimension (e.g., 1 for univariate).
    """

    kind: Kind
    dimension: int

    @property
    def is_univariate(self) -> bool:
        return self.dimension == 1


UnivariateContinuous = EuclideanDistributionType(kind=Kind.CONTINUOUS, dimension=1)
"""Type for univariate continuous distributions."""

UnivariateDiscrete = EuclideanDistributionType(kind=Kind.DISCRETE, dimension=1)
"""Type for univariate discrete distributions."""


def multivariate_continuous(dimension: int) -> EuclideanDistributionType:
    """Type for ``dimension``-variate continuous distributions."""
    return EuclideanDistributionType(kind=Kind.CONTINUOUS, dimension=dimension)


NumericArray = NDArray[np.floating[Any]]
"""Type alias for numeric arrays."""

type GenericCharacteristicName = str
"""Type alias for characteristic names (e.g., 'ppf', 'cdf')."""

ScalarFunc = Callable[[float], float]
"""Type alias for scalar functions (float -> float)."""

type RandomState = np.random.Generator | int | None
"""Seed or generator accepted by every sampling entry point."""


class CharacteristicName(StrEnum):
    """
    Enumeration of distribution characteristics understood by the samplers.

    Note
    ----------
    ``PPF`` drives systematic sampling, ``MEAN`` and ``COV`` drive moment
    matching of multivariate draws. Distributions may expose further
    characteristics; they are simply ignored here.
    """

    PDF = "pdf"
    CDF = "cdf"
    PPF = "ppf"
    MEAN = "mean"
    VAR = "var"
    COV = "cov"


class PrimitivePolicy(StrEnum):
    """
    Dispatch policy of an operation applied to particles.

    Attributes
    ----------
    VECTORIZED : str
        The operation runs once over whole sample buffers.
    ELEMENTWISE : str
        The scalar operation is replayed once per sample index.
    """

    VECTORIZED = "vectorized"
    ELEMENTWISE = "elementwise"


def as_generator(rng: RandomState = None) -> np.random.Generator:
    """Normalize a seed or generator into a :class:`numpy.random.Generator`."""
    if isinstance(rng, np.random.Generator):
        return rng
    return np.random.default_rng(rng)


__all__ = [
    "Kind",
    "EuclideanDistributionType",
    "UnivariateContinuous",
    "UnivariateDiscrete",
    "multivariate_continuous",
    "GenericCharacteristicName",
    "DistributionType",
    "ScalarFunc",
    "NumericArray",
    "RandomState",
    "CharacteristicName",
    "PrimitivePolicy",
    "as_generator",
]
