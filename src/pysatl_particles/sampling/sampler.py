"""
Sampler
=======

Entry points building sample buffers from distributions.

- :func:`sample` — univariate buffer, systematic by default.
- :func:`sample_joint` — one index-aligned buffer per dimension of a
  multivariate distribution, optionally moment matched.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import logging
from numbers import Integral
from typing import TYPE_CHECKING

import numpy as np

from pysatl_particles.errors import InvalidDistribution
from pysatl_particles.sampling.buffer import SampleBuffer, new_origin
from pysatl_particles.sampling.correlation import transform_moments
from pysatl_particles.sampling.strategies import (
    PlainSamplingStrategy,
    SamplingStrategy,
    SystematicSamplingStrategy,
)
from pysatl_particles.types import CharacteristicName, as_generator

if TYPE_CHECKING:
    from pysatl_particles.distributions.distribution import Distribution
    from pysatl_particles.types import RandomState

logger = logging.getLogger(__name__)


def check_sample_count(n: object) -> int:
    """
    Validate a requested number of samples.

    Raises
    ------
    InvalidDistribution
        If ``n`` is not a positive integer.
    """
    if isinstance(n, bool) or not isinstance(n, Integral) or n <= 0:
        raise InvalidDistribution(f"Number of samples must be a positive integer, got {n!r}.")
    return int(n)


def choose_strategy(distr: Distribution, systematic: bool, permute: bool) -> SamplingStrategy:
    """
    Pick the sampling strategy for a univariate distribution.

    Systematic sampling is used when requested and the distribution's
    inverse CDF can be resolved; otherwise plain sampling is used.
    """
    if systematic:
        if distr.provides(CharacteristicName.PPF):
            return SystematicSamplingStrategy(permute=permute)
        logger.debug(
            "%s has no inverse CDF; falling back to plain sampling", type(distr).__name__
        )
    return PlainSamplingStrategy()


def sample(
    n: int,
    distribution: Distribution,
    systematic: bool = True,
    permute: bool = True,
    rng: RandomState = None,
) -> SampleBuffer:
    """
    Draw a univariate sample buffer.

    Parameters
    ----------
    n : int
        Number of samples.
    distribution : Distribution
        Univariate source distribution.
    systematic : bool, default True
        Use systematic sampling when the inverse CDF is available.
    permute : bool, default True
        Shuffle a systematic sample.
    rng : numpy.random.Generator, int or None
        Generator or seed.

    Returns
    -------
    SampleBuffer
        Buffer of exactly ``n`` finite draws with a fresh origin.

    Raises
    ------
    InvalidDistribution
        If ``n`` is invalid, the distribution is multivariate, or it cannot
        produce ``n`` finite samples.
    """
    n = check_sample_count(n)
    dimension = distribution.distribution_type.dimension
    if dimension != 1:
        raise InvalidDistribution(
            f"Expected a univariate distribution, got dimension {dimension}; use sample_joint."
        )
    strategy = choose_strategy(distribution, systematic, permute)
    return strategy.sample(n, distribution, as_generator(rng))


def sample_joint(
    n: int,
    distribution: Distribution,
    match_moments: bool = True,
    rng: RandomState = None,
) -> tuple[SampleBuffer, ...]:
    """
    Draw index-aligned buffers from a multivariate distribution.

    Systematic sampling does not apply to multivariate distributions; the
    draws are plain. If the distribution provides ``mean`` and ``cov`` and
    ``match_moments`` is set, the draws are whitened and recoloured so that
    their sample moments match exactly.

    Returns
    -------
    tuple[SampleBuffer, ...]
        One buffer per dimension, all sharing a single origin.

    Raises
    ------
    InvalidDistribution
        If ``n`` is invalid or the distribution cannot generate ``n`` finite
        ``d``-dimensional draws.
    """
    n = check_sample_count(n)
    d = distribution.distribution_type.dimension
    draw = getattr(distribution, "draw", None)
    if not callable(draw):
        raise InvalidDistribution(
            f"{type(distribution).__name__} cannot generate multivariate draws."
        )

    values = np.asarray(draw(n, as_generator(rng)), dtype=np.float64)
    if values.size != n * d or not np.all(np.isfinite(values)):
        raise InvalidDistribution(
            f"{type(distribution).__name__} did not produce {n} finite draws of dimension {d}."
        )
    values = values.reshape(n, d)

    if match_moments and all(
        distribution.provides(c) for c in (CharacteristicName.MEAN, CharacteristicName.COV)
    ):
        mean = distribution.calculate_characteristic(CharacteristicName.MEAN, None)
        cov = distribution.calculate_characteristic(CharacteristicName.COV, None)
        values = transform_moments(values, mean, cov)

    origin = new_origin()
    return tuple(SampleBuffer(values[:, j], origins={origin}) for j in range(d))
