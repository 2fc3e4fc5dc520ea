"""
Particle constructors.

Convenience builders on top of the sampler:

- :func:`make_pm` / :data:`pm` — ``mean ± spread`` clouds;
- :func:`make_uniform_range` / :data:`uniform_range` — uniform clouds on
  an interval;
- :func:`independent` — a vector of independently sampled components;
- :func:`sigma_particles` — the deterministic sigma-point cloud;
- :func:`moment_matched` — external draws recoloured to given moments.
"""

from __future__ import annotations

__author__ = "Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from typing import TYPE_CHECKING, Any

import numpy as np

from pysatl_particles.config import DEFAULT_CONFIG, ParticlesConfig
from pysatl_particles.distributions.builtins import Uniform
from pysatl_particles.errors import InvalidDistribution
from pysatl_particles.particles.particles import Particles
from pysatl_particles.particles.vector import ParticleVector
from pysatl_particles.sampling.buffer import SampleBuffer
from pysatl_particles.sampling.correlation import sigma_points, transform_moments
from pysatl_particles.sampling.sampler import sample
from pysatl_particles.types import as_generator

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable

    import numpy.typing as npt

    from pysatl_particles.distributions.distribution import Distribution
    from pysatl_particles.types import RandomState


def make_pm(config: ParticlesConfig = DEFAULT_CONFIG) -> Callable[..., Any]:
    """
    Build a ``mean ± spread`` constructor bound to ``config``.

    The returned function draws ``config.num_particles`` samples of the
    base distribution and maps them through ``mean + spread * z``. Array
    arguments (broadcast against each other) produce a
    :class:`ParticleVector` of independent components.
    """

    def pm(mean: npt.ArrayLike, spread: npt.ArrayLike, *, rng: RandomState = None) -> Any:
        mean_arr, spread_arr = np.broadcast_arrays(
            np.asarray(mean, dtype=np.float64), np.asarray(spread, dtype=np.float64)
        )
        if not (np.all(np.isfinite(mean_arr)) and np.all(np.isfinite(spread_arr))):
            raise InvalidDistribution("Mean and spread must be finite.")
        if np.any(spread_arr < 0):
            raise InvalidDistribution(f"Spread must be non-negative, got {spread!r}.")

        generator = as_generator(rng)

        def one(mu: float, s: float) -> Particles:
            base = sample(
                config.num_particles,
                config.base_distribution,
                systematic=config.systematic,
                permute=config.permute,
                rng=generator,
            )
            return Particles(SampleBuffer.derived(mu + s * base.array, [base]))

        if mean_arr.ndim == 0:
            return one(float(mean_arr), float(spread_arr))
        return ParticleVector(
            one(mu, s) for mu, s in zip(mean_arr.ravel().tolist(), spread_arr.ravel().tolist())
        )

    return pm


def make_uniform_range(config: ParticlesConfig = DEFAULT_CONFIG) -> Callable[..., Any]:
    """Build a ``uniform_range(low, high)`` constructor bound to ``config``."""

    def uniform_range(
        low: npt.ArrayLike, high: npt.ArrayLike, *, rng: RandomState = None
    ) -> Any:
        lows, highs = np.broadcast_arrays(
            np.asarray(low, dtype=np.float64), np.asarray(high, dtype=np.float64)
        )
        generator = as_generator(rng)

        def one(lo: float, hi: float) -> Particles:
            return Particles(
                config.num_particles,
                Uniform(lower_bound=lo, upper_bound=hi),
                systematic=config.systematic,
                permute=config.permute,
                rng=generator,
            )

        if lows.ndim == 0:
            return one(float(lows), float(highs))
        return ParticleVector(
            one(lo, hi) for lo, hi in zip(lows.ravel().tolist(), highs.ravel().tolist())
        )

    return uniform_range


pm = make_pm()
uniform_range = make_uniform_range()


def independent(
    distributions: Iterable[Distribution],
    n: int | None = None,
    systematic: bool = True,
    permute: bool = True,
    rng: RandomState = None,
) -> ParticleVector:
    """
    Sample every univariate distribution separately.

    Each component gets a fresh origin. With ``permute=False`` the
    components keep the sorted quantile order and their covariance is
    refused by the statistics as misaligned.
    """
    n = DEFAULT_CONFIG.num_particles if n is None else n
    generator = as_generator(rng)
    return ParticleVector(
        Particles(n, d, systematic=systematic, permute=permute, rng=generator)
        for d in distributions
    )


def sigma_particles(mean: npt.ArrayLike, cov: npt.ArrayLike) -> ParticleVector:
    """
    Deterministic ``2D + 1`` sample cloud with exactly the given moments.

    Raises
    ------
    InvalidDistribution
        If ``cov`` is not symmetric positive definite.
    """
    return ParticleVector.from_matrix(sigma_points(mean, cov))


def moment_matched(
    samples: npt.ArrayLike, mean: npt.ArrayLike, cov: npt.ArrayLike
) -> ParticleVector:
    """Transform an ``(N, D)`` draw matrix to have the given mean and covariance."""
    return ParticleVector.from_matrix(transform_moments(samples, mean, cov))


__all__ = [
    "independent",
    "make_pm",
    "make_uniform_range",
    "moment_matched",
    "pm",
    "sigma_particles",
    "uniform_range",
]
