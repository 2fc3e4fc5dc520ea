"""
Particle construction defaults.

A :class:`ParticlesConfig` is an immutable value. Constructors are built from
a configuration (see :func:`pysatl_particles.particles.constructors.make_pm`)
instead of reading mutable global state, so changing the defaults means
building new constructors.
"""

from __future__ import annotations

__author__ = "Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from pysatl_particles.distributions.builtins import Normal
from pysatl_particles.errors import InvalidDistribution
from pysatl_particles.sampling.sampler import check_sample_count

if TYPE_CHECKING:
    from pysatl_particles.distributions.distribution import Distribution


@dataclass(frozen=True, slots=True)
class ParticlesConfig:
    """
    Defaults used by the particle constructors.

    Parameters
    ----------
    num_particles : int, default 2000
        Number of samples per cloud.
    base_distribution : Distribution, default Normal(0, 1)
        Standardized univariate distribution transformed affinely by
        ``mean ± spread``.
    systematic : bool, default True
        Use systematic sampling where the inverse CDF is available.
    permute : bool, default True
        Shuffle systematic samples.
    """

    num_particles: int = 2000
    base_distribution: Distribution = field(default_factory=Normal)
    systematic: bool = True
    permute: bool = True

    def __post_init__(self) -> None:
        check_sample_count(self.num_particles)
        dimension = self.base_distribution.distribution_type.dimension
        if dimension != 1:
            raise InvalidDistribution(
                f"Base distribution must be univariate, got dimension {dimension}."
            )


DEFAULT_CONFIG = ParticlesConfig()
