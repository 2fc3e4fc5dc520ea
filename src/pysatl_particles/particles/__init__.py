"""
Particle clouds

- the uncertain scalar :class:`Particles`;
- index-aligned vectors :class:`ParticleVector`;
- convenience constructors.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from .constructors import (
    independent,
    make_pm,
    make_uniform_range,
    moment_matched,
    pm,
    sigma_particles,
    uniform_range,
)
from .particles import NumericLike, Particles
from .vector import ParticleVector

__all__ = [
    "NumericLike",
    "ParticleVector",
    "Particles",
    "independent",
    "make_pm",
    "make_uniform_range",
    "moment_matched",
    "pm",
    "sigma_particles",
    "uniform_range",
]
