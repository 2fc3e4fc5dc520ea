"""
PySATL Particles
================

Uncertainty propagation with particle clouds: uncertain numbers are
represented by ``N`` equally weighted samples, ordinary numeric code is
applied to them sample-wise, and summary statistics are extracted at the
end.
"""

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from importlib.metadata import version

from .comparison import *
from .comparison import __all__ as _comparison_all
from .config import DEFAULT_CONFIG, ParticlesConfig
from .distributions import *
from .distributions import __all__ as _distr_all
from .errors import *
from .errors import __all__ as _errors_all
from .particles import *
from .particles import __all__ as _particles_all
from .propagation import *
from .propagation import __all__ as _propagation_all
from .sampling import *
from .sampling import __all__ as _sampling_all
from .statistics import (
    correlation,
    covariance,
    extrema,
    interval,
    mean,
    median,
    quantile,
    std,
    var,
)
from .types import *
from .types import __all__ as _types_all

__version__ = version("pysatl-particles")
__all__ = [
    "__version__",
    "DEFAULT_CONFIG",
    "ParticlesConfig",
    "correlation",
    "covariance",
    "extrema",
    "interval",
    "mean",
    "median",
    "quantile",
    "std",
    "var",
    *_comparison_all,
    *_distr_all,
    *_errors_all,
    *_particles_all,
    *_propagation_all,
    *_sampling_all,
    *_types_all,
]

del _comparison_all
del _distr_all
del _errors_all
del _particles_all
del _propagation_all
del _sampling_all
del _types_all
