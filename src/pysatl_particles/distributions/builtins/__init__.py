"""
Built-in distributions available by default in PySATL particles.
"""

__author__ = "Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"


from pysatl_particles.distributions.builtins.exponential import Exponential
from pysatl_particles.distributions.builtins.multivariate_normal import MvNormal
from pysatl_particles.distributions.builtins.normal import Normal
from pysatl_particles.distributions.builtins.uniform import Uniform

__all__ = [
    "Normal",
    "Uniform",
    "Exponential",
    "MvNormal",
]
