"""
Distributions subpackage

Sources of randomness consumed by the samplers:

- distribution protocol (:mod:`.distribution`);
- analytical and fitted characteristic computations (:mod:`.computation`);
- numerical conversions (:mod:`.fitters`);
- declarative parameter constraints (:mod:`.parametrizations`);
- built-in families (:mod:`.builtins`);
- adapter for frozen :mod:`scipy.stats` distributions (:mod:`.external`).
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from .builtins import Exponential, MvNormal, Normal, Uniform
from .computation import (
    AnalyticalComputation,
    ComputationStrategy,
    DefaultComputationStrategy,
    FittedComputationMethod,
)
from .distribution import Distribution, DrawableDistribution
from .external import ScipyDistribution
from .parametrizations import ParametricDistribution, ParametrizationConstraint, constraint

__all__ = [
    # computation primitives
    "AnalyticalComputation",
    "FittedComputationMethod",
    "ComputationStrategy",
    "DefaultComputationStrategy",
    # distribution
    "Distribution",
    "DrawableDistribution",
    "ParametricDistribution",
    "ParametrizationConstraint",
    "constraint",
    # builtins
    "Normal",
    "Uniform",
    "Exponential",
    "MvNormal",
    # adapters
    "ScipyDistribution",
]
