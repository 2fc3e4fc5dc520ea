"""
Sampling subpackage

Construction of sample buffers:

- immutable buffers and draw origins (:mod:`.buffer`);
- plain and systematic strategies (:mod:`.strategies`);
- sampler entry points (:mod:`.sampler`);
- sigma points and moment matching (:mod:`.correlation`).
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from .buffer import SampleBuffer, common_length, new_origin
from .correlation import cholesky_factor, sigma_points, transform_moments
from .sampler import choose_strategy, sample, sample_joint
from .strategies import PlainSamplingStrategy, SamplingStrategy, SystematicSamplingStrategy

__all__ = [
    # buffers
    "SampleBuffer",
    "common_length",
    "new_origin",
    # strategies
    "SamplingStrategy",
    "PlainSamplingStrategy",
    "SystematicSamplingStrategy",
    # sampler
    "sample",
    "sample_joint",
    "choose_strategy",
    # correlation
    "cholesky_factor",
    "sigma_points",
    "transform_moments",
]
