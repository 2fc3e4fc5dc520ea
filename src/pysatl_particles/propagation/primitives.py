"""
Built-in branching primitives.

Scalar functions whose result depends on the value of an argument. Their
scalar bodies (``__wrapped__``) are registered as elementwise primitives by
default, so ``ifelse(x > 0, x**2, -x**2)`` picks the branch per sample when
``x`` is uncertain.
"""

from __future__ import annotations

__author__ = "Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import math
from typing import Any

import numpy as np

from pysatl_particles.propagation.engine import propagate


@propagate
def ifelse(condition: Any, if_true: Any, if_false: Any) -> Any:
    """Ternary selection: ``if_true if condition else if_false``."""
    return if_true if condition else if_false


@propagate
def clamp(value: Any, lower: Any, upper: Any) -> Any:
    """Clamp ``value`` into ``[lower, upper]``."""
    if lower > upper:
        raise ValueError(f"Empty clamping interval [{lower}, {upper}].")
    return min(max(value, lower), upper)


def log(x: Any, base: float = math.e) -> Any:
    """Vectorized counterpart of :func:`math.log` with an optional base."""
    if base == math.e:
        return np.log(x)
    return np.log(x) / math.log(base)
