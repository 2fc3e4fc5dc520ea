"""
Propagation of uncertainty through ordinary numeric functions.

This package contains the primitive registry, the propagation engine and
the built-in branching primitives.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from .configuration import (
    MATH_UFUNCS,
    default_engine,
    primitive_registry,
    register_primitive,
    reset_primitive_registry,
)
from .engine import PropagationEngine, apply, propagate, replay
from .primitives import clamp, ifelse
from .registry import DEFAULT_ENTRY, PrimitiveEntry, PrimitiveRegistry

__all__ = [
    "DEFAULT_ENTRY",
    "MATH_UFUNCS",
    "PrimitiveEntry",
    "PrimitiveRegistry",
    "PropagationEngine",
    "apply",
    "clamp",
    "default_engine",
    "ifelse",
    "primitive_registry",
    "propagate",
    "register_primitive",
    "replay",
    "reset_primitive_registry",
]
