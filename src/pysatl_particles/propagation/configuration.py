"""
Default configuration and cached accessors for the global primitive registry.

- No auto-configuration in constructor.
- Provide ``primitive_registry()`` with ``@lru_cache`` that builds the
  shared instance and seeds it with the built-in primitives.
- ``register_primitive`` is the decorator users apply to branching functions.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import builtins
import math
from functools import lru_cache
from typing import TYPE_CHECKING, Any

import numpy as np
from scipy import special

from pysatl_particles.propagation import primitives
from pysatl_particles.propagation.engine import PropagationEngine, propagate
from pysatl_particles.propagation.registry import PrimitiveRegistry
from pysatl_particles.types import PrimitivePolicy

if TYPE_CHECKING:
    from collections.abc import Callable

# Scalar-only math functions and the ufuncs evaluating them over buffers.
MATH_UFUNCS: dict[Callable[..., Any], Callable[..., Any]] = {
    math.sin: np.sin,
    math.cos: np.cos,
    math.tan: np.tan,
    math.asin: np.arcsin,
    math.acos: np.arccos,
    math.atan: np.arctan,
    math.atan2: np.arctan2,
    math.sinh: np.sinh,
    math.cosh: np.cosh,
    math.tanh: np.tanh,
    math.asinh: np.arcsinh,
    math.acosh: np.arccosh,
    math.atanh: np.arctanh,
    math.exp: np.exp,
    math.expm1: np.expm1,
    math.log: primitives.log,
    math.log1p: np.log1p,
    math.log2: np.log2,
    math.log10: np.log10,
    math.sqrt: np.sqrt,
    math.pow: np.power,
    math.hypot: np.hypot,
    math.fabs: np.fabs,
    math.floor: np.floor,
    math.ceil: np.ceil,
    math.trunc: np.trunc,
    math.copysign: np.copysign,
    math.degrees: np.degrees,
    math.radians: np.radians,
    math.erf: special.erf,
    math.erfc: special.erfc,
    math.gamma: special.gamma,
    math.lgamma: special.gammaln,
    abs: np.absolute,
}


def _configure(reg: PrimitiveRegistry) -> None:
    """Default PySATL configuration for the primitive registry."""
    for func in (builtins.max, builtins.min, primitives.ifelse, primitives.clamp):
        reg.register(func, PrimitivePolicy.ELEMENTWISE)
        wrapped = getattr(func, "__wrapped__", None)
        if wrapped is not None:
            reg.register(wrapped, PrimitivePolicy.ELEMENTWISE)

    for func, ufunc in MATH_UFUNCS.items():
        reg.register(func, PrimitivePolicy.VECTORIZED, implementation=ufunc)


@lru_cache(maxsize=1)
def primitive_registry() -> PrimitiveRegistry:
    """
    Return a cached, configured primitive registry (shared instance).

    Notes
    -----
    Engines may also be built over private registries, e.g. in tests:
    ``PropagationEngine(PrimitiveRegistry())``.
    """
    reg = PrimitiveRegistry()
    _configure(reg)
    return reg


@lru_cache(maxsize=1)
def default_engine() -> PropagationEngine:
    """Return the cached engine over :func:`primitive_registry`."""
    return PropagationEngine(primitive_registry())


def reset_primitive_registry() -> None:
    """
    Reset the cached primitive registry and default engine.

    Registrations made through :func:`register_primitive` are dropped.
    """
    default_engine.cache_clear()
    primitive_registry.cache_clear()


def register_primitive(
    func: Callable[..., Any] | None = None,
    /,
    *,
    registry: PrimitiveRegistry | None = None,
) -> Any:
    """
    Register a scalar branching function as an elementwise primitive.

    Used as a decorator, bare or with a ``registry`` argument. The returned
    wrapper accepts particles and replays the original function once per
    sample; the original function stays registered too, so it can also be
    passed to :func:`~pysatl_particles.propagation.engine.apply`.

    Examples
    --------
    >>> @register_primitive
    ... def f(x):
    ...     return x * x if x > 0 else -x * x
    """

    def decorate(f: Callable[..., Any]) -> Callable[..., Any]:
        reg = registry if registry is not None else primitive_registry()
        engine = PropagationEngine(reg) if registry is not None else None
        reg.register(f, PrimitivePolicy.ELEMENTWISE)
        wrapper = propagate(f, engine=engine)
        reg.register(wrapper, PrimitivePolicy.ELEMENTWISE)
        return wrapper  # type: ignore[no-any-return]

    return decorate if func is None else decorate(func)
