"""
Propagation Engine
==================

Applies ordinary numeric functions to particle clouds.

Dispatch
--------
* Unregistered functions (and ``VECTORIZED`` entries) are called once with
  the particle arguments themselves; arithmetic inside them routes through
  numpy ufuncs to :meth:`PropagationEngine.dispatch_ufunc`, which runs the
  ufunc over whole sample buffers.
* ``ELEMENTWISE`` entries are replayed once per sample index with plain
  Python scalars in place of every particle argument.

A function that branches on an uncertain value while being called
vectorized fails with :class:`~pysatl_particles.errors.UnregisteredBranchingOperation`
naming the function.

Notes
-----
Sample buffers are immutable and the engine keeps no per-call state, so
independent propagations may run concurrently as long as the registry is
not modified meanwhile.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import functools
import logging
from typing import TYPE_CHECKING, Any

import numpy as np

from pysatl_particles.errors import UnregisteredBranchingOperation
from pysatl_particles.particles.particles import Particles
from pysatl_particles.particles.vector import ParticleVector
from pysatl_particles.propagation.registry import operation_name
from pysatl_particles.sampling.buffer import SampleBuffer, common_length

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping, Sequence

    from pysatl_particles.propagation.registry import PrimitiveRegistry

logger = logging.getLogger(__name__)

# Ufuncs whose semantics over whole buffers are not index-wise.
_UNSUPPORTED_UFUNCS = frozenset(
    uf for uf in (np.matmul, getattr(np, "vecdot", None)) if isinstance(uf, np.ufunc)
)

# Ufuncs keeping boolean semantics; every other ufunc sees booleans as 0/1.
_BOOLEAN_UFUNCS = frozenset(
    {
        np.logical_and,
        np.logical_or,
        np.logical_xor,
        np.logical_not,
        np.bitwise_and,
        np.bitwise_or,
        np.bitwise_xor,
        np.invert,
        np.equal,
        np.not_equal,
        np.less,
        np.less_equal,
        np.greater,
        np.greater_equal,
    }
)


def _operand_buffers(values: Sequence[Any]) -> list[SampleBuffer]:
    buffers: list[SampleBuffer] = []
    for value in values:
        if isinstance(value, Particles):
            buffers.append(value.buffer)
        elif isinstance(value, ParticleVector):
            buffers.extend(c.buffer for c in value)
    return buffers


def _per_index(value: Any) -> list[Any] | None:
    if isinstance(value, Particles):
        return value.buffer.array.tolist()
    if isinstance(value, ParticleVector):
        return list(value.matrix)
    return None


def _assemble(results: list[Any], parents: Sequence[SampleBuffer]) -> Any:
    """Turn per-index results into particles derived from ``parents``."""
    first = results[0]
    if isinstance(first, tuple):
        try:
            columns = list(zip(*results, strict=True))
        except (TypeError, ValueError) as exc:
            raise TypeError("Elementwise results must be tuples of the same length.") from exc
        return tuple(Particles(SampleBuffer.derived(col, parents)) for col in columns)

    if any(isinstance(r, (Particles, ParticleVector)) for r in results):
        raise TypeError("An elementwise primitive returned particles for a scalar sample.")
    try:
        arr = np.asarray(results)
    except ValueError as exc:
        raise TypeError("Elementwise results must have the same shape for every sample.") from exc
    if arr.dtype == object:
        raise TypeError(f"Elementwise results must be numeric, got {type(first).__name__}.")
    if arr.ndim == 1:
        return Particles(SampleBuffer.derived(arr, parents))
    if arr.ndim == 2:
        return ParticleVector(SampleBuffer.derived(arr[:, j], parents) for j in range(arr.shape[1]))
    raise TypeError("Elementwise results must be scalars, tuples or vectors.")


def _numeric(value: Any) -> Any:
    if isinstance(value, np.ndarray) and value.dtype == np.bool_:
        return value.astype(np.float64)
    return value


def _wrap(result: Any, parents: Sequence[SampleBuffer]) -> Particles:
    return Particles(SampleBuffer.derived(result, parents))


class PropagationEngine:
    """
    Applies functions to particles according to a :class:`PrimitiveRegistry`.

    Parameters
    ----------
    registry : PrimitiveRegistry
        Policy table consulted on every call.
    """

    def __init__(self, registry: PrimitiveRegistry) -> None:
        self._registry = registry

    @property
    def registry(self) -> PrimitiveRegistry:
        return self._registry

    def apply(self, func: Callable[..., Any], /, *args: Any, **kwargs: Any) -> Any:
        """
        Apply ``func`` to arguments that may contain particles.

        Without particle arguments ``func`` is called unchanged. Otherwise the
        registry decides between one vectorized call and per-sample replay.

        Returns
        -------
        Any
            A :class:`Particles` (or a tuple of them for multi-output
            functions) of the common sample count.

        Raises
        ------
        IncompatibleSampleCount
            If particle arguments hold different sample counts.
        UnregisteredBranchingOperation
            If a vectorized call branches on an uncertain value.
        """
        buffers = _operand_buffers([*args, *kwargs.values()])
        if not buffers:
            return func(*args, **kwargs)

        entry = self._registry.lookup(func)
        if entry.is_elementwise:
            return self._replay(func, args, kwargs, buffers)

        common_length(buffers)
        impl = entry.implementation if entry.implementation is not None else func
        try:
            if isinstance(impl, np.ufunc):
                result = self.dispatch_ufunc(impl, "__call__", *args, **kwargs)
                if result is NotImplemented:
                    raise TypeError(f"{operation_name(func)} does not support these operands.")
                return result
            return impl(*args, **kwargs)
        except UnregisteredBranchingOperation as exc:
            if exc.operation is not None:
                raise
            name = operation_name(func)
            raise UnregisteredBranchingOperation(
                f"{name} branches on an uncertain value or converts it to a Python number "
                "(math.* functions do so inside other functions). Register it with "
                "register_primitive(), call it through replay() to evaluate it per sample, "
                "or use the numpy ufuncs (np.sin, np.exp, ...) in its body.",
                operation=name,
            ) from exc

    def replay(self, func: Callable[..., Any], /, *args: Any, **kwargs: Any) -> Any:
        """Evaluate ``func`` once per sample index regardless of its registration."""
        buffers = _operand_buffers([*args, *kwargs.values()])
        if not buffers:
            return func(*args, **kwargs)
        return self._replay(func, args, kwargs, buffers)

    def _replay(
        self,
        func: Callable[..., Any],
        args: Sequence[Any],
        kwargs: Mapping[str, Any],
        buffers: Sequence[SampleBuffer],
    ) -> Any:
        n = common_length(buffers)
        logger.debug("Replaying %s over %d samples", operation_name(func), n)

        arg_columns = [_per_index(a) for a in args]
        kw_columns = {k: _per_index(v) for k, v in kwargs.items()}
        results = []
        for i in range(n):
            call_args = [a if col is None else col[i] for a, col in zip(args, arg_columns)]
            call_kwargs = {
                k: v if kw_columns[k] is None else kw_columns[k][i] for k, v in kwargs.items()
            }
            results.append(func(*call_args, **call_kwargs))
        return _assemble(results, buffers)

    def dispatch_ufunc(self, ufunc: np.ufunc, method: str, *inputs: Any, **kwargs: Any) -> Any:
        """
        Evaluate a numpy ufunc over particle inputs.

        Only plain calls with scalar or particle operands are supported;
        reductions, ``out=`` arguments and non-scalar arrays are declined
        with ``NotImplemented``.
        """
        if method != "__call__" or "out" in kwargs or ufunc in _UNSUPPORTED_UFUNCS:
            return NotImplemented

        buffers: list[SampleBuffer] = []
        for value in inputs:
            if isinstance(value, Particles):
                buffers.append(value.buffer)
            elif isinstance(value, ParticleVector) or np.ndim(value) != 0:
                return NotImplemented
        if not buffers:
            return NotImplemented

        if self._registry.is_elementwise(ufunc):
            return self._replay(ufunc, inputs, kwargs, buffers)

        common_length(buffers)
        arrays = [v.buffer.array if isinstance(v, Particles) else v for v in inputs]
        if ufunc not in _BOOLEAN_UFUNCS:
            arrays = [_numeric(a) for a in arrays]
        result = ufunc(*arrays, **kwargs)
        if isinstance(result, tuple):
            return tuple(_wrap(r, buffers) for r in result)
        return _wrap(result, buffers)


def _resolve(engine: PropagationEngine | None) -> PropagationEngine:
    if engine is not None:
        return engine
    from pysatl_particles.propagation.configuration import default_engine

    return default_engine()


def propagate(
    func: Callable[..., Any] | None = None,
    /,
    *,
    engine: PropagationEngine | None = None,
) -> Any:
    """
    Decorator making ``func`` accept particles.

    The wrapped function dispatches through ``engine`` (the default engine
    when omitted, resolved at call time). Usable bare or with arguments.
    """

    def decorate(f: Callable[..., Any]) -> Callable[..., Any]:
        @functools.wraps(f)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            return _resolve(engine).apply(f, *args, **kwargs)

        return wrapper

    return decorate if func is None else decorate(func)


def apply(func: Callable[..., Any], /, *args: Any, **kwargs: Any) -> Any:
    """Apply ``func`` through the default engine."""
    return _resolve(None).apply(func, *args, **kwargs)


def replay(func: Callable[..., Any], /, *args: Any, **kwargs: Any) -> Any:
    """Evaluate ``func`` per sample through the default engine."""
    return _resolve(None).replay(func, *args, **kwargs)
