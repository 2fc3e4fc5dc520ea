"""
Particle vectors.

A :class:`ParticleVector` is an ordered collection of ``D`` particle clouds
with a common sample count whose draws are paired index-wise: sample ``i``
of every component belongs to the same joint draw. It is the carrier of
correlation between uncertain values.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import operator
from collections.abc import Sequence
from typing import TYPE_CHECKING, Any, Self, overload

import numpy as np

from pysatl_particles import statistics
from pysatl_particles.particles.particles import Particles
from pysatl_particles.sampling.buffer import SampleBuffer, common_length, new_origin
from pysatl_particles.sampling.sampler import sample_joint

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable, Iterator

    import numpy.typing as npt

    from pysatl_particles.distributions.distribution import Distribution
    from pysatl_particles.types import NumericArray, RandomState


class ParticleVector(Sequence[Particles]):
    """
    Index-aligned particle clouds ``X_1 .. X_D``.

    Parameters
    ----------
    components : Iterable of Particles or SampleBuffer
        At least one component; all must hold the same number of samples.

    Raises
    ------
    IncompatibleSampleCount
        If components hold different sample counts.
    ValueError
        If no component is given.

    Notes
    -----
    Linear maps act on the sample matrix: ``A @ v`` has components
    ``sum_j A[i, j] * v[j]`` and sample covariance ``A @ cov(v) @ A.T``.
    """

    __slots__ = ("_components",)
    # Keep numpy from broadcasting over the components; ``A @ v`` then
    # reaches ``__rmatmul__``.
    __array_ufunc__ = None

    def __init__(self, components: Iterable[Particles | SampleBuffer]) -> None:
        comps = tuple(c if isinstance(c, Particles) else Particles(c) for c in components)
        if not comps:
            raise ValueError("A particle vector needs at least one component.")
        common_length(c.buffer for c in comps)
        self._components: tuple[Particles, ...] = comps

    @classmethod
    def from_matrix(cls, samples: npt.ArrayLike) -> Self:
        """
        Build a vector from an ``(N, D)`` matrix of joint draws.

        All components share one fresh origin.
        """
        matrix = np.asarray(samples, dtype=np.float64)
        if matrix.ndim == 1:
            matrix = matrix[:, np.newaxis]
        if matrix.ndim != 2:
            raise ValueError("Joint samples must be an (N, D) matrix.")
        origin = new_origin()
        return cls(SampleBuffer(matrix[:, j], origins={origin}) for j in range(matrix.shape[1]))

    @classmethod
    def from_distribution(
        cls,
        n: int,
        distribution: Distribution,
        match_moments: bool = True,
        rng: RandomState = None,
    ) -> Self:
        """Sample a multivariate distribution (see :func:`~pysatl_particles.sampling.sample_joint`)."""
        return cls(sample_joint(n, distribution, match_moments=match_moments, rng=rng))

    # --- Sequence protocol --------------------------------------------------

    def __len__(self) -> int:
        """Return the dimension ``D``."""
        return len(self._components)

    @overload
    def __getitem__(self, index: int) -> Particles: ...
    @overload
    def __getitem__(self, index: slice) -> ParticleVector: ...

    def __getitem__(self, index: int | slice) -> Particles | ParticleVector:
        if isinstance(index, slice):
            return type(self)(self._components[index])
        return self._components[index]

    def __iter__(self) -> Iterator[Particles]:
        return iter(self._components)

    @property
    def dimension(self) -> int:
        return len(self._components)

    @property
    def n(self) -> int:
        """Common sample count ``N``."""
        return self._components[0].n

    @property
    def buffers(self) -> tuple[SampleBuffer, ...]:
        return tuple(c.buffer for c in self._components)

    @property
    def matrix(self) -> NumericArray:
        """Samples as an ``(N, D)`` matrix (a copy)."""
        return np.column_stack([c.values.astype(np.float64, copy=False) for c in self._components])

    # --- Arithmetic ---------------------------------------------------------

    def __matmul__(self, other: npt.ArrayLike) -> ParticleVector | Particles:
        """Row-vector product ``v @ A``."""
        matrix = np.asarray(other, dtype=np.float64)
        return self._linear(self.matrix @ matrix)

    def __rmatmul__(self, other: npt.ArrayLike) -> ParticleVector | Particles:
        """Linear map ``A @ v``."""
        matrix = np.asarray(other, dtype=np.float64)
        return self._linear(self.matrix @ matrix.T)

    def _linear(self, result: NumericArray) -> ParticleVector | Particles:
        parents = self.buffers
        if result.ndim == 1:
            return Particles(SampleBuffer.derived(result, parents))
        return type(self)(SampleBuffer.derived(result[:, j], parents) for j in range(result.shape[1]))

    def _componentwise(
        self, op: Callable[[Any, Any], Any], other: Any, reflected: bool = False
    ) -> ParticleVector:
        if isinstance(other, ParticleVector):
            if len(other) != len(self):
                raise ValueError(f"Dimension mismatch: {len(self)} vs {len(other)}.")
            operands: Sequence[Any] = other._components
        elif isinstance(other, Particles):
            operands = [other] * len(self)
        else:
            arr = np.asarray(other)
            if arr.dtype == object:
                return NotImplemented
            if arr.ndim == 0:
                operands = [other] * len(self)
            elif arr.shape == (len(self),):
                operands = arr.tolist()
            else:
                return NotImplemented
        if reflected:
            return type(self)(op(o, c) for c, o in zip(self._components, operands))
        return type(self)(op(c, o) for c, o in zip(self._components, operands))

    def __add__(self, other: Any) -> ParticleVector:
        return self._componentwise(operator.add, other)

    def __radd__(self, other: Any) -> ParticleVector:
        return self._componentwise(operator.add, other, reflected=True)

    def __sub__(self, other: Any) -> ParticleVector:
        return self._componentwise(operator.sub, other)

    def __rsub__(self, other: Any) -> ParticleVector:
        return self._componentwise(operator.sub, other, reflected=True)

    def __mul__(self, other: Any) -> ParticleVector:
        return self._componentwise(operator.mul, other)

    def __rmul__(self, other: Any) -> ParticleVector:
        return self._componentwise(operator.mul, other, reflected=True)

    def __truediv__(self, other: Any) -> ParticleVector:
        return self._componentwise(operator.truediv, other)

    def __neg__(self) -> ParticleVector:
        return type(self)(-c for c in self._components)

    def map(self, func: Callable[[Particles], Particles]) -> ParticleVector:
        """Apply ``func`` to every component."""
        return type(self)(func(c) for c in self._components)

    # --- Statistics ---------------------------------------------------------

    def mean(self) -> NumericArray:
        """Componentwise sample means."""
        return np.array([c.mean() for c in self._components])

    def cov(self, ddof: int = 1) -> NumericArray:
        return statistics.covariance(self, ddof=ddof)

    def corr(self) -> NumericArray:
        return statistics.correlation(self)

    def __repr__(self) -> str:
        inner = ", ".join(repr(c) for c in self._components)
        return f"ParticleVector([{inner}])"


__all__ = ["ParticleVector"]
