"""
Particles
=========

The uncertain number: a cloud of ``N`` equally weighted samples.

A :class:`Particles` value wraps an immutable
:class:`~pysatl_particles.sampling.SampleBuffer`. Arithmetic with numbers or
other particles is index-wise and returns new particles; numpy ufuncs are
intercepted through ``__array_ufunc__`` and evaluated by the propagation
engine, so ``np.sin(x)`` and ``x ** 2 + 1`` both yield particles.

Comparisons yield boolean particles. Converting such a value (or any
cloud) to a single ``bool`` or ``float`` only succeeds when every sample
agrees; otherwise
:class:`~pysatl_particles.errors.UnregisteredBranchingOperation` is raised,
since picking one branch for all samples would silently lose the
uncertainty.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from numbers import Integral
from typing import TYPE_CHECKING, Any, Protocol, Self, runtime_checkable

import numpy as np
from numpy.lib.mixins import NDArrayOperatorsMixin

from pysatl_particles import statistics
from pysatl_particles.config import DEFAULT_CONFIG
from pysatl_particles.errors import UnregisteredBranchingOperation
from pysatl_particles.sampling.buffer import SampleBuffer
from pysatl_particles.sampling.sampler import sample

if TYPE_CHECKING:
    import numpy.typing as npt

    from pysatl_particles.distributions.distribution import Distribution
    from pysatl_particles.types import NumericArray, RandomState


@runtime_checkable
class NumericLike(Protocol):
    """
    Structural type of values usable in numeric code.

    Satisfied by Python numbers, numpy scalars and :class:`Particles`.
    """

    def __add__(self, other: Any, /) -> Any: ...
    def __sub__(self, other: Any, /) -> Any: ...
    def __mul__(self, other: Any, /) -> Any: ...
    def __truediv__(self, other: Any, /) -> Any: ...
    def __pow__(self, other: Any, /) -> Any: ...
    def __neg__(self) -> Any: ...


class Particles(NDArrayOperatorsMixin):
    """
    Cloud of ``N`` equally weighted samples of an uncertain scalar.

    Parameters
    ----------
    source : int, SampleBuffer or array_like, optional
        * ``int`` (or ``None`` for the configured default) — number of
          samples drawn from ``distribution``;
        * ``SampleBuffer`` — wrapped as is;
        * array_like — explicit one-dimensional samples.
    distribution : Distribution, optional
        Univariate source distribution, standard normal by default. Only
        valid together with a sample count.
    systematic : bool, default True
        Use systematic sampling when the inverse CDF is available.
    permute : bool, default True
        Shuffle systematic samples.
    rng : numpy.random.Generator, int or None
        Generator or seed.

    Raises
    ------
    InvalidDistribution
        If the distribution cannot be sampled or the count is invalid.
    ValueError
        If explicit samples are empty or not one-dimensional.

    Examples
    --------
    >>> x = Particles(1000, Normal(0.0, 1.0), rng=0)
    >>> y = 2 * x + 1
    """

    __slots__ = ("_buffer",)
    __hash__ = None  # type: ignore[assignment]

    def __init__(
        self,
        source: int | SampleBuffer | npt.ArrayLike | None = None,
        distribution: Distribution | None = None,
        *,
        systematic: bool = True,
        permute: bool = True,
        rng: RandomState = None,
    ) -> None:
        if isinstance(source, SampleBuffer):
            if distribution is not None:
                raise TypeError("A distribution cannot be combined with explicit samples.")
            self._buffer = source
        elif source is None or (isinstance(source, Integral) and not isinstance(source, bool)):
            n = DEFAULT_CONFIG.num_particles if source is None else source
            distr = distribution if distribution is not None else DEFAULT_CONFIG.base_distribution
            self._buffer = sample(n, distr, systematic=systematic, permute=permute, rng=rng)
        else:
            if distribution is not None:
                raise TypeError("A distribution cannot be combined with explicit samples.")
            self._buffer = SampleBuffer(source)

    @classmethod
    def from_samples(cls, samples: npt.ArrayLike) -> Self:
        """Wrap explicit samples, e.g. results of an external simulation."""
        return cls(SampleBuffer(samples))

    @classmethod
    def constant(cls, value: float, n: int | None = None) -> Self:
        """Degenerate cloud with every sample equal to ``value``."""
        n = DEFAULT_CONFIG.num_particles if n is None else n
        return cls(SampleBuffer(np.full(n, value, dtype=np.float64)))

    # --- Buffer access ------------------------------------------------------

    @property
    def buffer(self) -> SampleBuffer:
        return self._buffer

    @property
    def values(self) -> NumericArray:
        """Read-only array of samples."""
        return self._buffer.array

    @property
    def n(self) -> int:
        return len(self._buffer)

    @property
    def is_boolean(self) -> bool:
        return self._buffer.is_boolean

    def __len__(self) -> int:
        return len(self._buffer)

    # --- numpy interoperability --------------------------------------------

    def __array_ufunc__(self, ufunc: np.ufunc, method: str, *inputs: Any, **kwargs: Any) -> Any:
        from pysatl_particles.propagation.configuration import default_engine

        return default_engine().dispatch_ufunc(ufunc, method, *inputs, **kwargs)

    # --- Collapsing to scalars ----------------------------------------------

    def _unanimous(self, what: str) -> Any:
        values = self._buffer.array
        if np.all(values == values[0]):
            return values[0].item()
        raise UnregisteredBranchingOperation(
            f"Cannot convert uncertain particles to {what}: samples disagree. "
            "Branching functions must be registered with register_primitive()."
        )

    def __bool__(self) -> bool:
        truth = self._buffer.array if self.is_boolean else self._buffer.array != 0
        if truth.all():
            return True
        if not truth.any():
            return False
        raise UnregisteredBranchingOperation(
            "The truth value of uncertain particles is ambiguous: it holds for "
            f"{int(truth.sum())} of {truth.size} samples. "
            "Branching functions must be registered with register_primitive()."
        )

    def __float__(self) -> float:
        return float(self._unanimous("float"))

    def __int__(self) -> int:
        return int(self._unanimous("int"))

    def __copy__(self) -> Self:
        return self

    def __deepcopy__(self, memo: dict[int, Any]) -> Self:
        return self

    # --- Statistics ---------------------------------------------------------

    def mean(self) -> float:
        return statistics.mean(self)

    def var(self, ddof: int = 1) -> float:
        return statistics.var(self, ddof=ddof)

    def std(self, ddof: int = 1) -> float:
        return statistics.std(self, ddof=ddof)

    def quantile(self, q: npt.ArrayLike) -> Any:
        return statistics.quantile(self, q)

    def median(self) -> float:
        return statistics.median(self)

    def interval(self, level: float = 0.95) -> tuple[float, float]:
        return statistics.interval(self, level)

    def extrema(self) -> tuple[float, float]:
        return statistics.extrema(self)

    def __repr__(self) -> str:
        if self.is_boolean:
            return f"Particles(n={self.n}, P(true)={self.mean():.4g})"
        if self.n == 1:
            return f"Particles(n=1, {self.values[0]:.6g})"
        return f"Particles(n={self.n}, {self.mean():.6g} ± {self.std():.4g})"

    __str__ = __repr__


__all__ = ["NumericLike", "Particles"]
