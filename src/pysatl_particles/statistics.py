"""
Statistics Extractor
====================

Summary statistics of particle clouds.

Univariate statistics accept a :class:`~pysatl_particles.particles.Particles`
or a :class:`~pysatl_particles.sampling.SampleBuffer`. Boolean clouds are
read as ``0/1`` values, so ``mean(x > 0)`` estimates a probability.

Covariance-sensitive statistics (:func:`covariance`, :func:`correlation`)
pair draws index-wise and refuse operands whose pairing is not meaningful,
see :func:`check_alignment`.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import logging
from itertools import combinations
from typing import TYPE_CHECKING, Any

import numpy as np

from pysatl_particles.errors import MisalignedParticles
from pysatl_particles.sampling.buffer import SampleBuffer

if TYPE_CHECKING:
    from collections.abc import Iterable

    import numpy.typing as npt

    from pysatl_particles.types import NumericArray

logger = logging.getLogger(__name__)


def as_buffer(x: Any) -> SampleBuffer:
    """Return the sample buffer behind ``x``."""
    if isinstance(x, SampleBuffer):
        return x
    buffer = getattr(x, "buffer", None)
    if isinstance(buffer, SampleBuffer):
        return buffer
    raise TypeError(f"Expected particles or a sample buffer, got {type(x).__name__}.")


def _values(x: Any) -> NumericArray:
    return as_buffer(x).array.astype(np.float64, copy=False)


def mean(x: Any) -> float:
    """Sample mean."""
    return float(np.mean(_values(x)))


def var(x: Any, ddof: int = 1) -> float:
    """Sample variance, unbiased by default (``ddof=1``)."""
    return float(np.var(_values(x), ddof=ddof))


def std(x: Any, ddof: int = 1) -> float:
    """Sample standard deviation, ``sqrt(var(x, ddof))``."""
    return float(np.std(_values(x), ddof=ddof))


def quantile(x: Any, q: npt.ArrayLike) -> Any:
    """
    Empirical quantile(s) of the draws.

    Parameters
    ----------
    x : Particles or SampleBuffer
        Cloud.
    q : float or array_like
        Probability level(s) in ``[0, 1]``.

    Returns
    -------
    float or NumericArray
        A float for scalar ``q``, an array otherwise.

    Raises
    ------
    ValueError
        If a level lies outside ``[0, 1]``.
    """
    levels = np.asarray(q, dtype=np.float64)
    if np.any((levels < 0.0) | (levels > 1.0)) or np.any(np.isnan(levels)):
        raise ValueError(f"Quantile levels must lie in [0, 1], got {q!r}.")
    result = np.quantile(_values(x), levels)
    return float(result) if result.ndim == 0 else result


def median(x: Any) -> float:
    return float(np.median(_values(x)))


def interval(x: Any, level: float = 0.95) -> tuple[float, float]:
    """
    Central interval holding ``level`` of the draws.

    Returns
    -------
    tuple[float, float]
        Quantiles at ``(1 - level) / 2`` and ``(1 + level) / 2``.
    """
    if not 0.0 < level < 1.0:
        raise ValueError(f"Interval level must lie in (0, 1), got {level!r}.")
    tail = (1.0 - level) / 2.0
    lo, hi = np.quantile(_values(x), [tail, 1.0 - tail])
    return float(lo), float(hi)


def extrema(x: Any) -> tuple[float, float]:
    """Smallest and largest draw."""
    values = _values(x)
    return float(values.min()), float(values.max())


def check_alignment(buffers: Iterable[SampleBuffer]) -> int:
    """
    Check that buffers can be paired index-wise.

    Buffers are aligned when they hold the same number of draws and every
    pair either derives from a common sampling event or consists of
    buffers in exchangeable (shuffled) order. Pairing the sorted quantile
    order of a non-permuted systematic draw with an unrelated buffer yields
    arbitrary correlations.

    Returns
    -------
    int
        The common number of draws.

    Raises
    ------
    MisalignedParticles
        If the pairing of draws is not meaningful.
    """
    buffers = list(buffers)
    if not buffers:
        raise ValueError("At least one component is required.")
    lengths = {len(b) for b in buffers}
    if len(lengths) > 1:
        raise MisalignedParticles(
            f"Components hold different sample counts {sorted(lengths)} and cannot be paired."
        )
    for (i, a), (j, b) in combinations(enumerate(buffers), 2):
        if (a.ordered or b.ordered) and not a.shares_origin(b):
            raise MisalignedParticles(
                f"Components {i} and {j} come from independent draws and at least one of "
                "them keeps the sorted order of a non-permuted systematic sample."
            )
    return lengths.pop()


def _components(vector: Any) -> list[SampleBuffer]:
    if isinstance(vector, SampleBuffer) or hasattr(vector, "buffer"):
        return [as_buffer(vector)]
    return [as_buffer(c) for c in vector]


def _matrix(vector: Any) -> NumericArray:
    buffers = _components(vector)
    check_alignment(buffers)
    return np.column_stack([b.array.astype(np.float64, copy=False) for b in buffers])


def covariance(vector: Any, ddof: int = 1) -> NumericArray:
    """
    Sample covariance matrix of a particle vector.

    Parameters
    ----------
    vector : ParticleVector or Iterable of Particles
        Components ``X_1 .. X_D`` with a common sample count.
    ddof : int, default 1
        Delta degrees of freedom.

    Returns
    -------
    NumericArray
        ``D x D`` matrix.

    Raises
    ------
    MisalignedParticles
        If the components cannot be paired index-wise.
    """
    matrix = _matrix(vector)
    return np.atleast_2d(np.cov(matrix, rowvar=False, ddof=ddof))


def correlation(vector: Any) -> NumericArray:
    """Pearson correlation matrix of a particle vector (see :func:`covariance`)."""
    matrix = _matrix(vector)
    if np.any(np.ptp(matrix, axis=0) == 0.0):
        logger.debug("Correlation of a constant component is undefined")
    return np.atleast_2d(np.corrcoef(matrix, rowvar=False))


__all__ = [
    "as_buffer",
    "check_alignment",
    "correlation",
    "covariance",
    "extrema",
    "interval",
    "mean",
    "median",
    "quantile",
    "std",
    "var",
]
