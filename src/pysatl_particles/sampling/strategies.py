"""
Sampling Strategies
===================

This module defines the pluggable strategies turning a univariate
distribution into a sample buffer:

- :class:`SamplingStrategy` — protocol.
- :class:`PlainSamplingStrategy` — ``n`` i.i.d. draws, using the
  distribution's direct generator or inverse transform sampling.
- :class:`SystematicSamplingStrategy` — one uniform offset ``u`` and the
  evenly spaced quantile levels ``(i - 1 + u) / n`` mapped through ``ppf``.

Notes
-----
- Strategies are stateless; randomness comes from the generator passed in.
- Every returned buffer starts a fresh draw origin.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Protocol

import numpy as np

from pysatl_particles.errors import InvalidDistribution
from pysatl_particles.sampling.buffer import SampleBuffer
from pysatl_particles.types import CharacteristicName

if TYPE_CHECKING:
    from pysatl_particles.distributions.distribution import Distribution
    from pysatl_particles.types import NumericArray

_OPEN_UNIT_LOW = float(np.nextafter(0.0, 1.0))


def _checked(values: Any, n: int, distr: Distribution) -> NumericArray:
    arr = np.asarray(values, dtype=np.float64).reshape(-1)
    if arr.shape != (n,):
        raise InvalidDistribution(
            f"{type(distr).__name__} produced {arr.size} samples instead of {n}."
        )
    if not np.all(np.isfinite(arr)):
        raise InvalidDistribution(
            f"{type(distr).__name__} produced non-finite samples; check its parameters."
        )
    return arr


class SamplingStrategy(Protocol):
    """Protocol for univariate sampling strategies (return a :class:`SampleBuffer`)."""

    def sample(self, n: int, distr: Distribution, rng: np.random.Generator) -> SampleBuffer: ...


class PlainSamplingStrategy(SamplingStrategy):
    """
    Plain Monte Carlo sampling.

    Uses ``distr.draw`` when the distribution generates variates itself and
    falls back to applying ``ppf`` to i.i.d. uniforms ``U ~ U(0, 1)``.
    """

    def sample(self, n: int, distr: Distribution, rng: np.random.Generator) -> SampleBuffer:
        draw = getattr(distr, "draw", None)
        if callable(draw):
            values = draw(n, rng)
        else:
            ppf = distr.query_method(CharacteristicName.PPF)
            values = ppf(rng.uniform(_OPEN_UNIT_LOW, 1.0, size=n))
        return SampleBuffer(_checked(values, n, distr))


@dataclass(frozen=True, slots=True)
class SystematicSamplingStrategy(SamplingStrategy):
    """
    Systematic (stratified) sampling through the inverse CDF.

    Parameters
    ----------
    permute : bool, default True
        Shuffle the draws after generation. When ``False`` the buffer keeps
        the sorted quantile order and is flagged ``ordered``.
    """

    permute: bool = True

    @staticmethod
    def levels(n: int, rng: np.random.Generator) -> NumericArray:
        """Return the ``n`` quantile levels ``(i + u) / n`` for ``i = 0..n-1``."""
        u = rng.random()
        while u == 0.0:
            u = rng.random()
        return (np.arange(n, dtype=np.float64) + u) / n

    def sample(self, n: int, distr: Distribution, rng: np.random.Generator) -> SampleBuffer:
        ppf = distr.query_method(CharacteristicName.PPF)
        values = _checked(ppf(self.levels(n, rng)), n, distr)
        if self.permute:
            values = rng.permutation(values)
        return SampleBuffer(values, ordered=not self.permute)
