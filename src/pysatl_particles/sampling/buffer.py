"""
Sample Buffers
==============

This module defines the immutable storage primitive of a particle cloud.

A :class:`SampleBuffer` is a fixed-length one-dimensional array of draws.
Equal indices across buffers denote the same Monte-Carlo draw; to reason
about that pairing each buffer also records the sampling events its draws
derive from (``origins``) and whether its index order is the sorted quantile
order of a non-permuted systematic draw (``ordered``).
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from itertools import count
from typing import TYPE_CHECKING, Any

import numpy as np

from pysatl_particles.errors import IncompatibleSampleCount

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

    import numpy.typing as npt

_origin_counter = count(1)


def new_origin() -> int:
    """Allocate an identifier for a fresh sampling event."""
    return next(_origin_counter)


class SampleBuffer:
    """
    Immutable array-backed sample container.

    Parameters
    ----------
    data : array_like
        One-dimensional sequence of draws. Floating point data is stored as
        ``float64``; boolean data (results of comparisons) keeps its dtype.
    origins : Iterable[int], optional
        Sampling events the draws derive from. A fresh origin is allocated
        when omitted.
    ordered : bool, default False
        Whether the index order is the sorted quantile order.

    Raises
    ------
    ValueError
        If data is not one-dimensional or is empty.
    """

    __slots__ = ("_data", "_origins", "_ordered")

    def __init__(
        self,
        data: npt.ArrayLike,
        origins: Iterable[int] | None = None,
        ordered: bool = False,
    ) -> None:
        arr = np.asarray(data)
        if arr.dtype != np.bool_:
            arr = arr.astype(np.float64, copy=True)
        else:
            arr = arr.copy()
        if arr.ndim != 1:
            raise ValueError("SampleBuffer expects a 1D array of draws.")
        if arr.size == 0:
            raise ValueError("SampleBuffer expects at least one draw.")
        arr.flags.writeable = False

        self._data = arr
        self._origins = frozenset(origins) if origins is not None else frozenset({new_origin()})
        self._ordered = bool(ordered)

    @classmethod
    def derived(
        cls, data: npt.ArrayLike, parents: Iterable[SampleBuffer]
    ) -> SampleBuffer:
        """
        Build a buffer computed index-wise from ``parents``.

        The result inherits the union of the parents' origins and is ordered
        if any parent is.
        """
        parents = tuple(parents)
        origins: frozenset[int] = frozenset().union(*(p.origins for p in parents))
        return cls(data, origins=origins, ordered=any(p.ordered for p in parents))

    def __len__(self) -> int:
        """Return the number of draws (N)."""
        return int(self._data.shape[0])

    def __iter__(self) -> Iterator[Any]:
        """Iterate over draws as Python scalars."""
        return iter(self._data.tolist())

    def __getitem__(self, index: int) -> Any:
        """Return draw ``index`` as a Python scalar."""
        return self._data[index].item()

    def __repr__(self) -> str:
        return f"SampleBuffer(n={len(self)}, dtype={self._data.dtype}, ordered={self._ordered})"

    @property
    def array(self) -> npt.NDArray[Any]:
        """Return the read-only backing array."""
        return self._data

    @property
    def n(self) -> int:
        """Alias for ``len(buffer)``."""
        return len(self)

    @property
    def dtype(self) -> np.dtype[Any]:
        return self._data.dtype

    @property
    def is_boolean(self) -> bool:
        return bool(self._data.dtype == np.bool_)

    @property
    def origins(self) -> frozenset[int]:
        """Sampling events the draws derive from."""
        return self._origins

    @property
    def ordered(self) -> bool:
        """Whether the index order is the quantile order of the draw."""
        return self._ordered

    def shares_origin(self, other: SampleBuffer) -> bool:
        """Check whether both buffers derive from a common sampling event."""
        return not self._origins.isdisjoint(other._origins)


def common_length(buffers: Iterable[SampleBuffer]) -> int:
    """
    Return the sample count shared by ``buffers``.

    Raises
    ------
    IncompatibleSampleCount
        If buffers hold a different number of draws.
    ValueError
        If no buffer is given.
    """
    lengths = {len(b) for b in buffers}
    if not lengths:
        raise ValueError("At least one buffer is required.")
    if len(lengths) > 1:
        raise IncompatibleSampleCount(
            f"Particles with different sample counts cannot be combined: {sorted(lengths)}"
        )
    return lengths.pop()
