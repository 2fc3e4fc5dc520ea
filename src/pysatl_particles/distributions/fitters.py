"""
Numerical conversions between characteristics.

Only the conversion needed by systematic sampling is provided: an inverse
CDF fitted from a monotone CDF by bracket expansion followed by Brent's
root finding.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from math import isfinite
from typing import TYPE_CHECKING

import numpy as np
from scipy import optimize as _sp_optimize

from pysatl_particles.distributions.computation import FittedComputationMethod
from pysatl_particles.types import CharacteristicName, NumericArray

if TYPE_CHECKING:
    from typing import Any

    from pysatl_particles.distributions.distribution import Distribution
    from pysatl_particles.types import ScalarFunc


def _ppf_brentq_from_cdf(
    cdf: ScalarFunc,
    *,
    x0: float = 0.0,
    init_step: float = 1.0,
    expand_factor: float = 2.0,
    max_expand: int = 60,
    x_tol: float = 1e-12,
    max_iter: int = 200,
) -> ScalarFunc:
    """
    Build a scalar ``ppf`` from a scalar ``cdf``.

    Parameters
    ----------
    cdf : Callable[[float], float]
        Monotone CDF ``[-inf, +inf] -> [0, 1]``.
    x0 : float, default 0.0
        Initial bracket center.
    init_step : float, default 1.0
        Initial half-width for the bracket.
    expand_factor : float, default 2.0
        Multiplicative factor for exponential bracket growth.
    max_expand : int, default 60
        Maximum expansions while searching for a valid bracket.
    x_tol : float, default 1e-12
        Absolute tolerance passed to :func:`scipy.optimize.brentq`.
    max_iter : int, default 200
        Maximum Brent iterations.

    Returns
    -------
    Callable[[float], float]
        Scalar ``ppf`` such that ``cdf(ppf(q)) ≈ q``.

    Notes
    -----
    ``q <= 0`` maps to ``-inf`` and ``q >= 1`` maps to ``+inf``. If no
    bracket is found within ``max_expand`` steps the result is ``nan``;
    samplers reject such values.
    """

    def _bracket(q: float) -> tuple[float, float] | None:
        step = init_step
        left, right = x0 - step, x0 + step
        for _ in range(max_expand):
            f_left = float(cdf(left))
            f_right = float(cdf(right))
            if f_left <= q <= f_right:
                return left, right
            step *= expand_factor
            if q < f_left:
                left -= step
            if q > f_right:
                right += step
        return None

    def _ppf(q: float) -> float:
        if q <= 0.0:
            return float("-inf")
        if q >= 1.0:
            return float("inf")

        bracket = _bracket(q)
        if bracket is None:
            return float("nan")
        left, right = bracket
        if not (isfinite(left) and isfinite(right)):
            return float("nan")

        return float(
            _sp_optimize.brentq(
                lambda x: float(cdf(x)) - q, left, right, xtol=x_tol, maxiter=max_iter
            )
        )

    return _ppf


def fit_cdf_to_ppf_1C(
    distribution: Distribution, /, **options: Any
) -> FittedComputationMethod[NumericArray, NumericArray]:
    """
    Fit an array-aware ``ppf`` from the distribution's analytical ``cdf``.

    Parameters
    ----------
    distribution : Distribution
        Univariate continuous distribution exposing a ``cdf``.
    **options
        Forwarded to the bracketing search (``x0``, ``init_step``, ...).

    Returns
    -------
    FittedComputationMethod
        Fitted ``cdf -> ppf`` conversion.
    """
    cdf_method = distribution.analytical_computations[CharacteristicName.CDF]

    def cdf(x: float) -> float:
        return float(cdf_method(x))

    scalar_ppf = _ppf_brentq_from_cdf(cdf, **options)
    vectorized = np.vectorize(scalar_ppf, otypes=[np.float64])

    def _ppf(q: NumericArray, **_: Any) -> NumericArray:
        return np.asarray(vectorized(q), dtype=np.float64)

    return FittedComputationMethod[NumericArray, NumericArray](
        target=CharacteristicName.PPF, sources=[CharacteristicName.CDF], func=_ppf
    )
