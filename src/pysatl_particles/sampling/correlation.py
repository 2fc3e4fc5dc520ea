"""
Correlated draws with prescribed moments.

Array-level constructions of multivariate draw matrices (rows are draws,
columns are dimensions):

- :func:`sigma_points` — the ``2d + 1`` deterministic points reproducing a
  mean and covariance exactly.
- :func:`transform_moments` — whitening followed by colouring of an
  externally supplied draw matrix.

Notes
-----
Sigma points must be generated for all dimensions at once. Building ``d``
one-dimensional sigma-point clouds and stacking them pairs the points of
every dimension index-wise, which produces spurious perfect correlation
between the marginals. This misuse is not detected.

:func:`transform_moments` is exact for the first two moments. Since the
whitening uses a Cholesky factor, the structure of the input design (e.g.
stratification) survives only along the first dimension when ``cov`` is not
diagonal.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import logging
from typing import TYPE_CHECKING

import numpy as np
from scipy import linalg as _sp_linalg

from pysatl_particles.errors import InvalidDistribution

if TYPE_CHECKING:
    import numpy.typing as npt

    from pysatl_particles.types import NumericArray

logger = logging.getLogger(__name__)


def _mean_cov(
    mean: npt.ArrayLike, cov: npt.ArrayLike
) -> tuple[NumericArray, NumericArray]:
    mu = np.atleast_1d(np.asarray(mean, dtype=np.float64))
    sigma = np.atleast_2d(np.asarray(cov, dtype=np.float64))
    if mu.ndim != 1:
        raise InvalidDistribution("Mean must be a vector.")
    d = mu.shape[0]
    if sigma.shape != (d, d):
        raise InvalidDistribution(
            f"Covariance of shape {sigma.shape} does not match mean of length {d}."
        )
    if not (np.all(np.isfinite(mu)) and np.all(np.isfinite(sigma))):
        raise InvalidDistribution("Mean and covariance must be finite.")
    return mu, sigma


def cholesky_factor(cov: npt.ArrayLike) -> NumericArray:
    """
    Return the lower Cholesky factor ``L`` with ``L @ L.T == cov``.

    Raises
    ------
    InvalidDistribution
        If ``cov`` is not symmetric positive definite.
    """
    sigma = np.atleast_2d(np.asarray(cov, dtype=np.float64))
    if sigma.shape[0] != sigma.shape[1] or not np.allclose(sigma, sigma.T):
        raise InvalidDistribution("Covariance matrix must be square and symmetric.")
    try:
        return _sp_linalg.cholesky(sigma, lower=True)
    except _sp_linalg.LinAlgError as exc:
        raise InvalidDistribution("Covariance matrix is not positive definite.") from exc


def sigma_points(mean: npt.ArrayLike, cov: npt.ArrayLike) -> NumericArray:
    """
    Deterministic sigma points of a mean/covariance pair.

    Parameters
    ----------
    mean : array_like
        Mean vector ``μ`` of length ``d``.
    cov : array_like
        Symmetric positive definite ``d x d`` covariance ``Σ``.

    Returns
    -------
    NumericArray
        Array of shape ``(2d + 1, d)``: ``μ`` followed by ``μ + √d·L[:, i]``
        and ``μ - √d·L[:, i]`` for every column of the Cholesky factor ``L``.
        Its sample mean is ``μ`` and its sample covariance (``ddof=1``) is
        ``Σ``.
    """
    mu, sigma = _mean_cov(mean, cov)
    d = mu.shape[0]
    spread = np.sqrt(d) * cholesky_factor(sigma).T
    return np.vstack([mu, mu + spread, mu - spread])


def transform_moments(
    samples: npt.ArrayLike, mean: npt.ArrayLike, cov: npt.ArrayLike
) -> NumericArray:
    """
    Affinely transform draws to have exactly the given mean and covariance.

    Parameters
    ----------
    samples : array_like
        Draw matrix of shape ``(n, d)`` (a 1D array is read as ``d = 1``).
    mean : array_like
        Target mean vector of length ``d``.
    cov : array_like
        Target symmetric positive definite covariance.

    Returns
    -------
    NumericArray
        Array of shape ``(n, d)`` whose sample mean equals ``mean`` and whose
        sample covariance (``ddof=1``) equals ``cov``.

    Raises
    ------
    InvalidDistribution
        If shapes disagree, ``n <= d`` or the draws are linearly dependent.
    """
    x = np.asarray(samples, dtype=np.float64)
    if x.ndim == 1:
        x = x[:, np.newaxis]
    if x.ndim != 2:
        raise InvalidDistribution("Samples must be an (n, d) matrix.")
    mu, sigma = _mean_cov(mean, cov)
    n, d = x.shape
    if d != mu.shape[0]:
        raise InvalidDistribution(
            f"Samples of dimension {d} cannot be matched to moments of dimension {mu.shape[0]}."
        )
    if n <= d:
        raise InvalidDistribution(f"Need more than {d} draws to match moments, got {n}.")

    centered = x - x.mean(axis=0)
    try:
        whitening = cholesky_factor(np.atleast_2d(np.cov(centered, rowvar=False)))
    except InvalidDistribution as exc:
        raise InvalidDistribution("Draws are degenerate and cannot be whitened.") from exc

    white = _sp_linalg.solve_triangular(whitening, centered.T, lower=True).T
    logger.debug("Matched moments of %d draws in %d dimensions", n, d)
    return white @ cholesky_factor(sigma).T + mu
