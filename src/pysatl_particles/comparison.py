"""
Comparator
==========

Statistical predicates over uncertain values, returning plain ``bool``.

Unlike ``<`` and ``==`` on particles, which compare sample by sample and
produce boolean clouds, these predicates summarize each cloud by its mean
and standard deviation (or by a quantile) and answer a single question.
Plain numbers are treated as certain values with zero spread.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from typing import Any

from pysatl_particles import statistics


def _is_cloud(x: Any) -> bool:
    try:
        statistics.as_buffer(x)
    except TypeError:
        return False
    return True


def _summary(x: Any) -> tuple[float, float]:
    if _is_cloud(x):
        return statistics.mean(x), statistics.std(x)
    return float(x), 0.0


def _check_k(k: float) -> None:
    if k < 0:
        raise ValueError(f"Number of standard deviations must be non-negative, got {k!r}.")


def approx_equal(a: Any, b: Any, k: float = 2.0) -> bool:
    """
    Whether ``a`` and ``b`` agree within ``k`` standard deviations.

    ``|mean(a) - mean(b)| <= k * max(std(a), std(b))``, where plain numbers
    have zero standard deviation.
    """
    _check_k(k)
    mean_a, std_a = _summary(a)
    mean_b, std_b = _summary(b)
    return abs(mean_a - mean_b) <= k * max(std_a, std_b)


def not_approx_equal(a: Any, b: Any, k: float = 2.0) -> bool:
    """Negation of :func:`approx_equal`."""
    return not approx_equal(a, b, k)


def significantly_less(a: Any, b: Any, k: float = 2.0, level: float | None = None) -> bool:
    """
    Whether ``a`` lies below ``b`` beyond its uncertainty.

    Parameters
    ----------
    a, b : Particles or float
        Compared values.
    k : float, default 2.0
        Margin in standard deviations.
    level : float, optional
        If given, use quantiles instead of moments: the ``level`` quantile
        of ``a`` must lie below the ``1 - level`` quantile of ``b``.

    Returns
    -------
    bool
        * cloud vs. number: ``mean(a) + k * std(a) < b``;
        * number vs. cloud: ``a < mean(b) - k * std(b)``;
        * two clouds: ``mean(b) - mean(a) > k * max(std(a), std(b))``.
    """
    _check_k(k)
    if level is not None:
        if not 0.0 < level < 1.0:
            raise ValueError(f"Level must lie in (0, 1), got {level!r}.")
        upper_a = statistics.quantile(a, level) if _is_cloud(a) else float(a)
        lower_b = statistics.quantile(b, 1.0 - level) if _is_cloud(b) else float(b)
        return bool(upper_a < lower_b)

    mean_a, std_a = _summary(a)
    mean_b, std_b = _summary(b)
    return mean_b - mean_a > k * max(std_a, std_b)


def significantly_greater(a: Any, b: Any, k: float = 2.0, level: float | None = None) -> bool:
    """Mirror of :func:`significantly_less`."""
    return significantly_less(b, a, k=k, level=level)


__all__ = [
    "approx_equal",
    "not_approx_equal",
    "significantly_greater",
    "significantly_less",
]
