"""
Computation Primitives
======================

Building blocks used by samplers to query distribution characteristics:

- :class:`AnalyticalComputation` — an analytical callable provided by a
  distribution directly.
- :class:`FittedComputationMethod` — a numerically fitted conversion (e.g.,
  ``cdf -> ppf``) ready to be called.
- :class:`ComputationStrategy` / :class:`DefaultComputationStrategy` — resolve
  a characteristic by name, falling back to a fitted conversion.

Notes
-----
- Callables are **array-aware**: samplers evaluate ``ppf`` on the whole vector
  of quantile levels at once. Fitted conversions vectorize scalar fitters with
  :func:`numpy.vectorize`.
"""

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Protocol

from mypy_extensions import KwArg

from pysatl_particles.errors import InvalidDistribution
from pysatl_particles.types import CharacteristicName, GenericCharacteristicName

if TYPE_CHECKING:
    from pysatl_particles.distributions.distribution import Distribution


@dataclass(frozen=True, slots=True)
class AnalyticalComputation[In, Out]:
    """Analytical computation provided directly by the distribution.

    Parameters
    ----------
    target : str
        Characteristic name (e.g., ``"ppf"``).
    func : Callable[[In, KwArg(Any)], Out]
        Analytical callable.
    """

    target: GenericCharacteristicName
    func: Callable[[In, KwArg(Any)], Out]

    def __call__(self, data: In, **options: Any) -> Out:
        """Evaluate the analytical function."""
        return self.func(data, **options)


@dataclass(frozen=True, slots=True)
class FittedComputationMethod[In, Out]:
    """Fitted conversion method (ready-to-use).

    Parameters
    ----------
    target : str
        Destination characteristic name.
    sources : Sequence[str]
        Source characteristic names.
    func : Callable[[In, KwArg(Any)], Out]
        Callable implementing the fitted conversion.
    """

    target: GenericCharacteristicName
    sources: Sequence[GenericCharacteristicName]
    func: Callable[[In, KwArg(Any)], Out]

    def __call__(self, data: In, **options: Any) -> Out:
        """Evaluate the fitted conversion."""
        return self.func(data, **options)


type Method[In, Out] = AnalyticalComputation[In, Out] | FittedComputationMethod[In, Out]
type Fitter = Callable[["Distribution"], FittedComputationMethod[Any, Any]]


class ComputationStrategy(Protocol):
    """Protocol for characteristic resolution strategies."""

    def can_resolve(self, name: GenericCharacteristicName, distr: "Distribution") -> bool: ...

    def query_method(
        self, name: GenericCharacteristicName, distr: "Distribution", **options: Any
    ) -> Method[Any, Any]: ...


type Conversions = dict[GenericCharacteristicName, tuple[GenericCharacteristicName, Fitter]]


def _default_conversions() -> Conversions:
    from pysatl_particles.distributions.fitters import fit_cdf_to_ppf_1C

    return {CharacteristicName.PPF: (CharacteristicName.CDF, fit_cdf_to_ppf_1C)}


@dataclass(slots=True)
class DefaultComputationStrategy:
    """
    Default characteristic resolver.

    Resolution order
    ----------------
    1. If the distribution provides an analytical implementation, return it.
    2. Else, if a conversion from an analytical source is known, fit it.

    Parameters
    ----------
    conversions : dict, optional
        Target characteristic mapped to its analytical source and fitter;
        ``cdf -> ppf`` by default.

    Raises
    ------
    InvalidDistribution
        If the characteristic is neither analytical nor convertible.
    """

    conversions: Conversions = field(default_factory=_default_conversions)

    def can_resolve(self, name: GenericCharacteristicName, distr: "Distribution") -> bool:
        """Check whether ``name`` is analytical or derivable by a known conversion."""
        if name in distr.analytical_computations:
            return True
        conversion = self.conversions.get(name)
        return conversion is not None and conversion[0] in distr.analytical_computations

    def query_method(
        self, name: GenericCharacteristicName, distr: "Distribution", **options: Any
    ) -> Method[Any, Any]:
        """
        Resolve an analytical or fitted method for ``name``.

        Parameters
        ----------
        name : str
            Target characteristic name to resolve.
        distr : Distribution
            The distribution providing the analytical base.
        **options
            Unused; accepted for protocol compatibility.

        Returns
        -------
        Method
            Analytical or fitted callable implementing ``name``.
        """
        analytical = distr.analytical_computations
        if name in analytical:
            return analytical[name]

        conversion = self.conversions.get(name)
        if conversion is None or conversion[0] not in analytical:
            raise InvalidDistribution(
                f"Distribution provides neither '{name}' nor a characteristic to derive it from."
            )

        return conversion[1](distr)
