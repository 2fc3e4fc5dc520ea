"""
Parametric distribution descriptors with declarative constraints.

A :class:`ParametricDistribution` is a frozen dataclass whose fields are the
distribution parameters. Instance methods marked with :func:`constraint` are
collected when the class is defined and checked right after construction, so
a descriptor with degenerate parameters can never reach a sampler.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from dataclasses import dataclass
from functools import wraps
from inspect import isfunction
from typing import TYPE_CHECKING, ClassVar, ParamSpec

from pysatl_particles.distributions.computation import (
    AnalyticalComputation,
    DefaultComputationStrategy,
)
from pysatl_particles.distributions.distribution import Distribution
from pysatl_particles.errors import InvalidDistribution

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping
    from typing import Any

    from pysatl_particles.distributions.computation import ComputationStrategy
    from pysatl_particles.types import EuclideanDistributionType, GenericCharacteristicName


@dataclass(slots=True, frozen=True)
class ParametrizationConstraint:
    """
    Constraint on parameter values of a distribution.

    Parameters
    ----------
    description : str
        Human-readable description of the constraint.
    check : Callable[[Any], bool]
        Validation function that returns True if constraint is satisfied.
    """

    description: str
    check: Callable[[Any], bool]


P = ParamSpec("P")


def constraint(description: str) -> Callable[[Callable[P, bool]], Callable[P, bool]]:
    """
    Decorator to mark an instance method as a parameter constraint.

    Parameters
    ----------
    description : str
        Human-readable description of the constraint.

    Notes
    -----
    The decorated function must be a predicate returning bool.
    """

    def decorator(func: Callable[P, bool]) -> Callable[P, bool]:
        @wraps(func)
        def wrapper(*args: P.args, **kwargs: P.kwargs) -> bool:
            return func(*args, **kwargs)

        setattr(wrapper, "__is_constraint", True)
        setattr(wrapper, "__constraint_description", description)
        return wrapper

    return decorator


def _collect_constraints(cls: type) -> list[ParametrizationConstraint]:
    """Collect constraint methods from the class and its bases."""
    constraints: list[ParametrizationConstraint] = []
    seen: set[str] = set()
    for klass in cls.__mro__:
        for name, attr in vars(klass).items():
            if name in seen:
                continue
            if isinstance(attr, staticmethod | classmethod):
                if getattr(attr.__func__, "__is_constraint", False):
                    raise TypeError(f"@constraint '{name}' must be an instance method")
                continue
            if not isfunction(attr):
                continue
            seen.add(name)
            if getattr(attr, "__is_constraint", False):
                desc = getattr(attr, "__constraint_description", attr.__name__)
                constraints.append(ParametrizationConstraint(description=desc, check=attr))
    return constraints


class ParametricDistribution(Distribution):
    """
    Base class for distributions described by a handful of parameters.

    Subclasses are dataclasses; they declare parameters as fields, constraints
    with :func:`constraint` and analytical characteristics by overriding
    :meth:`_characteristics`.
    """

    _constraints: ClassVar[list[ParametrizationConstraint]] = []

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        cls._constraints = _collect_constraints(cls)

    def __post_init__(self) -> None:
        self.validate()

    @property
    def parameters(self) -> dict[str, Any]:
        """Get parameters as a dictionary."""
        fields = getattr(self, "__dataclass_fields__", {})
        return {f: getattr(self, f) for f in fields}

    @property
    def constraints(self) -> list[ParametrizationConstraint]:
        """Get constraints of this distribution."""
        return self._constraints

    def validate(self) -> None:
        """
        Validate all constraints of this distribution.

        Raises
        ------
        InvalidDistribution
            If any constraint is not satisfied.
        """
        for item in self._constraints:
            if not item.check(self):
                raise InvalidDistribution(
                    f'{type(self).__name__}: constraint "{item.description}" does not hold'
                )

    @property
    def distribution_type(self) -> EuclideanDistributionType:
        raise NotImplementedError

    def _characteristics(self) -> dict[GenericCharacteristicName, Callable[..., Any]]:
        raise NotImplementedError

    @property
    def analytical_computations(
        self,
    ) -> Mapping[GenericCharacteristicName, AnalyticalComputation[Any, Any]]:
        return {
            name: AnalyticalComputation(target=name, func=func)
            for name, func in self._characteristics().items()
        }

    @property
    def computation_strategy(self) -> ComputationStrategy:
        return DefaultComputationStrategy()
