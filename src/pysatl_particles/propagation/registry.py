"""
Registered Primitives
=====================

Policy table consulted by the propagation engine on every dispatch. It maps
an operation (the callable object itself) to a :class:`PrimitiveEntry`:

* ``VECTORIZED`` — the operation runs once over whole sample buffers. This
  is the default for every callable that is not registered.
* ``ELEMENTWISE`` — the scalar operation is replayed once per sample index.
  Needed for functions branching on the value of their arguments.

Design notes
------------
* The table is additive: entries are never removed, and registering the same
  callable again with the same policy is a no-op. A conflicting
  re-registration is ignored with a warning.
* A vectorized entry may name a substitute implementation, e.g. the numpy
  ufunc standing in for a scalar-only :mod:`math` function.
* The registry is not synchronized. Registrations must complete before any
  propagation depending on them; registering while another thread
  propagates is undefined behaviour.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import logging
import warnings
from dataclasses import dataclass
from typing import TYPE_CHECKING

from pysatl_particles.types import PrimitivePolicy

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator
    from typing import Any

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class PrimitiveEntry:
    """
    Dispatch policy of a single operation.

    Parameters
    ----------
    policy : PrimitivePolicy
        How the operation is applied to particles.
    implementation : Callable or None
        Vectorized substitute called instead of the operation itself.
    """

    policy: PrimitivePolicy
    implementation: Callable[..., Any] | None = None

    @property
    def is_elementwise(self) -> bool:
        return self.policy is PrimitivePolicy.ELEMENTWISE


DEFAULT_ENTRY = PrimitiveEntry(policy=PrimitivePolicy.VECTORIZED)
"""Entry used for operations that were never registered."""


def operation_name(func: object) -> str:
    """Human readable name of an operation for messages."""
    module = getattr(func, "__module__", None)
    name = getattr(func, "__qualname__", None) or getattr(func, "__name__", None)
    if name is None:
        return repr(func)
    return f"{module}.{name}" if module and module != "builtins" else name


class PrimitiveRegistry:
    """
    Process-wide (or test-local) table of operation dispatch policies.

    Public API
    ----------
    register(func, policy=ELEMENTWISE, *, implementation=None)
        Add an entry (idempotent).
    lookup(func)
        Entry of ``func``, or :data:`DEFAULT_ENTRY`.
    policy(func), is_elementwise(func)
        Shortcuts over :meth:`lookup`.
    """

    def __init__(self) -> None:
        self._entries: dict[Callable[..., Any], PrimitiveEntry] = {}

    def __contains__(self, func: object) -> bool:
        try:
            return func in self._entries
        except TypeError:
            return False

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[Callable[..., Any]]:
        return iter(self._entries)

    def register(
        self,
        func: Callable[..., Any],
        policy: PrimitivePolicy = PrimitivePolicy.ELEMENTWISE,
        *,
        implementation: Callable[..., Any] | None = None,
    ) -> None:
        """
        Register a dispatch policy for ``func``.

        Parameters
        ----------
        func : Callable
            The operation, keyed by identity/equality of the callable.
        policy : PrimitivePolicy, default ELEMENTWISE
            Dispatch policy.
        implementation : Callable, optional
            Vectorized substitute; only meaningful for ``VECTORIZED``.

        Raises
        ------
        TypeError
            If ``func`` is not callable or not hashable, or an implementation
            is given for an elementwise entry.
        """
        if not callable(func):
            raise TypeError(f"Only callables can be registered, got {func!r}")
        policy = PrimitivePolicy(policy)
        if implementation is not None and policy is PrimitivePolicy.ELEMENTWISE:
            raise TypeError("Elementwise primitives replay the operation itself.")

        entry = PrimitiveEntry(policy=policy, implementation=implementation)
        try:
            existing = self._entries.get(func)
        except TypeError as exc:
            raise TypeError(f"{operation_name(func)} is not hashable and cannot be registered") from exc

        if existing is not None:
            if existing != entry:
                warnings.warn(
                    f"{operation_name(func)} is already registered as {existing.policy}. "
                    "The new registration will not be taken into account",
                    UserWarning,
                    stacklevel=3,
                )
            return

        self._entries[func] = entry
        logger.debug("Registered %s as %s primitive", operation_name(func), policy)

    def lookup(self, func: object) -> PrimitiveEntry:
        """Return the entry of ``func`` or :data:`DEFAULT_ENTRY`."""
        try:
            return self._entries.get(func, DEFAULT_ENTRY)  # type: ignore[arg-type]
        except TypeError:
            return DEFAULT_ENTRY

    def policy(self, func: object) -> PrimitivePolicy:
        return self.lookup(func).policy

    def is_elementwise(self, func: object) -> bool:
        return self.lookup(func).is_elementwise
