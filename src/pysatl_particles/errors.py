"""
Error taxonomy
==============

All failures raised by the particle core are local and structural: they are
never retried. Every error also derives from the builtin exception a caller
would naturally catch for the same situation.
"""

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"


class ParticlesError(Exception):
    """Base class for all particle errors."""


class InvalidDistribution(ParticlesError, ValueError):
    """
    Raised when a distribution cannot be sampled as requested.

    This covers degenerate or constraint-violating parameters, a sample
    count that is not a positive integer, non-finite draws, a dimensionality
    mismatch for the requested sampling strategy and covariance matrices
    that are not symmetric positive definite.
    """


class IncompatibleSampleCount(ParticlesError, ValueError):
    """Raised when particle operands hold a different number of samples."""


class MisalignedParticles(ParticlesError, ValueError):
    """
    Raised when a statistic needs paired draws that are not guaranteed.

    Covariance-sensitive statistics require every pair of components to
    share the sample count and either a common draw origin or an
    exchangeable (permuted) index order.
    """


class UnregisteredBranchingOperation(ParticlesError, TypeError):
    """
    Raised when an uncertain value is collapsed to a single scalar.

    Branching on a particle cloud (``if x > 0: ...``) or converting it to a
    ``float`` silently picks one branch for every draw. Functions doing so
    must be registered as elementwise primitives so that they are replayed
    once per sample.

    Parameters
    ----------
    message : str
        Error description.
    operation : str, optional
        Name of the function that branched, once known.
    """

    def __init__(self, message: str, operation: str | None = None) -> None:
        super().__init__(message)
        self.operation = operation


__all__ = [
    "ParticlesError",
    "InvalidDistribution",
    "IncompatibleSampleCount",
    "MisalignedParticles",
    "UnregisteredBranchingOperation",
]
