"""
Core infrastructure for PyVeclib.

This module provides the shared abstractions and utilities used by the
layout adapter, the vector primitives and the decomposition drivers.

Key components:
    protocols: Backend, VectorBackend protocols
    result: Generic Result[P] envelope, Status, Ownership
    exceptions: Exception hierarchy and NumericalWarning
    validation: Input and output-buffer validators
    capabilities: Optional backend features
    compute: Precision domains, device detection, timing
"""

from pyveclib.core.protocols import Backend, VectorBackend
from pyveclib.core.result import Ownership, Result, Status
from pyveclib.core.exceptions import (
    PyVeclibError,
    ValidationError,
    DimensionError,
    NumericalError,
    SingularMatrixError,
    NotPositiveDefiniteError,
    ConvergenceError,
    BackendError,
    NumericalWarning,
)

__all__ = [
    # Protocols
    "Backend",
    "VectorBackend",
    # Result
    "Result",
    "Status",
    "Ownership",
    # Exceptions
    "PyVeclibError",
    "ValidationError",
    "DimensionError",
    "NumericalError",
    "SingularMatrixError",
    "NotPositiveDefiniteError",
    "ConvergenceError",
    "BackendError",
    "NumericalWarning",
]
