"""
Exception hierarchy for PyVeclib.

All exceptions inherit from PyVeclibError to allow catching any
library-specific error.

Design principles:
    - Exceptions carry diagnostic information as attributes
    - Error messages are actionable with actual vs expected values
    - Never catch and re-raise with less information

Numerical failures reported by the backend (non-convergence, singular or
indefinite matrices) do NOT raise by default. Drivers zero-fill their
outputs, record a Status on the Result, and issue a NumericalWarning.
The exceptions below are raised from Result.raise_for_status() when the
caller opts in.
"""


class PyVeclibError(Exception):
    """Base exception for all PyVeclib errors."""
    pass


class ValidationError(PyVeclibError):
    """
    Input validation failed.

    Raised when user-provided inputs fail validation checks.
    """
    pass


class DimensionError(ValidationError):
    """
    Array dimensions are incorrect or inconsistent.

    Raised when a buffer's size doesn't match the declared rows x cols,
    or when output buffers are not sized exactly for the operation.
    """
    pass


class NumericalError(PyVeclibError):
    """
    Numerical computation failed.

    Base class for errors arising from numerical issues during computation.

    Attributes:
        routine: Backend routine that reported the failure (e.g. 'dgesv')
        info: Raw status value returned by the routine
    """

    def __init__(
        self,
        message: str,
        routine: str | None = None,
        info: int | None = None,
    ):
        super().__init__(message)
        self.routine = routine
        self.info = info


class SingularMatrixError(NumericalError):
    """
    Matrix is exactly singular.

    Raised when LU factorization finds a zero pivot, so a solve or
    inversion is not possible.

    Attributes:
        matrix_name: Name/description of the problematic matrix
        pivot: 1-based index of the zero pivot, if known
    """

    def __init__(
        self,
        message: str,
        matrix_name: str | None = None,
        routine: str | None = None,
        info: int | None = None,
    ):
        super().__init__(message, routine=routine, info=info)
        self.matrix_name = matrix_name
        self.pivot = info if info is not None and info > 0 else None


class NotPositiveDefiniteError(NumericalError):
    """
    Matrix is not positive definite.

    Raised when a Cholesky-based solve finds a leading minor that is not
    positive definite.

    Attributes:
        matrix_name: Name/description of the problematic matrix
        minor: Order of the failing leading minor, if known
    """

    def __init__(
        self,
        message: str,
        matrix_name: str | None = None,
        routine: str | None = None,
        info: int | None = None,
    ):
        super().__init__(message, routine=routine, info=info)
        self.matrix_name = matrix_name
        self.minor = info if info is not None and info > 0 else None


class ConvergenceError(PyVeclibError):
    """
    Iterative backend algorithm failed to converge.

    Raised for SVD and eigenvalue routines whose QR/bidiagonal iteration
    did not reach a stable solution.

    Attributes:
        routine: Backend routine that reported the failure
        info: Raw status value (number of unconverged superdiagonals or
            index of the first eigenvalue that failed)
    """

    def __init__(
        self,
        message: str,
        routine: str | None = None,
        info: int | None = None,
    ):
        super().__init__(message)
        self.routine = routine
        self.info = info


class BackendError(PyVeclibError):
    """
    Backend rejected a call or is unusable.

    Raised when a routine reports an invalid argument (info < 0), when a
    backend is unavailable, or when a capability the call needs is missing.

    Attributes:
        routine: Backend routine involved, if any
        info: Raw status value, if any
    """

    def __init__(
        self,
        message: str,
        routine: str | None = None,
        info: int | None = None,
    ):
        super().__init__(message)
        self.routine = routine
        self.info = info


class NumericalWarning(UserWarning):
    """Issued when a driver zero-fills its outputs after a backend failure."""
    pass
