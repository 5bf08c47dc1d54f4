"""
Generic result container for all PyVeclib drivers.

The Result class provides a standardized envelope that every decomposition
and solver driver returns. This enables shared tooling for timing, logging
and failure handling while allowing each operation to define its own
parameter structure.

Design decisions:
    - Generic over parameter payload P for type safety
    - Explicit Status instead of inferring failure from zeroed outputs
    - info dict for flexible metadata (routine, raw info value, lwork, scratch)
    - timing is optional (don't burden unit tests)
    - Immutable (frozen=True)
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import TypeVar, Generic, Any

from pyveclib.core.exceptions import (
    ConvergenceError,
    NotPositiveDefiniteError,
    SingularMatrixError,
)

P = TypeVar('P')  # Parameter payload type


class Status(Enum):
    """Outcome of a driver call."""
    SUCCESS = 'success'
    NON_CONVERGENT = 'non_convergent'
    SINGULAR = 'singular'
    NOT_POSITIVE_DEFINITE = 'not_positive_definite'


class Ownership(Enum):
    """
    Who owns the output storage of a driver.

    OWNED: the driver allocated fresh arrays and hands them to the caller.
    BORROWED: the driver wrote into buffers the caller supplied.
    """
    OWNED = 'owned'
    BORROWED = 'borrowed'


_STATUS_ERRORS = {
    Status.NON_CONVERGENT: ConvergenceError,
    Status.SINGULAR: SingularMatrixError,
    Status.NOT_POSITIVE_DEFINITE: NotPositiveDefiniteError,
}


@dataclass(frozen=True)
class Result(Generic[P]):
    """
    Immutable result envelope for driver calls.

    Type Parameters:
        P: The operation-specific parameter payload type

    Attributes:
        params: Operation-specific outputs (factors, solution, inverse)
        info: Structured metadata (routine, raw info value, lwork, scratch)
        timing: Execution timing breakdown, or None if not measured
        backend_name: Identifier of the backend that produced this result
        warnings: Non-fatal issues encountered during computation
        status: Outcome of the backend call

    Examples:
        >>> Result(
        ...     params=SVDParams(U=U, S=S, V=V, ownership=Ownership.OWNED),
        ...     info={'routine': 'dgesvd', 'info': 0, 'lwork': 201},
        ...     timing={'total_seconds': 0.001},
        ...     backend_name='cpu_scipy',
        ... )
    """
    params: P
    info: dict[str, Any]
    timing: dict[str, float] | None
    backend_name: str
    warnings: tuple[str, ...] = field(default_factory=tuple)
    status: Status = Status.SUCCESS

    @property
    def ok(self) -> bool:
        """True if the backend call succeeded."""
        return self.status is Status.SUCCESS

    def has_warning(self, substring: str) -> bool:
        """Check if any warning contains the given substring."""
        return any(substring in w for w in self.warnings)

    def raise_for_status(self) -> 'Result[P]':
        """
        Raise the exception matching a failed status.

        Returns:
            self, so calls can be chained when the status is SUCCESS

        Raises:
            ConvergenceError: status is NON_CONVERGENT
            SingularMatrixError: status is SINGULAR
            NotPositiveDefiniteError: status is NOT_POSITIVE_DEFINITE
        """
        if self.status is Status.SUCCESS:
            return self
        error_cls = _STATUS_ERRORS[self.status]
        message = self.warnings[0] if self.warnings else self.status.value
        raise error_cls(
            message,
            routine=self.info.get('routine'),
            info=self.info.get('info'),
        )
