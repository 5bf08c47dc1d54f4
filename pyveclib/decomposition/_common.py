"""
Shared plumbing for the decomposition/solver drivers.

Input preparation, info-code interpretation, and Result assembly live here
so that every driver reports failures the same way.
"""

from __future__ import annotations

from typing import Any, TypeVar
import warnings

from numpy.typing import ArrayLike, NDArray

from pyveclib.core.capabilities import CAPABILITY_GPU_NATIVE
from pyveclib.core.compute.precision import Precision
from pyveclib.core.compute.timing import Timer
from pyveclib.core.exceptions import BackendError, NumericalWarning
from pyveclib.core.protocols import Backend
from pyveclib.core.result import Result, Status
from pyveclib.core.validation import check_array, check_finite, check_size
from pyveclib.decomposition._workspace import Workspace

P = TypeVar('P')

_FAILURE_TEXT = {
    Status.NON_CONVERGENT: "failed to converge",
    Status.SINGULAR: "matrix is singular",
    Status.NOT_POSITIVE_DEFINITE: "matrix is not positive definite",
}


def prepare_matrix(
    A: ArrayLike,
    size: int,
    prec: Precision,
    name: str,
) -> NDArray[Any]:
    """Validate a row-major input matrix: numeric, right size, finite."""
    arr = check_array(A, name, prec)
    check_size(arr, size, name)
    check_finite(arr, name)
    return arr


def start_timer(impl: Backend) -> Timer:
    """Start a driver timer; GPU-native backends synchronize the device."""
    timer = Timer(sync_cuda=impl.supports(CAPABILITY_GPU_NATIVE))
    timer.start()
    return timer


def interpret_info(routine: str, info: int, failure: Status) -> Status:
    """
    Map a LAPACK info value to a Status.

    Raises:
        BackendError: info < 0 (the routine rejected an argument)
    """
    if info < 0:
        raise BackendError(
            f"{routine}: argument {-info} had an illegal value",
            routine=routine,
            info=info,
        )
    return Status.SUCCESS if info == 0 else failure


def finish(
    params: P,
    *,
    status: Status,
    routine: str,
    info: int,
    ws: Workspace,
    timer: Timer,
    backend_name: str,
    extra: dict[str, Any] | None = None,
    consequence: str = "outputs zero-filled",
) -> Result[P]:
    """
    Assemble the Result after FINALIZE and warn on failure.

    The warning and the Result.warnings entry carry the same message, so
    callers can use either channel.
    """
    timer.stop()
    warn_list: list[str] = []
    if status is not Status.SUCCESS:
        msg = f"{routine}: {_FAILURE_TEXT[status]} (info={info}); {consequence}"
        warn_list.append(msg)
        warnings.warn(msg, NumericalWarning, stacklevel=3)

    info_dict: dict[str, Any] = {
        'routine': routine,
        'info': info,
        'lwork': ws.lwork,
        'scratch': ws.summary(),
    }
    if extra:
        info_dict.update(extra)

    return Result(
        params=params,
        info=info_dict,
        timing=timer.result(),
        backend_name=backend_name,
        warnings=tuple(warn_list),
        status=status,
    )
