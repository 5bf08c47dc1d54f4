"""
In-place matrix inverse through LU factorization (?getrf + ?getri).

The caller's buffer is overwritten with whatever the backend produced,
including for a singular matrix, where the content is the backend's
partial result. The failure is reported through Result.status, a
NumericalWarning and Result.raise_for_status().
"""

from __future__ import annotations

from typing import Any

from numpy.typing import NDArray

from pyveclib.backends import BackendChoice, get_backend
from pyveclib.core.compute.precision import (
    COMPLEX_DOUBLE,
    COMPLEX_SINGLE,
    DOUBLE,
    SINGLE,
    Precision,
    resolve_precision,
    typed_entry_point,
)
from pyveclib.core.result import Result, Status
from pyveclib.core.validation import check_dims, check_finite, check_output_buffer
from pyveclib.decomposition._common import finish, interpret_info, start_timer
from pyveclib.decomposition._workspace import DriverState, Workspace
from pyveclib.decomposition.solution import InverseParams
from pyveclib.layout import from_column_major, to_column_major


def inv(
    A: NDArray[Any],
    n: int,
    *,
    precision: Precision | str = DOUBLE,
    backend: BackendChoice = 'auto',
) -> Result[InverseParams]:
    """
    Invert a row-major n x n matrix in place.

    Args:
        A: Writable, C-contiguous ndarray of the precision's dtype with
           n*n elements. Replaced by its inverse.
        n: Matrix order
        precision: 's', 'd', 'c', 'z'
        backend: Backend name or instance

    Returns:
        Result[InverseParams] referencing A. Status is SINGULAR when either
        the factorization or the inversion reported an exactly zero pivot;
        A then holds the backend output unchanged.

    Raises:
        ValidationError: If A is not a suitable writable buffer or holds
            non-finite values

    Example:
        >>> A = np.array([[2., 0.], [0., 4.]])
        >>> inv(A, 2).ok
        True
        >>> A
        array([[0.5 , 0.  ],
               [0.  , 0.25]])
    """
    prec = resolve_precision(precision)
    check_dims(n=n)
    A_flat = check_output_buffer(A, n * n, prec, 'A')
    check_finite(A_flat, 'A')
    impl = get_backend(backend)
    getrf_name = prec.routine('getrf')
    routine = prec.routine('getri')

    timer = start_timer(impl)

    with Workspace(routine) as ws:
        with timer.section('layout_in'):
            a = ws.adopt('a', to_column_major(A_flat, n, n))

        ws.advance(DriverState.QUERY_WORKSPACE)
        with timer.section('query'):
            lwork = impl.getri_lwork(prec, n)

        ws.advance(DriverState.ALLOCATE_WORKSPACE)
        ws.reserve('work', lwork)

        ws.advance(DriverState.EXECUTE)
        with timer.section('execute'):
            lu, piv, getrf_info = impl.getrf(prec, a)
            ws.adopt('lu', lu)
            ws.adopt('ipiv', piv)
            factor_status = interpret_info(getrf_name, getrf_info, Status.SINGULAR)
            inv_a, getri_info = impl.getri(prec, lu, piv, lwork)
        ws.adopt('inv_a', inv_a)
        invert_status = interpret_info(routine, getri_info, Status.SINGULAR)

        with timer.section('layout_out'):
            from_column_major(inv_a, n, n, out=A_flat)

    if factor_status is not Status.SUCCESS:
        status, failed, info = factor_status, getrf_name, getrf_info
    else:
        status, failed, info = invert_status, routine, getri_info

    return finish(
        InverseParams(A=A),
        status=status,
        routine=failed,
        info=info,
        ws=ws,
        timer=timer,
        backend_name=impl.name,
        extra={'getrf_info': getrf_info, 'getri_info': getri_info},
        consequence="A holds the backend output unchanged",
    )


sinv = typed_entry_point(inv, SINGLE, 'sinv')
dinv = typed_entry_point(inv, DOUBLE, 'dinv')
cinv = typed_entry_point(inv, COMPLEX_SINGLE, 'cinv')
zinv = typed_entry_point(inv, COMPLEX_DOUBLE, 'zinv')
