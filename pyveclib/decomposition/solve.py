"""
Linear system solvers for A X = B with multiple right-hand-side columns.

glslv: general A, LU with partial pivoting (?gesv).
slslv: symmetric/Hermitian positive-definite A, Cholesky on the upper
    triangle (?posv).

The backend overwrites its column-major copy of B with the solution; the
caller's B is never touched. A singular (glslv) or indefinite (slslv)
matrix zero-fills X.
"""

from __future__ import annotations

from typing import Any

from numpy.typing import ArrayLike, NDArray

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
from pyveclib.core.validation import check_dims, check_output_buffer
from pyveclib.decomposition._common import (
    finish,
    interpret_info,
    prepare_matrix,
    start_timer,
)
from pyveclib.decomposition._workspace import DriverState, Workspace
from pyveclib.decomposition.solution import SolveParams
from pyveclib.layout import from_column_major, to_column_major


def glslv(
    A: ArrayLike,
    dim: int,
    B: ArrayLike,
    n_col: int,
    X: NDArray[Any],
    *,
    precision: Precision | str = DOUBLE,
    backend: BackendChoice = 'auto',
) -> Result[SolveParams]:
    """
    Solve A X = B for a general square A.

    Args:
        A: Row-major dim x dim matrix. Not modified.
        dim: Order of A
        B: Row-major dim x n_col right-hand sides. Not modified.
        n_col: Number of right-hand-side columns
        X: Output, dim*n_col elements, row-major
        precision: 's', 'd', 'c', 'z'
        backend: Backend name or instance

    Returns:
        Result[SolveParams] referencing X. If A is singular, X is
        zero-filled and status is SINGULAR.

    Example:
        >>> X = np.empty((2, 1))
        >>> glslv([[2., 0.], [0., 4.]], 2, [[2.], [8.]], 1, X).ok
        True
        >>> X.ravel()
        array([1., 2.])
    """
    return _solve('gesv', Status.SINGULAR, A, dim, B, n_col, X, precision, backend)


def slslv(
    A: ArrayLike,
    dim: int,
    B: ArrayLike,
    n_col: int,
    X: NDArray[Any],
    *,
    precision: Precision | str = DOUBLE,
    backend: BackendChoice = 'auto',
) -> Result[SolveParams]:
    """
    Solve A X = B for a symmetric/Hermitian positive-definite A.

    Only the upper triangle of A is referenced. If A is not positive
    definite, X is zero-filled and status is NOT_POSITIVE_DEFINITE.

    Arguments as for glslv().
    """
    return _solve('posv', Status.NOT_POSITIVE_DEFINITE, A, dim, B, n_col, X, precision, backend)


def _solve(
    family: str,
    failure: Status,
    A: ArrayLike,
    dim: int,
    B: ArrayLike,
    n_col: int,
    X: NDArray[Any],
    precision: Precision | str,
    backend: BackendChoice,
) -> Result[SolveParams]:
    prec = resolve_precision(precision)
    check_dims(dim=dim, n_col=n_col)
    A_arr = prepare_matrix(A, dim * dim, prec, 'A')
    B_arr = prepare_matrix(B, dim * n_col, prec, 'B')
    X_out = check_output_buffer(X, dim * n_col, prec, 'X')
    impl = get_backend(backend)
    routine = prec.routine(family)

    timer = start_timer(impl)

    # No workspace query: gesv/posv size their own scratch from dim.
    with Workspace(routine) as ws:
        with timer.section('layout_in'):
            a = ws.adopt('a', to_column_major(A_arr, dim, dim))
            b = ws.adopt('b', to_column_major(B_arr, dim, n_col))

        ws.advance(DriverState.EXECUTE)
        with timer.section('execute'):
            if family == 'gesv':
                x, piv, info = impl.gesv(prec, a, b)
                ws.adopt('ipiv', piv)
            else:
                x, info = impl.posv(prec, a, b)
        ws.adopt('x', x)
        status = interpret_info(routine, info, failure)

        with timer.section('layout_out'):
            if status is Status.SUCCESS:
                from_column_major(x, dim, n_col, out=X_out)
            else:
                X_out[:] = 0

    return finish(
        SolveParams(X=X),
        status=status,
        routine=routine,
        info=info,
        ws=ws,
        timer=timer,
        backend_name=impl.name,
    )


sglslv = typed_entry_point(glslv, SINGLE, 'sglslv')
dglslv = typed_entry_point(glslv, DOUBLE, 'dglslv')
cglslv = typed_entry_point(glslv, COMPLEX_SINGLE, 'cglslv')
zglslv = typed_entry_point(glslv, COMPLEX_DOUBLE, 'zglslv')

sslslv = typed_entry_point(slslv, SINGLE, 'sslslv')
dslslv = typed_entry_point(slslv, DOUBLE, 'dslslv')
cslslv = typed_entry_point(slslv, COMPLEX_SINGLE, 'cslslv')
zslslv = typed_entry_point(slslv, COMPLEX_DOUBLE, 'zslslv')
