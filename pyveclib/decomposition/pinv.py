"""
Moore-Penrose pseudo-inverse through the economy SVD.

For A (m x n) with economy factors U (m x k), s (k), Vt (k x n),
k = min(m, n):

    pinv(A) = Vt^H @ diag(1/s) @ U^H

Column i of U is scaled in place with ?scal, then a single ?gemm with both
operands conjugate-transposed forms the n x m result. Singular values at
or below the precision's clamp tolerance are not inverted; their column
is scaled by s_i itself, which keeps the product bounded for
rank-deficient input.
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
from pyveclib.decomposition.solution import PinvParams
from pyveclib.layout import from_column_major, to_column_major


def pinv(
    in_m: ArrayLike,
    dim1: int,
    dim2: int,
    out_m: NDArray[Any],
    *,
    precision: Precision | str = DOUBLE,
    backend: BackendChoice = 'auto',
) -> Result[PinvParams]:
    """
    Pseudo-inverse of a row-major dim1 x dim2 matrix.

    Args:
        in_m: Row-major input, dim1*dim2 elements. Not modified.
        dim1: Rows of in_m
        dim2: Columns of in_m
        out_m: Output, dim2*dim1 elements, written row-major as dim2 x dim1
        precision: 's', 'd', 'c', 'z'
        backend: Backend name or instance

    Returns:
        Result[PinvParams]. params.n_clamped counts the singular values
        that were not inverted. On SVD non-convergence out_m is
        zero-filled and status is NON_CONVERGENT.

    Example:
        >>> out = np.empty((2, 3))
        >>> A = np.array([[1., 0.], [0., 2.], [0., 0.]])
        >>> _ = pinv(A, 3, 2, out)
        >>> np.allclose(out @ A, np.eye(2))
        True
    """
    prec = resolve_precision(precision)
    check_dims(dim1=dim1, dim2=dim2)
    A_arr = prepare_matrix(in_m, dim1 * dim2, prec, 'in_m')
    out_flat = check_output_buffer(out_m, dim1 * dim2, prec, 'out_m')
    impl = get_backend(backend)
    routine = prec.routine('gesvd')
    k = min(dim1, dim2)

    timer = start_timer(impl)

    n_clamped = 0
    with Workspace(routine) as ws:
        with timer.section('layout_in'):
            a = ws.adopt('a', to_column_major(A_arr, dim1, dim2))

        ws.advance(DriverState.QUERY_WORKSPACE)
        with timer.section('query'):
            lwork = impl.gesvd_lwork(prec, dim1, dim2, False)

        ws.advance(DriverState.ALLOCATE_WORKSPACE)
        ws.reserve('work', lwork)

        ws.advance(DriverState.EXECUTE)
        with timer.section('execute'):
            u, s, vt, info = impl.gesvd(prec, a, False, lwork)
        ws.adopt('u', u)
        ws.adopt('s', s)
        ws.adopt('vt', vt)
        status = interpret_info(routine, info, Status.NON_CONVERGENT)

        if status is Status.SUCCESS:
            with timer.section('scale'):
                for i in range(k):
                    if s[i] > prec.pinv_tol:
                        factor = 1.0 / s[i]
                    else:
                        factor = s[i]
                        n_clamped += 1
                    impl.scal(prec, factor, u[:, i])
                # (Vt^H)(n x k) @ (U S^-1)^H (k x m) = n x m, column-major
                inva = ws.adopt('inva', impl.gemm(prec, 1.0, vt, u, trans_a=2, trans_b=2))
            with timer.section('layout_out'):
                from_column_major(inva, dim2, dim1, out=out_flat)
        else:
            out_flat[:] = 0

    return finish(
        PinvParams(pinv=out_m, n_clamped=n_clamped),
        status=status,
        routine=routine,
        info=info,
        ws=ws,
        timer=timer,
        backend_name=impl.name,
        extra={'n_clamped': n_clamped, 'tolerance': prec.pinv_tol},
    )


spinv = typed_entry_point(pinv, SINGLE, 'spinv')
dpinv = typed_entry_point(pinv, DOUBLE, 'dpinv')
cpinv = typed_entry_point(pinv, COMPLEX_SINGLE, 'cpinv')
zpinv = typed_entry_point(pinv, COMPLEX_DOUBLE, 'zpinv')
