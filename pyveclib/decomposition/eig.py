"""
Eigendecomposition drivers.

eigh: symmetric (real) / Hermitian (complex) matrices through ?syev / ?heev.
    The backend returns eigenvalues in ascending order, so descending order
    is a reversal of both eigenvalues and eigenvector columns.

eig: general square matrices through ?geev, always in complex arithmetic
    (real input is promoted). The backend returns eigenpairs in no
    particular order; they are re-sorted by the real part of the eigenvalue
    with sortf, ties keeping the backend's order.

Both write into caller-supplied row-major buffers and zero-fill them when
the backend fails to converge.
"""

from __future__ import annotations

from typing import Any

import numpy as np
from numpy.typing import ArrayLike, NDArray

from pyveclib.backends import BackendChoice, get_backend
from pyveclib.core.capabilities import CAPABILITY_LEFT_EIGENVECTORS
from pyveclib.core.compute.precision import (
    COMPLEX_DOUBLE,
    COMPLEX_SINGLE,
    DOUBLE,
    SINGLE,
    Precision,
    resolve_precision,
    typed_entry_point,
)
from pyveclib.core.exceptions import BackendError
from pyveclib.core.result import Result, Status
from pyveclib.core.validation import check_dims, check_output_buffer
from pyveclib.decomposition._common import (
    finish,
    interpret_info,
    prepare_matrix,
    start_timer,
)
from pyveclib.decomposition._workspace import DriverState, Workspace
from pyveclib.decomposition.solution import EigenParams
from pyveclib.layout import (
    embed_diagonal,
    from_column_major,
    reorder_columns,
    sortf,
    to_column_major,
)


def eigh(
    A: ArrayLike,
    dim: int,
    sort_descending: bool,
    V: NDArray[Any],
    D: NDArray[Any],
    *,
    precision: Precision | str = DOUBLE,
    backend: BackendChoice = 'auto',
) -> Result[EigenParams]:
    """
    Eigendecomposition of a symmetric / Hermitian matrix.

    Only the upper triangle of A is referenced.

    Args:
        A: Row-major dim x dim matrix. Not modified.
        dim: Matrix order
        sort_descending: Largest eigenvalue first if True, else ascending
        V: Output, dim*dim elements: eigenvectors as columns, row-major
        D: Output, dim*dim elements: eigenvalues on the diagonal
        precision: 's', 'd' (syev) or 'c', 'z' (heev)
        backend: Backend name or instance

    Returns:
        Result[EigenParams] referencing V and D. On non-convergence both
        are zero-filled and status is NON_CONVERGENT.

    Example:
        >>> V = np.empty((2, 2)); D = np.empty((2, 2))
        >>> _ = eigh([[4., 0.], [0., 9.]], 2, True, V, D)
        >>> np.diag(D)
        array([9., 4.])
    """
    prec = resolve_precision(precision)
    check_dims(dim=dim)
    A_arr = prepare_matrix(A, dim * dim, prec, 'A')
    V_out = check_output_buffer(V, dim * dim, prec, 'V')
    D_out = check_output_buffer(D, dim * dim, prec, 'D')
    impl = get_backend(backend)
    routine = prec.routine('heev' if prec.is_complex else 'syev')

    timer = start_timer(impl)

    with Workspace(routine) as ws:
        with timer.section('layout_in'):
            a = ws.adopt('a', to_column_major(A_arr, dim, dim))

        ws.advance(DriverState.QUERY_WORKSPACE)
        with timer.section('query'):
            lwork = impl.heev_lwork(prec, dim)

        ws.advance(DriverState.ALLOCATE_WORKSPACE)
        ws.reserve('work', lwork)

        ws.advance(DriverState.EXECUTE)
        with timer.section('execute'):
            w, v, info = impl.heev(prec, a, lwork)
        ws.adopt('w', w)
        ws.adopt('v', v)
        status = interpret_info(routine, info, Status.NON_CONVERGENT)

        with timer.section('layout_out'):
            D_out[:] = 0
            if status is Status.SUCCESS:
                if sort_descending:
                    reorder_columns(v, np.arange(dim)[::-1], out=V_out)
                else:
                    from_column_major(v, dim, dim, out=V_out)
                embed_diagonal(w, dim, dim, out=D_out, reverse=sort_descending)
            else:
                V_out[:] = 0

    params = EigenParams(D=D, V=V, descending=bool(sort_descending))
    return finish(
        params,
        status=status,
        routine=routine,
        info=info,
        ws=ws,
        timer=timer,
        backend_name=impl.name,
    )


def eig(
    A: ArrayLike,
    dim: int,
    sort_descending: bool,
    VL: NDArray[Any] | None,
    VR: NDArray[Any] | None,
    D: NDArray[Any] | None,
    *,
    precision: Precision | str = DOUBLE,
    backend: BackendChoice = 'auto',
) -> Result[EigenParams]:
    """
    Eigendecomposition of a general square matrix.

    The computation always runs in the complex counterpart of `precision`,
    so VL, VR and D must be complex64 ('s', 'c') or complex128 ('d', 'z')
    buffers.

    Args:
        A: Row-major dim x dim matrix. Not modified.
        dim: Matrix order
        sort_descending: Order by decreasing real part if True
        VL: Output for left eigenvectors (columns), or None to skip them
        VR: Output for right eigenvectors (columns), or None to skip them
        D: Output diagonal eigenvalue matrix, or None
        precision: Precision of A
        backend: Backend name or instance

    Returns:
        Result[EigenParams] with params.V = VR and params.VL = VL. The
        diagonal of D holds the sorted real parts with zero imaginary
        part; params.eigenvalues is a new array of the complete complex
        eigenvalues in the same order. On non-convergence every requested
        output is zero-filled and params.eigenvalues is None.

    Raises:
        BackendError: If VL is requested from a backend without left
            eigenvector support
    """
    prec = resolve_precision(precision)
    cprec = prec.as_complex
    check_dims(dim=dim)
    A_arr = prepare_matrix(A, dim * dim, prec, 'A')
    VL_out = None if VL is None else check_output_buffer(VL, dim * dim, cprec, 'VL')
    VR_out = None if VR is None else check_output_buffer(VR, dim * dim, cprec, 'VR')
    D_out = None if D is None else check_output_buffer(D, dim * dim, cprec, 'D')
    impl = get_backend(backend)
    routine = cprec.routine('geev')

    compute_vl = VL_out is not None
    compute_vr = VR_out is not None
    if compute_vl and not impl.supports(CAPABILITY_LEFT_EIGENVECTORS):
        raise BackendError(
            f"{impl.name}: left eigenvectors are not supported", routine=routine,
        )

    timer = start_timer(impl)

    eigenvalues = None
    with Workspace(routine) as ws:
        with timer.section('layout_in'):
            a = ws.adopt('a', to_column_major(A_arr, dim, dim, dtype=cprec.dtype))

        ws.advance(DriverState.QUERY_WORKSPACE)
        with timer.section('query'):
            lwork = impl.geev_lwork(cprec, dim, compute_vl, compute_vr)

        ws.advance(DriverState.ALLOCATE_WORKSPACE)
        ws.reserve('work', lwork)

        ws.advance(DriverState.EXECUTE)
        with timer.section('execute'):
            w, vl, vr, info = impl.geev(cprec, a, compute_vl, compute_vr, lwork)
        ws.adopt('w', w)
        ws.adopt('vl', vl)
        ws.adopt('vr', vr)
        status = interpret_info(routine, info, Status.NON_CONVERGENT)

        with timer.section('layout_out'):
            if D_out is not None:
                D_out[:] = 0
            if status is Status.SUCCESS:
                wr = ws.adopt('wr', np.real(w).copy())
                order = ws.adopt('sort_idx', np.empty(dim, dtype=np.intp))
                sortf(wr, indices=order, descending=sort_descending)
                if VL_out is not None:
                    reorder_columns(vl, order, out=VL_out)
                if VR_out is not None:
                    reorder_columns(vr, order, out=VR_out)
                eigenvalues = w[order]
                if D_out is not None:
                    embed_diagonal(wr, dim, dim, out=D_out)
            else:
                if VL_out is not None:
                    VL_out[:] = 0
                if VR_out is not None:
                    VR_out[:] = 0

    params = EigenParams(
        D=D, V=VR, VL=VL, descending=bool(sort_descending), eigenvalues=eigenvalues,
    )
    return finish(
        params,
        status=status,
        routine=routine,
        info=info,
        ws=ws,
        timer=timer,
        backend_name=impl.name,
    )


sseig = typed_entry_point(eigh, SINGLE, 'sseig')
dseig = typed_entry_point(eigh, DOUBLE, 'dseig')
cseig = typed_entry_point(eigh, COMPLEX_SINGLE, 'cseig')
zseig = typed_entry_point(eigh, COMPLEX_DOUBLE, 'zseig')

seig = typed_entry_point(eig, SINGLE, 'seig')
deig = typed_entry_point(eig, DOUBLE, 'deig')
ceig = typed_entry_point(eig, COMPLEX_SINGLE, 'ceig')
zeig = typed_entry_point(eig, COMPLEX_DOUBLE, 'zeig')
