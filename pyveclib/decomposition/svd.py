"""
Singular value decomposition.

Full SVD through ?gesvd with JOBU = JOBVT = 'A'. The caller receives fresh
row-major arrays: U (dim1 x dim1), S (dim1 x dim2, singular values on the
diagonal, zeros elsewhere) and V (dim2 x dim2) with A = U S V^H.

The economy-size factorization used by the pseudo-inverse lives in pinv.py;
the two output contracts are kept apart.
"""

from __future__ import annotations

from numpy.typing import ArrayLike
import numpy as np

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
from pyveclib.core.result import Ownership, Result, Status
from pyveclib.core.validation import check_dims
from pyveclib.decomposition._common import (
    finish,
    interpret_info,
    prepare_matrix,
    start_timer,
)
from pyveclib.decomposition._workspace import DriverState, Workspace
from pyveclib.decomposition.solution import SVDParams
from pyveclib.layout import embed_diagonal, from_column_major, to_column_major


def svd(
    A: ArrayLike,
    dim1: int,
    dim2: int,
    *,
    precision: Precision | str = DOUBLE,
    backend: BackendChoice = 'auto',
) -> Result[SVDParams]:
    """
    Full singular value decomposition of a row-major dim1 x dim2 matrix.

    Lifecycle:
        1. ALLOCATE_INPUT: column-major copy of A
        2. QUERY_WORKSPACE: gesvd with lwork = -1
        3. ALLOCATE_WORKSPACE: reserve the reported size
        4. EXECUTE: gesvd
        5. FINALIZE: release scratch; on non-convergence U = S = V = None

    Args:
        A: Row-major matrix, flat or 2-D, dim1*dim2 elements. Not modified.
        dim1: Number of rows
        dim2: Number of columns
        precision: 's', 'd', 'c', 'z' (or a Precision)
        backend: Backend name or instance

    Returns:
        Result[SVDParams] with freshly allocated (OWNED) U, S, V.
        S uses the real dtype of the precision.

    Raises:
        ValidationError: If A is non-numeric, non-finite, or complex for a
            real precision
        DimensionError: If A doesn't hold dim1*dim2 elements
    """
    prec = resolve_precision(precision)
    check_dims(dim1=dim1, dim2=dim2)
    A_arr = prepare_matrix(A, dim1 * dim2, prec, 'A')
    impl = get_backend(backend)
    routine = prec.routine('gesvd')

    timer = start_timer(impl)

    U = S = V = None
    with Workspace(routine) as ws:
        with timer.section('layout_in'):
            a = ws.adopt('a', to_column_major(A_arr, dim1, dim2))

        ws.advance(DriverState.QUERY_WORKSPACE)
        with timer.section('query'):
            lwork = impl.gesvd_lwork(prec, dim1, dim2, True)

        ws.advance(DriverState.ALLOCATE_WORKSPACE)
        ws.reserve('work', lwork)

        ws.advance(DriverState.EXECUTE)
        with timer.section('execute'):
            u, s, vt, info = impl.gesvd(prec, a, True, lwork)
        ws.adopt('u', u)
        ws.adopt('s', s)
        ws.adopt('vt', vt)
        status = interpret_info(routine, info, Status.NON_CONVERGENT)

        if status is Status.SUCCESS:
            with timer.section('layout_out'):
                U = from_column_major(u, dim1, dim1)
                S = embed_diagonal(s, dim1, dim2, dtype=prec.real_dtype)
                # gesvd returns V^H; its conjugate transpose is V
                V = from_column_major(np.conjugate(vt).T, dim2, dim2)

    params = SVDParams(U=U, S=S, V=V, ownership=Ownership.OWNED)
    return finish(
        params,
        status=status,
        routine=routine,
        info=info,
        ws=ws,
        timer=timer,
        backend_name=impl.name,
        consequence="U, S and V set to None",
    )


ssvd = typed_entry_point(svd, SINGLE, 'ssvd')
dsvd = typed_entry_point(svd, DOUBLE, 'dsvd')
csvd = typed_entry_point(svd, COMPLEX_SINGLE, 'csvd')
zsvd = typed_entry_point(svd, COMPLEX_DOUBLE, 'zsvd')
