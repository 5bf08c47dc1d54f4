"""
CPU reference backend.

Calls LAPACK and BLAS directly through scipy.linalg.lapack and
scipy.linalg.blas. Routines are resolved per Precision with
get_lapack_funcs / get_blas_funcs, so 's', 'd', 'c' and 'z' variants
come from the same code path.

Every factorization supports the two-phase workspace protocol: the
'*_lwork' wrappers issue the lwork = -1 query and report the optimal size,
which the driver then passes to the execute call.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Any
import logging

import numpy as np
from numpy.typing import NDArray
from scipy.linalg import blas as sp_blas
from scipy.linalg import lapack as sp_lapack

from pyveclib.core.capabilities import (
    CAPABILITY_BLAS_VECTOR,
    CAPABILITY_LEFT_EIGENVECTORS,
    CAPABILITY_WORKSPACE_QUERY,
)
from pyveclib.core.compute.precision import Precision
from pyveclib.core.exceptions import BackendError

logger = logging.getLogger(__name__)

_CAPABILITIES = frozenset({
    CAPABILITY_WORKSPACE_QUERY,
    CAPABILITY_BLAS_VECTOR,
    CAPABILITY_LEFT_EIGENVECTORS,
})


@lru_cache(maxsize=None)
def _lapack(name: str, prec: Precision):
    return sp_lapack.get_lapack_funcs(name, dtype=prec.dtype)


@lru_cache(maxsize=None)
def _blas(name: str, prec: Precision):
    return sp_blas.get_blas_funcs(name, dtype=prec.dtype)


def _lwork_from_query(routine: str, work: Any, info: int, prec: Precision) -> int:
    """
    Turn the WORK(1) value of a workspace query into an integer size.

    Single-precision backends report the size as a float32, which can round
    below the true integer; bump to the next representable value first.
    """
    if info != 0:
        raise BackendError(
            f"{routine}: workspace query failed with info={info}",
            routine=routine,
            info=int(info),
        )
    value = float(np.real(work))
    if prec.real_dtype == np.float32:
        value = float(np.nextafter(np.float32(value), np.float32(np.inf)))
    lwork = max(1, int(value))
    logger.debug("%s: workspace query -> lwork=%d", routine, lwork)
    return lwork


class ScipyLapackBackend:
    """
    CPU backend over scipy's LAPACK/BLAS wrappers.

    Implements the Backend and VectorBackend protocols. This is the
    reference implementation all other backends are validated against.
    """

    @property
    def name(self) -> str:
        return 'cpu_scipy'

    def supports(self, capability: str) -> bool:
        return capability in _CAPABILITIES

    # --- SVD -------------------------------------------------------------

    def gesvd_lwork(self, prec: Precision, m: int, n: int, full_matrices: bool) -> int:
        work, info = _lapack('gesvd_lwork', prec)(
            m, n, compute_uv=1, full_matrices=int(full_matrices),
        )
        return _lwork_from_query(prec.routine('gesvd'), work, info, prec)

    def gesvd(
        self, prec: Precision, a: NDArray, full_matrices: bool, lwork: int,
    ) -> tuple[NDArray, NDArray, NDArray, int]:
        u, s, vt, info = _lapack('gesvd', prec)(
            a, compute_uv=1, full_matrices=int(full_matrices),
            lwork=lwork, overwrite_a=1,
        )
        return u, s, vt, int(info)

    # --- Symmetric / Hermitian eigenproblem -----------------------------

    def heev_lwork(self, prec: Precision, n: int) -> int:
        family = 'heev' if prec.is_complex else 'syev'
        work, info = _lapack(f'{family}_lwork', prec)(n, lower=0)
        return _lwork_from_query(prec.routine(family), work, info, prec)

    def heev(
        self, prec: Precision, a: NDArray, lwork: int,
    ) -> tuple[NDArray, NDArray, int]:
        family = 'heev' if prec.is_complex else 'syev'
        w, v, info = _lapack(family, prec)(
            a, compute_v=1, lower=0, lwork=lwork, overwrite_a=1,
        )
        return w, v, int(info)

    # --- General eigenproblem -------------------------------------------

    def geev_lwork(
        self, prec: Precision, n: int, compute_vl: bool, compute_vr: bool,
    ) -> int:
        work, info = _lapack('geev_lwork', prec)(
            n, compute_vl=int(compute_vl), compute_vr=int(compute_vr),
        )
        return _lwork_from_query(prec.routine('geev'), work, info, prec)

    def geev(
        self, prec: Precision, a: NDArray, compute_vl: bool, compute_vr: bool,
        lwork: int,
    ) -> tuple[NDArray, NDArray | None, NDArray | None, int]:
        if not prec.is_complex:
            raise BackendError(
                f"geev is driven in complex arithmetic, got '{prec.prefix}' precision",
                routine=prec.routine('geev'),
            )
        w, vl, vr, info = _lapack('geev', prec)(
            a, compute_vl=int(compute_vl), compute_vr=int(compute_vr),
            lwork=lwork, overwrite_a=1,
        )
        return (
            w,
            vl if compute_vl else None,
            vr if compute_vr else None,
            int(info),
        )

    # --- Linear solves ---------------------------------------------------

    def gesv(self, prec: Precision, a: NDArray, b: NDArray) -> tuple[NDArray, NDArray, int]:
        _, piv, x, info = _lapack('gesv', prec)(a, b, overwrite_a=1, overwrite_b=1)
        return x, piv, int(info)

    def posv(self, prec: Precision, a: NDArray, b: NDArray) -> tuple[NDArray, int]:
        _, x, info = _lapack('posv', prec)(a, b, lower=0, overwrite_a=1, overwrite_b=1)
        return x, int(info)

    # --- Inversion -------------------------------------------------------

    def getrf(self, prec: Precision, a: NDArray) -> tuple[NDArray, NDArray, int]:
        lu, piv, info = _lapack('getrf', prec)(a, overwrite_a=1)
        return lu, piv, int(info)

    def getri_lwork(self, prec: Precision, n: int) -> int:
        work, info = _lapack('getri_lwork', prec)(n)
        return _lwork_from_query(prec.routine('getri'), work, info, prec)

    def getri(
        self, prec: Precision, lu: NDArray, piv: NDArray, lwork: int,
    ) -> tuple[NDArray, int]:
        inv_a, info = _lapack('getri', prec)(lu, piv, lwork=lwork, overwrite_lu=1)
        return inv_a, int(info)

    # --- BLAS ------------------------------------------------------------

    def gemm(
        self, prec: Precision, alpha: Any, a: NDArray, b: NDArray,
        trans_a: int = 0, trans_b: int = 0,
    ) -> NDArray:
        return _blas('gemm', prec)(alpha, a, b, trans_a=trans_a, trans_b=trans_b)

    def scal(self, prec: Precision, alpha: Any, x: NDArray) -> NDArray:
        result = _blas('scal', prec)(alpha, x)
        if result is not x:
            x[...] = result
        return x

    def copy(self, prec: Precision, x: NDArray, y: NDArray) -> NDArray:
        result = _blas('copy', prec)(x, y)
        if result is not y:
            y[...] = result
        return y

    def dot(self, prec: Precision, x: NDArray, y: NDArray, conj: bool = False) -> Any:
        if not prec.is_complex:
            return prec.dtype.type(_blas('dot', prec)(x, y))
        routine = 'dotc' if conj else 'dotu'
        return prec.dtype.type(_blas(routine, prec)(x, y))
