"""
GPU backend using PyTorch.

Performance path for large matrices, validated against the CPU reference.
Supports CUDA (Linux/Windows) and MPS (macOS Apple Silicon), and runs on
the CPU through torch when no GPU is present.

torch manages its own workspaces, so the '*_lwork' methods report 0 and
CAPABILITY_WORKSPACE_QUERY is not advertised. Failure status is taken from
torch's '*_ex' routines where they exist; the routines that only signal
failure by raising torch.linalg.LinAlgError are mapped to info = 1.
Left eigenvectors are not available from torch.linalg.eig.

MPS has no float64/complex128 support; use 'd'/'z' precisions on CUDA or CPU.
"""

from __future__ import annotations

from typing import Any
import logging

import numpy as np
from numpy.typing import NDArray

from pyveclib.core.capabilities import CAPABILITY_GPU_NATIVE
from pyveclib.core.compute.device import DeviceInfo, select_device
from pyveclib.core.compute.precision import Precision
from pyveclib.core.exceptions import BackendError

logger = logging.getLogger(__name__)


class TorchBackend:
    """
    Backend over torch.linalg.

    Implements the Backend protocol (not VectorBackend: level-1 vector
    work stays on numpy, moving vectors to the device buys nothing).
    """

    def __init__(self, device: DeviceInfo | None = None):
        """
        Initialize torch backend.

        Parameters
        ----------
        device : DeviceInfo, optional
            Device info from select_device(). If None, auto-selects
            (GPU if available, else CPU).
        """
        try:
            import torch
        except ImportError as e:
            raise BackendError(
                "TorchBackend requires PyTorch. Install with: pip install pyveclib[gpu]"
            ) from e

        self._torch = torch
        self.device_info = device if device is not None else select_device('auto')
        self.device = torch.device(self.device_info.torch_device)
        logger.debug("TorchBackend on %s", self.device_info)

    @property
    def name(self) -> str:
        return f'{self.device_info.device_type}_torch'

    def supports(self, capability: str) -> bool:
        if capability == CAPABILITY_GPU_NATIVE:
            return self.device_info.is_gpu
        return False

    # --- transfer helpers ----------------------------------------------

    def _to_device(self, a: NDArray):
        return self._torch.from_numpy(np.ascontiguousarray(a)).to(self.device)

    @staticmethod
    def _to_host(t, dtype: np.dtype) -> NDArray:
        return np.asfortranarray(t.detach().cpu().numpy().astype(dtype, copy=False))

    # --- SVD -------------------------------------------------------------

    def gesvd_lwork(self, prec: Precision, m: int, n: int, full_matrices: bool) -> int:
        return 0

    def gesvd(
        self, prec: Precision, a: NDArray, full_matrices: bool, lwork: int,
    ) -> tuple[NDArray, NDArray, NDArray, int]:
        m, n = a.shape
        k = min(m, n)
        try:
            u, s, vh = self._torch.linalg.svd(self._to_device(a), full_matrices=full_matrices)
        except self._torch.linalg.LinAlgError:
            ucols = m if full_matrices else k
            vrows = n if full_matrices else k
            return (
                np.zeros((m, ucols), dtype=prec.dtype, order='F'),
                np.zeros(k, dtype=prec.real_dtype),
                np.zeros((vrows, n), dtype=prec.dtype, order='F'),
                1,
            )
        return (
            self._to_host(u, prec.dtype),
            self._to_host(s, prec.real_dtype),
            self._to_host(vh, prec.dtype),
            0,
        )

    # --- Symmetric / Hermitian eigenproblem -----------------------------

    def heev_lwork(self, prec: Precision, n: int) -> int:
        return 0

    def heev(
        self, prec: Precision, a: NDArray, lwork: int,
    ) -> tuple[NDArray, NDArray, int]:
        n = a.shape[0]
        try:
            w, v = self._torch.linalg.eigh(self._to_device(a), UPLO='U')
        except self._torch.linalg.LinAlgError:
            return (
                np.zeros(n, dtype=prec.real_dtype),
                np.zeros((n, n), dtype=prec.dtype, order='F'),
                1,
            )
        return self._to_host(w, prec.real_dtype), self._to_host(v, prec.dtype), 0

    # --- General eigenproblem -------------------------------------------

    def geev_lwork(
        self, prec: Precision, n: int, compute_vl: bool, compute_vr: bool,
    ) -> int:
        return 0

    def geev(
        self, prec: Precision, a: NDArray, compute_vl: bool, compute_vr: bool,
        lwork: int,
    ) -> tuple[NDArray, NDArray | None, NDArray | None, int]:
        if compute_vl:
            raise BackendError(
                f"{self.name}: left eigenvectors are not supported",
                routine=prec.routine('geev'),
            )
        n = a.shape[0]
        try:
            w, vr = self._torch.linalg.eig(self._to_device(a))
        except self._torch.linalg.LinAlgError:
            vr_out = np.zeros((n, n), dtype=prec.dtype, order='F') if compute_vr else None
            return np.zeros(n, dtype=prec.dtype), None, vr_out, 1
        return (
            self._to_host(w, prec.dtype).ravel(),
            None,
            self._to_host(vr, prec.dtype) if compute_vr else None,
            0,
        )

    # --- Linear solves ---------------------------------------------------

    def gesv(self, prec: Precision, a: NDArray, b: NDArray) -> tuple[NDArray, NDArray, int]:
        A = self._to_device(a)
        LU, pivots, info = self._torch.linalg.lu_factor_ex(A)
        info = int(info.item())
        piv = pivots.cpu().numpy()
        if info != 0:
            return np.zeros(b.shape, dtype=prec.dtype, order='F'), piv, info
        x = self._torch.linalg.lu_solve(LU, pivots, self._to_device(b))
        return self._to_host(x, prec.dtype), piv, 0

    def posv(self, prec: Precision, a: NDArray, b: NDArray) -> tuple[NDArray, int]:
        A = self._to_device(a)
        # Only the upper triangle is referenced, as with LAPACK's UPLO='U'
        A = self._torch.triu(A) + self._torch.triu(A, diagonal=1).mH
        U, info = self._torch.linalg.cholesky_ex(A, upper=True)
        info = int(info.item())
        if info != 0:
            return np.zeros(b.shape, dtype=prec.dtype, order='F'), info
        x = self._torch.cholesky_solve(self._to_device(b), U, upper=True)
        return self._to_host(x, prec.dtype), 0

    # --- Inversion -------------------------------------------------------

    def getrf(self, prec: Precision, a: NDArray) -> tuple[NDArray, NDArray, int]:
        LU, pivots, info = self._torch.linalg.lu_factor_ex(self._to_device(a))
        return self._to_host(LU, prec.dtype), pivots.cpu().numpy(), int(info.item())

    def getri_lwork(self, prec: Precision, n: int) -> int:
        return 0

    def getri(
        self, prec: Precision, lu: NDArray, piv: NDArray, lwork: int,
    ) -> tuple[NDArray, int]:
        n = lu.shape[0]
        zero_pivots = np.flatnonzero(np.diag(lu) == 0)
        if zero_pivots.size:
            return np.array(lu, order='F'), int(zero_pivots[0]) + 1
        LU = self._to_device(lu)
        pivots = self._torch.from_numpy(np.ascontiguousarray(piv)).to(self.device)
        eye = self._torch.eye(n, dtype=LU.dtype, device=self.device)
        inv_a = self._torch.linalg.lu_solve(LU, pivots, eye)
        return self._to_host(inv_a, prec.dtype), 0

    # --- BLAS ------------------------------------------------------------

    def gemm(
        self, prec: Precision, alpha: Any, a: NDArray, b: NDArray,
        trans_a: int = 0, trans_b: int = 0,
    ) -> NDArray:
        A = _op(self._to_device(a), trans_a)
        B = _op(self._to_device(b), trans_b)
        return self._to_host(alpha * (A @ B), prec.dtype)

    def scal(self, prec: Precision, alpha: Any, x: NDArray) -> NDArray:
        x *= alpha
        return x


def _op(t, trans: int):
    if trans == 1:
        return t.mT
    if trans == 2:
        return t.mH
    return t
