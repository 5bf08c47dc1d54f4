"""
Decomposition and solver parameter payloads.

Each driver returns Result[P] with one of these frozen payloads. The
`ownership` field states who owns the arrays: SVD hands out fresh arrays
(OWNED); every other driver writes into the caller's buffers and the
payload merely references them (BORROWED).
"""

from dataclasses import dataclass
from typing import Any

import numpy as np
from numpy.typing import NDArray

from pyveclib.core.result import Ownership


@dataclass(frozen=True)
class SVDParams:
    """
    Full singular value decomposition A = U S V^H.

    All None when the backend failed to converge.

    Attributes:
        U: dim1 x dim1 left singular vectors, row-major
        S: dim1 x dim2 matrix with the singular values on its diagonal
        V: dim2 x dim2 right singular vectors, row-major
    """
    U: NDArray[Any] | None
    S: NDArray[np.floating[Any]] | None
    V: NDArray[Any] | None
    ownership: Ownership = Ownership.OWNED


@dataclass(frozen=True)
class EigenParams:
    """
    Eigendecomposition written into caller buffers.

    Attributes:
        D: dim x dim diagonal eigenvalue matrix (None if not requested)
        V: Right eigenvectors as columns (symmetric driver; also the
           right-eigenvector output of the general driver)
        VL: Left eigenvectors as columns (general driver only)
        descending: Ordering that was applied
        eigenvalues: Complete complex eigenvalues in the order of D
           (general driver only; a new array, not a caller buffer)
    """
    D: NDArray[Any] | None
    V: NDArray[Any] | None
    VL: NDArray[Any] | None = None
    descending: bool = False
    eigenvalues: NDArray[Any] | None = None
    ownership: Ownership = Ownership.BORROWED


@dataclass(frozen=True)
class SolveParams:
    """
    Solution X of A X = B, dim x n_col, row-major.
    """
    X: NDArray[Any]
    ownership: Ownership = Ownership.BORROWED


@dataclass(frozen=True)
class PinvParams:
    """
    Pseudo-inverse, dim2 x dim1, row-major.

    Attributes:
        pinv: The caller's output buffer
        n_clamped: Singular values at or below the tolerance (not inverted)
    """
    pinv: NDArray[Any]
    n_clamped: int = 0
    ownership: Ownership = Ownership.BORROWED


@dataclass(frozen=True)
class InverseParams:
    """
    Inverse written over the caller's input matrix.
    """
    A: NDArray[Any]
    ownership: Ownership = Ownership.BORROWED
