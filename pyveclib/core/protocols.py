"""
Core protocols for PyVeclib.

These define the structural interface every numerical backend must satisfy.
We use Protocol (structural typing) rather than ABC (nominal typing) so that
test doubles and third-party backends plug in without inheriting anything.

Design Principles:
    - Kernel-level contract: one method per LAPACK/BLAS routine family,
      parameterized by Precision, taking and returning column-major
      (Fortran-ordered) buffers
    - Two-phase protocol: '*_lwork' methods answer the workspace query,
      execute methods receive that size
    - Status, not exceptions: execute methods return the raw LAPACK 'info'
      (0 success, < 0 invalid argument, > 0 numerical failure)
    - Capability-driven: use supports() for optional features
"""

from typing import Protocol, Any, runtime_checkable

from numpy.typing import NDArray

from pyveclib.core.compute.precision import Precision

Array = NDArray[Any]


@runtime_checkable
class Backend(Protocol):
    """
    Protocol for dense linear-algebra backends.

    Backends are stateless: all inputs arrive as arguments, so a single
    instance can serve concurrent calls as long as the underlying library
    is itself reentrant.

    Every 2-D array crossing this boundary is column-major. Backends may
    overwrite the arrays they are handed (they are the driver's scratch
    copies, never the caller's buffers).
    """

    @property
    def name(self) -> str:
        """
        Backend identifier.

        Convention: '{device}_{library}'
        Examples: 'cpu_scipy', 'gpu_torch'
        """
        ...

    def supports(self, capability: str) -> bool:
        """
        Check if this backend supports a given capability.

        Unknown capabilities MUST return False, never raise.
        """
        ...

    # --- SVD -------------------------------------------------------------

    def gesvd_lwork(self, prec: Precision, m: int, n: int, full_matrices: bool) -> int:
        """Optimal workspace size for gesvd (0 if self-managed)."""
        ...

    def gesvd(
        self, prec: Precision, a: Array, full_matrices: bool, lwork: int,
    ) -> tuple[Array, Array, Array, int]:
        """Singular value decomposition. Returns (u, s, vt, info)."""
        ...

    # --- Symmetric / Hermitian eigenproblem -----------------------------

    def heev_lwork(self, prec: Precision, n: int) -> int:
        """Optimal workspace size for syev/heev (0 if self-managed)."""
        ...

    def heev(
        self, prec: Precision, a: Array, lwork: int,
    ) -> tuple[Array, Array, int]:
        """Eigenvalues ascending with eigenvectors. Returns (w, v, info)."""
        ...

    # --- General eigenproblem (complex arithmetic) ----------------------

    def geev_lwork(
        self, prec: Precision, n: int, compute_vl: bool, compute_vr: bool,
    ) -> int:
        """Optimal workspace size for geev (0 if self-managed)."""
        ...

    def geev(
        self, prec: Precision, a: Array, compute_vl: bool, compute_vr: bool,
        lwork: int,
    ) -> tuple[Array, Array | None, Array | None, int]:
        """Eigenvalues in backend order. Returns (w, vl, vr, info)."""
        ...

    # --- Linear solves ---------------------------------------------------

    def gesv(self, prec: Precision, a: Array, b: Array) -> tuple[Array, Array, int]:
        """LU solve of A X = B. Returns (x, piv, info)."""
        ...

    def posv(self, prec: Precision, a: Array, b: Array) -> tuple[Array, int]:
        """Cholesky solve (upper triangle) of A X = B. Returns (x, info)."""
        ...

    # --- Inversion -------------------------------------------------------

    def getrf(self, prec: Precision, a: Array) -> tuple[Array, Array, int]:
        """LU factorization. Returns (lu, piv, info)."""
        ...

    def getri_lwork(self, prec: Precision, n: int) -> int:
        """Optimal workspace size for getri (0 if self-managed)."""
        ...

    def getri(
        self, prec: Precision, lu: Array, piv: Array, lwork: int,
    ) -> tuple[Array, int]:
        """Inverse from an LU factorization. Returns (inv_a, info)."""
        ...

    # --- BLAS ------------------------------------------------------------

    def gemm(
        self, prec: Precision, alpha: Any, a: Array, b: Array,
        trans_a: int = 0, trans_b: int = 0,
    ) -> Array:
        """alpha * op(a) @ op(b); trans 0 = none, 1 = transpose, 2 = conjugate transpose."""
        ...

    def scal(self, prec: Precision, alpha: Any, x: Array) -> Array:
        """x *= alpha, in place on x. Returns x."""
        ...


@runtime_checkable
class VectorBackend(Backend, Protocol):
    """
    Backend that also exposes BLAS level-1 vector routines.

    Only backends reporting CAPABILITY_BLAS_VECTOR need to satisfy this;
    vector primitives fall back to numpy otherwise.
    """

    def copy(self, prec: Precision, x: Array, y: Array) -> Array:
        """y[:] = x. Returns y."""
        ...

    def dot(self, prec: Precision, x: Array, y: Array, conj: bool = False) -> Any:
        """sum(x * y), conjugating x when conj is True."""
        ...
