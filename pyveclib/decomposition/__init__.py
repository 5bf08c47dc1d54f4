"""
Dense decompositions and solvers.

Every driver takes row-major input with explicit dimensions, converts it
to column-major for the backend, runs the workspace query / execute
protocol, and converts the outputs back. Each generic driver has four
typed entry points named after the BLAS/LAPACK precision prefix.

Public API:
    svd(A, dim1, dim2)                          ssvd dsvd csvd zsvd
    eigh(A, dim, sort_descending, V, D)         sseig dseig cseig zseig
    eig(A, dim, sort_descending, VL, VR, D)     seig deig ceig zeig
    glslv(A, dim, B, n_col, X)                  sglslv dglslv cglslv zglslv
    slslv(A, dim, B, n_col, X)                  sslslv dslslv cslslv zslslv
    pinv(in_m, dim1, dim2, out_m)               spinv dpinv cpinv zpinv
    inv(A, n)                                   sinv dinv cinv zinv

Example:
    >>> from pyveclib.decomposition import dsvd
    >>> result = dsvd([[3., 0.], [0., 4.]], 2, 2)
    >>> result.params.S
    array([[4., 0.],
           [0., 3.]])
"""

from pyveclib.decomposition._workspace import DriverState, Workspace
from pyveclib.decomposition.solution import (
    EigenParams,
    InverseParams,
    PinvParams,
    SolveParams,
    SVDParams,
)
from pyveclib.decomposition.svd import svd, ssvd, dsvd, csvd, zsvd
from pyveclib.decomposition.eig import (
    eigh, sseig, dseig, cseig, zseig,
    eig, seig, deig, ceig, zeig,
)
from pyveclib.decomposition.solve import (
    glslv, sglslv, dglslv, cglslv, zglslv,
    slslv, sslslv, dslslv, cslslv, zslslv,
)
from pyveclib.decomposition.pinv import pinv, spinv, dpinv, cpinv, zpinv
from pyveclib.decomposition.inverse import inv, sinv, dinv, cinv, zinv

__all__ = [
    # Drivers
    "svd", "ssvd", "dsvd", "csvd", "zsvd",
    "eigh", "sseig", "dseig", "cseig", "zseig",
    "eig", "seig", "deig", "ceig", "zeig",
    "glslv", "sglslv", "dglslv", "cglslv", "zglslv",
    "slslv", "sslslv", "dslslv", "cslslv", "zslslv",
    "pinv", "spinv", "dpinv", "cpinv", "zpinv",
    "inv", "sinv", "dinv", "cinv", "zinv",
    # Payloads
    "SVDParams",
    "EigenParams",
    "SolveParams",
    "PinvParams",
    "InverseParams",
    # Lifecycle
    "DriverState",
    "Workspace",
]
