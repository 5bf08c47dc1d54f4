"""
PyVeclib: row-major dense linear algebra over LAPACK/BLAS.

A uniform calling convention (row-major input, explicit dimensions,
caller-supplied output buffers) wrapped around column-major LAPACK and
BLAS routines, with optional GPU execution through PyTorch.

Submodules:
    vector: Vector primitives (copy, multiply, dot, scalar arithmetic)
    layout: Row-major <-> column-major conversion, sortf
    decomposition: SVD, eigendecompositions, solvers, pseudo-inverse, inverse
    backends: scipy (CPU reference) and torch backends, backend selection
"""

import logging

__version__ = "0.1.0"
__author__ = "Hai-Shuo"
__email__ = "contact@sgcx.org"

logging.getLogger(__name__).addHandler(logging.NullHandler())

from pyveclib import decomposition
from pyveclib import layout
from pyveclib import vector
from pyveclib.backends import get_backend, set_default_backend
from pyveclib.core.result import Ownership, Result, Status

__all__ = [
    "__version__",
    "decomposition",
    "layout",
    "vector",
    "get_backend",
    "set_default_backend",
    "Result",
    "Status",
    "Ownership",
]
