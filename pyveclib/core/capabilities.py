"""
Capability string constants for PyVeclib backends.

This module is the SINGLE SOURCE OF TRUTH for capability strings.
Import from here, never use raw strings.

Usage:
    from pyveclib.core.capabilities import CAPABILITY_WORKSPACE_QUERY

    if backend.supports(CAPABILITY_WORKSPACE_QUERY):
        lwork = backend.gesvd_lwork(prec, m, n, full_matrices=True)
"""

# Backend sizes scratch through a separate workspace query (lwork = -1)
CAPABILITY_WORKSPACE_QUERY = 'workspace_query'

# Backend exposes BLAS level-1 vector routines (copy, scal, dot)
CAPABILITY_BLAS_VECTOR = 'blas_vector'

# General eigensolver can return left eigenvectors
CAPABILITY_LEFT_EIGENVECTORS = 'left_eigenvectors'

# Backend runs on a GPU device
CAPABILITY_GPU_NATIVE = 'gpu_native'

# All capabilities as a frozenset for validation
ALL_CAPABILITIES = frozenset({
    CAPABILITY_WORKSPACE_QUERY,
    CAPABILITY_BLAS_VECTOR,
    CAPABILITY_LEFT_EIGENVECTORS,
    CAPABILITY_GPU_NATIVE,
})

__all__ = [
    'CAPABILITY_WORKSPACE_QUERY',
    'CAPABILITY_BLAS_VECTOR',
    'CAPABILITY_LEFT_EIGENVECTORS',
    'CAPABILITY_GPU_NATIVE',
    'ALL_CAPABILITIES',
]
