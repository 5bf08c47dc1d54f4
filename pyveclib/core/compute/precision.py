"""
Precision table for PyVeclib.

Every driver and vector primitive is parameterized by one of four value
domains, named after the BLAS/LAPACK routine prefixes:

    s: float32      d: float64      c: complex64      z: complex128

A Precision knows its dtype, the real dtype of its singular/eigenvalues,
its complex counterpart (general eigenproblems always run in complex
arithmetic) and the pseudo-inverse clamp tolerance.
"""

from dataclasses import dataclass
from typing import Any, Callable

import numpy as np


@dataclass(frozen=True)
class Precision:
    """
    One BLAS/LAPACK value domain.

    Attributes:
        prefix: Routine prefix ('s', 'd', 'c', 'z')
        dtype: Element dtype of matrices in this domain
        real_dtype: dtype of singular values and Hermitian eigenvalues
        pinv_tol: Singular values at or below this are not inverted by pinv
    """
    prefix: str
    dtype: np.dtype
    real_dtype: np.dtype
    pinv_tol: float

    @property
    def is_complex(self) -> bool:
        return self.prefix in ('c', 'z')

    @property
    def is_double(self) -> bool:
        return self.prefix in ('d', 'z')

    @property
    def as_complex(self) -> 'Precision':
        """Matching complex domain (self if already complex)."""
        return COMPLEX_DOUBLE if self.is_double else COMPLEX_SINGLE

    @property
    def eps(self) -> float:
        """Machine epsilon of the real dtype."""
        return float(np.finfo(self.real_dtype).eps)

    def routine(self, name: str) -> str:
        """Prefixed routine name, e.g. routine('gesvd') -> 'dgesvd'."""
        return f"{self.prefix}{name}"

    def __str__(self) -> str:
        return self.prefix


SINGLE = Precision('s', np.dtype(np.float32), np.dtype(np.float32), 1e-5)
DOUBLE = Precision('d', np.dtype(np.float64), np.dtype(np.float64), 1e-9)
COMPLEX_SINGLE = Precision('c', np.dtype(np.complex64), np.dtype(np.float32), 1e-5)
COMPLEX_DOUBLE = Precision('z', np.dtype(np.complex128), np.dtype(np.float64), 1e-9)

PRECISIONS: dict[str, Precision] = {
    p.prefix: p for p in (SINGLE, DOUBLE, COMPLEX_SINGLE, COMPLEX_DOUBLE)
}


def resolve_precision(precision: Any) -> Precision:
    """
    Normalize a precision specifier.

    Args:
        precision: A Precision, a prefix ('s', 'd', 'c', 'z') or a numpy
            dtype / scalar type of one of the four domains

    Returns:
        The matching Precision

    Raises:
        ValueError: If the specifier names no supported domain
    """
    if isinstance(precision, Precision):
        return precision
    if isinstance(precision, str) and precision in PRECISIONS:
        return PRECISIONS[precision]
    try:
        dtype = np.dtype(precision)
    except TypeError as e:
        raise ValueError(f"Unknown precision: {precision!r}") from e
    for p in PRECISIONS.values():
        if p.dtype == dtype:
            return p
    raise ValueError(
        f"Unsupported dtype {dtype}; expected one of "
        f"float32, float64, complex64, complex128"
    )


def typed_entry_point(func: Callable[..., Any], prec: Precision, name: str) -> Callable[..., Any]:
    """
    Bind a generic operation to one precision under its BLAS-style name.

    typed_entry_point(svd, SINGLE, 'ssvd') behaves like
    svd(..., precision=SINGLE).
    """
    def entry(*args: Any, **kwargs: Any) -> Any:
        return func(*args, precision=prec, **kwargs)

    entry.__name__ = entry.__qualname__ = name
    entry.__module__ = func.__module__
    entry.__doc__ = (
        f"{func.__name__}() with precision '{prec.prefix}' ({prec.dtype}).\n\n"
        f"See {func.__module__}.{func.__name__} for arguments and return value."
    )
    return entry


