"""
Vector primitives on flat sequences.

    vvcopy  c = a
    vvmul   c = a * b (element-wise)
    vvdot   a . b, optionally conjugating a
    vsmul   c = a * s
    vsdiv   c = a / s, all zeros when s == 0
    vsadd   c = a + s
    vssub   c = a - s

`length` elements are processed; longer buffers are allowed. When the
output buffer `c` is omitted, the operation runs in place on `a`, which
must then be a writable ndarray of the precision's dtype. No layout
conversion happens here.

Copy, scalar multiply and dot go through the backend's BLAS level-1
routines when it advertises CAPABILITY_BLAS_VECTOR; everything else (and
every backend without that capability) is plain numpy.
"""

from __future__ import annotations

from enum import Enum
from typing import Any
import logging

import numpy as np
from numpy.typing import ArrayLike, NDArray

from pyveclib.backends import BackendChoice, get_backend
from pyveclib.core.capabilities import CAPABILITY_BLAS_VECTOR
from pyveclib.core.compute.precision import (
    COMPLEX_DOUBLE,
    COMPLEX_SINGLE,
    DOUBLE,
    SINGLE,
    Precision,
    resolve_precision,
    typed_entry_point,
)
from pyveclib.core.exceptions import DimensionError
from pyveclib.core.protocols import VectorBackend
from pyveclib.core.validation import (
    check_array,
    check_dims,
    check_min_size,
    check_output_buffer,
)

logger = logging.getLogger(__name__)


class Conj(Enum):
    """Which dot product vvdot computes for complex vectors."""
    NO_CONJ = 'no_conj'
    CONJ = 'conj'


# =====================================================================
# Argument handling
# =====================================================================


def _operand(a: ArrayLike, length: int, prec: Precision, name: str) -> NDArray[Any]:
    arr = check_array(a, name, prec).reshape(-1)
    check_min_size(arr, length, name)
    return arr[:length]


def _scalar(s: Any, prec: Precision) -> Any:
    """Accept a plain scalar or a one-element sequence."""
    arr = check_array(s, 's', prec).reshape(-1)
    if arr.size != 1:
        raise DimensionError(f"s: expected a scalar, got {arr.size} elements")
    return arr[0]


def _target(
    a: ArrayLike,
    c: NDArray[Any] | None,
    length: int,
    prec: Precision,
) -> tuple[NDArray[Any], NDArray[Any]]:
    """
    Resolve (input view, output view) for an operation with optional c.

    With c omitted, both are the same writable view of a.
    """
    check_dims(length=length)
    if c is None:
        view = check_output_buffer(a, length, prec, 'a', exact=False)[:length]
        return view, view
    out = check_output_buffer(c, length, prec, 'c', exact=False)[:length]
    return _operand(a, length, prec, 'a'), out


def _blas(backend: BackendChoice) -> VectorBackend | None:
    impl = get_backend(backend)
    if impl.supports(CAPABILITY_BLAS_VECTOR) and isinstance(impl, VectorBackend):
        return impl
    return None


# =====================================================================
# Vector-vector operations
# =====================================================================


def vvcopy(
    a: ArrayLike,
    length: int,
    c: NDArray[Any],
    *,
    precision: Precision | str = DOUBLE,
    backend: BackendChoice = 'auto',
) -> NDArray[Any]:
    """
    Copy the first `length` elements of a into c (?copy).

    Returns:
        The written slice of c
    """
    prec = resolve_precision(precision)
    check_dims(length=length)
    src = _operand(a, length, prec, 'a')
    dst = check_output_buffer(c, length, prec, 'c', exact=False)[:length]
    impl = _blas(backend)
    if impl is not None:
        return impl.copy(prec, src, dst)
    dst[...] = src
    return dst


def vvmul(
    a: ArrayLike,
    b: ArrayLike,
    length: int,
    c: NDArray[Any] | None = None,
    *,
    precision: Precision | str = DOUBLE,
    backend: BackendChoice = 'auto',
) -> NDArray[Any]:
    """
    Element-wise product a * b, into c or in place on a.

    Returns:
        The written slice (of c, or of a when in place)
    """
    prec = resolve_precision(precision)
    src, dst = _target(a, c, length, prec)
    other = _operand(b, length, prec, 'b')
    np.multiply(src, other, out=dst)
    return dst


def vvdot(
    a: ArrayLike,
    b: ArrayLike,
    length: int,
    c: NDArray[Any] | None = None,
    *,
    conj: Conj = Conj.NO_CONJ,
    precision: Precision | str = DOUBLE,
    backend: BackendChoice = 'auto',
) -> Any:
    """
    Dot product of the first `length` elements of a and b.

    For complex precisions conj=Conj.CONJ conjugates a (?dotc); the
    default is the unconjugated product (?dotu). Real precisions ignore
    `conj`.

    Args:
        c: Optional one-element output; c[0] receives the product

    Returns:
        The product as a scalar of the precision's dtype

    Example:
        >>> complex(vvdot([1j, 2], [1j, 1], 2, conj=Conj.CONJ, precision='z'))
        (3+0j)
    """
    prec = resolve_precision(precision)
    check_dims(length=length)
    x = _operand(a, length, prec, 'a')
    y = _operand(b, length, prec, 'b')
    if c is not None:
        out = check_output_buffer(c, 1, prec, 'c', exact=False)
    conjugate = prec.is_complex and Conj(conj) is Conj.CONJ

    impl = _blas(backend)
    if impl is not None:
        value = impl.dot(prec, x, y, conj=conjugate)
    else:
        value = prec.dtype.type(np.vdot(x, y) if conjugate else np.dot(x, y))

    if c is not None:
        out[0] = value
    return value


# =====================================================================
# Vector-scalar operations
# =====================================================================


def vsmul(
    a: ArrayLike,
    s: Any,
    length: int,
    c: NDArray[Any] | None = None,
    *,
    precision: Precision | str = DOUBLE,
    backend: BackendChoice = 'auto',
) -> NDArray[Any]:
    """
    Scale a by s (?scal), into c or in place on a.

    With c given, a is copied into c first and c is scaled.
    """
    prec = resolve_precision(precision)
    src, dst = _target(a, c, length, prec)
    alpha = _scalar(s, prec)
    impl = _blas(backend)
    if impl is not None:
        if dst is not src:
            impl.copy(prec, src, dst)
        return impl.scal(prec, alpha, dst)
    np.multiply(src, alpha, out=dst)
    return dst


def vsdiv(
    a: ArrayLike,
    s: Any,
    length: int,
    c: NDArray[Any] | None = None,
    *,
    precision: Precision | str = DOUBLE,
    backend: BackendChoice = 'auto',
) -> NDArray[Any]:
    """
    Divide a by s, into c or in place on a.

    A zero divisor zero-fills the output instead of producing Inf/NaN.

    Example:
        >>> vsdiv([1., 2.], 0., 2, np.empty(2))
        array([0., 0.])
    """
    prec = resolve_precision(precision)
    src, dst = _target(a, c, length, prec)
    divisor = _scalar(s, prec)
    if divisor == 0:
        logger.debug("vsdiv: zero divisor, output zero-filled")
        dst[...] = 0
        return dst
    np.divide(src, divisor, out=dst)
    return dst


def vsadd(
    a: ArrayLike,
    s: Any,
    length: int,
    c: NDArray[Any] | None = None,
    *,
    precision: Precision | str = DOUBLE,
    backend: BackendChoice = 'auto',
) -> NDArray[Any]:
    """Add s to every element of a, into c or in place on a."""
    prec = resolve_precision(precision)
    src, dst = _target(a, c, length, prec)
    np.add(src, _scalar(s, prec), out=dst)
    return dst


def vssub(
    a: ArrayLike,
    s: Any,
    length: int,
    c: NDArray[Any] | None = None,
    *,
    precision: Precision | str = DOUBLE,
    backend: BackendChoice = 'auto',
) -> NDArray[Any]:
    """Subtract s from every element of a, into c or in place on a."""
    prec = resolve_precision(precision)
    src, dst = _target(a, c, length, prec)
    np.subtract(src, _scalar(s, prec), out=dst)
    return dst


# =====================================================================
# Typed entry points
# =====================================================================

svvcopy = typed_entry_point(vvcopy, SINGLE, 'svvcopy')
dvvcopy = typed_entry_point(vvcopy, DOUBLE, 'dvvcopy')
cvvcopy = typed_entry_point(vvcopy, COMPLEX_SINGLE, 'cvvcopy')
zvvcopy = typed_entry_point(vvcopy, COMPLEX_DOUBLE, 'zvvcopy')

svvmul = typed_entry_point(vvmul, SINGLE, 'svvmul')
dvvmul = typed_entry_point(vvmul, DOUBLE, 'dvvmul')
cvvmul = typed_entry_point(vvmul, COMPLEX_SINGLE, 'cvvmul')
zvvmul = typed_entry_point(vvmul, COMPLEX_DOUBLE, 'zvvmul')

svvdot = typed_entry_point(vvdot, SINGLE, 'svvdot')
dvvdot = typed_entry_point(vvdot, DOUBLE, 'dvvdot')
cvvdot = typed_entry_point(vvdot, COMPLEX_SINGLE, 'cvvdot')
zvvdot = typed_entry_point(vvdot, COMPLEX_DOUBLE, 'zvvdot')

svsmul = typed_entry_point(vsmul, SINGLE, 'svsmul')
dvsmul = typed_entry_point(vsmul, DOUBLE, 'dvsmul')
cvsmul = typed_entry_point(vsmul, COMPLEX_SINGLE, 'cvsmul')
zvsmul = typed_entry_point(vsmul, COMPLEX_DOUBLE, 'zvsmul')

svsdiv = typed_entry_point(vsdiv, SINGLE, 'svsdiv')
dvsdiv = typed_entry_point(vsdiv, DOUBLE, 'dvsdiv')
cvsdiv = typed_entry_point(vsdiv, COMPLEX_SINGLE, 'cvsdiv')
zvsdiv = typed_entry_point(vsdiv, COMPLEX_DOUBLE, 'zvsdiv')

svsadd = typed_entry_point(vsadd, SINGLE, 'svsadd')
dvsadd = typed_entry_point(vsadd, DOUBLE, 'dvsadd')
cvsadd = typed_entry_point(vsadd, COMPLEX_SINGLE, 'cvsadd')
zvsadd = typed_entry_point(vsadd, COMPLEX_DOUBLE, 'zvsadd')

svssub = typed_entry_point(vssub, SINGLE, 'svssub')
dvssub = typed_entry_point(vssub, DOUBLE, 'dvssub')
cvssub = typed_entry_point(vssub, COMPLEX_SINGLE, 'cvssub')
zvssub = typed_entry_point(vssub, COMPLEX_DOUBLE, 'zvssub')
