"""
Input validation utilities for PyVeclib.

These validators follow the "fail fast, fail loud" principle. They raise
immediately with clear error messages rather than silently correcting
or making assumptions about user intent. Every driver validates at its
boundary, before any scratch buffer is allocated.

Design principles:
    - No silent type coercion that loses information (complex -> real)
    - Clear, actionable error messages with actual values
    - Each function validates ONE thing
    - Parameter names included in all error messages
"""

import numpy as np
from numpy.typing import ArrayLike, NDArray
from typing import Any

from pyveclib.core.compute.precision import Precision
from pyveclib.core.exceptions import ValidationError, DimensionError


def check_array(
    array: ArrayLike,
    name: str,
    precision: Precision,
) -> NDArray[Any]:
    """
    Validate and convert input to a numpy array of the precision's dtype.

    Args:
        array: Input to validate
        name: Parameter name for error messages
        precision: Target value domain

    Returns:
        numpy.ndarray with dtype precision.dtype (a copy only if needed)

    Raises:
        ValidationError: If input is non-numeric, or complex data is given
            to a real-valued entry point
    """
    try:
        result = np.asarray(array)
    except (ValueError, TypeError) as e:
        raise ValidationError(f"{name}: cannot convert to array: {e}") from e

    if result.dtype == object:
        raise ValidationError(
            f"{name}: converted to object dtype, indicating mixed types or non-numeric data"
        )

    if not np.issubdtype(result.dtype, np.number):
        raise ValidationError(
            f"{name}: non-numeric dtype {result.dtype}, expected numeric data"
        )

    if np.iscomplexobj(result) and not precision.is_complex:
        raise ValidationError(
            f"{name}: complex dtype {result.dtype} passed to real-valued "
            f"'{precision.prefix}' entry point"
        )

    return result.astype(precision.dtype, copy=False)


def check_finite(array: NDArray[Any], name: str) -> None:
    """
    Verify array contains no NaN or Inf values.

    Raises:
        ValidationError: If array contains non-finite values
    """
    if not np.all(np.isfinite(array)):
        n_nan = int(np.sum(np.isnan(array)))
        n_inf = int(np.sum(np.isinf(array)))
        raise ValidationError(
            f"{name}: contains non-finite values ({n_nan} NaN, {n_inf} Inf)"
        )


def check_dims(**dims: int) -> None:
    """
    Verify every named dimension is a positive integer.

    Usage:
        check_dims(dim1=dim1, dim2=dim2)

    Raises:
        DimensionError: If any dimension is not a positive integer
    """
    for name, value in dims.items():
        if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
            raise DimensionError(
                f"{name}: expected a positive integer, got {type(value).__name__}"
            )
        if value < 1:
            raise DimensionError(f"{name}: expected a positive integer, got {value}")


def check_size(array: NDArray[Any], size: int, name: str) -> None:
    """
    Verify array holds exactly `size` elements.

    A row-major matrix may be passed flat or 2-D; only the element count
    is prescribed.

    Raises:
        DimensionError: If the element count differs
    """
    if array.size != size:
        raise DimensionError(
            f"{name}: expected {size} elements, got {array.size} with shape {array.shape}"
        )


def check_min_size(array: NDArray[Any], size: int, name: str) -> None:
    """
    Verify array holds at least `size` elements.

    Raises:
        DimensionError: If the array is too short
    """
    if array.size < size:
        raise DimensionError(
            f"{name}: expected at least {size} elements, got {array.size}"
        )


def check_output_buffer(
    buffer: Any,
    size: int,
    precision: Precision,
    name: str,
    *,
    exact: bool = True,
) -> NDArray[Any]:
    """
    Verify a caller-supplied output buffer can be written in place.

    Args:
        buffer: The caller's buffer
        size: Required number of elements
        precision: Required value domain (dtype must match exactly)
        name: Parameter name for error messages
        exact: If False, a longer buffer is accepted (vector primitives)

    Returns:
        A flat, writable view of the buffer

    Raises:
        ValidationError: If buffer is not a writable, C-contiguous ndarray
            of the precision's dtype
        DimensionError: If buffer has the wrong number of elements
    """
    if not isinstance(buffer, np.ndarray):
        raise ValidationError(
            f"{name}: output buffer must be a numpy.ndarray, got {type(buffer).__name__}"
        )
    if buffer.dtype != precision.dtype:
        raise ValidationError(
            f"{name}: output dtype {buffer.dtype} does not match "
            f"'{precision.prefix}' precision ({precision.dtype})"
        )
    if not buffer.flags.writeable:
        raise ValidationError(f"{name}: output buffer is read-only")
    if not buffer.flags.c_contiguous:
        raise ValidationError(f"{name}: output buffer must be C-contiguous (row-major)")

    if exact:
        check_size(buffer, size, name)
    else:
        check_min_size(buffer, size, name)

    return buffer.reshape(-1)
