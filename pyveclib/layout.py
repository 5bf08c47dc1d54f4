"""
Row-major <-> column-major layout adapter.

Callers hand over row-major matrices with explicit dimensions; LAPACK wants
column-major storage. Every conversion here is an explicit copy into a fresh
(or caller-supplied) buffer, O(rows * cols), with no fallible path other
than allocation.

Also home to the output conventions shared by the drivers: diagonal
embedding of singular/eigenvalues, eigenpair column reordering, and the
stable sortf utility.
"""

from __future__ import annotations

from typing import Any

import numpy as np
from numpy.typing import ArrayLike, NDArray


def to_column_major(
    A: ArrayLike,
    rows: int,
    cols: int,
    dtype: Any = None,
) -> NDArray[Any]:
    """
    Copy a row-major matrix into a fresh column-major buffer.

    Args:
        A: Row-major matrix, flat (rows*cols,) or 2-D (rows, cols)
        rows: Number of rows
        cols: Number of columns
        dtype: Buffer dtype (defaults to A's dtype)

    Returns:
        Fortran-ordered (rows, cols) array; element (i, j) sits at flat
        position j*rows + i of its memory
    """
    src = np.asarray(A).reshape(rows, cols)
    buf = np.empty((rows, cols), dtype=src.dtype if dtype is None else dtype, order='F')
    buf[...] = src
    return buf


def from_column_major(
    buf: NDArray[Any],
    rows: int,
    cols: int,
    out: NDArray[Any] | None = None,
) -> NDArray[Any]:
    """
    Copy a column-major (rows, cols) backend buffer back to row-major.

    Args:
        buf: Column-major buffer, 2-D (rows, cols) or flat in Fortran order
        rows: Number of rows
        cols: Number of columns
        out: Optional C-contiguous destination with rows*cols elements

    Returns:
        Row-major (rows, cols) array (a view of `out` when supplied)
    """
    src = np.asarray(buf).reshape((rows, cols), order='F')
    if out is None:
        return np.ascontiguousarray(src)
    dst = out.reshape(rows, cols)
    dst[...] = src
    return dst


def embed_diagonal(
    values: ArrayLike,
    rows: int,
    cols: int,
    out: NDArray[Any] | None = None,
    *,
    reverse: bool = False,
    dtype: Any = None,
) -> NDArray[Any]:
    """
    Zero a rows x cols matrix and scatter values along its diagonal.

    Only the first min(rows, cols) values are used.

    Args:
        values: Diagonal entries (singular values, eigenvalues)
        rows: Number of rows
        cols: Number of columns
        out: Optional row-major destination with rows*cols elements
        reverse: Store the values in reverse order
        dtype: dtype of a freshly allocated output (defaults to values')

    Returns:
        Row-major (rows, cols) diagonal matrix
    """
    vals = np.asarray(values)
    k = min(rows, cols, vals.size)
    if out is None:
        dst = np.zeros((rows, cols), dtype=vals.dtype if dtype is None else dtype)
    else:
        dst = out.reshape(rows, cols)
        dst[...] = 0
    vals = vals[:k]
    if reverse:
        vals = vals[::-1]
    idx = np.arange(k)
    dst[idx, idx] = vals
    return dst


def reorder_columns(
    buf: NDArray[Any],
    order: ArrayLike,
    out: NDArray[Any] | None = None,
) -> NDArray[Any]:
    """
    Permute the columns of a column-major buffer and return it row-major.

    Column j of the result is column order[j] of buf.

    Args:
        buf: Column-major (rows, cols) buffer
        order: Column permutation
        out: Optional row-major destination

    Returns:
        Row-major reordered matrix (a view of `out` when supplied)
    """
    rows, cols = buf.shape
    permuted = np.asarray(buf)[:, np.asarray(order)]
    return from_column_major(np.asfortranarray(permuted), rows, cols, out=out)


def sortf(
    values: NDArray[Any],
    out: NDArray[Any] | None = None,
    indices: NDArray[Any] | None = None,
    *,
    descending: bool = False,
) -> tuple[NDArray[Any], NDArray[np.intp]]:
    """
    Stable sort of a real vector, optionally reporting the permutation.

    Builds a scratch array of (value, original index) pairs, sorts it by
    value in the requested direction, and writes the sorted values either
    to `out` or back into `values`. Equal values keep their original
    relative order in both directions.

    Args:
        values: Real 1-D array; sorted in place when `out` is None
        out: Optional destination for the sorted values
        indices: Optional integer destination for the original indices
        descending: Sort largest first

    Returns:
        (sorted values, original indices) - the arrays written to

    Example:
        >>> sortf(np.array([3., 1., 2.]), descending=True)
        (array([3., 2., 1.]), array([0, 2, 1]))
    """
    n = values.shape[0]
    pairs = np.empty(n, dtype=[('val', values.dtype), ('idx', np.intp)])
    pairs['val'] = values
    pairs['idx'] = np.arange(n)

    # Negated key, not a reversed ascending sort: ties keep original order.
    key = -pairs['val'] if descending else pairs['val']
    pairs = pairs[np.argsort(key, kind='stable')]

    target = values if out is None else out
    target[:n] = pairs['val']
    if indices is None:
        indices = pairs['idx'].copy()
    else:
        indices[:n] = pairs['idx']
    return target, indices
