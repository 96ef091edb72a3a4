"""Repeat a matrix along the diagonal of a larger block-diagonal matrix."""

import functools
import logging
from typing import Any

import numpy as np
import scipy.sparse as sps

from repdiag.algebra.dense import DenseBackend
from repdiag.algebra.protocols import ReplicationBackend
from repdiag.algebra.sparse import SparseBackend
from repdiag.core.layout import ReplicationLayout, deduce_layout

logger = logging.getLogger(__name__)

_DENSE = DenseBackend()
_SPARSE = SparseBackend()


@functools.singledispatch
def replicate(A: Any, d: int, out: Any = None) -> Any:
    """
    Repeat A d times along the diagonal.

    If A is m by n, the result B is (m*d) by (n*d) with

        B[k*m:(k+1)*m, k*n:(k+1)*n] = A    for k = 0, ..., d-1

    and zeros everywhere else. B is dense or sparse to match A. Dense B has
    A's array type (ndarray subclasses such as np.matrix are kept). For
    sparse A the format (csr, csc, coo, ...) and the matrix/array flavour
    are kept.

    Args:
        A: ndarray or scipy.sparse matrix/array of shape (m, n); not modified
        d: Number of repetitions, d >= 0
        out: Optional storage to reuse, with A's dtype. For sparse A, a
            csr/csc matrix of any shape; it is resized. For dense A, an
            ndarray not overlapping A. Pass it already shaped (m*d, n*d):
            NumPy refuses to resize an array while anything else, such as
            a view or the caller's own name for it, still references it.

    Returns:
        B, which is `out` when given

    Raises:
        TypeError: A is of an unsupported type, d is not an integer, or
            out does not match A's representation or dtype, or a dense out
            needing a resize is not a contiguous array owning its data
        ValueError: d is negative, dense A is not 2-D, dense out overlaps
            A, or dense out needs a resize but is still referenced
    """
    raise TypeError(f"Cannot replicate objects of type {type(A).__name__}")


def _run(
    backend: ReplicationBackend, A: Any, d: int, out: Any
) -> Any:
    layout = deduce_layout(A, d)
    _log_layout(layout)
    if out is None:
        return backend.replicate(A, layout)
    return backend.replicate_into(A, layout, out)


def _log_layout(layout: ReplicationLayout) -> None:
    logger.debug(
        "Replicating %s block %d times into %s (capacity %d)",
        layout.block_shape, layout.repeats, layout.shape, layout.capacity,
    )


@replicate.register(np.ndarray)
def _(A: np.ndarray, d: int, out: Any = None) -> np.ndarray:
    return _run(_DENSE, A, d, out)


@replicate.register(sps.spmatrix)
@replicate.register(sps.sparray)
def _(A: Any, d: int, out: Any = None) -> Any:
    return _run(_SPARSE, A, d, out)
