"""Output layout deduction for diagonal replication."""

from dataclasses import dataclass
import numbers

import numpy as np
import scipy.sparse as sps


@dataclass(frozen=True)
class ReplicationLayout:
    """Sizes of B = diag(A, ..., A) known before any allocation."""

    block_shape: tuple[int, int]  # (m, n) of A
    repeats: int                  # d
    dtype: np.dtype

    # Stored entries B will hold: d*nnz(A) when sparse, d*m*n when dense
    capacity: int

    @property
    def shape(self) -> tuple[int, int]:
        """Shape (m*d, n*d) of the replicated matrix."""
        m, n = self.block_shape
        return (m * self.repeats, n * self.repeats)

    def row_offset(self, k: int) -> int:
        return k * self.block_shape[0]

    def col_offset(self, k: int) -> int:
        return k * self.block_shape[1]


def check_repeats(d) -> int:
    """
    Validate the repetition count.

    Args:
        d: Number of times to repeat along the diagonal

    Returns:
        d as a plain int

    Raises:
        TypeError: d is not an integer (bools are rejected too)
        ValueError: d is negative
    """
    if isinstance(d, (bool, np.bool_)) or not isinstance(d, numbers.Integral):
        raise TypeError(
            f"Repetition count must be an integer, got {type(d).__name__}"
        )
    d = int(d)
    if d < 0:
        raise ValueError(f"Repetition count must be non-negative, got {d}")
    return d


def deduce_layout(A, d) -> ReplicationLayout:
    """
    Validate (A, d) and compute the layout of the replicated matrix.

    Args:
        A: Dense ndarray or scipy.sparse matrix/array, shape (m, n)
        d: Non-negative repetition count

    Returns:
        ReplicationLayout describing B
    """
    d = check_repeats(d)

    if sps.issparse(A):
        m, n = A.shape
        per_block = A.nnz
    else:
        if A.ndim != 2:
            raise ValueError(f"Expected a 2-D matrix, got ndim={A.ndim}")
        m, n = A.shape
        per_block = m * n

    return ReplicationLayout(
        block_shape=(int(m), int(n)),
        repeats=d,
        dtype=A.dtype,
        capacity=d * int(per_block),
    )
