"""Block Kronecker utilities for replicated (I_d ⊗ A) systems."""

from typing import Any

import numpy as np
import scipy.sparse as sps
from numpy.typing import NDArray

from repdiag.core.layout import check_repeats


def block_matvec(A: Any, x: NDArray, d: int) -> NDArray:
    """
    Compute (I_d ⊗ A) @ x without forming the block-diagonal matrix.

    Args:
        A: Dense or sparse matrix (m, n)
        x: Vector of length d*n
        d: Number of diagonal blocks

    Returns:
        Vector of length d*m
    """
    d = check_repeats(d)
    m, n = A.shape
    x = np.asarray(x)
    if x.size != d * n:
        raise ValueError(f"Expected vector of length {d * n}, got {x.size}")

    # Column k of X is the k-th block of x
    X = x.reshape(d, n).T
    return np.asarray(A @ X).T.reshape(d * m)


def block_rmatvec(A: Any, x: NDArray, d: int) -> NDArray:
    """
    Compute (I_d ⊗ A).T @ x without forming the block-diagonal matrix.

    Args:
        A: Dense or sparse matrix (m, n)
        x: Vector of length d*m
        d: Number of diagonal blocks

    Returns:
        Vector of length d*n
    """
    d = check_repeats(d)
    m, n = A.shape
    x = np.asarray(x)
    if x.size != d * m:
        raise ValueError(f"Expected vector of length {d * m}, got {x.size}")

    X = x.reshape(d, m).T
    return np.asarray(A.T @ X).T.reshape(d * n)


def diagonal_blocks(B: Any, block_shape: tuple[int, int], d: int) -> list:
    """
    Extract the d diagonal blocks of B.

    Args:
        B: Dense or sparse matrix of shape (m*d, n*d)
        block_shape: (m, n)
        d: Number of diagonal blocks

    Returns:
        List of d copies, each (m, n), in the representation of B
    """
    d = check_repeats(d)
    m, n = block_shape
    if B.shape != (m * d, n * d):
        raise ValueError(
            f"Matrix of shape {B.shape} does not hold {d} blocks of {block_shape}"
        )

    if sps.issparse(B):
        indexable = B.tocsr()
        return [
            indexable[k*m:(k+1)*m, k*n:(k+1)*n].asformat(B.format)
            for k in range(d)
        ]

    return [B[k*m:(k+1)*m, k*n:(k+1)*n].copy() for k in range(d)]
