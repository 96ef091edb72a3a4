"""Matrix-free replicated operator."""

from typing import Any

import numpy as np
import scipy.sparse.linalg as spla
from numpy.typing import NDArray

from repdiag.core.layout import deduce_layout
from repdiag.utils.kronecker import block_matvec, block_rmatvec


class ReplicatedOperator(spla.LinearOperator):
    """
    diag(A, ..., A) as a SciPy LinearOperator, applied block by block.

    Usable wherever SciPy expects an operator, e.g. the iterative solvers
    in scipy.sparse.linalg, without assembling the (m*d, n*d) matrix.
    """

    def __init__(self, A: Any, d: int):
        """
        Args:
            A: Dense or sparse matrix (m, n)
            d: Number of diagonal blocks, d >= 0
        """
        layout = deduce_layout(A, d)
        self.A = A
        self.repeats = layout.repeats
        super().__init__(dtype=layout.dtype, shape=layout.shape)

    def _matvec(self, x: NDArray) -> NDArray:
        return block_matvec(self.A, np.ravel(x), self.repeats)

    def _rmatvec(self, x: NDArray) -> NDArray:
        # A^H x = conj(A^T conj(x))
        return np.conj(block_rmatvec(self.A, np.conj(np.ravel(x)), self.repeats))


def replicated_operator(A: Any, d: int) -> ReplicatedOperator:
    """Operator acting as replicate(A, d) without storing it."""
    return ReplicatedOperator(A, d)
