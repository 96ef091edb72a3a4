"""Dense replication backend using NumPy."""

import numpy as np
from numpy.typing import NDArray

from repdiag.core.layout import ReplicationLayout


class DenseBackend:
    """NumPy implementation of diagonal replication."""

    def replicate(self, A: NDArray, layout: ReplicationLayout) -> NDArray:
        """Allocate a zero matrix of A's array type and copy A into each block."""
        B = np.zeros_like(A, shape=layout.shape)
        self._fill_blocks(A, layout, B)
        return B

    def replicate_into(
        self, A: NDArray, layout: ReplicationLayout, out: NDArray
    ) -> NDArray:
        """
        Reuse the storage of `out` for the replicated matrix.

        An `out` already of shape (m*d, n*d) is overwritten as is, views
        included. Any other `out` is resized in place, which NumPy only
        allows for a contiguous array that owns its data and is not
        referenced elsewhere.

        Args:
            A: Matrix (m, n)
            layout: Validated output layout
            out: Array with dtype equal to A's, not overlapping A

        Returns:
            out, now of shape (m*d, n*d)
        """
        if not isinstance(out, np.ndarray):
            raise TypeError(
                f"Dense input needs an ndarray output, got {type(out).__name__}"
            )
        if out.dtype != layout.dtype:
            raise TypeError(
                f"Output dtype {out.dtype} does not match input dtype {layout.dtype}"
            )
        if np.shares_memory(A, out):
            raise ValueError("Output must not share memory with the input matrix")

        if out.shape != layout.shape:
            self._resize(out, layout.shape)
        out.fill(0)
        self._fill_blocks(A, layout, out)
        return out

    @staticmethod
    def _resize(out: NDArray, shape: tuple[int, int]) -> None:
        if not out.flags.owndata or not out.flags.c_contiguous:
            raise TypeError(
                f"Output of shape {out.shape} must be a contiguous array owning "
                f"its data to be resized; pass one already shaped {shape}"
            )
        try:
            out.resize(shape)
        except ValueError as err:
            raise ValueError(
                f"Output of shape {out.shape} is still referenced and cannot "
                f"be resized in place; pass it already shaped {shape}"
            ) from err

    @staticmethod
    def _fill_blocks(A: NDArray, layout: ReplicationLayout, B: NDArray) -> None:
        m, n = layout.block_shape
        for k in range(layout.repeats):
            r0 = layout.row_offset(k)
            c0 = layout.col_offset(k)
            B[r0:r0 + m, c0:c0 + n] = A
