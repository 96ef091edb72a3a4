"""Sparse replication backend using SciPy."""

import logging
from typing import Any

import numpy as np
import scipy.sparse as sps
from numpy.typing import NDArray, DTypeLike

from repdiag.core.layout import ReplicationLayout

logger = logging.getLogger(__name__)

COMPRESSED_FORMATS = ("csr", "csc")


class TripletAccumulator:
    """
    Mutable staging area for sparse assembly.

    Entries are appended to preallocated (row, col, value) buffers and only
    compressed once, in `tocsr`. Appending is amortised O(1) per entry;
    entries sharing a coordinate are summed when frozen.
    """

    def __init__(
        self,
        shape: tuple[int, int],
        dtype: DTypeLike,
        capacity: int = 0,
    ):
        """
        Initialize an empty accumulator.

        Args:
            shape: (rows, cols) of the matrix being assembled
            dtype: Element type
            capacity: Number of entries to reserve up front
        """
        self.shape = shape
        self.dtype = np.dtype(dtype)
        self._rows = np.empty(capacity, dtype=np.intp)
        self._cols = np.empty(capacity, dtype=np.intp)
        self._data = np.empty(capacity, dtype=self.dtype)
        self._size = 0

    def __len__(self) -> int:
        return self._size

    @property
    def capacity(self) -> int:
        return self._data.shape[0]

    def reserve(self, capacity: int) -> None:
        """Grow the buffers so that `capacity` entries fit without reallocation."""
        if capacity <= self.capacity:
            return
        logger.debug(
            "Growing triplet buffers from %d to %d entries",
            self.capacity, capacity,
        )
        for name in ("_rows", "_cols", "_data"):
            old = getattr(self, name)
            new = np.empty(capacity, dtype=old.dtype)
            new[:self._size] = old[:self._size]
            setattr(self, name, new)

    def add(self, rows: NDArray, cols: NDArray, values: NDArray) -> None:
        """
        Accumulate values at (rows[i], cols[i]).

        Args:
            rows: Row indices
            cols: Column indices, same length as rows
            values: Values to add, same length as rows
        """
        count = len(values)
        if len(rows) != count or len(cols) != count:
            raise ValueError("rows, cols and values must have equal length")
        end = self._size + count
        if end > self.capacity:
            self.reserve(max(end, 2 * self.capacity))
        self._rows[self._size:end] = rows
        self._cols[self._size:end] = cols
        self._data[self._size:end] = values
        self._size = end

    def tocsr(self, container: str = "array") -> Any:
        """
        Freeze into canonical CSR form (sorted indices, no duplicates).

        Args:
            container: "array" for csr_array, "matrix" for csr_matrix

        Returns:
            Compressed sparse row matrix of shape self.shape
        """
        coo_cls = sps.coo_array if container == "array" else sps.coo_matrix
        n = self._size
        staged = coo_cls(
            (self._data[:n], (self._rows[:n], self._cols[:n])),
            shape=self.shape,
            dtype=self.dtype,
        )
        B = staged.tocsr()
        B.sum_duplicates()
        return B


class SparseBackend:
    """SciPy implementation of diagonal replication via two-phase assembly."""

    def replicate(self, A: Any, layout: ReplicationLayout) -> Any:
        """Build B in A's sparse format and container flavour."""
        B = self._assemble(A, layout)
        return B.asformat(A.format)

    def replicate_into(
        self, A: Any, layout: ReplicationLayout, out: Any
    ) -> Any:
        """
        Reuse a compressed sparse matrix as the output.

        Args:
            A: Sparse matrix (m, n)
            layout: Validated output layout
            out: csr or csc matrix/array with dtype equal to A's

        Returns:
            out, resized to (m*d, n*d) and holding B
        """
        if not sps.issparse(out) or out.format not in COMPRESSED_FORMATS:
            raise TypeError(
                "Sparse input needs a csr or csc output, got "
                f"{getattr(out, 'format', type(out).__name__)}"
            )
        if out.dtype != layout.dtype:
            raise TypeError(
                f"Output dtype {out.dtype} does not match input dtype {layout.dtype}"
            )

        B = self._assemble(A, layout).asformat(out.format)

        out.resize(layout.shape)
        out.data = B.data
        out.indices = B.indices
        out.indptr = B.indptr
        out.has_canonical_format = True
        return out

    @staticmethod
    def _assemble(A: Any, layout: ReplicationLayout) -> Any:
        container = "array" if isinstance(A, sps.sparray) else "matrix"
        acc = TripletAccumulator(layout.shape, layout.dtype, layout.capacity)

        # Stored entries in A's own (outer, inner) order
        entries = A.tocoo()
        rows = np.asarray(entries.row, dtype=np.intp)
        cols = np.asarray(entries.col, dtype=np.intp)
        values = entries.data

        for k in range(layout.repeats):
            acc.add(
                rows + layout.row_offset(k),
                cols + layout.col_offset(k),
                values,
            )

        return acc.tocsr(container)
