"""Replication backend protocol."""

from typing import Protocol, Any

from repdiag.core.layout import ReplicationLayout


class ReplicationBackend(Protocol):
    """
    Protocol for building diag(A, ..., A) in one matrix representation.
    Allows swapping between dense and sparse implementations.
    """

    def replicate(self, A: Any, layout: ReplicationLayout) -> Any:
        """
        Build a fresh replicated matrix.

        Args:
            A: Matrix to repeat, shape layout.block_shape
            layout: Validated output layout

        Returns:
            New matrix of shape layout.shape, same representation as A
        """
        ...

    def replicate_into(
        self, A: Any, layout: ReplicationLayout, out: Any
    ) -> Any:
        """
        Overwrite a caller-provided matrix with the replicated result.

        Args:
            A: Matrix to repeat
            layout: Validated output layout
            out: Storage to reuse; resized to layout.shape

        Returns:
            out
        """
        ...
