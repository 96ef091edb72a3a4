"""Block utilities for replicated systems."""

from repdiag.utils.kronecker import block_matvec, block_rmatvec, diagonal_blocks

__all__ = [
    "block_matvec",
    "block_rmatvec",
    "diagonal_blocks",
]
