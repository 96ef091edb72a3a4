"""
Repdiag: repeat a matrix along the diagonal of a block-diagonal matrix.

If A is m by n, repdiag builds the (m*d) by (n*d) matrix diag(A, ..., A)
with A in each of the d diagonal blocks. Supports:
- Dense NumPy arrays
- SciPy sparse matrices and arrays in any format, via two-phase assembly
- Matrix-free application of the replicated operator
"""

__version__ = "0.1.0"

from repdiag.replicate import replicate
from repdiag.core.layout import ReplicationLayout, deduce_layout
from repdiag.algebra.operators import ReplicatedOperator, replicated_operator

__all__ = [
    "replicate",
    "ReplicationLayout",
    "deduce_layout",
    "ReplicatedOperator",
    "replicated_operator",
]
