"""Replication backends for dense and sparse matrices."""

from repdiag.algebra.protocols import ReplicationBackend
from repdiag.algebra.dense import DenseBackend
from repdiag.algebra.sparse import SparseBackend, TripletAccumulator
from repdiag.algebra.operators import ReplicatedOperator, replicated_operator

__all__ = [
    "ReplicationBackend",
    "DenseBackend",
    "SparseBackend",
    "TripletAccumulator",
    "ReplicatedOperator",
    "replicated_operator",
]
