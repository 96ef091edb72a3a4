"""Core abstractions for diagonal replication."""

from repdiag.core.layout import ReplicationLayout, check_repeats, deduce_layout

__all__ = [
    "ReplicationLayout",
    "check_repeats",
    "deduce_layout",
]
