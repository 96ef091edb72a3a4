"""Tests for replication layout deduction."""

import numpy as np
import pytest
import scipy.sparse as sps

from repdiag.core.layout import ReplicationLayout, check_repeats, deduce_layout


def test_layout_dense():
    """Test layout of a dense block."""
    A = np.zeros((2, 3), dtype=np.float32)

    layout = deduce_layout(A, 4)

    assert layout.block_shape == (2, 3)
    assert layout.repeats == 4
    assert layout.shape == (8, 12)
    assert layout.dtype == np.float32
    assert layout.capacity == 4 * 6


def test_layout_sparse_capacity_counts_stored_entries():
    """Test sparse capacity is d * nnz(A)."""
    A = sps.csr_array(([1.0, 2.0, 3.0], ([0, 1, 2], [2, 1, 0])), shape=(3, 3))

    layout = deduce_layout(A, 5)

    assert layout.shape == (15, 15)
    assert layout.capacity == 15


def test_layout_offsets():
    """Test block offsets for non-square blocks."""
    layout = ReplicationLayout(
        block_shape=(2, 5), repeats=3, dtype=np.dtype(float), capacity=30
    )

    assert [layout.row_offset(k) for k in range(3)] == [0, 2, 4]
    assert [layout.col_offset(k) for k in range(3)] == [0, 5, 10]


def test_layout_zero_repeats():
    """Test d = 0 gives an empty layout."""
    layout = deduce_layout(np.ones((3, 3)), 0)

    assert layout.shape == (0, 0)
    assert layout.capacity == 0


def test_layout_is_frozen():
    """Test layouts are immutable."""
    layout = deduce_layout(np.ones((2, 2)), 2)

    with pytest.raises(Exception):  # FrozenInstanceError
        layout.repeats = 3


def test_check_repeats_accepts_integers():
    """Test Python and NumPy integers pass through as int."""
    assert check_repeats(3) == 3
    assert check_repeats(np.int32(2)) == 2
    assert type(check_repeats(np.int64(2))) is int


@pytest.mark.parametrize("d", [-1, -10, np.int64(-2)])
def test_check_repeats_rejects_negative(d):
    """Test negative counts raise ValueError."""
    with pytest.raises(ValueError):
        check_repeats(d)


@pytest.mark.parametrize("d", [1.0, 1.5, "3", True, np.bool_(True), None])
def test_check_repeats_rejects_non_integers(d):
    """Test non-integer counts raise TypeError."""
    with pytest.raises(TypeError):
        check_repeats(d)


def test_layout_rejects_vectors():
    """Test dense input must be a matrix."""
    with pytest.raises(ValueError, match="2-D"):
        deduce_layout(np.ones(4), 2)
