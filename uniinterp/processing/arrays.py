"""
Array helpers shared by the interpolators: ordering checks and a binary
search that reports insertion points the way java.util.Arrays does.
"""

from typing import Sequence

import numpy as np

from .errors import DimensionMismatchError, InvalidValueError, OrderError


def as_sample_array(values: Sequence[float]) -> np.ndarray:
    """Copy values into a fresh 1-D float64 array."""
    arr = np.array(values, dtype=np.float64)
    if arr.ndim != 1:
        raise DimensionMismatchError(
            1, arr.ndim, f"Expected a 1-D sequence, got an array with {arr.ndim} dimensions"
        )
    return arr


def check_strictly_increasing(seq: np.ndarray) -> None:
    """
    Check that seq is sorted in strictly increasing order.

    Raises:
        OrderError: if seq[i] <= seq[i-1] for some i >= 1
    """
    bad = np.flatnonzero(np.diff(seq) <= 0)
    if bad.size:
        i = int(bad[0]) + 1
        raise OrderError(i, float(seq[i - 1]), float(seq[i]))


def binary_search(seq: np.ndarray, key: float) -> int:
    """
    Search a sorted sequence for key.

    Returns:
        Index of key if present, otherwise -(insertion_point + 1) where the
        insertion point is the index of the first element greater than key,
        or len(seq) if there is none.

    Raises:
        InvalidValueError: if a comparison involves NaN
    """
    low = 0
    high = len(seq) - 1
    while low <= high:
        mid = (low + high) // 2
        mid_val = seq[mid]
        if mid_val < key:
            low = mid + 1
        elif mid_val > key:
            high = mid - 1
        elif mid_val == key:
            return mid
        else:
            raise InvalidValueError(key)
    return -(low + 1)


def find_segment(knots: np.ndarray, key: float) -> int:
    """Index of the segment owning key, clamped to the first/last segment."""
    i = binary_search(knots, key)
    if i < 0:
        i = -i - 2
    return max(0, min(i, len(knots) - 2))
