from __future__ import annotations

import logging

import numpy as np

logger = logging.getLogger(__name__)


def clamp_index(k: int, lo: int, hi: int) -> int:
    """Clamp table index k into [lo, hi]. Every caller goes through here."""
    if k < lo:
        return lo
    if k > hi:
        return hi
    return k


def is_monotonic(arr: np.ndarray, strict: bool = False) -> bool:
    """
    True if arr is monotonically increasing or decreasing.
    Direction comes from the endpoints; with strict=True repeats are not allowed.
    """
    a = np.asarray(arr, dtype=float)
    if a.shape[0] < 2:
        raise ValueError("array must have more than one element")
    d = np.diff(a)
    if a[0] > a[-1]:
        d = -d
    if strict:
        return bool(np.all(d > 0.0))
    return bool(np.all(d >= 0.0))


def binary_search(arr: np.ndarray, x: float) -> int:
    """
    Find i such that arr[i] <= x < arr[i+1] in a monotonic array.

    For a decreasing array the bracket is arr[i+1] <= x < arr[i].
    Returns -1 or n (= len(arr)) when x is outside the array; these are
    sentinels for the caller to clamp, not errors.
    """
    a = np.asarray(arr, dtype=float)
    n = a.shape[0]
    if n < 2:
        raise ValueError("array must have more than one element")
    x = float(x)

    if a[0] < a[-1]:
        if x < a[0]:
            return -1
        if x >= a[-1]:
            return n
        return int(np.searchsorted(a, x, side="right")) - 1

    # decreasing: search the reversed (increasing) view
    if x < a[-1]:
        return n
    if x >= a[0]:
        return -1
    j = int(np.searchsorted(a[::-1], x, side="right")) - 1
    return n - 2 - j


def linear_search(arr: np.ndarray, x: float, start_index: int) -> int:
    """
    Find j with x bracketed by arr[j], arr[j+1] by walking from start_index.

    Same bracket as binary_search: arr[j] <= x < arr[j+1] for an increasing
    array, arr[j+1] <= x < arr[j] for a decreasing one. The start index is
    clamped to [0, n-2]. When x is more than 1/20 of the array span away from
    the start entry (e.g. the search crossed the stitch of a closed loop)
    this falls back to binary_search, which may return the -1 / n sentinels.
    Otherwise the walk stops at 0 or n-2 when x is outside the array.
    """
    a = np.asarray(arr, dtype=float)
    n = a.shape[0]
    if n < 2:
        raise ValueError("array must have more than one element")
    x = float(x)

    j = clamp_index(int(start_index), 0, n - 2)
    span = abs(a[-1] - a[0])
    if abs(a[j] - x) > span / 20.0:
        logger.debug("linear_search: x=%.5f far from arr[%d]=%.5f, using binary search", x, j, a[j])
        return binary_search(a, x)

    increasing = a[0] < a[-1]
    while True:
        if increasing:
            if a[j] <= x < a[j + 1]:
                break
            back = x < a[j]
        else:
            if a[j + 1] <= x < a[j]:
                break
            back = x >= a[j]
        if back:
            if j > 0:
                j -= 1
            else:
                break
        else:
            if j < n - 2:
                j += 1
            else:
                break
    return j
