"""
Generic sliding-window processing.

``process`` is the primitive every windowed reduction in the engine is built
on. It walks a series once, hands each defined window's valid samples to a
reducer and returns an output aligned with the input (NaN for positions that
do not have a full window yet).

Example:
    >>> from tawindow.technical_analysis.window import process
    >>> process([1, 2, 3, 4], 2, lambda values, i: values.sum())
    array([nan,  3.,  5.,  7.])
"""

import logging
import math
from typing import Callable, Iterator, Tuple

import numpy as np

from .validation import SeriesLike, validate, validate_length

logger = logging.getLogger(__name__)

Reducer = Callable[[np.ndarray, int], float]


def process(series: SeriesLike, window_size: int, reducer: Reducer) -> np.ndarray:
    """
    Apply a reducer to every window of a series.

    For each index ``i`` with ``i >= window_size - 1`` the window
    ``series[i - window_size + 1 : i + 1]`` is sanitized and passed to
    ``reducer(valid_values, i)``. Earlier positions hold NaN. The reducer
    owns the policy for windows with no valid value (usually NaN).

    Args:
        series: Input samples.
        window_size: Number of samples per window.
        reducer: Callable receiving the finite window values and the
            right-edge index.

    Returns:
        np.ndarray: Output of the same length as the input. Non-finite
            reducer results are stored as NaN.

    Raises:
        InvalidLengthError: If window_size is not a positive integer.
        EmptyDataError: If the series is empty.
    """
    window_size = validate_length(window_size, "window_size")
    values = validate(series)
    n = values.size

    result = np.full(n, np.nan)
    if window_size > n:
        logger.debug(f"Window size {window_size} exceeds series length {n}; output is all NaN")
        return result

    valid = np.isfinite(values)
    for i in range(window_size - 1, n):
        start = max(0, i - window_size + 1)
        window_valid = valid[start:i + 1]
        reduced = reducer(values[start:i + 1][window_valid], i)
        if reduced is not None and math.isfinite(reduced):
            result[i] = reduced

    return result


def iter_windows(series: SeriesLike, window_size: int) -> Iterator[Tuple[int, np.ndarray]]:
    """
    Lazily yield ``(index, window)`` for every defined window.

    The windows are raw (unsanitized) read-only views anchored at their
    right-edge index.

    Raises:
        InvalidLengthError: If window_size is not a positive integer.
        EmptyDataError: If the series is empty.
    """
    window_size = validate_length(window_size, "window_size")
    values = validate(series)
    values.setflags(write=False)

    def _windows() -> Iterator[Tuple[int, np.ndarray]]:
        for i in range(window_size - 1, values.size):
            yield i, values[i - window_size + 1:i + 1]

    return _windows()
