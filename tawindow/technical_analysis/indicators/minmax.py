"""
Min/Max rolling extrema.

This module implements rolling minimum and maximum tracking with monotonic
deques: O(1) amortized per sample and O(n) per series instead of the O(n*W)
brute-force reduction.

Classes:
    MonotonicDeque: Single-direction monotonic deque over a sliding window.
    RollingMinMax: Streaming calculator for both extrema.

Functions:
    rolling_max: Rolling maximum of a series.
    rolling_min: Rolling minimum of a series.
"""

import logging
import math
import numbers
from collections import deque
from typing import Deque, Tuple

import numpy as np

from ..validation import SeriesLike, as_series, preserve_index

logger = logging.getLogger(__name__)

_MODES = ("max", "min")


class MonotonicDeque:
    """
    Monotonic deque of ``(value, index)`` entries for one window size.

    In ``max`` mode values are kept strictly decreasing from front to back,
    in ``min`` mode strictly increasing, so the front is always the extremum
    of the current window.

    Attributes:
        window_size (int): The window length.
        mode (str): ``"max"`` or ``"min"``.
    """

    def __init__(self, window_size: int, mode: str = "max"):
        if not isinstance(window_size, numbers.Integral) or window_size <= 0:
            raise ValueError("Window size must be a positive integer.")
        if mode not in _MODES:
            raise ValueError(f"Mode must be one of {_MODES}, got '{mode}'.")

        self.window_size = int(window_size)
        self.mode = mode
        self._entries: Deque[Tuple[float, int]] = deque()

    def _dominates(self, new_value: float, old_value: float) -> bool:
        if self.mode == "max":
            return new_value >= old_value
        return new_value <= old_value

    def expire(self, index: int) -> None:
        """Evict entries that fall outside the window ending at ``index``."""
        while self._entries and self._entries[0][1] <= index - self.window_size:
            self._entries.popleft()

    def push(self, value: float, index: int) -> None:
        """
        Add the sample at ``index``.

        Entries dominated by the new value can never be the extremum again
        while it stays in the window, so they are dropped from the back.
        """
        while self._entries and self._dominates(value, self._entries[-1][0]):
            self._entries.pop()
        self._entries.append((value, index))

    @property
    def front(self) -> float:
        """Current extremum, or NaN if the window holds no value."""
        return self._entries[0][0] if self._entries else math.nan

    def __len__(self) -> int:
        return len(self._entries)

    def clear(self) -> None:
        self._entries.clear()


class RollingMinMax:
    """
    Streaming minimum and maximum over the last ``period`` samples.

    Backed by one min and one max MonotonicDeque, so each update is O(1)
    amortized. Non-finite samples take up a slot in the window but are never
    candidates; a window made only of invalid samples reports NaN.

    Attributes:
        period (int): Window length in samples.
        is_ready (bool): True once a full window has been seen.
        min (float): Smallest valid sample in the window.
        max (float): Largest valid sample in the window.
    """

    def __init__(self, period: int):
        """
        Args:
            period (int): Window length, a positive integer.
        """
        if isinstance(period, bool) or not isinstance(period, numbers.Integral) or period <= 0:
            raise ValueError(f"period must be a positive integer, got {period!r}")

        self.period = period
        self._min_deque = MonotonicDeque(period, "min")
        self._max_deque = MonotonicDeque(period, "max")
        self._count = 0

    def update(self, value: float) -> None:
        """Advance the window by one sample; NaN, None and infinities are not candidates."""
        index = self._count
        self._min_deque.expire(index)
        self._max_deque.expire(index)

        if value is not None and math.isfinite(value):
            self._min_deque.push(value, index)
            self._max_deque.push(value, index)

        self._count += 1

    @property
    def is_ready(self) -> bool:
        """True once ``period`` samples (valid or not) have been fed."""
        return self._count >= self.period

    @property
    def min(self) -> float:
        """Window minimum, NaN when the window holds no valid sample."""
        return self._min_deque.front

    @property
    def max(self) -> float:
        """Window maximum, NaN when the window holds no valid sample."""
        return self._max_deque.front

    def reset(self) -> None:
        """Drop all samples."""
        self._max_deque.clear()
        self._min_deque.clear()
        self._count = 0


def _rolling_extremum(series: SeriesLike, window_size: int, mode: str) -> np.ndarray:
    # Degenerate configurations return an empty result instead of raising.
    if isinstance(window_size, bool) or not isinstance(window_size, numbers.Integral) or window_size <= 0:
        logger.debug(f"rolling_{mode}: invalid window size {window_size!r}, returning empty result")
        return np.array([], dtype=np.float64)

    values = as_series(series)
    if values.size == 0:
        return np.array([], dtype=np.float64)

    tracker = MonotonicDeque(window_size, mode)
    result = np.full(values.size, np.nan)
    finite = np.isfinite(values)

    for i, value in enumerate(values.tolist()):
        tracker.expire(i)
        if finite[i]:
            tracker.push(value, i)
        if i >= window_size - 1:
            result[i] = tracker.front

    return result


@preserve_index
def rolling_max(series: SeriesLike, window_size: int) -> np.ndarray:
    """
    Rolling maximum over windows of ``window_size`` samples.

    Example:
        >>> rolling_max([5, 3, 8, 2, 9, 1], 3)
        array([nan, nan,  8.,  8.,  9.,  9.])

    Returns:
        np.ndarray: Same length as the input, NaN for the first
            ``window_size - 1`` positions. Empty if the series is empty or
            the window size is not a positive integer.
    """
    return _rolling_extremum(series, window_size, "max")


@preserve_index
def rolling_min(series: SeriesLike, window_size: int) -> np.ndarray:
    """Rolling minimum; mirror of :func:`rolling_max`."""
    return _rolling_extremum(series, window_size, "min")
