"""
Order statistics by quickselect.

kth-smallest / kth-largest / median / percentile without a full sort.
Selection works on a sanitized working copy of the input (the caller's
array is never touched), partitions it in place three ways around a
median-of-three pivot and keeps narrowing into the side that holds ``k``.
Expected O(n), worst case O(n^2).

Functions:
    kth_smallest, kth_largest, median, percentile: Scalar statistics.
    rolling_median, rolling_percentile: Windowed variants.
"""

import logging
import math
import numbers
from typing import Any, List, Tuple

import numpy as np

from .exceptions import (
    EmptyAfterSanitizationError,
    InvalidPercentileError,
    KOutOfBoundsError,
)
from .validation import SeriesLike, as_series, preserve_index
from .window import process

logger = logging.getLogger(__name__)


def _swap(work: List[float], i: int, j: int) -> None:
    work[i], work[j] = work[j], work[i]


def _median_of_three(work: List[float], left: int, right: int) -> int:
    """Order left/mid/right in place and return the index of their median."""
    mid = (left + right) // 2
    if work[left] > work[mid]:
        _swap(work, left, mid)
    if work[mid] > work[right]:
        _swap(work, mid, right)
    if work[left] > work[mid]:
        _swap(work, left, mid)
    return mid


def _partition(work: List[float], left: int, right: int) -> Tuple[int, int]:
    """
    Three-way partition of ``work[left:right + 1]`` around a median-of-three
    pivot.

    Returns ``(lt, gt)``: afterwards ``work[left:lt]`` is < pivot,
    ``work[lt:gt + 1]`` equals the pivot and ``work[gt + 1:right + 1]`` is
    > pivot. Runs of values equal to the pivot end up in the
    middle band and are never partitioned again.
    """
    pivot_value = work[_median_of_three(work, left, right)]

    lt, i, gt = left, left, right
    while i <= gt:
        if work[i] < pivot_value:
            _swap(work, i, lt)
            lt += 1
            i += 1
        elif work[i] > pivot_value:
            _swap(work, i, gt)
            gt -= 1
        else:
            i += 1
    return lt, gt


def _select(work: List[float], k: int) -> float:
    left, right = 0, len(work) - 1
    while left < right:
        lt, gt = _partition(work, left, right)
        if k < lt:
            right = lt - 1
        elif k > gt:
            left = gt + 1
        else:
            return work[k]
    return work[k]


def _working_copy(array: SeriesLike, calculation_name: str) -> List[float]:
    values = as_series(array)
    work = values[np.isfinite(values)].tolist()
    if not work:
        raise EmptyAfterSanitizationError(values.size, calculation_name)
    return work


def _check_k(k: Any, n: int, calculation_name: str) -> int:
    if isinstance(k, bool) or not isinstance(k, numbers.Integral) or not 0 <= k <= n - 1:
        raise KOutOfBoundsError(k, n - 1, calculation_name)
    return int(k)


def kth_smallest(array: SeriesLike, k: int) -> float:
    """
    Find the k-th smallest (0-based) finite value.

    Args:
        array: Input samples; NaN, None and infinities are ignored.
        k: Rank in ascending order, ``0 <= k <= n - 1`` where ``n`` is the
            number of finite samples.

    Returns:
        float: The k-th smallest value.

    Raises:
        EmptyAfterSanitizationError: If no finite sample is present.
        KOutOfBoundsError: If k is outside the valid range.

    Example:
        >>> kth_smallest([5, 3, 8, 2, 9, 1], 2)
        3.0
    """
    work = _working_copy(array, "kth_smallest")
    k = _check_k(k, len(work), "kth_smallest")
    return float(_select(work, k))


def kth_largest(array: SeriesLike, k: int) -> float:
    """K-th largest (0-based) finite value; ``kth_largest(a, 0)`` is the max."""
    work = _working_copy(array, "kth_largest")
    k = _check_k(k, len(work), "kth_largest")
    return float(_select(work, len(work) - 1 - k))


def median(array: SeriesLike) -> float:
    """
    Median of the finite values.

    For an even count the two middle order statistics are averaged.

    Raises:
        EmptyAfterSanitizationError: If no finite sample is present.
    """
    work = _working_copy(array, "median")
    n = len(work)
    if n % 2 == 1:
        return float(_select(work, n // 2))

    lower = _select(work, n // 2 - 1)
    upper = _select(work, n // 2)
    return (lower + upper) / 2


def percentile(array: SeriesLike, p: float) -> float:
    """
    Nearest-rank-below percentile of the finite values.

    The selected rank is ``floor(p / 100 * (n - 1))``, so no interpolation
    takes place.

    Args:
        array: Input samples.
        p: Percentile between 0 and 100 inclusive.

    Raises:
        InvalidPercentileError: If p is not a number in [0, 100].
        EmptyAfterSanitizationError: If no finite sample is present.
    """
    _check_percentile(p)
    work = _working_copy(array, "percentile")
    index = math.floor((p / 100) * (len(work) - 1))
    return float(_select(work, index))


def _check_percentile(p: Any) -> None:
    if isinstance(p, bool) or not isinstance(p, numbers.Real) or not 0 <= p <= 100:
        raise InvalidPercentileError(p)


def _window_median(values: np.ndarray, _index: int) -> float:
    return median(values) if values.size else math.nan


@preserve_index
def rolling_median(series: SeriesLike, window_size: int) -> np.ndarray:
    """Median of each window's finite values; NaN where a window has none."""
    return process(series, window_size, _window_median)


@preserve_index
def rolling_percentile(series: SeriesLike, window_size: int, p: float) -> np.ndarray:
    """
    Percentile of each window's finite values.

    Raises:
        InvalidPercentileError: If p is not a number in [0, 100].
    """
    _check_percentile(p)

    def _window_percentile(values: np.ndarray, _index: int) -> float:
        return percentile(values, p) if values.size else math.nan

    return process(series, window_size, _window_percentile)
