"""Rolling statistic dispatch over the window primitives."""

import logging
import math
from typing import Callable, Dict, Optional

import numpy as np

from .chunking import ChunkConfig, process_large_series, process_large_windows
from .exceptions import InvalidChunkConfigError, InvalidParameterError
from .indicators.minmax import rolling_max, rolling_min
from .order_statistics import median
from .validation import SeriesLike, preserve_index, validate, validate_length
from .window import process

logger = logging.getLogger(__name__)


def _mean(values: np.ndarray, _index: int) -> float:
    return float(values.mean()) if values.size else math.nan


def _sum(values: np.ndarray, _index: int) -> float:
    return float(values.sum()) if values.size else math.nan


def _median(values: np.ndarray, _index: int) -> float:
    return median(values) if values.size else math.nan


_REDUCERS: Dict[str, Callable[[np.ndarray, int], float]] = {
    "mean": _mean,
    "sum": _sum,
    "median": _median,
}

_EXTREMA: Dict[str, Callable[[np.ndarray, int], np.ndarray]] = {
    "min": rolling_min,
    "max": rolling_max,
}

STATISTICS = tuple(sorted([*_REDUCERS, *_EXTREMA]))


def _check_statistic(statistic: str) -> str:
    key = statistic.lower() if isinstance(statistic, str) else None
    if key not in _REDUCERS and key not in _EXTREMA:
        raise InvalidParameterError("statistic", statistic, f"one of {list(STATISTICS)}")
    return key


@preserve_index
def rolling_statistic(series: SeriesLike, window_size: int, statistic: str) -> np.ndarray:
    """
    Rolling statistic over windows of ``window_size`` samples.

    Args:
        series: Input samples.
        window_size: Samples per window.
        statistic: ``'min'``, ``'max'``, ``'mean'``, ``'sum'`` or ``'median'``.

    Returns:
        np.ndarray: Output aligned with the input; NaN for incomplete windows
            and windows without a finite sample.

    Raises:
        InvalidParameterError: If the statistic is unknown.
        InvalidLengthError: If window_size is not a positive integer.
        EmptyDataError: If the series is empty.
    """
    key = _check_statistic(statistic)
    window_size = validate_length(window_size, "window_size")
    values = validate(series, name=f"rolling_{key}")

    if key in _EXTREMA:
        return _EXTREMA[key](values, window_size)
    return process(values, window_size, _REDUCERS[key])


@preserve_index
def rolling_statistic_chunked(series: SeriesLike, window_size: int, statistic: str,
                              config: Optional[ChunkConfig] = None) -> np.ndarray:
    """
    Chunked variant of :func:`rolling_statistic` for large series.

    The overlap is raised to ``window_size - 1`` when the configured one is
    smaller, so the output matches the unchunked one exactly.
    """
    key = _check_statistic(statistic)
    window_size = validate_length(window_size, "window_size")
    values = validate(series, name=f"rolling_{key}_chunked")
    config = (config or ChunkConfig()).validate()

    if key in _REDUCERS:
        return process_large_windows(values, window_size, _REDUCERS[key], config)

    if window_size - 1 >= config.chunk_size:
        raise InvalidChunkConfigError(
            "chunk_size", config.chunk_size, f"greater than window_size - 1 ({window_size - 1})"
        )
    config = config.with_min_overlap(window_size - 1)
    extremum = _EXTREMA[key]
    return process_large_series(values, lambda chunk: extremum(chunk, window_size), config)
