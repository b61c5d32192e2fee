"""
Moving average family.

All moving averages return a series aligned with the input, holding NaN
wherever no value is available yet. Window-based averages (SMA, WMA) reduce
the finite samples of each window; recursive averages (EMA, RMA) carry a
single smoothed value through the series.

Mathematical Formulas:
    SMA  = Σ(x) / k                                  over the window's k valid samples
    WMA  = Σ(x_j * j) / Σ(j), j = 1..k               weights by recency among valid samples
    EMA  = x * α + EMA_prev * (1 - α), α = 2/(N+1)   seeded with the SMA of the first window
    RMA  = x * α + RMA_prev * (1 - α), α = 1/N       seeded with the first valid sample
    HULL = WMA(2 * WMA(x, N/2) - WMA(x, N), sqrt(N))

NaN handling for EMA/RMA: an invalid sample yields NaN at its position and
the recursion resumes from the last valid smoothed value at the next valid
sample.

Example:
    >>> from tawindow.technical_analysis.indicators.moving_averages import moving_average
    >>> moving_average([1, 2, 3, 4, 5], 3, 'ema')
    array([nan, nan,  2.,  3.,  4.])
"""

import logging
import math
from enum import Enum
from typing import Callable, Dict, Optional, Union

import numpy as np

from ..chunking import ChunkConfig, process_large_series
from ..exceptions import InvalidChunkConfigError, InvalidMovingAverageTypeError
from ..validation import SeriesLike, preserve_index, validate, validate_length
from ..window import process
from .smoothing import EmaSmoothing, WildersSmoothing

logger = logging.getLogger(__name__)


class MovingAverageType(str, Enum):
    """Closed set of supported moving averages."""
    SMA = "sma"
    EMA = "ema"
    WMA = "wma"
    HULL = "hull"
    RMA = "rma"

    @property
    def requires_sequential_pass(self) -> bool:
        """True if the output cannot be stitched together from independent chunks."""
        return self in (MovingAverageType.EMA, MovingAverageType.RMA, MovingAverageType.HULL)

    @classmethod
    def parse(cls, ma_type: Union[str, "MovingAverageType"]) -> "MovingAverageType":
        """
        Resolve a type name (case-insensitive) or enum member.

        Raises:
            InvalidMovingAverageTypeError: If the type is not recognized.
        """
        if isinstance(ma_type, cls):
            return ma_type
        if isinstance(ma_type, str):
            key = ma_type.strip().lower()
            key = _ALIASES.get(key, key)
            for member in cls:
                if member.value == key:
                    return member
        raise InvalidMovingAverageTypeError(ma_type, [member.value for member in cls])


_ALIASES: Dict[str, str] = {
    "simple": "sma",
    "exponential": "ema",
    "weighted": "wma",
    "hma": "hull",
    "wilders": "rma",
}


def _window_mean(values: np.ndarray, _index: int) -> float:
    if values.size == 0:
        return math.nan
    return float(values.mean())


def _window_weighted_mean(values: np.ndarray, _index: int) -> float:
    if values.size == 0:
        return math.nan
    # weights follow recency among the valid samples, not raw window position
    weights = np.arange(1, values.size + 1, dtype=np.float64)
    return float(np.dot(values, weights) / weights.sum())


def _sma(values: np.ndarray, length: int) -> np.ndarray:
    return process(values, length, _window_mean)


def _wma(values: np.ndarray, length: int) -> np.ndarray:
    return process(values, length, _window_weighted_mean)


def _ema(values: np.ndarray, length: int) -> np.ndarray:
    n = values.size
    result = np.full(n, np.nan)
    if n < length:
        return result

    valid = np.isfinite(values)
    smoothing = EmaSmoothing(length)
    seed_index = None
    for i in range(length - 1, n):
        window_valid = valid[i - length + 1:i + 1]
        if not window_valid.any():
            continue
        with np.errstate(over="ignore"):
            window_mean = values[i - length + 1:i + 1][window_valid].mean()
        # a window whose mean overflows cannot seed; keep searching
        if math.isfinite(window_mean):
            seed_index = i
            result[i] = smoothing.seed(float(window_mean))
            break

    if seed_index is None:
        logger.debug(f"EMA({length}): no window with a finite valid mean, output is all NaN")
        return result
    if seed_index != length - 1:
        logger.debug(f"EMA({length}): first window cannot seed, seeded at index {seed_index}")

    for i in range(seed_index + 1, n):
        result[i] = smoothing.update(values[i])

    return result


def _rma(values: np.ndarray, length: int) -> np.ndarray:
    smoothing = WildersSmoothing(length)
    return np.array([smoothing.update(value) for value in values.tolist()], dtype=np.float64)


def _hull(values: np.ndarray, length: int) -> np.ndarray:
    n = values.size
    if n < length:
        return np.full(n, np.nan)

    half_length = max(1, length // 2)
    sqrt_length = max(1, math.isqrt(length))

    # process() already pads both constituents to the input length
    wma_half = _wma(values, half_length)
    wma_full = _wma(values, length)
    with np.errstate(invalid="ignore", over="ignore"):
        diff = 2 * wma_half - wma_full
    diff[~np.isfinite(diff)] = np.nan

    return _wma(diff, sqrt_length)


_CALCULATIONS: Dict[MovingAverageType, Callable[[np.ndarray, int], np.ndarray]] = {
    MovingAverageType.SMA: _sma,
    MovingAverageType.EMA: _ema,
    MovingAverageType.WMA: _wma,
    MovingAverageType.HULL: _hull,
    MovingAverageType.RMA: _rma,
}


def _prepare(series: SeriesLike, length: int, name: str):
    values = validate(series, name=name)
    length = validate_length(length)
    return values, length


@preserve_index
def moving_average(series: SeriesLike, length: int,
                   ma_type: Union[str, MovingAverageType] = MovingAverageType.SMA) -> np.ndarray:
    """
    Calculate a moving average of the given type.

    Args:
        series: Input samples.
        length: Averaging period, positive integer.
        ma_type: One of ``'sma'``, ``'ema'``, ``'wma'``, ``'hull'``,
            ``'rma'`` (case-insensitive) or a MovingAverageType.

    Returns:
        np.ndarray: Moving average aligned with the input.

    Raises:
        EmptyDataError: If the series is empty.
        InvalidLengthError: If length is not a positive integer.
        InvalidMovingAverageTypeError: If the type is unknown.
    """
    values, length = _prepare(series, length, "moving_average")
    kind = MovingAverageType.parse(ma_type)
    logger.debug(f"Calculating {kind.name}({length}) over {values.size} samples")
    return _CALCULATIONS[kind](values, length)


@preserve_index
def sma(series: SeriesLike, length: int) -> np.ndarray:
    """
    Simple Moving Average.

    Example:
        >>> sma([1, 2, 3, 4, 5], 3)
        array([nan, nan,  2.,  3.,  4.])
    """
    return _sma(*_prepare(series, length, "SMA"))


@preserve_index
def ema(series: SeriesLike, length: int) -> np.ndarray:
    """
    Exponential Moving Average.

    The seed is the mean of the valid samples of the first window, placed
    at index ``length - 1``. Series shorter than ``length`` give all NaN.
    """
    return _ema(*_prepare(series, length, "EMA"))


@preserve_index
def wma(series: SeriesLike, length: int) -> np.ndarray:
    """Linearly Weighted Moving Average."""
    return _wma(*_prepare(series, length, "WMA"))


@preserve_index
def hull_moving_average(series: SeriesLike, length: int) -> np.ndarray:
    """
    Hull Moving Average.

    ``WMA(2 * WMA(n // 2) - WMA(n), isqrt(n))``; both inner periods are at
    least 1. Series shorter than ``length`` give all NaN.
    """
    return _hull(*_prepare(series, length, "HULL"))


@preserve_index
def rma(series: SeriesLike, length: int) -> np.ndarray:
    """Wilder's Moving Average (RMA / SMMA)."""
    return _rma(*_prepare(series, length, "RMA"))


@preserve_index
def moving_average_chunked(series: SeriesLike, length: int,
                           ma_type: Union[str, MovingAverageType] = MovingAverageType.SMA,
                           config: Optional[ChunkConfig] = None) -> np.ndarray:
    """
    Moving average for large series.

    SMA and WMA are processed in overlapping chunks (overlap raised to
    ``length - 1`` when needed) and match the unchunked result exactly.
    EMA, RMA and HULL always run as one sequential pass.

    Raises:
        InvalidChunkConfigError: If ``length - 1`` does not fit in a chunk.
    """
    values, length = _prepare(series, length, "moving_average_chunked")
    kind = MovingAverageType.parse(ma_type)
    calculation = _CALCULATIONS[kind]

    if kind.requires_sequential_pass:
        logger.debug(f"{kind.name} needs a sequential pass; processing {values.size} samples sequentially")
        return calculation(values, length)

    config = (config or ChunkConfig()).validate()
    if length - 1 >= config.chunk_size:
        raise InvalidChunkConfigError(
            "chunk_size", config.chunk_size, f"greater than length - 1 ({length - 1})"
        )
    config = config.with_min_overlap(length - 1)

    def _processor(chunk_values: np.ndarray) -> np.ndarray:
        if chunk_values.size < length:
            return np.full(chunk_values.size, np.nan)
        return calculation(chunk_values, length)

    return process_large_series(values, _processor, config)
