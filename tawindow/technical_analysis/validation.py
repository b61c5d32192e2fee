"""
Series validation and sanitization.

Every calculation in the engine converts its input through ``as_series`` and
drops invalid samples (NaN, None, +/-inf) through ``sanitize`` before any
reduction. Windowed operators sanitize per window so that positions are kept:
a window may hold fewer valid values than its size, and a window without any
valid value produces NaN instead of raising.

Functions:
    as_series: Convert any 1-D numeric sequence to a float64 array.
    sanitize: Keep only the finite samples.
    validity_mask: Boolean view of which samples are finite.
    validate: Fail-fast checks for empty/short series.
    validate_length: Positive integer check for lengths and window sizes.
    validate_same_length: Alignment check for several series.
    preserve_index: Decorator re-attaching a pandas index to results.
"""

import functools
import logging
import numbers
from typing import Any, Callable, Sequence, Union

import numpy as np
import pandas as pd

from .exceptions import (
    EmptyDataError,
    InsufficientDataError,
    InvalidDataError,
    InvalidLengthError,
    LengthMismatchError,
)

logger = logging.getLogger(__name__)

SeriesLike = Union[Sequence[float], np.ndarray, pd.Series]


def as_series(data: SeriesLike, name: str = "series") -> np.ndarray:
    """
    Convert input data to a fresh one-dimensional float64 array.

    ``None`` entries become NaN. The returned array never aliases the
    caller's buffer, so downstream code may modify it freely.

    Args:
        data: List, tuple, numpy array or pandas Series of numbers.
        name: Field name used in error messages.

    Returns:
        np.ndarray: float64 copy of the data.

    Raises:
        InvalidDataError: If the data is not numeric or not one-dimensional.
    """
    if data is None:
        raise InvalidDataError(name, data, "value is None")

    try:
        if isinstance(data, pd.Series):
            data = data.to_numpy(dtype=float, na_value=np.nan)
        values = np.array(data, dtype=np.float64, copy=True)
    except (TypeError, ValueError) as e:
        raise InvalidDataError(name, type(data).__name__, f"not numeric: {e}") from e

    if values.ndim != 1:
        raise InvalidDataError(name, f"shape {values.shape}", "expected one-dimensional data")

    return values


def validity_mask(series: SeriesLike) -> np.ndarray:
    """Return a boolean array that is True where the sample is finite."""
    return np.isfinite(as_series(series))


def sanitize(series: SeriesLike) -> np.ndarray:
    """
    Drop NaN, None and non-finite samples.

    Args:
        series: Input samples.

    Returns:
        np.ndarray: The finite samples in their original order (may be empty).
    """
    values = as_series(series)
    return values[np.isfinite(values)]


def validate(series: SeriesLike, min_length: int = 1, name: str = "series") -> np.ndarray:
    """
    Fail-fast validation of an input series.

    Args:
        series: Input samples.
        min_length: Minimum number of samples (valid or not) required.
        name: Calculation name used as message prefix.

    Returns:
        np.ndarray: The converted series.

    Raises:
        InvalidLengthError: If ``min_length`` is not a positive integer.
        EmptyDataError: If the series has no samples.
        InsufficientDataError: If the series is shorter than ``min_length``.
    """
    validate_length(min_length, "min_length")
    values = as_series(series, name)

    if values.size == 0:
        raise EmptyDataError(name)
    if values.size < min_length:
        raise InsufficientDataError(values.size, min_length, name)

    return values


def validate_length(length: Any, name: str = "length") -> int:
    """
    Validate a length or window size parameter.

    Args:
        length: The value to validate.
        name: Parameter name for error messages.

    Returns:
        int: The validated length.

    Raises:
        InvalidLengthError: If length is not a positive integer.
    """
    # bool is an Integral but never a meaningful window size
    if isinstance(length, bool) or not isinstance(length, numbers.Integral):
        raise InvalidLengthError(length, name)

    if length <= 0:
        raise InvalidLengthError(length, name)

    return int(length)


def validate_same_length(*series: SeriesLike) -> None:
    """Raise LengthMismatchError unless all series have the same length."""
    lengths = [len(s) for s in series]
    if len(set(lengths)) > 1:
        raise LengthMismatchError(lengths)


def preserve_index(func: Callable[..., np.ndarray]) -> Callable[..., Any]:
    """
    Re-wrap array results as a pandas Series when the input was one.

    The first positional argument of the decorated function is the input
    series. Results of a different length are returned unchanged.
    """
    @functools.wraps(func)
    def wrapper(series, *args, **kwargs):
        result = func(series, *args, **kwargs)
        if isinstance(series, pd.Series) and isinstance(result, np.ndarray) and len(result) == len(series):
            return pd.Series(result, index=series.index, name=series.name)
        return result

    return wrapper
