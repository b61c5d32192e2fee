"""
tawindow Technical Analysis Engine

The windowed numerical engine that technical indicators are built on.

This library provides:
- Series validation and sanitization with NaN as the "no value" sentinel
- A generic sliding-window processor
- O(n) rolling min/max using monotonic deques
- Quickselect order statistics (kth element, median, percentile)
- Overlapping chunked processing for large series
- The moving-average family: SMA, EMA, WMA, Hull and RMA

Example Usage:
    import tawindow.technical_analysis as ta

    ta.sma([1, 2, 3, 4, 5], 3)                 # [nan, nan, 2, 3, 4]
    ta.moving_average(prices, 20, 'hull')
    ta.rolling_max(highs, 14)
    ta.median([1, 2, 3, 4])                    # 2.5

    # Large series
    config = ta.ChunkConfig(chunk_size=50_000, overlap=200)
    ta.rolling_statistic_chunked(prices, 50, 'max', config)
"""

__version__ = "1.0.0"
__author__ = "tawindow Development Team"

from .exceptions import (
    CalculationError,
    InvalidParameterError,
    InvalidLengthError,
    InvalidPercentileError,
    KOutOfBoundsError,
    InvalidChunkConfigError,
    InvalidMovingAverageTypeError,
    EmptyDataError,
    EmptyAfterSanitizationError,
    InsufficientDataError,
    InvalidDataError,
    LengthMismatchError,
)
from .validation import (
    as_series,
    sanitize,
    validity_mask,
    validate,
    validate_length,
    validate_same_length,
)
from .window import process, iter_windows
from .order_statistics import (
    kth_smallest,
    kth_largest,
    median,
    percentile,
    rolling_median,
    rolling_percentile,
)
from .chunking import (
    Chunk,
    ChunkConfig,
    create_chunks,
    count_chunks,
    stream_process,
    process_chunks_with_overlap,
    process_large_series,
    process_large_windows,
    optimize_chunk_config,
    auto_process,
)
from .indicators import (
    MonotonicDeque,
    RollingMinMax,
    rolling_max,
    rolling_min,
    MovingAverageType,
    moving_average,
    moving_average_chunked,
    sma,
    ema,
    wma,
    hull_moving_average,
    rma,
    SmoothingStrategy,
    WildersSmoothing,
    EmaSmoothing,
)
from .rolling import rolling_statistic, rolling_statistic_chunked

__all__ = [
    # Validation
    "as_series",
    "sanitize",
    "validity_mask",
    "validate",
    "validate_length",
    "validate_same_length",

    # Window processing
    "process",
    "iter_windows",
    "rolling_statistic",
    "rolling_statistic_chunked",

    # Rolling extrema
    "MonotonicDeque",
    "RollingMinMax",
    "rolling_max",
    "rolling_min",

    # Order statistics
    "kth_smallest",
    "kth_largest",
    "median",
    "percentile",
    "rolling_median",
    "rolling_percentile",

    # Chunking
    "Chunk",
    "ChunkConfig",
    "create_chunks",
    "count_chunks",
    "stream_process",
    "process_chunks_with_overlap",
    "process_large_series",
    "process_large_windows",
    "optimize_chunk_config",
    "auto_process",

    # Moving averages
    "MovingAverageType",
    "moving_average",
    "moving_average_chunked",
    "sma",
    "ema",
    "wma",
    "hull_moving_average",
    "rma",

    # Smoothing strategies
    "SmoothingStrategy",
    "WildersSmoothing",
    "EmaSmoothing",

    # Exceptions
    "CalculationError",
    "InvalidParameterError",
    "InvalidLengthError",
    "InvalidPercentileError",
    "KOutOfBoundsError",
    "InvalidChunkConfigError",
    "InvalidMovingAverageTypeError",
    "EmptyDataError",
    "EmptyAfterSanitizationError",
    "InsufficientDataError",
    "InvalidDataError",
    "LengthMismatchError",

    # Metadata
    "__version__",
    "__author__",
]
