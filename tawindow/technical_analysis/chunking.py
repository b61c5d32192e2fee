"""
Chunked processing for large series.

A long series is cut into overlapping chunks so a processor only ever sees
``chunk_size`` samples at a time. Consecutive chunks start
``chunk_size - overlap`` samples apart; the first ``overlap`` outputs of
every chunk after the first are treated as warm-up and discarded, and the
rest are written back at their global positions.

For a windowed reducer of size W the chunked result equals the unchunked
result whenever ``W - 1 <= overlap``. That condition is the caller's
responsibility and is not checked here. Recursive smoothers (EMA, RMA,
Hull) carry state across the whole series and must not be chunked.

Example:
    >>> from tawindow.technical_analysis.chunking import process_chunks_with_overlap
    >>> from tawindow.technical_analysis.indicators.minmax import rolling_max
    >>> out = process_chunks_with_overlap(prices, lambda v: rolling_max(v, 20),
    ...                                   chunk_size=5000, overlap=19)
"""

import logging
import math
import numbers
from dataclasses import dataclass, replace
from typing import Any, Callable, Dict, Iterator, Optional, Tuple

import numpy as np
import psutil

from .exceptions import InvalidChunkConfigError, LengthMismatchError
from .validation import SeriesLike, preserve_index, validate, validate_length
from .window import process

logger = logging.getLogger(__name__)

ChunkProcessor = Callable[[np.ndarray], Any]

DEFAULT_CHUNK_SIZE = 10000
DEFAULT_OVERLAP = 100
DEFAULT_MEMORY_LIMIT_MB = 100.0

# float64 samples
_BYTES_PER_POINT = 8
_MIN_OPTIMIZED_CHUNK = 1000
_MAX_OPTIMIZED_CHUNK = 50000


@dataclass(frozen=True)
class Chunk:
    """
    Contiguous slice of a series.

    Attributes:
        index: 0-based chunk number.
        start: Global index of the first sample (inclusive).
        end: Global index one past the last sample (exclusive).
    """
    index: int
    start: int
    end: int

    def __len__(self) -> int:
        return self.end - self.start

    def take(self, values: np.ndarray) -> np.ndarray:
        """Return this chunk's view of ``values``."""
        return values[self.start:self.end]


@dataclass(frozen=True)
class ChunkConfig:
    """
    Chunking configuration.

    Attributes:
        chunk_size: Samples per chunk.
        overlap: Samples shared by consecutive chunks.
        chunk_threshold: Series longer than this are chunked; defaults to
            ``chunk_size``.
        memory_limit_mb: Memory budget used by ``optimize_chunk_config``.
    """
    chunk_size: int = DEFAULT_CHUNK_SIZE
    overlap: int = DEFAULT_OVERLAP
    chunk_threshold: Optional[int] = None
    memory_limit_mb: float = DEFAULT_MEMORY_LIMIT_MB

    @property
    def threshold(self) -> int:
        return self.chunk_size if self.chunk_threshold is None else self.chunk_threshold

    @property
    def stride(self) -> int:
        return self.chunk_size - self.overlap

    def validate(self) -> "ChunkConfig":
        """
        Check the configuration and return it unchanged.

        Raises:
            InvalidChunkConfigError: On a non-positive chunk size or
                threshold, an overlap outside ``[0, chunk_size)`` or a
                non-positive memory limit.
        """
        _check_chunk_geometry(self.chunk_size, self.overlap)
        if self.chunk_threshold is not None and (
            isinstance(self.chunk_threshold, bool)
            or not isinstance(self.chunk_threshold, numbers.Integral)
            or self.chunk_threshold <= 0
        ):
            raise InvalidChunkConfigError("chunk_threshold", self.chunk_threshold, "positive integer")
        if not isinstance(self.memory_limit_mb, numbers.Real) or self.memory_limit_mb <= 0:
            raise InvalidChunkConfigError("memory_limit_mb", self.memory_limit_mb, "positive number")
        return self

    def with_min_overlap(self, min_overlap: int) -> "ChunkConfig":
        """Copy of this config whose overlap is at least ``min_overlap``."""
        if self.overlap >= min_overlap:
            return self
        return replace(self, overlap=min_overlap).validate()

    @classmethod
    def from_dict(cls, settings: Optional[Dict[str, Any]]) -> "ChunkConfig":
        """Build a validated config from a mapping; missing keys use defaults."""
        settings = settings or {}
        known = {key: settings[key] for key in cls.__dataclass_fields__ if key in settings}
        unknown = sorted(set(settings) - set(known))
        if unknown:
            logger.warning(f"Ignoring unknown chunk settings: {', '.join(unknown)}")
        return cls(**known).validate()


def _check_chunk_geometry(chunk_size: Any, overlap: Any) -> None:
    if isinstance(chunk_size, bool) or not isinstance(chunk_size, numbers.Integral) or chunk_size <= 0:
        raise InvalidChunkConfigError("chunk_size", chunk_size, "positive integer (> 0)")
    if isinstance(overlap, bool) or not isinstance(overlap, numbers.Integral) or overlap < 0:
        raise InvalidChunkConfigError("overlap", overlap, "non-negative integer")
    if overlap >= chunk_size:
        raise InvalidChunkConfigError("overlap", overlap, f"less than chunk_size ({chunk_size})")


def create_chunks(series: SeriesLike, chunk_size: int = DEFAULT_CHUNK_SIZE,
                  overlap: int = DEFAULT_OVERLAP) -> Iterator[Chunk]:
    """
    Partition a series into overlapping chunks.

    The configuration is validated immediately; chunks are then produced
    lazily. A series no longer than ``chunk_size`` yields a single chunk.
    Otherwise chunk ``c`` starts at ``c * (chunk_size - overlap)`` and the
    last chunk may be shorter.

    Raises:
        InvalidChunkConfigError: On an invalid chunk size/overlap.
        EmptyDataError: If the series is empty.
    """
    _check_chunk_geometry(chunk_size, overlap)
    n = validate(series, name="create_chunks").size
    return _iter_chunks(n, chunk_size, overlap)


def _iter_chunks(n: int, chunk_size: int, overlap: int) -> Iterator[Chunk]:
    if n <= chunk_size:
        yield Chunk(0, 0, n)
        return

    stride = chunk_size - overlap
    index = 0
    start = 0
    while True:
        end = min(start + chunk_size, n)
        yield Chunk(index, start, end)
        if end >= n:
            return
        index += 1
        start = index * stride


def count_chunks(n: int, chunk_size: int, overlap: int) -> int:
    """Number of chunks ``create_chunks`` produces for a series of length n."""
    _check_chunk_geometry(chunk_size, overlap)
    if n <= chunk_size:
        return 1
    return math.ceil((n - chunk_size) / (chunk_size - overlap)) + 1


def _run_processor(processor: ChunkProcessor, values: np.ndarray, chunk: Chunk) -> np.ndarray:
    result = np.asarray(processor(values), dtype=np.float64)
    if result.ndim != 1 or result.size != len(chunk):
        raise LengthMismatchError([len(chunk), int(result.size)], "chunk processor")
    return result


def stream_process(series: SeriesLike, processor: ChunkProcessor,
                   chunk_size: int = DEFAULT_CHUNK_SIZE,
                   overlap: int = DEFAULT_OVERLAP) -> Iterator[Tuple[Chunk, int, np.ndarray]]:
    """
    Lazily process a series chunk by chunk.

    Yields ``(chunk, global_start, results)`` where ``results`` already has
    the warm-up overlap removed and belongs at
    ``global_start : global_start + len(results)``.

    Raises:
        InvalidChunkConfigError: On an invalid chunk size/overlap.
        EmptyDataError: If the series is empty.
        LengthMismatchError: (during iteration) if the processor returns an
            array whose length differs from its chunk.
    """
    _check_chunk_geometry(chunk_size, overlap)
    values = validate(series, name="stream_process")
    values.setflags(write=False)
    return _stream(values, processor, chunk_size, overlap)


def _stream(values: np.ndarray, processor: ChunkProcessor, chunk_size: int,
            overlap: int) -> Iterator[Tuple[Chunk, int, np.ndarray]]:
    for chunk in _iter_chunks(values.size, chunk_size, overlap):
        result = _run_processor(processor, chunk.take(values), chunk)
        skip = 0 if chunk.index == 0 else overlap
        yield chunk, chunk.start + skip, result[skip:]


@preserve_index
def process_chunks_with_overlap(series: SeriesLike, processor: ChunkProcessor,
                                chunk_size: int = DEFAULT_CHUNK_SIZE,
                                overlap: int = DEFAULT_OVERLAP) -> np.ndarray:
    """
    Process a series in overlapping chunks and stitch the results.

    ``processor`` receives each chunk's samples and must return an array of
    the same length. Local index ``j`` of chunk ``c`` maps to global index
    ``c * (chunk_size - overlap) + j``.

    Args:
        series: Input samples.
        processor: Callable mapping a chunk to a same-length result.
        chunk_size: Samples per chunk.
        overlap: Samples shared by consecutive chunks; must be at least
            ``W - 1`` for a window-W reducer to reproduce the unchunked output.

    Returns:
        np.ndarray: Output aligned with the input.

    Raises:
        InvalidChunkConfigError: Before processing, on invalid geometry.
        EmptyDataError: If the series is empty.
        LengthMismatchError: If the processor returns a wrong-length result.
    """
    _check_chunk_geometry(chunk_size, overlap)
    values = validate(series, name="process_chunks_with_overlap")
    values.setflags(write=False)

    output = np.full(values.size, np.nan)
    chunk_count = 0
    for _chunk, global_start, result in _stream(values, processor, chunk_size, overlap):
        output[global_start:global_start + result.size] = result
        chunk_count += 1

    logger.debug(f"Processed {values.size} samples in {chunk_count} chunk(s) "
                 f"(chunk_size={chunk_size}, overlap={overlap})")
    return output


@preserve_index
def process_large_series(series: SeriesLike, processor: ChunkProcessor,
                         config: Optional[ChunkConfig] = None) -> np.ndarray:
    """
    Run ``processor`` directly, or chunked once the series exceeds the
    configured threshold.
    """
    config = (config or ChunkConfig()).validate()
    values = validate(series, name="process_large_series")

    if values.size <= config.threshold:
        logger.debug(f"Series length {values.size} within threshold {config.threshold}; processing unchunked")
        return _run_processor(processor, values, Chunk(0, 0, values.size))

    return process_chunks_with_overlap(values, processor, config.chunk_size, config.overlap)


@preserve_index
def process_large_windows(series: SeriesLike, window_size: int,
                          reducer: Callable[[np.ndarray, int], float],
                          config: Optional[ChunkConfig] = None) -> np.ndarray:
    """
    Window processing with chunking for large series.

    Same contract as :func:`tawindow.technical_analysis.window.process`: the
    reducer receives each window's finite values and the window's global
    right-edge index. The overlap is raised to ``window_size - 1`` when the
    configured one is smaller.

    Raises:
        InvalidLengthError: If window_size is not a positive integer.
        InvalidChunkConfigError: If the window does not fit in a chunk.
    """
    window_size = validate_length(window_size, "window_size")
    config = (config or ChunkConfig()).validate()
    if window_size - 1 >= config.chunk_size:
        raise InvalidChunkConfigError(
            "chunk_size", config.chunk_size, f"greater than window_size - 1 ({window_size - 1})"
        )
    config = config.with_min_overlap(window_size - 1)
    values = validate(series, name="process_large_windows")

    if values.size <= config.threshold:
        return process(values, window_size, reducer)

    output = np.full(values.size, np.nan)
    for chunk in _iter_chunks(values.size, config.chunk_size, config.overlap):
        def _global_reducer(window_values: np.ndarray, local_index: int, offset: int = chunk.start) -> float:
            return reducer(window_values, offset + local_index)

        skip = 0 if chunk.index == 0 else config.overlap
        result = process(chunk.take(values), window_size, _global_reducer)
        output[chunk.start + skip:chunk.end] = result[skip:]

    return output


def get_memory_usage() -> float:
    """Resident memory of the current process in MB."""
    return psutil.Process().memory_info().rss / (1024 * 1024)


def optimize_chunk_config(data_length: int, memory_limit_mb: float = DEFAULT_MEMORY_LIMIT_MB) -> ChunkConfig:
    """
    Derive a chunk configuration from a memory budget.

    The chunk size is the number of float64 samples that fit in the budget
    left after the process's current resident memory, clamped to
    ``[1000, min(50000, data_length)]``; the overlap is 1% of the chunk
    size.

    Args:
        data_length: Length of the series to be processed.
        memory_limit_mb: Memory budget in MB.

    Returns:
        ChunkConfig: A validated configuration.
    """
    data_length = validate_length(data_length, "data_length")
    if memory_limit_mb <= 0:
        raise InvalidChunkConfigError("memory_limit_mb", memory_limit_mb, "positive number")

    available_mb = memory_limit_mb - get_memory_usage()
    max_chunk_size = int(available_mb * 1024 * 1024 // _BYTES_PER_POINT)
    chunk_size = min(max(_MIN_OPTIMIZED_CHUNK, max_chunk_size), min(_MAX_OPTIMIZED_CHUNK, data_length))
    overlap = chunk_size // 100

    logger.debug(f"Optimized chunk config for {data_length} samples: "
                 f"chunk_size={chunk_size}, overlap={overlap}, available={available_mb:.1f}MB")
    return ChunkConfig(
        chunk_size=chunk_size,
        overlap=overlap,
        memory_limit_mb=memory_limit_mb,
    ).validate()


@preserve_index
def auto_process(series: SeriesLike, processor: ChunkProcessor,
                 memory_limit_mb: float = DEFAULT_MEMORY_LIMIT_MB,
                 min_overlap: int = 0) -> np.ndarray:
    """
    Chunked processing with a configuration sized from the memory budget.

    ``min_overlap`` should be ``W - 1`` for a window-W processor.
    """
    values = validate(series, name="auto_process")
    config = optimize_chunk_config(values.size, memory_limit_mb)
    if min_overlap:
        config = config.with_min_overlap(min_overlap)
    return process_chunks_with_overlap(values, processor, config.chunk_size, config.overlap)
