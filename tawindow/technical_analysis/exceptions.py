"""Exception classes for the windowed calculation engine."""

from typing import Any, List, Optional, Sequence


class CalculationError(Exception):
    """Base exception for calculation errors."""

    def __init__(self, message: str, calculation_name: Optional[str] = None):
        self.calculation_name = calculation_name
        if calculation_name:
            message = f"[{calculation_name}] {message}"
        super().__init__(message)


class InvalidParameterError(CalculationError):
    """Invalid calculation parameters."""

    def __init__(self, parameter_name: str, value: Any, expected: str, calculation_name: Optional[str] = None):
        message = f"Invalid parameter '{parameter_name}': got {value}, expected {expected}"
        super().__init__(message, calculation_name)
        self.parameter_name = parameter_name
        self.value = value
        self.expected = expected


class InvalidLengthError(InvalidParameterError):
    """Length or window size is not a positive integer."""

    def __init__(self, value: Any, parameter_name: str = "length", calculation_name: Optional[str] = None):
        super().__init__(parameter_name, value, "positive integer (> 0)", calculation_name)


class InvalidPercentileError(InvalidParameterError):
    """Percentile outside [0, 100]."""

    def __init__(self, value: Any, calculation_name: Optional[str] = None):
        super().__init__("percentile", value, "number between 0 and 100", calculation_name)


class KOutOfBoundsError(InvalidParameterError):
    """Order statistic index outside the valid range."""

    def __init__(self, k: Any, max_index: int, calculation_name: Optional[str] = None):
        super().__init__("k", k, f"integer between 0 and {max_index}", calculation_name)
        self.k = k
        self.max_index = max_index


class InvalidChunkConfigError(InvalidParameterError):
    """Chunk size / overlap combination cannot be processed."""


class InvalidMovingAverageTypeError(CalculationError):
    """Unknown moving average type requested."""

    def __init__(self, requested: Any, available: Optional[Sequence[str]] = None):
        if available:
            available_str = ", ".join(sorted(available))
            message = f"Invalid moving average type '{requested}'. Available types: {available_str}"
        else:
            message = f"Invalid moving average type '{requested}'"
        super().__init__(message)
        self.requested = requested
        self.available = list(available or [])


class EmptyDataError(CalculationError):
    """Input series has no samples."""

    def __init__(self, calculation_name: Optional[str] = None):
        super().__init__("Data series cannot be empty", calculation_name)


class EmptyAfterSanitizationError(CalculationError):
    """No finite samples remain after dropping NaN/None/inf."""

    def __init__(self, original_length: int, calculation_name: Optional[str] = None):
        message = f"Series cannot be empty after filtering invalid values (had {original_length} samples, 0 finite)"
        super().__init__(message, calculation_name)
        self.original_length = original_length


class InsufficientDataError(CalculationError):
    """Insufficient data for calculation."""

    def __init__(self, current_count: int, required_count: int, calculation_name: Optional[str] = None):
        message = f"Insufficient data for calculation: have {current_count} data points, need {required_count}"
        super().__init__(message, calculation_name)
        self.current_count = current_count
        self.required_count = required_count


class InvalidDataError(CalculationError):
    """Malformed or invalid input data."""

    def __init__(self, field_name: str, value: Any, reason: str, calculation_name: Optional[str] = None):
        message = f"Invalid data in field '{field_name}': {value} ({reason})"
        super().__init__(message, calculation_name)
        self.field_name = field_name
        self.value = value
        self.reason = reason


class LengthMismatchError(CalculationError):
    """Arrays that must be aligned have different lengths."""

    def __init__(self, lengths: List[int], calculation_name: Optional[str] = None):
        lengths_str = ", ".join(str(length) for length in lengths)
        message = f"Series must have the same length, got lengths: {lengths_str}"
        super().__init__(message, calculation_name)
        self.lengths = list(lengths)
