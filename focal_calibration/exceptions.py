"""Custom exceptions for the focal-length calibration package."""

from typing import Tuple


class FocalCalibrationError(Exception):
    """Base exception for all focal-length calibration errors."""
    pass


class InvalidParameterError(FocalCalibrationError, ValueError):
    """Raised when a scan-control parameter is outside its valid range."""

    def __init__(self, field: str, value, valid_range: Tuple[int, int]):
        self.field = field
        self.value = value
        self.valid_range = valid_range
        super().__init__(
            f"Auto calibration failed! Given value of '{field}' {value} "
            f"is out of range ({valid_range[0]} - {valid_range[1]})."
        )


class EmptyInputError(FocalCalibrationError, RuntimeError):
    """Raised when the frame queue holds no frames."""

    def __init__(self, message: str = "Extract target rectangle info - no frames in input queue!"):
        super().__init__(message)


class DetectionFailureError(FocalCalibrationError, RuntimeError):
    """Raised when the target detector fails on a captured frame."""

    def __init__(self, message: str = "Failed to extract target information from the captured frames!"):
        super().__init__(message)


class NoValidMeasurementsError(FocalCalibrationError, RuntimeError):
    """Raised when no frame yielded a usable target measurement."""

    def __init__(self, message: str = "Failed to extract the target rectangle info!"):
        super().__init__(message)
