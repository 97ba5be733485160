"""
Stereo Focal-Length Calibration

Numerical core of automatic focal-length calibration for stereo depth cameras.

This package implements:
- Validation of focal-length scan-control parameters
- Aggregation of calibration-target edge measurements over captured frames
- Estimation of the right/left focal-length correction factor and sensor tilt
"""

__version__ = "1.0.0"
__author__ = "Stereo Calibration Team"

from .exceptions import (
    FocalCalibrationError, InvalidParameterError, EmptyInputError,
    DetectionFailureError, NoValidMeasurementsError
)
from .data_models import (
    ScanParameters, Intrinsics, TargetMeasurement,
    FocalLengthCorrection, FocalLengthCalibrationResult
)
from .calibration import (
    ScanParameterValidator, check_focal_length_params,
    TargetMeasurementAggregator, FocalLengthCorrectionEstimator,
    get_focal_length_correction_factor, FocalLengthCalibrator
)
from .frames import Frame, FrameSource, FrameQueue
from .devices import DeviceFactory, DeviceInfo

__all__ = [
    # Errors
    'FocalCalibrationError', 'InvalidParameterError', 'EmptyInputError',
    'DetectionFailureError', 'NoValidMeasurementsError',
    # Calibration
    'ScanParameterValidator', 'check_focal_length_params',
    'TargetMeasurementAggregator', 'FocalLengthCorrectionEstimator',
    'get_focal_length_correction_factor', 'FocalLengthCalibrator',
    # Frames
    'Frame', 'FrameSource', 'FrameQueue',
    # Devices
    'DeviceFactory', 'DeviceInfo',
    # Data Models
    'ScanParameters', 'Intrinsics', 'TargetMeasurement',
    'FocalLengthCorrection', 'FocalLengthCalibrationResult'
]
