"""
Focal-Length Calibration Module

Implements scan parameter validation, target measurement aggregation and the
stereo focal-length correction estimate.
"""

from .parameter_validator import ScanParameterValidator, check_focal_length_params, SCAN_PARAMETER_RANGES
from .target_aggregator import TargetMeasurementAggregator
from .correction_estimator import FocalLengthCorrectionEstimator, get_focal_length_correction_factor
from .focal_length_calibrator import FocalLengthCalibrator

__all__ = [
    'ScanParameterValidator', 'check_focal_length_params', 'SCAN_PARAMETER_RANGES',
    'TargetMeasurementAggregator',
    'FocalLengthCorrectionEstimator', 'get_focal_length_correction_factor',
    'FocalLengthCalibrator'
]
