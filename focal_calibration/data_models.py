"""
Data Models for Focal-Length Calibration

Defines all data structures used throughout the system.
"""

from dataclasses import dataclass, field, fields
from typing import Tuple, Dict, Any
import numpy as np


@dataclass
class ScanParameters:
    """Scan-control parameters sent to the sensor before a focal-length scan."""
    step_count: int = 20  # number of scan steps
    scan_range: int = 400  # focal-length scan range
    keep_value_after_success: int = 0
    interrupt_data_sampling: int = 0
    adjust_both_sides: int = 0
    scan_location: int = 0
    scan_direction: int = 0
    white_wall_mode: int = 0

    def as_dict(self) -> Dict[str, int]:
        """Return parameters in validation order."""
        return {f.name: getattr(self, f.name) for f in fields(self)}

    @classmethod
    def from_dict(cls, values: Dict[str, Any]) -> "ScanParameters":
        """Build from a mapping, ignoring unknown keys."""
        known = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in values.items() if k in known})


@dataclass
class Intrinsics:
    """Focal lengths of one sensor stream."""
    fx: float  # horizontal focal length in pixels
    fy: float  # vertical focal length in pixels


@dataclass
class TargetMeasurement:
    """Averaged target rectangle measured on one sensor."""
    rect_sides: np.ndarray  # (4,) edge lengths: [0,1] horizontal, [2,3] vertical
    intrinsics: Intrinsics
    frames_used: int  # number of frames averaged
    progress: int  # progress value after the last processed frame


@dataclass
class FocalLengthCorrection:
    """Result of the focal-length correction estimate."""
    ratio: float  # percentage deviation of right vs. left focal length
    angle: float  # estimated tilt angle in degrees
    correction_factor: float  # multiplicative factor, ratio / 100 + 1
    align: float  # relative aspect-ratio skew between sensors
    tilt_angles: Tuple[float, float] = field(default=(0.0, 0.0))  # left, right


@dataclass
class FocalLengthCalibrationResult:
    """Results from a full focal-length calibration run."""
    scan_parameters: ScanParameters
    left: TargetMeasurement
    right: TargetMeasurement
    correction: FocalLengthCorrection
    target_size: Tuple[float, float]  # (width, height)
    baseline: float
