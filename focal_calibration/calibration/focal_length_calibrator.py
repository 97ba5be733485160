"""
Focal-Length Calibrator

Sequences a stereo focal-length calibration: scan parameter validation, target
aggregation for the left and right sensors, and the correction estimate.
"""

import logging
from typing import Optional

from ..data_models import FocalLengthCalibrationResult, ScanParameters
from ..frames.frame_queue import FrameQueue, FrameSource
from ..utils.config_manager import ConfigManager
from .correction_estimator import FocalLengthCorrectionEstimator
from .parameter_validator import ScanParameterValidator
from .target_aggregator import ProgressCallback, TargetMeasurementAggregator


class FocalLengthCalibrator:
    """Runs the focal-length correction pipeline on captured left/right frame batches."""

    def __init__(self, config_manager: Optional[ConfigManager] = None):
        """
        Initialize focal-length calibrator.

        Args:
            config_manager: Configuration manager instance
        """
        self.config = config_manager or ConfigManager()
        self.logger = logging.getLogger(__name__)

        self.validator = ScanParameterValidator()
        self.aggregator = TargetMeasurementAggregator()
        self.estimator = FocalLengthCorrectionEstimator()

        self.logger.info("Focal-length calibrator initialized")

    def validate_scan_parameters(self, params: Optional[ScanParameters] = None) -> ScanParameters:
        """
        Validate scan parameters, falling back to the configured defaults.

        Returns:
            The validated parameters
        """
        return self.validator.validate(params or self.config.get_scan_params())

    def create_frame_queue(self) -> FrameQueue:
        """Build a capture queue bounded by 'capture.queue_capacity' (0 is unbounded)."""
        capacity = int(self.config.get_capture_params().get('queue_capacity', 0))
        self.logger.debug(f"Creating frame queue with capacity {capacity}")
        return FrameQueue(capacity=capacity)

    def calibrate(self,
                  left_frames: FrameSource,
                  right_frames: FrameSource,
                  target_width: Optional[float] = None,
                  target_height: Optional[float] = None,
                  baseline: Optional[float] = None,
                  scan_params: Optional[ScanParameters] = None,
                  progress_callback: Optional[ProgressCallback] = None) -> FocalLengthCalibrationResult:
        """
        Compute the focal-length correction from captured left and right frames.

        Args:
            left_frames: Frames captured by the left sensor
            right_frames: Frames captured by the right sensor
            target_width: Physical target width, defaults to 'target.width'
            target_height: Physical target height, defaults to 'target.height'
            baseline: Stereo baseline, defaults to 'camera.baseline'
            scan_params: Scan parameters, defaults to the 'scan' section
            progress_callback: Receives progress across both sensors

        Returns:
            Per-sensor measurements and the focal-length correction
        """
        scan_params = self.validate_scan_parameters(scan_params)

        target = self.config.get_target_params()
        target_width = target_width if target_width is not None else float(target['width'])
        target_height = target_height if target_height is not None else float(target['height'])
        baseline = baseline if baseline is not None else float(self.config.get_camera_params()['baseline'])

        self.logger.info(
            f"Starting focal-length calibration: target={target_width}x{target_height}, baseline={baseline}"
        )

        left = self.aggregator.get_target_rect_info(left_frames, 0, progress_callback)
        right = self.aggregator.get_target_rect_info(right_frames, left.progress, progress_callback)

        correction = self.estimator.get_focal_length_correction_factor(
            left.rect_sides,
            right.rect_sides,
            [left.intrinsics.fx, right.intrinsics.fx],
            [left.intrinsics.fy, right.intrinsics.fy],
            target_width,
            target_height,
            baseline
        )

        return FocalLengthCalibrationResult(
            scan_parameters=scan_params,
            left=left,
            right=right,
            correction=correction,
            target_size=(target_width, target_height),
            baseline=baseline
        )

    def generate_calibration_report(self, result: FocalLengthCalibrationResult) -> str:
        """
        Generate a focal-length calibration report.

        Args:
            result: Calibration result

        Returns:
            Formatted calibration report
        """
        correction = result.correction

        report = []
        report.append("=" * 60)
        report.append("FOCAL-LENGTH CALIBRATION REPORT")
        report.append("=" * 60)

        report.append("SCAN PARAMETERS")
        report.append("-" * 30)
        for name, value in result.scan_parameters.as_dict().items():
            report.append(f"{name}: {value}")
        report.append("")

        report.append("TARGET MEASUREMENTS")
        report.append("-" * 30)
        report.append(f"Target size: {result.target_size[0]} x {result.target_size[1]}")
        report.append(f"Baseline: {result.baseline}")
        for label, measurement in (("Left", result.left), ("Right", result.right)):
            sides = ", ".join(f"{s:.2f}" for s in measurement.rect_sides)
            report.append(
                f"{label} sides: [{sides}] px over {measurement.frames_used} frames "
                f"(fx={measurement.intrinsics.fx:.2f}, fy={measurement.intrinsics.fy:.2f})"
            )
        report.append("")

        report.append("CORRECTION")
        report.append("-" * 30)
        report.append(f"Ratio: {correction.ratio:.4f} %")
        report.append(f"Tilt angle: {correction.angle:.4f} degrees")
        report.append(f"Correction factor: {correction.correction_factor:.6f}")
        report.append("=" * 60)

        return "\n".join(report)
