"""
Focal-Length Correction Estimator

Derives the right/left focal-length correction factor of a stereo pair from the
averaged target rectangles seen by both sensors, together with a tilt-angle
estimate computed from the relative aspect-ratio skew.

All near-zero denominators are guarded: a guarded term contributes 0 instead of
raising, so degenerate measurements still produce finite results.
"""

import logging
from typing import Sequence

import numpy as np

from ..data_models import FocalLengthCorrection


GUARD_THRESHOLD = 0.1  # minimum denominator accepted for edge-length divisions
CORRECTION_WEIGHT = 0.5  # share of the alignment skew removed from the ratio


def _as_vector(values: Sequence[float], length: int, name: str) -> np.ndarray:
    array = np.asarray(values, dtype=np.float64).reshape(-1)
    if array.shape != (length,):
        raise ValueError(f"{name} must have {length} values, got {array.size}")
    return array


def _guarded_divide(numerator: np.ndarray, denominator: np.ndarray, mask: np.ndarray) -> np.ndarray:
    """Element-wise numerator / denominator where mask holds, 0 elsewhere."""
    out = np.zeros(np.broadcast(numerator, denominator).shape, dtype=np.float64)
    np.divide(numerator, denominator, out=out, where=mask)
    return out


def average_ground_truth(rect_sides: np.ndarray, fx: float, fy: float,
                         target_w: float, target_h: float) -> float:
    """
    Average target distance implied by each edge of the rectangle.

    Non-positive edges contribute 0 but still count towards the average of 4.
    """
    focal = np.array([fx, fx, fy, fy], dtype=np.float64)
    size = np.array([target_w, target_w, target_h, target_h], dtype=np.float64)
    with np.errstate(over='ignore'):
        gt = _guarded_divide(focal * size, rect_sides, rect_sides > 0)
    return float(gt.sum() / 4.0)


class FocalLengthCorrectionEstimator:
    """Estimates the focal-length correction between the two sensors of a stereo pair."""

    def __init__(self,
                 guard_threshold: float = GUARD_THRESHOLD,
                 correction_weight: float = CORRECTION_WEIGHT):
        """
        Initialize correction estimator.

        Args:
            guard_threshold: Smallest edge-length denominator that is divided by
            correction_weight: Weight of the alignment skew subtracted from the ratio
        """
        self.guard_threshold = guard_threshold
        self.correction_weight = correction_weight
        self.logger = logging.getLogger(__name__)

    def get_focal_length_correction_factor(self,
                                           left_rect_sides: Sequence[float],
                                           right_rect_sides: Sequence[float],
                                           fx: Sequence[float],
                                           fy: Sequence[float],
                                           target_w: float,
                                           target_h: float,
                                           baseline: float) -> FocalLengthCorrection:
        """
        Compute the focal-length correction factor.

        Args:
            left_rect_sides: Averaged left-sensor edges [h0, h1, v0, v1] in pixels
            right_rect_sides: Averaged right-sensor edges [h0, h1, v0, v1] in pixels
            fx: Horizontal focal lengths [left, right]
            fy: Vertical focal lengths [left, right]
            target_w: Physical target width
            target_h: Physical target height, same unit as target_w
            baseline: Stereo baseline, same unit as the target dimensions

        Returns:
            Ratio (percent), tilt angle (degrees) and the correction factor
        """
        left = _as_vector(left_rect_sides, 4, "left_rect_sides")
        right = _as_vector(right_rect_sides, 4, "right_rect_sides")
        fx = _as_vector(fx, 2, "fx")
        fy = _as_vector(fy, 2, "fy")

        ar_left = self._aspect_ratio(left)
        ar_right = self._aspect_ratio(right)

        align = ar_right / ar_left - 1.0 if ar_left > 0.0 else 0.0

        gt_left = average_ground_truth(left, fx[0], fy[0], target_w, target_h)
        gt_right = average_ground_truth(right, fx[1], fy[1], target_w, target_h)

        tilt_left = self._tilt_angle(align, gt_left, baseline)
        tilt_right = self._tilt_angle(align, gt_right, baseline)
        angle = (tilt_left + tilt_right) / 2

        align_pct = align * 100

        scale_x = self._intrinsic_scale(fx[0], fx[1])
        scale_y = self._intrinsic_scale(fy[0], fy[1])
        scale = np.array([scale_x, scale_x, scale_y, scale_y])
        r = _guarded_divide(scale * right, left, left > self.guard_threshold)

        ratio_pct = (float(r.sum()) / 4 - 1.0) * 100

        ratio = ratio_pct - self.correction_weight * align_pct
        correction_factor = ratio / 100.0 + 1.0

        self.logger.info(
            f"Focal-length correction: ratio={ratio:.4f}%, angle={angle:.4f}deg, "
            f"factor={correction_factor:.6f}"
        )
        self.logger.debug(
            f"Aspect ratios left={ar_left:.6f} right={ar_right:.6f}, align={align:.6f}, "
            f"ground truth left={gt_left:.3f} right={gt_right:.3f}"
        )

        return FocalLengthCorrection(
            ratio=ratio,
            angle=angle,
            correction_factor=correction_factor,
            align=align,
            tilt_angles=(tilt_left, tilt_right)
        )

    def _aspect_ratio(self, rect_sides: np.ndarray) -> float:
        """Horizontal over vertical edge sum, or 0 when the vertical sum is too small."""
        vertical = rect_sides[2] + rect_sides[3]
        if vertical > self.guard_threshold:
            return float((rect_sides[0] + rect_sides[1]) / vertical)
        return 0.0

    def _intrinsic_scale(self, left_focal: float, right_focal: float) -> float:
        if abs(right_focal) <= self.guard_threshold:
            self.logger.warning(f"Right focal length {right_focal} too small, ignoring intrinsic scale")
            return 0.0
        return float(left_focal / right_focal)

    def _tilt_angle(self, align: float, ground_truth: float, baseline: float) -> float:
        """Tilt in degrees implied by the skew at the given target distance."""
        if baseline == 0:
            self.logger.warning("Zero baseline, tilt angle set to 0")
            return 0.0
        # No skew means no tilt, even when the distance estimate overflowed
        if align == 0:
            return 0.0
        return float(np.degrees(np.arctan(np.float64(align) * ground_truth / abs(baseline))))


def get_focal_length_correction_factor(left_rect_sides: Sequence[float],
                                       right_rect_sides: Sequence[float],
                                       fx: Sequence[float],
                                       fy: Sequence[float],
                                       target_w: float,
                                       target_h: float,
                                       baseline: float) -> FocalLengthCorrection:
    """Compute the correction with the default guard threshold and weight."""
    return FocalLengthCorrectionEstimator().get_focal_length_correction_factor(
        left_rect_sides, right_rect_sides, fx, fy, target_w, target_h, baseline
    )
