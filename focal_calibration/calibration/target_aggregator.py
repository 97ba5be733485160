"""
Target Measurement Aggregator

Drains a batch of captured frames, collects the calibration target's edge
lengths from each one and averages them into a single rectangle measurement.
"""

import logging
from typing import Callable, List, Optional

import numpy as np

from ..data_models import Intrinsics, TargetMeasurement
from ..exceptions import DetectionFailureError, EmptyInputError, NoValidMeasurementsError
from ..frames.frame_queue import FrameSource, release_frame


ProgressCallback = Callable[[float], None]


class TargetMeasurementAggregator:
    """Averages target rectangle sides over the frames of one sensor."""

    def __init__(self):
        """Initialize target measurement aggregator."""
        self.logger = logging.getLogger(__name__)

    def get_target_rect_info(self,
                             frames: FrameSource,
                             progress: int = 0,
                             progress_callback: Optional[ProgressCallback] = None) -> TargetMeasurement:
        """
        Extract the averaged target rectangle sides from a frame queue.

        The queue size read on entry bounds the number of pop attempts; popping
        stops early once the queue runs dry. Intrinsics are taken from the first
        frame carrying data and assumed constant for the rest of the batch.

        Args:
            frames: Frame source holding the captured snapshot
            progress: Progress value to continue counting from
            progress_callback: Called with the updated progress after each frame with data

        Returns:
            Averaged rectangle sides, intrinsics and the final progress value

        Raises:
            EmptyInputError: the queue holds no frames
            DetectionFailureError: the target detector failed on a frame
            NoValidMeasurementsError: no frame produced a measurement
        """
        queue_size = frames.size()
        if queue_size == 0:
            self.logger.error("No frames in input queue")
            raise EmptyInputError()

        intrinsics = None
        rect_sides_arr: List[np.ndarray] = []
        popped = 0

        while popped < queue_size:
            frame = frames.try_pop()
            if frame is None:
                self.logger.debug(f"Frame queue ran dry after {popped} of {queue_size} frames")
                break
            popped += 1

            try:
                if not frame.has_data():
                    continue

                if intrinsics is None:
                    fx, fy = frame.get_intrinsics()
                    intrinsics = Intrinsics(fx=float(fx), fy=float(fy))
                    self.logger.debug(f"Stream intrinsics: fx={intrinsics.fx:.2f}, fy={intrinsics.fy:.2f}")

                sides = self._extract_sides(frame)
                if sides is not None:
                    rect_sides_arr.append(sides)
            finally:
                release_frame(frame)
                # Do not keep the frame alive into the progress callback
                del frame

            progress += 1
            if progress_callback:
                progress_callback(float(progress))

        if not rect_sides_arr:
            self.logger.error(f"No target measurements in {popped} frames")
            raise NoValidMeasurementsError()

        rect_sides = np.mean(np.stack(rect_sides_arr), axis=0)

        self.logger.info(
            f"Target rectangle averaged over {len(rect_sides_arr)}/{popped} frames: "
            f"{np.array2string(rect_sides, precision=2)}"
        )

        return TargetMeasurement(
            rect_sides=rect_sides,
            intrinsics=intrinsics,
            frames_used=len(rect_sides_arr),
            progress=progress
        )

    def _extract_sides(self, frame) -> Optional[np.ndarray]:
        """
        Run the target detector on one frame.

        Returns:
            Edge lengths as a (4,) float array, or None if nothing was detected
        """
        try:
            sides = frame.extract_target_edges()
        except Exception as e:
            self.logger.error(f"Target detection failed: {e}")
            raise DetectionFailureError() from e

        if sides is None:
            self.logger.debug("No target detected in frame")
            return None

        try:
            sides = np.asarray(sides, dtype=np.float64).reshape(-1)
        except (TypeError, ValueError) as e:
            self.logger.error(f"Target detector returned non-numeric edge lengths: {sides!r}")
            raise DetectionFailureError() from e

        if sides.shape != (4,) or not np.all(np.isfinite(sides)):
            self.logger.error(f"Target detector returned invalid edge lengths: {sides}")
            raise DetectionFailureError()

        return sides
