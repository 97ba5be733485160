"""
Frame Source Interfaces

Capabilities consumed by the target aggregator: a FIFO of captured frames and
the per-frame accessors for payload, stream intrinsics and target detection.
"""

import logging
import queue
import threading
from typing import Optional, Protocol, Sequence, Tuple, runtime_checkable


@runtime_checkable
class Frame(Protocol):
    """A captured image unit delivered by the streaming thread."""

    def has_data(self) -> bool: ...

    def get_intrinsics(self) -> Tuple[float, float]: ...

    def extract_target_edges(self) -> Optional[Sequence[float]]: ...


@runtime_checkable
class FrameSource(Protocol):
    """Non-blocking view of a frame FIFO."""

    def size(self) -> int: ...

    def try_pop(self) -> Optional[Frame]: ...


def release_frame(frame) -> None:
    """Return a frame's resources to its producer, if it holds any."""
    release = getattr(frame, 'release', None)
    if callable(release):
        release()


class FrameQueue:
    """Thread-safe frame FIFO shared between a capture thread and the calibration core."""

    def __init__(self, capacity: int = 0):
        """
        Initialize frame queue.

        Args:
            capacity: Maximum number of queued frames. When full, the oldest
                frame is dropped so the producer never blocks. 0 means unbounded.
        """
        if capacity < 0:
            raise ValueError("Frame queue capacity must be non-negative")

        self.capacity = capacity
        self.logger = logging.getLogger(__name__)
        self._queue: "queue.Queue[Frame]" = queue.Queue()
        self._lock = threading.Lock()
        self.dropped_frames = 0

    def put(self, frame: Frame) -> None:
        """Enqueue a frame, dropping the oldest one if the queue is full."""
        with self._lock:
            if self.capacity and self._queue.qsize() >= self.capacity:
                try:
                    oldest = self._queue.get_nowait()
                except queue.Empty:
                    oldest = None
                if oldest is not None:
                    release_frame(oldest)
                    self.dropped_frames += 1
                    self.logger.debug(f"Frame queue full, dropped oldest frame ({self.dropped_frames} total)")
            self._queue.put_nowait(frame)

    def size(self) -> int:
        """Current number of queued frames."""
        return self._queue.qsize()

    def try_pop(self) -> Optional[Frame]:
        """Pop the next frame, or return None if the queue is empty."""
        try:
            return self._queue.get_nowait()
        except queue.Empty:
            return None

    def poll(self, timeout: Optional[float] = None) -> Optional[Frame]:
        """Pop the next frame, waiting up to `timeout` seconds for one to arrive."""
        try:
            return self._queue.get(timeout=timeout)
        except queue.Empty:
            return None

    def __len__(self) -> int:
        return self.size()
