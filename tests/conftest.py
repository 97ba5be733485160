"""
Pytest configuration and fixtures for focal-length calibration tests.
"""

import pytest
import numpy as np

from focal_calibration.data_models import ScanParameters
from focal_calibration.frames.frame_queue import FrameQueue
from focal_calibration.utils.config_manager import ConfigManager


class SyntheticFrame:
    """Test double for a captured frame with a scripted detector result."""

    def __init__(self, sides=None, fx=600.0, fy=600.0, has_data=True, error=None):
        self.sides = sides
        self.fx = fx
        self.fy = fy
        self._has_data = has_data
        self.error = error
        self.released = False
        self.detect_calls = 0

    def has_data(self):
        return self._has_data

    def get_intrinsics(self):
        return self.fx, self.fy

    def extract_target_edges(self):
        self.detect_calls += 1
        if self.error is not None:
            raise self.error
        return self.sides

    def release(self):
        self.released = True


class ListFrameSource:
    """Frame source whose reported size may differ from the frames it holds."""

    def __init__(self, frames, reported_size=None):
        self.frames = list(frames)
        self.reported_size = reported_size
        self.pop_attempts = 0

    def size(self):
        return len(self.frames) if self.reported_size is None else self.reported_size

    def try_pop(self):
        self.pop_attempts += 1
        return self.frames.pop(0) if self.frames else None


@pytest.fixture
def config_manager():
    """Fixture providing a configuration manager instance."""
    return ConfigManager()


@pytest.fixture
def make_frame():
    """Fixture providing a synthetic frame factory."""
    return SyntheticFrame


@pytest.fixture
def make_queue():
    """Fixture building a FrameQueue filled with the given frames."""
    def _make(frames):
        frame_queue = FrameQueue()
        for frame in frames:
            frame_queue.put(frame)
        return frame_queue
    return _make


@pytest.fixture
def list_source():
    """Fixture providing the list-backed frame source class."""
    return ListFrameSource


@pytest.fixture
def sample_scan_params():
    """Fixture providing a valid scan parameter set."""
    return ScanParameters(step_count=20, scan_range=400)


@pytest.fixture
def stereo_measurements():
    """Fixture providing averaged left/right rectangles and intrinsics."""
    return {
        'left': np.array([100.0, 100.0, 80.0, 80.0]),
        'right': np.array([105.0, 105.0, 82.0, 82.0]),
        'fx': [600.0, 605.0],
        'fy': [600.0, 605.0],
        'target_w': 50.0,
        'target_h': 50.0,
        'baseline': 50.0,
    }
