"""
Frame Sources

Frame and frame-queue capabilities consumed by the calibration core.
"""

from .frame_queue import Frame, FrameSource, FrameQueue, release_frame

__all__ = ['Frame', 'FrameSource', 'FrameQueue', 'release_frame']
