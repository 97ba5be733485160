"""
Device Discovery

Device factory interface shared with the calibration core.
"""

from .device_factory import DeviceFactory, DeviceInfo

__all__ = ['DeviceFactory', 'DeviceInfo']
