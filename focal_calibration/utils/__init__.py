"""
Utility Functions and Helpers

Common utilities for focal-length calibration.
"""

from .config_manager import ConfigManager

__all__ = ['ConfigManager']
