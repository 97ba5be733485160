"""
Configuration Management System

Handles loading, validation, and management of calibration parameters.
"""

import copy

import yaml
from typing import Dict, Any, Optional
from pathlib import Path

from ..calibration.parameter_validator import check_focal_length_params
from ..data_models import ScanParameters
from ..exceptions import InvalidParameterError


class ConfigManager:
    """Manages configuration parameters for focal-length calibration."""

    def __init__(self, config_path: Optional[str] = None):
        """
        Initialize configuration manager.

        Args:
            config_path: Path to configuration file. If None, uses default config.
        """
        self.config_path = config_path or self._get_default_config_path()
        self.config = self._load_config()
        self._validate_config()

    def _get_default_config_path(self) -> str:
        """Get path to default configuration file."""
        package_dir = Path(__file__).parent.parent
        return str(package_dir / "config" / "default_config.yaml")

    def _load_config(self) -> Dict[str, Any]:
        """Load configuration from YAML file."""
        try:
            with open(self.config_path, 'r') as file:
                config = yaml.safe_load(file)
        except FileNotFoundError:
            raise FileNotFoundError(f"Configuration file not found: {self.config_path}")
        except yaml.YAMLError as e:
            raise ValueError(f"Error parsing configuration file: {e}")
        return config or {}

    def _validate_config(self, config: Optional[Dict[str, Any]] = None) -> None:
        """Validate configuration parameters for consistency and feasibility."""
        config = self.config if config is None else config

        # Validate scan defaults
        scan = ScanParameters.from_dict(config.get('scan') or {})
        try:
            check_focal_length_params(**scan.as_dict())
        except InvalidParameterError as e:
            raise ValueError(f"Invalid scan configuration: {e}")

        # Validate target dimensions
        target = config.get('target') or {}
        for name in ('width', 'height'):
            if target.get(name) is None:
                raise ValueError(f"Target {name} missing from configuration ('target.{name}')")
        if float(target['width']) <= 0 or float(target['height']) <= 0:
            raise ValueError("Target width and height must be positive")

        # Validate stereo geometry
        camera = config.get('camera') or {}
        if camera.get('baseline') is None:
            raise ValueError("Camera baseline missing from configuration ('camera.baseline')")
        if float(camera['baseline']) == 0:
            raise ValueError("Camera baseline must be non-zero")

        capture = config.get('capture') or {}
        if int(capture.get('queue_capacity', 0)) < 0:
            raise ValueError("queue_capacity must be non-negative")

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get configuration value using dot notation.

        Args:
            key: Configuration key (e.g., 'target.width')
            default: Default value if key not found

        Returns:
            Configuration value
        """
        keys = key.split('.')
        value = self.config

        for k in keys:
            if isinstance(value, dict) and k in value:
                value = value[k]
            else:
                return default

        return value

    def set(self, key: str, value: Any) -> None:
        """
        Set configuration value using dot notation.

        Args:
            key: Configuration key (e.g., 'camera.baseline')
            value: Value to set
        """
        keys = key.split('.')
        updated = copy.deepcopy(self.config)
        config_ref = updated

        for k in keys[:-1]:
            if not isinstance(config_ref.get(k), dict):
                config_ref[k] = {}
            config_ref = config_ref[k]

        config_ref[keys[-1]] = value
        # Rejected values leave the current configuration untouched
        self._validate_config(updated)
        self.config = updated

    def save(self, output_path: Optional[str] = None) -> None:
        """
        Save current configuration to file.

        Args:
            output_path: Path to save configuration. If None, overwrites current file.
        """
        save_path = output_path or self.config_path

        with open(save_path, 'w') as file:
            yaml.dump(self.config, file, default_flow_style=False, indent=2)

    def get_scan_params(self) -> ScanParameters:
        """Get default scan parameters."""
        return ScanParameters.from_dict(self.config.get('scan', {}))

    def get_target_params(self) -> Dict[str, Any]:
        """Get calibration target dimensions as a dictionary."""
        return self.config.get('target', {})

    def get_camera_params(self) -> Dict[str, Any]:
        """Get stereo camera geometry as a dictionary."""
        return self.config.get('camera', {})

    def get_capture_params(self) -> Dict[str, Any]:
        """Get frame capture parameters as a dictionary."""
        return self.config.get('capture', {})
