"""
Scan Parameter Validator

Checks focal-length scan-control parameters before a physical scan is started.
"""

import logging
import numbers
from collections import OrderedDict
from typing import Optional

from ..data_models import ScanParameters
from ..exceptions import InvalidParameterError


# Inclusive valid ranges, checked in this order
SCAN_PARAMETER_RANGES = OrderedDict([
    ('step_count', (8, 256)),
    ('scan_range', (1, 60000)),
    ('keep_value_after_success', (0, 1)),
    ('interrupt_data_sampling', (0, 1)),
    ('adjust_both_sides', (0, 1)),
    ('scan_location', (0, 1)),
    ('scan_direction', (0, 1)),
    ('white_wall_mode', (0, 1)),
])


def _check_range(name: str, value) -> None:
    low, high = SCAN_PARAMETER_RANGES[name]
    # bool is an int subclass but never a valid scan-control value
    if isinstance(value, bool) or not isinstance(value, numbers.Integral):
        raise InvalidParameterError(name, value, (low, high))
    if value < low or value > high:
        raise InvalidParameterError(name, value, (low, high))


def check_focal_length_params(step_count: int,
                              scan_range: int,
                              keep_value_after_success: int,
                              interrupt_data_sampling: int,
                              adjust_both_sides: int,
                              scan_location: int,
                              scan_direction: int,
                              white_wall_mode: int) -> None:
    """
    Validate focal-length scan parameters.

    Fields are checked in table order and the first out-of-range field raises.

    Raises:
        InvalidParameterError: naming the field, its value and its valid range
    """
    values = (step_count, scan_range, keep_value_after_success, interrupt_data_sampling,
              adjust_both_sides, scan_location, scan_direction, white_wall_mode)
    for name, value in zip(SCAN_PARAMETER_RANGES, values):
        _check_range(name, value)


class ScanParameterValidator:
    """Validates scan parameter sets against the sensor's accepted ranges."""

    def __init__(self):
        self.logger = logging.getLogger(__name__)

    def validate(self, params: Optional[ScanParameters] = None) -> ScanParameters:
        """
        Validate a scan parameter set.

        Args:
            params: Parameters to validate. Defaults to ScanParameters().

        Returns:
            The validated parameters
        """
        params = params or ScanParameters()
        try:
            check_focal_length_params(**params.as_dict())
        except InvalidParameterError as e:
            self.logger.error(str(e))
            raise

        self.logger.debug(f"Scan parameters accepted: {params.as_dict()}")
        return params
