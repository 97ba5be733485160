"""
Tests for Scan Parameter Validator
"""

import pytest
import numpy as np
from hypothesis import given, strategies as st

from focal_calibration.calibration.parameter_validator import (
    SCAN_PARAMETER_RANGES, ScanParameterValidator, check_focal_length_params
)
from focal_calibration.data_models import ScanParameters
from focal_calibration.exceptions import InvalidParameterError, FocalCalibrationError


def _valid_values():
    return {name: low for name, (low, high) in SCAN_PARAMETER_RANGES.items()}


class TestScanParameterValidator:
    """Test suite for scan parameter validation."""

    @pytest.fixture
    def validator(self):
        """Fixture providing a scan parameter validator instance."""
        return ScanParameterValidator()

    def test_ranges_table(self):
        """Test the validated fields and their order."""
        assert list(SCAN_PARAMETER_RANGES) == [
            'step_count', 'scan_range', 'keep_value_after_success', 'interrupt_data_sampling',
            'adjust_both_sides', 'scan_location', 'scan_direction', 'white_wall_mode'
        ]
        assert SCAN_PARAMETER_RANGES['step_count'] == (8, 256)
        assert SCAN_PARAMETER_RANGES['scan_range'] == (1, 60000)

    @pytest.mark.parametrize("name", list(SCAN_PARAMETER_RANGES))
    def test_boundaries_pass(self, name):
        """Test that min and max values of every field are accepted."""
        low, high = SCAN_PARAMETER_RANGES[name]
        for value in (low, high):
            values = _valid_values()
            values[name] = value
            assert check_focal_length_params(**values) is None

    @pytest.mark.parametrize("name", list(SCAN_PARAMETER_RANGES))
    def test_out_of_range_fails(self, name):
        """Test that min-1 and max+1 are rejected with a message naming the field."""
        low, high = SCAN_PARAMETER_RANGES[name]
        for value in (low - 1, high + 1):
            values = _valid_values()
            values[name] = value
            with pytest.raises(InvalidParameterError) as exc_info:
                check_focal_length_params(**values)

            error = exc_info.value
            assert error.field == name
            assert error.value == value
            assert error.valid_range == (low, high)
            assert f"'{name}'" in str(error)
            assert str(value) in str(error)
            assert f"({low} - {high})" in str(error)

    def test_error_message_format(self):
        """Test the full error message."""
        values = _valid_values()
        values['step_count'] = 300
        with pytest.raises(InvalidParameterError, match=r"Given value of 'step_count' 300 is out of range \(8 - 256\)"):
            check_focal_length_params(**values)

    def test_first_failure_wins(self):
        """Test that the first failing field in table order is reported."""
        values = _valid_values()
        values['white_wall_mode'] = 5
        values['scan_range'] = 0
        values['step_count'] = 4
        with pytest.raises(InvalidParameterError) as exc_info:
            check_focal_length_params(**values)
        assert exc_info.value.field == 'step_count'

        values['step_count'] = 8
        with pytest.raises(InvalidParameterError) as exc_info:
            check_focal_length_params(**values)
        assert exc_info.value.field == 'scan_range'

    def test_error_hierarchy(self):
        """Test that parameter errors are value errors of the package."""
        values = _valid_values()
        values['scan_direction'] = 2
        with pytest.raises(ValueError):
            check_focal_length_params(**values)
        with pytest.raises(FocalCalibrationError):
            check_focal_length_params(**values)

    def test_rejects_bool_and_float(self):
        """Test that non-integer values are rejected."""
        values = _valid_values()
        values['white_wall_mode'] = True
        with pytest.raises(InvalidParameterError):
            check_focal_length_params(**values)

        values = _valid_values()
        values['step_count'] = 20.0
        with pytest.raises(InvalidParameterError):
            check_focal_length_params(**values)

    def test_accepts_numpy_integers(self):
        """Test that numpy integer values are accepted."""
        values = _valid_values()
        values['step_count'] = np.int32(64)
        assert check_focal_length_params(**values) is None

    def test_validate_dataclass(self, validator, sample_scan_params):
        """Test validation of a ScanParameters instance."""
        assert validator.validate(sample_scan_params) is sample_scan_params

    def test_validate_defaults(self, validator):
        """Test that the default parameter set is valid."""
        params = validator.validate()
        assert params == ScanParameters()

    def test_validate_invalid_dataclass(self, validator):
        """Test that an invalid dataclass raises."""
        with pytest.raises(InvalidParameterError, match="adjust_both_sides"):
            validator.validate(ScanParameters(adjust_both_sides=-1))

    @given(step_count=st.integers(min_value=-1000, max_value=1000),
           scan_range=st.integers(min_value=-10, max_value=70000))
    def test_validation_matches_ranges(self, step_count, scan_range):
        """
        Test that validation succeeds exactly when every value is in range.
        """
        values = _valid_values()
        values['step_count'] = step_count
        values['scan_range'] = scan_range

        in_range = 8 <= step_count <= 256 and 1 <= scan_range <= 60000
        if in_range:
            check_focal_length_params(**values)
        else:
            with pytest.raises(InvalidParameterError):
                check_focal_length_params(**values)
