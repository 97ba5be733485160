"""
Main entry point for focal-length calibration

Validates scan parameters and computes focal-length corrections from measured
target rectangles.
"""

import argparse
import json
import logging
import sys

from focal_calibration.calibration.correction_estimator import FocalLengthCorrectionEstimator
from focal_calibration.calibration.parameter_validator import SCAN_PARAMETER_RANGES, ScanParameterValidator
from focal_calibration.data_models import ScanParameters
from focal_calibration.exceptions import FocalCalibrationError
from focal_calibration.utils.config_manager import ConfigManager


def build_parser() -> argparse.ArgumentParser:
    """Build the command-line parser."""
    parser = argparse.ArgumentParser(
        description="Stereo focal-length calibration tools"
    )

    parser.add_argument(
        "--config",
        type=str,
        help="Path to configuration file"
    )

    parser.add_argument(
        "--log-level",
        type=str,
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity"
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    validate = subparsers.add_parser(
        "validate",
        help="Validate focal-length scan parameters"
    )
    for name in SCAN_PARAMETER_RANGES:
        validate.add_argument(
            f"--{name.replace('_', '-')}",
            dest=name,
            type=int,
            help=f"Override '{name}' (range {SCAN_PARAMETER_RANGES[name][0]} - {SCAN_PARAMETER_RANGES[name][1]})"
        )

    estimate = subparsers.add_parser(
        "estimate",
        help="Compute the focal-length correction from averaged target rectangles"
    )
    estimate.add_argument("--left", type=float, nargs=4, required=True,
                          help="Left rectangle sides: two horizontal then two vertical edges (pixels)")
    estimate.add_argument("--right", type=float, nargs=4, required=True,
                          help="Right rectangle sides: two horizontal then two vertical edges (pixels)")
    estimate.add_argument("--fx", type=float, nargs=2, required=True,
                          help="Horizontal focal lengths: left right")
    estimate.add_argument("--fy", type=float, nargs=2, required=True,
                          help="Vertical focal lengths: left right")
    estimate.add_argument("--target-width", type=float,
                          help="Physical target width (defaults to config)")
    estimate.add_argument("--target-height", type=float,
                          help="Physical target height (defaults to config)")
    estimate.add_argument("--baseline", type=float,
                          help="Stereo baseline (defaults to config)")
    estimate.add_argument("--json", action="store_true",
                          help="Print the result as JSON")

    return parser


def run_validate(args, config: ConfigManager) -> int:
    values = config.get_scan_params().as_dict()
    overrides = {name: getattr(args, name) for name in SCAN_PARAMETER_RANGES
                 if getattr(args, name) is not None}
    values.update(overrides)

    params = ScanParameterValidator().validate(ScanParameters.from_dict(values))

    print("Scan parameters valid:")
    for name, value in params.as_dict().items():
        print(f"  {name}: {value}")
    return 0


def run_estimate(args, config: ConfigManager) -> int:
    target = config.get_target_params()
    target_width = args.target_width if args.target_width is not None else float(target['width'])
    target_height = args.target_height if args.target_height is not None else float(target['height'])
    baseline = args.baseline if args.baseline is not None else float(config.get_camera_params()['baseline'])

    correction = FocalLengthCorrectionEstimator().get_focal_length_correction_factor(
        args.left, args.right, args.fx, args.fy, target_width, target_height, baseline
    )

    if args.json:
        print(json.dumps({
            "ratio": correction.ratio,
            "angle": correction.angle,
            "correction_factor": correction.correction_factor,
        }, indent=2))
    else:
        print(f"Ratio: {correction.ratio:.4f} %")
        print(f"Tilt angle: {correction.angle:.4f} degrees")
        print(f"Correction factor: {correction.correction_factor:.6f}")
    return 0


def main(argv=None):
    """Main entry point for focal-length calibration."""
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(name)s %(levelname)s: %(message)s"
    )

    # Load configuration
    try:
        config = ConfigManager(args.config)
    except (FileNotFoundError, ValueError) as e:
        print(f"Error loading configuration: {e}")
        return 1

    try:
        if args.command == "validate":
            return run_validate(args, config)
        return run_estimate(args, config)
    except FocalCalibrationError as e:
        print(f"Error: {e}")
        return 1
    except ValueError as e:
        print(f"Invalid input: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
