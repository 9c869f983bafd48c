"""Entry point for the Modulo Times Table Visualization.

Points are placed around a circle and point i is joined to
point (i * TTN) mod N. Play animates the TTN; presets jump to named
curves such as the cardioid and nephroid.
"""

import argparse
import logging
import sys

from PyQt6.QtWidgets import QApplication

from animation import DEFAULT_POINT_COUNT, DEFAULT_TTN
from app_window import AppWindow
from geometry import InvalidInputError, target_indices, validate_point_count


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        description="Interactive modulo times-table visualization.",
    )
    parser.add_argument(
        "--ttn",
        type=float,
        default=DEFAULT_TTN,
        help=f"Initial times-table number (default: {DEFAULT_TTN})",
    )
    parser.add_argument(
        "--points",
        type=int,
        default=DEFAULT_POINT_COUNT,
        help=f"Number of points on the circle (default: {DEFAULT_POINT_COUNT})",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    args = parser.parse_args(argv)
    try:
        validate_point_count(args.points)
    except InvalidInputError as exc:
        parser.error(f"--points: {exc}")
    try:
        target_indices(args.ttn, args.points)
    except InvalidInputError as exc:
        parser.error(f"--ttn: {exc}")
    return args


def main():
    args = parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(name)s %(levelname)s: %(message)s",
    )

    app = QApplication(sys.argv[:1])
    window = AppWindow(ttn=args.ttn, point_count=args.points)
    window.show()

    sys.exit(app.exec())


if __name__ == "__main__":
    main()
