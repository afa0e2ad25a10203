# main.py

"""Entry point for the ali_recommend exporter."""

import argparse
import logging
import sys
from datetime import tzinfo
from pathlib import Path
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from src.config.logging_config import setup_logging
from src.config.settings import Settings

logger = logging.getLogger("ali_recommend.main")


def _non_negative_int(value: str) -> int:
    """argparse type for the item quantity."""
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(
            f"not an integer: {value!r}"
        ) from None
    if number < 0:
        raise argparse.ArgumentTypeError(
            f"quantity must be >= 0, got {number}"
        )
    return number


def _zone(value: str) -> tzinfo:
    """argparse type for an IANA time zone name."""
    try:
        return ZoneInfo(value)
    except (ZoneInfoNotFoundError, ValueError):
        raise argparse.ArgumentTypeError(
            f"unknown time zone: {value!r}"
        ) from None


def _build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the CLI."""
    default_output = Settings.RESULTS_DIR / Settings.OUTPUT_FILENAME

    parser = argparse.ArgumentParser(
        prog="ali_recommend",
        description=(
            "Export AliExpress recommended products to a JSON file."
        ),
    )
    parser.add_argument(
        "-n",
        "--quantity",
        type=_non_negative_int,
        default=Settings.DEFAULT_QUANTITY,
        help=(
            "Number of products to fetch "
            f"(default: {Settings.DEFAULT_QUANTITY})."
        ),
    )
    parser.add_argument(
        "-o",
        "--output",
        type=Path,
        default=None,
        dest="output_path",
        help=f"Output file (default: {default_output}).",
    )
    parser.add_argument(
        "--timezone",
        type=_zone,
        default=None,
        dest="tz",
        help="IANA zone for timestamps (default: host local zone).",
    )
    parser.add_argument(
        "--keep-offset",
        action="store_true",
        default=False,
        dest="keep_offset",
        help="Append the UTC offset to rendered timestamps.",
    )
    parser.add_argument(
        "--preview",
        action="store_true",
        default=False,
        help="Print a table of the exported products to stdout.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=False,
        help="Echo INFO log records to stderr.",
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    """Parse arguments, run one export and exit with its status."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    log_file = setup_logging(verbose=args.verbose)
    logger.info("ali_recommend starting, log file: %s", log_file)

    from src.cli.runner import run_export

    exit_code = run_export(
        quantity=args.quantity,
        output_path=args.output_path,
        tz=args.tz,
        keep_offset=args.keep_offset,
        preview=args.preview,
    )
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
