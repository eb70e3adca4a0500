"""
Command line interface for parsing MRZ blocks.

Usage:
    mrz-parse "I<UTOD231458907<<<<<<<<<<<<<<<" "7408122F1204159UTO<<<<<<<<<<<6" \
        "ERIKSSON<<ANNA<MARIA<<<<<<<<<<"
    mrz-parse --file mrz.txt --today 2024-01-01
    cat mrz.txt | mrz-parse --strict
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from datetime import date
from pathlib import Path

from mrz_engine.config import MRZEngineSettings
from mrz_engine.exceptions import ConfigurationError
from mrz_engine.logging_config import setup_logging_from_settings
from mrz_engine.parser import parse, split_mrz_text

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_PARSE_ERROR = 1
EXIT_CHECK_FAILED = 2
EXIT_USAGE = 64


def _reference_date(value: str) -> date:
    try:
        return date.fromisoformat(value)
    except ValueError as e:
        msg = f"invalid date {value!r}, expected YYYY-MM-DD"
        raise argparse.ArgumentTypeError(msg) from e


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="mrz-parse", description="Parse an ICAO 9303 Machine Readable Zone"
    )
    parser.add_argument("lines", nargs="*", help="MRZ lines, in order")
    parser.add_argument("--file", type=Path, help="Read the MRZ block from a file")
    parser.add_argument(
        "--today", type=_reference_date, help="Reference date for century resolution (YYYY-MM-DD)"
    )
    parser.add_argument("--config", type=Path, help="YAML settings file")
    parser.add_argument(
        "--strict", action="store_true", help="Exit with status 2 when any check digit fails"
    )
    return parser


def _read_lines(args: argparse.Namespace) -> list[str]:
    if args.lines:
        return [line.strip() for line in args.lines]
    if args.file is not None:
        return split_mrz_text(args.file.read_text(encoding="utf-8"))
    return split_mrz_text(sys.stdin.read())


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        settings = MRZEngineSettings.load(args.config)
    except ConfigurationError as e:
        print(f"mrz-parse: {e}", file=sys.stderr)
        return EXIT_USAGE

    setup_logging_from_settings(settings)

    try:
        lines = _read_lines(args)
    except OSError as e:
        print(f"mrz-parse: cannot read {args.file}: {e}", file=sys.stderr)
        return EXIT_USAGE
    logger.debug("Read %d MRZ line(s)", len(lines))

    result = parse(lines, today=args.today, settings=settings)
    if result.error is not None:
        print(result.error.to_validation_error().model_dump_json(indent=2), file=sys.stderr)
        return EXIT_PARSE_ERROR

    record = result.unwrap()
    print(json.dumps(record.to_dict(), indent=2))
    if args.strict and not record.all_checks_passed:
        return EXIT_CHECK_FAILED
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
