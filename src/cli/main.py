"""csvsort CLI entry point.

This module parses command-line flags into typed sort options
and runs one sort, mapping domain errors onto exit codes.
"""

from __future__ import annotations

import argparse
import os
import sys
from pathlib import Path
from typing import Sequence

from core.config import CsvSortConfig
from core.constants import (
    DEFAULT_DELIMITER,
    DEFAULT_FILE_SUFFIX,
    DEFAULT_SORT_FIELD,
    EXIT_FAILURE,
    EXIT_SUCCESS,
)
from core.errors import CsvSortError
from core.logging_config import configure_logging, get_logger
from core.types import SortOptions, SourceSelection
from output.csv_writer import open_destination
from output.tree_flush import interrupt_handler
from session.sort_session import execute_sort

_LOGGER = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Build the CLI parser.

    Returns:
        Configured argument parser.
    """
    parser = argparse.ArgumentParser(
        prog="csvsort",
        description="Sort CSV records by one field, reading files concurrently",
    )
    parser.add_argument("-i", "--input", help="Input CSV file (default: standard input)")
    parser.add_argument("-d", "--directory", help="Input directory, walked recursively")
    parser.add_argument("-o", "--output", help="Output CSV file (default: standard output)")
    parser.add_argument(
        "-f",
        "--field",
        type=int,
        default=DEFAULT_SORT_FIELD,
        help="Sort records by Nth field, counting from 1",
    )
    parser.add_argument(
        "-r", "--reverse", action="store_true", help="Sort records in descending order"
    )
    parser.add_argument(
        "--header",
        action="store_true",
        help="Treat the first line of each source as a header and keep it on top",
    )
    parser.add_argument(
        "--delimiter", default=DEFAULT_DELIMITER, help="Single-character field delimiter"
    )
    parser.add_argument(
        "--suffix",
        default=DEFAULT_FILE_SUFFIX,
        help="File name suffix matched when reading a directory",
    )
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run the csvsort CLI.

    Args:
        argv: Optional argument vector.

    Returns:
        Process exit code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        config = CsvSortConfig.from_env()
    except CsvSortError as error:
        print(f"error: {error}", file=sys.stderr)
        return EXIT_FAILURE
    configure_logging(config.log_level)
    try:
        options = _build_options(args)
        return _run_sort(options, config)
    except CsvSortError as error:
        _LOGGER.error("sort_failed", error=str(error), error_type=type(error).__name__)
        print(f"error: {error}", file=sys.stderr)
        return EXIT_FAILURE


def run() -> None:
    """Console entry point.

    Terminates without joining reader threads, which may still be blocked
    on standard input after an interrupt or a fatal error.
    """
    exit_code = main()
    sys.stdout.flush()
    sys.stderr.flush()
    os._exit(exit_code)


def _build_options(args: argparse.Namespace) -> SortOptions:
    """Map parsed CLI args onto validated sort options.

    Raises:
        CsvSortConfigError: If flags conflict or are out of range.
    """
    source = SourceSelection(
        input_path=_optional_path(args.input),
        directory=_optional_path(args.directory),
    )
    return SortOptions(
        source=source,
        sort_field=args.field,
        reverse=args.reverse,
        skip_header=args.header,
        delimiter=args.delimiter,
        file_suffix=args.suffix,
        output_path=_optional_path(args.output),
    )


def _run_sort(options: SortOptions, config: CsvSortConfig) -> int:
    """Run one sort with SIGINT wired to an early flush."""
    with open_destination(options.output_path) as destination, interrupt_handler() as shutdown:
        execute_sort(options, config, destination, shutdown)
    return EXIT_SUCCESS


def _optional_path(value: str | None) -> Path | None:
    if not value:
        return None
    return Path(value).expanduser()
