"""CSV rendering for sorted records.

Fields holding the delimiter, a quote, or a line break are quoted with
standard CSV rules. The destination is flushed once after the last row.
"""

from __future__ import annotations

import contextlib
import csv
import sys
from pathlib import Path
from typing import ContextManager, Iterable, TextIO

from core.constants import OUTPUT_LINE_TERMINATOR, SOURCE_ENCODING
from core.errors import CsvSortOutputError
from core.types import Record


def open_destination(output_path: Path | None) -> ContextManager[TextIO]:
    """Open the output destination for writing.

    Args:
        output_path: Output file, or None for standard output.

    Returns:
        Context manager yielding a text stream. Standard output is never closed.

    Raises:
        CsvSortOutputError: If the output file cannot be created.
    """
    if output_path is None:
        return contextlib.nullcontext(sys.stdout)
    try:
        return output_path.open("w", encoding=SOURCE_ENCODING, newline="")
    except OSError as error:
        raise CsvSortOutputError(
            f"Failed to create output file {output_path}: {error.strerror or error}."
        ) from error


def write_records(
    records: Iterable[Record],
    destination: TextIO,
    delimiter: str,
    header: Record | None = None,
) -> int:
    """Serialize records as delimited text.

    Args:
        records: Records in output order.
        destination: Writable text stream.
        delimiter: Field delimiter.
        header: Optional row written before the records.

    Returns:
        Number of records written, header excluded.

    Raises:
        CsvSortOutputError: If any row cannot be written or flushed.
    """
    writer = csv.writer(destination, delimiter=delimiter, lineterminator=OUTPUT_LINE_TERMINATOR)
    written = 0
    try:
        if header is not None:
            writer.writerow(header)
        for record in records:
            writer.writerow(record)
            written += 1
        destination.flush()
    except (OSError, csv.Error) as error:
        raise CsvSortOutputError(
            f"Failed to write sorted records after {written} row(s): {error}."
        ) from error
    return written
