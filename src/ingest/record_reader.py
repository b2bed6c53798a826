"""Line-oriented record reader.

Each line is split on the delimiter without any quote handling. Reading
stops at the first empty line, so only the leading block of a stream
is consumed.
"""

from __future__ import annotations

from typing import Iterator

from core.errors import CsvSortIngestError
from core.types import Record
from ingest.source_resolver import RecordSource


def read_records(source: RecordSource, delimiter: str) -> Iterator[Record]:
    """Yield records from a source up to the first blank line.

    Args:
        source: Source to read.
        delimiter: Field delimiter.

    Yields:
        One record per non-empty line.

    Raises:
        CsvSortIngestError: If the source cannot be opened or decoded.
    """
    with source.open() as stream:
        try:
            for line in stream:
                fields = parse_line(line, delimiter)
                if fields is None:
                    return
                yield fields
        except (OSError, UnicodeDecodeError) as error:
            raise CsvSortIngestError(
                f"Failed to read source {source.name}: {error}. "
                "Check that the source is readable UTF-8 text."
            ) from error


def parse_line(line: str, delimiter: str) -> Record | None:
    """Split one raw line into fields.

    Args:
        line: Line text, possibly ending in a line terminator.
        delimiter: Field delimiter.

    Returns:
        The record, or None for an empty line.
    """
    text = line.removesuffix("\n").removesuffix("\r")
    if not text:
        return None
    return tuple(text.split(delimiter))
