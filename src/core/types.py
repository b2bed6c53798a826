"""Shared typed models.

This module defines immutable data models used by ordering, ingest,
output, and CLI layers to keep interfaces explicit and stable.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from core.constants import DEFAULT_DELIMITER, DEFAULT_FILE_SUFFIX, DEFAULT_SORT_FIELD
from core.errors import CsvSortConfigError

Record = tuple[str, ...]


class SourceKind(str, Enum):
    """Which kind of input a run reads from."""

    FILE = "file"
    STDIN = "stdin"
    DIRECTORY = "directory"


@dataclass(frozen=True)
class SourceSelection:
    """Input selection for one run.

    At most one of ``input_path`` and ``directory`` may be set. When neither
    is set the run reads standard input.

    Attributes:
        input_path: Single input file.
        directory: Directory walked recursively for matching files.
    """

    input_path: Path | None = None
    directory: Path | None = None

    def __post_init__(self) -> None:
        if self.input_path is not None and self.directory is not None:
            raise CsvSortConfigError(
                "Cannot read from an input file and a directory at once. "
                "Choose either an input file or a directory."
            )

    @property
    def kind(self) -> SourceKind:
        """Return the active source kind."""
        if self.directory is not None:
            return SourceKind.DIRECTORY
        if self.input_path is not None:
            return SourceKind.FILE
        return SourceKind.STDIN


@dataclass(frozen=True)
class SortOptions:
    """Sort command options.

    Attributes:
        source: Input selection.
        sort_field: One-based field number used as the ordering key.
        reverse: Emit records in descending order.
        skip_header: Treat the first line of each source as a header.
        delimiter: Single-character field delimiter.
        file_suffix: Suffix filter for files discovered in a directory.
        output_path: Destination file; stdout when unset.
    """

    source: SourceSelection = field(default_factory=SourceSelection)
    sort_field: int = DEFAULT_SORT_FIELD
    reverse: bool = False
    skip_header: bool = False
    delimiter: str = DEFAULT_DELIMITER
    file_suffix: str = DEFAULT_FILE_SUFFIX
    output_path: Path | None = None

    def __post_init__(self) -> None:
        if self.sort_field < 1:
            raise CsvSortConfigError(
                f"Invalid sort field {self.sort_field}: fields are numbered from 1."
            )
        if len(self.delimiter) != 1 or self.delimiter in ('"', "\r", "\n"):
            raise CsvSortConfigError(
                f"Invalid delimiter {self.delimiter!r}: expected one character "
                "other than a quote or line break."
            )

    @property
    def sort_index(self) -> int:
        """Return the zero-based field index."""
        return self.sort_field - 1


@dataclass(frozen=True)
class IngestResult:
    """Outcome of one ingestion pipeline run.

    Attributes:
        record_count: Records inserted into the tree.
        source_count: Sources dispatched to readers.
        interrupted: Whether ingestion was cut short by an interrupt.
        header: First header captured when headers are enabled.
    """

    record_count: int
    source_count: int
    interrupted: bool = False
    header: Record | None = None


@dataclass(frozen=True)
class SortRunResult:
    """Outcome of one full sort run.

    Attributes:
        ingest: Ingestion statistics.
        written_count: Records written to the destination, header excluded.
    """

    ingest: IngestResult
    written_count: int

    @property
    def interrupted(self) -> bool:
        """Return whether the run ended through the interrupt path."""
        return self.ingest.interrupted
