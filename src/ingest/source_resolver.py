"""Record source resolution.

This module expands a source selection into concrete record sources:
one file, standard input, or every matching file under a directory.
"""

from __future__ import annotations

import contextlib
import os
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import ContextManager, Iterator, TextIO

from core.constants import SOURCE_ENCODING, STDIN_SOURCE_NAME
from core.errors import CsvSortIngestError
from core.types import SourceSelection


@dataclass(frozen=True)
class RecordSource:
    """One stream of delimited lines.

    Attributes:
        name: Display name used in logs and errors.
        path: File path, or None for standard input.
    """

    name: str
    path: Path | None = None

    def open(self) -> ContextManager[TextIO]:
        """Open the source for text reading.

        Standard input is borrowed, never closed.

        Raises:
            CsvSortIngestError: If the file cannot be opened.
        """
        if self.path is None:
            return contextlib.nullcontext(sys.stdin)
        try:
            return self.path.open("r", encoding=SOURCE_ENCODING, newline="")
        except OSError as error:
            raise CsvSortIngestError(
                f"Failed to open source {self.name}: {error.strerror or error}. "
                "Provide an existing, readable file."
            ) from error


def resolve_sources(selection: SourceSelection, file_suffix: str) -> Iterator[RecordSource]:
    """Yield the record sources for a selection.

    Directory sources are discovered lazily so readers can start before
    the walk finishes.

    Args:
        selection: Validated input selection.
        file_suffix: Name suffix required for files found in a directory.

    Yields:
        Record sources in discovery order.

    Raises:
        CsvSortIngestError: If the directory walk fails.
    """
    if selection.directory is not None:
        yield from _walk_directory(selection.directory, file_suffix)
    elif selection.input_path is not None:
        yield RecordSource(name=str(selection.input_path), path=selection.input_path)
    else:
        yield RecordSource(name=STDIN_SOURCE_NAME)


def _walk_directory(directory: Path, file_suffix: str) -> Iterator[RecordSource]:
    """Walk a directory top-down, sorted within each level, yielding matches."""
    for root, dir_names, file_names in os.walk(directory, onerror=_raise_walk_error):
        dir_names.sort()
        for file_name in sorted(file_names):
            if file_name.endswith(file_suffix):
                file_path = Path(root) / file_name
                yield RecordSource(name=str(file_path), path=file_path)


def _raise_walk_error(error: OSError) -> None:
    """Turn a directory walk failure into a fatal ingest error."""
    raise CsvSortIngestError(
        f"Failed to walk directory {error.filename}: {error.strerror or error}."
    ) from error
