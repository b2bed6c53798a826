"""Unit tests for sort run orchestration."""

from __future__ import annotations

import io
import threading

import pytest

from core.config import CsvSortConfig
from core.errors import CsvSortConfigError, CsvSortSchemaError
from core.types import SortOptions, SourceSelection
from session.sort_session import execute_sort, sort_records
from tests.fixture_paths import fixture_path


def test_execute_sort_writes_sorted_file() -> None:
    """A full run should write every record in order."""
    options = SortOptions(source=SourceSelection(input_path=fixture_path("letters.csv")))
    buffer = io.StringIO()

    result = execute_sort(options, CsvSortConfig(), buffer)

    assert buffer.getvalue() == "a,1\nb,2\nc,3\n"
    assert result.written_count == 3 and result.interrupted is False


def test_execute_sort_keeps_header_on_top() -> None:
    """The captured header should precede reversed records."""
    options = SortOptions(
        source=SourceSelection(input_path=fixture_path("with_header.csv")),
        skip_header=True,
        reverse=True,
    )
    buffer = io.StringIO()

    execute_sort(options, CsvSortConfig(), buffer)

    assert buffer.getvalue() == "name,rank\nb,2\na,1\n"


def test_execute_sort_flushes_partial_tree_on_shutdown() -> None:
    """A pre-set shutdown should still produce a valid, ordered flush."""
    shutdown = threading.Event()
    shutdown.set()
    options = SortOptions(source=SourceSelection(directory=fixture_path("nested")))
    buffer = io.StringIO()

    result = execute_sort(options, CsvSortConfig(), buffer, shutdown)

    lines = buffer.getvalue().splitlines()
    assert result.interrupted is True
    assert len(lines) == result.written_count == result.ingest.record_count
    assert lines == sorted(lines)


def test_sort_records_orders_in_memory_rows() -> None:
    """In-memory rows should sort through the same tree."""
    rows = [["b", "2"], ["a", "1"], ["c", "3"]]

    assert sort_records(rows, sort_field=2, reverse=True) == [
        ("c", "3"),
        ("b", "2"),
        ("a", "1"),
    ]


def test_sort_records_rejects_mixed_arity() -> None:
    """Mixed-arity rows should fail."""
    with pytest.raises(CsvSortSchemaError):
        sort_records([["a", "1"], ["b"]])


def test_sort_records_rejects_zero_field() -> None:
    """Field numbers start at one."""
    with pytest.raises(CsvSortConfigError):
        sort_records([["a"]], sort_field=0)
