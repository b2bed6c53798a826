"""Unit tests for the line-oriented record reader."""

from __future__ import annotations

import io
from pathlib import Path

import pytest

from core.errors import CsvSortIngestError
from ingest.record_reader import parse_line, read_records
from ingest.source_resolver import RecordSource
from tests.fixture_paths import fixture_path


def _file_source(relative_path: str) -> RecordSource:
    path = fixture_path(relative_path)
    return RecordSource(name=str(path), path=path)


def test_read_records_splits_each_line() -> None:
    """Reader should yield one tuple per line in file order."""
    records = list(read_records(_file_source("letters.csv"), ","))

    assert records == [("b", "2"), ("a", "1"), ("c", "3")]


def test_read_records_stops_at_blank_line() -> None:
    """Only the block before the first blank line should be read."""
    records = list(read_records(_file_source("blocks.csv"), ","))

    assert records == [("b", "2"), ("a", "1")]


def test_read_records_strips_crlf_terminators() -> None:
    """Windows line endings should not leak into the last field."""
    records = list(read_records(_file_source("crlf.csv"), ","))

    assert records == [("d", "4"), ("e", "5")]


def test_read_records_reads_stdin(monkeypatch: pytest.MonkeyPatch) -> None:
    """A source without a path should read standard input."""
    monkeypatch.setattr("sys.stdin", io.StringIO("x;1\ny;2\n"))

    records = list(read_records(RecordSource(name="<stdin>"), ";"))

    assert records == [("x", "1"), ("y", "2")]


def test_read_records_raises_for_invalid_utf8(tmp_path: Path) -> None:
    """Undecodable bytes should surface as an ingest error."""
    path = tmp_path / "binary.csv"
    path.write_bytes(b"a,\xff\xfe\n")

    with pytest.raises(CsvSortIngestError):
        list(read_records(RecordSource(name=str(path), path=path), ","))


def test_parse_line_keeps_quotes_and_empty_fields() -> None:
    """Splitting ignores quoting and keeps empty fields."""
    assert parse_line('"a,b",,c\n', ",") == ('"a', 'b"', "", "c")


def test_parse_line_returns_none_for_empty_line() -> None:
    """An empty line marks the end of a block."""
    assert parse_line("\r\n", ",") is None
