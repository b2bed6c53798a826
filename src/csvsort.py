"""Public SDK surface for csvsort.

This module provides a stable import path for library users.
It re-exports the ordering tree, typed options, and run helpers.
"""

from __future__ import annotations

from core.config import CsvSortConfig
from core.errors import (
    CsvSortConfigError,
    CsvSortError,
    CsvSortIngestError,
    CsvSortOutputError,
    CsvSortSchemaError,
)
from core.types import IngestResult, SortOptions, SortRunResult, SourceSelection
from ingest.pipeline import IngestionPipeline
from ordering.record_tree import OrderedTree
from output.csv_writer import write_records
from session.sort_session import execute_sort, sort_records

__all__ = [
    "CsvSortConfig",
    "CsvSortConfigError",
    "CsvSortError",
    "CsvSortIngestError",
    "CsvSortOutputError",
    "CsvSortSchemaError",
    "IngestResult",
    "IngestionPipeline",
    "OrderedTree",
    "SortOptions",
    "SortRunResult",
    "SourceSelection",
    "execute_sort",
    "sort_records",
    "write_records",
]
