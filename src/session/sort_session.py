"""Sort run orchestration for CLI and SDK workflows.

This module builds the ordering tree, runs ingestion into it, and flushes
the result so every entry point follows one execution path.
"""

from __future__ import annotations

import threading
from typing import Iterable, Sequence, TextIO

from core.config import CsvSortConfig
from core.errors import CsvSortConfigError
from core.logging_config import get_logger
from core.types import Record, SortOptions, SortRunResult
from ingest.pipeline import ingest_records
from ordering.record_tree import OrderedTree
from output.tree_flush import flush_tree

_LOGGER = get_logger(__name__)


def execute_sort(
    options: SortOptions,
    config: CsvSortConfig,
    destination: TextIO,
    shutdown_event: threading.Event | None = None,
) -> SortRunResult:
    """Ingest every selected source and write the sorted records.

    On an early stop the records ingested so far are still written.

    Args:
        options: Per-run sort options.
        config: Runtime configuration.
        destination: Writable text stream for CSV output.
        shutdown_event: Optional event that interrupts ingestion.

    Returns:
        Run statistics.

    Raises:
        CsvSortError: If ingestion or output fails.
    """
    tree = OrderedTree(options.sort_index)
    ingest_result = ingest_records(tree, options, config, shutdown_event)
    written_count = flush_tree(
        tree,
        destination,
        reverse=options.reverse,
        delimiter=options.delimiter,
        header=ingest_result.header,
    )
    _LOGGER.info(
        "sort_completed",
        record_count=written_count,
        source_count=ingest_result.source_count,
        interrupted=ingest_result.interrupted,
        sort_field=options.sort_field,
        reverse=options.reverse,
    )
    return SortRunResult(ingest=ingest_result, written_count=written_count)


def sort_records(
    records: Iterable[Sequence[str]],
    sort_field: int = 1,
    reverse: bool = False,
) -> list[Record]:
    """Sort in-memory records through an ordering tree.

    Args:
        records: Rows of field strings sharing one arity.
        sort_field: One-based field number used as the key.
        reverse: Return descending instead of ascending order.

    Returns:
        Records in key order.

    Raises:
        CsvSortConfigError: If the sort field is out of range.
        CsvSortSchemaError: If rows disagree on arity.
    """
    if sort_field < 1:
        raise CsvSortConfigError(
            f"Invalid sort field {sort_field}: fields are numbered from 1."
        )
    tree = OrderedTree(sort_field - 1)
    for record in records:
        tree.insert(tuple(record))
    return list(tree.traverse(reverse))
