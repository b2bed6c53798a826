"""Concurrent ingest orchestration.

This module fans record sources out to a pool of reader threads and merges
their output onto one bounded channel drained by a single consumer, which is
the only writer of the ordering tree.
"""

from __future__ import annotations

import contextlib
import queue
import threading
from concurrent import futures
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Any, Callable, Iterable

from core.config import CsvSortConfig
from core.constants import CHANNEL_POLL_SECONDS, CONTROL_THREAD_PREFIX, READER_THREAD_PREFIX
from core.errors import CsvSortError
from core.logging_config import get_logger
from core.types import IngestResult, Record, SortOptions
from ingest.record_reader import read_records
from ingest.source_resolver import RecordSource, resolve_sources
from ordering.record_tree import OrderedTree

_LOGGER = get_logger(__name__)
_END_OF_STREAM = object()


class IngestionPipeline:
    """Single-use runner feeding one tree from every resolved source.

    Tasks tracked per run: one dispatcher that resolves sources and submits
    readers, one reader per source, and one consumer. The run completes when
    the dispatcher and every reader have finished and the consumer has
    drained the channel up to the end-of-stream marker.
    """

    def __init__(self, tree: OrderedTree, options: SortOptions, config: CsvSortConfig) -> None:
        self._tree = tree
        self._options = options
        self._config = config
        self._channel: queue.Queue[object] = queue.Queue(maxsize=config.channel_capacity)
        self._stop = threading.Event()
        self._readers: list[Future[int]] = []
        self._header: Record | None = None
        self._header_lock = threading.Lock()
        self._started = False

    def run(self, shutdown_event: threading.Event | None = None) -> IngestResult:
        """Ingest every source into the tree.

        Args:
            shutdown_event: Event that requests an early stop. When it is set
                the consumer finishes its current insert and stops, leaving
                the tree holding a prefix of the arrival stream.

        Returns:
            Ingest statistics, flagged as interrupted on early stop.

        Raises:
            CsvSortError: If any source, walk, or insert fails.
        """
        if self._started:
            raise RuntimeError("IngestionPipeline instances are single-use")
        self._started = True
        shutdown = shutdown_event if shutdown_event is not None else threading.Event()
        reader_pool = ThreadPoolExecutor(
            max_workers=self._config.max_readers, thread_name_prefix=READER_THREAD_PREFIX
        )
        control_pool = ThreadPoolExecutor(max_workers=2, thread_name_prefix=CONTROL_THREAD_PREFIX)
        try:
            return self._coordinate(reader_pool, control_pool, shutdown)
        except CsvSortError as error:
            _LOGGER.error(
                "ingest_failed",
                error=str(error),
                error_type=type(error).__name__,
                record_count=len(self._tree),
            )
            raise
        finally:
            self._stop.set()
            reader_pool.shutdown(wait=False, cancel_futures=True)
            control_pool.shutdown(wait=False, cancel_futures=True)

    def _coordinate(
        self,
        reader_pool: ThreadPoolExecutor,
        control_pool: ThreadPoolExecutor,
        shutdown: threading.Event,
    ) -> IngestResult:
        consumer = control_pool.submit(self._guarded, self._consume)
        dispatcher = control_pool.submit(self._guarded, self._dispatch, reader_pool)
        if not _await_tasks([dispatcher], shutdown, watched=consumer):
            return self._finish_interrupted(consumer)
        _raise_first_failure([consumer, dispatcher])
        readers = dispatcher.result()
        if not _await_tasks(readers, shutdown, watched=consumer):
            return self._finish_interrupted(consumer)
        _raise_first_failure([consumer, *readers])
        self._send(_END_OF_STREAM)
        if not _await_tasks([consumer], shutdown):
            return self._finish_interrupted(consumer)
        record_count = consumer.result()
        _LOGGER.info(
            "ingest_completed",
            source_kind=self._options.source.kind.value,
            source_count=len(readers),
            record_count=record_count,
        )
        return IngestResult(
            record_count=record_count,
            source_count=len(readers),
            header=self._header,
        )

    def _finish_interrupted(self, consumer: Future[int]) -> IngestResult:
        """Stop the consumer and report the prefix it managed to insert."""
        self._stop.set()
        record_count = consumer.result()
        _LOGGER.warning(
            "ingest_interrupted",
            source_count=len(self._readers),
            record_count=record_count,
        )
        return IngestResult(
            record_count=record_count,
            source_count=len(self._readers),
            interrupted=True,
            header=self._header,
        )

    def _dispatch(self, reader_pool: ThreadPoolExecutor) -> list[Future[int]]:
        for source in resolve_sources(self._options.source, self._options.file_suffix):
            if self._stop.is_set():
                break
            self._readers.append(reader_pool.submit(self._guarded, self._read_source, source))
            _LOGGER.debug("source_dispatched", source=source.name)
        if not self._readers:
            _LOGGER.warning(
                "no_sources_found",
                source_kind=self._options.source.kind.value,
                file_suffix=self._options.file_suffix,
            )
        return list(self._readers)

    def _read_source(self, source: RecordSource) -> int:
        if self._stop.is_set():
            return 0
        sent = 0
        with contextlib.closing(read_records(source, self._options.delimiter)) as records:
            if self._options.skip_header:
                header = next(records, None)
                if header is not None:
                    self._capture_header(header)
            for record in records:
                if not self._send(record):
                    break
                sent += 1
        _LOGGER.debug("source_read", source=source.name, record_count=sent)
        return sent

    def _consume(self) -> int:
        inserted = 0
        while not self._stop.is_set():
            try:
                item = self._channel.get(timeout=CHANNEL_POLL_SECONDS)
            except queue.Empty:
                continue
            if item is _END_OF_STREAM:
                break
            self._tree.insert(item)  # type: ignore[arg-type]
            inserted += 1
        return inserted

    def _send(self, item: object) -> bool:
        """Put an item on the channel, giving up once a stop is requested."""
        while not self._stop.is_set():
            try:
                self._channel.put(item, timeout=CHANNEL_POLL_SECONDS)
            except queue.Full:
                continue
            return True
        return False

    def _capture_header(self, header: Record) -> None:
        with self._header_lock:
            if self._header is None:
                self._header = header

    def _guarded(self, task: Callable[..., Any], *args: Any) -> Any:
        """Run a task and broadcast a stop if it fails."""
        try:
            return task(*args)
        except BaseException:
            self._stop.set()
            raise


def ingest_records(
    tree: OrderedTree,
    options: SortOptions,
    config: CsvSortConfig,
    shutdown_event: threading.Event | None = None,
) -> IngestResult:
    """Run the concurrent ingest pipeline into ``tree``.

    Args:
        tree: Destination tree, mutated only by the pipeline consumer.
        options: Sort options carrying the source selection.
        config: Runtime configuration.
        shutdown_event: Optional early-stop request.

    Returns:
        Ingest statistics.

    Raises:
        CsvSortError: If any source, walk, or insert fails.
    """
    return IngestionPipeline(tree, options, config).run(shutdown_event)


def _await_tasks(
    tasks: Iterable[Future[Any]],
    shutdown: threading.Event,
    watched: Future[Any] | None = None,
) -> bool:
    """Wait for tasks to finish, or for one of them or ``watched`` to fail.

    Returns:
        False if a shutdown was requested first, True otherwise.
    """
    pending = set(tasks)
    while pending:
        if shutdown.is_set():
            return False
        waited = pending if watched is None else pending | {watched}
        done, _ = futures.wait(
            waited, timeout=CHANNEL_POLL_SECONDS, return_when=futures.FIRST_EXCEPTION
        )
        if any(task.exception() is not None for task in done):
            return True
        pending -= done
    return True


def _raise_first_failure(tasks: Iterable[Future[Any]]) -> None:
    """Re-raise the error of the first finished task that failed."""
    for task in tasks:
        if task.done() and task.exception() is not None:
            task.result()
