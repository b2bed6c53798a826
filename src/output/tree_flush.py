"""Tree flushing and interrupt handling.

A flush walks the tree in the requested order and writes every record.
SIGINT does not flush directly: its handler sets an event that stops the
ingest consumer first, so the flush never races an in-flight insert.
"""

from __future__ import annotations

import signal
import threading
from contextlib import contextmanager
from typing import Any, Iterator, TextIO

from core.types import Record
from ordering.record_tree import OrderedTree
from output.csv_writer import write_records


def flush_tree(
    tree: OrderedTree,
    destination: TextIO,
    *,
    reverse: bool,
    delimiter: str,
    header: Record | None = None,
) -> int:
    """Write the tree's current contents in key order.

    Args:
        tree: Tree to traverse. Must not be mutated during the flush.
        destination: Writable text stream.
        reverse: Write descending instead of ascending order.
        delimiter: Field delimiter.
        header: Optional row written first.

    Returns:
        Number of records written.
    """
    return write_records(tree.traverse(reverse), destination, delimiter, header)


@contextmanager
def interrupt_handler(
    shutdown_event: threading.Event | None = None,
) -> Iterator[threading.Event]:
    """Install a SIGINT handler that sets a shutdown event.

    After the first signal the default handler is restored, so a second
    Ctrl-C raises KeyboardInterrupt. Outside the main thread no handler is
    installed and the event can only be set programmatically.

    Args:
        shutdown_event: Event to set; a new one is created when omitted.

    Yields:
        The shutdown event.
    """
    event = shutdown_event if shutdown_event is not None else threading.Event()
    if threading.current_thread() is not threading.main_thread():
        yield event
        return

    original_sigint = signal.getsignal(signal.SIGINT)

    def _handler(signum: int, frame: Any) -> None:
        event.set()
        signal.signal(signal.SIGINT, signal.default_int_handler)

    signal.signal(signal.SIGINT, _handler)
    try:
        yield event
    finally:
        signal.signal(signal.SIGINT, original_sigint)
