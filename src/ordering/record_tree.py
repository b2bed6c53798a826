"""Binary search tree of records keyed by one field.

The tree only grows: nodes are never removed or rebalanced. Insertion and
traversal both run iteratively so skewed input cannot exhaust the stack.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator

from core.types import Record
from ordering.schema import validate_record


@dataclass
class _Node:
    """Tree node owning one record and up to two children."""

    record: Record
    left: "_Node | None" = None
    right: "_Node | None" = None


class OrderedTree:
    """Unbalanced BST ordering records by the field at ``sort_index``.

    Records comparing strictly less than a node go left; equal or greater
    keys go right, so ties keep insertion order in ascending traversal.
    Comparison is plain string ordering with no numeric coercion.

    Not safe for concurrent mutation. Callers serialize access.
    """

    def __init__(self, sort_index: int) -> None:
        if sort_index < 0:
            raise ValueError(f"sort_index must be non-negative, got {sort_index}")
        self._sort_index = sort_index
        self._root: _Node | None = None
        self._arity: int | None = None
        self._size = 0

    @property
    def sort_index(self) -> int:
        """Return the zero-based ordering field."""
        return self._sort_index

    @property
    def arity(self) -> int | None:
        """Return the schema arity, or None while the tree is empty."""
        return self._arity

    def __len__(self) -> int:
        return self._size

    def insert(self, record: Record) -> None:
        """Insert a record as a new leaf.

        Args:
            record: Record to insert.

        Raises:
            CsvSortConfigError: If the sort index is outside the record.
            CsvSortSchemaError: If the record arity differs from the schema.
        """
        validate_record(record, self._sort_index, self._arity)
        new_node = _Node(record=tuple(record))
        if self._root is None:
            self._root = new_node
            self._arity = len(record)
            self._size = 1
            return
        key = record[self._sort_index]
        current = self._root
        while True:
            if key < current.record[self._sort_index]:
                if current.left is None:
                    current.left = new_node
                    break
                current = current.left
            else:
                if current.right is None:
                    current.right = new_node
                    break
                current = current.right
        self._size += 1

    def traverse(self, reverse: bool = False) -> Iterator[Record]:
        """Yield records in key order.

        Each call starts a fresh in-order walk. Records inserted while a
        walk is suspended may or may not be visited by it.

        Args:
            reverse: Yield descending instead of ascending order.

        Yields:
            Records ordered by the sort field.
        """
        stack: list[_Node] = []
        current = self._root
        while stack or current is not None:
            while current is not None:
                stack.append(current)
                current = current.right if reverse else current.left
            node = stack.pop()
            yield node.record
            current = node.left if reverse else node.right

    def height(self) -> int:
        """Return the number of nodes on the longest root-to-leaf path."""
        if self._root is None:
            return 0
        tallest = 0
        pending: list[tuple[_Node, int]] = [(self._root, 1)]
        while pending:
            node, depth = pending.pop()
            tallest = max(tallest, depth)
            for child in (node.left, node.right):
                if child is not None:
                    pending.append((child, depth + 1))
        return tallest
