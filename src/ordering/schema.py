"""Record schema validation.

The first record inserted into a tree fixes its arity. Every later record
must match it, and the sort index must address an existing field.
"""

from __future__ import annotations

from core.errors import CsvSortConfigError, CsvSortSchemaError
from core.types import Record


def validate_record(record: Record, sort_index: int, schema_arity: int | None) -> None:
    """Check a record against the sort index and established arity.

    Args:
        record: Candidate record.
        sort_index: Zero-based ordering field.
        schema_arity: Arity fixed by the first insertion, or None when empty.

    Raises:
        CsvSortConfigError: If the sort index is outside the record.
        CsvSortSchemaError: If the record arity differs from the schema.
    """
    if sort_index >= len(record):
        raise CsvSortConfigError(
            f"Sort field {sort_index + 1} is out of range for a record with "
            f"{len(record)} field(s). Choose a field between 1 and {len(record)}."
        )
    if schema_arity is not None and len(record) != schema_arity:
        raise CsvSortSchemaError(
            f"Invalid record length {len(record)}: expected {schema_arity} fields "
            "as established by the first record."
        )
