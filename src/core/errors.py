"""csvsort exception hierarchy.

This module defines traceable domain errors with clear boundaries.
Each subsystem raises a specific error type for debuggability.
"""

from __future__ import annotations


class CsvSortError(Exception):
    """Base exception for all csvsort failures."""


class CsvSortConfigError(CsvSortError):
    """Raised for invalid runtime configuration or conflicting options."""


class CsvSortSchemaError(CsvSortError):
    """Raised when a record disagrees with the established schema."""


class CsvSortIngestError(CsvSortError):
    """Raised for source open, read, and directory walk failures."""


class CsvSortOutputError(CsvSortError):
    """Raised when sorted records cannot be written."""
