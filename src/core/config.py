"""Runtime configuration model for csvsort.

This module owns all environment variable parsing and validation.
Other modules consume a typed config object instead of raw env reads.
"""

from __future__ import annotations

from dataclasses import dataclass
import os

from core.constants import (
    DEFAULT_CHANNEL_CAPACITY,
    DEFAULT_LOG_LEVEL,
    DEFAULT_MAX_READERS,
    SUPPORTED_LOG_LEVELS,
)
from core.errors import CsvSortConfigError


@dataclass(frozen=True)
class CsvSortConfig:
    """Validated runtime configuration.

    Attributes:
        max_readers: Upper bound on concurrently running source readers.
        channel_capacity: Merge channel size; 1 keeps readers in lockstep
            with the consumer.
        log_level: Minimum structured log level.
    """

    max_readers: int = DEFAULT_MAX_READERS
    channel_capacity: int = DEFAULT_CHANNEL_CAPACITY
    log_level: str = DEFAULT_LOG_LEVEL

    @classmethod
    def from_env(cls) -> "CsvSortConfig":
        """Build config from process environment variables.

        Returns:
            A validated config object.

        Raises:
            CsvSortConfigError: If environment values are invalid.
        """
        max_readers = _parse_positive_int(
            "CSVSORT_MAX_READERS", os.getenv("CSVSORT_MAX_READERS", str(DEFAULT_MAX_READERS))
        )
        channel_capacity = _parse_positive_int(
            "CSVSORT_CHANNEL_CAPACITY",
            os.getenv("CSVSORT_CHANNEL_CAPACITY", str(DEFAULT_CHANNEL_CAPACITY)),
        )
        log_level = _parse_log_level(os.getenv("CSVSORT_LOG_LEVEL", DEFAULT_LOG_LEVEL))
        return cls(
            max_readers=max_readers,
            channel_capacity=channel_capacity,
            log_level=log_level,
        )


def _parse_positive_int(variable: str, raw_value: str) -> int:
    """Parse a positive integer environment value.

    Args:
        variable: Environment variable name for error context.
        raw_value: Raw string from environment.

    Returns:
        Parsed integer.

    Raises:
        CsvSortConfigError: If value is not an integer greater than zero.
    """
    try:
        value = int(raw_value)
    except ValueError as error:
        raise CsvSortConfigError(
            f"Invalid {variable} value: expected integer, got '{raw_value}'. "
            f"Set {variable} to a positive number."
        ) from error
    if value < 1:
        raise CsvSortConfigError(
            f"Invalid {variable} value: expected a positive integer, got {value}."
        )
    return value


def _parse_log_level(raw_value: str) -> str:
    """Normalize and validate the log level environment value."""
    level = raw_value.strip().lower()
    if level not in SUPPORTED_LOG_LEVELS:
        raise CsvSortConfigError(
            f"Invalid CSVSORT_LOG_LEVEL value '{raw_value}'. "
            f"Supported levels: {', '.join(SUPPORTED_LOG_LEVELS)}."
        )
    return level
