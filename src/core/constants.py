"""Core constants used across csvsort modules.

This module centralizes non-domain-specific constants.
Keeping values here avoids magic literals in business logic.
"""

from __future__ import annotations

DEFAULT_DELIMITER = ","
DEFAULT_FILE_SUFFIX = ".csv"
DEFAULT_SORT_FIELD = 1
DEFAULT_MAX_READERS = 8
DEFAULT_CHANNEL_CAPACITY = 1
DEFAULT_LOG_LEVEL = "warning"
SUPPORTED_LOG_LEVELS = ("debug", "info", "warning", "error")
STDIN_SOURCE_NAME = "<stdin>"
SOURCE_ENCODING = "utf-8"
OUTPUT_LINE_TERMINATOR = "\n"
CHANNEL_POLL_SECONDS = 0.05
READER_THREAD_PREFIX = "csvsort-reader"
CONTROL_THREAD_PREFIX = "csvsort-control"
EXIT_SUCCESS = 0
EXIT_FAILURE = 1
