"""Unit tests for core config parsing."""

from __future__ import annotations

import pytest

from core.config import CsvSortConfig
from core.constants import DEFAULT_CHANNEL_CAPACITY, DEFAULT_MAX_READERS
from core.errors import CsvSortConfigError


def test_from_env_uses_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    """Config should fall back to defaults when variables are unset."""
    monkeypatch.delenv("CSVSORT_MAX_READERS", raising=False)
    monkeypatch.delenv("CSVSORT_CHANNEL_CAPACITY", raising=False)
    monkeypatch.delenv("CSVSORT_LOG_LEVEL", raising=False)

    config = CsvSortConfig.from_env()

    assert config.max_readers == DEFAULT_MAX_READERS
    assert config.channel_capacity == DEFAULT_CHANNEL_CAPACITY
    assert config.log_level == "warning"


def test_from_env_reads_reader_limit(monkeypatch: pytest.MonkeyPatch) -> None:
    """Config should parse the reader pool size from environment."""
    monkeypatch.setenv("CSVSORT_MAX_READERS", "3")

    config = CsvSortConfig.from_env()

    assert config.max_readers == 3


def test_from_env_normalizes_log_level(monkeypatch: pytest.MonkeyPatch) -> None:
    """Config should accept log levels case-insensitively."""
    monkeypatch.setenv("CSVSORT_LOG_LEVEL", " INFO ")

    config = CsvSortConfig.from_env()

    assert config.log_level == "info"


@pytest.mark.parametrize(
    ("variable", "value"),
    [
        ("CSVSORT_MAX_READERS", "many"),
        ("CSVSORT_MAX_READERS", "0"),
        ("CSVSORT_CHANNEL_CAPACITY", "-1"),
        ("CSVSORT_LOG_LEVEL", "loud"),
    ],
)
def test_from_env_raises_for_invalid_values(
    monkeypatch: pytest.MonkeyPatch, variable: str, value: str
) -> None:
    """Config should fail for malformed environment values."""
    monkeypatch.setenv(variable, value)

    with pytest.raises(CsvSortConfigError):
        CsvSortConfig.from_env()
