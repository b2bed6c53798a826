"""Shared fixture path helpers for tests."""

from __future__ import annotations

from pathlib import Path


def fixture_path(relative_path: str) -> Path:
    """Resolve a CSV fixture relative to tests/fixtures.

    Args:
        relative_path: Path under the fixtures root.

    Returns:
        Absolute fixture path.
    """
    return Path(__file__).resolve().parent / "fixtures" / relative_path


def read_fixture_lines(relative_path: str) -> list[str]:
    """Return the non-empty lines of a fixture file."""
    text = fixture_path(relative_path).read_text(encoding="utf-8")
    return [line for line in text.splitlines() if line]
