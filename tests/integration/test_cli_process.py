"""Integration tests that run csvsort in a separate interpreter."""

from __future__ import annotations

import os
import signal
import subprocess
import sys
import textwrap
import time
from pathlib import Path

import pytest

_PROJECT_ROOT = Path(__file__).resolve().parents[2]


def _child_env(**extra: str) -> dict[str, str]:
    env = dict(os.environ)
    env["PYTHONPATH"] = str(_PROJECT_ROOT / "src")
    env.update(extra)
    return env


def test_sdk_sort_to_stdout_keeps_logs_off_stdout(tmp_path: Path) -> None:
    """Library callers without any logging setup should get clean CSV on stdout."""
    source = tmp_path / "pair.csv"
    source.write_text("b,2\na,1\n", encoding="utf-8")
    script = textwrap.dedent(
        f"""
        import sys
        from pathlib import Path

        import csvsort

        options = csvsort.SortOptions(
            source=csvsort.SourceSelection(input_path=Path({str(source)!r}))
        )
        csvsort.execute_sort(options, csvsort.CsvSortConfig(), sys.stdout)
        """
    )

    completed = subprocess.run(
        [sys.executable, "-c", script],
        env=_child_env(),
        capture_output=True,
        text=True,
        timeout=30,
    )

    assert completed.returncode == 0, completed.stderr
    assert completed.stdout == "a,1\nb,2\n"


@pytest.mark.skipif(sys.platform == "win32", reason="SIGINT delivery is POSIX-only")
def test_sigint_flushes_partial_output_and_exits_zero() -> None:
    """A real SIGINT should flush the records ingested so far and exit 0."""
    process = subprocess.Popen(
        [sys.executable, "-m", "cli"],
        env=_child_env(CSVSORT_LOG_LEVEL="debug"),
        stdin=subprocess.PIPE,
        stdout=subprocess.PIPE,
        stderr=subprocess.PIPE,
        text=True,
    )
    try:
        assert process.stdin is not None and process.stderr is not None
        process.stdin.write("b,2\na,1\nc,3\n")
        process.stdin.flush()
        dispatched = False
        while not dispatched:
            line = process.stderr.readline()
            if not line:
                break
            dispatched = "source_dispatched" in line
        assert dispatched
        time.sleep(0.5)
        process.send_signal(signal.SIGINT)
        stdout, _ = process.communicate(timeout=30)
    finally:
        if process.poll() is None:
            process.kill()

    assert process.returncode == 0
    assert stdout == "a,1\nb,2\nc,3\n"
