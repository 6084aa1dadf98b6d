"""Tests for sweep.platform.process module."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

from sweep.core.result import Err, Ok
from sweep.platform.process import ProcessError, run

PY = sys.executable


class TestProcessError:
    def test_str_short_command(self) -> None:
        error = ProcessError(command=("ssh", "web1"), returncode=255, stdout="", stderr="")
        assert str(error) == "ssh web1 failed (exit 255)"

    def test_str_long_command_truncated(self) -> None:
        error = ProcessError(("ssh", "-o", "BatchMode=yes", "web1", "ls"), 1, "", "")
        assert str(error) == "ssh -o BatchMode=yes ... failed (exit 1)"

    def test_frozen(self) -> None:
        error = ProcessError(("cmd",), 1, "", "")
        with pytest.raises(AttributeError):
            error.returncode = 2  # type: ignore[misc]


class TestRun:
    def test_success_returns_stdout(self) -> None:
        result = run([PY, "-c", "print('hello')"])

        assert isinstance(result, Ok)
        assert "hello" in result.value

    def test_failure_returns_error(self) -> None:
        result = run([PY, "-c", "import sys; sys.stderr.write('bad'); sys.exit(42)"])

        assert isinstance(result, Err)
        assert result.error.returncode == 42
        assert "bad" in result.error.stderr

    def test_command_not_found(self) -> None:
        result = run(["nonexistent_command_12345"])

        assert isinstance(result, Err)
        assert result.error.returncode == -1
        assert len(result.error.stderr) > 0

    def test_uses_cwd(self, tmp_path: Path) -> None:
        (tmp_path / "marker.txt").write_text("x")

        result = run([PY, "-c", "import os; print(os.listdir('.'))"], cwd=tmp_path)

        assert isinstance(result, Ok)
        assert "marker.txt" in result.value

    def test_timeout(self) -> None:
        result = run([PY, "-c", "import time; time.sleep(10)"], timeout=0.2)

        assert isinstance(result, Err)
        assert "timed out" in result.error.stderr.lower()
