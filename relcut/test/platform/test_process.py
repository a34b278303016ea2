from __future__ import annotations

import subprocess
from pathlib import Path
from unittest.mock import MagicMock, patch

from relcut.core.result import Err, Ok
from relcut.platform.process import ProcessError, run


@patch("subprocess.run")
def test_run_returns_stdout(mock_run: MagicMock, tmp_path: Path) -> None:
    mock_run.return_value = subprocess.CompletedProcess(["git"], 0, stdout="ok\n", stderr="")

    assert run(["git", "status"], cwd=tmp_path) == Ok("ok\n")
    assert mock_run.call_args.kwargs["cwd"] == str(tmp_path)
    assert mock_run.call_args.kwargs["check"] is False


@patch("subprocess.run")
def test_run_nonzero_exit(mock_run: MagicMock, tmp_path: Path) -> None:
    mock_run.return_value = subprocess.CompletedProcess(
        ["git"], 1, stdout="nothing to commit\n", stderr=""
    )

    result = run(["git", "commit", "-m", "x"], cwd=tmp_path)

    assert isinstance(result, Err)
    assert result.error.returncode == 1
    assert result.error.output == "nothing to commit"
    assert str(result.error) == "git commit -m ... failed (exit 1)"


@patch("subprocess.run")
def test_run_timeout(mock_run: MagicMock, tmp_path: Path) -> None:
    mock_run.side_effect = subprocess.TimeoutExpired(cmd=["git", "fetch"], timeout=3.0)

    result = run(["git", "fetch"], cwd=tmp_path, timeout=3.0)

    assert isinstance(result, Err)
    assert result.error.returncode == -1
    assert "timed out after 3.0s" in result.error.stderr


@patch("subprocess.run")
def test_run_os_error(mock_run: MagicMock, tmp_path: Path) -> None:
    mock_run.side_effect = FileNotFoundError("No such file or directory: 'git'")

    result = run(["git", "fetch"], cwd=tmp_path)

    assert isinstance(result, Err)
    assert "No such file" in result.error.stderr


def test_process_error_output_combines_streams() -> None:
    error = ProcessError(command=("git",), returncode=1, stdout="out\n", stderr="err\n")
    assert error.output == "err\nout"
    assert ProcessError(command=("git",), returncode=1, stdout="", stderr="").output == ""
