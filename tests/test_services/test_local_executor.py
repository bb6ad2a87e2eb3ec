"""Tests for the local command executor."""

import os
from pathlib import Path

import pytest

from rouster.errors import InternalError, LocalExecutionError
from rouster.models import Session
from rouster.services.executors import run_local, side_channel_path


def test_run_local_returns_output(session: Session, tmp_path: Path) -> None:
    """Successful commands return their output and record it."""
    result = run_local(session, "echo hello", tmp_dir=str(tmp_path))

    assert result.exit_code == 0
    assert result.output == "hello\n"
    assert session.output.get() == "hello\n"
    assert len(session.output) == 1
    assert session.last_exit_code == 0


def test_run_local_captures_stderr(session: Session, tmp_path: Path) -> None:
    """Stdout and stderr land in the same captured output."""
    result = run_local(session, "echo out; echo err 1>&2", tmp_dir=str(tmp_path))

    assert "out\n" in result.output
    assert "err\n" in result.output


def test_run_local_removes_side_channel_file(session: Session, tmp_path: Path) -> None:
    """No temp file is left behind after success."""
    run_local(session, "true", tmp_dir=str(tmp_path))

    assert list(tmp_path.iterdir()) == []


def test_run_local_failure_raises(session: Session, tmp_path: Path) -> None:
    """Non-zero exit raises with command, code and output."""
    with pytest.raises(LocalExecutionError) as exc_info:
        run_local(session, "echo broken; exit 3", tmp_dir=str(tmp_path))

    error = exc_info.value
    assert error.exit_code == 3
    assert error.output == "broken\n"
    assert error.command == "echo broken; exit 3"


def test_run_local_failure_does_not_record(session: Session, tmp_path: Path) -> None:
    """A failed command leaves the log and exit code untouched."""
    run_local(session, "echo ok", tmp_dir=str(tmp_path))

    with pytest.raises(LocalExecutionError):
        run_local(session, "false", tmp_dir=str(tmp_path))

    assert len(session.output) == 1
    assert session.last_exit_code == 0


def test_run_local_failure_removes_side_channel_file(
    session: Session, tmp_path: Path
) -> None:
    """The temp file is removed before the error is raised."""
    with pytest.raises(LocalExecutionError):
        run_local(session, "exit 1", tmp_dir=str(tmp_path))

    assert list(tmp_path.iterdir()) == []


def test_run_local_delete_failure_is_internal_error(
    session: Session, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    """Failing to delete the side-channel file raises InternalError."""
    original_unlink = Path.unlink

    def refuse(self: Path, missing_ok: bool = False) -> None:
        if self.name.startswith("rouster."):
            raise PermissionError("read-only")
        original_unlink(self, missing_ok=missing_ok)

    monkeypatch.setattr(Path, "unlink", refuse)

    with pytest.raises(InternalError, match="unable to delete"):
        run_local(session, "echo hi", tmp_dir=str(tmp_path))

    assert len(session.output) == 0


def test_side_channel_path_is_unique(tmp_path: Path) -> None:
    """Paths embed the pid and differ between calls."""
    first = side_channel_path(str(tmp_path))
    second = side_channel_path(str(tmp_path))

    assert first != second
    assert first.parent == tmp_path
    assert first.name.startswith("rouster.")
    assert f".{os.getpid()}." in first.name
