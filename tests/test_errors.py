"""Tests for the error taxonomy."""

import pytest

from rouster.errors import (
    FileTransferError,
    InternalError,
    LocalExecutionError,
    RemoteExecutionError,
    RousterError,
    SSHConnectionError,
)


@pytest.mark.parametrize(
    "error",
    [
        FileTransferError("put", "/x", "local file does not exist"),
        InternalError("boom"),
        LocalExecutionError("false", 1, ""),
        RemoteExecutionError("", 1),
        SSHConnectionError("get", "/x"),
    ],
)
def test_all_errors_share_base(error: Exception) -> None:
    """Every error can be caught as RousterError."""
    assert isinstance(error, RousterError)


def test_local_execution_error_payload() -> None:
    """LocalExecutionError carries command, code and output."""
    error = LocalExecutionError("make test", 2, "FAILED\n")

    assert error.command == "make test"
    assert error.exit_code == 2
    assert error.output == "FAILED\n"
    assert "make test" in str(error)
    assert "[2]" in str(error)


def test_remote_execution_error_message() -> None:
    """RemoteExecutionError reports output and exit code."""
    error = RemoteExecutionError("denied", 126, command="./run")

    assert str(error) == "output[denied], exitcode[126]"
    assert error.command == "./run"


def test_ssh_connection_error_unreachable_message() -> None:
    """Without a cause the message says SSH is unavailable."""
    error = SSHConnectionError("get", "/etc/hosts")

    assert str(error) == "unable to get[/etc/hosts], SSH connection unavailable"
    assert error.original_error is None


def test_ssh_connection_error_wraps_cause() -> None:
    """The wrapped error is kept and shown."""
    cause = OSError("broken pipe")
    error = SSHConnectionError("put", "/tmp/f", cause)

    assert error.original_error is cause
    assert str(error) == "unable to put[/tmp/f], exception[broken pipe]"


def test_file_transfer_error_message() -> None:
    """FileTransferError names the path and reason."""
    error = FileTransferError("put", "/tmp/f", "local file does not exist")

    assert str(error) == "unable to put[/tmp/f], local file does not exist"
