"""Local and remote command executors.

Both executors share the same success contract: the captured output is
appended to the session's output log, ``last_exit_code`` is updated and an
ExecutionResult is returned. On a non-zero exit nothing is recorded and the
corresponding execution error is raised with the output attached.
"""

import itertools
import logging
import os
import subprocess
import tempfile
import time
from pathlib import Path

from rouster.errors import InternalError, LocalExecutionError, RemoteExecutionError
from rouster.models import ExecutionResult, Session
from rouster.protocols import ChannelOptions
from rouster.utils.shell import quote_path

logger = logging.getLogger(__name__)

# Distinguishes side-channel files of concurrent sessions in one process.
_sequence = itertools.count()


def side_channel_path(tmp_dir: str | None = None) -> Path:
    """Build a unique temp file path for capturing local command output.

    The name is ``rouster.<unix-time>.<pid>.<seq>`` so that neither other
    processes nor other sessions in this process collide with it.
    """
    base = Path(tmp_dir) if tmp_dir else Path(tempfile.gettempdir())
    return base / f"rouster.{int(time.time())}.{os.getpid()}.{next(_sequence)}"


def _remove_side_channel(path: Path) -> None:
    try:
        path.unlink(missing_ok=True)
    except OSError as e:
        raise InternalError(f"unable to delete [{path}]: {e}") from e


def run_local(
    session: Session,
    command: str,
    tmp_dir: str | None = None,
) -> ExecutionResult:
    """Run a command on the controlling host through the shell.

    Stdout and stderr are both redirected into a side-channel file, which is
    read back and removed before this function returns or raises.

    Args:
        session: Session to record output on
        command: Shell command line
        tmp_dir: Directory for the side-channel file (default: system temp)

    Returns:
        ExecutionResult with exit code 0 and the combined output

    Raises:
        LocalExecutionError: If the command exits non-zero
        InternalError: If the side-channel file cannot be read or deleted
    """
    tmp_file = side_channel_path(tmp_dir)
    target = quote_path(str(tmp_file))
    # Grouped so every statement of a compound command is captured.
    shell_command = f"{{ {command}\n}} > {target} 2>&1"

    logger.info("[%s] host running: [%s]", session.name, command)
    process = subprocess.run(shell_command, shell=True, check=False)

    try:
        output = tmp_file.read_text(encoding="utf-8", errors="replace")
    except OSError as e:
        raise InternalError(f"unable to read [{tmp_file}]: {e}") from e
    finally:
        _remove_side_channel(tmp_file)

    if process.returncode != 0:
        raise LocalExecutionError(command, process.returncode, output)

    session.output.append(output)
    session.last_exit_code = process.returncode
    return ExecutionResult(exit_code=process.returncode, output=output)


def run_remote(session: Session, command: str) -> ExecutionResult:
    """Run a command on the managed machine.

    Uses the channel's privileged primitive when the session's sudo policy is
    on. The channel's own error checking is disabled so output survives a
    failing command; stdout and stderr chunks are accumulated into one string
    in arrival order.

    Args:
        session: Session whose channel and policy to use
        command: Shell command line

    Returns:
        ExecutionResult with exit code 0 and the accumulated output

    Raises:
        RemoteExecutionError: If the remote command exits non-zero
    """
    chunks: list[str] = []

    def collect(stream: str, data: str) -> None:
        chunks.append(data)

    options = ChannelOptions(error_check=False)
    logger.info("[%s] vm running: [%s]", session.name, command)

    if session.handle.sudo:
        exit_code = session.channel.sudo(command, options, collect)
    else:
        exit_code = session.channel.execute(command, options, collect)

    output = "".join(chunks)

    if exit_code is None:
        # Indistinguishable from a channel that failed to report a status.
        logger.debug(
            "[%s] channel reported no exit status for [%s], assuming 0",
            session.name,
            command,
        )
        exit_code = 0

    if exit_code != 0:
        raise RemoteExecutionError(output, exit_code, command=command)

    session.output.append(output)
    session.last_exit_code = exit_code
    return ExecutionResult(exit_code=exit_code, output=output)
