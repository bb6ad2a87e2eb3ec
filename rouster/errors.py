"""Error taxonomy for Rouster.

Every failure is raised straight to the caller; nothing in the core retries.
Output captured before a failure travels inside the exception so callers can
diagnose without re-running the command.
"""


class RousterError(Exception):
    """Base class for all Rouster errors."""


class FileTransferError(RousterError):
    """Local precondition for a transfer was not met."""

    def __init__(self, operation: str, path: str, reason: str):
        """Initialize file transfer error.

        Args:
            operation: Transfer operation ("put" or "get")
            path: Path that failed the precondition
            reason: Human readable cause
        """
        self.operation = operation
        self.path = path
        self.reason = reason
        super().__init__(f"unable to {operation}[{path}], {reason}")


class InternalError(RousterError):
    """Integrity fault unrelated to a command's own exit status."""


class LocalExecutionError(RousterError):
    """Command run on the controlling host exited non-zero."""

    def __init__(self, command: str, exit_code: int, output: str):
        """Initialize local execution error.

        Args:
            command: Shell command that was run
            exit_code: Non-zero exit status
            output: Combined stdout/stderr captured before exit
        """
        self.command = command
        self.exit_code = exit_code
        self.output = output
        super().__init__(
            f"command [{command}] exited with code [{exit_code}], output [{output}]"
        )


class RemoteExecutionError(RousterError):
    """Command run on the managed machine exited non-zero."""

    def __init__(self, output: str, exit_code: int, command: str | None = None):
        """Initialize remote execution error.

        Args:
            output: Accumulated stdout/stderr of the remote command
            exit_code: Non-zero exit status reported by the channel
            command: Command that was run, when known
        """
        self.output = output
        self.exit_code = exit_code
        self.command = command
        super().__init__(f"output[{output}], exitcode[{exit_code}]")


class SSHConnectionError(RousterError):
    """SSH was unavailable, or the underlying transfer call failed."""

    def __init__(
        self,
        operation: str,
        path: str,
        original_error: Exception | None = None,
    ):
        """Initialize SSH connection error.

        Args:
            operation: Operation that needed SSH ("put" or "get")
            path: Target path of the operation
            original_error: Wrapped channel failure, None when SSH was
                simply unreachable
        """
        self.operation = operation
        self.path = path
        self.original_error = original_error
        if original_error is None:
            message = f"unable to {operation}[{path}], SSH connection unavailable"
        else:
            message = f"unable to {operation}[{path}], exception[{original_error}]"
        super().__init__(message)


__all__ = [
    "FileTransferError",
    "InternalError",
    "LocalExecutionError",
    "RemoteExecutionError",
    "RousterError",
    "SSHConnectionError",
]
