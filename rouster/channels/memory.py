"""In-memory channel for tests.

Commands return scripted responses, transfers read and write an in-memory
remote filesystem, and every call is recorded for later assertions.
"""

from dataclasses import dataclass, field
from pathlib import Path

from rouster.errors import RemoteExecutionError
from rouster.protocols import ChannelOptions, OutputCallback


@dataclass
class ScriptedResponse:
    """What the fake machine answers for one command."""

    exit_code: int | None = 0
    chunks: list[tuple[str, str]] = field(default_factory=list)


@dataclass
class ChannelCall:
    """One recorded call on a MemoryChannel."""

    method: str
    args: tuple[str, ...]
    options: ChannelOptions | None = None


class MemoryChannel:
    """Channel that never leaves the process.

    Example:
        >>> channel = MemoryChannel()
        >>> channel.respond("uname", "Linux\\n")
        >>> channel.execute("uname", callback=lambda s, d: print(d, end=""))
        Linux
        0
    """

    def __init__(self, is_ready: bool = True) -> None:
        self.is_ready = is_ready
        self.files: dict[str, bytes] = {}
        self.calls: list[ChannelCall] = []
        self.transfer_error: Exception | None = None
        self.ready_checks = 0
        self.closed = 0
        self._responses: dict[str, ScriptedResponse] = {}

    def respond(
        self,
        command: str,
        stdout: str = "",
        exit_code: int | None = 0,
        stderr: str = "",
    ) -> None:
        """Script the answer for a command.

        Stdout is delivered before stderr. Unscripted commands succeed with
        no output.
        """
        chunks = [("stdout", stdout)] if stdout else []
        if stderr:
            chunks.append(("stderr", stderr))
        self._responses[command] = ScriptedResponse(exit_code=exit_code, chunks=chunks)

    def _run(
        self,
        method: str,
        command: str,
        options: ChannelOptions | None,
        callback: OutputCallback | None,
    ) -> int | None:
        if options is None:
            options = ChannelOptions()
        self.calls.append(ChannelCall(method, (command,), options))
        response = self._responses.get(command, ScriptedResponse())

        for stream, data in response.chunks:
            if callback is not None:
                callback(stream, data)

        if options.error_check and response.exit_code not in (0, None):
            output = "".join(data for _, data in response.chunks)
            raise RemoteExecutionError(output, response.exit_code, command=command)
        return response.exit_code

    def execute(
        self,
        command: str,
        options: ChannelOptions | None = None,
        callback: OutputCallback | None = None,
    ) -> int | None:
        return self._run("execute", command, options, callback)

    def sudo(
        self,
        command: str,
        options: ChannelOptions | None = None,
        callback: OutputCallback | None = None,
    ) -> int | None:
        return self._run("sudo", command, options, callback)

    def ready(self) -> bool:
        self.ready_checks += 1
        return self.is_ready

    def upload(self, local_path: str, remote_path: str) -> None:
        self.calls.append(ChannelCall("upload", (local_path, remote_path)))
        if self.transfer_error is not None:
            raise self.transfer_error
        self.files[remote_path] = Path(local_path).read_bytes()

    def download(self, remote_path: str, local_path: str) -> None:
        self.calls.append(ChannelCall("download", (remote_path, local_path)))
        if self.transfer_error is not None:
            raise self.transfer_error
        if remote_path not in self.files:
            raise FileNotFoundError(remote_path)
        Path(local_path).write_bytes(self.files[remote_path])

    def close(self) -> None:
        self.closed += 1

    @property
    def commands(self) -> list[str]:
        """Commands run so far, in order, regardless of privilege."""
        return [call.args[0] for call in self.calls if call.method in ("execute", "sudo")]
