"""Protocol interfaces for the injected collaborators.

The executors and the transfer gateway never talk to a concrete SSH library
or virtualization tool. They depend on these interfaces instead, so the same
code drives a real machine or an in-memory fake.

Usage Example:

    from rouster.protocols import Channel

    def count_users(channel: Channel) -> int:
        '''Function depends on protocol, not concrete implementation.'''
        chunks: list[str] = []
        channel.execute(
            "getent passwd",
            ChannelOptions(error_check=False),
            lambda stream, data: chunks.append(data),
        )
        return len("".join(chunks).splitlines())

    # Real machine
    from rouster.channels import SSHChannel
    count_users(SSHChannel(host))

    # Or the in-memory fake for tests
    from rouster.channels import MemoryChannel
    count_users(MemoryChannel())
"""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Protocol, runtime_checkable

# Receives the stream tag ("stdout"/"stderr") and one chunk of output.
OutputCallback = Callable[[str, str], None]


@dataclass(frozen=True)
class ChannelOptions:
    """Per-call options for channel command execution.

    Attributes:
        error_check: When True the channel raises on a non-zero exit status
            itself. The executors turn this off so they keep the output.
    """

    error_check: bool = True


@runtime_checkable
class Channel(Protocol):
    """Protocol for a remote command and file transfer channel."""

    def execute(
        self,
        command: str,
        options: ChannelOptions | None = None,
        callback: OutputCallback | None = None,
    ) -> int | None:
        """Run a command as the login user.

        Args:
            command: Shell command to run remotely
            options: Execution options
            callback: Receives every output chunk as it arrives

        Returns:
            Exit status, or None when the channel has no explicit status
        """
        ...

    def sudo(
        self,
        command: str,
        options: ChannelOptions | None = None,
        callback: OutputCallback | None = None,
    ) -> int | None:
        """Run a command with root privileges. Same contract as execute()."""
        ...

    def ready(self) -> bool:
        """Check whether a remote command could currently succeed.

        Must not raise for connectivity failures; report them as False.
        """
        ...

    def upload(self, local_path: str, remote_path: str) -> None:
        """Copy a local file to the machine."""
        ...

    def download(self, remote_path: str, local_path: str) -> None:
        """Copy a file from the machine to the local host."""
        ...

    def close(self) -> None:
        """Drop any open connection. Safe to call when not connected."""
        ...


@runtime_checkable
class MachineEngine(Protocol):
    """Protocol for the machine lifecycle engine.

    Rouster never manages virtual machine state itself; everything here is
    delegated to an orchestration tool.
    """

    def up(self, name: str) -> None:
        """Create (if needed) and boot the machine."""
        ...

    def destroy(self, name: str) -> None:
        """Stop and delete the machine."""
        ...

    def suspend(self, name: str) -> None:
        """Suspend the machine."""
        ...

    def status(self, name: str) -> str:
        """Return the engine's state name for the machine."""
        ...

    def ssh_config(self, name: str) -> str:
        """Return ssh_config(5) formatted connection details."""
        ...

    def default_private_key_path(self) -> str:
        """Return the key used when none is configured."""
        ...


__all__ = [
    "Channel",
    "ChannelOptions",
    "MachineEngine",
    "OutputCallback",
]
