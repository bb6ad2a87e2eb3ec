"""Session identity, policy and per-session state."""

from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from rouster.errors import InternalError

if TYPE_CHECKING:
    from rouster.protocols import Channel


class OutputLog:
    """Append-only record of captured command output.

    Entries are stored in execution order; ``get`` looks back from the most
    recent entry without reordering the underlying list.
    """

    def __init__(self) -> None:
        self._entries: list[str] = []

    def append(self, output: str) -> None:
        """Record the output of one command."""
        self._entries.append(output)

    def get(self, index: int = 0) -> str | None:
        """Return the entry ``index`` positions back from the latest.

        Args:
            index: 0 for the most recent output, 1 for the one before, ...

        Returns:
            Captured output, or None if there is no such entry
        """
        if index < 0 or index >= len(self._entries):
            return None
        return self._entries[len(self._entries) - 1 - index]

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __repr__(self) -> str:
        return f"OutputLog(entries={len(self._entries)})"


@dataclass(frozen=True)
class SessionHandle:
    """Immutable identity and policy of one managed machine."""

    name: str
    sudo: bool
    passthrough: bool = False
    sshkey: str | None = None
    verbosity: int = 5

    def __post_init__(self) -> None:
        if not self.name:
            raise InternalError("machine name must not be empty")
        if self.passthrough and not self.sshkey:
            raise InternalError("must specify sshkey when using a passthrough host")

    @classmethod
    def create(
        cls,
        name: str,
        passthrough: bool = False,
        sudo: bool | None = None,
        sshkey: str | None = None,
        verbosity: int = 5,
    ) -> "SessionHandle":
        """Build a handle, resolving the sudo default once.

        Sudo defaults to on, except for passthrough hosts where it defaults
        to off.
        """
        if sudo is None:
            sudo = not passthrough
        return cls(
            name=name,
            sudo=sudo,
            passthrough=passthrough,
            sshkey=sshkey,
            verbosity=verbosity,
        )


@dataclass
class Session:
    """Mutable state the executors operate on.

    Not safe to share between threads without external locking: the output
    log and ``last_exit_code`` are updated in place.
    """

    handle: SessionHandle
    channel: "Channel"
    output: OutputLog = field(default_factory=OutputLog)
    last_exit_code: int | None = None

    @property
    def name(self) -> str:
        return self.handle.name
