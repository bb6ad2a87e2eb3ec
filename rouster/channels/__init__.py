"""Channel implementations."""

from rouster.channels.memory import MemoryChannel
from rouster.channels.ssh import SSHChannel

__all__ = ["MemoryChannel", "SSHChannel"]
