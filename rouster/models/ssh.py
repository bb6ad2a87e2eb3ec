"""SSH-related data models."""

from dataclasses import dataclass


@dataclass
class SSHHost:
    """SSH endpoint of a managed machine."""

    name: str
    hostname: str
    user: str = "vagrant"
    port: int = 22
    identity_file: str | None = None

    @property
    def address(self) -> str:
        """Return user@hostname:port for log messages."""
        return f"{self.user}@{self.hostname}:{self.port}"
