"""Settings from environment variables.

Centralized environment variable parsing and validation.
"""

import logging
import os
import tempfile
from dataclasses import dataclass, field

logger = logging.getLogger(__name__)


@dataclass
class Settings:
    """Rouster settings from environment.

    Handles parsing, validation, and defaults for all env vars. Explicit
    arguments passed to Rouster take precedence over these.
    """

    # Session policy
    verbosity: int = field(default=5)
    passthrough: bool = field(default=False)
    sudo: bool | None = field(default=None)
    sshkey: str | None = field(default=None)
    vagrantfile: str | None = field(default=None)

    # Local execution
    tmp_dir: str = field(default_factory=tempfile.gettempdir)

    # SSH
    known_hosts: str | None = field(default=None)
    strict_host_key_checking: bool = field(default=False)
    connect_timeout: int = field(default=10)

    # Logging
    log_level: str = field(default="INFO")
    log_colors: bool = field(default=True)

    @classmethod
    def from_env(cls) -> "Settings":
        """Load settings from ROUSTER_* environment variables.

        Returns:
            Settings instance with values from environment
        """
        return cls(
            verbosity=cls._get_int("ROUSTER_VERBOSITY", 5),
            passthrough=cls._get_bool("ROUSTER_PASSTHROUGH", False),
            sudo=cls._get_optional_bool("ROUSTER_SUDO"),
            sshkey=os.getenv("ROUSTER_SSHKEY") or None,
            vagrantfile=os.getenv("ROUSTER_VAGRANTFILE") or None,
            tmp_dir=os.getenv("ROUSTER_TMP_DIR") or tempfile.gettempdir(),
            known_hosts=os.getenv("ROUSTER_KNOWN_HOSTS") or None,
            strict_host_key_checking=cls._get_bool(
                "ROUSTER_STRICT_HOST_KEY_CHECKING", False
            ),
            connect_timeout=cls._get_int("ROUSTER_CONNECT_TIMEOUT", 10),
            log_level=os.getenv("ROUSTER_LOG_LEVEL", "INFO"),
            log_colors=cls._get_bool("ROUSTER_LOG_COLORS", True),
        )

    @staticmethod
    def _get_int(key: str, default: int) -> int:
        """Get integer from environment.

        Args:
            key: Environment variable key
            default: Default value if not set or invalid

        Returns:
            Integer value from environment or default
        """
        value = os.getenv(key)
        if value is None:
            return default

        try:
            return int(value)
        except ValueError:
            logger.warning("Invalid int for %s: %s, using default %d", key, value, default)
            return default

    @staticmethod
    def _get_bool(key: str, default: bool) -> bool:
        """Get boolean from environment.

        Args:
            key: Environment variable key
            default: Default value if not set

        Returns:
            Boolean value from environment or default
        """
        value = os.getenv(key)
        if value is None:
            return default
        return value.lower() in ("1", "true", "yes", "on")

    @classmethod
    def _get_optional_bool(cls, key: str) -> bool | None:
        """Get boolean from environment, None when unset or empty."""
        if not os.getenv(key):
            return None
        return cls._get_bool(key, False)
