"""ssh_config(5) parser.

Reads the connection details that ``vagrant ssh-config`` prints (or any
ssh_config file) and turns each Host block into an SSHHost.
"""

import logging
import os
import re
from pathlib import Path

from rouster.models import SSHHost

logger = logging.getLogger(__name__)

_HOST_PATTERN = re.compile(r"^Host\s+(\S+)", re.IGNORECASE)
_KEY_VALUE_PATTERN = re.compile(r"^(\w+)\s+(.+)$")


class SSHConfigParser:
    """Parser for ssh_config formatted text.

    Wildcard blocks (``Host *``) provide defaults for the hosts that follow.
    """

    def __init__(self, default_user: str = "vagrant"):
        """Initialize SSH config parser.

        Args:
            default_user: User for hosts without a User directive
        """
        self.default_user = default_user

    def parse_file(self, config_path: Path | str) -> dict[str, SSHHost]:
        """Parse an ssh_config file.

        Returns:
            Dictionary mapping host alias to SSHHost, empty if unreadable
        """
        path = Path(config_path)
        try:
            content = path.read_text()
        except OSError as e:
            logger.warning("Cannot read SSH config %s: %s", path, e)
            return {}
        return self.parse(content)

    def parse(self, content: str) -> dict[str, SSHHost]:
        """Parse ssh_config text and return host definitions.

        Returns:
            Dictionary mapping host alias to SSHHost objects
        """
        hosts: dict[str, SSHHost] = {}
        current_host: str | None = None
        current_data: dict[str, str] = {}
        global_defaults: dict[str, str] = {}

        for line in content.splitlines():
            line = line.strip()
            if not line or line.startswith("#"):
                continue

            host_match = _HOST_PATTERN.match(line)
            if host_match:
                self._save_host(hosts, current_host, current_data)
                current_host = host_match.group(1)
                # Skip wildcards
                if "*" in current_host or "?" in current_host:
                    current_host = "*"
                current_data = global_defaults.copy() if current_host != "*" else {}
                continue

            kv_match = _KEY_VALUE_PATTERN.match(line)
            if kv_match and current_host:
                key = kv_match.group(1).lower()
                value = kv_match.group(2).strip().strip('"')
                if key == "identityfile":
                    value = os.path.expanduser(value)
                current_data[key] = value
                if current_host == "*":
                    global_defaults[key] = value

        self._save_host(hosts, current_host, current_data)

        logger.debug("Parsed %d hosts from SSH config", len(hosts))
        return hosts

    def _save_host(
        self,
        hosts: dict[str, SSHHost],
        name: str | None,
        data: dict[str, str],
    ) -> None:
        if not name or name == "*" or not data.get("hostname"):
            return
        try:
            port = int(data.get("port", "22"))
        except ValueError:
            port = 22
        hosts[name] = SSHHost(
            name=name,
            hostname=data["hostname"],
            user=data.get("user", self.default_user),
            port=port,
            identity_file=data.get("identityfile"),
        )
